"""Shared fixtures for the totp-autofill tests."""

import logging

import pytest

from totp_core.config import ENV_SETTINGS_FILE, ENV_TOTP_URL

# RFC 4226 / RFC 6238 test key: ASCII "12345678901234567890"
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
EXAMPLE_SECRET = "JBSWY3DPEHPK3PXP"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's own TOTP settings out of the tests."""
    monkeypatch.delenv(ENV_TOTP_URL, raising=False)
    monkeypatch.setenv(ENV_SETTINGS_FILE, str(tmp_path / "missing_settings.json"))


@pytest.fixture
def settings_file(tmp_path):
    """Return a helper that writes a settings file and returns its path."""
    def _write(content: str) -> str:
        path = tmp_path / "totp_settings.json"
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def root_logger():
    """Root logger whose level is restored after the test."""
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)
