"""
config.py — Read-only settings provider for the CLI and HTTP layers.

Settings come from a small JSON file (same key names the browser script
used), with environment variables taking precedence:

    {"totpUrl": "otpauth://totp/Portal:alice?secret=JBSWY3DPEHPK3PXP", "debug": false}

- TOTP_SETTINGS_FILE: path of the settings file (default: totp_settings.json)
- TOTP_URL: overrides "totpUrl"

Nothing here writes settings back; provisioning a secret is left to the user.
"""

from dataclasses import dataclass
import json
import logging
import os

from .errors import SettingsError

logger = logging.getLogger(__name__)

SETTINGS_FILE = "totp_settings.json"
ENV_SETTINGS_FILE = "TOTP_SETTINGS_FILE"
ENV_TOTP_URL = "TOTP_URL"


@dataclass(frozen=True)
class Settings:
    totp_url: str = ""
    debug: bool = False

    @property
    def configured(self) -> bool:
        return bool(self.totp_url)


def settings_path(path: str = None) -> str:
    """Explicit path first, then $TOTP_SETTINGS_FILE, then the default file name."""
    return path or os.environ.get(ENV_SETTINGS_FILE) or SETTINGS_FILE


def _read_file(path: str) -> dict:
    if not os.path.isfile(path):
        logger.debug("Settings file %s not found, using defaults", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a JSON object")
    return data


def load_settings(path: str = None) -> Settings:
    """
    Load settings from the JSON file and the environment.

    Arguments:
        path: settings file to read instead of $TOTP_SETTINGS_FILE / the default

    Returns:
        Settings: ``totp_url`` stripped of surrounding whitespace

    Raises:
        SettingsError: file exists but is unreadable, not JSON, or not an object
    """
    data = _read_file(settings_path(path))

    totp_url = os.environ.get(ENV_TOTP_URL)
    if totp_url is None:
        totp_url = data.get("totpUrl") or ""
    if not isinstance(totp_url, str):
        raise SettingsError("'totpUrl' must be a string")

    return Settings(totp_url=totp_url.strip(), debug=bool(data.get("debug", False)))
