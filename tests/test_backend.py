"""Tests for the Flask backend."""

import logging
import re

import pytest

from totp_backend import app
from totp_backend.app import setup_logging
from totp_core import otp_core
from totp_core.config import ENV_TOTP_URL, Settings

from .conftest import EXAMPLE_SECRET, RFC_SECRET


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setitem(app.config, "TESTING", True)
    monkeypatch.delitem(app.config, "TOTP_SETTINGS", raising=False)
    return app.test_client()


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setitem(app.config, "TOTP_SETTINGS", Settings(totp_url=EXAMPLE_SECRET))


class TestIndex:
    def test_lists_endpoints(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "GET /totp" in resp.get_json()["endpoints"]


class TestGetTotp:
    def test_configured_secret(self, client, configured):
        resp = client.get("/totp")
        assert resp.status_code == 200
        data = resp.get_json()
        assert re.match(r"^[0-9]{6}$", data["code"])
        assert 1 <= data["remaining"] <= 30
        assert data["period"] == 30

    def test_secret_from_environment(self, client, monkeypatch):
        monkeypatch.setenv(ENV_TOTP_URL, "otpauth://totp/x?secret=%s" % EXAMPLE_SECRET)
        resp = client.get("/totp")
        assert resp.status_code == 200

    def test_not_configured(self, client):
        resp = client.get("/totp")
        assert resp.status_code == 404
        assert "not configured" in resp.get_json()["error"]

    def test_bad_configured_secret(self, client, monkeypatch):
        monkeypatch.setitem(app.config, "TOTP_SETTINGS", Settings(totp_url="AB01"))
        resp = client.get("/totp")
        assert resp.status_code == 400
        assert "code" not in resp.get_json()


class TestPostTotp:
    def test_known_answer(self, client):
        resp = client.post("/totp", json={"secret": RFC_SECRET, "timestamp": 59})
        assert resp.status_code == 200
        assert resp.get_json() == {"code": "287082", "remaining": 1, "timestamp": 59}

    def test_uri_secret(self, client):
        uri = "otpauth://totp/Example?secret=%s&issuer=X" % RFC_SECRET
        resp = client.post("/totp", json={"secret": uri, "timestamp": 1234567890})
        assert resp.get_json()["code"] == "005924"

    def test_missing_body(self, client):
        assert client.post("/totp").status_code == 400
        assert client.post("/totp", json={}).status_code == 400

    def test_bad_timestamp(self, client):
        resp = client.post("/totp", json={"secret": RFC_SECRET, "timestamp": "soon"})
        assert resp.status_code == 400

    def test_timestamp_beyond_counter_range(self, client):
        resp = client.post("/totp", json={"secret": RFC_SECRET, "timestamp": 30 * 2 ** 64})
        assert resp.status_code == 400
        assert "64-bit" in resp.get_json()["error"]

    def test_negative_timestamp(self, client):
        resp = client.post("/totp", json={"secret": RFC_SECRET, "timestamp": -1})
        assert resp.status_code == 400

    def test_invalid_secret(self, client):
        resp = client.post("/totp", json={"secret": "AB01"})
        assert resp.status_code == 400
        assert "Invalid base32 character" in resp.get_json()["error"]

    def test_crypto_unavailable(self, client, monkeypatch):
        def refuse(*args, **kwargs):
            raise ValueError("unsupported hash type sha1")
        monkeypatch.setattr(otp_core.hmac, "new", refuse)

        resp = client.post("/totp", json={"secret": RFC_SECRET, "timestamp": 59})
        assert resp.status_code == 500


class TestInfo:
    def test_configured(self, client, configured):
        data = client.get("/info").get_json()
        assert data == {"totp_configured": True}

    def test_not_configured(self, client):
        assert client.get("/info").get_json() == {"totp_configured": False}


class TestLoggingSetup:
    def test_debug_setting(self, root_logger):
        setup_logging(Settings(debug=True))
        assert root_logger.level == logging.DEBUG

    def test_default_is_info(self, root_logger):
        setup_logging(Settings())
        assert root_logger.level == logging.INFO
