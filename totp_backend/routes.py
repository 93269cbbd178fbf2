"""
TOTP BACKEND API ROUTES - FLASK BLUEPRINT

JSON endpoints that hand the current TOTP code to a front end (browser
extension, form filler, dashboard).

USAGE:
curl http://localhost:5000/totp
curl -X POST http://localhost:5000/totp -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP"}'
curl http://localhost:5000/info
"""

import logging
import time

from flask import Blueprint, current_app, jsonify, request

from totp_core.config import load_settings
from totp_core.errors import CryptoUnavailableError, SettingsError
from totp_core.otp_core import DEFAULT_TIME_STEP, generate

logger = logging.getLogger(__name__)

totp_bp = Blueprint('totp', __name__)


def _current_settings():
    """Settings injected via app.config, else read from file/environment."""
    settings = current_app.config.get("TOTP_SETTINGS")
    if settings is None:
        settings = load_settings()
    return settings


def _error_response(error):
    status = 500 if isinstance(error, CryptoUnavailableError) else 400
    return jsonify({"error": str(error)}), status


@totp_bp.route('/totp', methods=['GET'])
def get_totp():
    """
    CURRENT TOTP CODE FOR THE CONFIGURED SECRET

      curl http://localhost:5000/totp

    Output:
      {"code": "123456", "remaining": 17, "period": 30}
    """
    try:
        settings = _current_settings()
    except SettingsError as e:
        logger.error("Failed to load settings: %s", e)
        return jsonify({"error": str(e)}), 500

    if not settings.configured:
        return jsonify({"error": "TOTP secret not configured"}), 404

    result = generate(settings.totp_url)
    if not result.ok:
        logger.warning("TOTP generation failed for configured secret: %s", result.error)
        return _error_response(result.error)

    return jsonify({
        "code": result.code,
        "remaining": result.remaining,
        "period": DEFAULT_TIME_STEP,
    })


@totp_bp.route('/totp', methods=['POST'])
def post_totp():
    """
    TOTP CODE FOR A SECRET SENT IN THE BODY

      curl -X POST http://localhost:5000/totp -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP"}'

    Input (JSON body):
      {
        "secret": "JBSWY3DPEHPK3PXP",   # REQUIRED - base32 or otpauth:// URI
        "timestamp": 59                 # optional Unix time, default: now
      }
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict) or not data.get("secret"):
        return jsonify({"error": "Secret is required in JSON body"}), 400

    secret = data["secret"]
    timestamp = data.get("timestamp", int(time.time()))
    if not isinstance(secret, str):
        return jsonify({"error": "Secret must be a string"}), 400
    if not isinstance(timestamp, int) or isinstance(timestamp, bool) or timestamp < 0:
        return jsonify({"error": "Timestamp must be a non-negative integer"}), 400

    result = generate(secret, timestamp)
    if not result.ok:
        logger.warning("TOTP generation failed: %s", result.error)
        return _error_response(result.error)

    return jsonify({
        "code": result.code,
        "remaining": result.remaining,
        "timestamp": timestamp,
    })


@totp_bp.route('/info', methods=['GET'])
def info():
    """Whether a TOTP secret is configured (the secret itself is never returned)."""
    try:
        settings = _current_settings()
    except SettingsError as e:
        logger.error("Failed to load settings: %s", e)
        return jsonify({"error": str(e)}), 500
    return jsonify({"totp_configured": settings.configured})
