"""
FLASK APP MAIN ENTRY POINT - TOTP BACKEND SERVER
================================================

Sets up the Flask app, enables CORS and registers the TOTP blueprint.

MAIN FEATURES
- JSON API returning the current TOTP code
- CORS enabled so a browser-side form filler can call it
- Settings (secret) read from TOTP_URL / totp_settings.json
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from totp_backend.routes import totp_bp
from totp_core.config import load_settings

logger = logging.getLogger(__name__)

app = Flask(__name__)
# Allow the front end (served from another origin) to call the API
CORS(app)

app.register_blueprint(totp_bp)


def setup_logging(settings) -> None:
    """Root logger at DEBUG when the settings ask for it, INFO otherwise."""
    logging.basicConfig(format='%(asctime)s - %(levelname)s - %(message)s')
    logging.getLogger().setLevel(logging.DEBUG if settings.debug else logging.INFO)


@app.route('/', methods=['GET'])
def index():
    """Service description and endpoint list."""
    return jsonify({
        "service": "totp-autofill",
        "endpoints": {
            "GET /totp": "current code for the configured secret",
            "POST /totp": "code for {\"secret\": ..., \"timestamp\": ...}",
            "GET /info": "whether a secret is configured",
        },
    })


if __name__ == '__main__':
    settings = load_settings()
    setup_logging(settings)
    logger.info("Starting TOTP backend on 127.0.0.1:5000 (secret configured: %s)", settings.configured)
    # Development server, loopback only
    app.run(debug=False, host='127.0.0.1', port=5000)
