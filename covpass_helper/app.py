#!/usr/bin/env python3
"""
COVID Certificate Wallet Pass Service
Implements a REST API turning decoded EU DCC (HCERT) claims into signed
Apple Wallet passes, validating coded values against the DCC value sets.
"""

import argparse
import io
import logging
import os
import platform
import sys
from importlib import metadata
from typing import Dict

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS

from .config import Settings
from .errors import DecodeError, NetworkError, PassError
from .i18n import make_translator
from .service import build_pass

SERVICE_NAME = "COVID Certificate Wallet Pass Service"
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")

PKPASS_MIMETYPE = "application/vnd.apple.pkpass"

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)
app.config["PASS_SETTINGS"] = Settings.from_env()

# -------- Utility functions --------

def get_library_versions() -> Dict[str, str]:
    """Get versions of key libraries."""
    versions = {}
    for dist in ("flask", "flask-cors", "requests"):
        try:
            versions[dist] = metadata.version(dist)
        except metadata.PackageNotFoundError:
            versions[dist] = "unknown"
    return versions

def error_response(error: PassError, status: int):
    return jsonify({'error': error.code, 'details': str(error)}), status

# -------- API Endpoints --------

@app.route('/status', methods=['GET'])
@app.route('/health', methods=['GET'])
def status():
    """Service status endpoint."""
    settings = app.config["PASS_SETTINGS"]
    return jsonify({
        'service': SERVICE_NAME,
        'version': SERVICE_VERSION,
        'ready': bool(settings.pass_type_identifier and settings.team_identifier),
        'python': sys.version.split()[0],
        'platform': platform.platform(),
        'libraries': get_library_versions()
    })

@app.route('/pass', methods=['POST'])
def create_wallet_pass():
    """Create a signed .pkpass from {raw, decoded}."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'missing_data', 'details': 'JSON body required'}), 400

    settings = app.config["PASS_SETTINGS"]
    locale = data.get('locale') or settings.locale

    try:
        archive = build_pass(
            data,
            settings,
            translate=make_translator(locale)
        )
    except DecodeError as e:
        return error_response(e, 400)
    except NetworkError as e:
        logger.error(f"[pass] Upstream failure: {e}")
        return error_response(e, 502)

    logger.info(f"[pass] Created pass with {len(archive.entries)} entries")
    return send_file(
        io.BytesIO(archive.to_bytes()),
        mimetype=PKPASS_MIMETYPE,
        as_attachment=True,
        download_name='covid.pkpass'
    )

# -------- Documentation Endpoints --------

OPENAPI_SPEC = {
    "openapi": "3.0.3",
    "info": {
        "title": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Converts decoded DCC claims into signed Apple Wallet passes."
    },
    "paths": {
        "/status": {
            "get": {
                "tags": ["Health"],
                "summary": "Service status",
                "responses": {"200": {"description": "Service status and library versions"}}
            }
        },
        "/pass": {
            "post": {
                "tags": ["Pass"],
                "summary": "Create a signed wallet pass",
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {
                            "schema": {
                                "type": "object",
                                "required": ["raw", "decoded"],
                                "properties": {
                                    "raw": {"type": "string", "description": "Original HC1 string, used as barcode"},
                                    "decoded": {"type": "object", "description": "Decoded CWT claims"},
                                    "locale": {"type": "string", "example": "de"}
                                }
                            }
                        }
                    }
                },
                "responses": {
                    "200": {
                        "description": "Signed pass archive",
                        "content": {PKPASS_MIMETYPE: {"schema": {"type": "string", "format": "binary"}}}
                    },
                    "400": {"description": "Payload failed validation"},
                    "502": {"description": "Value set source or signer failed"}
                }
            }
        }
    },
    "tags": [
        {"name": "Health", "description": "Service health and status"},
        {"name": "Pass", "description": "Wallet pass creation"}
    ]
}

@app.route("/openapi.json")
def openapi():
    """Serve OpenAPI specification."""
    spec = dict(OPENAPI_SPEC)
    spec["servers"] = [{"url": request.host_url.rstrip("/")}]
    return jsonify(spec)

@app.errorhandler(404)
def not_found(e):
    """Handle 404 errors."""
    return jsonify({'error': 'not_found', 'details': 'Endpoint not found'}), 404

@app.errorhandler(500)
def internal_error(e):
    """Handle 500 errors."""
    logger.exception("Internal server error")
    return jsonify({'error': 'internal_error', 'details': str(e)}), 500

def main():
    parser = argparse.ArgumentParser(description='COVID Certificate Wallet Pass Service')
    parser.add_argument('--host', default='0.0.0.0', help='Host to bind to')
    parser.add_argument('--port', type=int, default=8080, help='Port to bind to')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    args = parser.parse_args()

    settings = app.config["PASS_SETTINGS"]
    if not settings.pass_type_identifier or not settings.team_identifier:
        logger.warning("PASS_TYPE_IDENTIFIER or TEAM_IDENTIFIER not set; passes will not install")

    logger.info(f"Starting {SERVICE_NAME} v{SERVICE_VERSION} on {args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)

if __name__ == '__main__':
    main()
