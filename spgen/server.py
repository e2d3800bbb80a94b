"""
HTTP service: a thin JSON boundary around the generator and QR export.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, Flask, Response, current_app, jsonify, request

from . import __version__
from .cli import generate_password_with_meta
from .config import DEFAULT_CONFIG, GenerationConfig, ServiceConfig
from .errors import ConfigurationError, QRExportError
from .qr import make_qr_png

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class BadRequest(Exception):
    """Malformed request parameters."""


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        raise BadRequest("No body provided")
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def _bool_param(data: Dict[str, Any], key: str, default: bool) -> bool:
    # Anything that is not a JSON boolean falls back to the default.
    value = data.get(key)
    if isinstance(value, bool):
        return value
    return default


def _length_param(data: Dict[str, Any], max_length: int) -> int:
    value = data.get("length")
    if value is None:
        return DEFAULT_CONFIG.length
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest("length must be an integer")
    if not 1 <= value <= max_length:
        raise BadRequest(f"length must be between 1 and {max_length}")
    return value


def config_from_request(data: Dict[str, Any], max_length: int) -> GenerationConfig:
    return GenerationConfig(
        length=_length_param(data, max_length),
        include_uppercase=_bool_param(data, "includeUppercase", True),
        include_lowercase=_bool_param(data, "includeLowercase", True),
        include_digits=_bool_param(data, "includeDigits", True),
        include_symbols=_bool_param(data, "includeSymbols", True),
        exclude_consecutive_repeats=_bool_param(
            data, "excludeConsecutiveRepeats", True
        ),
        exclude_ambiguous=_bool_param(data, "excludeAmbiguous", False),
    )


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status


@api_bp.route("/generate", methods=["POST"])
def generate_route():
    service: ServiceConfig = current_app.config["SPGEN_SERVICE"]
    try:
        config = config_from_request(_json_body(), service.max_length)
        meta = generate_password_with_meta(config)
    except (BadRequest, ConfigurationError) as exc:
        logger.info("Rejected generate request: %s", exc)
        return _error(str(exc), 400)
    except Exception as exc:
        logger.exception("Password generation failed")
        return _error(str(exc), 500)

    return jsonify(meta.to_dict()), 200


@api_bp.route("/qr", methods=["POST"])
def qr_route():
    try:
        data = _json_body()
    except BadRequest as exc:
        return _error(str(exc), 400)

    password = data.get("password")
    if not isinstance(password, str) or not password:
        return _error("Password is required", 400)

    try:
        png = make_qr_png(password)
    except QRExportError as exc:
        logger.warning("QR export failed: %s", exc)
        return _error(str(exc), 500)

    return Response(png, status=200, mimetype="image/png")


def create_app(service_config: ServiceConfig | None = None) -> Flask:
    """
    Build the Flask application for one service configuration.
    """
    service = service_config or ServiceConfig()

    app = Flask(__name__)
    app.config["SPGEN_SERVICE"] = service

    app.register_blueprint(api_bp, url_prefix="/api/v1")

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "name": "spgen",
            "version": __version__,
            "endpoints": ["/api/v1/generate", "/api/v1/qr"],
        })

    @app.before_request
    def answer_preflight():
        if request.method == "OPTIONS":
            return Response(status=200)
        return None

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers.update(CORS_HEADERS)
        return response

    @app.errorhandler(404)
    def not_found(_exc):
        return _error("Not Found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_exc):
        return _error("Method Not Allowed", 405)

    return app


class PasswordService:
    """
    Owns the Flask app for a given ServiceConfig and runs it.
    """

    def __init__(self, config: ServiceConfig | None = None) -> None:
        self.config = config or ServiceConfig()
        self.app = create_app(self.config)

    def run(self) -> None:
        logger.info(
            "Starting password generator on http://%s:%d",
            self.config.host,
            self.config.port,
        )
        self.app.run(host=self.config.host, port=self.config.port)
