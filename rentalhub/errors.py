# rentalhub/errors.py
from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from .extensions import db


class APIError(Exception):
    """Raised from request handling; rendered as a FAILED envelope."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def failed(message: str, status_code: int):
    return jsonify({"status": "FAILED", "message": message}), status_code


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def _api_error(e):
        return failed(e.message, e.status_code)

    @app.errorhandler(404)
    def _not_found(e):
        return failed(f"Route Not Found : {request.path}", 404)

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return failed(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _server_error(e):
        db.session.rollback()
        current_app.logger.exception("Unhandled exception: %s", e)
        message = str(e) if current_app.debug else "Something went wrong. Please try again later."
        return failed(message, 500)
