import logging
from functools import wraps

import pydantic
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Malformed or missing fields; carries one entry per offending field."""

    def __init__(self, errors):
        super().__init__("Invalid data")
        self.errors = errors

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError):
        return cls([
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors(include_url=False)
        ])


class NotFoundError(Exception):
    def __init__(self, label):
        super().__init__(f"{label} not found")
        self.label = label


def parse(model, data):
    if not isinstance(data, dict):
        raise ValidationError([{
            "field": "",
            "message": "Request body must be a JSON object",
            "type": "object_type",
        }])
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError.from_pydantic(exc)


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation(exc):
        return jsonify(message="Invalid data", errors=exc.errors), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc):
        return jsonify(message=str(exc)), 404

    @app.errorhandler(HTTPException)
    def handle_http(exc):
        return jsonify(message=exc.description), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        logger.exception("Unhandled error")
        return jsonify(message="Internal server error"), 500


def failure_message(message):
    """Turn anything other than validation/not-found into a 500 carrying `message`."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except (ValidationError, NotFoundError, HTTPException):
                raise
            except Exception:
                logger.exception(message)
                return jsonify(message=message), 500
        return wrapper
    return decorator
