# Overview: Request decorators for API routes; uniform JSON envelopes and error mapping.

from functools import wraps
from flask import Response, current_app, jsonify, request

from .validation import NotFoundError, ValidationError, require_json_object


def api_endpoint(action: str):
    """
    Wrap a route so every response uses the {"success": ...} envelope.

    The wrapped view returns the value for "data", a (data, status) tuple,
    None for responses without data, or a ready-made Response which is
    passed through untouched.

    - ValidationError -> 400 {"success": false, "error": message}
    - NotFoundError   -> 404 {"success": false, "error": message}
    - anything else   -> logged with traceback, 500 with str(error)
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                result = f(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"success": False, "error": str(e)}), 400
            except NotFoundError as e:
                return jsonify({"success": False, "error": str(e)}), 404
            except Exception as e:
                current_app.logger.exception("Failed to %s", action)
                return jsonify({"success": False, "error": str(e)}), 500

            if isinstance(result, Response):
                return result

            status = 200
            if isinstance(result, tuple):
                result, status = result

            body = {"success": True}
            if result is not None:
                body["data"] = result
            return jsonify(body), status

        return decorated_function

    return decorator


def json_body() -> dict:
    """
    Parsed JSON object from the current request.

    An empty body is an empty object; a body that is not valid JSON, or
    is JSON but not an object, is a ValidationError.
    """
    payload = request.get_json(silent=True)
    if payload is None and request.get_data(cache=True):
        raise ValidationError("Invalid JSON payload")
    return require_json_object(payload)
