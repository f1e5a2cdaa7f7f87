"""JSON response helpers shared by the API blueprints."""
from dataclasses import asdict, is_dataclass

from flask import jsonify

from services.results import Failure, NOT_FOUND, is_duration


def to_json(value):
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [to_json(v) for v in value]
    return value


def respond(result):
    """Serialize a service result; a Failure becomes a 404 or 400."""
    if isinstance(result, Failure):
        status = 404 if result.kind == NOT_FOUND else 400
        return jsonify({'error': result.kind, 'message': result.message}), status
    return jsonify(to_json(result))


def bad_request(message):
    return jsonify({'error': 'invalid', 'message': message}), 400


def int_field(body, name):
    value = body.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def number_field(body, name, default=0):
    """Seconds from a request body: default when absent, None when invalid."""
    if name not in body:
        return default
    value = body[name]
    if not is_duration(value):
        return None
    return value
