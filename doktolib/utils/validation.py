"""
Request body helpers shared by the JSON endpoints
"""
from flask import request

from doktolib.errors import ClientInputError


def get_json_body():
    """Parsed JSON object of the current request, or ClientInputError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ClientInputError('Request body must be a JSON object')
    return data


def require_fields(data, fields):
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ClientInputError(f'Field "{field}" is required')


def require_strings(data, fields):
    """Reject present values of fields that are not JSON strings."""
    for field in fields:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ClientInputError(f'Field "{field}" must be a string')
