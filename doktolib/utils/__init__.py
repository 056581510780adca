from .cors import init_cors

from .validation import get_json_body, require_fields, require_strings

__all__ = [
    # CORS
    "init_cors",
    # Request validation
    "get_json_body",
    "require_fields",
    "require_strings",
]
