import uuid
from datetime import datetime, timezone


def generate_id():
    return str(uuid.uuid4())


def utcnow():
    """Naive UTC timestamp, the form every DateTime column is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    """Serialize a naive UTC datetime as ISO-8601 with a Z suffix."""
    if value is None:
        return None
    return value.isoformat() + 'Z'
