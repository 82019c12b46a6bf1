from datetime import datetime, UTC
from functools import wraps

from flask import current_app, g, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from server.smartpark.errors import Forbidden, Unauthorized, ValidationError

TOKEN_SALT = "smartpark-auth"


def utcnow():
    """Naive UTC timestamp; the database columns carry no timezone."""
    return datetime.now(UTC).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value else None


def calculate_duration(entrance_time, exit_time):
    """Whole minutes between two datetimes, truncated toward zero."""
    seconds = (exit_time - entrance_time).total_seconds()
    return int(seconds / 60)


def parse_plate_number(value, message="PlateNumber is required"):
    """Non-empty plate string, surrounding whitespace removed."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


def parse_slot_number(value):
    """Slot numbers arrive as JSON ints or digit strings; anything else is rejected."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    raise ValidationError("SlotNumber must be an integer")


def hash_password(password):
    return generate_password_hash(password)


def check_password(hashed_password, password):
    return check_password_hash(hashed_password, password)


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def generate_token(user):
    return _serializer().dumps({"id": user.user_id, "role": user.role})


def decode_token(token):
    """Return the token payload or raise Unauthorized."""
    try:
        return _serializer().loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
    except (SignatureExpired, BadSignature):
        raise Unauthorized("Unauthorized")


def token_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        header = request.headers.get("Authorization", "")
        parts = header.split(" ")
        token = parts[1] if len(parts) > 1 else None

        if not token:
            raise Forbidden("No token provided")

        payload = decode_token(token)
        g.user_id = payload.get("id")
        g.user_role = payload.get("role")

        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    @wraps(f)
    @token_required
    def decorated_function(*args, **kwargs):
        if g.user_role != "admin":
            raise Forbidden("Require Admin Role!")

        return f(*args, **kwargs)

    return decorated_function
