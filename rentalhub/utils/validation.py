# rentalhub/utils/validation.py
import re

from flask import request

from rentalhub.errors import APIError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


def _is_blank(value) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return value == 0


def json_body() -> dict:
    """The request JSON object, or an empty dict for anything else."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def missing_fields(data: dict, fields) -> list:
    """Required fields that are absent, null, blank or zero."""
    return [f for f in fields if _is_blank(data.get(f))]


def parse_id(value) -> int:
    if isinstance(value, bool):
        raise APIError("Invalid id.", 400)
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise APIError("Invalid id.", 400)
    if parsed < 1:
        raise APIError("Invalid id.", 400)
    return parsed


def validate_email(email) -> bool:
    return isinstance(email, str) and EMAIL_PATTERN.match(email) is not None


def validate_password(password) -> tuple[bool, str]:
    if not isinstance(password, str) or len(password) < 8:
        return False, "Password must be at least 8 characters long"
    if not any(c.isupper() for c in password):
        return False, "Password must contain at least one uppercase letter"
    if not any(c.islower() for c in password):
        return False, "Password must contain at least one lowercase letter"
    if not any(c.isdigit() for c in password):
        return False, "Password must contain at least one number"
    if not any(c in SPECIAL_CHARACTERS for c in password):
        return False, "Password must contain at least one special character"
    return True, "Password is strong"


def require_password(password) -> None:
    ok, message = validate_password(password)
    if not ok:
        raise APIError(message, 400)
