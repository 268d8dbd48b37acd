import re
from typing import Any, Mapping

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(Exception):
    """Represents a client-facing validation error."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def parse_text(form: Mapping[str, Any], name: str) -> str:
    return str(form.get(name, "") or "").strip()


def require_text(form: Mapping[str, Any], name: str, label: str, max_length: int = 200) -> str:
    """Return a trimmed required field, rejecting empty or oversized values."""
    value = parse_text(form, name)
    if not value:
        raise ValidationError(f"{label} is required", 400)
    if len(value) > max_length:
        raise ValidationError(f"{label} must be at most {max_length} characters", 400)
    return value


def require_email(form: Mapping[str, Any], name: str = "email") -> str:
    email = parse_text(form, name).lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Please provide a valid email address", 400)
    return email


def parse_wait_seconds(raw: Any, default: int = 3, min_seconds: int = 0, max_seconds: int = 60) -> int:
    try:
        value = int(raw)
    except (ValueError, TypeError):
        return default
    if value < min_seconds or value > max_seconds:
        return default
    return value
