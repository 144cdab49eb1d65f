# healthtrack/validation.py
import re
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from flask import request

from .errors import ValidationError

DEFAULT_TAKE = 30
MAX_TAKE = 100
MAX_DAYS = 3650

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

_MISSING = object()


# ------------------------------
# Helpers
# ------------------------------
def _safe_int(v: Any, default: int = 0) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def get_json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data


def parse_date(value: Any, field: str = "date") -> date:
    """Strict YYYY-MM-DD."""
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise ValidationError(f"invalid {field} format, expected YYYY-MM-DD")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"invalid {field}, please provide a valid date")


def parse_time(value: Any, field: str = "time") -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not _TIME_RE.match(value.strip()):
        raise ValidationError(f"invalid {field} format, expected HH:MM")
    return value.strip()


def parse_number(
    value: Any,
    field: str,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    integer: bool = False,
) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number")
    if integer and isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field} must be an integer")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field} must not be less than {minimum:g}")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field} must not be greater than {maximum:g}")
    return int(value) if integer else float(value)


def parse_string(value: Any, field: str, max_length: Optional[int] = None) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must not exceed {max_length} characters")
    return value


def parse_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field} must be a boolean")
    return value


def optional(data: Dict[str, Any], key: str, parser, *args, **kwargs):
    """
    Parse data[key] if present and not null; return _MISSING otherwise so
    callers can tell "not sent" from a real value.
    """
    value = data.get(key)
    if value is None:
        return _MISSING
    return parser(value, key, *args, **kwargs)


def is_missing(value: Any) -> bool:
    return value is _MISSING


def required(data: Dict[str, Any], key: str, parser, *args, **kwargs):
    value = data.get(key)
    if value is None or value == "":
        raise ValidationError(f"{key} is required")
    return parser(value, key, *args, **kwargs)


def pagination_args() -> Tuple[int, int]:
    skip = max(0, _safe_int(request.args.get("skip"), 0))
    take = _safe_int(request.args.get("take"), DEFAULT_TAKE)
    take = max(1, min(take, MAX_TAKE))
    return skip, take


def days_arg(default: int) -> int:
    raw = request.args.get("days")
    if raw is None or raw == "":
        return default
    try:
        days = int(raw)
    except ValueError:
        raise ValidationError("days must be an integer")
    if days < 0:
        raise ValidationError("days must not be negative")
    if days > MAX_DAYS:
        raise ValidationError(f"days must not be greater than {MAX_DAYS}")
    return days
