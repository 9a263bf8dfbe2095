"""
models/validation.py
--------------------
Input checks shared by the company and job models.
Every failure raises `ValidationError` with a message fit for an API caller.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlparse

from utils.errors import ValidationError

_FALSE_STRINGS = frozenset({"", "false", "0", "no", "off"})

# Upper bound of a PostgreSQL INTEGER column.
INT_MAX = 2**31 - 1


def check_fields(
    data: Any,
    allowed: Iterable[str],
    required: Iterable[str] = (),
    immutable: Iterable[str] = (),
) -> None:
    """
    Reject payloads that are not mappings, carry unknown or immutable keys,
    or miss required keys.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Expected an object of fields")

    locked = sorted(set(data) & set(immutable))
    if locked:
        raise ValidationError(f"Cannot change field(s): {', '.join(locked)}")

    unknown = sorted(set(data) - set(allowed) - set(immutable))
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(unknown)}")

    missing = [name for name in required if data.get(name) is None]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def require_str(value: Any, field: str, max_length: Optional[int] = None) -> str:
    """Accept a non-empty string no longer than `max_length`."""
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} must be a non-empty string")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value


def optional_url(value: Any, field: str) -> Optional[str]:
    """Accept an absolute http(s) URL (scheme and host), or None."""
    if value is None:
        return None
    parsed = urlparse(value) if isinstance(value, str) else None
    if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"{field} must be an http(s) URL")
    return value


def optional_non_negative_int(value: Any, field: str) -> Optional[int]:
    """Accept an int (not a bool) in [0, INT_MAX], or None."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{field} must be a non-negative integer")
    if value > INT_MAX:
        raise ValidationError(f"{field} must be at most {INT_MAX}")
    return value


def optional_equity(value: Any, field: str = "equity") -> Optional[Decimal]:
    """Accept a number or decimal string in [0, 1], or None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number between 0 and 1")
    try:
        equity = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number between 0 and 1")
    if not equity.is_finite() or not Decimal(0) <= equity <= Decimal(1):
        raise ValidationError(f"{field} must be a number between 0 and 1")
    return equity


def format_equity(value: Optional[Decimal]) -> Optional[str]:
    """NUMERIC columns come back as Decimal; the API exposes them as strings."""
    return None if value is None else str(value)


# ── Filters ───────────────────────────────────────────────


def clean_filters(filters: Optional[Mapping[str, Any]], allowed: Iterable[str]) -> dict:
    """
    Drop filters set to None and reject names outside `allowed`.

    Returns:
        A new dict with only the supplied filters.
    """
    if not filters:
        return {}
    if not isinstance(filters, Mapping):
        raise ValidationError("Expected an object of filters")
    unknown = sorted(set(filters) - set(allowed))
    if unknown:
        raise ValidationError(f"Unknown filter(s): {', '.join(unknown)}")
    return {name: value for name, value in filters.items() if value is not None}


def filter_int(value: Any, name: str) -> int:
    """Coerce a filter value (possibly a query-string) to a non-negative int."""
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a non-negative integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a non-negative integer")
    if isinstance(value, float) and value != number:
        raise ValidationError(f"{name} must be a non-negative integer")
    if number < 0:
        raise ValidationError(f"{name} must be a non-negative integer")
    return number


def filter_flag(value: Any) -> bool:
    """
    Truthiness of a flag filter.

    Non-strings use their Python truth value. Strings come from query
    strings, so "false", "0", "no", "off" and "" (any case, surrounding
    spaces ignored) are false and every other string is true.
    """
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)
