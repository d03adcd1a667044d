"""
Field validators shared by the create and update paths.

Each validator takes the raw value from a request body and returns the
normalized value, or raises ValueError with a message fit for the client.
"""
import re
from datetime import date, datetime, time
from typing import Any, Callable, Iterable, Mapping

from ..exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\d{10}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")

Validator = Callable[[Any], Any]


def email(value: Any) -> str:
    if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value


def phone(value: Any) -> str:
    if not isinstance(value, str) or not PHONE_PATTERN.match(value):
        raise ValueError("Phone number must be 10 digits")
    return value


def iso_date(value: Any) -> date:
    """Parse ``YYYY-MM-DD`` into a date."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError("Invalid date format (use YYYY-MM-DD)")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError("Invalid date format (use YYYY-MM-DD)")


def clock_time(value: Any) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS``; a missing seconds part becomes ``:00``."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValueError("Invalid time format (use HH:MM or HH:MM:SS)")
    if value.count(":") == 1:
        value += ":00"
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise ValueError("Invalid time format (use HH:MM or HH:MM:SS)")


def iso_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError("Invalid date/time format (use YYYY-MM-DDTHH:MM)")
    try:
        return datetime.fromisoformat(value.replace(" ", "T"))
    except ValueError:
        raise ValueError("Invalid date/time format (use YYYY-MM-DDTHH:MM)")


def text(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("{field} must be a string")
    return value


def non_empty_text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("{field} cannot be empty")
    return value


def one_of(choices: Iterable[str], message: str = "Invalid status value") -> Validator:
    allowed = tuple(choices)

    def check(value: Any) -> str:
        if value not in allowed:
            raise ValueError(message)
        return value
    return check


def check_required(values: Mapping[str, Any], names: Iterable[str], message: str = None) -> None:
    """Raise ValidationError when any of ``names`` is missing or blank."""
    missing = [name for name in names if values.get(name) is None or values.get(name) == ""]
    if missing:
        raise ValidationError(
            message or f"Missing required fields: {', '.join(missing)}",
            field=missing[0],
        )


def check(name: str, validator: Validator, value: Any) -> Any:
    """Run one validator, reporting failures as a ValidationError on ``name``."""
    try:
        return validator(value)
    except ValueError as e:
        raise ValidationError(str(e).format(field=name), field=name)
