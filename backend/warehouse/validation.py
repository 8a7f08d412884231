# Overview: Error kinds and static argument checks shared by the stores and the accounting engine.

from __future__ import annotations

from datetime import date
from typing import Any, Iterable

from .time_utils import to_date, utc_today


class AccountingError(Exception):
    """Base class for classified warehouse accounting errors."""


class InvalidArgumentError(AccountingError, ValueError):
    """Caller-supplied value fails a static precondition. Detected without a store round-trip."""


class InvalidOperationError(AccountingError):
    """
    A precondition that depends on store state failed.

    `missing` names every absent reference (e.g. ["Employee 7", "Supply 2"])
    so callers can tell which one failed.
    """

    def __init__(self, message: str, *, missing: Iterable[str] = ()):
        super().__init__(message)
        self.missing = list(missing)


def _require_int(value: Any, name: str) -> int:
    # bool is a subclass of int; True must not pass as id 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer")
    return value


def require_positive_id(value: Any, name: str = "id") -> int:
    value = _require_int(value, name)
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value}")
    return value


def require_positive_quantity(value: Any, name: str = "quantity") -> int:
    value = _require_int(value, name)
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be greater than 0, got {value}")
    return value


def require_non_negative(value: Any, name: str) -> int:
    value = _require_int(value, name)
    if value < 0:
        raise InvalidArgumentError(f"{name} must not be negative, got {value}")
    return value


def require_date(value: Any, name: str) -> date:
    try:
        return to_date(value)
    except ValueError:
        raise InvalidArgumentError(f"{name} must be a date or an ISO-8601 date string")


def require_not_future(value: Any, name: str) -> date:
    """Normalize to a date and reject anything after today (UTC)."""
    day = require_date(value, name)
    today = utc_today()
    if day > today:
        raise InvalidArgumentError(f"{name} must not be in the future ({day.isoformat()} > {today.isoformat()})")
    return day
