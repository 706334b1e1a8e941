"""
Date helpers shared by the API layer and the flight service.

Dates travel as ``YYYY-MM-DD`` strings.  ``parse_or_fail`` turns a
query parameter into a ``date`` and ``validate_range`` enforces that a
departure never falls after the matching arrival.
"""

import re
from datetime import date, datetime
from typing import Optional

from .exceptions import BadInputError

DATE_FORMAT = "%Y-%m-%d"
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


def parse_or_fail(text: Optional[str], field_label: str) -> Optional[date]:
    """Parse ``text`` as an ISO calendar date.

    ``None`` or blank input yields ``None``.  Anything else must be a
    real date written as ``YYYY-MM-DD``; otherwise ``BadInputError`` is
    raised naming ``field_label``.
    """
    if text is None or not text.strip():
        return None
    value = text.strip()
    error = BadInputError(f"Invalid format for {field_label}. Use yyyy-MM-dd.")
    # strptime alone would also accept "2025-3-1"
    if not _ISO_DATE_RE.match(value):
        raise error
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise error from exc


def validate_range(departure: Optional[date], arrival: Optional[date]) -> None:
    """Fail if ``departure`` is strictly after ``arrival``.

    Missing dates are not checked here; required fields are enforced by
    the caller.
    """
    if departure is not None and arrival is not None and departure > arrival:
        raise BadInputError("departureDate cannot be after arrivalDate")


def duration_days(departure: date, arrival: date) -> int:
    """Whole days between departure and arrival (0 for same-day flights)."""
    return (arrival - departure).days
