"""Expiry computation and classification.

The single source of date arithmetic for production records. Both the
inventory query that lists expiring records and every response that shows a
record's status go through these functions:

- ``expiry_date = production_date + shelf_life`` (calendar days)
- ``remaining_days = expiry_date - reference_date`` in whole days, with the
  reference taken as a calendar date (time of day discarded)
- ``expired`` when ``remaining_days <= 0``, ``expiring`` when
  ``remaining_days <= reminder_days``, otherwise ``normal``

A record stops being ``normal`` on its ``alert_date``
(``expiry_date - reminder_days``). Because ``alert_date`` depends only on the
record's own immutable fields, the database can filter on
``alert_date <= reference_date`` and select exactly the rows that
``classify`` labels ``expired`` or ``expiring``.
"""

import enum
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from shelflife.core.exceptions import DateError, ExpiryComputationError

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class ExpiryStatus(str, enum.Enum):
    EXPIRED = "expired"
    EXPIRING = "expiring"
    NORMAL = "normal"


@dataclass(frozen=True)
class Classification:
    """Derived, never stored, view of a record at a reference date."""

    expiry_date: date
    reminder_date: date
    remaining_days: int
    status: ExpiryStatus
    shelf_life_remaining_pct: float

    @property
    def is_flagged(self) -> bool:
        return self.status is not ExpiryStatus.NORMAL


def parse_iso_date(value: object) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date.

    Raises:
        DateError: For datetimes, malformed strings, impossible dates and
            any other type.
    """
    if isinstance(value, datetime):
        raise DateError(value, "Expected a calendar date without a time component")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if _ISO_DATE.fullmatch(value):
            try:
                return date.fromisoformat(value)
            except ValueError as exc:
                raise DateError(value) from exc
    raise DateError(value)


def normalize_reference(reference: date | datetime) -> date:
    """Reduce a reference instant to its calendar day."""
    if isinstance(reference, datetime):
        return reference.date()
    if isinstance(reference, date):
        return reference
    raise DateError(reference, "Reference must be a date or datetime")


def _check_parameters(shelf_life: int, reminder_days: int) -> None:
    for name, value in (("shelf_life", shelf_life), ("reminder_days", reminder_days)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ExpiryComputationError(f"{name} must be an integer, got {value!r}")
    if shelf_life <= 0:
        raise ExpiryComputationError(f"shelf_life must be positive, got {shelf_life}")
    if reminder_days < 0:
        raise ExpiryComputationError(
            f"reminder_days must not be negative, got {reminder_days}"
        )
    if reminder_days > shelf_life:
        raise ExpiryComputationError(
            f"reminder_days ({reminder_days}) exceeds shelf_life ({shelf_life})"
        )


def expiry_date_for(production_date: date | str, shelf_life: int) -> date:
    """Calendar date on which a batch expires."""
    produced = parse_iso_date(production_date)
    if isinstance(shelf_life, bool) or not isinstance(shelf_life, int) or shelf_life <= 0:
        raise ExpiryComputationError(f"shelf_life must be a positive integer, got {shelf_life!r}")
    try:
        return produced + timedelta(days=shelf_life)
    except OverflowError as exc:
        raise ExpiryComputationError(
            f"expiry date out of range for {produced.isoformat()} + {shelf_life} days"
        ) from exc


def alert_date_for(production_date: date | str, shelf_life: int, reminder_days: int) -> date:
    """First reference date on which the batch is no longer ``normal``."""
    _check_parameters(shelf_life, reminder_days)
    return expiry_date_for(production_date, shelf_life) - timedelta(days=reminder_days)


def status_for(remaining_days: int, reminder_days: int) -> ExpiryStatus:
    if remaining_days <= 0:
        return ExpiryStatus.EXPIRED
    if remaining_days <= reminder_days:
        return ExpiryStatus.EXPIRING
    return ExpiryStatus.NORMAL


def classify(
    production_date: date | str,
    shelf_life: int,
    reminder_days: int,
    reference: date | datetime,
) -> Classification:
    """Classify a batch against a reference date.

    Raises:
        DateError: If ``production_date`` or ``reference`` is not a date.
        ExpiryComputationError: If shelf_life/reminder_days are not a valid
            pair (non-positive shelf life, negative reminder, reminder longer
            than shelf life).
    """
    _check_parameters(shelf_life, reminder_days)
    expiry = expiry_date_for(production_date, shelf_life)
    today = normalize_reference(reference)

    remaining = (expiry - today).days
    pct = max(0.0, min(100.0, remaining / shelf_life * 100))
    return Classification(
        expiry_date=expiry,
        reminder_date=expiry - timedelta(days=reminder_days),
        remaining_days=remaining,
        status=status_for(remaining, reminder_days),
        shelf_life_remaining_pct=round(pct, 1),
    )


def is_flagged(
    production_date: date | str,
    shelf_life: int,
    reminder_days: int,
    reference: date | datetime,
) -> bool:
    """True when the batch is expired or inside its reminder window."""
    return classify(production_date, shelf_life, reminder_days, reference).is_flagged
