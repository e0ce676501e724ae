"""Billing cycle calculation.

A cycle runs from the 23rd of one month through the 22nd of the next and is
labeled by the month it starts in, e.g. "Jan 2026" covers 2026-01-23 to
2026-02-22.
"""

from datetime import date, datetime
from typing import Optional, Union

CYCLE_START_DAY = 23
LABEL_FORMAT = "%b %Y"

DateLike = Union[date, datetime, str, None]


def _coerce_date(value: DateLike, today: Optional[date]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            pass
    return today or date.today()


def cycle_for(value: DateLike, today: Optional[date] = None) -> str:
    """
    Label of the billing cycle owning a date.

    Malformed input falls back to ``today`` (the current date by default).
    """
    txn_date = _coerce_date(value, today)

    year, month = txn_date.year, txn_date.month
    if txn_date.day < CYCLE_START_DAY:
        month -= 1
        if month == 0:
            month = 12
            year -= 1

    return date(year, month, CYCLE_START_DAY).strftime(LABEL_FORMAT)


def current_cycle(today: Optional[date] = None) -> str:
    return cycle_for(today or date.today())


def cycle_start(label: str) -> date:
    """First day of a labeled cycle. Raises ValueError for bad labels."""
    parsed = datetime.strptime(label.strip(), LABEL_FORMAT)
    return date(parsed.year, parsed.month, CYCLE_START_DAY)


def cycle_sort_key(label: str) -> date:
    """Chronological key for cycle labels; unparseable labels sort first."""
    try:
        return cycle_start(label)
    except ValueError:
        return date.min
