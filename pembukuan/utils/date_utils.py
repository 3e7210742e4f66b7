"""Date helpers for transaction dates.

Transaction dates travel over the API as ``DD/MM/YYYY`` and are stored as
calendar dates. Date-range filters are more forgiving and also accept
``DD-MM-YYYY`` and an unseparated ``DDMMYYYY``.
"""

import re
from datetime import date, datetime

DISPLAY_FORMAT = "%d/%m/%Y"

_FILTER_PATTERNS = (
    (re.compile(r"^\d{2}/\d{2}/\d{4}$"), "%d/%m/%Y"),
    (re.compile(r"^\d{2}-\d{2}-\d{4}$"), "%d-%m-%Y"),
    (re.compile(r"^\d{8}$"), "%d%m%Y"),
)


def parse_transaction_date(value: str) -> date:
    """Parse a ``DD/MM/YYYY`` string. Raises ``ValueError`` on anything else."""
    return datetime.strptime(value, DISPLAY_FORMAT).date()


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_FORMAT)


def parse_filter_date(value: str) -> date:
    """
    Parse a date-range boundary given as ``DD/MM/YYYY``, ``DD-MM-YYYY`` or
    ``DDMMYYYY`` (day, month, year in that order for all three).

    Raises:
        ValueError: if the value matches none of the encodings or is not a real date.
    """
    value = (value or "").strip()
    for pattern, fmt in _FILTER_PATTERNS:
        if pattern.match(value):
            return datetime.strptime(value, fmt).date()
    raise ValueError(f"Unrecognised date: {value!r}")
