"""
Validation helpers shared by the route handlers and the transaction pipeline.

The small predicates answer one question each. ``ValidationResult`` is the
tagged outcome returned by the pipeline validators; callers check it before
touching the store and turn a failure into an ``ApiError`` with
``raise_for_result``.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from pembukuan.errors import ConflictError, ValidationError
from pembukuan.utils.date_utils import parse_transaction_date

OMZET_TRANSACTION_TYPES = ("Pemasukan", "Pengeluaran")
PENGELUARAN_TRANSACTION_TYPES = ("Operasional", "Bahan Baku")

_DATE_SHAPE = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def missing_fields(payload: Mapping[str, Any], required: Iterable[str]) -> List[str]:
    """Names from ``required`` whose value in ``payload`` is absent or falsy."""
    return [field for field in required if not payload.get(field)]


def is_valid_date_format(value: Any) -> bool:
    """True for a ``DD/MM/YYYY`` string that is also a real calendar date."""
    if not isinstance(value, str) or not _DATE_SHAPE.match(value):
        return False
    try:
        parse_transaction_date(value)
    except ValueError:
        return False
    return True


def is_positive_number(value: Any) -> bool:
    # bool is an int subclass; JSON true must not count as 1
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        number = float(value)
    except OverflowError:
        return False
    # rejects Infinity and NaN
    return math.isfinite(number) and number > 0


def is_valid_transaction_type(value: Any, allowed: Iterable[str]) -> bool:
    return value in tuple(allowed)


def is_valid_file(file: Any) -> bool:
    """A file record needs a non-empty ``filename`` and ``original_name``."""
    if file is None:
        return False
    if isinstance(file, Mapping):
        return bool(file.get("filename")) and bool(file.get("original_name"))
    return bool(getattr(file, "filename", None)) and bool(getattr(file, "original_name", None))


@dataclass
class ValidationResult:
    ok: bool
    error: Optional[str] = None
    message: Optional[str] = None
    errors: Optional[List[str]] = None
    conflict: bool = False

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str, message: str = None, errors: List[str] = None) -> "ValidationResult":
        return cls(ok=False, error=error, message=message, errors=errors)

    @classmethod
    def duplicate(cls, error: str, message: str = None) -> "ValidationResult":
        return cls(ok=False, error=error, message=message, conflict=True)

    def __bool__(self):
        return self.ok


def raise_for_result(result: ValidationResult) -> None:
    """Raise the matching ``ApiError`` for a failed result; no-op on success."""
    if result.ok:
        return
    if result.conflict:
        raise ConflictError(result.error, result.message)
    raise ValidationError(result.error, result.message, result.errors)
