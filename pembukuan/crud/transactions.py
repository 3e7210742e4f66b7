"""
Transaction pipeline shared by the omzet (revenue) and pengeluaran (expense) surfaces.

Both surfaces read and write the same ``transactions`` table. A ``TransactionScope``
describes one surface: the transaction types it accepts on write and, for the expense
surface, the subset of types it can see at all.

Writes are validated completely before the store is touched. The ``validate_*``
functions return a ``ValidationResult`` carrying the first violated rule; the write
functions raise it as an ``ApiError``.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from pembukuan.crud.chart_of_accounts import get_active_account
from pembukuan.crud.reference import get_branch
from pembukuan.errors import ValidationError
from pembukuan.models.transactions import Transaction, STATUS_ACTIVE, STATUS_INACTIVE
from pembukuan.schemas.transactions import FileMetadataIn, TransactionCreate, TransactionUpdate
from pembukuan.schemas import transactions as schemas
from pembukuan.utils.date_utils import parse_filter_date, parse_transaction_date
from pembukuan.utils.file_utils import build_file
from pembukuan.utils.time_utils import local_now
from pembukuan.utils.validation import (
    OMZET_TRANSACTION_TYPES,
    PENGELUARAN_TRANSACTION_TYPES,
    ValidationResult,
    is_positive_number,
    is_valid_date_format,
    is_valid_file,
    is_valid_transaction_type,
    missing_fields,
    raise_for_result,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("transaction_date", "transaction_type", "reference_no", "branch_id", "account_id", "total_amount")


@dataclass(frozen=True)
class TransactionScope:
    label: str
    allowed_types: Tuple[str, ...]
    # None means every transaction type is visible
    visible_types: Optional[Tuple[str, ...]] = None

    @property
    def type_choices(self) -> str:
        return " or ".join(f"'{t}'" for t in self.allowed_types)


OMZET = TransactionScope("Omzet", OMZET_TRANSACTION_TYPES)
PENGELUARAN = TransactionScope("Expense", PENGELUARAN_TRANSACTION_TYPES, visible_types=PENGELUARAN_TRANSACTION_TYPES)


@dataclass
class TransactionFilters:
    search: Optional[str] = None
    transaction_type: Optional[str] = None
    account_id: Optional[str] = None
    branch_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


def _active_query(db: Session, scope: TransactionScope):
    query = db.query(Transaction).filter(Transaction.status == STATUS_ACTIVE)
    if scope.visible_types is not None:
        query = query.filter(Transaction.transaction_type.in_(scope.visible_types))
    return query


def _parse_boundary(value: str, field: str):
    try:
        return parse_filter_date(value)
    except ValueError:
        raise ValidationError("Invalid date format", f"{field} must be DD/MM/YYYY, DD-MM-YYYY or DDMMYYYY")


def list_transactions(db: Session, scope: TransactionScope, filters: TransactionFilters = None) -> List[Transaction]:
    """
    Active transactions of ``scope`` matching every given filter, newest created first.

    The date range is inclusive on both ends. ``search`` is a case-insensitive
    substring match on reference number, notes, branch name and account name.
    """
    filters = filters or TransactionFilters()
    query = _active_query(db, scope)

    if filters.transaction_type:
        query = query.filter(Transaction.transaction_type == filters.transaction_type)
    if filters.account_id:
        query = query.filter(Transaction.account_id == filters.account_id)
    if filters.branch_id:
        query = query.filter(Transaction.branch_id == filters.branch_id)
    if filters.start_date:
        query = query.filter(Transaction.transaction_date >= _parse_boundary(filters.start_date, "start_date"))
    if filters.end_date:
        query = query.filter(Transaction.transaction_date <= _parse_boundary(filters.end_date, "end_date"))
    if filters.search:
        term = filters.search.lower()
        query = query.filter(or_(
            func.lower(Transaction.reference_no).contains(term, autoescape=True),
            func.lower(Transaction.notes).contains(term, autoescape=True),
            func.lower(Transaction.branch_name).contains(term, autoescape=True),
            func.lower(Transaction.account_name).contains(term, autoescape=True),
        ))

    return query.order_by(Transaction.created_at.desc()).all()


def get_transaction(db: Session, scope: TransactionScope, transaction_id: str) -> Optional[Transaction]:
    return _active_query(db, scope).filter(Transaction.id == transaction_id).first()


def reference_in_use(db: Session, reference_no: str, exclude_id: str = None) -> bool:
    """Whether an active transaction of any surface already carries ``reference_no``."""
    query = db.query(Transaction.id).filter(
        Transaction.reference_no == reference_no,
        Transaction.status == STATUS_ACTIVE,
    )
    if exclude_id is not None:
        query = query.filter(Transaction.id != exclude_id)
    return query.first() is not None


# --- validation ---------------------------------------------------------------

def _invalid_date() -> ValidationResult:
    return ValidationResult.failure("Invalid date format", "Date must be in DD/MM/YYYY format")


def _invalid_type(scope: TransactionScope) -> ValidationResult:
    return ValidationResult.failure("Invalid transaction type", f"transaction_type must be {scope.type_choices}")


def _invalid_branch() -> ValidationResult:
    return ValidationResult.failure("Branch not found", "Invalid branch_id")


def _invalid_account() -> ValidationResult:
    return ValidationResult.failure("Account not found", "Invalid account_id or account is inactive")


def _invalid_amount() -> ValidationResult:
    return ValidationResult.failure("Invalid total amount", "total_amount must be a positive number")


def _duplicate_reference() -> ValidationResult:
    return ValidationResult.duplicate("Reference number already exists", "reference_no must be unique")


def validate_files(files: Optional[List[FileMetadataIn]]) -> ValidationResult:
    for file in files or []:
        if not is_valid_file(file):
            return ValidationResult.failure("Invalid file metadata", "Each file must have filename and original_name")
    return ValidationResult.success()


def validate_create(db: Session, scope: TransactionScope, payload: TransactionCreate) -> ValidationResult:
    missing = missing_fields(payload.model_dump(), REQUIRED_FIELDS)
    if missing:
        return ValidationResult.failure(
            "Missing required fields",
            "transaction_date, transaction_type, reference_no, branch_id, account_id, and total_amount are required",
            errors=missing,
        )
    if not is_valid_date_format(payload.transaction_date):
        return _invalid_date()
    if not is_valid_transaction_type(payload.transaction_type, scope.allowed_types):
        return _invalid_type(scope)
    if not get_branch(db, payload.branch_id):
        return _invalid_branch()
    if not get_active_account(db, payload.account_id):
        return _invalid_account()
    if not is_positive_number(payload.total_amount):
        return _invalid_amount()
    if reference_in_use(db, payload.reference_no):
        return _duplicate_reference()
    return validate_files(payload.files)


def validate_update(db: Session, scope: TransactionScope, transaction: Transaction, payload: TransactionUpdate) -> ValidationResult:
    """Validate every field present in ``payload``; absent fields are not checked."""
    data = payload.model_dump(exclude_unset=True)

    if "transaction_date" in data and not is_valid_date_format(data["transaction_date"]):
        return _invalid_date()
    if "transaction_type" in data and not is_valid_transaction_type(data["transaction_type"], scope.allowed_types):
        return _invalid_type(scope)
    if "branch_id" in data and not get_branch(db, data["branch_id"]):
        return _invalid_branch()
    if "account_id" in data and not get_active_account(db, data["account_id"]):
        return _invalid_account()
    if "total_amount" in data and not is_positive_number(data["total_amount"]):
        return _invalid_amount()
    if "reference_no" in data:
        reference_no = data["reference_no"]
        if not reference_no:
            return ValidationResult.failure("Invalid reference number", "reference_no cannot be empty")
        if reference_no != transaction.reference_no and reference_in_use(db, reference_no, exclude_id=transaction.id):
            return _duplicate_reference()
    if "files" in data:
        return validate_files(payload.files)
    return ValidationResult.success()


# --- writes -------------------------------------------------------------------

def create_transaction(db: Session, scope: TransactionScope, payload: TransactionCreate) -> Transaction:
    raise_for_result(validate_create(db, scope, payload))

    branch = get_branch(db, payload.branch_id)
    account = get_active_account(db, payload.account_id)
    now = local_now()
    db_transaction = Transaction(
        transaction_date=parse_transaction_date(payload.transaction_date),
        transaction_type=payload.transaction_type,
        reference_no=payload.reference_no,
        branch_id=branch.id,
        branch_name=branch.name,
        account_id=account.account_id,
        account_code=account.account_code,
        account_name=account.account_name,
        notes=payload.notes or "",
        total_amount=payload.total_amount,
        status=STATUS_ACTIVE,
        files=[build_file(file, position) for position, file in enumerate(payload.files or [])],
        created_at=now,
        updated_at=now,
    )
    db.add(db_transaction)
    db.commit()
    db.refresh(db_transaction)
    logger.info(f"{scope.label} {db_transaction.id} ({db_transaction.reference_no}) created")
    return db_transaction


def update_transaction(db: Session, scope: TransactionScope, transaction: Transaction, payload: TransactionUpdate) -> Transaction:
    raise_for_result(validate_update(db, scope, transaction, payload))
    data = payload.model_dump(exclude_unset=True)

    if "transaction_date" in data:
        transaction.transaction_date = parse_transaction_date(data["transaction_date"])
    if "transaction_type" in data:
        transaction.transaction_type = data["transaction_type"]
    if "reference_no" in data:
        transaction.reference_no = data["reference_no"]
    if "branch_id" in data:
        branch = get_branch(db, data["branch_id"])
        transaction.branch_id = branch.id
        transaction.branch_name = branch.name
    if "account_id" in data:
        account = get_active_account(db, data["account_id"])
        transaction.account_id = account.account_id
        transaction.account_code = account.account_code
        transaction.account_name = account.account_name
    if "notes" in data:
        transaction.notes = data["notes"] or ""
    if "total_amount" in data:
        transaction.total_amount = data["total_amount"]
    if "files" in data:
        # Whole-list replacement
        transaction.files = [
            build_file(file, position, keep_identity=True)
            for position, file in enumerate(payload.files or [])
        ]
    transaction.updated_at = local_now()

    db.commit()
    db.refresh(transaction)
    logger.info(f"{scope.label} {transaction.id} updated: {sorted(data)}")
    return transaction


def deactivate_transaction(db: Session, scope: TransactionScope, transaction: Transaction) -> Transaction:
    transaction.status = STATUS_INACTIVE
    transaction.updated_at = local_now()
    db.commit()
    db.refresh(transaction)
    logger.info(f"{scope.label} {transaction.id} deactivated")
    return transaction


def add_files(db: Session, scope: TransactionScope, transaction: Transaction, files: Optional[List[FileMetadataIn]]) -> Transaction:
    """Append new file metadata after the existing files, each with a fresh id."""
    if not files:
        raise ValidationError("Files array is required and cannot be empty")
    raise_for_result(validate_files(files))

    start = transaction.files[-1].position + 1 if transaction.files else 0
    for offset, file in enumerate(files):
        transaction.files.append(build_file(file, start + offset))
    transaction.updated_at = local_now()

    db.commit()
    db.refresh(transaction)
    logger.info(f"{len(files)} file(s) added to {scope.label} {transaction.id}")
    return transaction


def remove_file(db: Session, scope: TransactionScope, transaction: Transaction, file_id: str) -> bool:
    """Remove one file from ``transaction``; False when it has no such file."""
    db_file = next((f for f in transaction.files if f.id == file_id), None)
    if db_file is None:
        return False

    transaction.files.remove(db_file)
    transaction.updated_at = local_now()
    db.commit()
    logger.info(f"File {file_id} removed from {scope.label} {transaction.id}")
    return True


def serialize_transaction(transaction: Transaction) -> dict:
    return schemas.Transaction.model_validate(transaction).model_dump(mode="json")


def serialize_files(transaction: Transaction) -> list:
    return [schemas.FileMetadata.model_validate(f).model_dump(mode="json") for f in transaction.files]
