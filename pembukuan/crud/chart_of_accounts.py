import logging
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from pembukuan.errors import ConflictError, ValidationError
from pembukuan.models.chart_of_accounts import ChartOfAccounts
from pembukuan.schemas.chart_of_accounts import ChartOfAccountsCreate, ChartOfAccountsUpdate
from pembukuan.utils.time_utils import local_now
from pembukuan.utils.validation import missing_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("account_code", "account_name", "account_type")


def get_active_accounts(db: Session, search: str = None) -> List[ChartOfAccounts]:
    query = db.query(ChartOfAccounts).filter(ChartOfAccounts.is_active == True)

    if search:
        term = search.lower()
        query = query.filter(or_(
            func.lower(ChartOfAccounts.account_code).contains(term, autoescape=True),
            func.lower(ChartOfAccounts.account_name).contains(term, autoescape=True),
            func.lower(ChartOfAccounts.account_type).contains(term, autoescape=True),
        ))

    return query.order_by(ChartOfAccounts.account_code).all()


def get_active_account(db: Session, account_id: str) -> Optional[ChartOfAccounts]:
    return db.query(ChartOfAccounts).filter(
        ChartOfAccounts.account_id == account_id,
        ChartOfAccounts.is_active == True
    ).first()


def get_active_account_by_code(db: Session, account_code: str, exclude_id: str = None) -> Optional[ChartOfAccounts]:
    query = db.query(ChartOfAccounts).filter(
        ChartOfAccounts.account_code == account_code,
        ChartOfAccounts.is_active == True
    )
    if exclude_id is not None:
        query = query.filter(ChartOfAccounts.account_id != exclude_id)
    return query.first()


def create_account(db: Session, account: ChartOfAccountsCreate) -> ChartOfAccounts:
    data = account.model_dump()
    if missing_fields(data, REQUIRED_FIELDS):
        raise ValidationError(
            "Missing required fields. Please provide account_code, account_name, and account_type."
        )

    if get_active_account_by_code(db, account.account_code):
        raise ConflictError("Account code already exists.")

    now = local_now()
    db_account = ChartOfAccounts(**data, is_active=True, created_at=now, updated_at=now)
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    logger.info(f"COA {db_account.account_id} ({db_account.account_code}) created")
    return db_account


def update_account(db: Session, account_id: str, account_update: ChartOfAccountsUpdate) -> Optional[ChartOfAccounts]:
    db_account = get_active_account(db, account_id)
    if not db_account:
        return None

    # Empty values leave the field untouched
    update_data = {key: value for key, value in account_update.model_dump(exclude_unset=True).items() if value}

    if "account_code" in update_data and get_active_account_by_code(db, update_data["account_code"], exclude_id=account_id):
        raise ConflictError("Account code already exists.")

    for key, value in update_data.items():
        setattr(db_account, key, value)
    db_account.updated_at = local_now()

    db.commit()
    db.refresh(db_account)
    logger.info(f"COA {account_id} updated: {sorted(update_data)}")
    return db_account


def deactivate_account(db: Session, account_id: str) -> Optional[ChartOfAccounts]:
    db_account = get_active_account(db, account_id)
    if not db_account:
        return None

    # Soft delete by setting is_active to False
    db_account.is_active = False
    db_account.updated_at = local_now()
    db.commit()
    db.refresh(db_account)
    logger.info(f"COA {account_id} deactivated")
    return db_account
