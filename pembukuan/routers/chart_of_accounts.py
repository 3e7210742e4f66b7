from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pembukuan.crud import chart_of_accounts as crud
from pembukuan.database import get_db
from pembukuan.errors import NotFoundError
from pembukuan.schemas.chart_of_accounts import (
    AccountSummary,
    ChartOfAccounts,
    ChartOfAccountsCreate,
    ChartOfAccountsOption,
    ChartOfAccountsUpdate,
)
from pembukuan.utils.auth_utils import get_current_user
from pembukuan.utils.responses import success_response

router = APIRouter(tags=["Chart of Accounts"], dependencies=[Depends(get_current_user)])


def _dump(account) -> dict:
    return ChartOfAccounts.model_validate(account).model_dump(mode="json")


@router.get("/coa")
def get_accounts(search: Optional[str] = None, db: Session = Depends(get_db)):
    accounts = crud.get_active_accounts(db, search=search)
    return success_response([_dump(a) for a in accounts], message="Successfully retrieved COA data.")


@router.get("/coa/list")
def get_account_options(db: Session = Depends(get_db)):
    options = [
        ChartOfAccountsOption(id=a.account_id, code=a.account_code, name=a.account_name).model_dump()
        for a in crud.get_active_accounts(db)
    ]
    return success_response(options, message="Successfully retrieved COA list.")


@router.get("/coa/{account_id}")
def get_account(account_id: str, db: Session = Depends(get_db)):
    account = crud.get_active_account(db, account_id)
    if not account:
        raise NotFoundError("COA not found.")
    return success_response(_dump(account), message="Successfully retrieved COA data.")


@router.post("/coa", status_code=status.HTTP_201_CREATED)
def create_account(account: ChartOfAccountsCreate, db: Session = Depends(get_db)):
    db_account = crud.create_account(db, account)
    return success_response(
        _dump(db_account),
        message=f"COA {db_account.account_id} successfully created.",
        code=status.HTTP_201_CREATED,
    )


@router.patch("/coa/{account_id}")
def update_account(account_id: str, account_update: ChartOfAccountsUpdate, db: Session = Depends(get_db)):
    db_account = crud.update_account(db, account_id, account_update)
    if not db_account:
        raise NotFoundError("COA not found.")
    return success_response(_dump(db_account), message=f"COA {account_id} successfully updated.")


@router.delete("/coa/{account_id}")
def delete_account(account_id: str, db: Session = Depends(get_db)):
    if not crud.deactivate_account(db, account_id):
        raise NotFoundError("COA not found.")
    return success_response(message=f"COA {account_id} successfully deactivated.")


@router.get("/accounts", tags=["Accounts"])
def get_active_accounts(db: Session = Depends(get_db)):
    """Active accounts in the compact shape used by transaction forms."""
    accounts = [
        AccountSummary(
            id=a.account_id,
            code=a.account_code,
            name=a.account_name,
            type=a.account_type,
            is_active=a.is_active,
        ).model_dump()
        for a in crud.get_active_accounts(db)
    ]
    return success_response(accounts, message="Success get accounts data")
