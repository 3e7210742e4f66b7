from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


# Request fields are optional so that a missing field is reported with the API's own message.
class ChartOfAccountsCreate(BaseModel):
    account_code: Optional[str] = None
    account_name: Optional[str] = None
    account_type: Optional[str] = None


class ChartOfAccountsUpdate(BaseModel):
    account_code: Optional[str] = None
    account_name: Optional[str] = None
    account_type: Optional[str] = None


class ChartOfAccounts(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    account_id: str
    account_code: str
    account_name: str
    account_type: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ChartOfAccountsOption(BaseModel):
    """Dropdown entry."""
    id: str
    code: str
    name: str


class AccountSummary(BaseModel):
    id: str
    code: str
    name: str
    type: str
    is_active: bool
