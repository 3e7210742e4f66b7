from pydantic import BaseModel, ConfigDict, field_serializer
from typing import Any, List, Optional
from datetime import date, datetime

from pembukuan.utils.date_utils import format_display_date


class FileMetadataIn(BaseModel):
    id: Optional[str] = None
    filename: Optional[str] = None
    original_name: Optional[str] = None
    size: Optional[int] = None
    mime_type: Optional[str] = None
    uploaded_at: Optional[datetime] = None


class FileMetadata(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    filename: str
    original_name: str
    size: int
    mime_type: str
    uploaded_at: Optional[datetime] = None


# All request fields are optional; presence, shape and range are checked by the
# transaction pipeline so that the first violated rule is reported.
class TransactionCreate(BaseModel):
    transaction_date: Optional[str] = None
    transaction_type: Optional[str] = None
    reference_no: Optional[str] = None
    branch_id: Optional[str] = None
    account_id: Optional[str] = None
    notes: Optional[str] = None
    total_amount: Optional[Any] = None
    files: Optional[List[FileMetadataIn]] = None


class TransactionUpdate(TransactionCreate):
    pass


class FilesAttach(BaseModel):
    files: Optional[List[FileMetadataIn]] = None


class Transaction(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    transaction_date: date
    transaction_type: str
    reference_no: str
    branch_id: str
    branch_name: str
    account_id: str
    account_code: Optional[str] = None
    account_name: str
    notes: str = ""
    total_amount: float
    status: str
    files: List[FileMetadata] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("transaction_date")
    def serialize_transaction_date(self, value: date) -> str:
        return format_display_date(value)
