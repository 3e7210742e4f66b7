import uuid

from sqlalchemy import Column, String, Boolean

from pembukuan.database import Base
from pembukuan.models.audit_mixin import TimestampMixin


class ChartOfAccounts(Base, TimestampMixin):
    __tablename__ = "chart_of_accounts"

    account_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Unique among active rows only; enforced in crud so that a soft-deleted code can be reused.
    account_code = Column(String(20), nullable=False, index=True)
    account_name = Column(String(100), nullable=False)
    account_type = Column(String(50), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<ChartOfAccounts(account_id={self.account_id}, account_code={self.account_code}, is_active={self.is_active})>"
