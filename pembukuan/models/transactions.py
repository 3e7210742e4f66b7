import uuid

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship

from pembukuan.database import Base
from pembukuan.models.audit_mixin import TimestampMixin
from pembukuan.utils.time_utils import local_now

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


class Transaction(Base, TimestampMixin):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    transaction_date = Column(Date, nullable=False, index=True)
    transaction_type = Column(String(30), nullable=False, index=True)
    # Unique among active rows only; enforced in crud.
    reference_no = Column(String(100), nullable=False, index=True)

    # Snapshots of the branch and account taken when the transaction is written.
    branch_id = Column(String(36), nullable=False, index=True)
    branch_name = Column(String(100), nullable=False)
    account_id = Column(String(36), nullable=False, index=True)
    account_code = Column(String(20), nullable=True)
    account_name = Column(String(100), nullable=False)

    notes = Column(Text, nullable=False, default="")
    total_amount = Column(Float, nullable=False)
    status = Column(String(10), nullable=False, default=STATUS_ACTIVE, index=True)

    files = relationship(
        "TransactionFile",
        back_populates="transaction",
        order_by="TransactionFile.position",
        cascade="all, delete-orphan",
    )


class TransactionFile(Base):
    __tablename__ = "transaction_files"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    # Public identifier; unique within the owning transaction.
    id = Column(String(64), nullable=False, index=True, default=lambda: str(uuid.uuid4()))
    transaction_id = Column(String(36), ForeignKey("transactions.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    filename = Column(String, nullable=False)
    original_name = Column(String, nullable=False)
    size = Column(Integer, nullable=False, default=0)
    mime_type = Column(String, nullable=False, default="application/octet-stream")
    uploaded_at = Column(DateTime(timezone=True), default=local_now)

    transaction = relationship("Transaction", back_populates="files")
