import uuid

from sqlalchemy import Column, String, Boolean, JSON

from pembukuan.database import Base
from pembukuan.models.audit_mixin import TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    email = Column(String, unique=True, index=True, nullable=True)
    hashed_password = Column(String, nullable=False)
    role_id = Column(String(36), nullable=True)
    role_name = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    branches = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, email={self.email}, is_active={self.is_active})>"
