from sqlalchemy import Column, String

from pembukuan.database import Base


class Branch(Base):
    __tablename__ = "branches"

    id = Column(String(36), primary_key=True)
    code = Column(String(20), nullable=True)
    name = Column(String(100), nullable=False)
