from sqlalchemy import Column, String, JSON

from pembukuan.database import Base


class Role(Base):
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True)
    name = Column(String(50), nullable=False)
    # [{"menu_id": ..., "menu_name": ..., "path": ...}]
    menus = Column(JSON, nullable=False, default=list)
    # e.g. ["C", "R", "U", "D"]
    role_access = Column(JSON, nullable=False, default=list)
