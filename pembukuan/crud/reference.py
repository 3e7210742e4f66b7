from typing import List, Optional

from sqlalchemy.orm import Session

from pembukuan.models.branches import Branch
from pembukuan.models.roles import Role


def get_branches(db: Session) -> List[Branch]:
    return db.query(Branch).order_by(Branch.id).all()


def get_branch(db: Session, branch_id: str) -> Optional[Branch]:
    return db.query(Branch).filter(Branch.id == branch_id).first()


def get_roles(db: Session) -> List[Role]:
    return db.query(Role).order_by(Role.id).all()


def get_role(db: Session, role_id: str) -> Optional[Role]:
    if not role_id:
        return None
    return db.query(Role).filter(Role.id == role_id).first()
