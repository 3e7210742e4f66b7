import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pembukuan.crud.reference import get_role
from pembukuan.errors import ConflictError, ValidationError
from pembukuan.models.users import User
from pembukuan.schemas.users import UserCreate, UserUpdate
from pembukuan.utils.auth_utils import hash_password, verify_password
from pembukuan.utils.time_utils import local_now

logger = logging.getLogger(__name__)

DEFAULT_ROLE_NAME = "User"


def get_users(db: Session, search: str = None) -> List[User]:
    query = db.query(User)
    if search:
        query = query.filter(or_(
            User.username.contains(search, autoescape=True),
            User.email.contains(search, autoescape=True),
        ))
    return query.order_by(User.created_at, User.username).all()


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    if not email:
        return None
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Return the active user matching the credentials, or None."""
    user = get_user_by_email(db, email)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def _role_name(db: Session, role_id: str) -> str:
    role = get_role(db, role_id)
    return role.name if role else DEFAULT_ROLE_NAME


def _commit_user(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        # users.email is unique
        db.rollback()
        raise ConflictError("User with this email already exists.")


def create_user(db: Session, user: UserCreate) -> User:
    if not user.username or not user.password:
        raise ValidationError("Username or Password are required")

    # An empty email is stored as no email
    email = user.email or None
    if email is not None and get_user_by_email(db, email):
        raise ConflictError("User with this email already exists.")

    now = local_now()
    db_user = User(
        username=user.username,
        full_name=user.full_name,
        email=email,
        hashed_password=hash_password(user.password),
        role_id=user.role_id,
        role_name=_role_name(db, user.role_id),
        is_active=True,
        branches=user.branches or [],
        created_at=now,
        updated_at=now,
    )
    db.add(db_user)
    _commit_user(db)
    db.refresh(db_user)
    logger.info(f"User {db_user.id} ({db_user.username}) created")
    return db_user


def update_user(db: Session, user_id: str, user_update: UserUpdate) -> Optional[User]:
    """Merge every field sent in the payload onto the user."""
    db_user = get_user(db, user_id)
    if not db_user:
        return None

    # Explicit nulls are ignored; every other sent field replaces the stored value.
    update_data = {key: value for key, value in user_update.model_dump(exclude_unset=True).items() if value is not None}

    if "username" in update_data and not update_data["username"]:
        raise ValidationError("Username cannot be empty")

    if "email" in update_data and not update_data["email"]:
        update_data["email"] = None
    email = update_data.get("email")
    if email is not None and email != db_user.email:
        existing = get_user_by_email(db, email)
        if existing and existing.id != user_id:
            raise ConflictError("User with this email already exists.")

    password = update_data.pop("password", None)
    if password:
        db_user.hashed_password = hash_password(password)

    for key, value in update_data.items():
        setattr(db_user, key, value)
    if "role_id" in update_data:
        db_user.role_name = _role_name(db, db_user.role_id)
    db_user.updated_at = local_now()

    _commit_user(db)
    db.refresh(db_user)
    logger.info(f"User {user_id} updated: {sorted(update_data)}")
    return db_user


def deactivate_user(db: Session, user_id: str) -> Optional[User]:
    db_user = get_user(db, user_id)
    if not db_user:
        return None

    db_user.is_active = False
    db_user.updated_at = local_now()
    db.commit()
    db.refresh(db_user)
    logger.info(f"User {user_id} deactivated")
    return db_user
