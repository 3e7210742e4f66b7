from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pembukuan.crud import reference as crud_reference
from pembukuan.crud import users as crud_users
from pembukuan.database import get_db
from pembukuan.errors import NotFoundError
from pembukuan.schemas import reference as reference_schemas
from pembukuan.schemas.users import User, UserCreate, UserDetail, UserUpdate
from pembukuan.utils.auth_utils import get_current_user
from pembukuan.utils.responses import success_response

router = APIRouter(tags=["Users"], dependencies=[Depends(get_current_user)])


def _user_not_found(user_id: str) -> NotFoundError:
    return NotFoundError("User not found.", f"User with ID {user_id} not found.")


@router.get("/users")
def read_users(search: Optional[str] = None, db: Session = Depends(get_db)):
    users = crud_users.get_users(db, search=search)
    return success_response(
        [User.model_validate(u).model_dump(mode="json") for u in users],
        message="Successfully Get User",
    )


@router.get("/users/{user_id}")
def read_user(user_id: str, db: Session = Depends(get_db)):
    user = crud_users.get_user(db, user_id)
    if user is None:
        raise _user_not_found(user_id)
    return success_response(UserDetail.model_validate(user).model_dump(mode="json"), message="Successfully Get User")


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    db_user = crud_users.create_user(db, user)
    return success_response(
        User.model_validate(db_user).model_dump(mode="json"),
        message=f"User {db_user.id} Successfully Created",
        code=status.HTTP_201_CREATED,
    )


@router.patch("/users/{user_id}/deactivate")
def deactivate_user(user_id: str, db: Session = Depends(get_db)):
    db_user = crud_users.deactivate_user(db, user_id)
    if db_user is None:
        raise _user_not_found(user_id)
    return success_response(message=f"User {user_id} Successfully Deactivate")


@router.patch("/users/{user_id}")
def update_user(user_id: str, user: UserUpdate, db: Session = Depends(get_db)):
    db_user = crud_users.update_user(db, user_id, user)
    if db_user is None:
        raise _user_not_found(user_id)
    return success_response(
        User.model_validate(db_user).model_dump(mode="json"),
        message=f"User {user_id} Successfully Updated",
    )


@router.get("/roles/list")
def read_roles(db: Session = Depends(get_db)):
    roles = crud_reference.get_roles(db)
    return success_response(
        [reference_schemas.Role.model_validate(r).model_dump(mode="json") for r in roles],
        message="Successfully Get Role",
    )


@router.get("/branchs/list")
def read_branches(db: Session = Depends(get_db)):
    branches = crud_reference.get_branches(db)
    return success_response(
        [reference_schemas.Branch.model_validate(b).model_dump(mode="json") for b in branches],
        message="Successfully Get Branch",
    )
