from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pembukuan.crud import reference as crud_reference
from pembukuan.crud import users as crud_users
from pembukuan.database import get_db
from pembukuan.errors import NotFoundError
from pembukuan.utils.auth_utils import get_current_user
from pembukuan.utils.responses import success_response

router = APIRouter(tags=["Home"])


@router.get("/home")
def home(db: Session = Depends(get_db), claims: dict = Depends(get_current_user)):
    """Dashboard payload: the signed-in user with the menus of their role."""
    user = crud_users.get_user_by_email(db, claims.get("email"))
    if not user:
        raise NotFoundError("User not found.")

    role = crud_reference.get_role(db, user.role_id)
    return success_response(
        {
            "user": {
                "user_id": user.id,
                "username": user.username,
                "full_name": user.full_name,
                "email": user.email,
                "role": {
                    "role_id": user.role_id,
                    "role_name": role.name if role else user.role_name,
                    "menus": role.menus if role else [],
                    "role_access": role.role_access if role else [],
                },
            }
        },
        message="Success Login",
    )
