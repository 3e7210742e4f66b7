import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pembukuan import config
from pembukuan.crud import users as crud_users
from pembukuan.database import get_db
from pembukuan.errors import AuthError, ValidationError
from pembukuan.schemas.auth import LoginRequest, Token
from pembukuan.utils.auth_utils import create_access_token
from pembukuan.utils.responses import success_response

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    if not credentials.email or not credentials.password:
        raise ValidationError("Invalid JSON payload")

    user = crud_users.authenticate_user(db, credentials.email, credentials.password)
    if not user:
        logger.warning(f"Failed login for {credentials.email}")
        raise AuthError("Invalid credentials")

    token = create_access_token(data={"email": user.email})
    logger.info(f"User {user.id} logged in")
    return success_response(
        Token(token=token, expires=config.ACCESS_TOKEN_EXPIRE_SECONDS).model_dump(),
        message="Success Login",
    )
