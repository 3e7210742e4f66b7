import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from jose import jwt
from jose.exceptions import JWTError
from passlib.context import CryptContext

from pembukuan import config
from pembukuan.errors import AuthError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign ``data`` as an HS256 JWT with the shared secret.

    The token expires ``ACCESS_TOKEN_EXPIRE_SECONDS`` after issuance unless
    ``expires_delta`` is given.
    """
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(seconds=config.ACCESS_TOKEN_EXPIRE_SECONDS)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry. Raises ``AuthError`` on any failure."""
    try:
        return jwt.decode(token, config.SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise AuthError()


def get_current_user(request: Request) -> Dict[str, Any]:
    """
    FastAPI dependency to validate the bearer token from the Authorization header.

    Every failure (missing header, other scheme, bad signature, expiry) raises the
    same ``AuthError`` so callers cannot tell them apart. The decoded claims are
    also left on ``request.state.user``.

    Usage:
        router = APIRouter(dependencies=[Depends(get_current_user)])
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise AuthError()

    # The token is expected to be in the format "Bearer <token>"
    parts = auth_header.split()
    if len(parts) != 2 or parts[0] != "Bearer":
        raise AuthError()

    payload = decode_access_token(parts[1])
    request.state.user = payload
    return payload
