"""
Admin authentication.

Credentials come from the runtime settings file (see ``get_env_settings``),
so a password changed from the admin panel applies on the next login.
"""
import hmac
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from repufrenos.config import get_env_settings, get_settings
from repufrenos.log import get_logger

logger = get_logger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login")


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def verify_credentials(username: Optional[str], password: Optional[str]) -> bool:
    """
    Check a login against the configured admin users.

    With no admin user configured at all, the default ``admin`` /
    ``admin123`` pair is accepted.
    """
    if not username or not password:
        return False

    users = [user for user in get_env_settings().users if user.username]
    if not users:
        return _same(username, DEFAULT_ADMIN_USERNAME) and _same(password, DEFAULT_ADMIN_PASSWORD)

    return any(
        _same(username, user.username) and user.password is not None and _same(password, user.password)
        for user in users
    )


def create_access_token(username: str, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {"sub": username, "role": "admin", "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def get_current_admin(token: str = Depends(oauth2_scheme)) -> str:
    """Dependency: the username of the authenticated admin."""
    settings = get_settings()
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token inválido",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        logger.warning("Rejected admin token")
        raise credentials_exception
    username = payload.get("sub")
    if username is None or payload.get("role") != "admin":
        raise credentials_exception
    return username
