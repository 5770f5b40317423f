"""
Authentication routes.
"""
from fastapi import APIRouter, HTTPException, status

from repufrenos.auth import create_access_token, verify_credentials
from repufrenos.log import get_logger
from repufrenos.schemas.admin import LoginRequest, Token

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest):
    """
    Exchange admin credentials for a bearer token.
    """
    if not verify_credentials(credentials.username, credentials.password):
        logger.warning("Failed admin login for %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales inválidas."
        )

    return Token(access_token=create_access_token(credentials.username), token_type="bearer")
