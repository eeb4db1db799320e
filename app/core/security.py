# app/core/security.py
import secrets
from typing import Optional

from fastapi import Security
from fastapi.security import APIKeyHeader
from passlib.context import CryptContext

from app.core.config import settings
from app.core.errors import AuthError
from app.utiles.logger import get_logger

logger = get_logger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


async def require_api_key(api_key: Optional[str] = Security(api_key_header)) -> str:
    """
    Resolve the calling principal from the X-API-Key header.

    With no keys configured, authentication is off and every caller is
    "anonymous".
    """
    if not settings.API_KEYS:
        return "anonymous"

    if not api_key:
        logger.warning("Rejected request without X-API-Key")
        raise AuthError("Authentication required")

    for index, known in enumerate(settings.API_KEYS):
        if secrets.compare_digest(api_key.encode(), known.encode()):
            return f"api-key-{index}"

    logger.warning("Rejected request with unknown X-API-Key")
    raise AuthError("Invalid API key")
