"""
Security utilities: password hashing and session tokens
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

# Token generation and validation
from jose import JWTError
from jose import jwt as jose_jwt

# Password hashing
from passlib.context import CryptContext

from .config import JWT_ALGORITHM, JWT_SECRET, TOKEN_LIFETIME_DAYS

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 4

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# SESSION TOKENS
# ============================================================================


def create_session_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token for ``user_id``

    Args:
        user_id: Database id of the authenticated user
        expires_delta: Token lifetime (default TOKEN_LIFETIME_DAYS days)
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=TOKEN_LIFETIME_DAYS))
    to_encode = {"id": user_id, "exp": expire}
    return jose_jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_session_token(token: str) -> Optional[dict[str, Any]]:
    """
    Verify and decode a session token

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jose_jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None
