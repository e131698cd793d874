"""
Authentication Utility - JWT verification.

Sign-in and sign-up live with the external identity provider. This
module only verifies the bearer tokens it issues and resolves the
caller's role from the user_roles table.

Provides:
- JWT token verification (and minting, for local tooling and tests)
- FastAPI dependencies for protected routes
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import text

from app.core.config import get_settings
from app.db.postgres import get_db_session

logger = logging.getLogger(__name__)

settings = get_settings()

# Bearer token extractor (auto_error off so a missing header is a 401, not 403)
bearer_scheme = HTTPBearer(auto_error=False)

DEFAULT_ROLE = "student"


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT shaped like the identity provider's."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode.update({"exp": expire})
    if settings.jwt_audience and "aud" not in to_encode:
        to_encode["aud"] = settings.jwt_audience
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_aud": bool(settings.jwt_audience)}
        )
    except JWTError as e:
        logger.debug("Token rejected: %s", e)
        return None


def get_user_role(user_id: str) -> str:
    """
    Resolve role from user_roles. Users without a row are students,
    the identity provider's sign-up hook assigns that role by default.
    """
    with get_db_session() as db:
        result = db.execute(
            text("SELECT role FROM user_roles WHERE user_id = :id"),
            {"id": user_id}
        )
        roles = {row[0] for row in result.fetchall()}

    if "admin" in roles:
        return "admin"
    return DEFAULT_ROLE


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    return {"user_id": str(user_id), "email": payload.get("email"), "role": get_user_role(str(user_id))}


async def get_current_student(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require student role."""
    if user["role"] != "student":
        raise HTTPException(status_code=403, detail="Students only")
    return user


async def get_current_admin(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require admin role."""
    if user["role"] != "admin":
        raise HTTPException(status_code=403, detail="Admins only")
    return user
