"""JWT validation for FastAPI routes."""

import os

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from web.deps import get_config

ALGORITHM = "HS256"
JWT_SECRET_ENV = "PACEFUL_JWT_SECRET"

security = HTTPBearer()


def _get_jwt_secret() -> str:
    secret = os.getenv(JWT_SECRET_ENV) or get_config().api.jwt_secret
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{JWT_SECRET_ENV} not configured",
        )
    return secret


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """Decode JWT and return the caller's identity."""
    token = credentials.credentials
    try:
        payload = jwt.decode(token, _get_jwt_secret(), algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing sub",
        )
    return {"id": user_id, "email": payload.get("email"), "name": payload.get("name")}
