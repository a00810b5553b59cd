# Authentication Dependencies for the Linkp Platform
# Provides dependencies for getting the current user from JWT token

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import jwt, JWTError
from datetime import datetime, timedelta
from typing import Optional
from pydantic import BaseModel

from config.app_config import JWT_SECRET_KEY, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from core.errors import AuthError
from database.config import get_db
from database.models import User


# auto_error is off so a missing header is reported as 401 like any other bad session
security = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    email: Optional[str] = None


def create_access_token(email: str, expires_minutes: Optional[int] = None) -> str:
    """Issue a signed session token for `email`."""
    expire = datetime.utcnow() + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": email, "email": email, "exp": expire}
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[TokenData]:
    """Decode and validate JWT token."""
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None
    email: str = payload.get("email") or payload.get("sub")
    if email is None:
        return None
    return TokenData(email=email)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Validate JWT token and return current user.
    This is the core authentication dependency.
    """
    if credentials is None:
        raise AuthError("Not authenticated")

    token_data = decode_access_token(credentials.credentials)
    if token_data is None:
        raise AuthError("Invalid authentication credentials")

    user = db.query(User).filter(User.email == token_data.email).first()
    if user is None:
        raise AuthError("User not found")

    return user
