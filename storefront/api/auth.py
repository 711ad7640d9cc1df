"""Authentication endpoints."""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
import bcrypt
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.database import get_db
from storefront.models.user import AdminUser

logger = logging.getLogger(__name__)

router = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)


class LoginRequest(BaseModel):
    """Login request body."""

    email: Optional[str] = None
    password: Optional[str] = None


class TokenData(BaseModel):
    """Identity carried by an access token."""

    id: int
    email: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password."""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hash password."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> Optional[TokenData]:
    """Return the token identity, or None if the token is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    user_id = payload.get("id")
    email = payload.get("email")
    if user_id is None or email is None:
        return None
    try:
        return TokenData(id=user_id, email=email)
    except PydanticValidationError:
        return None


def authenticate_user(db: Session, email: str, password: str) -> Optional[AdminUser]:
    """Authenticate admin user."""
    user = db.query(AdminUser).filter(AdminUser.email == email).first()
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    if not user.is_active:
        return None
    return user


def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenData:
    """Get the admin identity from the bearer token."""
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    identity = decode_access_token(credentials.credentials)
    if identity is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")
    return identity


@router.post("/login")
def login(
    credentials: Optional[LoginRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """Admin login."""
    if credentials is None or not credentials.email or not credentials.password:
        raise HTTPException(status_code=400, detail="Email and password required")

    try:
        user = authenticate_user(db, credentials.email, credentials.password)
    except SQLAlchemyError as e:
        logger.error(f"Error looking up admin user: {e}")
        raise HTTPException(status_code=500, detail="Database error")

    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": user.email, "id": user.id, "email": user.email})
    logger.info(f"Admin {user.email} signed in")
    return {
        "success": True,
        "token": access_token,
        "user": {
            "id": user.id,
            "email": user.email,
            "name": user.name,
        },
    }


@router.get("/verify")
def verify(current_admin: TokenData = Depends(get_current_admin)):
    """Check that the bearer token is still valid."""
    return {
        "success": True,
        "user": {
            "id": current_admin.id,
            "email": current_admin.email,
        },
    }
