from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from common_sense.core.config import Settings
from common_sense.core.database import get_db
from common_sense.core.errors import AuthenticationError
from common_sense.models.member_db.member_db import Member

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# Password hashing
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# Token generation
def create_access_token(member_id: UUID, settings: Settings, expires_delta: timedelta = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    to_encode = {"sub": str(member_id), "iat": now, "exp": now + expires_delta}
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


# Token verification
def verify_token(token: str, settings: Settings) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Your session has expired. Please sign in again.")


def get_current_member(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Member:
    if not token:
        raise AuthenticationError()

    payload = verify_token(token, settings)
    try:
        member_id = UUID(payload.get("sub") or "")
    except ValueError:
        raise AuthenticationError("Invalid session. Please sign in again.")

    member = db.query(Member).filter(Member.id == member_id).first()
    if not member:
        raise AuthenticationError("Invalid session. Please sign in again.")

    return member
