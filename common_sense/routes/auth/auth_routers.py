from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from common_sense.core.config import Settings
from common_sense.core.database import get_db
from common_sense.core.errors import AuthenticationError
from common_sense.core.security import (
    create_access_token,
    get_current_member,
    get_settings,
    verify_password,
)
from common_sense.models.member_db.member_crud import create_member, get_member_by_email
from common_sense.models.member_db.member_db import Member
from common_sense.schemas.members.member_base import AuthOut, LoginRequest, MemberCreate, MemberOut

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@auth_router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: MemberCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    member = create_member(db, payload)
    token = create_access_token(member.id, settings)
    return AuthOut(member=MemberOut.model_validate(member), token=token)


@auth_router.post("/login", response_model=AuthOut)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    member = get_member_by_email(db, payload.email)
    if not member or not verify_password(payload.password, member.hashed_password):
        raise AuthenticationError("Incorrect email or password.")

    token = create_access_token(member.id, settings)
    return AuthOut(member=MemberOut.model_validate(member), token=token)


@auth_router.get("/me", response_model=MemberOut)
def get_me(current_member: Member = Depends(get_current_member)):
    return current_member
