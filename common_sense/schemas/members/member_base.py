from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from common_sense.schemas.common.camel import CamelModel


class MemberCreate(CamelModel):
    email: EmailStr
    username: str = Field(
        min_length=3,
        max_length=40,
        description="Display name shown to other members",
    )
    password: str = Field(min_length=8)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class MemberSummary(CamelModel):
    id: UUID
    username: str


class MemberOut(MemberSummary):
    email: str
    created_at: datetime


class AuthOut(CamelModel):
    member: MemberOut
    token: str
    token_type: str = "bearer"


class CommunityMemberOut(MemberSummary):
    orientation_score: Optional[float] = None
    created_at: datetime
