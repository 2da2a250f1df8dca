import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from common_sense.core.database import atomic
from common_sense.core.errors import ConflictError
from common_sense.core.security import hash_password
from common_sense.models.member_db.member_db import Member
from common_sense.schemas.members.member_base import MemberCreate


logger = logging.getLogger(__name__)


def _find_conflict(db: Session, member: MemberCreate) -> Optional[ConflictError]:
    if get_member_by_email(db, member.email):
        return ConflictError("An account with this email already exists.")
    if get_member_by_username(db, member.username):
        return ConflictError("That display name is already taken.")
    return None


def create_member(db: Session, member: MemberCreate) -> Member:
    conflict = _find_conflict(db, member)
    if conflict:
        raise conflict

    db_member = Member(
        email=member.email.lower(),
        username=member.username.strip(),
        hashed_password=hash_password(member.password),
    )
    try:
        with atomic(db):
            db.add(db_member)
    except IntegrityError as exc:
        # a concurrent registration took the email or name after the check above
        logger.info("Registration for %s lost a uniqueness race", member.email.lower())
        raise _find_conflict(db, member) or ConflictError(
            "An account with this email or display name already exists."
        ) from exc
    db.refresh(db_member)
    logger.info("Registered member %s", db_member.id)
    return db_member


def get_member_by_email(db: Session, email: str) -> Optional[Member]:
    if not email:
        return None
    return db.query(Member).filter(Member.email == email.lower()).first()


def get_member_by_username(db: Session, username: str) -> Optional[Member]:
    if not username:
        return None
    return db.query(Member).filter(func.lower(Member.username) == username.strip().lower()).first()


def get_member_by_id(db: Session, member_id: UUID) -> Optional[Member]:
    return db.query(Member).filter(Member.id == member_id).first()
