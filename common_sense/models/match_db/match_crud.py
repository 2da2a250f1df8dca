import logging
import uuid
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from common_sense.core.database import atomic
from common_sense.core.errors import AuthorizationError, NotFoundError
from common_sense.models.match_db.match_db import ActiveMatchMember, Match
from common_sense.models.member_db.member_db import Member
from common_sense.models.orientation_db.orientation_crud import get_orientation_score
from common_sense.models.orientation_db.orientation_profile_db import OrientationProfile
from common_sense.schemas.match.match_base import MatchOut
from common_sense.schemas.members.member_base import MemberSummary
from common_sense.services.match_status import MatchStatus


logger = logging.getLogger(__name__)

DEFAULT_MIN_ORIENTATION_GAP = 0.5


def _involving(member_id: UUID):
    return or_(Match.member_a_id == member_id, Match.member_b_id == member_id)


def find_active_match(db: Session, member_id: UUID) -> Optional[Match]:
    return (
        db.query(Match)
        .filter(Match.status == MatchStatus.active.value, _involving(member_id))
        .order_by(Match.created_at.desc())
        .first()
    )


def _nearest_candidate(db: Session, member_id: UUID, score: float) -> Optional[Tuple[UUID, float]]:
    # nearest score first; equal distances fall back to member id so reruns agree
    stmt = (
        select(OrientationProfile.member_id, OrientationProfile.score)
        .where(OrientationProfile.member_id != member_id)
        .where(~exists().where(ActiveMatchMember.member_id == OrientationProfile.member_id))
        .order_by(func.abs(OrientationProfile.score - score), OrientationProfile.member_id)
        .limit(1)
    )
    row = db.execute(stmt).first()
    if row is None:
        return None
    return row.member_id, float(row.score)


def attempt_match(
    db: Session,
    member_id: UUID,
    score: float,
    min_gap: float = DEFAULT_MIN_ORIENTATION_GAP,
) -> Optional[UUID]:
    """Return the member's active match id, pairing them first if possible.

    A member who is already matched gets their existing match back. Otherwise
    the unmatched member with the closest orientation score is picked, and the
    pair is only created when their scores differ by at least ``min_gap``.
    ``None`` means nobody suitable is available right now.

    Two attempts racing for the same member both insert into
    ``match_active_members``; the loser's commit fails on the primary key, is
    rolled back, and answers with a plain lookup instead.
    """
    try:
        with atomic(db):
            existing = find_active_match(db, member_id)
            if existing is not None:
                return existing.id

            candidate = _nearest_candidate(db, member_id, score)
            if candidate is None:
                return None

            candidate_id, candidate_score = candidate
            gap = abs(candidate_score - score)
            if gap < min_gap:
                logger.info(
                    "Nearest candidate for member %s is only %.2f apart (minimum %.2f), not pairing",
                    member_id, gap, min_gap,
                )
                return None

            match_id = uuid.uuid4()
            db.add(Match(
                id=match_id,
                member_a_id=member_id,
                member_b_id=candidate_id,
                status=MatchStatus.active.value,
            ))
            db.flush()

            # fixed insert order, so two racing transactions never wait on each other crosswise
            for participant in sorted((member_id, candidate_id), key=str):
                db.add(ActiveMatchMember(member_id=participant, match_id=match_id))
                db.flush()
    except IntegrityError:
        logger.info("Member %s lost a matching race, reading back the winner", member_id)
        existing = find_active_match(db, member_id)
        return existing.id if existing is not None else None

    logger.info("Matched member %s with %s (gap %.2f)", member_id, candidate_id, gap)
    return match_id


def get_active_match(db: Session, member_id: UUID) -> Optional[MatchOut]:
    match = find_active_match(db, member_id)
    if match is None:
        return None

    partner_id = match.partner_of(member_id)
    partner = db.get(Member, partner_id)

    own_score = get_orientation_score(db, member_id)
    partner_score = get_orientation_score(db, partner_id)
    gap = None
    if own_score is not None and partner_score is not None:
        gap = abs(partner_score - own_score)

    return MatchOut(
        id=match.id,
        created_at=match.created_at,
        status=MatchStatus(match.status),
        partner=MemberSummary(id=partner.id, username=partner.username) if partner else None,
        orientation_gap=gap,
    )


def is_active_match_member(db: Session, match_id: UUID, member_id: UUID) -> bool:
    row = (
        db.query(Match.id)
        .filter(
            Match.id == match_id,
            Match.status == MatchStatus.active.value,
            _involving(member_id),
        )
        .first()
    )
    return row is not None


def ensure_active_match_member(db: Session, match_id: UUID, member_id: UUID):
    if not is_active_match_member(db, match_id, member_id):
        raise AuthorizationError("You do not have access to this conversation.")


def end_match(db: Session, match_id: UUID) -> Match:
    """Close an active match. Its messages stay readable in storage."""
    with atomic(db):
        match = db.get(Match, match_id)
        if match is None:
            raise NotFoundError("We could not find that match.")
        if match.status != MatchStatus.ended.value:
            match.status = MatchStatus.ended.value
            db.query(ActiveMatchMember).filter(
                ActiveMatchMember.match_id == match_id
            ).delete(synchronize_session=False)
            logger.info("Match %s ended", match_id)
    return match
