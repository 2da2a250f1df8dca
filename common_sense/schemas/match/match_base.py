from datetime import datetime
from typing import Optional
from uuid import UUID

from common_sense.schemas.common.camel import CamelModel
from common_sense.schemas.members.member_base import MemberSummary
from common_sense.services.match_status import MatchStatus


class MatchOut(CamelModel):
    id: UUID
    created_at: datetime
    status: MatchStatus
    partner: Optional[MemberSummary] = None
    orientation_gap: Optional[float] = None


class ActiveMatchOut(CamelModel):
    match: Optional[MatchOut] = None
    orientation_score: Optional[float] = None
