# Importing every table module registers it on Base.metadata
from common_sense.models.member_db.member_db import Member  # noqa: F401
from common_sense.models.orientation_db.opinion_question_db import OpinionQuestion  # noqa: F401
from common_sense.models.orientation_db.opinion_response_db import OpinionResponse  # noqa: F401
from common_sense.models.orientation_db.orientation_profile_db import OrientationProfile  # noqa: F401
from common_sense.models.match_db.match_db import Match, ActiveMatchMember  # noqa: F401
from common_sense.models.message_db.match_message_db import MatchMessage  # noqa: F401
from common_sense.models.message_db.direct_message_db import DirectMessage  # noqa: F401
