from enum import Enum


class MatchStatus(str, Enum):
    active = "active"
    ended = "ended"
