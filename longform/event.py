from dataclasses import dataclass
from enum import Enum
from typing import Optional

from longform.definitions.innings import InningsEndReason
from longform.score import Score


class EventType(Enum):
    MATCH_STARTED = "ms"
    BALL_COMPLETED = "bc"
    OVER_COMPLETED = "oc"
    INNINGS_COMPLETED = "ic"
    LAST_HOUR_STARTED = "lh"
    MATCH_CONCLUDED = "mc"
    REJECT = "rj"


@dataclass
class MatchStartedEvent:
    batting_team_id: str
    bowling_team_id: str


@dataclass
class BallCompletedEvent:
    innings: int
    ball_score: Score
    striker_id: Optional[str] = None
    non_striker_id: Optional[str] = None
    bowler_id: Optional[str] = None


@dataclass
class InningsCompletedEvent:
    innings: int
    reason: InningsEndReason
    follow_on_enforced: Optional[bool] = None


@dataclass
class LastHourStartedEvent:
    overs: Optional[int] = None
