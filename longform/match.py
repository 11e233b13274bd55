from configparser import ConfigParser
from dataclasses import dataclass, field
from typing import List, Optional

from longform.definitions.innings import InningsEndReason
from longform.event import BallCompletedEvent

MAX_INNINGS = 4
MAX_WICKETS = 10
DEFAULT_FOLLOW_ON_MARGIN = 200
DEFAULT_LAST_HOUR_OVERS = 15
CONFIG_SECTION = "FIRST_CLASS"


@dataclass
class FirstClassConfig:
    follow_on_margin: int = DEFAULT_FOLLOW_ON_MARGIN
    last_hour_overs: int = DEFAULT_LAST_HOUR_OVERS

    @classmethod
    def from_config(cls, config: ConfigParser) -> "FirstClassConfig":
        return cls(
            follow_on_margin=config.getint(
                CONFIG_SECTION, "follow_on_margin", fallback=DEFAULT_FOLLOW_ON_MARGIN
            ),
            last_hour_overs=config.getint(
                CONFIG_SECTION, "last_hour_overs", fallback=DEFAULT_LAST_HOUR_OVERS
            ),
        )


@dataclass
class MatchAdjustments:
    is_last_hour: bool = False
    last_hour_overs_remaining: int = 0
    day_number: Optional[int] = None
    session: Optional[str] = None
    declared: bool = False
    concluded: bool = False


@dataclass
class InningsScore:
    innings: int
    team_id: str
    score: int = 0
    wickets: int = 0
    overs: str = "0.0"
    is_complete: bool = False
    end_reason: Optional[InningsEndReason] = None

    def snapshot(self) -> dict:
        return {
            "innings": self.innings,
            "team": self.team_id,
            "score": self.score,
            "wickets": self.wickets,
            "overs": self.overs,
            "is_complete": self.is_complete,
            "end_reason": self.end_reason.name if self.end_reason else None,
        }


@dataclass
class MatchState:
    batting_team_id: str
    bowling_team_id: str
    innings: int = 1
    score: int = 0
    wickets: int = 0
    total_balls: int = 0
    striker_id: Optional[str] = None
    non_striker_id: Optional[str] = None
    bowler_id: Optional[str] = None
    history: List[BallCompletedEvent] = field(default_factory=list)
    innings_scores: List[InningsScore] = field(default_factory=list)
    target: Optional[int] = None
    test_config: Optional[FirstClassConfig] = None
    adjustments: MatchAdjustments = field(default_factory=MatchAdjustments)
    is_completed: bool = False
    is_follow_on_enforced: bool = False

    @property
    def follow_on_margin(self) -> int:
        if self.test_config is None:
            return DEFAULT_FOLLOW_ON_MARGIN
        return self.test_config.follow_on_margin

    @property
    def current_innings_score(self) -> Optional[InningsScore]:
        return innings_score_by_number(self, self.innings)

    def snapshot(self) -> dict:
        output = {
            "innings": self.innings,
            "batting_team": self.batting_team_id,
            "bowling_team": self.bowling_team_id,
            "runs": self.score,
            "wickets": self.wickets,
            "overs": self.current_innings_score.overs
            if self.current_innings_score
            else "0.0",
            "target": self.target,
            "is_completed": self.is_completed,
            "follow_on": self.is_follow_on_enforced,
            "last_hour": self.adjustments.is_last_hour,
        }
        if self.adjustments.is_last_hour:
            output["last_hour_overs"] = self.adjustments.last_hour_overs_remaining
        return output

    def overview(self) -> dict:
        return {
            "snapshot": self.snapshot(),
            "inningses": [i.snapshot() for i in self.innings_scores],
        }


def innings_score_by_number(
    state: MatchState, innings_num: int
) -> Optional[InningsScore]:
    for innings_score in state.innings_scores:
        if innings_score.innings == innings_num:
            return innings_score
    return None


def new_match(
    batting_team_id: str,
    bowling_team_id: str,
    test_config: Optional[FirstClassConfig] = None,
) -> MatchState:
    if batting_team_id == bowling_team_id:
        raise ValueError(
            f"a match needs two distinct teams, got {batting_team_id} twice"
        )
    state = MatchState(
        batting_team_id=batting_team_id,
        bowling_team_id=bowling_team_id,
        test_config=test_config,
    )
    state.innings_scores.append(InningsScore(1, batting_team_id))
    return state
