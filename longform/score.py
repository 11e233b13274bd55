import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Score:
    """runs and wickets from a single delivery"""

    runs_off_bat: int = 0
    wide_runs: int = 0
    no_ball_runs: int = 0
    byes: int = 0
    leg_byes: int = 0
    wickets: int = 0

    SCORE_PATTERN = re.compile("(?P<num>[0-9]+)?(?P<mod>[a-zA-Z]+)?")

    @property
    def extra_runs(self) -> int:
        return self.wide_runs + self.no_ball_runs + self.byes + self.leg_byes

    @property
    def total_runs(self) -> int:
        return self.runs_off_bat + self.extra_runs

    def is_valid_delivery(self) -> bool:
        return (self.wide_runs + self.no_ball_runs) == 0

    @classmethod
    def parse(cls, score_text: str) -> "Score":
        """
        "." dot ball, "3" runs off the bat, "W" wicket, "1W" run then wicket,
        "w"/"2w" wides, "nb"/"3nb" no ball (the extra plus runs off the bat),
        "2b" byes, "1lb" leg byes
        """
        if score_text == ".":
            return cls()
        if score_text == "W":
            return cls(wickets=1)
        if score_text == "w":
            return cls(wide_runs=1)
        if score_text == "nb":
            return cls(no_ball_runs=1)
        groups = cls.SCORE_PATTERN.fullmatch(score_text or "")
        if not groups or groups.group("num") is None:
            raise ValueError(f"invalid score text {score_text}")
        runs_scored = int(groups.group("num"))
        modifier = groups.group("mod")
        if not modifier:
            return cls(runs_off_bat=runs_scored)
        if modifier == "W":
            return cls(runs_off_bat=runs_scored, wickets=1)
        elif modifier == "w":
            return cls(wide_runs=runs_scored)
        elif modifier == "nb":
            return cls(runs_off_bat=max(0, runs_scored - 1), no_ball_runs=1)
        elif modifier == "b":
            return cls(byes=runs_scored)
        elif modifier == "lb":
            return cls(leg_byes=runs_scored)
        raise ValueError(f"Unknown modifier: {modifier}")
