from dataclasses import dataclass
from typing import Optional

from longform.definitions.innings import ResultType
from longform.innings import (
    aggregate_runs,
    batted_team_ids,
    current_innings_started,
    target_if_chase,
)
from longform.match import MAX_INNINGS, MAX_WICKETS, MatchState, innings_score_by_number
from longform.util import LOGGER


@dataclass(frozen=True)
class MatchResult:
    result_type: ResultType
    winner_team_id: Optional[str] = None
    margin: Optional[int] = None

    def margin_text(self) -> Optional[str]:
        if self.margin is None:
            return None
        if self.result_type == ResultType.INNINGS_WIN:
            return f"innings and {pluralise(self.margin, 'run')}"
        if self.result_type == ResultType.WICKETS_WIN:
            return pluralise(self.margin, "wicket")
        if self.result_type == ResultType.RUNS_WIN:
            return pluralise(self.margin, "run")
        return None

    def description(self) -> dict:
        return {
            "result": self.result_type.name,
            "winner": self.winner_team_id,
            "margin": self.margin,
            "margin_text": self.margin_text(),
        }


def pluralise(count: int, noun: str) -> str:
    suffix = "" if count == 1 else "s"
    return f"{count} {noun}{suffix}"


def completed_innings_count(state: MatchState, team_id: str) -> int:
    return len(
        [i for i in state.innings_scores if i.team_id == team_id and i.is_complete]
    )


def innings_victory(state: MatchState) -> Optional[MatchResult]:
    team_ids = batted_team_ids(state)
    if len(team_ids) < 2:
        return None
    team_a, team_b = team_ids[0], team_ids[1]
    completed_a = completed_innings_count(state, team_a)
    completed_b = completed_innings_count(state, team_b)
    runs_a = aggregate_runs(state, team_a)
    runs_b = aggregate_runs(state, team_b)
    if completed_a == 1 and completed_b == 2 and runs_a > runs_b:
        winner, margin = team_a, runs_a - runs_b
    elif completed_b == 1 and completed_a == 2 and runs_b > runs_a:
        winner, margin = team_b, runs_b - runs_a
    else:
        return None
    # once the winner has faced a ball of its second innings it is a chase
    if state.batting_team_id == winner and current_innings_started(state):
        return None
    return MatchResult(ResultType.INNINGS_WIN, winner, margin)


def fourth_innings_result(state: MatchState) -> Optional[MatchResult]:
    if state.innings != MAX_INNINGS:
        return None
    target = target_if_chase(state)
    if target is None:
        return None
    # reaching the target on the ball that takes the 10th wicket is still a
    # wickets win, by 0 wickets
    if state.score >= target:
        return MatchResult(
            ResultType.WICKETS_WIN, state.batting_team_id, MAX_WICKETS - state.wickets
        )
    final_innings = innings_score_by_number(state, MAX_INNINGS)
    innings_over = (
        final_innings is not None and final_innings.is_complete
    ) or state.wickets >= MAX_WICKETS
    if not innings_over:
        return None
    if state.score < target - 1:
        return MatchResult(
            ResultType.RUNS_WIN, state.bowling_team_id, target - 1 - state.score
        )
    return MatchResult(ResultType.TIE)


def check_for_result(state: MatchState) -> Optional[MatchResult]:
    """
    Innings victory is checked before the 4th innings chase, and a concluded
    match is only a draw if neither of those produced a result.
    """
    if len(batted_team_ids(state)) < 2:
        return None
    result = innings_victory(state)
    if result is None:
        result = fourth_innings_result(state)
    if result is None and state.adjustments.concluded:
        result = MatchResult(ResultType.DRAW)
    if result is not None:
        LOGGER.info(f"match result: {result.description()}")
    return result
