from typing import NamedTuple, Optional, Tuple, Union

from longform.definitions.innings import InningsEndReason, parse_end_reason
from longform.match import (
    DEFAULT_LAST_HOUR_OVERS,
    MAX_INNINGS,
    MAX_WICKETS,
    InningsScore,
    MatchState,
    innings_score_by_number,
)
from longform.util import LOGGER

LAST_HOUR_SESSION = "Evening"


class LeadStatus(NamedTuple):
    leading_team_id: Optional[str]
    lead_runs: int


NO_LEAD = LeadStatus(None, 0)


def aggregate_runs(
    state: MatchState, team_id: str, include_current_innings: bool = True
) -> int:
    completed_runs = sum(
        i.score
        for i in state.innings_scores
        if i.team_id == team_id and i.is_complete
    )
    if include_current_innings and state.batting_team_id == team_id:
        current = state.current_innings_score
        # a closed final innings is already counted in completed_runs
        if current is None or not current.is_complete:
            return completed_runs + state.score
    return completed_runs


def runs_before_current_innings(state: MatchState, team_id: str) -> int:
    return sum(
        i.score
        for i in state.innings_scores
        if i.team_id == team_id and i.is_complete and i.innings < state.innings
    )


def batted_team_ids(state: MatchState) -> list:
    """distinct teams with an innings record, in match innings order"""
    team_ids = []
    for innings_score in sorted(state.innings_scores, key=lambda i: i.innings):
        if innings_score.team_id not in team_ids:
            team_ids.append(innings_score.team_id)
    return team_ids


def match_team_ids(state: MatchState) -> Optional[Tuple[str, str]]:
    """
    (team that batted first, team that batted second), keyed off the records for
    innings 1 and 2. Before innings 2 exists the bowling side is taken as the
    second team. None when two distinct teams can't be identified.
    """
    first = innings_score_by_number(state, 1)
    second = innings_score_by_number(state, 2)
    first_id = first.team_id if first else state.batting_team_id
    if second:
        second_id = second.team_id
    elif first_id == state.batting_team_id:
        second_id = state.bowling_team_id
    else:
        second_id = state.batting_team_id
    if not first_id or not second_id or first_id == second_id:
        return None
    return first_id, second_id


def current_innings_started(state: MatchState) -> bool:
    if state.score > 0 or state.wickets > 0 or state.total_balls > 0:
        return True
    return any(ball.innings == state.innings for ball in state.history)


def lead_status(state: MatchState) -> LeadStatus:
    team_ids = batted_team_ids(state)
    if len(team_ids) < 2:
        return NO_LEAD
    team_one, team_two = team_ids[0], team_ids[1]
    diff = aggregate_runs(state, team_one) - aggregate_runs(state, team_two)
    if diff > 0:
        return LeadStatus(team_one, diff)
    if diff < 0:
        return LeadStatus(team_two, -diff)
    return NO_LEAD


def target_if_chase(state: MatchState) -> Optional[int]:
    if state.innings < MAX_INNINGS:
        return None
    fielding_total = runs_before_current_innings(state, state.bowling_team_id)
    batting_total_prior = runs_before_current_innings(state, state.batting_team_id)
    return max(1, fielding_total - batting_total_prior + 1)


def can_end_innings(state: MatchState) -> bool:
    if state.wickets >= MAX_WICKETS:
        return True
    if state.innings == MAX_INNINGS:
        target = target_if_chase(state)
        if target is not None and state.score >= target:
            return True
    return False


def follow_on_lead(state: MatchState) -> Optional[int]:
    """first innings lead of the side that batted first, None until both have batted"""
    first = innings_score_by_number(state, 1)
    second = innings_score_by_number(state, 2)
    if not first or not second or first.team_id == second.team_id:
        return None
    return first.score - second.score


def is_follow_on_eligible(state: MatchState) -> bool:
    num_completed = len([i for i in state.innings_scores if i.is_complete])
    if num_completed != 2:
        return False
    lead = follow_on_lead(state)
    if lead is None:
        return False
    return lead >= state.follow_on_margin


def next_innings_batting_team_id(
    state: MatchState, follow_on_enforced: bool = False
) -> Optional[str]:
    team_ids = match_team_ids(state)
    if team_ids is None:
        return None
    current = state.batting_team_id
    other = team_ids[1] if current == team_ids[0] else team_ids[0]
    if state.innings == 1:
        return other
    if state.innings == 2:
        return current if follow_on_enforced else other
    if state.innings == 3:
        return other
    return None


def end_innings(
    state: MatchState,
    reason: Union[InningsEndReason, str],
    follow_on_enforced: Optional[bool] = None,
) -> MatchState:
    """
    Close the current innings and move the match on to the next one. The state is
    mutated in place and returned. Passing follow_on_enforced overrides the flag
    already held on the state. If two distinct teams can't be identified the state
    is returned untouched; callers check next_innings_batting_team_id first.
    """
    reason = parse_end_reason(reason)
    if follow_on_enforced is None:
        follow_on_enforced = state.is_follow_on_enforced
    next_innings_num = state.innings + 1
    next_batting_team = None
    if next_innings_num <= MAX_INNINGS:
        next_batting_team = next_innings_batting_team_id(state, follow_on_enforced)
        if next_batting_team is None:
            LOGGER.error(
                f"cannot identify two distinct teams to continue from innings "
                f"{state.innings}: batting={state.batting_team_id} "
                f"bowling={state.bowling_team_id}"
            )
            return state
    state.is_follow_on_enforced = follow_on_enforced

    current = state.current_innings_score
    if current is not None and not current.is_complete:
        current.is_complete = True
        current.end_reason = reason
    if reason == InningsEndReason.DECLARED:
        state.adjustments.declared = True
    LOGGER.info(
        f"innings {state.innings} of {state.batting_team_id} ended "
        f"{state.score}-{state.wickets} ({reason.name})"
    )

    if next_batting_team is None:
        state.is_completed = True
        LOGGER.info("final innings complete, match marked as completed")
        return state

    next_bowling_team = (
        state.bowling_team_id
        if next_batting_team == state.batting_team_id
        else state.batting_team_id
    )
    state.innings = next_innings_num
    state.batting_team_id = next_batting_team
    state.bowling_team_id = next_bowling_team
    state.score = 0
    state.wickets = 0
    state.total_balls = 0
    state.striker_id = None
    state.non_striker_id = None
    state.bowler_id = None
    state.innings_scores.append(InningsScore(next_innings_num, next_batting_team))
    state.target = target_if_chase(state)
    return state


def trigger_last_hour(state: MatchState, overs: Optional[int] = None) -> MatchState:
    if overs is None:
        overs = (
            state.test_config.last_hour_overs
            if state.test_config
            else DEFAULT_LAST_HOUR_OVERS
        )
    adjustments = state.adjustments
    adjustments.is_last_hour = True
    adjustments.last_hour_overs_remaining = overs
    adjustments.day_number = adjustments.day_number or 1
    adjustments.session = LAST_HOUR_SESSION
    return state


def decrement_last_hour(state: MatchState) -> MatchState:
    adjustments = state.adjustments
    if not adjustments.is_last_hour:
        return state
    if adjustments.last_hour_overs_remaining <= 0:
        return state
    adjustments.last_hour_overs_remaining -= 1
    adjustments.session = adjustments.session or LAST_HOUR_SESSION
    return state
