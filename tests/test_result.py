from longform.definitions.innings import ResultType
from longform.event import BallCompletedEvent
from longform.innings import end_innings
from longform.match import MatchState
from longform.result import MatchResult, check_for_result
from longform.score import Score
from common import AWAY_TEAM, HOME_TEAM, complete_innings, play_innings


def set_up_chase(state: MatchState):
    """away side chase 71 in the 4th innings"""
    complete_innings(state, 220)
    complete_innings(state, 300)
    complete_innings(state, 150)
    assert state.target == 71


def test_no_result_with_one_team(match_state: MatchState):
    play_innings(match_state, 300, 4)
    assert check_for_result(match_state) is None
    match_state.adjustments.concluded = True
    assert check_for_result(match_state) is None


def test_no_result_mid_match(match_state: MatchState):
    complete_innings(match_state, 300)
    play_innings(match_state, 150, 4)
    assert check_for_result(match_state) is None


def test_innings_victory(match_state: MatchState):
    complete_innings(match_state, 400)
    complete_innings(match_state, 100, follow_on=True)
    complete_innings(match_state, 150)
    result = check_for_result(match_state)
    assert result == MatchResult(ResultType.INNINGS_WIN, HOME_TEAM, 150)
    assert result.margin_text() == "innings and 150 runs"


def test_innings_victory_for_side_batting_second(match_state: MatchState):
    complete_innings(match_state, 100)
    complete_innings(match_state, 400)
    complete_innings(match_state, 150)
    result = check_for_result(match_state)
    assert result.result_type == ResultType.INNINGS_WIN
    assert result.winner_team_id == AWAY_TEAM
    assert result.margin == 150


def test_no_innings_victory_when_trailing(match_state: MatchState):
    complete_innings(match_state, 300)
    complete_innings(match_state, 100, follow_on=True)
    complete_innings(match_state, 250)
    assert check_for_result(match_state) is None


def test_target_reached_after_follow_on(match_state: MatchState):
    complete_innings(match_state, 300)
    complete_innings(match_state, 90, follow_on=True)
    complete_innings(match_state, 220)
    assert match_state.target == 11
    match_state.history.append(BallCompletedEvent(4, Score.parse("6")))
    play_innings(match_state, 11, 0, 2)
    result = check_for_result(match_state)
    assert result == MatchResult(ResultType.WICKETS_WIN, HOME_TEAM, 10)
    assert result.margin_text() == "10 wickets"


def test_wickets_win_single_wicket(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 72, 9, 200)
    result = check_for_result(match_state)
    assert result.result_type == ResultType.WICKETS_WIN
    assert result.winner_team_id == AWAY_TEAM
    assert result.margin_text() == "1 wicket"


def test_runs_win(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 50, 10, 120)
    result = check_for_result(match_state)
    assert result == MatchResult(ResultType.RUNS_WIN, HOME_TEAM, 20)
    assert result.margin_text() == "20 runs"


def test_runs_win_after_innings_closed(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 69, 7, 300)
    assert check_for_result(match_state) is None
    end_innings(match_state, "TIME")
    result = check_for_result(match_state)
    assert result == MatchResult(ResultType.RUNS_WIN, HOME_TEAM, 1)
    assert result.margin_text() == "1 run"


def test_tie(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 70, 10, 150)
    result = check_for_result(match_state)
    assert result == MatchResult(ResultType.TIE)
    assert result.winner_team_id is None
    assert result.margin_text() is None


def test_tie_needs_completed_innings(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 70, 6, 150)
    assert check_for_result(match_state) is None
    end_innings(match_state, "TIME")
    assert check_for_result(match_state) == MatchResult(ResultType.TIE)


def test_draw_when_concluded(match_state: MatchState):
    complete_innings(match_state, 300)
    complete_innings(match_state, 250)
    play_innings(match_state, 120, 3)
    match_state.adjustments.concluded = True
    result = check_for_result(match_state)
    assert result == MatchResult(ResultType.DRAW)
    assert result.description() == {
        "result": "DRAW",
        "winner": None,
        "margin": None,
        "margin_text": None,
    }


def test_draw_during_chase(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 40, 8, 200)
    match_state.adjustments.concluded = True
    assert check_for_result(match_state).result_type == ResultType.DRAW


def test_chase_result_beats_concluded(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 71, 8, 200)
    match_state.adjustments.concluded = True
    assert check_for_result(match_state).result_type == ResultType.WICKETS_WIN


def test_single_result_per_call(match_state: MatchState):
    complete_innings(match_state, 300)
    complete_innings(match_state, 90, follow_on=True)
    complete_innings(match_state, 220)
    results = []
    for runs in range(0, 12):
        play_innings(match_state, runs, 0, runs)
        results.append(check_for_result(match_state))
    assert results[:11] == [None] * 11
    # aggregate lead is 1 here too but the chase has started
    assert results[11] == MatchResult(ResultType.WICKETS_WIN, HOME_TEAM, 10)


def test_aggregate_after_final_innings_closed(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 60, 10, 150)
    end_innings(match_state, "ALL_OUT")
    assert match_state.target == 71
    assert check_for_result(match_state) == MatchResult(
        ResultType.RUNS_WIN, HOME_TEAM, 10
    )


def test_target_reached_with_last_wicket(match_state: MatchState):
    set_up_chase(match_state)
    play_innings(match_state, 72, 10, 200)
    result = check_for_result(match_state)
    assert result == MatchResult(ResultType.WICKETS_WIN, AWAY_TEAM, 0)
    assert result.margin_text() == "0 wickets"
