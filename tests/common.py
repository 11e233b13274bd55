import os
from typing import Optional

from longform.engine import MatchEngine
from longform.event import EventType
from longform.innings import end_innings
from longform.match import MatchState
from longform.util import balls_to_overs

RESOURCES_PATH = os.path.join(os.path.dirname(__file__), "resources")
TEST_CONFIG_PATH = os.path.join(RESOURCES_PATH, "test_config.cfg")

HOME_TEAM = "Leinster Lightning"
AWAY_TEAM = "Munster Reds"


def play_innings(state: MatchState, runs: int, wickets: int = 0, balls: int = 0):
    """stand in for the ball-entry flow: set the live counters and mirror them"""
    state.score = runs
    state.wickets = wickets
    state.total_balls = balls
    current = state.current_innings_score
    current.score = runs
    current.wickets = wickets
    current.overs = balls_to_overs(balls)


def complete_innings(
    state: MatchState,
    runs: int,
    wickets: int = 10,
    reason: str = "ALL_OUT",
    follow_on: Optional[bool] = None,
):
    play_innings(state, runs, wickets, balls=runs * 2)
    return end_innings(state, reason, follow_on)


def send_command(engine: MatchEngine, event_type: EventType, body: dict = None):
    command = {
        "event": event_type.value,
        "command_id": engine.message_id,
        "body": body or {},
    }
    return engine.on_command(command)


def bowl(engine: MatchEngine, score_texts: list) -> dict:
    message = None
    for score_text in score_texts:
        message = send_command(
            engine, EventType.BALL_COMPLETED, {"score_text": score_text}
        )
    return message
