import pytest

from longform.engine import MatchEngine
from longform.event import EventType
from longform.match import new_match
from longform.util import load_config
from common import AWAY_TEAM, HOME_TEAM, TEST_CONFIG_PATH, send_command


class RecordingListener:
    def __init__(self):
        self.messages = []

    def on_message(self, message: dict):
        self.messages.append(message)


@pytest.fixture()
def config():
    return load_config(TEST_CONFIG_PATH)


@pytest.fixture()
def match_state():
    return new_match(HOME_TEAM, AWAY_TEAM)


@pytest.fixture()
def engine(config):
    return MatchEngine(config)


@pytest.fixture()
def listener(engine):
    recording_listener = RecordingListener()
    engine.register_listener(recording_listener)
    return recording_listener


@pytest.fixture()
def started_engine(engine):
    send_command(
        engine,
        EventType.MATCH_STARTED,
        {"batting_team": HOME_TEAM, "bowling_team": AWAY_TEAM},
    )
    return engine
