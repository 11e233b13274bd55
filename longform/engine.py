from typing import Optional

import longform.util as util
from longform.context import Context
from longform.definitions.innings import InningsEndReason, parse_end_reason
from longform.error import EngineError, RejectReason
from longform.event import (
    BallCompletedEvent,
    EventType,
    InningsCompletedEvent,
    LastHourStartedEvent,
    MatchStartedEvent,
)
from longform.innings import (
    can_end_innings,
    decrement_last_hour,
    end_innings,
    follow_on_lead,
    lead_status,
    next_innings_batting_team_id,
    trigger_last_hour,
)
from longform.match import (
    MAX_INNINGS,
    MAX_WICKETS,
    FirstClassConfig,
    MatchState,
    new_match,
)
from longform.result import MatchResult, check_for_result
from longform.score import Score
from longform.util import LOGGER


class MatchEngine(Context):
    """
    Receives a stream of scoring commands for a multi-innings match, applies each
    one to the live MatchState and sends out a corresponding message that other
    applications (scoreboard, result reporter) can listen for
    """

    def __init__(self, config=None):
        super().__init__()
        self.config = util.load_config(config)
        self.first_class_config = FirstClassConfig.from_config(self.config)
        self.message_id = 0
        self.current_match: Optional[MatchState] = None
        self.result: Optional[MatchResult] = None
        self._commands = []
        self._messages = []
        self._listeners = []

        self.add_handler(EventType.MATCH_STARTED, self.handle_match_started)
        self.add_handler(EventType.BALL_COMPLETED, self.handle_ball_completed)
        self.add_handler(EventType.OVER_COMPLETED, self.handle_over_completed)
        self.add_handler(EventType.INNINGS_COMPLETED, self.handle_innings_completed)
        self.add_handler(EventType.LAST_HOUR_STARTED, self.handle_last_hour_started)
        self.add_handler(EventType.MATCH_CONCLUDED, self.handle_match_concluded)

    def on_command(self, command: dict) -> dict:
        try:
            message = self.process_command(command)
        except EngineError as e:
            message = e.compile()
            message["event"] = EventType.REJECT.value
        message["message_id"] = self.message_id
        self.message_id += 1
        self._messages.append(message)
        self.send_message(message)
        return message

    def process_command(self, command: dict) -> dict:
        try:
            event_type_code = command["event"]
            command_id = command["command_id"]
        except KeyError:
            msg = f"no event or command_id specified on incoming command {command}"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        if command_id != self.message_id:
            msg = (
                f"command_id out of sequence with engine: command={command_id}, "
                f"engine={self.message_id}"
            )
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        self._commands.append(command)
        try:
            event_type = EventType(event_type_code)
        except ValueError:
            msg = f"invalid event type {event_type_code}"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        resp = self.handle_event(event_type, command.get("body") or {})
        return self.create_message(event_type, resp)

    def snapshot(self) -> dict:
        if not self.current_match:
            return {}
        output = self.current_match.snapshot()
        leader = lead_status(self.current_match)
        output["leading_team"] = leader.leading_team_id
        output["lead"] = leader.lead_runs
        output["can_end_innings"] = can_end_innings(self.current_match)
        output["result"] = self.result.description() if self.result else None
        return output

    def register_listener(self, listener):
        self._listeners.append(listener)

    def send_message(self, message: dict):
        for listener in self._listeners:
            listener.on_message(message)

    def create_message(self, event_type: EventType, body: dict) -> dict:
        return {"event": event_type.value, "body": body}

    def require_match_in_progress(self) -> MatchState:
        if not self.current_match:
            msg = "no match has been started"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.ILLEGAL_OPERATION)
        if self.current_match.is_completed:
            msg = "match is already completed"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.ILLEGAL_OPERATION)
        return self.current_match

    def handle_match_started(self, payload: dict) -> dict:
        if self.current_match and not self.current_match.is_completed:
            msg = (
                "current match is still in progress, cannot start a new match "
                "until it is completed"
            )
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.ILLEGAL_OPERATION)
        try:
            mse = MatchStartedEvent(payload["batting_team"], payload["bowling_team"])
        except KeyError:
            msg = "must specify batting_team and bowling_team on new match command"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        return self.on_match_started(mse)

    def handle_ball_completed(self, payload: dict) -> dict:
        state = self.require_match_in_progress()
        if state.wickets >= MAX_WICKETS:
            msg = (
                f"innings {state.innings} is all out, complete the innings before "
                f"sending another ball"
            )
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.ILLEGAL_OPERATION)
        score_text = payload.get("score_text")
        if not isinstance(score_text, str):
            msg = (
                f"must specify score_text as a string on ball completed command: "
                f"{payload}"
            )
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        try:
            ball_score = Score.parse(score_text)
        except ValueError as e:
            LOGGER.warning(str(e))
            raise EngineError(str(e), RejectReason.BAD_COMMAND)
        bce = BallCompletedEvent(
            state.innings,
            ball_score,
            payload.get("striker", state.striker_id),
            payload.get("non_striker", state.non_striker_id),
            payload.get("bowler", state.bowler_id),
        )
        return self.on_ball_completed(bce)

    def handle_over_completed(self, payload: dict) -> dict:
        state = self.require_match_in_progress()
        decrement_last_hour(state)
        return self.snapshot()

    def handle_innings_completed(self, payload: dict) -> dict:
        state = self.require_match_in_progress()
        try:
            reason = parse_end_reason(payload["reason"])
        except KeyError:
            msg = f"must specify a valid reason to complete an innings: {payload}"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        except (TypeError, ValueError):
            msg = f"unknown innings end reason {payload['reason']}"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        innings_num = payload.get("innings", state.innings)
        if innings_num != state.innings:
            msg = (
                f"innings {innings_num} from the command does not match the "
                f"current innings {state.innings}"
            )
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.ILLEGAL_OPERATION)
        follow_on = payload.get("follow_on")
        if follow_on is not None and not isinstance(follow_on, bool):
            msg = f"follow_on must be true or false, got {follow_on!r}"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        ice = InningsCompletedEvent(innings_num, reason, follow_on)
        return self.on_innings_completed(ice)

    def handle_last_hour_started(self, payload: dict) -> dict:
        self.require_match_in_progress()
        overs = payload.get("overs")
        if overs is not None and (not isinstance(overs, int) or overs < 0):
            msg = f"invalid number of overs for the last hour: {overs}"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        return self.on_last_hour_started(LastHourStartedEvent(overs))

    def handle_match_concluded(self, payload: dict) -> dict:
        state = self.require_match_in_progress()
        state.adjustments.concluded = True
        self.on_result(check_for_result(state))
        state.is_completed = True
        return {"overview": state.overview(), "snapshot": self.snapshot()}

    def on_match_started(self, mse: MatchStartedEvent) -> dict:
        try:
            self.current_match = new_match(
                mse.batting_team_id, mse.bowling_team_id, self.first_class_config
            )
        except ValueError as e:
            LOGGER.warning(str(e))
            raise EngineError(str(e), RejectReason.BAD_COMMAND)
        self.result = None
        LOGGER.info(
            f"match started: {mse.batting_team_id} batting, "
            f"{mse.bowling_team_id} bowling"
        )
        return self.current_match.overview()

    def on_ball_completed(self, bce: BallCompletedEvent) -> dict:
        state = self.current_match
        state.history.append(bce)
        state.score += bce.ball_score.total_runs
        state.wickets += bce.ball_score.wickets
        if bce.ball_score.is_valid_delivery():
            state.total_balls += 1
        state.striker_id = bce.striker_id
        state.non_striker_id = bce.non_striker_id
        state.bowler_id = bce.bowler_id
        current = state.current_innings_score
        current.score = state.score
        current.wickets = state.wickets
        current.overs = util.balls_to_overs(state.total_balls)
        # the chase can finish mid-innings, earlier innings wait for an explicit
        # innings completed command so the follow-on can be decided
        if state.innings == MAX_INNINGS and can_end_innings(state):
            reason = (
                InningsEndReason.TARGET_REACHED
                if state.target is not None and state.score >= state.target
                else InningsEndReason.ALL_OUT
            )
            end_innings(state, reason)
            self.on_result(check_for_result(state))
        return self.snapshot()

    def on_innings_completed(self, ice: InningsCompletedEvent) -> dict:
        state = self.current_match
        if ice.follow_on_enforced:
            lead = follow_on_lead(state)
            if state.innings != 2 or lead is None or lead < state.follow_on_margin:
                msg = (
                    f"follow-on cannot be enforced after innings {state.innings} "
                    f"with a first innings lead of {lead}"
                )
                LOGGER.warning(msg)
                raise EngineError(msg, RejectReason.ILLEGAL_OPERATION)
        follow_on_enforced = (
            state.is_follow_on_enforced
            if ice.follow_on_enforced is None
            else ice.follow_on_enforced
        )
        if (
            state.innings < MAX_INNINGS
            and next_innings_batting_team_id(state, follow_on_enforced) is None
        ):
            msg = (
                f"cannot identify two distinct teams to continue from innings "
                f"{state.innings}: batting={state.batting_team_id} "
                f"bowling={state.bowling_team_id}"
            )
            LOGGER.error(msg)
            raise EngineError(msg, RejectReason.INCONSISTENT_STATE)
        completed = state.current_innings_score
        end_innings(state, ice.reason, ice.follow_on_enforced)
        self.on_result(check_for_result(state))
        output = {
            "innings": completed.snapshot() if completed else None,
            "snapshot": self.snapshot(),
        }
        return output

    def on_last_hour_started(self, lhs: LastHourStartedEvent) -> dict:
        trigger_last_hour(self.current_match, lhs.overs)
        return self.snapshot()

    def on_result(self, result: Optional[MatchResult]):
        if result is None:
            return
        self.result = result
        self.current_match.is_completed = True
