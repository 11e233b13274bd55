import abc

from longform.error import EngineError, RejectReason
from longform.event import EventType
from longform.util import LOGGER


class Context(abc.ABC):
    def __init__(self):
        self._event_handlers = {}

    @abc.abstractmethod
    def snapshot(self) -> dict:
        pass

    def add_handler(self, event_type: EventType, func: callable):
        self._event_handlers[event_type] = func

    def handle_event(self, event_type: EventType, payload: dict) -> dict:
        handler = self._event_handlers.get(event_type)
        if not handler:
            msg = f"no handler defined for event {event_type}"
            LOGGER.warning(msg)
            raise EngineError(msg, RejectReason.BAD_COMMAND)
        return handler(payload)
