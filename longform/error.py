import enum


class RejectReason(enum.Enum):
    BAD_COMMAND = "bc"
    INCONSISTENT_STATE = "is"
    ILLEGAL_OPERATION = "io"


class AbstractLongformError(Exception):
    def __init__(self, msg: str, reason: RejectReason):
        super().__init__(msg)
        self.msg = msg
        self.reason = reason

    def compile(self):
        message = {
            "reject_reason": self.reason.value,
            "message": self.msg,
        }
        return message


class EngineError(AbstractLongformError):
    def __init__(self, msg: str, reason: RejectReason):
        super().__init__(msg, reason)
