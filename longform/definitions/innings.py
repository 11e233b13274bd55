import enum


class InningsEndReason(enum.Enum):
    ALL_OUT = "ao"
    DECLARED = "d"
    FORFEITED = "f"
    TIME = "t"
    TARGET_REACHED = "tr"
    OTHER = "o"


class ResultType(enum.Enum):
    INNINGS_WIN = "iw"
    RUNS_WIN = "rw"
    WICKETS_WIN = "ww"
    TIE = "t"
    DRAW = "d"
    NO_RESULT = "nr"


def parse_end_reason(reason) -> InningsEndReason:
    """accepts the enum itself, its name ("ALL_OUT") or its code ("ao")"""
    if isinstance(reason, InningsEndReason):
        return reason
    try:
        return InningsEndReason[reason]
    except KeyError:
        return InningsEndReason(reason)
