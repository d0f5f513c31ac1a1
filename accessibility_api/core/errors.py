from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    LAUNCH_FAILURE = "launch_failure"
    NAVIGATION_FAILURE = "navigation_failure"
    ANALYSIS_FAILURE = "analysis_failure"
    TIMEOUT = "timeout"
    CAPACITY = "capacity"
    UNHANDLED = "unhandled"


class AuditError(Exception):
    """Failure while preparing or running an audit.

    ``detail`` is for server logs only, clients get a generic message.
    """

    def __init__(self, kind: ErrorKind, detail: str = ""):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail
