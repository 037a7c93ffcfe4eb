"""Exception hierarchy.

Every error carries the pipeline stage it came from so callers can tell
"the site refused us" from "we could not decode the answer" from "the
markup changed" by the message prefix alone.
"""

from typing import Optional


class GsmSpecError(Exception):
    stage = "ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


# =========================
# Transport
# =========================

class TransportError(GsmSpecError):
    stage = "FETCH"


class RateLimitedError(TransportError):
    """The fetch gate is closed; nothing was sent."""


class ForbiddenError(TransportError):
    pass


class TooManyRequestsError(TransportError):
    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class HttpError(TransportError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


# =========================
# Search result decoding
# =========================

class DecodeError(GsmSpecError):
    stage = "DECODE"


class MissingCipherParamsError(DecodeError):
    pass


class DecryptionError(DecodeError):
    pass


class FragmentRepairError(DecodeError):
    pass


# =========================
# Parsing
# =========================

class StructuralParseError(GsmSpecError):
    """A node the extraction cannot do without is missing."""

    stage = "PARSE"


class FieldParseError(GsmSpecError, ValueError):
    """A single field does not have the expected shape."""

    stage = "PARSE"
