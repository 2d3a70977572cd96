"""Error taxonomy for the reading and chat pipelines."""

from typing import Optional


class PalmOracleError(Exception):
    """Base class for all service errors."""


class ValidationError(PalmOracleError):
    """User-correctable input problem, surfaced to the caller as a 400."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ExternalServiceError(PalmOracleError):
    """The model call failed (transport, timeout, quota, empty reply)."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class MalformedOutputError(PalmOracleError):
    """The model answered, but its output does not fit the Reading shape."""

    def __init__(self, raw_text: Optional[str], reason: str = "unparseable model output"):
        super().__init__(reason)
        self.raw_text = raw_text
        self.reason = reason
