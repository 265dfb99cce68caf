"""Exceptions raised by the resume builder."""
from __future__ import annotations

from typing import Optional


class ResumeAIError(Exception):
    """Base class for all package errors."""


class GenerationError(ResumeAIError):
    """The generation service failed to produce a usable result.

    Attributes:
        message: Error description
        status_code: HTTP status returned by the service, when there was one
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GenerationTimeout(GenerationError):
    """The generation service did not answer within the configured timeout."""


class MalformedResponseError(GenerationError):
    """The service answered, but the payload could not be parsed or validated."""

    def __init__(self, message: str, raw: Optional[str] = None) -> None:
        self.raw = raw
        super().__init__(message)


class PatchPathError(ResumeAIError, LookupError):
    """A dotted edit path does not address an existing field."""

    def __init__(self, path: str, segment: str, reason: str) -> None:
        self.path = path
        self.segment = segment
        self.reason = reason
        super().__init__(f"Invalid edit path {path!r} at segment {segment!r}: {reason}")
