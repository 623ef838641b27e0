# peoplenrich/domain/errors.py
from __future__ import annotations

from typing import Optional


class PeopleError(Exception):
    """Root of every error raised by the people service."""


class ValidationError(PeopleError):
    """Caller input is malformed (empty name, inverted age range, ...)."""


class LookupFailed(PeopleError):
    """A single attribute lookup could not produce a value (transport or body parse)."""

    def __init__(self, kind: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.kind = str(kind)
        self.cause = cause
        super().__init__(message or f"{self.kind} lookup failed: {cause}")


class UpstreamError(LookupFailed):
    """The inference service answered with a non-2xx status."""

    def __init__(self, kind: str, status_code: int):
        self.status_code = int(status_code)
        super().__init__(kind, None, f"{kind} lookup returned HTTP {status_code}")


class EnrichmentFailed(PeopleError):
    def __init__(self, attribute: str, cause: BaseException):
        self.attribute = str(attribute)
        self.cause = cause
        super().__init__(f"failed to enrich {self.attribute}: {cause}")


class NotFound(PeopleError):
    def __init__(self, resource: str = "person", key: object = None):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} not found" if key is None else f"{resource} {key} not found")


class StoreError(PeopleError):
    """Statement execution failed in the persistence layer."""


class ScanError(StoreError):
    """A returned row could not be mapped to a Person."""
