"""
Reporting API error types for registration, batch, envelope and body failures.
"""

from typing import Any, Optional


class ReportingError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class DuplicateTagError(ReportingError):
    def __init__(self, tag: str):
        super().__init__("duplicate_tag", f"report type {tag!r} is already registered", {"tag": tag})
        self.tag = tag


class RegistryFrozenError(ReportingError):
    def __init__(self, tag: str):
        super().__init__("registry_frozen", f"cannot register {tag!r}: registry is frozen", {"tag": tag})
        self.tag = tag


class MalformedBatchError(ReportingError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("malformed_batch", message, details)


class MalformedEnvelopeError(ReportingError):
    def __init__(self, message: str, index: Optional[int] = None, details: Optional[dict[str, Any]] = None):
        details = dict(details or {})
        if index is not None:
            details["index"] = index
        super().__init__("malformed_envelope", message, details)
        self.index = index


class BodySchemaMismatchError(ReportingError):
    """The tag is registered but the body does not fit its schema."""

    def __init__(self, tag: str, message: str, details: Optional[dict[str, Any]] = None):
        details = dict(details or {})
        details["tag"] = tag
        super().__init__("body_schema_mismatch", message, details)
        self.tag = tag
