"""
Exception classes for the hosts editor.

All exceptions inherit from HostsEditorError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional

from hosts_editor.enums import HostsErrorCode


class HostsEditorError(Exception):
    """Base exception for all hosts editor errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidAddressError(HostsEditorError):
    """Raised when text is not a valid IPv4 or IPv6 literal."""

    def __init__(self, address: str, details: Optional[dict] = None) -> None:
        self.address = address
        super().__init__(
            code=HostsErrorCode.INVALID_ADDRESS.value,
            message=f"Invalid IP address '{address}'",
            details={"address": address, **(details or {})},
        )


class InvalidHostError(HostsEditorError):
    """Raised when a host token fails syntax or IDN round-trip checks."""

    def __init__(self, host: str, details: Optional[dict] = None) -> None:
        self.host = host
        super().__init__(
            code=HostsErrorCode.INVALID_HOST.value,
            message=f"Invalid host '{host}'",
            details={"host": host, **(details or {})},
        )


class MalformedRecordError(HostsEditorError):
    """Raised when a line cannot be parsed into a record."""

    def __init__(self, line: str, reason: str) -> None:
        self.line = line
        super().__init__(
            code=HostsErrorCode.MALFORMED_RECORD.value,
            message=f"Malformed hosts line: {reason}",
            details={"line": line, "reason": reason},
        )


class HostNotFoundError(HostsEditorError):
    """Raised by the command layer when a mask matches no records."""

    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(
            code=HostsErrorCode.HOST_NOT_FOUND.value,
            message=f"Host '{host}' not found",
            details={"host": host},
        )


class HostNotSpecifiedError(HostsEditorError):
    """Raised by the command layer when a command needs a host argument."""

    def __init__(self) -> None:
        super().__init__(
            code=HostsErrorCode.HOST_NOT_SPECIFIED.value,
            message="Host not specified",
        )


class PersistenceError(HostsEditorError):
    """Raised when reading or writing the hosts file fails."""

    pass
