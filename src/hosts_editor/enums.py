"""
Enumeration types for the hosts editor.

These enums provide type-safe constants for address families, error codes,
and configuration options throughout the system.
"""

from enum import Enum


class AddressFamily(Enum):
    """Network address family of a record."""

    IPV4 = "ipv4"
    IPV6 = "ipv6"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class OutputFormat(Enum):
    """Audit log output formats."""

    JSON = "json"
    TEXT = "text"
    BOTH = "both"


class HostsErrorCode(Enum):
    """Error codes for hosts editor failures."""

    INVALID_ADDRESS = "invalid_address"
    INVALID_HOST = "invalid_host"
    MALFORMED_RECORD = "malformed_record"
    HOST_NOT_FOUND = "host_not_found"
    HOST_NOT_SPECIFIED = "host_not_specified"
    IO_ERROR = "io_error"
    NOT_FOUND = "not_found"
    NO_BACKUP = "no_backup"
