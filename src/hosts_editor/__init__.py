"""
Hosts Editor - format-preserving editor for hosts files.

This package parses hosts files into structured records, canonicalizes
addresses and host names, resolves duplicate aliases when hosts are added,
and writes the file back while leaving untouched lines byte-for-byte intact.
"""

__version__ = "0.1.0"
__author__ = "Hosts Editor Team"

from hosts_editor.exceptions import (
    HostsEditorError,
    InvalidAddressError,
    InvalidHostError,
    MalformedRecordError,
    HostNotFoundError,
    HostNotSpecifiedError,
    PersistenceError,
)
from hosts_editor.enums import (
    AddressFamily,
    HostsErrorCode,
    LogLevel,
    OutputFormat,
)
from hosts_editor.address import AddressValue
from hosts_editor.host import HostToken, is_valid_host
from hosts_editor.aliases import AliasSet
from hosts_editor.pattern import WildcardPattern, widen_mask
from hosts_editor.digest import half_digest
from hosts_editor.record import Record
from hosts_editor.store import (
    RecordStore,
    RecordCounts,
    detect_encoding,
)
from hosts_editor.config import (
    EditorConfig,
    LoggingConfig,
    apply_env_overrides,
)
from hosts_editor.audit_logger import (
    AuditLogger,
    LogEntry,
)
from hosts_editor.hosts_file import (
    HostsFile,
    default_hosts_path,
)
from hosts_editor.i18n import (
    get_message,
    get_all_message_keys,
    get_missing_translations,
    validate_translations,
    TRANSLATIONS,
    SUPPORTED_LANGUAGES,
    DEFAULT_LANGUAGE,
)
from hosts_editor.cli import (
    main as cli_main,
    create_parser,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
)

__all__ = [
    # Exceptions
    "HostsEditorError",
    "InvalidAddressError",
    "InvalidHostError",
    "MalformedRecordError",
    "HostNotFoundError",
    "HostNotSpecifiedError",
    "PersistenceError",
    # Enums
    "AddressFamily",
    "HostsErrorCode",
    "LogLevel",
    "OutputFormat",
    # Core
    "AddressValue",
    "HostToken",
    "is_valid_host",
    "AliasSet",
    "WildcardPattern",
    "widen_mask",
    "half_digest",
    "Record",
    "RecordStore",
    "RecordCounts",
    "detect_encoding",
    # Configuration
    "EditorConfig",
    "LoggingConfig",
    "apply_env_overrides",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
    # Hosts File
    "HostsFile",
    "default_hosts_path",
    # I18n
    "get_message",
    "get_all_message_keys",
    "get_missing_translations",
    "validate_translations",
    "TRANSLATIONS",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    # CLI
    "cli_main",
    "create_parser",
    "create_default_config",
    "load_config_from_file",
    "save_config_to_file",
]
