"""
Command-line interface for the hosts editor.

This module provides the main CLI entry point with commands for:
- add/rem/on/off/hide/show: Edit records matched by host or mask
- list/print: Inspect the hosts file
- format/clean: Rewrite the hosts file layout
- backup/restore/recreate: Whole-file operations
- config: Configuration management
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

from . import __version__
from .address import AddressValue
from .audit_logger import AuditLogger
from .config import (
    DEFAULT_CONFIG_PATH,
    EditorConfig,
    LoggingConfig,
    apply_env_overrides,
)
from .enums import HostsErrorCode, LogLevel
from .exceptions import (
    HostNotFoundError,
    HostNotSpecifiedError,
    HostsEditorError,
    InvalidAddressError,
    InvalidHostError,
)
from .host import HostToken
from .hosts_file import HostsFile, default_hosts_path
from .i18n import SUPPORTED_LANGUAGES, get_message
from .pattern import WildcardPattern, widen_mask
from .record import Record
from .store import RecordStore


DEFAULT_ADDRESS = "127.0.0.1"
COMPONENT = "editor"


def create_default_config(language: Optional[str] = None) -> EditorConfig:
    """
    Create a default editor configuration.

    Args:
        language: Output language ('de' or 'en')

    Returns:
        EditorConfig with default settings
    """
    config = EditorConfig()
    if language:
        config.language = language
    return config


def load_config_from_file(config_path: Path) -> Optional[EditorConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        EditorConfig if successful, None otherwise
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        hosts_file = data.get("hosts_file")

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=logging_data.get("level", "info"),
            output_format=logging_data.get("output_format", "text"),
            enabled=logging_data.get("enabled", False),
        )

        return EditorConfig(
            hosts_file=Path(hosts_file) if hosts_file else None,
            backup_suffix=data.get("backup_suffix", ".backup"),
            fallback_encoding=data.get("fallback_encoding", "cp1252"),
            prefer_idn=data.get("prefer_idn", True),
            language=data.get("language", "en"),
            logging=logging_config,
        )

    except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None
    except FileNotFoundError:
        return None


def save_config_to_file(config: EditorConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Args:
        config: EditorConfig to save
        config_path: Path to save the configuration

    Returns:
        True if successful, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "hosts_file": str(config.hosts_file) if config.hosts_file else None,
            "backup_suffix": config.backup_suffix,
            "fallback_encoding": config.fallback_encoding,
            "prefer_idn": config.prefer_idn,
            "language": config.language,
            "logging": {
                "level": config.logging.level,
                "output_format": config.logging.output_format,
                "enabled": config.logging.enabled,
            },
        }

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return True

    except (OSError, TypeError) as e:
        print(f"Error saving config: {e}", file=sys.stderr)
        return False


def create_logger(config: EditorConfig, verbose: bool = False) -> AuditLogger:
    """Create the audit logger described by the configuration."""
    return AuditLogger(
        output_format=config.logging.output_format,
        level=LogLevel(config.logging.level),
        enabled=verbose or config.logging.enabled,
    )


def describe(record: Record) -> dict:
    """Message arguments for a record."""
    host = record.primary_host
    return {
        "host": host.display() if host else "",
        "address": record.address.canonical if record.address else "",
    }


def add_or_update(
    store: RecordStore,
    host: str,
    address: Optional[str] = None,
    comment: Optional[str] = None,
) -> tuple[str, Record]:
    """
    Add a host, or update the record that already holds it.

    A record of the target address family holding only this host is
    updated in place. Otherwise the host is added through the store's
    merge-on-add policy, splitting it out of any shared record.

    Returns:
        ("added" | "updated", record)

    Raises:
        InvalidHostError: If host is invalid
        InvalidAddressError: If address is invalid
    """
    token = HostToken.parse(host, store.prefer_idn)
    new_address = AddressValue.parse(address) if address is not None else None
    family = new_address.family if new_address is not None else None

    record = store.find_by_host(token, family)
    if record is not None and len(record.aliases) == 1:
        if new_address is not None:
            record.address = new_address
        if comment is not None:
            record.comment = comment
        return "updated", record

    if record is not None and new_address is None:
        new_address = record.address

    record = store.add_host(new_address or DEFAULT_ADDRESS, [token], comment or "")
    return "added", record


def apply_to_matched(
    store: RecordStore,
    mask: Optional[str],
    action: Callable[[Record], None],
) -> list[Record]:
    """
    Run action on every record matched by mask.

    Raises:
        HostNotSpecifiedError: If mask is empty
        HostNotFoundError: If nothing matches
    """
    if not mask:
        raise HostNotSpecifiedError()
    records = store.find_matched(mask)
    if not records:
        raise HostNotFoundError(mask)
    for record in records:
        action(record)
    return records


def remove_matched(store: RecordStore, mask: Optional[str]) -> list[HostToken]:
    """
    Remove every alias matching mask.

    Records left without aliases are dropped when the store is saved.

    Returns:
        Removed hosts in file order
    """
    if not mask:
        raise HostNotSpecifiedError()
    pattern = WildcardPattern(mask)
    removed = []
    for record in store.find_matched(pattern):
        for host in record.aliases.matched(pattern):
            record.aliases.remove(host)
            removed.append(host)
    if not removed:
        raise HostNotFoundError(mask)
    return removed


def parse_list_filters(arguments: list[str]) -> tuple[str, Optional[bool], Optional[bool]]:
    """
    Parse list command words.

    Returns:
        (mask, enabled_only, visible_only); None means no filter
    """
    mask = "*"
    enabled_only = None
    visible_only = None
    for argument in arguments:
        word = argument.lower()
        if word == "enabled":
            enabled_only = True
        elif word == "disabled":
            enabled_only = False
        elif word == "visible":
            visible_only = True
        elif word == "hidden":
            visible_only = False
        else:
            mask = widen_mask(word)
    return mask, enabled_only, visible_only


def view(
    store: RecordStore,
    mask: str = "*",
    enabled_only: Optional[bool] = None,
    visible_only: Optional[bool] = None,
    language: Optional[str] = None,
) -> list[str]:
    """
    Build the listing output for records matching mask.

    Counts cover every matched record; the filters only limit which lines
    are shown.
    """
    output = []
    if mask != "*":
        output.append(get_message("list.mask", language, mask=mask))
        output.append("")

    enabled = disabled = hidden = 0
    records = store.find_matched(mask)
    for record in records:
        if record.enabled:
            enabled += 1
        else:
            disabled += 1
        if record.hidden:
            hidden += 1
        if visible_only is not None and visible_only == record.hidden:
            continue
        if enabled_only is not None and enabled_only != record.enabled:
            continue
        output.append(record.render())

    if records:
        output.append("")
    output.append(get_message(
        "list.counts", language, enabled=enabled, disabled=disabled, hidden=hidden,
    ))
    return output


def format_error(error: HostsEditorError, language: Optional[str]) -> str:
    """Localized one-line error message."""
    if isinstance(error, HostNotSpecifiedError):
        message = get_message("error.host_not_specified", language)
    elif isinstance(error, HostNotFoundError):
        message = get_message("error.host_not_found", language, host=error.host)
    elif isinstance(error, InvalidHostError):
        message = get_message("error.invalid_host", language, host=error.host)
    elif isinstance(error, InvalidAddressError):
        message = get_message("error.invalid_address", language, address=error.address)
    elif error.code == HostsErrorCode.NO_BACKUP.value:
        message = get_message("error.no_backup", language)
    else:
        message = error.message
    return get_message("error.prefix", language, message=message)


def resolve_config(args: argparse.Namespace) -> Optional[EditorConfig]:
    """Load file config, then apply environment and command line overrides."""
    config = None
    if getattr(args, "config", None):
        config = load_config_from_file(Path(args.config))
        if config is None:
            print(
                get_message("config.load_failed", getattr(args, "language", None), path=args.config),
                file=sys.stderr,
            )
            return None
    elif DEFAULT_CONFIG_PATH.exists():
        config = load_config_from_file(DEFAULT_CONFIG_PATH)

    if config is None:
        config = create_default_config()

    apply_env_overrides(config)

    if getattr(args, "file", None):
        config.hosts_file = Path(args.file)
    if getattr(args, "language", None):
        config.language = args.language
    return config


def open_hosts_file(config: EditorConfig, logger: AuditLogger) -> HostsFile:
    path = config.hosts_file or default_hosts_path()
    return HostsFile(path, backup_suffix=config.backup_suffix, logger=logger)


def run_edit_command(args: argparse.Namespace, config: EditorConfig, logger: AuditLogger) -> int:
    """Dispatch a command that works on the hosts file."""
    language = config.language
    hosts_file = open_hosts_file(config, logger)
    hosts_file.ensure_exists()

    command = args.command
    if command == "backup":
        hosts_file.backup()
        print(get_message("file.backed_up", language))
        return 0
    if command == "restore":
        hosts_file.restore()
        print(get_message("file.restored", language))
        return 0
    if command == "recreate":
        hosts_file.recreate()
        print(get_message("file.recreated", language))
        return 0

    store = hosts_file.load_store(config.fallback_encoding, config.prefer_idn)

    if command is None:
        print(get_message("file.path", language, path=str(hosts_file.path)))
        print()
        for line in view(store, "*", enabled_only=True, visible_only=True, language=language):
            print(line)
        return 0

    if command == "print":
        print(hosts_file.read_bytes().decode(store.encoding, errors="replace"), end="")
        return 0

    if command == "list":
        mask, enabled_only, visible_only = parse_list_filters(args.filters)
        for line in view(store, mask, enabled_only, visible_only, language):
            print(line)
        return 0

    if command == "format":
        store.reset_format()
        print(get_message("file.formatted", language))
    elif command == "clean":
        store.remove_invalid()
        store.reset_format()
        print(get_message("file.cleaned", language))
    elif command == "add":
        if not args.host:
            raise HostNotSpecifiedError()
        action, record = add_or_update(store, args.host, args.address, args.comment)
        print(get_message(f"edit.{action}", language, **describe(record)))
        logger.info(COMPONENT, f"Host {action}", {"action": action, **describe(record)})
    elif command == "remove":
        for host in remove_matched(store, args.mask):
            print(get_message("edit.removed", language, host=host.display()))
            logger.info(COMPONENT, "Host removed", {"action": "removed", "host": host.ascii})
    else:
        setter, key = FLAG_ACTIONS[command]
        for record in apply_to_matched(store, args.mask, setter):
            print(get_message(key, language, **describe(record)))
            logger.info(COMPONENT, f"Host {command}", {"action": command, **describe(record)})

    hosts_file.save_store(store)
    return 0


def _set_enabled(value: bool) -> Callable[[Record], None]:
    def setter(record: Record) -> None:
        record.enabled = value
    return setter


def _set_hidden(value: bool) -> Callable[[Record], None]:
    def setter(record: Record) -> None:
        record.hidden = value
    return setter


FLAG_ACTIONS = {
    "enable": (_set_enabled(True), "edit.enabled"),
    "disable": (_set_enabled(False), "edit.disabled"),
    "hide": (_set_hidden(True), "edit.hidden"),
    "show": (_set_hidden(False), "edit.shown"),
}


def cmd_edit(args: argparse.Namespace) -> int:
    """Handle every command that touches the hosts file."""
    config = resolve_config(args)
    if config is None:
        return 1

    logger = create_logger(config, getattr(args, "verbose", False))
    try:
        return run_edit_command(args, config, logger)
    except HostsEditorError as e:
        logger.log_error(COMPONENT, "Command failed", error=e)
        print(format_error(e, config.language), file=sys.stderr)
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH
    language = args.language

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(get_message("config.not_found", language, path=config_path))
            return 1

        print(get_message("config.loaded_from", language, path=config_path))
        print(f"  Hosts file: {config.hosts_file or default_hosts_path()}")
        print(f"  Backup suffix: {config.backup_suffix}")
        print(f"  Fallback encoding: {config.fallback_encoding}")
        print(f"  Prefer IDN: {config.prefer_idn}")
        print(f"  Language: {config.language}")
        print(f"  Log level: {config.logging.level}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(get_message("config.exists", language, path=config_path))
            return 1

        config = create_default_config(language=language)
        if save_config_to_file(config, config_path):
            print(get_message("config.created", language, path=config_path))
            return 0
        return 1

    elif args.action == "validate":
        config = load_config_from_file(config_path)
        if config is None:
            print(get_message("config.load_failed", language, path=config_path), file=sys.stderr)
            return 1

        print(get_message("config.valid", language, path=config_path))
        return 0

    return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--file", "-f",
        help="Path to the hosts file (default: the system hosts file)",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        help="Output language",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Write audit log entries to stderr",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="hosts",
        description="Edit the hosts file while preserving its formatting",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.set_defaults(func=cmd_edit, command=None)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_parser = subparsers.add_parser(
        "add",
        aliases=["new", "set", "change", "update"],
        help="Add a host or update its address and comment",
    )
    add_parser.add_argument("host", nargs="?", help="Host name")
    add_parser.add_argument("address", nargs="?", help=f"IP address (default: {DEFAULT_ADDRESS})")
    add_parser.add_argument("comment", nargs="?", help="Comment for the record")
    _add_common_arguments(add_parser)
    add_parser.set_defaults(func=cmd_edit, command="add")

    mask_commands = [
        ("remove", ["rem", "del", "delete"], "Remove hosts matching a mask"),
        ("enable", ["on"], "Enable records matching a mask"),
        ("disable", ["off"], "Disable records matching a mask"),
        ("hide", [], "Hide records matching a mask"),
        ("show", [], "Unhide records matching a mask"),
    ]
    for name, aliases, help_text in mask_commands:
        mask_parser = subparsers.add_parser(name, aliases=aliases, help=help_text)
        mask_parser.add_argument("mask", nargs="?", help="Host name or wildcard mask")
        _add_common_arguments(mask_parser)
        mask_parser.set_defaults(func=cmd_edit, command=name)

    list_parser = subparsers.add_parser(
        "list",
        aliases=["view", "select"],
        help="List records: [enabled|disabled] [visible|hidden] [mask]",
    )
    list_parser.add_argument("filters", nargs="*", help="Filter words and mask")
    _add_common_arguments(list_parser)
    list_parser.set_defaults(func=cmd_edit, command="list")

    file_commands = [
        ("print", ["raw", "file"], "Display the raw hosts file"),
        ("format", [], "Re-render every record"),
        ("clean", [], "Remove comment and invalid lines"),
        ("backup", [], "Back up the hosts file"),
        ("restore", [], "Restore the hosts file from backup"),
        ("recreate", [], "Replace the hosts file with a localhost record"),
    ]
    for name, aliases, help_text in file_commands:
        file_parser = subparsers.add_parser(name, aliases=aliases, help=help_text)
        _add_common_arguments(file_parser)
        file_parser.set_defaults(func=cmd_edit, command=name)

    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        default="en",
        help="Language for messages and new configuration",
    )
    config_parser.set_defaults(func=cmd_config, command="config")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
