"""
Configuration dataclasses for the hosts editor.

This module defines the editor settings (hosts file location, backup and
encoding behavior, display language) and logging configuration, plus the
environment overrides read after ``.env`` files are loaded.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from hosts_editor.i18n import SUPPORTED_LANGUAGES


DEFAULT_CONFIG_PATH = Path.home() / ".hosts_editor" / "config.json"

ENV_HOSTS_FILE = "HOSTS_FILE"
ENV_LANGUAGE = "HOSTS_LANG"
ENV_LOG_LEVEL = "HOSTS_LOG_LEVEL"


@dataclass
class LoggingConfig:
    """Logging and audit configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'
    enabled: bool = False


@dataclass
class EditorConfig:
    """Main editor configuration."""

    hosts_file: Optional[Path] = None  # None: locate the OS hosts file
    backup_suffix: str = ".backup"
    fallback_encoding: str = "cp1252"
    prefer_idn: bool = True
    language: str = "en"  # 'de' or 'en'
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def apply_env_overrides(
    config: EditorConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> EditorConfig:
    """
    Apply environment variable overrides to a configuration.

    Args:
        config: Configuration to update in place
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The updated configuration
    """
    if environ is None:
        environ = os.environ

    hosts_file = (environ.get(ENV_HOSTS_FILE) or "").strip()
    if hosts_file:
        config.hosts_file = Path(hosts_file)

    language = (environ.get(ENV_LANGUAGE) or "").strip().lower()
    if language in SUPPORTED_LANGUAGES:
        config.language = language

    log_level = (environ.get(ENV_LOG_LEVEL) or "").strip().lower()
    if log_level in ("debug", "info", "warn", "error"):
        config.logging.level = log_level

    return config
