"""
Change log for hosts file edits.

Every command that rewrites the hosts file reports what it did here: one
entry per touched record, plus entries for whole-file operations and
failures. Entries are kept in memory and, when enabled, written to a stream
as JSON lines, readable text, or both.
"""

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TextIO

from hosts_editor.enums import LogLevel, OutputFormat


# Severity order used for threshold filtering
LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
}


@dataclass
class LogEntry:
    """One change or failure reported by the editor."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)


class AuditLogger:
    """
    Collects log entries and optionally echoes them to a stream.

    Entries below ``level`` are discarded. With ``enabled=False`` entries are
    still collected, so callers can inspect them after a quiet run.
    """

    def __init__(
        self,
        output_format: str = "text",
        output_stream: Optional[TextIO] = None,
        level: LogLevel = LogLevel.INFO,
        enabled: bool = True,
    ):
        """
        Args:
            output_format: 'json', 'text' or 'both'
            output_stream: Where entries are written (sys.stderr if omitted)
            level: Lowest level that is recorded
            enabled: Echo entries to the stream

        Raises:
            ValueError: If output_format is not a known format
        """
        try:
            self._format = OutputFormat(output_format)
        except ValueError:
            raise ValueError(f"Unknown log format: {output_format!r}")

        self._stream = output_stream or sys.stderr
        self._level = level
        self._enabled = enabled
        self._entries: list[LogEntry] = []

    @property
    def output_format(self) -> str:
        return self._format.value

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def entries(self) -> list[LogEntry]:
        """Recorded entries, oldest first."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Record an entry.

        Args:
            level: Severity
            component: Part of the editor reporting the entry ('editor', 'hosts_file')
            message: Short description
            data: Structured context such as host, address and action

        Returns:
            The recorded entry, or None when level is below the threshold
        """
        if LEVEL_ORDER[level] < LEVEL_ORDER[self._level]:
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=dict(data or {}),
        )
        self._entries.append(entry)

        if self._enabled:
            self._write(entry)
        return entry

    def info(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, component, message, data)

    def debug(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, component, message, data)

    def log_error(
        self,
        component: str,
        message: str,
        error: Optional[Exception] = None,
        path: Optional[str] = None,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Record a failure.

        The exception's type, text and, for editor errors, its code are
        added to the entry data, together with the file path if given.
        """
        data = dict(additional_data or {})

        if error is not None:
            data["error_type"] = type(error).__name__
            data["error_message"] = str(error)
            code = getattr(error, "code", None)
            if code is not None:
                data["error_code"] = code

        if path is not None:
            data["path"] = path

        return self.log(LogLevel.ERROR, component, message, data)

    def _write(self, entry: LogEntry) -> None:
        if self._format in (OutputFormat.JSON, OutputFormat.BOTH):
            self._stream.write(self.format_json(entry) + "\n")
        if self._format in (OutputFormat.TEXT, OutputFormat.BOTH):
            self._stream.write(self.format_text(entry) + "\n")
        self._stream.flush()

    def format_json(self, entry: LogEntry) -> str:
        """One JSON object per line."""
        return json.dumps(
            {
                "timestamp": entry.timestamp,
                "level": entry.level.value,
                "component": entry.component,
                "message": entry.message,
                "data": entry.data,
            },
            ensure_ascii=False,
        )

    def format_text(self, entry: LogEntry) -> str:
        """
        Readable single line.

        Format: [TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data}
        """
        line = f"[{entry.timestamp}] {entry.level.value.upper()} [{entry.component}] {entry.message}"
        if entry.data:
            line += " " + json.dumps(entry.data, ensure_ascii=False)
        return line

    def clear_entries(self) -> None:
        self._entries.clear()
