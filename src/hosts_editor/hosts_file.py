"""
Hosts file access for the command layer.

Locates the operating system hosts file and reads, writes, backs up and
restores it as whole-file byte blobs. All parsing is left to RecordStore.
"""

import os
import shutil
from pathlib import Path
from typing import Mapping, Optional

from hosts_editor.audit_logger import AuditLogger
from hosts_editor.config import ENV_HOSTS_FILE
from hosts_editor.enums import HostsErrorCode
from hosts_editor.exceptions import PersistenceError
from hosts_editor.record import Record
from hosts_editor.store import DEFAULT_FALLBACK_ENCODING, RecordStore


POSIX_HOSTS_PATH = Path("/etc/hosts")
WINDOWS_TCPIP_KEY = r"SYSTEM\CurrentControlSet\Services\Tcpip\Parameters"
WINDOWS_DEFAULT_DATABASE = r"%SystemRoot%\System32\drivers\etc"

COMPONENT = "hosts_file"


def default_hosts_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Locate the hosts file for this machine.

    Order: the HOSTS_FILE environment variable, the Windows registry
    database path, then /etc/hosts.
    """
    if environ is None:
        environ = os.environ

    override = (environ.get(ENV_HOSTS_FILE) or "").strip()
    if override:
        return Path(override)

    if os.name == "nt":
        return Path(os.path.expandvars(_windows_database_path())) / "hosts"

    return POSIX_HOSTS_PATH


def _windows_database_path() -> str:
    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, WINDOWS_TCPIP_KEY) as key:
            value, _ = winreg.QueryValueEx(key, "DataBasePath")
            return value
    except OSError:
        return WINDOWS_DEFAULT_DATABASE


def default_file_text() -> str:
    """Contents written for a new hosts file."""
    return Record("127.0.0.1", "localhost").raw_string + "\n"


class HostsFile:
    """
    A hosts file on disk together with its backup copy.
    """

    def __init__(
        self,
        path: Path,
        backup_suffix: str = ".backup",
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._path = Path(path)
        self._backup_path = self._path.with_name(self._path.name + backup_suffix)
        self._logger = logger

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return self._backup_path

    def exists(self) -> bool:
        return self._path.exists()

    def read_bytes(self) -> bytes:
        """
        Read the whole file.

        Raises:
            PersistenceError: If the file is missing or unreadable
        """
        try:
            return self._path.read_bytes()
        except FileNotFoundError as e:
            raise self._error(HostsErrorCode.NOT_FOUND, f"Hosts file not found: {self._path}", e)
        except OSError as e:
            raise self._error(HostsErrorCode.IO_ERROR, f"Failed to read hosts file: {e}", e)

    def write_bytes(self, data: bytes) -> None:
        """
        Replace the whole file.

        Raises:
            PersistenceError: If the file cannot be written
        """
        try:
            self._path.write_bytes(data)
        except OSError as e:
            raise self._error(HostsErrorCode.IO_ERROR, f"Failed to write hosts file: {e}", e)
        self._log("Hosts file written", {"path": str(self._path), "bytes": len(data)})

    def load_store(
        self,
        fallback_encoding: str = DEFAULT_FALLBACK_ENCODING,
        prefer_idn: bool = True,
    ) -> RecordStore:
        """Load the file into a store; a missing file gives an empty store."""
        store = RecordStore(fallback_encoding=fallback_encoding, prefer_idn=prefer_idn)
        if self.exists():
            store.load(self.read_bytes())
        return store

    def save_store(self, store: RecordStore) -> None:
        self.write_bytes(store.save())

    def ensure_exists(self) -> None:
        """Create the file with a localhost record and take a first backup if missing."""
        if not self.exists():
            self.recreate()
        if not self._backup_path.exists():
            self.backup()

    def backup(self) -> None:
        """Copy the file over its backup."""
        self._copy(self._path, self._backup_path)
        self._log("Hosts file backed up", {"backup": str(self._backup_path)})

    def restore(self) -> None:
        """
        Copy the backup over the file.

        Raises:
            PersistenceError: If there is no backup
        """
        if not self._backup_path.exists():
            raise self._error(HostsErrorCode.NO_BACKUP, "Backup file does not exist")
        self._copy(self._backup_path, self._path)
        self._log("Hosts file restored", {"backup": str(self._backup_path)})

    def recreate(self) -> None:
        """Replace the file with a single localhost record."""
        self.write_bytes(default_file_text().encode("utf-8"))

    def _copy(self, source: Path, target: Path) -> None:
        try:
            shutil.copyfile(source, target)
        except OSError as e:
            raise self._error(HostsErrorCode.IO_ERROR, f"Failed to copy {source} to {target}: {e}", e)

    def _error(
        self,
        code: HostsErrorCode,
        message: str,
        cause: Optional[Exception] = None,
    ) -> PersistenceError:
        error = PersistenceError(
            code=code.value,
            message=message,
            details={"file_path": str(self._path)},
        )
        if self._logger:
            self._logger.log_error(COMPONENT, message, error=cause or error, path=str(self._path))
        return error

    def _log(self, message: str, data: dict) -> None:
        if self._logger:
            self._logger.info(COMPONENT, message, data)
