"""
Tests for hosts file access, backup and restore.
"""

import tempfile
from io import StringIO
from pathlib import Path

from hosts_editor.audit_logger import AuditLogger
from hosts_editor.exceptions import PersistenceError
from hosts_editor.hosts_file import HostsFile, default_file_text, default_hosts_path
from hosts_editor.record import Record
from hosts_editor.store import RecordStore


class TestHostsFile:
    """Whole-file operations on a temporary hosts file."""

    def setup_method(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "hosts"

    def teardown_method(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_loads_empty_store(self) -> None:
        store = HostsFile(self.path).load_store()
        assert len(store) == 0
        assert store.text() == ""

    def test_read_missing_raises(self) -> None:
        try:
            HostsFile(self.path).read_bytes()
            assert False, "Expected PersistenceError"
        except PersistenceError as e:
            assert e.code == "not_found"

    def test_ensure_exists(self) -> None:
        hosts_file = HostsFile(self.path)
        hosts_file.ensure_exists()
        assert self.path.read_text(encoding="utf-8") == default_file_text()
        assert hosts_file.backup_path.read_text(encoding="utf-8") == default_file_text()
        assert hosts_file.backup_path.name == "hosts.backup"

    def test_ensure_exists_keeps_existing_backup(self) -> None:
        hosts_file = HostsFile(self.path, backup_suffix=".bak")
        self.path.write_text("10.0.0.1 foo\n", encoding="utf-8")
        hosts_file.backup_path.write_text("old\n", encoding="utf-8")
        hosts_file.ensure_exists()
        assert hosts_file.backup_path.read_text(encoding="utf-8") == "old\n"

    def test_restore_without_backup(self) -> None:
        hosts_file = HostsFile(self.path)
        try:
            hosts_file.restore()
            assert False, "Expected PersistenceError"
        except PersistenceError as e:
            assert e.code == "no_backup"

    def test_save_and_reload_store(self) -> None:
        data = b"127.0.0.1 localhost\r\n\r\n# note\r\n"
        self.path.write_bytes(data)
        hosts_file = HostsFile(self.path)

        store = hosts_file.load_store()
        store.append(Record("10.0.0.1", "foo"))
        hosts_file.save_store(store)

        expected = data + Record("10.0.0.1", "foo").render().encode("utf-8") + b"\r\n"
        assert self.path.read_bytes() == expected
        assert len(hosts_file.load_store().valid_records()) == 2

    def test_operations_are_logged(self) -> None:
        logger = AuditLogger(output_stream=StringIO(), enabled=False)
        hosts_file = HostsFile(self.path, logger=logger)
        hosts_file.recreate()
        hosts_file.backup()
        messages = [entry.message for entry in logger.entries]
        assert messages == ["Hosts file written", "Hosts file backed up"]

    def test_default_text_is_localhost(self) -> None:
        store = RecordStore.from_bytes(default_file_text().encode("utf-8"))
        [record] = store.valid_records()
        assert record.address.canonical == "127.0.0.1"
        assert [host.ascii for host in record.aliases] == ["localhost"]


class TestDefaultPath:
    """Locating the system hosts file."""

    def test_environment_override(self) -> None:
        assert default_hosts_path({"HOSTS_FILE": "/srv/hosts"}) == Path("/srv/hosts")

    def test_blank_override_ignored(self) -> None:
        path = default_hosts_path({"HOSTS_FILE": "  "})
        assert path.name == "hosts"
