"""
Tests for the command-line interface against temporary hosts files.
"""

import io
import os
import tempfile
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from hosts_editor.cli import (
    add_or_update,
    main,
    parse_list_filters,
    view,
)
from hosts_editor.i18n import get_message
from hosts_editor.record import Record
from hosts_editor.store import RecordStore


def run_cli(*argv: str) -> tuple[int, str, str]:
    """Run the CLI, capturing stdout and stderr."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(list(argv))
    return code, out.getvalue(), err.getvalue()


def rendered(address: str, hosts: str, comment: str = "", enabled: bool = True) -> str:
    return Record(address, hosts, comment, enabled=enabled).render()


class HostsFileCase:
    """Base class creating a hosts file in a temporary directory."""

    INITIAL = "127.0.0.1\tlocalhost   # loopback\n# keep this comment\n"

    def setup_method(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "hosts"
        self.path.write_text(self.INITIAL, encoding="utf-8")

    def teardown_method(self) -> None:
        self._tmp.cleanup()

    def run(self, *argv: str) -> tuple[int, str, str]:
        return run_cli(*argv, "--file", str(self.path), "--language", "en")

    def lines(self) -> list[str]:
        return self.path.read_text(encoding="utf-8").splitlines()


class TestAddCommand(HostsFileCase):
    """Adding and updating hosts."""

    def test_add_new_host_keeps_other_lines(self) -> None:
        code, out, _ = self.run("add", "foo", "10.0.0.1")
        assert code == 0
        assert out == "[ADDED] foo 10.0.0.1\n"
        assert self.lines() == [
            "127.0.0.1\tlocalhost   # loopback",
            "# keep this comment",
            rendered("10.0.0.1", "foo"),
        ]

    def test_first_run_takes_backup(self) -> None:
        self.run("add", "foo", "10.0.0.1")
        backup = self.path.with_name("hosts.backup")
        assert backup.read_text(encoding="utf-8") == self.INITIAL

    def test_default_address(self) -> None:
        code, out, _ = self.run("new", "bar")
        assert code == 0
        assert out == "[ADDED] bar 127.0.0.1\n"

    def test_update_existing_host(self) -> None:
        self.run("add", "foo", "10.0.0.1")
        code, out, _ = self.run("set", "foo", "10.0.0.2", "moved here")
        assert code == 0
        assert out == "[UPDATED] foo 10.0.0.2\n"
        assert self.lines()[-1] == rendered("10.0.0.2", "foo", "moved here")
        assert len(self.lines()) == 3

    def test_shared_record_is_split(self) -> None:
        self.path.write_text("10.0.0.1 foo bar\n", encoding="utf-8")
        code, out, _ = self.run("add", "foo")
        assert code == 0
        assert out == "[ADDED] foo 10.0.0.1\n"
        assert self.lines() == [rendered("10.0.0.1", "bar"), rendered("10.0.0.1", "foo")]

    def test_errors(self) -> None:
        for argv, message in (
            (("add",), "[ERROR] Host not specified"),
            (("add", "bad..host"), "[ERROR] Invalid host 'bad..host'"),
            (("add", "foo", "bogus"), "[ERROR] Invalid IP 'bogus'"),
        ):
            code, _, err = self.run(*argv)
            assert code == 1
            assert err.strip() == message
        assert self.path.read_text(encoding="utf-8") == self.INITIAL

    def test_german_messages(self) -> None:
        code, out, _ = run_cli("add", "foo", "10.0.0.1", "--file", str(self.path), "-l", "de")
        assert code == 0
        assert out == "[HINZUGEFÜGT] foo 10.0.0.1\n"


class TestMaskCommands(HostsFileCase):
    """Commands that act on records matched by a mask."""

    INITIAL = "10.0.0.1 foo.example bar\n10.0.0.2 foo\n10.0.0.3 other\n"

    def test_remove_matching_aliases(self) -> None:
        code, out, _ = self.run("rem", "foo*")
        assert code == 0
        assert out == "[REMOVED] foo.example\n[REMOVED] foo\n"
        assert self.lines() == [rendered("10.0.0.1", "bar"), "10.0.0.3 other"]

    def test_disable_and_enable(self) -> None:
        code, out, _ = self.run("off", "foo")
        assert code == 0
        assert out == "[DISABLED] foo 10.0.0.2\n"
        assert self.lines()[1] == rendered("10.0.0.2", "foo", enabled=False)

        code, out, _ = self.run("enable", "foo")
        assert out == "[ENABLED] foo 10.0.0.2\n"
        assert self.lines()[1] == rendered("10.0.0.2", "foo")

    def test_hide_and_show(self) -> None:
        code, out, _ = self.run("hide", "other")
        assert code == 0
        assert out == "[HIDDEN] other 10.0.0.3\n"
        assert self.lines()[2].endswith("#!")
        code, out, _ = self.run("show", "other")
        assert out == "[SHOWN] other 10.0.0.3\n"
        assert not self.lines()[2].endswith("#!")

    def test_unmatched_mask(self) -> None:
        code, _, err = self.run("del", "nothing*")
        assert code == 1
        assert err.strip() == "[ERROR] Host 'nothing*' not found"

    def test_missing_mask(self) -> None:
        code, _, err = self.run("hide")
        assert code == 1
        assert err.strip() == "[ERROR] Host not specified"
        assert self.path.read_text(encoding="utf-8") == self.INITIAL


class TestListCommand(HostsFileCase):
    """Listing and filtering."""

    INITIAL = "10.0.0.1 foo\n# 10.0.0.2 bar\n10.0.0.3 baz #!\nnot a record\n"

    def test_list_all(self) -> None:
        code, out, _ = self.run("list")
        assert code == 0
        counts = get_message("list.counts", "en", enabled=2, disabled=1, hidden=1)
        assert out.splitlines() == [
            rendered("10.0.0.1", "foo"),
            rendered("10.0.0.2", "bar", enabled=False),
            Record("10.0.0.3", "baz", hidden=True).render(),
            "",
            counts,
        ]

    def test_list_filters_and_mask(self) -> None:
        _, out, _ = self.run("view", "enabled", "visible", "ba")
        lines = out.splitlines()
        assert lines[0] == "Mask: *ba*"
        assert rendered("10.0.0.1", "foo") not in lines
        assert rendered("10.0.0.2", "bar", enabled=False) not in lines
        assert lines[-1] == get_message("list.counts", "en", enabled=1, disabled=1, hidden=1)

    def test_list_does_not_write(self) -> None:
        self.run("list")
        assert self.path.read_text(encoding="utf-8") == self.INITIAL

    def test_default_command_lists_visible_enabled(self) -> None:
        with patch.dict(os.environ, {"HOSTS_FILE": str(self.path), "HOSTS_LANG": "en"}):
            code, out, _ = run_cli()
        assert code == 0
        lines = out.splitlines()
        assert lines[0] == f"Hosts file: {self.path}"
        assert rendered("10.0.0.1", "foo") in lines
        assert Record("10.0.0.3", "baz", hidden=True).render() not in lines

    def test_print_raw_file(self) -> None:
        code, out, _ = self.run("print")
        assert code == 0
        assert out == self.INITIAL


class TestFileCommands(HostsFileCase):
    """Whole-file operations."""

    INITIAL = "10.0.0.1\tfoo\n# comment\ngarbage line\n"

    def test_format(self) -> None:
        code, out, _ = self.run("format")
        assert code == 0
        assert out == "[OK] Hosts file formatted successfully\n"
        assert self.lines() == [rendered("10.0.0.1", "foo"), "# comment", "# garbage line"]

    def test_clean(self) -> None:
        code, _, _ = self.run("clean")
        assert code == 0
        assert self.lines() == [rendered("10.0.0.1", "foo")]

    def test_backup_and_restore(self) -> None:
        self.run("backup")
        self.run("add", "new-host", "10.0.0.9")
        assert len(self.lines()) == 4
        code, out, _ = self.run("restore")
        assert code == 0
        assert out == "[OK] Hosts file restored successfully\n"
        assert self.path.read_text(encoding="utf-8") == self.INITIAL

    def test_recreate(self) -> None:
        code, _, _ = self.run("recreate")
        assert code == 0
        assert self.lines() == [rendered("127.0.0.1", "localhost")]

    def test_missing_file_is_created(self) -> None:
        self.path.unlink()
        code, _, _ = self.run("add", "foo", "10.0.0.1")
        assert code == 0
        assert self.lines() == [rendered("127.0.0.1", "localhost"), rendered("10.0.0.1", "foo")]


class TestConfigCommand:
    """Configuration management commands."""

    def test_init_show_validate(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = str(Path(tmpdir) / "config.json")
            code, out, _ = run_cli("config", "init", "--path", path)
            assert code == 0
            assert "Configuration created at" in out

            code, out, _ = run_cli("config", "init", "--path", path)
            assert code == 1

            code, out, _ = run_cli("config", "show", "--path", path)
            assert code == 0
            assert "Language: en" in out

            code, out, _ = run_cli("config", "validate", "--path", path)
            assert code == 0

    def test_validate_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            code, _, err = run_cli("config", "validate", "--path", str(Path(tmpdir) / "none.json"))
            assert code == 1
            assert "Could not load config" in err


class TestEditHelpers:
    """Helpers the commands are built from."""

    def test_parse_list_filters(self) -> None:
        assert parse_list_filters([]) == ("*", None, None)
        assert parse_list_filters(["Disabled", "hidden", "Foo"]) == ("*foo*", False, False)

    def test_add_or_update_other_family_adds(self) -> None:
        store = RecordStore.from_bytes(b"10.0.0.1 foo\n")
        action, record = add_or_update(store, "foo", "::1")
        assert action == "added"
        assert [r.address.canonical for r in store.valid_records()] == ["10.0.0.1", "::1"]

    def test_view_counts_before_filters(self) -> None:
        store = RecordStore.from_bytes(b"10.0.0.1 foo\n# 10.0.0.2 foo2\n")
        output = view(store, "foo*", enabled_only=True, language="en")
        assert output[0] == "Mask: foo*"
        assert output[-1] == get_message("list.counts", "en", enabled=1, disabled=1, hidden=0)
        assert len(output) == 5
