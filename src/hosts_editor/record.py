"""
Hosts record model with format-preserving round trip.

A record is one line of a hosts file: enabled flag, hidden flag, address,
aliases and comment. Lines that do not parse are kept as invalid records
and written back as comments. A parsed record keeps its source text and is
only re-rendered once its structured content no longer matches that text.
"""

from typing import Optional, Union

from hosts_editor.address import AddressValue
from hosts_editor.aliases import AliasSet, HostLike
from hosts_editor.digest import half_digest
from hosts_editor.enums import AddressFamily
from hosts_editor.exceptions import HostsEditorError, MalformedRecordError
from hosts_editor.host import HostToken
from hosts_editor.pattern import WildcardPattern


COMMENT_MARK = "#"
HIDDEN_MARK = "!"

# Column widths used when rendering; padding only, never truncation
ADDRESS_WIDTH = 18
ALIASES_WIDTH = 31


class Record:
    """
    One logical hosts line.

    Valid records expose their fields through setters; invalid records keep
    only the raw source text. A record whose alias set is empty is deleted
    and is skipped when the store is saved. ``line_ending`` is the newline
    the line was read with; the store fills it in on load.
    """

    def __init__(
        self,
        address: Union[AddressValue, str],
        aliases: Union[AliasSet, list[HostLike], str],
        comment: str = "",
        enabled: bool = True,
        hidden: bool = False,
        prefer_idn: bool = True,
    ) -> None:
        """
        Construct a valid record from fields.

        Args:
            address: Address value or text
            aliases: AliasSet, list of hosts, or whitespace-separated host text
            comment: Comment text without the leading marker
            enabled: False to write the line commented out
            hidden: True to mark the record hidden
            prefer_idn: Render internationalized hosts in Unicode

        Raises:
            InvalidAddressError: If the address is invalid
            InvalidHostError: If any alias is invalid
        """
        if not isinstance(address, AddressValue):
            address = AddressValue.parse(address)
        if isinstance(aliases, str):
            aliases = AliasSet.from_text(aliases, prefer_idn)
        elif isinstance(aliases, AliasSet):
            aliases = aliases.copy()
        else:
            aliases = AliasSet(aliases, prefer_idn)

        self._prefer_idn = prefer_idn
        self.reset_format = False
        self.line_ending: Optional[str] = None
        self._set_fields(
            valid=True,
            enabled=enabled,
            hidden=hidden,
            address=address,
            aliases=aliases,
            comment=self._clean_comment(comment),
        )
        self._source_text: Optional[str] = None
        self._source_digest = half_digest(self.render(True))

    @classmethod
    def parse(cls, line: str, reset_format: bool = False, prefer_idn: bool = True) -> "Record":
        """
        Parse one line into a record. Never raises.

        Lines that fail to parse produce an invalid record holding the
        original text.
        """
        record = cls.__new__(cls)
        record._prefer_idn = prefer_idn
        record.reset_format = reset_format
        record.line_ending = None
        record.reparse(line)
        return record

    @classmethod
    def parse_strict(cls, line: str, prefer_idn: bool = True) -> "Record":
        """
        Parse one line, raising on failure.

        Raises:
            MalformedRecordError: If the line is not a hosts record
            InvalidAddressError: If the address is invalid
            InvalidHostError: If any alias is invalid
        """
        enabled, hidden, address, aliases, comment = cls._split_line(line, prefer_idn)
        record = cls(address, aliases, comment, enabled, hidden, prefer_idn)
        record._source_text = line
        return record

    def reparse(self, line: str) -> bool:
        """
        Replace this record's content with the parse of line.

        Returns:
            True if the line parsed as a valid record
        """
        self._source_text = line
        try:
            enabled, hidden, address, aliases, comment = self._split_line(line, self._prefer_idn)
        except HostsEditorError:
            self._set_fields(
                valid=False,
                enabled=False,
                hidden=False,
                address=None,
                aliases=None,
                comment="",
            )
            self._source_digest = None
            return False

        self._set_fields(
            valid=True,
            enabled=enabled,
            hidden=hidden,
            address=address,
            aliases=aliases,
            comment=comment,
        )
        self._source_digest = half_digest(self.render(True))
        return True

    @staticmethod
    def _split_line(line: str, prefer_idn: bool) -> tuple:
        """Split a line into (enabled, hidden, address, aliases, comment)."""
        text = line.strip()
        if not text:
            raise MalformedRecordError(line, "empty line")
        if "\n" in text or "\r" in text:
            raise MalformedRecordError(line, "embedded line break")

        enabled = not text.startswith(COMMENT_MARK)
        if not enabled:
            text = text[1:].strip()
            if not text:
                raise MalformedRecordError(line, "empty comment")

        hidden = False
        comment = ""
        data, mark, rest = text.partition(COMMENT_MARK)
        if mark:
            comment = rest.strip()
            hidden = comment.startswith(HIDDEN_MARK)
            comment = Record._clean_comment(comment)

        tokens = data.split()
        if len(tokens) < 2:
            raise MalformedRecordError(line, "address and at least one host required")

        address = AddressValue.parse(tokens[0])
        aliases = AliasSet(tokens[1:], prefer_idn)
        return enabled, hidden, address, aliases, comment

    def _set_fields(self, valid, enabled, hidden, address, aliases, comment) -> None:
        self._valid = valid
        self._enabled = enabled
        self._hidden = hidden
        self._address = address
        self._aliases = aliases
        self._comment = comment

    @staticmethod
    def _clean_comment(comment: Optional[str]) -> str:
        """
        Normalize comment text.

        Leading hidden marks are dropped: a comment starting with one would
        read back as a hidden record.
        """
        comment = (comment or "").strip()
        if "\n" in comment or "\r" in comment:
            raise MalformedRecordError(comment, "embedded line break in comment")
        return comment.lstrip(HIDDEN_MARK + " \t")

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def deleted(self) -> bool:
        """True for a valid record with no aliases left."""
        return self._valid and len(self._aliases) == 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._require_valid()
        self._enabled = bool(value)

    @property
    def hidden(self) -> bool:
        return self._hidden

    @hidden.setter
    def hidden(self, value: bool) -> None:
        self._require_valid()
        self._hidden = bool(value)

    @property
    def address(self) -> Optional[AddressValue]:
        return self._address

    @address.setter
    def address(self, value: Union[AddressValue, str]) -> None:
        self._require_valid()
        if not isinstance(value, AddressValue):
            value = AddressValue.parse(value)
        self._address = value

    @property
    def address_family(self) -> Optional[AddressFamily]:
        return self._address.family if self._valid else None

    @property
    def aliases(self) -> Optional[AliasSet]:
        return self._aliases

    @property
    def primary_host(self) -> Optional[HostToken]:
        return self._aliases.primary if self._valid else None

    @primary_host.setter
    def primary_host(self, value: HostLike) -> None:
        self._require_valid()
        self._aliases.primary = value

    @property
    def comment(self) -> str:
        return self._comment

    @comment.setter
    def comment(self, value: Optional[str]) -> None:
        self._require_valid()
        self._comment = self._clean_comment(value)

    @property
    def source_text(self) -> Optional[str]:
        return self._source_text

    @property
    def prefer_idn(self) -> bool:
        return self._prefer_idn

    def _require_valid(self) -> None:
        if not self._valid:
            raise MalformedRecordError(self._source_text or "", "record is not valid")

    @property
    def changed(self) -> bool:
        """True when the structured content no longer matches the source text."""
        if not self._valid:
            return False
        return half_digest(self.render(True)) != self._source_digest

    def render(self, prefer_idn: Optional[bool] = None) -> str:
        """
        Render structured fields as a hosts line.

        Invalid records render as their raw output.
        """
        if not self._valid:
            return self.raw_string
        if prefer_idn is None:
            prefer_idn = self._prefer_idn

        address = self._address.canonical
        if not self._enabled:
            address = COMMENT_MARK + " " + address
        result = f"{address:<{ADDRESS_WIDTH}} {self._aliases.render(prefer_idn):<{ALIASES_WIDTH}} "
        if self._comment or self._hidden:
            result += COMMENT_MARK
            result += HIDDEN_MARK if self._hidden else " "
            result += self._comment
        return result.strip()

    @property
    def raw_string(self) -> str:
        """
        Text to write for this record.

        Returns the source text verbatim unless a re-render is forced by
        ``reset_format``, missing source text, or changed content.
        """
        if not self._valid:
            return self._invalid_text()
        if self.reset_format or not self._source_text or self.changed:
            return self.render(self._prefer_idn)
        return self._source_text

    def _invalid_text(self) -> str:
        text = self._source_text or ""
        stripped = text.lstrip()
        if not stripped or stripped.startswith(COMMENT_MARK):
            return text
        return COMMENT_MARK + " " + text

    def is_match(self, pattern: Union[WildcardPattern, str]) -> bool:
        """Check whether any alias matches the pattern."""
        if not self._valid:
            return False
        if isinstance(pattern, str):
            pattern = WildcardPattern(pattern)
        return self._aliases.is_match(pattern)

    def content_key(self) -> tuple:
        """Structured content as a comparable tuple."""
        if not self._valid:
            return (False, self._source_text)
        return (
            True,
            self._enabled,
            self._hidden,
            self._address.canonical,
            tuple(host.unicode for host in self._aliases),
            self._comment,
        )

    def clone(self) -> "Record":
        """Copy this record, including its source text and digest."""
        record = Record.__new__(Record)
        record._prefer_idn = self._prefer_idn
        record.reset_format = self.reset_format
        record.line_ending = self.line_ending
        record._set_fields(
            valid=self._valid,
            enabled=self._enabled,
            hidden=self._hidden,
            address=self._address,
            aliases=self._aliases.copy() if self._aliases is not None else None,
            comment=self._comment,
        )
        record._source_text = self._source_text
        record._source_digest = self._source_digest
        return record

    def __str__(self) -> str:
        return self.raw_string

    def __repr__(self) -> str:
        if not self._valid:
            return f"Record(invalid, {self._source_text!r})"
        return f"Record({self._address.canonical!r}, {self._aliases!r})"
