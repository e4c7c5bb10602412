"""
Record store: the ordered contents of one hosts file.

Loads raw bytes into records, answers queries over them, applies the
merge-on-add duplicate policy and renders the records back to bytes.
"""

import codecs
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Union

from hosts_editor.address import AddressValue
from hosts_editor.aliases import AliasSet, HostLike
from hosts_editor.enums import AddressFamily
from hosts_editor.exceptions import MalformedRecordError
from hosts_editor.host import HostToken
from hosts_editor.pattern import WildcardPattern
from hosts_editor.record import Record


UTF8 = "utf-8"
UTF8_BOM = "utf-8-sig"
# 8-bit code page used when the file is not valid UTF-8
DEFAULT_FALLBACK_ENCODING = "cp1252"

NEWLINE_PATTERN = re.compile(r"(\r\n|\r|\n)")
DEFAULT_NEWLINE = "\n"


@dataclass
class RecordCounts:
    """Totals over the valid, non-deleted records of a store."""

    enabled: int = 0
    disabled: int = 0
    hidden: int = 0


def detect_encoding(data: bytes, fallback: str = DEFAULT_FALLBACK_ENCODING) -> str:
    """
    Pick the encoding of raw file data.

    Strict UTF-8 wins (keeping a BOM if present); anything else is read
    with the 8-bit fallback encoding.
    """
    encoding = UTF8_BOM if data.startswith(codecs.BOM_UTF8) else UTF8
    try:
        data.decode(encoding, errors="strict")
        return encoding
    except UnicodeDecodeError:
        return fallback


def is_utf8(encoding: str) -> bool:
    return codecs.lookup(encoding).name in ("utf-8", "utf-8-sig")


class RecordStore:
    """
    Ordered collection of records plus the detected file encoding.

    Records that were not mutated are written back exactly as they were
    read, so a load followed by a save reproduces the input.
    """

    def __init__(
        self,
        records: Optional[Iterable[Record]] = None,
        encoding: str = UTF8,
        fallback_encoding: str = DEFAULT_FALLBACK_ENCODING,
        prefer_idn: bool = True,
    ) -> None:
        """
        Create a store.

        Args:
            records: Initial records
            encoding: Encoding used by save() until load() detects another
            fallback_encoding: 8-bit encoding for files that are not UTF-8
            prefer_idn: Render internationalized hosts in Unicode
        """
        self._records: list[Record] = list(records or [])
        self._encoding = encoding
        self._fallback_encoding = fallback_encoding
        self._prefer_idn = prefer_idn
        self._newline = DEFAULT_NEWLINE
        self._final_newline = True

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs) -> "RecordStore":
        store = cls(**kwargs)
        store.load(data)
        return store

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def newline(self) -> str:
        return self._newline

    @property
    def prefer_idn(self) -> bool:
        """Unicode display is only used when the file encoding is UTF-8."""
        return self._prefer_idn and is_utf8(self._encoding)

    @property
    def records(self) -> list[Record]:
        return list(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> Record:
        return self._records[index]

    def load(self, data: bytes) -> None:
        """
        Replace the store's contents with the records in data.

        Every line becomes a record; blank and unparseable lines are kept
        as invalid records so no line is lost. Each record remembers its
        own line ending, so files mixing newline styles save unchanged.
        """
        self._encoding = detect_encoding(data, self._fallback_encoding)
        text = data.decode(self._encoding, errors=self._errors())

        match = NEWLINE_PATTERN.search(text)
        self._newline = match.group(0) if match else DEFAULT_NEWLINE

        parts = NEWLINE_PATTERN.split(text)
        lines, endings = parts[0::2], parts[1::2]
        self._final_newline = lines[-1] == ""
        if self._final_newline:
            lines.pop()
        # The last line has no ending of its own without a final newline
        endings.append(None)

        prefer_idn = self.prefer_idn
        self._records = []
        for line, ending in zip(lines, endings):
            record = Record.parse(line, prefer_idn=prefer_idn)
            record.line_ending = ending
            self._records.append(record)

    def lines(self) -> list[str]:
        """Output text of every non-deleted record, in order."""
        return [record.raw_string for record in self._records if not record.deleted]

    def _pieces(self) -> list[str]:
        """Output lines interleaved with their line endings."""
        records = [record for record in self._records if not record.deleted]
        pieces = []
        for index, record in enumerate(records):
            pieces.append(record.raw_string)
            if index < len(records) - 1 or self._final_newline:
                pieces.append(record.line_ending or self._newline)
        return pieces

    def text(self) -> str:
        return "".join(self._pieces())

    def save(self) -> bytes:
        """
        Render the store to bytes in the detected encoding.

        Undecodable bytes read from an 8-bit file are written back as they
        were. Characters the code page cannot hold become '?', and only
        those characters are replaced.
        """
        encoding = self._encoding
        prefix = b""
        if codecs.lookup(encoding).name == UTF8_BOM:
            prefix, encoding = codecs.BOM_UTF8, UTF8
        return prefix + b"".join(self._encode(piece, encoding) for piece in self._pieces())

    def _encode(self, text: str, encoding: str) -> bytes:
        errors = self._errors()
        try:
            return text.encode(encoding, errors=errors)
        except UnicodeEncodeError:
            chunks = []
            for char in text:
                try:
                    chunks.append(char.encode(encoding, errors=errors))
                except UnicodeEncodeError:
                    chunks.append(b"?")
            return b"".join(chunks)

    def _errors(self) -> str:
        return "strict" if is_utf8(self._encoding) else "surrogateescape"

    def append(self, record: Record) -> None:
        self._records.append(record)

    def remove(self, record: Record) -> bool:
        """Remove a record by identity."""
        for index, item in enumerate(self._records):
            if item is record:
                del self._records[index]
                return True
        return False

    def valid_records(self) -> list[Record]:
        """Valid records that still have aliases."""
        return [record for record in self._records if record.valid and not record.deleted]

    def find_matched(
        self,
        pattern: Union[WildcardPattern, str],
        predicate: Optional[Callable[[Record], bool]] = None,
    ) -> list[Record]:
        """
        Records with at least one alias matching pattern.

        Args:
            pattern: Wildcard mask or compiled pattern
            predicate: Optional extra filter applied to each candidate
        """
        if isinstance(pattern, str):
            pattern = WildcardPattern(pattern)
        return [
            record for record in self.valid_records()
            if record.aliases.is_match(pattern) and (predicate is None or predicate(record))
        ]

    def find_by_address(self, address: Union[AddressValue, str]) -> list[Record]:
        """Records whose address equals address; invalid text matches nothing."""
        if isinstance(address, str):
            address = AddressValue.try_parse(address)
        if address is None:
            return []
        return [record for record in self.valid_records() if record.address == address]

    def find_by_host(
        self,
        host: HostLike,
        family: Optional[AddressFamily] = None,
    ) -> Optional[Record]:
        """First record containing host, optionally limited to one address family."""
        for record in self.valid_records():
            if family is not None and record.address_family is not family:
                continue
            if record.aliases.contains(host):
                return record
        return None

    def add_host(
        self,
        address: Union[AddressValue, str],
        aliases: Union[AliasSet, list[HostLike], str],
        comment: str = "",
    ) -> Record:
        """
        Append a record, first resolving conflicts with existing records.

        Existing records of the same address family that share an alias
        with the new record lose those aliases; a record left with nothing
        but shared aliases is removed outright. Afterwards each alias
        appears in at most one record per address family.

        Raises:
            InvalidAddressError: If the address is invalid
            InvalidHostError: If any alias is invalid
            MalformedRecordError: If no aliases are given
        """
        record = Record(address, aliases, comment, prefer_idn=self.prefer_idn)
        if record.deleted:
            raise MalformedRecordError(str(aliases), "at least one host required")

        incoming = record.aliases
        kept = []
        for existing in self._records:
            if (
                existing.valid
                and not existing.deleted
                and existing.address_family is record.address_family
                and existing.aliases.contains_any(incoming)
            ):
                if existing.aliases.covered_by(incoming):
                    continue
                existing.aliases.remove_all(incoming)
            kept.append(existing)

        kept.append(record)
        self._records = kept
        return record

    def remove_host(self, host: HostLike, family: Optional[AddressFamily] = None) -> int:
        """
        Remove an alias from every record holding it.

        Records left without aliases become deleted.

        Returns:
            Number of records the alias was removed from
        """
        token = HostToken.try_parse(host) if isinstance(host, str) else host
        if token is None:
            return 0
        removed = 0
        for record in self.valid_records():
            if family is not None and record.address_family is not family:
                continue
            if record.aliases.remove(token):
                removed += 1
        return removed

    def remove_lines_with_host(self, host: HostLike, family: Optional[AddressFamily] = None) -> int:
        """Drop whole records containing host, returning how many were dropped."""
        return self._remove_where(
            lambda record: record.valid
            and (family is None or record.address_family is family)
            and record.aliases.contains(host)
        )

    def remove_lines_with_address(self, address: Union[AddressValue, str]) -> int:
        """Drop whole records with the given address."""
        if isinstance(address, str):
            address = AddressValue.try_parse(address)
        if address is None:
            return 0
        return self._remove_where(lambda record: record.valid and record.address == address)

    def remove_invalid(self) -> int:
        """Drop invalid and deleted records."""
        return self._remove_where(lambda record: not record.valid or record.deleted)

    def remove_deleted(self) -> int:
        return self._remove_where(lambda record: record.deleted)

    def _remove_where(self, condition: Callable[[Record], bool]) -> int:
        before = len(self._records)
        self._records = [record for record in self._records if not condition(record)]
        return before - len(self._records)

    def reset_format(self, reset: bool = True) -> None:
        """Force (or stop forcing) every record to re-render on output."""
        for record in self._records:
            record.reset_format = reset

    def counts(self) -> RecordCounts:
        counts = RecordCounts()
        for record in self.valid_records():
            if record.enabled:
                counts.enabled += 1
            else:
                counts.disabled += 1
            if record.hidden:
                counts.hidden += 1
        return counts

    def clone(self) -> "RecordStore":
        """Deep copy of the store; records are cloned."""
        store = RecordStore(
            (record.clone() for record in self._records),
            encoding=self._encoding,
            fallback_encoding=self._fallback_encoding,
            prefer_idn=self._prefer_idn,
        )
        store._newline = self._newline
        store._final_newline = self._final_newline
        return store
