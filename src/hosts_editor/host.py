"""
Host name token validation and IDN handling.

Provides a validated host name with paired ASCII (punycode) and Unicode
forms, using the idna library for IDNA 2008 label conversion.
"""

import re
from typing import Optional, Union

import idna

from hosts_editor.exceptions import InvalidHostError


# One dot-separated segment of a host name, checked against the ASCII form
HOST_LABEL_PATTERN = re.compile(r"^[a-z0-9][-_a-z0-9]*$")

ACE_PREFIX = "xn--"
MAX_LABEL_LENGTH = 63
MAX_HOST_LENGTH = 253


class HostToken:
    """
    A single validated host name (label or FQDN).

    Handles:
    - Case-insensitive label syntax checking
    - Decoding of ACE-prefixed labels to Unicode, with re-encoding to
      confirm the label round-trips
    - Encoding of Unicode input to its ASCII form
    - Display in Unicode or ASCII depending on ``prefer_idn``
    """

    __slots__ = ("_ascii", "_unicode", "_prefer_idn")

    def __init__(self, text: str, prefer_idn: bool = True) -> None:
        """
        Validate and normalize a host name.

        Args:
            text: Raw host text (ASCII, punycode or Unicode)
            prefer_idn: Display the Unicode form when the host is internationalized

        Raises:
            InvalidHostError: If the syntax check or IDN round-trip fails
        """
        if not isinstance(text, str) or not text:
            raise InvalidHostError(str(text), details={"reason": "empty"})

        host = text.lower()
        ascii_labels = []
        unicode_labels = []
        for label in host.split("."):
            ascii_label, unicode_label = self._convert_label(text, label)
            ascii_labels.append(ascii_label)
            unicode_labels.append(unicode_label)

        ascii_host = ".".join(ascii_labels)
        if len(ascii_host) > MAX_HOST_LENGTH:
            raise InvalidHostError(text, details={"reason": "too long"})

        self._ascii = ascii_host
        self._unicode = ".".join(unicode_labels)
        self._prefer_idn = prefer_idn

    @staticmethod
    def _convert_label(text: str, label: str) -> tuple[str, str]:
        """
        Convert one label to its (ascii, unicode) pair.

        Raises:
            InvalidHostError: If the label is empty, malformed or not IDNA-valid
        """
        if not label:
            raise InvalidHostError(text, details={"reason": "empty label"})

        try:
            if label.isascii():
                ascii_label = label
            else:
                ascii_label = idna.encode(label, uts46=True).decode("ascii")

            if len(ascii_label) > MAX_LABEL_LENGTH or not HOST_LABEL_PATTERN.match(ascii_label):
                raise InvalidHostError(text, details={"reason": "syntax", "label": label})

            if not ascii_label.startswith(ACE_PREFIX):
                return ascii_label, ascii_label

            unicode_label = idna.decode(ascii_label)
            if idna.encode(unicode_label).decode("ascii") != ascii_label:
                raise InvalidHostError(text, details={"reason": "idn round-trip", "label": label})
        except (idna.IDNAError, UnicodeError) as e:
            raise InvalidHostError(text, details={"reason": "idna", "idna_error": str(e)})

        return ascii_label, unicode_label

    @classmethod
    def parse(cls, text: str, prefer_idn: bool = True) -> "HostToken":
        """Parse text, raising InvalidHostError on failure."""
        return cls(text, prefer_idn)

    @classmethod
    def try_parse(cls, text: str, prefer_idn: bool = True) -> Optional["HostToken"]:
        """Parse text, returning None on failure."""
        try:
            return cls(text, prefer_idn)
        except InvalidHostError:
            return None

    @property
    def ascii(self) -> str:
        return self._ascii

    @property
    def unicode(self) -> str:
        return self._unicode

    @property
    def prefer_idn(self) -> bool:
        return self._prefer_idn

    @property
    def is_idn(self) -> bool:
        """True when the Unicode form differs from the ASCII form."""
        return self._ascii != self._unicode

    def display(self, prefer_idn: Optional[bool] = None) -> str:
        """
        Return the display form.

        Args:
            prefer_idn: Override the token's own preference

        Returns:
            Unicode form for internationalized hosts when preferred, else ASCII
        """
        if prefer_idn is None:
            prefer_idn = self._prefer_idn
        return self._unicode if prefer_idn and self.is_idn else self._ascii

    def equals(self, other: Union["HostToken", str, None]) -> bool:
        """Compare by Unicode form; text that does not parse never matches."""
        if isinstance(other, str):
            other = HostToken.try_parse(other)
        if not isinstance(other, HostToken):
            return False
        return self._unicode == other._unicode

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HostToken):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self._unicode)

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return f"HostToken({self._ascii!r})"


def is_valid_host(text: str) -> bool:
    """Check whether text is an acceptable host token."""
    return HostToken.try_parse(text) is not None
