"""
Network address value type.

Parses IPv4 and IPv6 literals and reduces them to a canonical text form so
that two spellings of the same address compare equal.
"""

import ipaddress
from typing import Optional, Union

from hosts_editor.enums import AddressFamily
from hosts_editor.exceptions import InvalidAddressError


class AddressValue:
    """
    Immutable, validated IPv4 or IPv6 address.

    The canonical form of an IPv6 address collapses the longest run of two
    or more zero groups into ``::`` (leftmost run on ties) and renders the
    remaining groups as minimal lowercase hex. IPv4 addresses keep their
    dotted-quad spelling.
    """

    __slots__ = ("_family", "_canonical", "_ip")

    def __init__(self, text: str) -> None:
        """
        Parse an address literal.

        Args:
            text: IPv4 dotted-quad or IPv6 literal

        Raises:
            InvalidAddressError: If text is not a valid address literal
        """
        if not isinstance(text, str) or not text:
            raise InvalidAddressError(str(text))

        try:
            ip: Union[ipaddress.IPv4Address, ipaddress.IPv6Address] = ipaddress.ip_address(text)
        except ValueError as e:
            raise InvalidAddressError(text, details={"reason": str(e)})

        self._ip = ip
        if ip.version == 4:
            self._family = AddressFamily.IPV4
        else:
            self._family = AddressFamily.IPV6
        # ipaddress renders IPv6 per RFC 5952, which is the reduction above
        self._canonical = ip.compressed

    @classmethod
    def parse(cls, text: str) -> "AddressValue":
        """Parse text, raising InvalidAddressError on failure."""
        return cls(text)

    @classmethod
    def try_parse(cls, text: str) -> Optional["AddressValue"]:
        """Parse text, returning None on failure."""
        try:
            return cls(text)
        except InvalidAddressError:
            return None

    @property
    def family(self) -> AddressFamily:
        return self._family

    @property
    def canonical(self) -> str:
        return self._canonical

    @property
    def is_ipv4(self) -> bool:
        return self._family is AddressFamily.IPV4

    @property
    def is_ipv6(self) -> bool:
        return self._family is AddressFamily.IPV6

    def equals(self, other: Union["AddressValue", str, None]) -> bool:
        """
        Compare with another address or address text.

        Text that does not parse never compares equal.
        """
        if isinstance(other, str):
            other = AddressValue.try_parse(other)
        if not isinstance(other, AddressValue):
            return False
        return self._family is other._family and self._canonical == other._canonical

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressValue):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self._family, self._canonical))

    def __lt__(self, other: "AddressValue") -> bool:
        if not isinstance(other, AddressValue):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def _sort_key(self) -> tuple:
        return (self._ip.version, int(self._ip), self._canonical)

    def __str__(self) -> str:
        return self._canonical

    def __repr__(self) -> str:
        return f"AddressValue({self._canonical!r})"
