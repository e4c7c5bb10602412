"""
Ordered, duplicate-free collection of host aliases for one record.
"""

from typing import Iterable, Iterator, Optional, Union

from hosts_editor.host import HostToken
from hosts_editor.pattern import WildcardPattern


HostLike = Union[HostToken, str]


class AliasSet:
    """
    Insertion-ordered set of HostTokens.

    Duplicates (by HostToken equality) are ignored on insert. Only the
    operations the record store needs are exposed; the underlying list is
    never handed out.
    """

    def __init__(self, hosts: Iterable[HostLike] = (), prefer_idn: bool = True) -> None:
        """
        Build a set from hosts.

        Args:
            hosts: HostTokens or host text, added in order
            prefer_idn: Display preference for hosts given as text

        Raises:
            InvalidHostError: If any host text is invalid
        """
        self._prefer_idn = prefer_idn
        self._hosts: list[HostToken] = []
        self.add_all(hosts)

    @classmethod
    def from_text(cls, text: str, prefer_idn: bool = True) -> "AliasSet":
        """Build a set from whitespace-separated host text."""
        return cls(text.split(), prefer_idn)

    def _coerce(self, host: HostLike) -> HostToken:
        if isinstance(host, HostToken):
            return host
        return HostToken.parse(host, self._prefer_idn)

    def add(self, host: HostLike) -> bool:
        """
        Append a host unless an equal one is already present.

        Returns:
            True if the host was inserted, False for a duplicate

        Raises:
            InvalidHostError: If host text is invalid
        """
        token = self._coerce(host)
        if token in self._hosts:
            return False
        self._hosts.append(token)
        return True

    def add_all(self, hosts: Iterable[HostLike]) -> int:
        """Add several hosts, returning how many were inserted."""
        tokens = [self._coerce(host) for host in hosts]
        return sum(1 for token in tokens if self.add(token))

    def contains(self, host: Union[HostLike, None]) -> bool:
        if isinstance(host, str):
            host = HostToken.try_parse(host)
        return host is not None and host in self._hosts

    def contains_any(self, other: Iterable[HostToken]) -> bool:
        """Check whether any host of other is in this set."""
        return any(self.contains(host) for host in other)

    def covered_by(self, other: "AliasSet") -> bool:
        """Check whether every host of this set is in other."""
        return all(other.contains(host) for host in self._hosts)

    def except_(self, other: Iterable[HostToken]) -> "AliasSet":
        """Return a new set with this set's hosts that are not in other."""
        excluded = list(other)
        return AliasSet(
            (host for host in self._hosts if host not in excluded),
            self._prefer_idn,
        )

    def remove(self, host: HostLike) -> bool:
        """Remove a host, returning whether it was present."""
        token = HostToken.try_parse(host) if isinstance(host, str) else host
        if token is None or token not in self._hosts:
            return False
        self._hosts.remove(token)
        return True

    def remove_all(self, other: Iterable[HostToken]) -> int:
        """Remove every host of other, returning how many were removed."""
        return sum(1 for host in list(other) if self.remove(host))

    def is_match(self, pattern: WildcardPattern) -> bool:
        """Check whether any host matches the pattern in either form."""
        return any(self._host_matches(host, pattern) for host in self._hosts)

    def matched(self, pattern: WildcardPattern) -> list[HostToken]:
        """Hosts matching the pattern, in order."""
        return [host for host in self._hosts if self._host_matches(host, pattern)]

    @staticmethod
    def _host_matches(host: HostToken, pattern: WildcardPattern) -> bool:
        return pattern.match(host.ascii) or (host.is_idn and pattern.match(host.unicode))

    @property
    def primary(self) -> Optional[HostToken]:
        """First host, or None for an empty set."""
        return self._hosts[0] if self._hosts else None

    @primary.setter
    def primary(self, host: HostLike) -> None:
        token = self._coerce(host)
        if not self._hosts:
            self._hosts.append(token)
            return
        if token == self._hosts[0]:
            return
        if token in self._hosts:
            self._hosts.remove(token)
        self._hosts[0] = token

    def render(self, prefer_idn: bool = True) -> str:
        """Join display forms with a single space, in insertion order."""
        return " ".join(host.display(prefer_idn) for host in self._hosts)

    def copy(self) -> "AliasSet":
        return AliasSet(self._hosts, self._prefer_idn)

    def __iter__(self) -> Iterator[HostToken]:
        return iter(list(self._hosts))

    def __len__(self) -> int:
        return len(self._hosts)

    def __getitem__(self, index: int) -> HostToken:
        return self._hosts[index]

    def __contains__(self, host: object) -> bool:
        if isinstance(host, (HostToken, str)):
            return self.contains(host)
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasSet):
            return NotImplemented
        return self._hosts == other._hosts

    def __str__(self) -> str:
        return self.render(self._prefer_idn)

    def __repr__(self) -> str:
        return f"AliasSet({[host.ascii for host in self._hosts]!r})"
