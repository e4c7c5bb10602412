"""
Glob-style wildcard matching for host masks.

``*`` matches any run of characters (including none), ``?`` matches exactly
one character, everything else matches literally and case-insensitively.
"""

import re


class WildcardPattern:
    """A compiled wildcard mask anchored at both ends."""

    def __init__(self, pattern: str) -> None:
        """
        Compile a wildcard mask.

        Args:
            pattern: Mask text; any text is a valid mask
        """
        self._pattern = pattern
        parts = []
        for char in pattern:
            if char == "*":
                parts.append(".*")
            elif char == "?":
                parts.append(".")
            else:
                parts.append(re.escape(char))
        self._regex = re.compile("".join(parts), re.IGNORECASE | re.DOTALL)

    @property
    def pattern(self) -> str:
        return self._pattern

    def match(self, text: str) -> bool:
        """Check whether the whole of text matches the mask."""
        return self._regex.fullmatch(text) is not None

    def __repr__(self) -> str:
        return f"WildcardPattern({self._pattern!r})"


def widen_mask(mask: str) -> str:
    """Surround a mask with ``*`` so it matches as a substring."""
    if not mask.startswith("*"):
        mask = "*" + mask
    if not mask.endswith("*"):
        mask += "*"
    return mask
