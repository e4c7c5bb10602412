"""Content digest used to detect whether a record changed since parsing."""

import hashlib


def half_digest(text: str) -> int:
    """
    Compute a 64-bit digest of text.

    Takes the first eight bytes of the MD5 digest of the UTF-8 encoding,
    read big-endian. Used only as a change detector, not for security.
    Lone surrogates (undecodable bytes of an 8-bit file) are hashed as is.
    """
    data = text.encode("utf-8", errors="surrogatepass")
    digest = hashlib.md5(data, usedforsecurity=False).digest()
    return int.from_bytes(digest[:8], "big")
