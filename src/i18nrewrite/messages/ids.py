"""Message id generation.

The default generator hashes the canonical template text and the ordered
placeholder names with BLAKE2b (8-byte digest) and renders the 64-bit value
in upper-case base 36. Identical inputs always produce the same id, across
processes and interpreter versions.

A bundle may supply its own generator, which then replaces the default.

Python 3.13+. Zero external dependencies.
"""

import hashlib
from collections.abc import Callable, Sequence
from typing import TypeAlias

__all__ = ["IdGenerator", "default_id_generator", "fingerprint", "to_base36"]

IdGenerator: TypeAlias = Callable[[str, Sequence[str]], str]

_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_DIGEST_SIZE = 8
_SEPARATOR = b"\x00"


def to_base36(value: int) -> str:
    """Render a non-negative integer in upper-case base 36."""
    if value < 0:
        msg = f"to_base36 requires a non-negative value, got {value}"
        raise ValueError(msg)
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_DIGITS[rem])
    return "".join(reversed(digits))


def _digest(chunks: Sequence[str]) -> str:
    hasher = hashlib.blake2b(digest_size=_DIGEST_SIZE)
    for index, chunk in enumerate(chunks):
        if index:
            hasher.update(_SEPARATOR)
        hasher.update(chunk.encode("utf-8"))
    return to_base36(int.from_bytes(hasher.digest(), "big"))


def default_id_generator(text: str, placeholder_names: Sequence[str]) -> str:
    """Derive a stable id from template text and ordered placeholder names.

    Args:
        text: Canonical template text ({$name} placeholder form)
        placeholder_names: Distinct placeholder names in reference order

    Returns:
        Upper-case base-36 id, at most 13 characters
    """
    return _digest([text, *placeholder_names])


def fingerprint(text: str) -> str:
    """Short stable fingerprint of message text, used to name unnamed messages."""
    return _digest([text])
