"""Fractional indexing over lowercase ASCII strings.

``midpoint(left, right)`` returns a key that sorts strictly between two
existing keys, so an item can be placed between two others without
renumbering anything.
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import chain, repeat

_LOW = ord("a")
_HIGH = ord("z")
# Virtual digits just outside the alphabet: a missing left digit is
# smaller than every letter, a missing right digit larger than every letter.
_BEFORE = _LOW - 1
_AFTER = _HIGH + 1


def _is_key(value: str) -> bool:
    return all("a" <= ch <= "z" for ch in value)


def _digits(value: str, pad: int) -> Iterator[int]:
    return chain(map(ord, value), repeat(pad))


def midpoint(left: str, right: str) -> str:
    """Return a key sorting strictly between ``left`` and ``right``.

    An empty ``left`` means no lower bound and an empty ``right`` means no
    upper bound. The result never ends in ``a``, since such a key could
    always be shortened.

    Returns:
        The new key, or ``""`` if either input holds a character outside
        ``a``-``z``, ``left >= right`` with both non-empty, or ``right`` is
        ``left`` followed only by ``a``s (no key fits in between)
    """
    if not _is_key(left) or not _is_key(right):
        return ""
    if left and right and left >= right:
        return ""

    lefts = _digits(left, _BEFORE)
    rights = _digits(right, _AFTER)
    mid: list[str] = []

    # Copy the common prefix.
    lo = hi = 0
    while lo == hi:
        lo = next(lefts)
        hi = next(rights)
        if lo == hi:
            mid.append(chr(lo))

    if lo == _BEFORE:
        # left is a prefix of right: skip past right's run of "a"s, then a
        # "b" only leaves room below it after one more "a".
        while hi == _LOW:
            mid.append("a")
            hi = next(rights)
        if hi == _AFTER:
            # right is left followed only by "a"s: every key in between
            # would end in "a".
            return ""
        if hi == _LOW + 1:
            mid.append("a")
            hi = _AFTER
    elif lo + 1 == hi:
        # Adjacent digits: keep left's digit and look for room after it,
        # carrying over any run of "z"s.
        mid.append(chr(lo))
        hi = _AFTER
        lo = next(lefts)
        while lo == _HIGH:
            mid.append("z")
            lo = next(lefts)

    mid.append(chr(hi - (hi - lo) // 2))
    return "".join(mid)
