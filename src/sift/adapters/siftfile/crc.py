"""CRC-32 digest for container chunks.

This is the CRC-32/ISO-HDLC algorithm (ITU-T V.42), the same CRC used by
zlib, gzip and PNG: reflected polynomial 0xEDB88320, initial value and
final XOR both 0xFFFFFFFF.
"""

from __future__ import annotations

_POLYNOMIAL = 0xEDB88320
_MASK = 0xFFFFFFFF


def _make_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            if c & 1:
                c = _POLYNOMIAL ^ (c >> 1)
            else:
                c >>= 1
        table.append(c)
    return tuple(table)


CRC_TABLE = _make_table()


class Digest:
    """Incrementally updatable CRC-32 digest."""

    def __init__(self):
        self.value = _MASK

    def update(self, data: bytes) -> None:
        """Fold ``data`` into the running value."""
        c = self.value
        for byte in data:
            c = CRC_TABLE[(c ^ byte) & 0xFF] ^ (c >> 8)
        self.value = c

    def finalize(self) -> int:
        """Return the checksum of everything fed so far."""
        return self.value ^ _MASK


def crc32(data: bytes) -> int:
    """Compute the CRC-32 of ``data`` in one call."""
    digest = Digest()
    digest.update(data)
    return digest.finalize()
