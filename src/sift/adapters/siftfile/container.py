"""Chunked binary container format.

Layout, big-endian throughout::

    file   := HEADER chunk*
    HEADER := 0x89 'S' 'I' 'F' 'T' 0x0D 0x0A 0x1A 0x0A
    chunk  := length:u32 type:[u8;4] payload:u8[length] crc:u32

The CRC covers the type tag followed by the payload. The header follows
PNG: the leading byte is outside the ASCII range, "SIFT" is human
readable, and the CR/LF, SUB and LF bytes change if the file ever goes
through a line-ending conversion.

There is no resynchronization: any error aborts the whole read or write.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

from sift.models.exceptions import (
    ChecksumMismatchError,
    ChunkTooLargeError,
    InvalidHeaderError,
    TruncatedChunkError,
    UnexpectedChunkTypeError,
)

from .crc import Digest

HEADER = b"\x89SIFT\r\n\x1a\n"
MAX_CHUNK_SIZE = 1024 * 1024 * 1024  # 1 GiB
TYPE_SIZE = 4

_U32 = struct.Struct(">I")


@dataclass(frozen=True)
class Chunk:
    """A typed payload as stored in the container."""

    chunk_type: bytes
    data: bytes = b""

    def __post_init__(self):
        if len(self.chunk_type) != TYPE_SIZE:
            raise ValueError(f"chunk type must be {TYPE_SIZE} bytes, got {self.chunk_type!r}")

    def compute_crc(self) -> int:
        digest = Digest()
        digest.update(self.chunk_type)
        digest.update(self.data)
        return digest.finalize()


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise TruncatedChunkError(f"unexpected end of file reading {what}: wanted {size} bytes, got {got}")
    return data


def _read_u32(stream: BinaryIO, what: str) -> int:
    (value,) = _U32.unpack(_read_exact(stream, _U32.size, what))
    return value


def write_header(stream: BinaryIO) -> None:
    """Write the fixed file signature."""
    stream.write(HEADER)


def read_header(stream: BinaryIO) -> None:
    """Read and verify the fixed file signature.

    Raises:
        InvalidHeaderError: If the first bytes are not the sift signature
    """
    header = stream.read(len(HEADER))
    if header != HEADER:
        raise InvalidHeaderError("Invalid header: not a sift file")


def write_chunk(stream: BinaryIO, chunk: Chunk) -> None:
    """Write one chunk: length, type, payload and CRC.

    Raises:
        ChunkTooLargeError: If the payload would not be readable back
    """
    length = len(chunk.data)
    if length > MAX_CHUNK_SIZE:
        raise ChunkTooLargeError(length, MAX_CHUNK_SIZE)
    stream.write(_U32.pack(length))
    stream.write(chunk.chunk_type)
    stream.write(chunk.data)
    stream.write(_U32.pack(chunk.compute_crc()))


def read_chunk(stream: BinaryIO) -> Chunk:
    """Read and verify one chunk.

    The length is checked against MAX_CHUNK_SIZE before the payload is
    read, so a corrupted length field cannot trigger a huge allocation.

    Raises:
        ChunkTooLargeError: If the length field exceeds the limit
        TruncatedChunkError: If the stream ends inside the chunk
        ChecksumMismatchError: If the stored CRC does not match
    """
    length = _read_u32(stream, "chunk length")
    if length > MAX_CHUNK_SIZE:
        raise ChunkTooLargeError(length, MAX_CHUNK_SIZE)
    chunk_type = _read_exact(stream, TYPE_SIZE, "chunk type")
    data = _read_exact(stream, length, "chunk payload")
    stored_crc = _read_u32(stream, "chunk CRC")

    chunk = Chunk(chunk_type, data)
    actual_crc = chunk.compute_crc()
    if stored_crc != actual_crc:
        raise ChecksumMismatchError(chunk_type, stored_crc, actual_crc)
    return chunk


def expect_type(chunk: Chunk, chunk_type: bytes) -> None:
    """Fail unless ``chunk`` carries the ``chunk_type`` tag.

    Raises:
        UnexpectedChunkTypeError: On a tag mismatch
    """
    if chunk.chunk_type != chunk_type:
        raise UnexpectedChunkTypeError(chunk_type, chunk.chunk_type)
