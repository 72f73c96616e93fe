"""Sift file format: CRC-protected chunk container holding a task document."""

from .container import HEADER, MAX_CHUNK_SIZE, Chunk, expect_type, read_chunk, read_header, write_chunk, write_header
from .crc import Digest, crc32
from .document import (
    AUTOMERGE_CHUNK,
    END_CHUNK,
    decode,
    decode_document,
    encode,
    encode_document,
    read_document,
    write_document,
)
from .storage import load_tasks, save_tasks

__all__ = [
    "HEADER",
    "MAX_CHUNK_SIZE",
    "Chunk",
    "expect_type",
    "read_chunk",
    "read_header",
    "write_chunk",
    "write_header",
    "Digest",
    "crc32",
    "AUTOMERGE_CHUNK",
    "END_CHUNK",
    "encode",
    "decode",
    "encode_document",
    "decode_document",
    "read_document",
    "write_document",
    "load_tasks",
    "save_tasks",
]
