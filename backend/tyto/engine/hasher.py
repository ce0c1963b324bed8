"""
Content fingerprinting.

DocumentIDs and CategoryIDs are XXH64 (seed 0) digests rendered as
lowercase hex without zero padding. They depend only on the bytes hashed,
so they are stable across runs, processes and platforms.
"""

from __future__ import annotations

import os

import xxhash

CHUNK_SIZE = 64 * 1024


def fingerprint(data: bytes) -> int:
    """64-bit fingerprint of ``data``"""
    return xxhash.xxh64_intdigest(data)


def to_hex(value: int) -> str:
    return format(value, "x")


def fingerprint_hex(data: bytes) -> str:
    """Fingerprint of ``data`` in ID form"""
    return to_hex(fingerprint(data))


def fingerprint_file(path: str | os.PathLike[str], chunk_size: int = CHUNK_SIZE) -> int:
    """
    Fingerprint a file without loading it into memory.

    Args:
        path: File to hash
        chunk_size: Bytes read per iteration

    Returns:
        The same value ``fingerprint`` gives for the file's full contents

    Raises:
        OSError: If the file cannot be opened or read
    """
    hasher = xxhash.xxh64()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)
    return hasher.intdigest()
