"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Streams files through BLAKE2b-256 and reports read throughput.

- Reads in fixed 4 MiB chunks, never the whole file at once
- Any open/read failure is fatal for the run (HashingError), there is no retry
- Copies of the same file are hashed side by side, one worker per copy
"""

import hashlib
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from brahe.core.errors import HashingError
from brahe.core.models import DigestResult

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4 * 1024 * 1024  # 4 MiB
DIGEST_SIZE = 32  # 256-bit


def new_hasher():
    """Fresh streaming hash object used everywhere a digest is produced."""
    return hashlib.blake2b(digest_size=DIGEST_SIZE)


def hash_file(path: str) -> DigestResult:
    """
    Computes the digest of a whole file.

    Args:
        path: File to read

    Returns:
        DigestResult: digest bytes and throughput in MB/s

    Raises:
        HashingError: If the file cannot be opened or read
    """
    start = time.perf_counter()
    total_bytes = 0
    hasher = new_hasher()

    try:
        with open(path, "rb") as f:
            while chunk := f.read(CHUNK_SIZE):
                hasher.update(chunk)
                total_bytes += len(chunk)
    except OSError as e:
        raise HashingError(f"Failed reading file: {path} - {e}") from e

    elapsed = time.perf_counter() - start
    mb_per_sec = (total_bytes / 1000 / 1000) / elapsed if elapsed > 0 else 0.0

    result = DigestResult(path=path, digest=hasher.digest(), mb_per_sec=mb_per_sec)
    logger.debug(f"Hashed {path} ({total_bytes} bytes, {mb_per_sec:.2f} MB/s) {result.hex}")
    return result


def hash_files_concurrently(paths: Sequence[str]) -> List[DigestResult]:
    """
    Hashes every copy of one file at the same time and waits for all of them.
    Concurrency is bounded by the number of copies, never by the tree size.

    Returns:
        Results in the same order as `paths`

    Raises:
        HashingError: The first failure of any worker
    """
    if not paths:
        return []
    if len(paths) == 1:
        return [hash_file(paths[0])]

    with ThreadPoolExecutor(max_workers=len(paths), thread_name_prefix="brahe-hash") as pool:
        futures = [pool.submit(hash_file, path) for path in paths]
        return [future.result() for future in futures]


def average_throughput(results: Sequence[DigestResult]) -> float:
    """Mean MB/s across results. Informational only."""
    if not results:
        return 0.0
    return sum(r.mb_per_sec for r in results) / len(results)
