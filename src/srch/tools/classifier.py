"""
Entry classification for the tree walker.

Resolves whether a path is a directory, captures its metadata, and decides
whether a file is text that can be searched or binary that must be skipped.
"""

import os
import stat
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..models.search_results import EntryMetadata


logger = logging.getLogger(__name__)

DEFAULT_SNIFF_SIZE = 1024

# Longest UTF-8 sequence is four bytes, so at most three can be cut off
# by the end of the sample.
_MAX_TRUNCATED_TAIL = 3


@dataclass
class Classification:
    """
    Outcome of classifying one path.

    Attributes:
        path: The classified path
        metadata: Captured metadata, or None when stat failed
    """
    path: str
    metadata: Optional[EntryMetadata]

    @property
    def exists(self) -> bool:
        return self.metadata is not None

    @property
    def is_dir(self) -> bool:
        return self.metadata is not None and self.metadata.is_dir


def extract_metadata(path: str) -> Optional[EntryMetadata]:
    """
    Extract metadata from a path, following symlinks.

    Args:
        path: Path to inspect

    Returns:
        EntryMetadata, or None if the path vanished or cannot be stat'ed
    """
    try:
        stat_result = os.stat(path)
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot stat {path}: {e}")
        return None

    # Only a real birth time counts as creation time; st_ctime on Linux is
    # the inode change time.
    created_time = _to_datetime(getattr(stat_result, 'st_birthtime', None))
    modified_time = _to_datetime(stat_result.st_mtime)

    mode = stat_result.st_mode
    return EntryMetadata(
        is_dir=stat.S_ISDIR(mode),
        size=stat_result.st_size,
        created_time=created_time,
        modified_time=modified_time,
        readonly=not (mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH)),
    )


def _to_datetime(timestamp: Optional[float]) -> Optional[datetime]:
    """Convert a stat timestamp, or None when it is absent or out of range."""
    if timestamp is None:
        return None
    try:
        return datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError):
        return None


def classify(path: str) -> Classification:
    """Classify a path as directory/file and capture its metadata."""
    return Classification(path=path, metadata=extract_metadata(path))


def looks_binary(chunk: bytes) -> bool:
    """
    Decide from a byte sample whether content is binary.

    A null byte, or a byte sequence that is not valid UTF-8, marks the sample
    as binary. A multi-byte character cut off by the end of the sample does
    not count as invalid.
    """
    if b'\x00' in chunk:
        return True

    try:
        chunk.decode('utf-8')
    except UnicodeDecodeError as e:
        truncated_tail = e.reason == 'unexpected end of data' and len(chunk) - e.start <= _MAX_TRUNCATED_TAIL
        return not truncated_tail

    return False


def is_binary(path: str, sniff_size: int = DEFAULT_SNIFF_SIZE) -> bool:
    """
    Check if a file appears to be binary.

    Args:
        path: File to check
        sniff_size: Number of leading bytes to inspect

    Returns:
        True if the file appears binary or cannot be read
    """
    try:
        with open(path, 'rb') as f:
            chunk = f.read(sniff_size)
    except OSError as e:
        logger.debug(f"Cannot read {path} for binary check: {e}")
        return True

    return looks_binary(chunk)


def read_text(path: str) -> Optional[str]:
    """
    Read a whole file as UTF-8 text.

    Returns:
        File contents, or None if the file cannot be read or decoded
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read {path} as text: {e}")
        return None
