"""
Filesystem walker for srch.

This module provides depth-bounded, depth-first directory traversal. At every
directory level it reads that directory's ignore file, filters hidden and
ignored children, classifies each remaining child and either matches its name
against the pattern or, in content mode, searches text files line by line.
Every match is pushed to a ResultSink.

Symbolic links are followed through ordinary stat calls. Symlink cycles are
not detected; the walk through a cycle ends only when max_depth runs out.
"""

import os
import logging
from typing import Dict, List, Optional, Sequence

from ..models.config import DEFAULT_IGNORE_FILE_NAMES
from ..models.search_query import SearchQuery
from ..models.search_results import EntryMetadata, MatchEntry
from .classifier import DEFAULT_SNIFF_SIZE, classify, is_binary, read_text
from .content_locator import contains_pattern, locate
from .ignore_rules import build_ignore_rules
from .result_sink import ResultSink


logger = logging.getLogger(__name__)

HIDDEN_MARKER = "."


class TreeWalker:
    """
    Recursive walker that feeds matches into a ResultSink.

    Children of a directory are visited in name order. That order also
    decides which ignore file applies when a directory holds several: the
    first recognised name in sorted order wins, so '.gitignore' is used
    over '.ignore'.
    """

    def __init__(
        self,
        query: SearchQuery,
        sink: ResultSink,
        ignore_file_names: Sequence[str] = tuple(DEFAULT_IGNORE_FILE_NAMES),
        sniff_size: int = DEFAULT_SNIFF_SIZE,
    ):
        """
        Initialize the walker.

        Args:
            query: Validated search parameters
            sink: Receives matches and file/folder counts
            ignore_file_names: Names recognised as ignore files
            sniff_size: Bytes inspected by the binary check
        """
        self.query = query
        self.sink = sink
        self.ignore_file_names = tuple(ignore_file_names)
        self.sniff_size = sniff_size
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'hidden_skipped': 0,
            'ignored_skipped': 0,
            'binary_skipped': 0,
            'unreadable': 0,
            'invalid_name': 0,
        }

    def walk(self, root: Optional[str] = None) -> None:
        """
        Walk from root (the query root by default) down to query.max_depth.

        A depth of zero visits nothing. A root that does not exist is
        silently skipped.
        """
        root = root if root is not None else self.query.root
        depth = self.query.max_depth

        if depth == 0:
            logger.debug("Depth is 0, nothing to search")
            return

        if not _is_utf8(root):
            logger.warning(f"Root path is not valid UTF-8, nothing to search: {root!r}")
            return

        classification = classify(root)
        if not classification.exists:
            logger.debug(f"Root is not accessible: {root}")
            return

        logger.debug(f"Walking {root} (depth={depth}, mode={self.query.mode.value})")
        if self.query.is_content_search():
            self._search_content(root, depth, classification.metadata)
        elif classification.is_dir:
            self._search_names(root, depth)

    def _search_names(self, path: str, depth: int) -> None:
        if depth == 0:
            return

        for entry in self._list_children(path):
            child = classify(entry.path)
            self._count(child.metadata)

            if self.query.pattern in entry.name:
                self.sink.push(MatchEntry(path=entry.path, name=entry.name, metadata=child.metadata))

            # Children of a matched directory are still searched.
            if child.is_dir:
                self._search_names(entry.path, depth - 1)

    def _search_content(self, path: str, depth: int, metadata: EntryMetadata) -> None:
        if not metadata.is_dir:
            # Files are inspected whatever depth remains; depth only limits
            # how far directories are descended.
            self._search_file(path, metadata)
            return

        if depth == 0:
            return

        for entry in self._list_children(path):
            child = classify(entry.path)
            self._count(child.metadata)
            if child.exists:
                self._search_content(entry.path, depth - 1, child.metadata)

    def _search_file(self, path: str, metadata: EntryMetadata) -> None:
        """Push one match per occurrence of the pattern in a text file."""
        if is_binary(path, self.sniff_size):
            logger.debug(f"Skipping binary file: {path}")
            self._stats['binary_skipped'] += 1
            return

        text = read_text(path)
        if text is None:
            self._stats['unreadable'] += 1
            return

        if not contains_pattern(text, self.query.pattern):
            return

        for line, column in locate(text, self.query.pattern):
            self.sink.push(MatchEntry(path=path, line=line, column=column, metadata=metadata))

    def _list_children(self, path: str) -> List[os.DirEntry]:
        """
        List the children of a directory that pass the hidden and ignore filters.

        Unreadable directories yield no children. Entries whose names are not
        valid UTF-8 are skipped, since they cannot be printed or matched as text.
        """
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Cannot list directory {path}: {e}")
            self._stats['unreadable'] += 1
            return []

        ignore_rules = set()
        if self.query.use_ignore_rules:
            ignore_rules = build_ignore_rules(entries, self.ignore_file_names)

        children = []
        for entry in entries:
            if not _is_utf8(entry.path):
                logger.debug(f"Skipping entry whose path is not valid UTF-8: {entry.path!r}")
                self._stats['invalid_name'] += 1
                continue
            if not self.query.include_hidden and entry.name.startswith(HIDDEN_MARKER):
                self._stats['hidden_skipped'] += 1
                continue
            if entry.name in ignore_rules:
                self._stats['ignored_skipped'] += 1
                continue
            children.append(entry)
        return children

    def _count(self, metadata: Optional[EntryMetadata]) -> None:
        """Count a classified child; children whose stat failed are not counted."""
        if metadata is None:
            return
        if metadata.is_dir:
            self.sink.count_folder()
        else:
            self.sink.count_file()

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about skipped entries.

        Returns:
            Dictionary of skip counters
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()


def _is_utf8(path: str) -> bool:
    """Whether a path decoded from the filesystem is valid UTF-8 text."""
    try:
        path.encode('utf-8')
    except UnicodeEncodeError:
        return False
    return True
