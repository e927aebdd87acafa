"""
Result accumulation and rendering for srch.

The ResultSink is created once per run and passed through the walk. It keeps
every match in order, counts classified files and folders, renders matches
to a rich Console as they arrive, and stops rendering once the overflow
threshold is reached so pathological match volumes do not flood the terminal.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console
from rich.text import Text

from ..models.search_results import EntryMetadata, MatchEntry, SearchSummary


logger = logging.getLogger(__name__)

DEFAULT_OVERFLOW_THRESHOLD = 100
LABEL_WIDTH = 15


class ResultIndexError(IndexError):
    """Raised when a requested result index is beyond the result count."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Result index {index} is out of range: only {count} result(s) found")


class ResultSink:
    """
    Accumulates, counts and renders search results.

    Attributes:
        console: Output collaborator; write errors from it propagate
        verbose: Follow each result with its metadata block
        path_only: Render bare locators without styling or metadata
        stream: Render results as they are pushed
        overflow_threshold: Results rendered immediately before deferring
        pattern: Pattern highlighted in matched names
    """

    def __init__(
        self,
        console: Console,
        pattern: str = "",
        verbose: bool = False,
        path_only: bool = False,
        stream: bool = True,
        overflow_threshold: int = DEFAULT_OVERFLOW_THRESHOLD,
        highlight_style: str = "bold red",
        location_style: str = "cyan",
    ):
        if overflow_threshold <= 0:
            raise ValueError("Overflow threshold must be positive")

        self.console = console
        self.pattern = pattern
        self.verbose = verbose
        self.path_only = path_only
        self.stream = stream
        self.overflow_threshold = overflow_threshold
        self.highlight_style = highlight_style
        self.location_style = location_style

        self.entries: List[MatchEntry] = []
        self.deferred: List[MatchEntry] = []
        self.file_count = 0
        self.folder_count = 0
        self._rendered = 0

    def push(self, entry: MatchEntry) -> None:
        """
        Record a match.

        While streaming, the first ``overflow_threshold`` matches render
        immediately; later ones are kept in ``deferred`` for bulk handling.
        """
        self.entries.append(entry)

        if not self.stream:
            return

        if len(self.entries) <= self.overflow_threshold:
            self.render(entry)
        else:
            if not self.deferred:
                logger.debug(f"Overflow threshold {self.overflow_threshold} reached, deferring further results")
            self.deferred.append(entry)

    def count_file(self) -> None:
        self.file_count += 1

    def count_folder(self) -> None:
        self.folder_count += 1

    def render(self, entry: MatchEntry) -> None:
        """Render one entry, plus its metadata block in verbose mode."""
        self._rendered += 1

        if self.path_only:
            # Bypasses rich, which strips control characters and expands tabs.
            self.console.file.write(entry.locator() + "\n")
            return

        if self.verbose and self._rendered > 1:
            self.console.print()

        # soft_wrap keeps long paths on one line so locators stay parseable
        self.console.print(self.format_entry(entry), soft_wrap=True)

        if self.verbose:
            for line in self.format_metadata(entry.metadata):
                self.console.print(line, soft_wrap=True, markup=False, highlight=False)

    def format_entry(self, entry: MatchEntry) -> Text:
        """
        Build the styled text of an entry.

        Content matches style the line and column fields. Name matches style
        only the last occurrence of the pattern within the entry name.
        """
        if self.path_only:
            return Text(entry.locator())

        if entry.is_content_match():
            text = Text(entry.path)
            text.append(":")
            text.append(str(entry.line), style=self.location_style)
            text.append(":")
            text.append(str(entry.column), style=self.location_style)
            return text

        name = entry.get_name()
        if not self.pattern or not entry.path.endswith(name):
            return Text(entry.path)

        before, found, after = name.rpartition(self.pattern)
        if not found:
            return Text(entry.path)

        text = Text(entry.path[:len(entry.path) - len(name)])
        text.append(before)
        text.append(found, style=self.highlight_style)
        text.append(after)
        return text

    def format_metadata(self, metadata: Optional[EntryMetadata]) -> List[str]:
        """Get the lines of a verbose metadata block."""
        if metadata is None:
            return [f"{'Metadata:':<{LABEL_WIDTH}} _"]

        lines = [
            f"{'Created:':<{LABEL_WIDTH}} {EntryMetadata.format_time(metadata.created_time)}",
            f"{'Last modified:':<{LABEL_WIDTH}} {EntryMetadata.format_time(metadata.modified_time)}",
            f"{'File type:':<{LABEL_WIDTH}} {metadata.type_label()}",
        ]
        if not metadata.is_dir:
            lines.append(f"{'File size:':<{LABEL_WIDTH}} {metadata.size_label()}")
        lines.append(f"{'Permissions:':<{LABEL_WIDTH}} {metadata.permissions_label()}")
        return lines

    def select(self, limit: Optional[int] = None, index: Optional[int] = None) -> List[MatchEntry]:
        """
        Post-filter the full result list.

        Args:
            limit: Keep only the first ``limit`` results
            index: Keep only the result at this 1-based position

        Raises:
            ResultIndexError: If ``index`` is beyond the number of results
        """
        if index is not None:
            if index < 1 or index > len(self.entries):
                raise ResultIndexError(index, len(self.entries))
            return [self.entries[index - 1]]

        if limit is not None:
            return self.entries[:limit]

        return list(self.entries)

    def render_all(self, entries: List[MatchEntry]) -> None:
        """
        Render selected entries after the walk.

        The overflow threshold still applies: entries past it are added to
        ``deferred`` instead of being rendered.
        """
        for entry in entries:
            if self._rendered < self.overflow_threshold:
                self.render(entry)
            else:
                if not self.deferred:
                    logger.debug(f"Overflow threshold {self.overflow_threshold} reached, deferring further results")
                self.deferred.append(entry)

    def write_overflow(self, output_path: Union[str, Path]) -> int:
        """
        Write deferred results to a file, one plain locator per line.

        Returns:
            Number of results written
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            for entry in self.deferred:
                f.write(entry.locator() + "\n")

        logger.info(f"Wrote {len(self.deferred)} deferred results to {output_path}")
        return len(self.deferred)

    def finalize(self) -> SearchSummary:
        return SearchSummary(
            total_matches=len(self.entries),
            files=self.file_count,
            folders=self.folder_count,
            rendered=self._rendered,
            deferred=len(self.deferred),
        )
