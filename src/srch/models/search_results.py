"""
Search results data models for srch.

This module defines the core data structures for representing search results,
including per-entry filesystem metadata, individual match entries and the
end-of-run summary.
"""

from typing import Optional, Tuple
from datetime import datetime
from pathlib import Path
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator


KB = 1024
MB = 1024 * 1024
GB = 1024 * 1024 * 1024

TIME_FORMAT = "%d/%m/%y %H:%M:%S"


class SearchMode(Enum):
    """What the pattern is matched against."""
    NAME = "name"
    CONTENT = "content"


class EntryMetadata(BaseModel):
    """
    Filesystem metadata captured for a matched entry.

    Attributes:
        is_dir: Whether the entry is a directory
        size: Size in bytes as reported by stat
        created_time: Creation (birth) time, if the platform reports one
        modified_time: Last modification time, if available
        readonly: True when no write permission bit is set
    """

    is_dir: bool = Field(False, description="Whether the entry is a directory")
    size: int = Field(0, ge=0, description="Size in bytes")
    created_time: Optional[datetime] = Field(None, description="Creation timestamp")
    modified_time: Optional[datetime] = Field(None, description="Last modification timestamp")
    readonly: bool = Field(False, description="Whether the entry is read only")

    def type_label(self) -> str:
        """Get 'dir' or 'file'."""
        return "dir" if self.is_dir else "file"

    def size_label(self) -> str:
        """
        Get the size bucketed into the largest of KB/MB/GB that does not
        truncate to zero. Sizes below one kilobyte report as 0KB.
        """
        if self.size >= GB:
            return f"{self.size // GB}GB"
        if self.size >= MB:
            return f"{self.size // MB}MB"
        return f"{self.size // KB}KB"

    def permissions_label(self) -> str:
        return "read only" if self.readonly else "all"

    @staticmethod
    def format_time(value: Optional[datetime]) -> str:
        """Format a timestamp as DD/MM/YY HH:MM:SS, or '_' when unknown."""
        if value is None:
            return "_"
        return value.strftime(TIME_FORMAT)


class MatchEntry(BaseModel):
    """
    A single reported search result.

    Name matches carry the entry ``name`` the pattern was found in. Content
    matches carry a 1-based ``line`` and a 0-based character ``column``.

    Attributes:
        path: Path of the matched entry or of the file containing the match
        name: Entry name the pattern matched (name-search mode only)
        line: Line number of the occurrence, starting at 1
        column: Character offset of the occurrence within its line
        metadata: Metadata of the entry or containing file, if it could be read
    """

    path: str = Field(..., min_length=1, description="Path of the matched entry")
    name: Optional[str] = Field(None, description="Entry name the pattern matched")
    line: Optional[int] = Field(None, ge=1, description="1-based line number")
    column: Optional[int] = Field(None, ge=0, description="0-based column")
    metadata: Optional[EntryMetadata] = Field(None, description="Entry metadata")

    @model_validator(mode='after')
    def validate_location(self):
        """Line and column are either both present or both absent."""
        if (self.line is None) != (self.column is None):
            raise ValueError("line and column must be given together")
        return self

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Match path cannot be empty")
        return v

    def is_content_match(self) -> bool:
        return self.line is not None

    def get_name(self) -> str:
        """Get the entry name, falling back to the last path component."""
        return self.name if self.name is not None else Path(self.path).name

    def locator(self) -> str:
        """Get the plain textual form: 'path' or 'path:line:column'."""
        if self.is_content_match():
            return f"{self.path}:{self.line}:{self.column}"
        return self.path

    @classmethod
    def parse(cls, text: str) -> Tuple[str, Optional[int], Optional[int]]:
        """
        Recover (path, line, column) from a plain locator.

        The last two ``:``-separated fields are taken as line and column when
        both are integers, so paths containing ``:`` survive the round trip.
        """
        parts = text.rsplit(":", 2)
        if len(parts) == 3 and parts[1].isdigit() and parts[2].isdigit():
            return parts[0], int(parts[1]), int(parts[2])
        return text, None, None

    def __str__(self) -> str:
        return self.locator()


class SearchSummary(BaseModel):
    """
    End-of-run totals for the summary footer.

    Attributes:
        total_matches: Every match pushed during the run
        files: Number of classified files
        folders: Number of classified folders
        rendered: Matches rendered while streaming
        deferred: Matches withheld from the console by the overflow threshold
    """

    total_matches: int = Field(0, ge=0)
    files: int = Field(0, ge=0)
    folders: int = Field(0, ge=0)
    rendered: int = Field(0, ge=0)
    deferred: int = Field(0, ge=0)

    def footer(self, elapsed_ms: int) -> str:
        return (
            f"Found {self.total_matches} results.\n"
            f"Searched through {self.files} file(s) and {self.folders} folder(s) "
            f"in {elapsed_ms} ms."
        )

    def __str__(self) -> str:
        parts = [f"Found {self.total_matches} matches"]
        parts.append(f"Files: {self.files}")
        parts.append(f"Folders: {self.folders}")
        if self.deferred:
            parts.append(f"Deferred: {self.deferred}")
        return " | ".join(parts)
