"""
Search query data model for srch.

This module defines the validated set of inputs for one search run: the
literal pattern, where and how deep to look, and how results are reported.
"""

from typing import Dict, Optional, Any
from pathlib import Path
from pydantic import BaseModel, Field, field_validator, model_validator

from .search_results import SearchMode


class SearchQuery(BaseModel):
    """
    Represents a search run with all parameters and constraints.

    Attributes:
        pattern: Literal text to look for (never a regex)
        root: Directory (or, in content mode, file) to start from
        max_depth: How many directory levels to descend (0 visits nothing)
        mode: Match against entry names or file contents
        include_hidden: Whether to visit entries whose name starts with '.'
        use_ignore_rules: Whether to honour per-directory .ignore/.gitignore files
        verbose: Print a metadata block after each result
        path_only: Print bare locators only, without metadata or summary
        limit: Only report the first N results
        get: Only report the N-th result (1-based)
    """

    pattern: str = Field(..., min_length=1, description="Literal search pattern")
    root: str = Field(".", description="Where the search starts")
    max_depth: int = Field(3, ge=0, le=255, description="Directory descent bound")
    mode: SearchMode = Field(SearchMode.NAME, description="Name or content search")
    include_hidden: bool = Field(False, description="Visit hidden entries")
    use_ignore_rules: bool = Field(False, description="Honour ignore files")
    verbose: bool = Field(False, description="Print entry metadata")
    path_only: bool = Field(False, description="Print locators only")
    limit: Optional[int] = Field(None, gt=0, description="Report the first N results")
    get: Optional[int] = Field(None, ge=1, description="Report only the N-th result")

    @field_validator('pattern')
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Reject empty patterns; whitespace is significant and kept."""
        if v == "":
            raise ValueError("Search pattern cannot be empty")
        return v

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Search root cannot be empty")
        return str(Path(v).expanduser())

    @field_validator('mode', mode='before')
    @classmethod
    def validate_mode(cls, v) -> SearchMode:
        """Accept 'name'/'content' strings as well as SearchMode members."""
        if isinstance(v, str):
            try:
                return SearchMode(v)
            except ValueError:
                raise ValueError(f"Invalid search mode: {v}")
        return v

    @model_validator(mode='after')
    def validate_selection(self):
        if self.limit is not None and self.get is not None:
            raise ValueError("limit and get cannot be combined")
        return self

    def is_content_search(self) -> bool:
        return self.mode is SearchMode.CONTENT

    def streams_results(self) -> bool:
        """Results render as they are found unless a post-filter is requested."""
        return self.limit is None and self.get is None

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data['mode'] = self.mode.value
        return data

    def __str__(self) -> str:
        parts = [f"Pattern: '{self.pattern}'"]
        parts.append(f"Root: {self.root}")
        parts.append(f"Mode: {self.mode.value}")
        parts.append(f"Depth: {self.max_depth}")
        return " | ".join(parts)
