"""
Configuration data models for srch.

This module defines the data structures for run defaults, resource limits
and output styling, as loaded from a YAML configuration file.
"""

from typing import Dict, List, Optional, Any
from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from rich.style import Style
from rich.errors import StyleSyntaxError


DEFAULT_IGNORE_FILE_NAMES = [".ignore", ".gitignore"]


class SearchDefaults(BaseModel):
    """
    Default values for search options not given on the command line.

    Attributes:
        max_depth: Directory descent bound
        include_hidden: Visit entries whose name starts with '.'
        use_ignore_rules: Honour per-directory ignore files
        ignore_file_names: Names recognised as ignore files, in priority order
    """

    max_depth: int = Field(3, ge=0, le=255, description="Directory descent bound")
    include_hidden: bool = Field(False, description="Visit hidden entries")
    use_ignore_rules: bool = Field(False, description="Honour ignore files")
    ignore_file_names: List[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_FILE_NAMES),
        description="Names recognised as ignore files"
    )

    @field_validator('ignore_file_names')
    @classmethod
    def validate_ignore_file_names(cls, v: List[str]) -> List[str]:
        names = [name.strip() for name in v if name and name.strip()]
        if not names:
            raise ValueError("At least one ignore file name must be specified")
        for name in names:
            if "/" in name or "\\" in name:
                raise ValueError(f"Ignore file name must not contain a path separator: {name}")
        return names


class LimitsConfig(BaseModel):
    """
    Resource limits.

    Attributes:
        overflow_threshold: Results rendered immediately before the rest are deferred
        binary_sniff_bytes: Bytes inspected when deciding whether a file is binary
    """

    overflow_threshold: int = Field(100, gt=0, description="Immediate rendering cap")
    binary_sniff_bytes: int = Field(1024, gt=0, description="Binary sniff sample size")


class OutputConfig(BaseModel):
    """
    Output handling and styling.

    Attributes:
        overflow_file: Where deferred results are written (None keeps them in memory)
        highlight_style: Rich style for the matched part of a name
        location_style: Rich style for the line/column fields of content matches
    """

    overflow_file: Optional[str] = Field(None, description="File receiving deferred results")
    highlight_style: str = Field("bold red", description="Style of highlighted name matches")
    location_style: str = Field("cyan", description="Style of line/column fields")

    @field_validator('highlight_style', 'location_style')
    @classmethod
    def validate_style(cls, v: str) -> str:
        """Styles must parse as rich style definitions."""
        try:
            Style.parse(v)
        except StyleSyntaxError as e:
            raise ValueError(f"Invalid style '{v}': {e}")
        return v

    @field_validator('overflow_file')
    @classmethod
    def validate_overflow_file(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        if v.startswith('~'):
            return str(Path(v).expanduser())
        return v


class SrchConfig(BaseModel):
    """
    Main configuration class for srch.

    Attributes:
        search: Defaults for search options
        limits: Resource limits
        output: Output handling and styling
    """

    search: SearchDefaults = Field(default_factory=SearchDefaults, description="Search defaults")
    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Resource limits")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SrchConfig':
        """Create a SrchConfig from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Depth: {self.search.max_depth}"]
        parts.append(f"Overflow threshold: {self.limits.overflow_threshold}")
        if self.output.overflow_file:
            parts.append(f"Overflow file: {self.output.overflow_file}")
        return " | ".join(parts)
