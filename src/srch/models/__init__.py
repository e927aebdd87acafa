"""
Data models for srch.

This module contains all the core data structures used throughout the system.
"""

from .search_results import EntryMetadata, MatchEntry, SearchMode, SearchSummary
from .search_query import SearchQuery
from .config import SrchConfig

__all__ = [
    'EntryMetadata',
    'MatchEntry',
    'SearchMode',
    'SearchSummary',
    'SearchQuery',
    'SrchConfig'
]
