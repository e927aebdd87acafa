"""
Search tools for srch.

This module contains the components of a search run: ignore rule parsing,
entry classification, in-text location, tree walking and result handling.
"""

from .fs_walker import TreeWalker
from .result_sink import ResultIndexError, ResultSink

__all__ = ['TreeWalker', 'ResultSink', 'ResultIndexError']
