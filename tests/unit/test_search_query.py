"""
Unit tests for the SearchQuery model.
"""

import os
import pytest
from pydantic import ValidationError

from srch.models.search_query import SearchQuery
from srch.models.search_results import SearchMode


class TestSearchQuery:
    """Test cases for SearchQuery model validation and functionality."""

    def test_defaults(self):
        """Test query creation with only the pattern."""
        query = SearchQuery(pattern="report")

        assert query.pattern == "report"
        assert query.root == "."
        assert query.max_depth == 3
        assert query.mode is SearchMode.NAME
        assert query.include_hidden is False
        assert query.use_ignore_rules is False
        assert query.verbose is False
        assert query.path_only is False
        assert query.limit is None
        assert query.get is None
        assert query.streams_results()

    def test_empty_pattern_rejected(self):
        with pytest.raises(ValidationError):
            SearchQuery(pattern="")

    def test_whitespace_pattern_kept(self):
        """Whitespace is a literal part of the pattern."""
        assert SearchQuery(pattern=" x ").pattern == " x "

    def test_depth_bounds(self):
        assert SearchQuery(pattern="a", max_depth=0).max_depth == 0
        assert SearchQuery(pattern="a", max_depth=255).max_depth == 255

        with pytest.raises(ValidationError):
            SearchQuery(pattern="a", max_depth=-1)
        with pytest.raises(ValidationError):
            SearchQuery(pattern="a", max_depth=256)

    def test_mode_from_string(self):
        query = SearchQuery(pattern="a", mode="content")
        assert query.mode is SearchMode.CONTENT
        assert query.is_content_search()

    def test_invalid_mode(self):
        with pytest.raises(ValidationError):
            SearchQuery(pattern="a", mode="regex")

    def test_root_expands_user(self):
        query = SearchQuery(pattern="a", root="~/projects")
        assert query.root == os.path.join(os.path.expanduser("~"), "projects")

    def test_empty_root_rejected(self):
        with pytest.raises(ValidationError):
            SearchQuery(pattern="a", root="  ")

    def test_limit_and_get(self):
        assert not SearchQuery(pattern="a", limit=5).streams_results()
        assert not SearchQuery(pattern="a", get=1).streams_results()

        with pytest.raises(ValidationError):
            SearchQuery(pattern="a", limit=0)
        with pytest.raises(ValidationError):
            SearchQuery(pattern="a", get=0)
        with pytest.raises(ValidationError):
            SearchQuery(pattern="a", limit=2, get=1)

    def test_to_dict(self):
        data = SearchQuery(pattern="a", mode=SearchMode.CONTENT).to_dict()

        assert data['pattern'] == "a"
        assert data['mode'] == "content"

    def test_string_representation(self):
        text = str(SearchQuery(pattern="needle", root="/tmp", max_depth=2))

        assert "Pattern: 'needle'" in text
        assert "Depth: 2" in text
        assert "Mode: name" in text
