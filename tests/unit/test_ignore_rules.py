"""
Unit tests for per-directory ignore rules.

Tests ignore file discovery among a directory's children, line trimming,
and the fallback to an empty rule set when the file cannot be read.
"""

import os
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from srch.tools.ignore_rules import build_ignore_rules, parse_ignore_text


def _entries(directory):
    with os.scandir(directory) as it:
        return sorted(it, key=lambda e: e.name)


class TestParseIgnoreText:
    """Test cases for parse_ignore_text."""

    def test_trims_path_separators(self):
        """Leading and trailing '/' and '\\' are removed from each line."""
        rules = parse_ignore_text("/build/\n\\dist\\\nnode_modules/\n")
        assert rules == {"build", "dist", "node_modules"}

    def test_skips_empty_lines(self):
        """Blank lines and separator-only lines produce no rule."""
        rules = parse_ignore_text("\n/\n\\\\\ntarget\n\n")
        assert rules == {"target"}

    def test_inner_separators_kept(self):
        """Only surrounding separators are trimmed."""
        assert parse_ignore_text("/a/b/\n") == {"a/b"}

    def test_windows_line_endings(self):
        assert parse_ignore_text("out\r\nlogs\r\n") == {"out", "logs"}


class TestBuildIgnoreRules:
    """Test cases for build_ignore_rules."""

    def test_no_ignore_file(self, tmp_path):
        """A directory without an ignore file has no rules."""
        (tmp_path / "a.txt").write_text("x")
        assert build_ignore_rules(_entries(tmp_path)) == set()

    def test_reads_dot_ignore(self, tmp_path):
        (tmp_path / ".ignore").write_text("build/\nsecret.txt\n")
        assert build_ignore_rules(_entries(tmp_path)) == {"build", "secret.txt"}

    def test_reads_gitignore(self, tmp_path):
        (tmp_path / ".gitignore").write_text("/venv\n")
        assert build_ignore_rules(_entries(tmp_path)) == {"venv"}

    def test_first_in_enumeration_order_wins(self, tmp_path):
        """With both files present, the first one enumerated is used."""
        (tmp_path / ".gitignore").write_text("from_gitignore\n")
        (tmp_path / ".ignore").write_text("from_ignore\n")

        assert build_ignore_rules(_entries(tmp_path)) == {"from_gitignore"}

        reversed_entries = list(reversed(_entries(tmp_path)))
        assert build_ignore_rules(reversed_entries) == {"from_ignore"}

    def test_custom_file_names(self, tmp_path):
        (tmp_path / ".srchignore").write_text("cache\n")
        (tmp_path / ".gitignore").write_text("other\n")

        rules = build_ignore_rules(_entries(tmp_path), file_names=(".srchignore",))
        assert rules == {"cache"}

    def test_name_must_match_exactly(self, tmp_path):
        (tmp_path / "my.gitignore").write_text("x\n")
        assert build_ignore_rules(_entries(tmp_path)) == set()

    def test_undecodable_file_yields_empty_set(self, tmp_path):
        """An ignore file that is not valid UTF-8 is treated as absent."""
        (tmp_path / ".ignore").write_bytes(b"\xff\xfe\xfa build\n")
        assert build_ignore_rules(_entries(tmp_path)) == set()

    def test_unreadable_file_yields_empty_set(self):
        entry = SimpleNamespace(name=".ignore", path="/nonexistent/dir/.ignore")
        assert build_ignore_rules([entry]) == set()

    def test_read_error_is_logged(self, tmp_path):
        (tmp_path / ".ignore").write_text("build\n")

        with patch("srch.tools.ignore_rules.open", side_effect=PermissionError("denied"), create=True):
            with patch("srch.tools.ignore_rules.logger") as mock_logger:
                assert build_ignore_rules(_entries(tmp_path)) == set()

        mock_logger.warning.assert_called_once()
