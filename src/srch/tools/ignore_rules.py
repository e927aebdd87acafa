"""
Per-directory ignore rules.

An ignore file is a newline-delimited list of names. Each name is compared
verbatim (after trimming surrounding path separators) against the direct
children of the directory that holds the file. Rules are not globs and do
not apply to subdirectories, which read their own ignore file.
"""

import logging
from typing import Iterable, Sequence, Set

from ..models.config import DEFAULT_IGNORE_FILE_NAMES


logger = logging.getLogger(__name__)

SEPARATORS = "/\\"


def parse_ignore_text(text: str) -> Set[str]:
    """
    Turn ignore file contents into a set of names.

    Args:
        text: Contents of the ignore file

    Returns:
        Non-empty lines with leading/trailing '/' and '\\' removed
    """
    rules = set()
    for line in text.splitlines():
        name = line.strip(SEPARATORS)
        if name:
            rules.add(name)
    return rules


def build_ignore_rules(entries: Iterable, file_names: Sequence[str] = tuple(DEFAULT_IGNORE_FILE_NAMES)) -> Set[str]:
    """
    Build the ignore rule set for one directory.

    Args:
        entries: The directory's direct children, in enumeration order. Each
            item needs ``name`` and ``path`` attributes (``os.DirEntry`` works).
        file_names: Names recognised as ignore files

    Returns:
        Names to skip in this directory; empty if there is no ignore file or
        it cannot be read as UTF-8 text
    """
    ignore_file = next((entry for entry in entries if entry.name in file_names), None)
    if ignore_file is None:
        return set()

    try:
        with open(ignore_file.path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read ignore file {ignore_file.path}: {e}")
        return set()

    rules = parse_ignore_text(text)
    logger.debug(f"Loaded {len(rules)} ignore rules from {ignore_file.path}")
    return rules
