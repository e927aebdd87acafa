"""
Locate literal pattern occurrences inside text.
"""

from typing import List, Tuple


def contains_pattern(text: str, pattern: str) -> bool:
    """Whole-text gate checked before scanning line by line."""
    return pattern in text


def locate_in_line(line: str, pattern: str) -> List[int]:
    """
    Get the 0-based character column of every occurrence of pattern in line.

    The line is split on the pattern; each fragment before an occurrence
    advances a running offset, and the offset at that point is the column.
    The offset then moves past the occurrence itself. Occurrences never
    overlap: 'ababab' with 'ab' gives [0, 2, 4].
    """
    if not pattern:
        raise ValueError("Pattern cannot be empty")

    fragments = line.split(pattern)
    columns = []
    offset = 0
    for fragment in fragments[:-1]:
        offset += len(fragment)
        columns.append(offset)
        offset += len(pattern)
    return columns


def locate(text: str, pattern: str) -> List[Tuple[int, int]]:
    """
    Find every occurrence of pattern in text.

    Args:
        text: Full text to scan
        pattern: Non-empty literal pattern

    Returns:
        (line, column) pairs in reading order; lines start at 1, columns at 0
    """
    if not pattern:
        raise ValueError("Pattern cannot be empty")

    if not contains_pattern(text, pattern):
        return []

    positions = []
    # Split on '\n' only, so form feeds and other exotic separators do not
    # shift line numbers. Universal newline reads already turned '\r\n' into '\n'.
    for line_number, line in enumerate(text.split('\n'), 1):
        if pattern not in line:
            continue
        for column in locate_in_line(line, pattern):
            positions.append((line_number, column))
    return positions
