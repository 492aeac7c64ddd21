"""Line classifiers for the block segmenter.

Each classifier inspects one source line and reports whether it has a given
shape. They hold no state; the segmenter decides what to do with the answer.

Table, rule and fence checks look at the stripped line. Heading and list item
checks look at the raw line so leading indentation is handled by the pattern.
"""

from __future__ import annotations

import re

FENCE_MARKER = "```"

_TABLE_ROW = re.compile(r"^\|.*\|$")
_TABLE_SEPARATOR = re.compile(r"^\|[\s\-:|]+\|$")
_RULE = re.compile(r"^(?:-{3,}|\*{3,})$")
_HEADING = re.compile(r"^(#{1,6})\s+(.*)$")
_UNORDERED_ITEM = re.compile(r"^\s*[-*]\s+")
_ORDERED_ITEM = re.compile(r"^\s*[0-9]+\.\s+")


def is_fence(line: str) -> bool:
    """Return True if the line opens or closes a code fence."""
    return line.strip().startswith(FENCE_MARKER)


def is_table_row(stripped: str) -> bool:
    """Return True if the stripped line starts and ends with a pipe."""
    return _TABLE_ROW.match(stripped) is not None


def is_table_separator(stripped: str) -> bool:
    """Return True for header/body separator rows such as ``|---|:-:|``.

    Only meaningful for lines that already passed is_table_row().
    """
    return _TABLE_SEPARATOR.match(stripped) is not None


def is_rule(stripped: str) -> bool:
    """Return True for 3+ dashes or 3+ asterisks and nothing else."""
    return _RULE.match(stripped) is not None


def is_blank(line: str) -> bool:
    return not line.strip()


def match_heading(line: str) -> tuple[int, str] | None:
    """Try to classify the line as a heading.

    Headings are 1-6 ``#`` characters followed by whitespace.

    Args:
        line: Raw source line

    Returns:
        (level, heading text) if the line is a heading, None otherwise.
    """
    match = _HEADING.match(line)
    if match is None:
        return None
    return len(match.group(1)), match.group(2)


def match_list_item(line: str) -> tuple[bool, str] | None:
    """Try to classify the line as a list item.

    Unordered items use ``-`` or ``*``; ordered items use digits and a period.
    Either marker may be indented and must be followed by whitespace.

    Args:
        line: Raw source line

    Returns:
        (ordered, item text) if the line is a list item, None otherwise.
    """
    match = _UNORDERED_ITEM.match(line)
    if match is not None:
        return False, line[match.end() :]
    match = _ORDERED_ITEM.match(line)
    if match is not None:
        return True, line[match.end() :]
    return None


def split_table_cells(row: str) -> list[str]:
    """Split a stripped table row into trimmed cell texts.

    The fragments before the first pipe and after the last pipe are dropped.
    Pipes are never escaped.

    Example:
        >>> split_table_cells("| a | b |")
        ['a', 'b']
    """
    return [cell.strip() for cell in row.split("|")[1:-1]]
