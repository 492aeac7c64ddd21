"""Block segmenter for stepmark.

Walks the source once, line by line, and groups lines into blocks. Multi-line
blocks (lists, tables, fenced code) are collected in a single accumulator and
emitted when a line that cannot extend them arrives, or at end of input.

Each line is offered to an ordered sequence of rules; the first rule that
consumes it wins:

1. fence toggle
2. line inside a code fence
3. table row (a non-row line closes an open table and falls through)
4. horizontal rule
5. heading
6. list item
7. blank line
8. paragraph

Architecture:
At most one accumulator is open at a time: opening any block flushes the
previous one, so the segmenter state is a single mode plus its pending
entries. Building a block from an accumulator is a pure function.

Thread Safety:
Segmenter instances are single-use and hold per-call state only. The
module-level segment() function creates a fresh instance per call and is safe
to call concurrently. The resulting Document is immutable.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import cast

from stepmark.classifiers import (
    is_blank,
    is_fence,
    is_rule,
    is_table_row,
    is_table_separator,
    match_heading,
    match_list_item,
    split_table_cells,
)
from stepmark.inline import inline
from stepmark.location import SourceLocation
from stepmark.nodes import (
    Block,
    CodeBlock,
    Document,
    Heading,
    List,
    Paragraph,
    Rule,
    Span,
    Table,
)
from stepmark.utils.logger import get_logger

logger = get_logger(__name__)


class SegmentMode(Enum):
    """Kind of block currently being accumulated.

    - NONE: Between blocks, nothing pending
    - UNORDERED_LIST / ORDERED_LIST: Collecting list items
    - TABLE: Collecting table rows
    - CODE: Inside a fenced code block, capturing raw lines

    """

    NONE = auto()
    UNORDERED_LIST = auto()
    ORDERED_LIST = auto()
    TABLE = auto()
    CODE = auto()


@dataclass(slots=True)
class Accumulator:
    """Pending entries of the block being built.

    Entries are inline-formatted list items, stripped table rows, or raw code
    lines depending on mode.

    """

    mode: SegmentMode = SegmentMode.NONE
    entries: list[tuple[Span, ...] | str] = field(default_factory=list)
    start_lineno: int = 0
    end_lineno: int = 0


def build_block(acc: Accumulator, source_file: str | None = None) -> Block | None:
    """Close an accumulator into a block.

    Returns None when there is nothing to emit (no mode, or no entries for a
    list or table). A code fence always produces a block, even when empty.
    """
    location = SourceLocation(
        lineno=acc.start_lineno,
        end_lineno=acc.end_lineno if acc.end_lineno != acc.start_lineno else None,
        source_file=source_file,
    )
    match acc.mode:
        case SegmentMode.UNORDERED_LIST | SegmentMode.ORDERED_LIST:
            if not acc.entries:
                return None
            return List(
                items=tuple(cast("list[tuple[Span, ...]]", acc.entries)),
                ordered=acc.mode is SegmentMode.ORDERED_LIST,
                location=location,
            )
        case SegmentMode.TABLE:
            if not acc.entries:
                return None
            header, *body = cast("list[str]", acc.entries)
            return Table(
                header=_table_cells(header),
                rows=tuple(_table_cells(row) for row in body),
                location=location,
            )
        case SegmentMode.CODE:
            return CodeBlock(code="\n".join(cast("list[str]", acc.entries)), location=location)
        case _:
            return None


def _table_cells(row: str) -> tuple[tuple[Span, ...], ...]:
    return tuple(inline(cell) for cell in split_table_cells(row))


class Segmenter:
    """Single-pass line segmenter.

    Usage:
        >>> doc = Segmenter().segment("# Title\\n- a")
        >>> [type(block).__name__ for block in doc.children]
        ['Heading', 'List']

    Thread Safety:
        Instances are single-use and not thread-safe. Create one per call.

    """

    __slots__ = ("_source_file", "_blocks", "_acc", "_rules")

    def __init__(self, source_file: str | None = None) -> None:
        """Initialize segmenter.

        Args:
            source_file: Optional source path recorded in block locations
        """
        self._source_file = source_file
        self._blocks: list[Block] = []
        self._acc = Accumulator()
        self._rules: tuple[Callable[[str, int], bool], ...] = (
            self._try_fence,
            self._try_code_line,
            self._try_table_row,
            self._try_rule,
            self._try_heading,
            self._try_list_item,
            self._try_blank,
            self._emit_paragraph,
        )

    def segment(self, text: str) -> Document:
        """Segment text into a Document.

        Args:
            text: Full source text

        Returns:
            Document whose children are the blocks in source order
        """
        lines = text.split("\n")
        for lineno, line in enumerate(lines, start=1):
            for rule in self._rules:
                if rule(line, lineno):
                    break

        if self._acc.mode is SegmentMode.CODE:
            logger.debug(
                "Unterminated code fence opened at %s, capturing to end of input",
                SourceLocation(self._acc.start_lineno, source_file=self._source_file),
            )
            self._acc.end_lineno = len(lines)
        self._flush()

        return Document(
            children=tuple(self._blocks),
            location=SourceLocation(
                lineno=1,
                end_lineno=len(lines),
                source_file=self._source_file,
            ),
        )

    # -- Accumulator handling --------------------------------------------------

    def _start(self, mode: SegmentMode, lineno: int) -> None:
        self._acc = Accumulator(mode=mode, start_lineno=lineno, end_lineno=lineno)

    def _append(self, entry: tuple[Span, ...] | str, lineno: int) -> None:
        self._acc.entries.append(entry)
        self._acc.end_lineno = lineno

    def _flush(self) -> None:
        """Emit the pending block, if any, and reset the accumulator."""
        if self._acc.mode is SegmentMode.NONE:
            return
        block = build_block(self._acc, self._source_file)
        if block is not None:
            self._blocks.append(block)
        self._acc = Accumulator()

    def _emit(self, block: Block) -> None:
        self._flush()
        self._blocks.append(block)

    def _location(self, lineno: int) -> SourceLocation:
        return SourceLocation(lineno=lineno, source_file=self._source_file)

    # -- Rules -------------------------------------------------------------------

    def _try_fence(self, line: str, lineno: int) -> bool:
        if not is_fence(line):
            return False
        if self._acc.mode is SegmentMode.CODE:
            self._acc.end_lineno = lineno
            self._flush()
        else:
            self._flush()
            self._start(SegmentMode.CODE, lineno)
        return True

    def _try_code_line(self, line: str, lineno: int) -> bool:
        if self._acc.mode is not SegmentMode.CODE:
            return False
        self._append(line, lineno)
        return True

    def _try_table_row(self, line: str, lineno: int) -> bool:
        stripped = line.strip()
        if not is_table_row(stripped):
            # Any other line closes an open table, then keeps classifying
            if self._acc.mode is SegmentMode.TABLE:
                self._flush()
            return False

        if self._acc.mode is not SegmentMode.TABLE:
            self._flush()
        if is_table_separator(stripped):
            return True
        if self._acc.mode is not SegmentMode.TABLE:
            self._start(SegmentMode.TABLE, lineno)
        self._append(stripped, lineno)
        return True

    def _try_rule(self, line: str, lineno: int) -> bool:
        if not is_rule(line.strip()):
            return False
        self._emit(Rule(location=self._location(lineno)))
        return True

    def _try_heading(self, line: str, lineno: int) -> bool:
        heading = match_heading(line)
        if heading is None:
            return False
        level, text = heading
        self._emit(
            Heading(
                level=level,  # type: ignore[arg-type]
                children=inline(text),
                location=self._location(lineno),
            )
        )
        return True

    def _try_list_item(self, line: str, lineno: int) -> bool:
        item = match_list_item(line)
        if item is None:
            return False
        ordered, text = item
        mode = SegmentMode.ORDERED_LIST if ordered else SegmentMode.UNORDERED_LIST
        if self._acc.mode is not mode:
            self._flush()
            self._start(mode, lineno)
        self._append(inline(text), lineno)
        return True

    def _try_blank(self, line: str, lineno: int) -> bool:
        if not is_blank(line):
            return False
        # Blank lines end lists; tables only end on a non-row line
        if self._acc.mode in (SegmentMode.UNORDERED_LIST, SegmentMode.ORDERED_LIST):
            self._flush()
        return True

    def _emit_paragraph(self, line: str, lineno: int) -> bool:
        self._emit(Paragraph(children=inline(line), location=self._location(lineno)))
        return True


def segment(text: str, *, source_file: str | None = None) -> Document:
    """Segment text into a Document.

    Never fails: lines that match no block rule become paragraphs, and an
    unterminated code fence captures everything up to end of input.

    Args:
        text: Full source text
        source_file: Optional source path recorded in block locations

    Returns:
        Document AST root node

    Example:
        >>> segment("# Title").children
        (Heading(level=1, children=(Text(content='Title'),)),)

    """
    return Segmenter(source_file).segment(text)
