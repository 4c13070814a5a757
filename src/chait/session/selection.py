"""Selection engine.

Maps mouse positions (visual line, display column) onto the text of the
visual lines. Columns are terminal cells, so a position inside a wide glyph
is resolved by a forward scan over character widths.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from .layout import VisualLine, char_width


@dataclass(frozen=True, order=True)
class Point:
    """A position in visual-line space: line index and display column."""

    line: int
    col: int


def normalize(start: Point, end: Point) -> tuple[Point, Point]:
    """Order two points so the first is not after the second."""
    return (end, start) if end < start else (start, end)


def visual_column_to_index(text: str, column: int) -> int:
    """Convert a display column to a string index.

    Returns the index of the first character starting at or after
    ``column``, or ``len(text)`` past the end of the line.
    """
    position = 0
    for i, char in enumerate(text):
        if position >= column:
            return i
        position += char_width(char)
    return len(text)


def _clamp_points(start: Point, end: Point, line_count: int) -> tuple[Point, Point]:
    start, end = normalize(start, end)
    last = max(line_count - 1, 0)
    if start.line < 0:
        start = Point(0, 0)
    elif start.line > last:
        start = Point(last, start.col)
    if end.line < 0:
        end = Point(0, 0)
    elif end.line > last:
        end = Point(last, end.col)
    return start, end


def update_selection(lines: Sequence[VisualLine], start: Point, end: Point) -> str:
    """Extract the text between two points.

    Lines in the middle are taken whole; the first line from the start
    column and the last line up to the end column. Lines are joined with
    newlines. An inverted or empty selection yields "".
    """
    if not lines:
        return ""
    start, end = _clamp_points(start, end, len(lines))

    if start.line == end.line:
        text = lines[start.line].content
        start_idx = visual_column_to_index(text, start.col)
        end_idx = visual_column_to_index(text, end.col)
        return text[start_idx:end_idx] if start_idx < end_idx else ""

    first = lines[start.line].content
    parts = [first[visual_column_to_index(first, start.col):]]
    parts.extend(line.content for line in lines[start.line + 1:end.line])
    last = lines[end.line].content
    parts.append(last[:visual_column_to_index(last, end.col)])
    return "\n".join(parts)


def selected_span(text: str, line: int, start: Point, end: Point) -> tuple[int, int] | None:
    """String index range of ``text`` (visual line ``line``) covered by a selection.

    Returns None when the line lies outside the selection or the covered
    range is empty.
    """
    start, end = normalize(start, end)
    if line < start.line or line > end.line:
        return None
    start_idx = visual_column_to_index(text, start.col) if line == start.line else 0
    end_idx = visual_column_to_index(text, end.col) if line == end.line else len(text)
    if start_idx >= end_idx:
        return None
    return start_idx, end_idx


@dataclass
class Selection:
    """Mouse selection state owned by the session controller."""

    start: Point = Point(0, 0)
    end: Point = Point(0, 0)
    selecting: bool = False
    text: str = ""

    @property
    def visible(self) -> bool:
        """Whether a highlight should be drawn."""
        return self.selecting and self.start != self.end

    def begin(self, point: Point) -> None:
        self.start = self.end = point
        self.selecting = True
        self.text = ""

    def extend(self, point: Point, lines: Sequence[VisualLine]) -> str:
        self.end = point
        self.text = update_selection(lines, self.start, self.end)
        return self.text

    def clear(self) -> None:
        self.start = self.end = Point(0, 0)
        self.selecting = False
        self.text = ""
