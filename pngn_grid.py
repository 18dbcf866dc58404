#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - Character Grid
========================================
Copyright (c) 2025 PNGN-Tec LLC

Wrapping 2-D Buffer
===================
Fixed-size grid of arbitrary cells backing both the shared canvas and
every sprite frame.

Core Features
=============
- Independent height/width resizing with truncate-or-pad semantics
- Uniform fill
- Modulo-wrapped cell addressing (row % height, col % width)
- Line-oriented parsing and rendering

Technical Implementation
========================
Cells live in a numpy object array so any cell type can be stored while
row/column slicing stays vectorized. Every row always holds exactly
``width`` cells; a zero dimension leaves the grid unaddressable, which
callers must check through ``is_degenerate`` before indexing.

Example Usage
=============
```python
from pngn_grid import Grid

canvas = Grid(3, 5)
canvas.set(4, -1, 'X')        # wraps to (1, 4)
print(canvas.get(1, 4))       # 'X'
canvas.render(sys.stdout)
```
"""

from typing import Any, Generic, Iterable, Iterator, List, Optional, TextIO, TypeVar

import numpy as np

from pngn_errors import IncompleteFrame

T = TypeVar('T')

# Default cell for character grids
EMPTY = ' '


def _blank(height: int, width: int, value: Any) -> np.ndarray:
    """Object array of the given shape with every cell set to value"""
    cells = np.empty((height, width), dtype=object)
    cells.fill(value)
    return cells


class Grid(Generic[T]):
    """
    Height x width buffer of cells with wraparound addressing.

    Attributes:
        fill_value: Cell used for padding and by clear()
        cells: Row-major numpy object array of shape (height, width)
    """

    def __init__(self, height: int = 0, width: int = 0, fill_value: T = EMPTY):
        self.fill_value = fill_value
        self._height = 0
        self._width = 0
        self.cells = _blank(0, 0, fill_value)
        self.resize(height, width)

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def is_degenerate(self) -> bool:
        """True when either dimension is zero (no addressable cell)"""
        return self._height == 0 or self._width == 0

    def set_height(self, height: int):
        """
        Change the number of rows.

        Rows below the new height are dropped; new rows are filled with
        the fill value at the current width.
        """
        if height < 0:
            raise ValueError("Grid height must be non-negative")
        resized = _blank(height, self._width, self.fill_value)
        keep = min(height, self._height)
        resized[:keep, :] = self.cells[:keep, :]
        self.cells = resized
        self._height = height

    def set_width(self, width: int):
        """
        Change the number of columns.

        Columns past the new width are dropped; new columns are filled
        with the fill value.
        """
        if width < 0:
            raise ValueError("Grid width must be non-negative")
        resized = _blank(self._height, width, self.fill_value)
        keep = min(width, self._width)
        resized[:, :keep] = self.cells[:, :keep]
        self.cells = resized
        self._width = width

    def resize(self, height: Optional[int] = None, width: Optional[int] = None):
        """Resize either or both dimensions, leaving None ones unchanged"""
        if height is not None:
            self.set_height(height)
        if width is not None:
            self.set_width(width)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def fill(self, value: T):
        """Set every cell to value"""
        self.cells.fill(value)

    def clear(self):
        """Reset every cell to the fill value"""
        self.fill(self.fill_value)

    def get(self, row: int, col: int) -> T:
        return self.cells[row % self._height, col % self._width]

    def set(self, row: int, col: int, value: T):
        self.cells[row % self._height, col % self._width] = value

    # ------------------------------------------------------------------
    # Text form
    # ------------------------------------------------------------------

    def parse_rows(self, line_source: Iterable[str], row_count: int,
                   width: Optional[int] = None):
        """
        Replace the grid contents with row_count lines read from line_source.

        Each line is split into single-character cells, right-padded with
        the fill value or truncated to width (the current width if None).
        The grid is only modified once every line has been read.

        Raises:
            IncompleteFrame: if the source runs out before row_count lines
        """
        width = self._width if width is None else width
        lines: Iterator[str] = iter(line_source)
        rows: List[List[Any]] = []
        for read in range(row_count):
            line = next(lines, None)
            if line is None:
                raise IncompleteFrame(row_count, read)
            cells = list(line.rstrip('\r\n')[:width])
            cells.extend([self.fill_value] * (width - len(cells)))
            rows.append(cells)

        parsed = _blank(row_count, width, self.fill_value)
        for r, cells in enumerate(rows):
            parsed[r, :] = cells
        self.cells = parsed
        self._height = row_count
        self._width = width

    def to_lines(self) -> List[str]:
        """Each row as the concatenation of its cells' string forms"""
        return [''.join(str(cell) for cell in row) for row in self.cells]

    def render(self, line_sink: TextIO):
        """Write every row to line_sink, one line-terminated line per row"""
        for line in self.to_lines():
            line_sink.write(line + '\n')

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_lines(cls, lines: Iterable[str], width: Optional[int] = None,
                   fill_value: Any = EMPTY) -> 'Grid':
        """Build a grid from text lines, sized to the longest line unless width is given"""
        lines = list(lines)
        if width is None:
            width = max((len(line.rstrip('\r\n')) for line in lines), default=0)
        grid = cls(fill_value=fill_value)
        grid.parse_rows(lines, len(lines), width)
        return grid

    def copy(self) -> 'Grid':
        duplicate = Grid(fill_value=self.fill_value)
        duplicate.cells = self.cells.copy()
        duplicate._height = self._height
        duplicate._width = self._width
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.cells.shape == other.cells.shape
                and bool(np.array_equal(self.cells, other.cells)))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Grid(height={self._height}, width={self._width})"
