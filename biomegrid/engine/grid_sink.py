"""
Grid sinks: surfaces that receive a finished row-major grid.

A sink owns its own surface size. The composer asks it to resize to the
requested dimensions, then writes the whole grid in one call.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, TextIO

from ..errors import InvalidDimensionError


class GridSink(ABC):
    """Base class for grid consumers."""

    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        """Make the surface exactly width x height."""

    @abstractmethod
    def write(self, rows: Sequence[Sequence[Any]]) -> None:
        """Write a full row-major grid matching the current surface size."""

    @staticmethod
    def check_shape(rows: Sequence[Sequence[Any]], width: int, height: int) -> None:
        if len(rows) != height:
            raise InvalidDimensionError(f"Expected {height} rows, got {len(rows)}")
        for y, row in enumerate(rows):
            if len(row) != width:
                raise InvalidDimensionError(
                    f"Row {y} has {len(row)} cells, expected {width}"
                )


class MemorySink(GridSink):
    """
    In-memory cell surface.

    Resizing keeps existing cells, appends or drops trailing columns and
    rows, and fills new cells with None.
    """

    def __init__(self, width: int = 0, height: int = 0):
        self.rows: List[List[Any]] = [[None] * width for _ in range(height)]

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def resize(self, width: int, height: int) -> None:
        current_cols = self.width
        for row in self.rows:
            if current_cols < width:
                row.extend([None] * (width - current_cols))
            elif current_cols > width:
                del row[width:]

        current_rows = self.height
        if current_rows < height:
            self.rows.extend([None] * width for _ in range(height - current_rows))
        elif current_rows > height:
            del self.rows[height:]

    def clear(self) -> None:
        for row in self.rows:
            row[:] = [None] * len(row)

    def write(self, rows: Sequence[Sequence[Any]]) -> None:
        self.check_shape(rows, self.width, self.height)
        self.rows = [list(row) for row in rows]


class StreamSink(GridSink):
    """Writes the grid to a text stream as JSON or tab-separated rows."""

    FORMATS = ("json", "text")

    def __init__(self, stream: TextIO, fmt: str = "json"):
        if fmt not in self.FORMATS:
            raise ValueError(f"Unsupported format: {fmt}")
        self.stream = stream
        self.fmt = fmt
        self.shape: Optional[tuple] = None

    def resize(self, width: int, height: int) -> None:
        self.shape = (width, height)

    def write(self, rows: Sequence[Sequence[Any]]) -> None:
        if self.shape is not None:
            self.check_shape(rows, *self.shape)

        if self.fmt == "json":
            json.dump([list(row) for row in rows], self.stream)
            self.stream.write("\n")
        else:
            for row in rows:
                self.stream.write("\t".join(str(cell) for cell in row) + "\n")
