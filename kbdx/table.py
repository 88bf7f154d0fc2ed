r"""Plain-text tables.

Cells are addressed by (column, row) and stored sparsely; rendering pads every
cell to the widest value of its column:

    >>> table = TextTable().set(0, 0, "id").set(1, 0, "name").set(0, 1, "7")
    >>> str(table.set(1, 1, "Ada"))
    'id name \n7  Ada  '
"""

from typing import Any

from typing_extensions import override


class TextTable:
    """A grid of strings with column-aligned rendering.

    A dynamic table grows new columns on write. A fixed table (created with
    a width, or after ``set_dynamic(False)``) rejects writes past its last
    column. Setters return the table so calls can be chained.
    """

    def __init__(self, width: int | None = None) -> None:
        """
        Args:
            width: Number of columns of a fixed table; None for a dynamic one

        Raises:
            ValueError: If ``width`` is negative
        """
        self._columns: list[dict[int, str]] = []
        self._dynamic: bool = width is None
        self._filler: str = " "
        self._column_splitter: str = " "
        if width is not None:
            self.set_width(width)

    @property
    def dynamic(self) -> bool:
        return self._dynamic

    @property
    def filler(self) -> str:
        return self._filler

    @property
    def column_splitter(self) -> str:
        return self._column_splitter

    @property
    def columns(self) -> int:
        return len(self._columns)

    @property
    def rows(self) -> int:
        """Number of rows rendered, up to and including the highest row set."""
        highest = self._highest_row()
        return 0 if highest is None else highest + 1

    def set_dynamic(self, value: bool) -> "TextTable":
        self._dynamic = value
        return self

    def set_filler(self, filler: str) -> "TextTable":
        if len(filler) != 1:
            raise ValueError(f"Filler must be a single character, got {filler!r}")
        self._filler = filler
        return self

    def set_column_splitter(self, splitter: str) -> "TextTable":
        self._column_splitter = splitter
        return self

    def set(self, col: int, row: int, value: str) -> "TextTable":
        """Write ``value`` into the cell at (``col``, ``row``).

        Raises:
            ValueError: If ``col`` or ``row`` is negative, or ``col`` lies
                past the last column of a fixed table
        """
        if col < 0:
            raise ValueError(f"Col must be non-negative, got {col}")
        if row < 0:
            raise ValueError(f"Row must be non-negative, got {row}")
        if col >= len(self._columns):
            if not self._dynamic:
                raise ValueError(
                    f"Col {col} does not exist in a fixed table of "
                    f"{len(self._columns)} columns.\n"
                    f"Hint: call set_width() or set_dynamic(True) first"
                )
            self.set_width(col + 1)
        self._columns[col][row] = value
        return self

    def remove_column(self, col: int) -> "TextTable":
        """Delete a column, shifting the ones after it left.

        A fixed table keeps its width: an empty column is added at the end.
        """
        if not 0 <= col < len(self._columns):
            raise ValueError(
                f"Col must be in bounds, got {col} - bounds 0 to "
                f"{len(self._columns) - 1}"
            )
        if not self._dynamic:
            self._columns.append({})
        del self._columns[col]
        return self

    def remove_row(self, row: int) -> "TextTable":
        """Clear every cell of ``row``. Later rows keep their numbers."""
        highest = self._highest_row() or 0
        if not 0 <= row <= highest:
            raise ValueError(
                f"Row must be in bounds, got {row} - bounds 0 to {highest}"
            )
        for column in self._columns:
            column.pop(row, None)
        return self

    def set_width(self, width: int) -> "TextTable":
        """Grow or shrink to exactly ``width`` columns."""
        if width < 0:
            raise ValueError(f"Width must be non-negative, got {width}")
        while len(self._columns) < width:
            self._columns.append({})
        del self._columns[width:]
        return self

    def prune_rows(self, rows: int) -> "TextTable":
        """Clear every row numbered ``rows`` or higher."""
        if rows < 0:
            raise ValueError(f"Rows must be non-negative, got {rows}")
        for column in self._columns:
            for row in [r for r in column if r >= rows]:
                del column[row]
        return self

    def get(self, col: int, row: int) -> str | None:
        if 0 <= col < len(self._columns):
            return self._columns[col].get(row)
        return None

    def _highest_row(self) -> int | None:
        return max(
            (row for column in self._columns for row in column), default=None
        )

    def render(self) -> str:
        widths = [max(map(len, c.values()), default=0) for c in self._columns]
        lines = []
        for row in range((self._highest_row() or 0) + 1):
            lines.append(
                "".join(
                    column.get(row, "").ljust(width, self._filler)
                    + self._column_splitter
                    for column, width in zip(self._columns, widths)
                )
            )
        return "\n".join(lines)

    @override
    def __str__(self) -> str:
        return self.render()

    @override
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TextTable):
            return NotImplemented
        return (
            self.render() == other.render()
            and self._dynamic == other._dynamic
            and self._column_splitter == other._column_splitter
            and self._filler == other._filler
        )

    __hash__ = None  # type: ignore[assignment]
