from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Typed row abstraction for decoded sheet rows.

A sheet row is a sparse, positionally indexed list of heterogeneous cells. The
extraction rules depend on the difference between an absent cell, an empty text
cell and a zero, so every cell is wrapped in a tri-state ``Cell`` instead of
being passed around as a bare value.
"""

__all__ = [
    "CellKind",
    "Cell",
    "RawRow",
    "ABSENT",
]


class CellKind(Enum):
    """Kind of a decoded cell value."""
    NUMBER = "number"
    TEXT = "text"
    ABSENT = "absent"


@dataclass(frozen=True)
class Cell:
    """Single cell value with an explicit kind.

    ``value`` is an ``int``/``float`` for NUMBER, ``str`` for TEXT and ``None``
    for ABSENT. Date cells arrive as ISO date text (see excel.reader).
    """
    kind: CellKind
    value: int | float | str | None = None

    @staticmethod
    def of(value: Any) -> Cell:
        """Wrap a raw decoded value."""
        if value is None:
            return ABSENT
        if isinstance(value, bool):
            # bool は数値扱いしない (スプレッドシート上の TRUE/FALSE)
            return Cell(CellKind.TEXT, str(value).upper())
        if isinstance(value, (int, float)):
            if isinstance(value, float) and math.isnan(value):
                return ABSENT
            return Cell(CellKind.NUMBER, value)
        return Cell(CellKind.TEXT, str(value))

    @property
    def is_absent(self) -> bool:
        return self.kind is CellKind.ABSENT

    @property
    def is_number(self) -> bool:
        return self.kind is CellKind.NUMBER

    @property
    def is_text(self) -> bool:
        return self.kind is CellKind.TEXT

    @property
    def is_filled(self) -> bool:
        """True for a non-zero number or a non-empty text.

        This is the "non-empty" test the ledgers are maintained against:
        a zero or an empty string counts as empty.
        """
        if self.kind is CellKind.NUMBER:
            return self.value != 0
        if self.kind is CellKind.TEXT:
            return self.value != ""
        return False

    @property
    def is_positive_number(self) -> bool:
        return self.kind is CellKind.NUMBER and self.value > 0  # type: ignore[operator]

    def text(self) -> str | None:
        """Stringified value; integral floats lose their ``.0`` suffix."""
        if self.kind is CellKind.ABSENT:
            return None
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        return str(self.value)


ABSENT = Cell(CellKind.ABSENT, None)


class RawRow:
    """Immutable ordered sequence of cells belonging to one sheet row."""

    __slots__ = ("_cells",)

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._cells: tuple[Cell, ...] = tuple(
            v if isinstance(v, Cell) else Cell.of(v) for v in values
        )

    def cell_at(self, index: int) -> Cell:
        """Cell at ``index``; out-of-range or negative (unresolved) indices are ABSENT."""
        if index < 0 or index >= len(self._cells):
            return ABSENT
        return self._cells[index]

    def value_at(self, index: int) -> int | float | str | None:
        return self.cell_at(index).value

    @property
    def cells(self) -> Sequence[Cell]:
        return self._cells

    @property
    def is_empty(self) -> bool:
        return all(c.is_absent for c in self._cells)

    def values(self) -> list[int | float | str | None]:
        return [c.value for c in self._cells]

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawRow):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"RawRow({self.values()!r})"
