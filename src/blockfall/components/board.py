from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from blockfall.components.tetromino import PieceType

CellValue = Optional[PieceType]
Row = Tuple[CellValue, ...]


@dataclass(frozen=True, slots=True)
class Board:
    """Row-major grid of locked cells, row 0 at the top.

    Dimensions are fixed at creation. Board operations return new instances.
    """
    cells: Tuple[Row, ...]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def get(self, x: int, y: int) -> CellValue:
        return self.cells[y][x]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows
