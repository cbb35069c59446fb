"""Shape catalog and the active piece value.

Every piece type has four rotation states, each a 4x4 occupancy matrix indexed
``[row][col]``. Matrices are built once at import time as nested tuples and are
never mutated afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Tuple

Shape = Tuple[Tuple[bool, ...], ...]
Cell = Tuple[int, int]

SHAPE_SIZE = 4
ROTATION_COUNT = 4


class PieceType(str, Enum):
    """The seven tetromino tags; also the value written into locked board cells."""
    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _parse(*rows: str) -> Shape:
    return tuple(tuple(ch == "#" for ch in row) for row in rows)


# Rotation order: 0, 90, 180, 270 degrees clockwise.
SHAPES: dict[PieceType, Tuple[Shape, ...]] = {
    PieceType.I: (
        _parse("....", "####", "....", "...."),
        _parse("..#.", "..#.", "..#.", "..#."),
        _parse("....", "....", "####", "...."),
        _parse(".#..", ".#..", ".#..", ".#.."),
    ),
    PieceType.O: (
        _parse("....", ".##.", ".##.", "...."),
    ) * ROTATION_COUNT,
    PieceType.T: (
        _parse("....", ".#..", "###.", "...."),
        _parse("....", ".#..", ".##.", ".#.."),
        _parse("....", "....", "###.", ".#.."),
        _parse("....", ".#..", "##..", ".#.."),
    ),
    PieceType.S: (
        _parse("....", ".##.", "##..", "...."),
        _parse("....", ".#..", ".##.", "..#."),
        _parse("....", "....", ".##.", "##.."),
        _parse("....", "#...", "##..", ".#.."),
    ),
    PieceType.Z: (
        _parse("....", "##..", ".##.", "...."),
        _parse("....", "..#.", ".##.", ".#.."),
        _parse("....", "....", "##..", ".##."),
        _parse("....", ".#..", "##..", "#..."),
    ),
    PieceType.J: (
        _parse("....", "#...", "###.", "...."),
        _parse("....", ".##.", ".#..", ".#.."),
        _parse("....", "....", "###.", "..#."),
        _parse("....", ".#..", ".#..", "##.."),
    ),
    PieceType.L: (
        _parse("....", "..#.", "###.", "...."),
        _parse("....", ".#..", ".#..", ".##."),
        _parse("....", "....", "###.", "#..."),
        _parse("....", "##..", ".#..", ".#.."),
    ),
}

ALL_PIECE_TYPES: Tuple[PieceType, ...] = tuple(PieceType)


def normalize_rotation(rotation: int) -> int:
    return rotation % ROTATION_COUNT


def shape_for(piece_type: PieceType, rotation: int) -> Shape:
    """Return the occupancy matrix for ``piece_type`` at ``rotation`` (wraps mod 4)."""
    return SHAPES[PieceType(piece_type)][normalize_rotation(rotation)]


def shape_offsets(piece_type: PieceType, rotation: int) -> Tuple[Cell, ...]:
    """Occupied ``(col, row)`` offsets inside the 4x4 matrix."""
    shape = shape_for(piece_type, rotation)
    return tuple(
        (col, row)
        for row in range(SHAPE_SIZE)
        for col in range(SHAPE_SIZE)
        if shape[row][col]
    )


@dataclass(frozen=True, slots=True)
class ActivePiece:
    """The falling piece. Movement produces a new value; instances are never mutated."""
    type: PieceType
    rotation: int
    x: int
    y: int

    @property
    def shape(self) -> Shape:
        return shape_for(self.type, self.rotation)

    def cells(self) -> Iterator[Cell]:
        """Yield board ``(x, y)`` coordinates of every occupied cell."""
        for dx, dy in shape_offsets(self.type, self.rotation):
            yield self.x + dx, self.y + dy

    def translated(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self, direction: int) -> "ActivePiece":
        return replace(self, rotation=normalize_rotation(self.rotation + direction))
