"""
Chaos Drop piece catalogue.

Each piece type has a fixed list of rotation states. Shapes are stored raw
(they may reach into negative y) and normalized to a (0, 0) bounding-box
origin whenever a piece is spawned or rotated.
"""

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .constants import Point


class PieceType(str, Enum):
    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


Shape = Tuple[Point, ...]

ROTATIONS: Dict[PieceType, Tuple[Shape, ...]] = {
    PieceType.I: (
        ((0, 0), (1, 0), (2, 0), (3, 0)),
        ((2, -1), (2, 0), (2, 1), (2, 2)),
    ),
    PieceType.J: (
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((1, -1), (1, 0), (1, 1), (0, 1)),
        ((0, 0), (1, 0), (2, 0), (2, 1)),
        ((0, -1), (1, -1), (1, 0), (1, 1)),
    ),
    PieceType.L: (
        ((2, 0), (0, 1), (1, 1), (2, 1)),
        ((1, -1), (1, 0), (1, 1), (2, 1)),
        ((0, 0), (1, 0), (2, 0), (0, 1)),
        ((0, -1), (1, -1), (1, 0), (1, 1)),
    ),
    PieceType.O: (
        ((1, 0), (2, 0), (1, 1), (2, 1)),
    ),
    PieceType.S: (
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((1, -1), (1, 0), (2, 0), (2, 1)),
    ),
    PieceType.T: (
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, -1), (1, 0), (1, 1), (2, 0)),
        ((0, 0), (1, 0), (2, 0), (1, 1)),
        ((0, 0), (1, -1), (1, 0), (1, 1)),
    ),
    PieceType.Z: (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, -1), (1, 0), (2, 0), (1, 1)),
    ),
}


def normalize_shape(shape: Shape) -> Tuple[Shape, int, int]:
    """
    Shift a shape so its bounding box starts at (0, 0).

    Returns:
        (normalized shape, original min x, original min y)
    """
    min_x = min(x for x, _ in shape)
    min_y = min(y for _, y in shape)
    return tuple((x - min_x, y - min_y) for x, y in shape), min_x, min_y


@dataclass(frozen=True)
class Piece:
    """
    A falling piece: type, rotation state, normalized blocks and board offset.
    """

    kind: PieceType
    rotation_index: int
    shape: Shape
    x: int
    y: int

    @property
    def tag(self) -> PieceType:
        return self.kind

    @property
    def width(self) -> int:
        return max(bx for bx, _ in self.shape) + 1

    @property
    def height(self) -> int:
        return max(by for _, by in self.shape) + 1

    @property
    def rotation_count(self) -> int:
        return len(ROTATIONS[self.kind])

    def cells(self, offset_x: int = 0, offset_y: int = 0) -> List[Point]:
        return [(self.x + bx + offset_x, self.y + by + offset_y) for bx, by in self.shape]

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self, direction: int = 1) -> "Piece":
        """
        Return this piece in its next (direction=1) or previous (direction=-1)
        rotation state, normalized but not yet clamped into the board.
        """
        if direction not in (1, -1):
            raise ValueError(f"Rotation direction must be 1 or -1, got {direction}.")
        next_index = (self.rotation_index + direction) % self.rotation_count
        shape, _, _ = normalize_shape(ROTATIONS[self.kind][next_index])
        return replace(self, rotation_index=next_index, shape=shape)

    def preview(self) -> List[List[bool]]:
        """Small boolean grid of the piece's shape, used for "next piece" displays."""
        grid = [[False] * self.width for _ in range(self.height)]
        for bx, by in self.shape:
            grid[by][bx] = True
        return grid


def spawn_piece(kind: PieceType, rotation_index: int, board_width: int) -> Piece:
    """Build a piece horizontally centred at the top of a board."""
    raw = ROTATIONS[kind][rotation_index]
    shape, _, min_y = normalize_shape(raw)
    width = max(bx for bx, _ in shape) + 1
    return Piece(
        kind=kind,
        rotation_index=rotation_index,
        shape=shape,
        x=(board_width - width) // 2,
        y=min(0, -min_y),
    )


def random_piece(board_width: int, rng: Optional[random.Random] = None) -> Piece:
    """Pick a random piece type and a random starting rotation."""
    rng = rng or random
    kind = rng.choice(list(PieceType))
    rotation_index = rng.randrange(len(ROTATIONS[kind]))
    return spawn_piece(kind, rotation_index, board_width)
