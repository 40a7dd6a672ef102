"""
Board entity - the grid of settled cells.

The board only holds what is permanently settled (locked Chaos Drop blocks).
Moving entities are tracked by the game controllers and merged in on demand,
which always produces a new Board so collision checks keep seeing the
pre-merge state.
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .constants import Point


class Board:
    """
    A fixed-size grid of cells.

    Attributes:
        width, height: board dimensions
        rows: list of rows (top row first); each cell is None when empty or
              an occupant tag (e.g. a PieceType) when occupied
    """

    def __init__(self, width: int, height: int, rows: Optional[Sequence[Sequence[Any]]] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}.")
        self.width = width
        self.height = height
        if rows is None:
            self.rows: List[List[Any]] = [[None] * width for _ in range(height)]
        else:
            if len(rows) != height or any(len(row) != width for row in rows):
                raise ValueError(f"Rows do not match a {width}x{height} board.")
            self.rows = [list(row) for row in rows]

    @classmethod
    def empty(cls, width: int, height: int) -> "Board":
        return cls(width, height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        """
        Return True when the cell holds an occupant.

        Callers must bounds-check first; out-of-range coordinates raise
        IndexError instead of silently wrapping around.
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell {(x, y)} is outside the {self.width}x{self.height} board.")
        return self.rows[y][x] is not None

    def get(self, x: int, y: int) -> Any:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell {(x, y)} is outside the {self.width}x{self.height} board.")
        return self.rows[y][x]

    def copy(self) -> "Board":
        return Board(self.width, self.height, self.rows)

    def merge(self, cells: Iterable[Point], tag: Any = True) -> "Board":
        """
        Return a new board with the given cells marked with `tag`.

        Cells outside the board (e.g. blocks still above the top edge) are
        skipped. The current board is left untouched.
        """
        merged = self.copy()
        for x, y in cells:
            if merged.in_bounds(x, y):
                merged.rows[y][x] = tag
        return merged

    def clear_full_rows(self) -> Tuple["Board", int]:
        """
        Remove every full row and push empty rows in at the top.

        Returns:
            (new board, number of rows cleared)
        """
        remaining = [list(row) for row in self.rows if not all(cell is not None for cell in row)]
        cleared = self.height - len(remaining)
        padding = [[None] * self.width for _ in range(cleared)]
        return Board(self.width, self.height, padding + remaining), cleared

    def column_heights(self) -> List[int]:
        """Height of each column measured from the bottom to its topmost block."""
        heights = [0] * self.width
        for x in range(self.width):
            for y in range(self.height):
                if self.rows[y][x] is not None:
                    heights[x] = self.height - y
                    break
        return heights

    def occupied_cells(self) -> List[Point]:
        return [
            (x, y)
            for y, row in enumerate(self.rows)
            for x, cell in enumerate(row)
            if cell is not None
        ]

    def render(self, overlay: Optional[dict] = None) -> str:
        """
        Returns a string representation of the board with:
        . = empty cell
        # = occupied cell (or the tag's value when it is a single character)
        overlay maps (x, y) -> character and is drawn on top
        """
        overlay = overlay or {}
        lines = []
        for y, row in enumerate(self.rows):
            chars = []
            for x, cell in enumerate(row):
                if (x, y) in overlay:
                    chars.append(overlay[(x, y)])
                elif cell is None:
                    chars.append('.')
                else:
                    value = getattr(cell, 'value', cell)
                    chars.append(value if isinstance(value, str) and len(value) == 1 else '#')
            lines.append(' '.join(chars))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.width, self.height, self.rows) == (other.width, other.height, other.rows)

    def __repr__(self):
        return f"<Board {self.width}x{self.height}, occupied={len(self.occupied_cells())}>"


def create_empty_board(width: int, height: int) -> Board:
    return Board.empty(width, height)


def merge_entity_into_board(board: Board, entity: Any) -> Board:
    """
    Merge any entity exposing `cells()` and a `tag` into a new board.
    """
    return board.merge(entity.cells(), getattr(entity, 'tag', True))


def clear_full_rows(board: Board) -> Tuple[Board, int]:
    return board.clear_full_rows()
