"""Board state and immutable solution snapshots for the N-Queens enumerator.

Representation
--------------
The live ``Board`` stores an N x N grid of booleans (``True`` means a queen
occupies the cell) together with ``queen_columns[row]``, the column of the
queen placed in ``row`` or ``-1`` while the row is empty. The per-row column
makes the "one queen per row" precondition an O(1) check.

A ``Solution`` is a frozen copy of the grid taken when every row holds a
queen. Its cells are tuples, so nothing reachable from a solution can be
mutated through the board it was taken from.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from numbers import Integral
from typing import Iterator, List, Tuple


class InvalidInput(ValueError):
    """Raised when a board size is not a positive integer."""


def validate_size(size: object) -> int:
    """Return ``size`` if it is a usable board dimension, else raise.

    Any ``numbers.Integral`` is accepted (numpy integers included) and
    returned as a plain ``int``. Booleans are rejected explicitly because
    ``bool`` subclasses ``int``.
    """
    if isinstance(size, bool) or not isinstance(size, Integral):
        raise InvalidInput(f"Board size must be an integer, got {size!r}")
    if size < 1:
        raise InvalidInput(f"Board size must be >= 1, got {size}")
    return int(size)


@dataclass(frozen=True)
class Solution:
    """Immutable N x N occupancy grid taken by ``Board.snapshot``.

    The search only snapshots complete placements. A snapshot of a partly
    filled board is still valid: its empty rows report column -1.
    """

    cells: Tuple[Tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def columns(self) -> Tuple[int, ...]:
        """Column of the queen in each row (``columns[row] = col``), -1 if the row is empty."""
        return tuple(row.index(True) if True in row else -1 for row in self.cells)

    @property
    def queens(self) -> Tuple[Tuple[int, int], ...]:
        """(row, col) of every placed queen, top to bottom."""
        return tuple((row, col) for row, col in enumerate(self.columns) if col != -1)

    def render(self, queen: str = "Q", empty: str = ".") -> str:
        return render_solution(self, queen=queen, empty=empty)

    def __str__(self) -> str:
        return render_solution(self)


def render_solution(solution: Solution, queen: str = "Q", empty: str = ".") -> str:
    """Project a solution onto N text lines of space-separated symbols.

    >>> print(render_solution(Solution(((False, True), (True, False)))))
    . Q
    Q .
    """
    if len(queen) != 1 or len(empty) != 1 or queen == empty:
        raise ValueError("queen and empty symbols must be distinct single characters")
    return "\n".join(" ".join(queen if cell else empty for cell in row) for row in solution.cells)


class Board:
    """Mutable N x N board explored by a single backtracking search.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 1).

    Notes
    -----
    ``place`` and ``remove`` are O(1); ``snapshot`` is O(N^2). The board
    does not check attacks between queens, that is the job of
    ``nqueens_enum.backtracking.is_safe``.
    """

    def __init__(self, size: int):
        self.size = validate_size(size)
        self._cells: List[List[bool]] = [[False] * self.size for _ in range(self.size)]
        self.queen_columns: List[int] = [-1] * self.size

    def is_occupied(self, row: int, col: int) -> bool:
        return self._cells[row][col]

    def queen_column(self, row: int) -> int:
        """Return the column of the queen in ``row``, or -1 if the row is empty."""
        return self.queen_columns[row]

    def queen_count(self) -> int:
        return sum(1 for col in self.queen_columns if col != -1)

    def place(self, row: int, col: int) -> None:
        if self._cells[row][col]:
            raise ValueError(f"Cell ({row}, {col}) is already occupied")
        if self.queen_columns[row] != -1:
            raise ValueError(f"Row {row} already holds a queen at column {self.queen_columns[row]}")
        self._cells[row][col] = True
        self.queen_columns[row] = col

    def remove(self, row: int, col: int) -> None:
        if not self._cells[row][col]:
            raise ValueError(f"Cell ({row}, {col}) holds no queen")
        self._cells[row][col] = False
        self.queen_columns[row] = -1

    @contextmanager
    def placed(self, row: int, col: int) -> Iterator["Board"]:
        """Place a queen for the duration of the ``with`` block.

        The queen is removed on every exit path, including exceptions raised
        by the body.
        """
        self.place(row, col)
        try:
            yield self
        finally:
            self.remove(row, col)

    def snapshot(self) -> Solution:
        return Solution(tuple(tuple(row) for row in self._cells))

    def __repr__(self) -> str:
        return f"Board(size={self.size}, queen_columns={self.queen_columns})"
