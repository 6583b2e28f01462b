"""Utility helpers for checking N-Queens placements independently of the solver.

Representation
--------------
Placements are encoded as a 1D sequence where ``columns[row] = col``, the
same view exposed by ``Solution.columns``. Grids are sequences of rows of
booleans, as stored in ``Solution.cells``.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence

# Total number of solutions per board size (OEIS A000170).
KNOWN_SOLUTION_COUNTS: Dict[int, int] = {
    1: 1,
    2: 0,
    3: 0,
    4: 2,
    5: 10,
    6: 4,
    7: 40,
    8: 92,
    9: 352,
    10: 724,
    11: 2680,
    12: 14200,
    13: 73712,
    14: 365596,
}


def conflicts(columns: Sequence[int]) -> int:
    """Compute the number of attacking queen pairs in O(N).

    Counts queens per column and per diagonal; rows are distinct by
    representation.
    """
    col_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for row, col in enumerate(columns):
        col_count[col] += 1
        diag1[row - col] += 1
        diag2[row + col] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(col_count) + _pairs(diag1) + _pairs(diag2)


def conflicts_on2(columns: Sequence[int]) -> int:
    """Compute the number of attacking queen pairs in O(N^2).

    Reference implementation for cross-checking ``conflicts``.
    """
    n = len(columns)
    conflicts_count = 0
    for i in range(n):
        for j in range(i + 1, n):
            if columns[i] == columns[j] or abs(columns[i] - columns[j]) == abs(i - j):
                conflicts_count += 1
    return conflicts_count


def is_valid_solution(columns: Sequence[int]) -> bool:
    """Return True if ``columns`` is a complete non-attacking placement.

    Contract
    - Input: sequence of length N where columns[row] = col (0-based indices)
    - Valid if: N >= 1, every col is an int in [0, N) and no two queens attack
    - Zero conflicts with N queens implies the row -> column map is a bijection
    """
    n = len(columns)
    if n == 0:
        return False
    for col in columns:
        if isinstance(col, bool) or not isinstance(col, int):
            return False
        if col < 0 or col >= n:
            return False
    return conflicts(columns) == 0


def is_valid_grid(cells: Sequence[Sequence[bool]]) -> bool:
    """Return True if a square occupancy grid holds a valid N-Queens solution.

    Each row must contain exactly one queen; the resulting column assignment
    is then checked with ``is_valid_solution``.
    """
    n = len(cells)
    columns = []
    for row in cells:
        if len(row) != n:
            return False
        occupied = [col for col, cell in enumerate(row) if cell]
        if len(occupied) != 1:
            return False
        columns.append(occupied[0])
    return is_valid_solution(columns)
