"""Exhaustive backtracking enumeration for the N-Queens problem.

This module enumerates *every* placement of N non-attacking queens and
provides three entry points:

- solve(n): all solutions, in discovery order, as a tuple of ``Solution``.
- enumerate_solutions(n, time_limit=None): the same search returning a
    ``SearchResult`` with node counts, wall time and an optional time limit.
- solve_parallel(n, max_workers=None): one worker process per row-0 column,
    merged back into the sequential discovery order.

Implementation overview
-----------------------
- State representation: a ``Board`` (see ``nqueens_enum.board``) holding
    the occupancy grid; queens are placed row by row, top to bottom.
- Safety check: ``is_safe`` scans the column and both upward diagonals from
    the candidate cell. Rows below the current row are always empty because
    of the placement order, so they are never inspected.
- Search strategy: recursive depth-first search. Each row tries columns
    0..N-1 in ascending order; every placement is undone as soon as the
    subtree below it is exhausted. No memoization and no symmetry pruning.
- Solutions: a deep snapshot of the board is appended to an accumulator list
    owned by the current search whenever all N rows hold a queen.

Contract (public API)
---------------------
- Input: ``n >= 1`` (``int``). Anything else raises ``InvalidInput`` before
    the search starts.
- Output order: depth-first with ascending columns, i.e. solutions sorted
    lexicographically by their per-row column assignment.
- Nodes explored semantics: incremented every time a candidate cell is
    handed to ``is_safe``, whether accepted or rejected.
- Determinism: equal inputs always produce equal outputs, in equal order.
"""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from time import perf_counter
from typing import List, Optional, Tuple

from .board import Board, Solution, validate_size


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one enumeration run."""

    size: int
    solutions: Tuple[Solution, ...]
    nodes: int
    elapsed: float
    timeout: bool = False

    @property
    def count(self) -> int:
        return len(self.solutions)


@dataclass
class _SearchState:
    """Mutable bookkeeping threaded through the recursion of one search."""

    board: Board
    solutions: List[Solution] = field(default_factory=list)
    nodes: int = 0
    deadline: Optional[float] = None
    timed_out: bool = False


def is_safe(board: Board, row: int, col: int) -> bool:
    """Return True if a queen at (row, col) attacks no queen in rows above.

    Parameters
    ----------
    board : Board
        Board whose rows ``0..row-1`` hold the queens placed so far.
    row, col : int
        Candidate cell.

    Returns
    -------
    bool
        False as soon as the column or either upward diagonal holds a queen.
    """
    size = board.size

    for r in range(row):
        if board.is_occupied(r, col):
            return False

    r, c = row - 1, col - 1
    while r >= 0 and c >= 0:
        if board.is_occupied(r, c):
            return False
        r -= 1
        c -= 1

    r, c = row - 1, col + 1
    while r >= 0 and c < size:
        if board.is_occupied(r, c):
            return False
        r -= 1
        c += 1

    return True


def _explore(state: _SearchState, row: int) -> None:
    """Depth-first enumeration of all completions of rows ``row..N-1``."""
    if state.deadline is not None and perf_counter() >= state.deadline:
        state.timed_out = True
        return

    board = state.board
    if row == board.size:
        # Leaf: every row holds a queen. Keep a private copy and go on searching.
        state.solutions.append(board.snapshot())
        return

    for col in range(board.size):
        state.nodes += 1
        if not is_safe(board, row, col):
            continue
        with board.placed(row, col):
            _explore(state, row + 1)
        if state.timed_out:
            return


def _check_time_limit(time_limit: Optional[float]) -> Optional[float]:
    if time_limit is None:
        return None
    if isinstance(time_limit, bool) or not isinstance(time_limit, (int, float)) or time_limit < 0:
        raise ValueError(f"time_limit must be a non-negative number of seconds or None, got {time_limit!r}")
    return float(time_limit)


def enumerate_solutions(n: int, time_limit: Optional[float] = None) -> SearchResult:
    """Enumerate all N-Queens solutions and report search statistics.

    Parameters
    ----------
    n : int
        Board dimension N (N >= 1).
    time_limit : float | None
        Optional wall-clock limit in seconds. The clock is sampled each time
        the search enters a row; once exceeded the search unwinds and the
        solutions found so far are returned with ``timeout=True``.

    Returns
    -------
    SearchResult
        Solutions in discovery order, nodes explored, elapsed seconds and the
        timeout flag.

    Raises
    ------
    InvalidInput
        If ``n`` is not a positive integer.
    """
    size = validate_size(n)
    limit = _check_time_limit(time_limit)

    start = perf_counter()
    state = _SearchState(Board(size), deadline=None if limit is None else start + limit)
    _explore(state, 0)
    return SearchResult(
        size=size,
        solutions=tuple(state.solutions),
        nodes=state.nodes,
        elapsed=perf_counter() - start,
        timeout=state.timed_out,
    )


def solve(n: int) -> Tuple[Solution, ...]:
    """Return every placement of ``n`` non-attacking queens, in discovery order.

    Each call builds a fresh board, so repeated or concurrent calls never
    share state and always return equal sequences.

    Raises
    ------
    InvalidInput
        If ``n`` is not a positive integer.
    """
    return enumerate_solutions(n).solutions


def _solve_from_root_column(params: Tuple[int, int]) -> Tuple[Solution, ...]:
    """Worker: enumerate the subtree under a queen at (0, col) on a private board."""
    size, col = params
    state = _SearchState(Board(size))
    # Row 0 is empty, so every column is safe there.
    with state.board.placed(0, col):
        _explore(state, 1)
    return tuple(state.solutions)


def solve_parallel(n: int, max_workers: Optional[int] = None) -> Tuple[Solution, ...]:
    """Enumerate all solutions with one process-pool task per row-0 column.

    Each task owns its board. Partial results are concatenated in ascending
    root-column order, which is exactly the order ``solve`` discovers them,
    so ``solve_parallel(n) == solve(n)``.

    Parameters
    ----------
    n : int
        Board dimension N (N >= 1).
    max_workers : int | None
        Process pool size; ``None`` lets ``ProcessPoolExecutor`` decide.
    """
    size = validate_size(n)
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    tasks = [(size, col) for col in range(size)]
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        # executor.map yields results in submission order, i.e. by root column.
        partials = list(executor.map(_solve_from_root_column, tasks))

    merged: List[Solution] = []
    for part in partials:
        merged.extend(part)
    return tuple(merged)
