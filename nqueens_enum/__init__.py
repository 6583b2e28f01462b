"""Exhaustive N-Queens enumeration by backtracking."""

from .backtracking import SearchResult, enumerate_solutions, is_safe, solve, solve_parallel
from .board import Board, InvalidInput, Solution, render_solution
from .utils import KNOWN_SOLUTION_COUNTS, conflicts, conflicts_on2, is_valid_grid, is_valid_solution

__all__ = [
    "solve",
    "solve_parallel",
    "enumerate_solutions",
    "is_safe",
    "SearchResult",
    "Board",
    "Solution",
    "InvalidInput",
    "render_solution",
    "KNOWN_SOLUTION_COUNTS",
    "conflicts",
    "conflicts_on2",
    "is_valid_grid",
    "is_valid_solution",
]
