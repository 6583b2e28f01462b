"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for enumeration outputs and provides
utilities to summarise repeated timing measurements.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class EnumerationRecord(TypedDict):
    solutions: int
    nodes: int
    time: float
    timeout: bool


class EnumerationEntry(TypedDict, total=False):
    solutions: int
    nodes: int
    complete: bool
    total_runs: int
    timeouts: int
    timeout_rate: float
    all_time: StatsSummary
    complete_time: StatsSummary
    raw_runs: List[EnumerationRecord]


class ExperimentResults(TypedDict):
    BT: Dict[int, EnumerationEntry]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float], label: str = "") -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Parameters
    ----------
    values : List[float]
        Finite numeric values to summarize.
    label : str, optional
        Carried for debugging contexts; not used in calculations.

    Returns
    -------
    StatsSummary
        count, mean, median, population std, min, max, q25, q75 and range.
        When ``values`` is empty every numeric field is ``None`` and ``count``
        is 0 so CSV and plot generation stay uniform.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    mean_val = statistics.mean(values)
    median_val = statistics.median(values)
    min_val = min(values)
    max_val = max(values)
    std_val = statistics.pstdev(values) if n > 1 else 0

    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": mean_val,
        "median": median_val,
        "std": std_val,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": max_val - min_val,
    }


def summarize_runs(runs: List[EnumerationRecord]) -> EnumerationEntry:
    """Fold repeated enumeration runs for one N into an ``EnumerationEntry``.

    ``solutions`` and ``nodes`` come from the first complete run when there
    is one (all complete runs agree), otherwise from the run that got
    furthest before timing out.
    """
    complete_runs = [r for r in runs if not r["timeout"]]
    timeouts = len(runs) - len(complete_runs)

    if complete_runs:
        reference = complete_runs[0]
    elif runs:
        reference = max(runs, key=lambda r: (r["solutions"], r["nodes"]))
    else:
        reference = {"solutions": 0, "nodes": 0, "time": 0.0, "timeout": False}

    return {
        "solutions": reference["solutions"],
        "nodes": reference["nodes"],
        "complete": bool(complete_runs),
        "total_runs": len(runs),
        "timeouts": timeouts,
        "timeout_rate": timeouts / len(runs) if runs else 0.0,
        "all_time": compute_detailed_statistics([r["time"] for r in runs], "all_time"),
        "complete_time": compute_detailed_statistics([r["time"] for r in complete_runs], "complete_time"),
        "raw_runs": list(runs),
    }
