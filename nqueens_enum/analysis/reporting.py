"""CSV export utilities for enumeration outputs (aggregates, raw runs, solutions).

These helpers materialize concise CSV summaries, full per-run raw data and
the enumerated placements themselves for downstream analysis or spreadsheet
inspection.
"""
from __future__ import annotations

import csv
import os
from typing import Any, List, Optional, Sequence
from . import settings

from .stats import ExperimentResults, StatsSummary
from nqueens_enum.board import Solution


def _build_suffix() -> str:
    """Build an optional filename suffix from the run tag and datestamp settings.

    Returns an empty string if no suffixing is configured.
    """
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def _stat(summary: Optional[StatsSummary], key: str) -> Any:
    if not summary:
        return ""
    value = summary.get(key)
    return "" if value is None else value


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write compact per-N aggregate metrics to CSV and return the file path.

    Sizes skipped because of the experiment timeout are omitted.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results_enum{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "n",
            "solutions",
            "nodes_explored",
            "complete",
            "total_runs",
            "timeouts",
            "timeout_rate",
            "time_mean_seconds",
            "time_median_seconds",
            "time_std_seconds",
            "time_min_seconds",
            "time_max_seconds",
            "time_per_node_seconds",
        ])
        for N in N_values:
            entry = results["BT"].get(N)
            if entry is None:
                continue
            time_stats = entry.get("all_time")
            mean_time = _stat(time_stats, "mean")
            nodes = entry.get("nodes", 0)
            per_node = (mean_time / nodes) if (mean_time != "" and nodes) else ""
            writer.writerow([
                N,
                entry.get("solutions", 0),
                nodes,
                entry.get("complete", False),
                entry.get("total_runs", 0),
                entry.get("timeouts", 0),
                entry.get("timeout_rate", 0.0),
                mean_time,
                _stat(time_stats, "median"),
                _stat(time_stats, "std"),
                _stat(time_stats, "min"),
                _stat(time_stats, "max"),
                per_node,
            ])

    print(f"Saved aggregate results: {filename}")
    return filename


def save_raw_data_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write one CSV row per enumeration run and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs_enum{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["n", "run", "solutions", "nodes_explored", "time_seconds", "timeout"])
        for N in N_values:
            entry = results["BT"].get(N)
            if entry is None:
                continue
            for run_idx, run in enumerate(entry.get("raw_runs", []), start=1):
                writer.writerow([N, run_idx, run["solutions"], run["nodes"], run["time"], run["timeout"]])

    print(f"Saved raw run data: {filename}")
    return filename


def save_solutions_to_csv(n: int, solutions: Sequence[Solution], out_dir: str) -> str:
    """Write every solution of size ``n`` as its per-row column assignment.

    Columns: ``solution`` (1-based discovery index) then ``row_0..row_{n-1}``
    holding the queen's column in that row.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"solutions_N{n}{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["solution"] + [f"row_{r}" for r in range(n)])
        for index, solution in enumerate(solutions, start=1):
            writer.writerow([index, *solution.columns])

    print(f"Saved {len(solutions)} solutions for N={n}: {filename}")
    return filename
