"""Enumeration experiment runners (sequential and parallel).

These routines execute repeatable batches of full enumerations for a set of
board sizes. The search itself is deterministic, so repeated runs only
differ in wall-clock time; the solution count and node count of every
complete run must agree, which ``validate=True`` checks.

Outputs are structured dictionaries suitable for CSV export and plotting.
"""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Any, List, Optional, Sequence, Tuple

from . import settings
from .stats import (
    EnumerationRecord,
    ExperimentResults,
    ProgressPrinter,
    summarize_runs,
)
from nqueens_enum.backtracking import enumerate_solutions
from nqueens_enum.utils import KNOWN_SOLUTION_COUNTS, is_valid_solution


# Reusable workers -----------------------------------------------------------

def run_single_enumeration(
    params: Tuple[int, Optional[float], bool],
) -> Tuple[EnumerationRecord, List[Tuple[int, ...]]]:
    """Worker wrapper to invoke a single enumeration (for parallel mapping).

    Returns the run record and, when requested, the column assignment of
    every solution so the caller can validate them.
    """
    N, time_limit, keep_columns = params
    result = enumerate_solutions(N, time_limit=time_limit)
    record: EnumerationRecord = {
        "solutions": result.count,
        "nodes": result.nodes,
        "time": result.elapsed,
        "timeout": result.timeout,
    }
    columns = [s.columns for s in result.solutions] if keep_columns else []
    return record, columns


def validate_runs(
    N: int,
    runs: Sequence[EnumerationRecord],
    columns_per_run: Sequence[Sequence[Tuple[int, ...]]],
) -> None:
    """Raise ``AssertionError`` if any run reports inconsistent results.

    Checks every returned placement, the known total for complete runs, and
    that all complete runs agree on solutions, nodes and discovery order.
    """
    for idx, columns in enumerate(columns_per_run):
        for sol_idx, placement in enumerate(columns):
            if not is_valid_solution(placement):
                raise AssertionError(f"Invalid solution #{sol_idx} for N={N}, run {idx}: {list(placement)}")
        if list(columns) != sorted(columns):
            raise AssertionError(f"Solutions for N={N}, run {idx} are not in discovery order")

    complete = [(run, cols) for run, cols in zip(runs, columns_per_run) if not run["timeout"]]
    if not complete:
        return

    expected = KNOWN_SOLUTION_COUNTS.get(N)
    first_run, first_cols = complete[0]
    for idx, (run, cols) in enumerate(complete):
        if expected is not None and run["solutions"] != expected:
            raise AssertionError(
                f"Enumeration for N={N} found {run['solutions']} solutions, expected {expected}"
            )
        if run["solutions"] != first_run["solutions"] or run["nodes"] != first_run["nodes"]:
            raise AssertionError(
                f"Non-deterministic enumeration for N={N}: run {idx} reported "
                f"{run['solutions']} solutions / {run['nodes']} nodes, first run "
                f"{first_run['solutions']} / {first_run['nodes']}"
            )
        if list(cols) != list(first_cols):
            raise AssertionError(f"Discovery order differs between runs for N={N}")


def _budget_exhausted(start: float) -> bool:
    limit = settings.EXPERIMENT_TIMEOUT
    return limit is not None and (perf_counter() - start) > limit


# Sequential runner ----------------------------------------------------------

def run_enumeration_experiments(
    N_values: List[int],
    runs: int,
    time_limit: Optional[float],
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> ExperimentResults:
    """Run ``runs`` full enumerations for each N, one after the other.

    When the bundle exceeds ``settings.EXPERIMENT_TIMEOUT``, the remaining
    (larger) N values are skipped and absent from the results.
    """
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")

    results: Any = {"BT": {}}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    start = perf_counter()

    for index, N in enumerate(N_values, start=1):
        if _budget_exhausted(start):
            print(f"Experiment timeout reached; skipping N >= {N}")
            break
        if progress:
            progress.update(index, f"N={N}")
        print(f"=== (Final) N = {N}, {runs} enumeration runs ===")

        records: List[EnumerationRecord] = []
        columns_per_run: List[List[Tuple[int, ...]]] = []
        for _ in range(runs):
            record, columns = run_single_enumeration((N, time_limit, validate))
            records.append(record)
            columns_per_run.append(columns)

        if validate:
            validate_runs(N, records, columns_per_run)

        entry = summarize_runs(records)
        results["BT"][N] = entry
        status = "complete" if entry["complete"] else "timeout"
        print(f"  -> {entry['solutions']} solutions, {entry['nodes']} nodes ({status})")

    return results


# Parallel runner ------------------------------------------------------------

def run_enumeration_experiments_parallel(
    N_values: List[int],
    runs: int,
    time_limit: Optional[float],
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> ExperimentResults:
    """Parallel version of the final experiments using process pools.

    Repeated runs of the same N are distributed across ``NUM_PROCESSES``
    workers. Timings are noisier than in sequential mode.
    """
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")

    results: Any = {"BT": {}}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    start = perf_counter()

    with ProcessPoolExecutor(max_workers=settings.NUM_PROCESSES) as executor:
        for index, N in enumerate(N_values, start=1):
            if _budget_exhausted(start):
                print(f"Experiment timeout reached; skipping N >= {N}")
                break
            if progress:
                progress.update(index, f"N={N}")
            print(f"=== (Final Parallel) N = {N}, {runs} enumeration runs ===")

            params = [(N, time_limit, validate) for _ in range(runs)]
            raw: List[Tuple[EnumerationRecord, List[Tuple[int, ...]]]] = list(
                executor.map(run_single_enumeration, params)
            )
            records = [record for record, _ in raw]
            columns_per_run = [columns for _, columns in raw]

            if validate:
                validate_runs(N, records, columns_per_run)

            entry = summarize_runs(records)
            results["BT"][N] = entry
            status = "complete" if entry["complete"] else "timeout"
            print(f"  -> {entry['solutions']} solutions, {entry['nodes']} nodes ({status})")

    return results


def completed_sizes(results: ExperimentResults, N_values: List[int]) -> List[int]:
    """Return the N values that actually have an entry, in the given order."""
    return [N for N in N_values if N in results.get("BT", {})]
