"""Command-line interface and high-level pipelines for N-Queens enumeration.

This module wires together configuration loading, execution of the
enumeration experiment suites (sequential or parallel), CSV/chart output and
a direct "show all solutions for one N" mode. It isolates I/O, argument
parsing and progress reporting from the core search so that the rest of the
codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import csv
import os
import tempfile
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional, Sequence

from . import settings
from .experiments import (
    completed_sizes,
    run_enumeration_experiments,
    run_enumeration_experiments_parallel,
)
from .plots import plot_and_save, plot_solution_boards
from .reporting import (
    save_raw_data_to_csv,
    save_results_to_csv,
    save_solutions_to_csv,
)
from config_manager import ConfigManager
from nqueens_enum.backtracking import solve, solve_parallel
from nqueens_enum.board import InvalidInput, Solution, render_solution
from nqueens_enum.utils import KNOWN_SOLUTION_COUNTS, is_valid_grid


# ------------- Utils --------------------------------------------------------

def _optional_float(value: Any, name: str = "time limit") -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number of seconds or null, got {value!r}")
    if not value > 0 or value == float("inf"):
        raise ValueError(f"{name} must be positive and finite or null, got {value!r}")
    return float(value)


def _positive_int(value: Any, name: str) -> int:
    """Return ``value`` as an int if it is a whole number >= 1, else raise ``ValueError``.

    JSON has no integer type distinct from floats, so ``4.0`` is accepted
    while ``4.7``, booleans and ``null`` are not.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not float(value).is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value!r}")
    return int(value)


def _positive_workers(text: str) -> int:
    """argparse type for ``--workers``."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and copy it into the global ``settings`` module.

    Raises ``FileNotFoundError`` if the file is missing and ``ValueError``
    for out-of-range values.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        raw_n_values = experiment_settings.get("N_values", settings.N_VALUES)
        if not isinstance(raw_n_values, list) or not raw_n_values:
            raise ValueError(f"N_values must be a non-empty list of integers, got {raw_n_values!r}")
        n_values = [_positive_int(n, "N_values entry") for n in raw_n_values]
        runs_final = _positive_int(experiment_settings.get("runs_final", settings.RUNS_FINAL), "runs_final")
        out_dir = experiment_settings.get("output_dir", settings.OUT_DIR)
        if not isinstance(out_dir, str) or not out_dir:
            raise ValueError(f"output_dir must be a non-empty string, got {out_dir!r}")
        settings.N_VALUES = sorted(set(n_values))
        settings.RUNS_FINAL = runs_final
        settings.OUT_DIR = out_dir

    timeout_settings = config_mgr.get_timeout_settings()
    if timeout_settings:
        settings.set_timeouts(
            time_limit=_optional_float(timeout_settings.get("time_limit", settings.TIME_LIMIT), "time_limit"),
            experiment_timeout=_optional_float(
                timeout_settings.get("experiment_timeout", settings.EXPERIMENT_TIMEOUT), "experiment_timeout"
            ),
        )

    parallel_settings = config_mgr.get_parallel_settings()
    num_processes = parallel_settings.get("num_processes") if parallel_settings else None
    if num_processes is not None:
        settings.NUM_PROCESSES = _positive_int(num_processes, "num_processes")

    output_settings = config_mgr.get_output_settings()
    if output_settings:
        settings.DATE_IN_FILENAMES = bool(output_settings.get("date_in_filenames", settings.DATE_IN_FILENAMES))
        run_tag = output_settings.get("run_tag", settings.RUN_TAG)
        if run_tag is not None and not isinstance(run_tag, str):
            raise ValueError(f"run_tag must be a string or null, got {run_tag!r}")
        settings.RUN_TAG = run_tag

    return config_mgr


def print_solutions(n: int, solutions: Sequence[Solution]) -> None:
    """Print the total followed by every solution board, numbered from 1."""
    print(f"\nTotal Solutions for {n} Queens = {len(solutions)}\n")
    for index, solution in enumerate(solutions, start=1):
        print(f"Solution {index}:")
        print(render_solution(solution))
        print()


# ------------- Pipelines ----------------------------------------------------

def main_sequential(validate: bool = False, make_plots: bool = True) -> None:
    """Run the enumeration experiments one size at a time and export results.

    Preferred when timings matter: nothing else competes for the CPU.
    """
    settings.CURRENT_PIPELINE_MODE = "sequential"
    os.makedirs(settings.OUT_DIR, exist_ok=True)
    print("\n============================================")
    print("SEQUENTIAL ENUMERATION PIPELINE")
    print("============================================")

    results = run_enumeration_experiments(
        settings.N_VALUES,
        runs=settings.RUNS_FINAL,
        time_limit=settings.TIME_LIMIT,
        progress_label="Enumeration",
        validate=validate,
    )
    sizes = completed_sizes(results, settings.N_VALUES)
    save_results_to_csv(results, sizes, settings.OUT_DIR)
    save_raw_data_to_csv(results, sizes, settings.OUT_DIR)
    if make_plots:
        plot_and_save(results, sizes, settings.OUT_DIR)

    print("\nSequential pipeline completed.")


def main_parallel(validate: bool = False, make_plots: bool = True) -> None:
    """Run the enumeration experiments with repeated runs spread over processes."""
    settings.CURRENT_PIPELINE_MODE = "parallel"
    os.makedirs(settings.OUT_DIR, exist_ok=True)

    print(f"\nStarting parallel pipeline with {settings.NUM_PROCESSES} worker processes")
    print(f"Available CPU cores: {os.cpu_count()}")
    print("Configured timeouts:")
    print(f"   - Enumeration: {settings.TIME_LIMIT}s" if settings.TIME_LIMIT else "   - Enumeration: unlimited")
    print(
        f"   - Experiment: {settings.EXPERIMENT_TIMEOUT}s"
        if settings.EXPERIMENT_TIMEOUT
        else "   - Experiment: unlimited"
    )

    start_total = perf_counter()
    results = run_enumeration_experiments_parallel(
        settings.N_VALUES,
        runs=settings.RUNS_FINAL,
        time_limit=settings.TIME_LIMIT,
        progress_label="Enumeration (parallel)",
        validate=validate,
    )
    sizes = completed_sizes(results, settings.N_VALUES)
    save_results_to_csv(results, sizes, settings.OUT_DIR)
    save_raw_data_to_csv(results, sizes, settings.OUT_DIR)
    if make_plots:
        plot_and_save(results, sizes, settings.OUT_DIR)

    total_time = perf_counter() - start_total
    print("\nParallel pipeline completed.")
    print(f"Total time: {total_time:.1f}s ({total_time/60:.1f} minutes)")


def main_show(
    n: int,
    workers: Optional[int] = None,
    save_solutions: bool = False,
    make_plots: bool = False,
    validate: bool = False,
) -> List[Solution]:
    """Enumerate one board size, print every solution and optionally export them."""
    if workers is not None and workers > 1:
        solutions = list(solve_parallel(n, max_workers=workers))
    else:
        solutions = list(solve(n))

    if validate:
        for index, solution in enumerate(solutions, start=1):
            if not is_valid_grid(solution.cells):
                raise AssertionError(f"Invalid solution #{index} for N={n}: {list(solution.columns)}")
        expected = KNOWN_SOLUTION_COUNTS.get(n)
        if expected is not None and len(solutions) != expected:
            raise AssertionError(f"Found {len(solutions)} solutions for N={n}, expected {expected}")

    print_solutions(n, solutions)
    if save_solutions:
        save_solutions_to_csv(n, solutions, settings.OUT_DIR)
    if make_plots:
        plot_solution_boards(solutions, settings.OUT_DIR)
    return solutions


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test of the solver and CSV export.

    Verifies that:
    - Solution counts for N=1..8 match the known totals and every solution is valid.
    - N=4 yields [1, 3, 0, 2] then [2, 0, 3, 1].
    - The parallel solver reproduces the sequential order for N=6.
    - The experiment pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=1..8)...")

    for n in range(1, 9):
        solutions = solve(n)
        if len(solutions) != KNOWN_SOLUTION_COUNTS[n]:
            raise AssertionError(f"N={n}: found {len(solutions)} solutions, expected {KNOWN_SOLUTION_COUNTS[n]}.")
        for solution in solutions:
            if not is_valid_grid(solution.cells):
                raise AssertionError(f"N={n}: invalid solution {list(solution.columns)}.")
        print(f"  N={n}: {len(solutions)} solutions")

    order = [list(s.columns) for s in solve(4)]
    if order != [[1, 3, 0, 2], [2, 0, 3, 1]]:
        raise AssertionError(f"Unexpected N=4 discovery order: {order}.")

    if solve_parallel(6, max_workers=2) != solve(6):
        raise AssertionError("Parallel enumeration order differs from sequential for N=6.")

    results = run_enumeration_experiments([4, 5, 6], runs=2, time_limit=5.0,
                                          progress_label="Quick regression experiments", validate=True)

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, [4, 5, 6], tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Results CSV was not generated successfully during quick tests.")
        with open(csv_path, newline="") as f:
            rows: List[Dict[str, str]] = list(csv.DictReader(f))
        if [int(r["solutions"]) for r in rows] != [2, 10, 4]:
            raise AssertionError(f"Unexpected solution counts in CSV: {rows}.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Enumerate all N-Queens solutions and run scaling experiments.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="parallel",
        help="Execution mode for the experiment suite (default: parallel).",
    )
    parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    parser.add_argument("--show", type=int, metavar="N", help="Print every solution for a single board size N and exit.")
    parser.add_argument("--workers", type=_positive_workers, default=None, help="With --show: split the search over this many processes.")
    parser.add_argument("--save-solutions", action="store_true", help="With --show: also write the solutions to CSV.")
    parser.add_argument("--no-plots", action="store_true", help="Skip chart generation.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    parser.add_argument("--validate", action="store_true", help="Validate solutions and check run consistency (extra assertions).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    if args.show is not None and not Path(args.config).exists():
        # Showing one board needs no experiment configuration.
        config_loaded = False
    else:
        try:
            apply_configuration(args.config)
        except FileNotFoundError as exc:
            print(f"Configuration file not found: {exc}")
            raise SystemExit(1) from exc
        except ValueError as exc:
            print(f"Configuration error: {exc}")
            raise SystemExit(1) from exc
        config_loaded = True

    try:
        if args.show is not None:
            if not config_loaded:
                print(f"No configuration at {args.config}; using defaults.")
            main_show(
                args.show,
                workers=args.workers,
                save_solutions=args.save_solutions,
                make_plots=args.save_solutions and not args.no_plots,
                validate=args.validate,
            )
        elif args.mode == "sequential":
            main_sequential(validate=args.validate, make_plots=not args.no_plots)
        else:
            main_parallel(validate=args.validate, make_plots=not args.no_plots)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user. Cleaning up workers...")
        raise SystemExit(130) from None
    except InvalidInput as exc:
        print(f"Invalid input: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
