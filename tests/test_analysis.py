"""Tests for the experiment runners, statistics, CSV exports and charts."""

from contextlib import redirect_stdout
import csv
import io
from pathlib import Path
import sys
import tempfile
import unittest
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqueens_enum import solve
from nqueens_enum.analysis import settings
from nqueens_enum.analysis.experiments import (
    completed_sizes,
    run_enumeration_experiments,
    run_enumeration_experiments_parallel,
    validate_runs,
)
from nqueens_enum.analysis.plots import plot_comprehensive_analysis, plot_solution_boards
from nqueens_enum.analysis.reporting import (
    save_raw_data_to_csv,
    save_results_to_csv,
    save_solutions_to_csv,
)
from nqueens_enum.analysis.stats import (
    ProgressPrinter,
    compute_detailed_statistics,
    summarize_runs,
)


def _quiet(fn, *args, **kwargs):
    with redirect_stdout(io.StringIO()):
        return fn(*args, **kwargs)


class StatsTests(unittest.TestCase):

    def test_empty_values(self):
        summary = compute_detailed_statistics([])
        self.assertEqual(summary["count"], 0)
        self.assertIsNone(summary["mean"])

    def test_basic_summary(self):
        summary = compute_detailed_statistics([1.0, 2.0, 3.0, 4.0])
        self.assertEqual(summary["count"], 4)
        self.assertAlmostEqual(summary["mean"], 2.5)
        self.assertAlmostEqual(summary["median"], 2.5)
        self.assertEqual(summary["min"], 1.0)
        self.assertEqual(summary["max"], 4.0)
        self.assertEqual(summary["range"], 3.0)
        self.assertEqual(summary["q25"], 2.0)
        self.assertEqual(summary["q75"], 4.0)

    def test_summarize_runs_prefers_complete_run(self):
        runs = [
            {"solutions": 30, "nodes": 900, "time": 1.0, "timeout": True},
            {"solutions": 92, "nodes": 15720, "time": 0.5, "timeout": False},
        ]
        entry = summarize_runs(runs)
        self.assertTrue(entry["complete"])
        self.assertEqual(entry["solutions"], 92)
        self.assertEqual(entry["timeouts"], 1)
        self.assertAlmostEqual(entry["timeout_rate"], 0.5)
        self.assertEqual(entry["complete_time"]["count"], 1)
        self.assertEqual(entry["all_time"]["count"], 2)

    def test_summarize_runs_all_timed_out(self):
        runs = [
            {"solutions": 3, "nodes": 50, "time": 1.0, "timeout": True},
            {"solutions": 7, "nodes": 80, "time": 1.0, "timeout": True},
        ]
        entry = summarize_runs(runs)
        self.assertFalse(entry["complete"])
        self.assertEqual(entry["solutions"], 7)

    def test_progress_printer(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            ProgressPrinter(0, "Phase").update(1, "N=4")
        self.assertEqual(buffer.getvalue().strip(), "[Phase] 1/1 (100%) - N=4")


class ExperimentTests(unittest.TestCase):

    def setUp(self):
        patcher = mock.patch.object(settings, "EXPERIMENT_TIMEOUT", None)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_sequential_results(self):
        results = _quiet(run_enumeration_experiments, [4, 5, 6], runs=2, time_limit=10.0,
                         progress_label="test", validate=True)
        self.assertEqual(sorted(results["BT"]), [4, 5, 6])
        self.assertEqual(results["BT"][5]["solutions"], 10)
        self.assertEqual(results["BT"][4]["total_runs"], 2)
        self.assertTrue(all(results["BT"][n]["complete"] for n in (4, 5, 6)))
        self.assertEqual(len(results["BT"][6]["raw_runs"]), 2)

    def test_parallel_matches_sequential_counts(self):
        with mock.patch.object(settings, "NUM_PROCESSES", 2):
            parallel = _quiet(run_enumeration_experiments_parallel, [4, 6], runs=2, time_limit=10.0, validate=True)
        sequential = _quiet(run_enumeration_experiments, [4, 6], runs=1, time_limit=10.0)
        for n in (4, 6):
            self.assertEqual(parallel["BT"][n]["solutions"], sequential["BT"][n]["solutions"])
            self.assertEqual(parallel["BT"][n]["nodes"], sequential["BT"][n]["nodes"])

    def test_rejects_zero_runs(self):
        with self.assertRaises(ValueError):
            run_enumeration_experiments([4], runs=0, time_limit=None)

    def test_experiment_timeout_skips_remaining_sizes(self):
        with mock.patch.object(settings, "EXPERIMENT_TIMEOUT", -1.0):
            results = _quiet(run_enumeration_experiments, [4, 5], runs=1, time_limit=None)
        self.assertEqual(results["BT"], {})
        self.assertEqual(completed_sizes(results, [4, 5]), [])

    def test_validate_runs_detects_wrong_count(self):
        runs = [{"solutions": 3, "nodes": 10, "time": 0.1, "timeout": False}]
        with self.assertRaises(AssertionError):
            validate_runs(4, runs, [[(1, 3, 0, 2)]])

    def test_validate_runs_detects_invalid_solution(self):
        runs = [{"solutions": 2, "nodes": 10, "time": 0.1, "timeout": False}]
        with self.assertRaises(AssertionError):
            validate_runs(4, runs, [[(0, 1, 2, 3), (2, 0, 3, 1)]])

    def test_validate_runs_detects_nondeterminism(self):
        runs = [
            {"solutions": 2, "nodes": 10, "time": 0.1, "timeout": False},
            {"solutions": 2, "nodes": 11, "time": 0.1, "timeout": False},
        ]
        cols = [(1, 3, 0, 2), (2, 0, 3, 1)]
        with self.assertRaises(AssertionError):
            validate_runs(4, runs, [cols, cols])


class ReportingTests(unittest.TestCase):

    def setUp(self):
        patchers = [
            mock.patch.object(settings, "DATE_IN_FILENAMES", False),
            mock.patch.object(settings, "RUN_TAG", None),
            mock.patch.object(settings, "EXPERIMENT_TIMEOUT", None),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)
        self.results = _quiet(run_enumeration_experiments, [4, 5], runs=2, time_limit=10.0)

    def test_results_csv(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _quiet(save_results_to_csv, self.results, [4, 5, 6], tmpdir)
            self.assertEqual(Path(path).name, "results_enum.csv")
            with open(path, newline="") as f:
                rows = list(csv.DictReader(f))
        self.assertEqual([r["n"] for r in rows], ["4", "5"])
        self.assertEqual([r["solutions"] for r in rows], ["2", "10"])
        self.assertEqual(rows[0]["complete"], "True")

    def test_raw_csv(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _quiet(save_raw_data_to_csv, self.results, [4, 5], tmpdir)
            with open(path, newline="") as f:
                rows = list(csv.DictReader(f))
        self.assertEqual(len(rows), 4)
        self.assertEqual(rows[0]["run"], "1")

    def test_solutions_csv(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _quiet(save_solutions_to_csv, 4, solve(4), tmpdir)
            with open(path, newline="") as f:
                rows = list(csv.reader(f))
        self.assertEqual(rows[0], ["solution", "row_0", "row_1", "row_2", "row_3"])
        self.assertEqual(rows[1], ["1", "1", "3", "0", "2"])
        self.assertEqual(rows[2], ["2", "2", "0", "3", "1"])

    def test_run_tag_suffix(self):
        with mock.patch.object(settings, "RUN_TAG", "demo"):
            with tempfile.TemporaryDirectory() as tmpdir:
                path = _quiet(save_results_to_csv, self.results, [4, 5], tmpdir)
                self.assertEqual(Path(path).name, "results_enum_demo.csv")


class PlotTests(unittest.TestCase):

    def setUp(self):
        patchers = [
            mock.patch.object(settings, "DATE_IN_FILENAMES", False),
            mock.patch.object(settings, "EXPERIMENT_TIMEOUT", None),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_sequential_charts(self):
        results = _quiet(run_enumeration_experiments, [4, 5, 6], runs=1, time_limit=10.0)
        with mock.patch.object(settings, "CURRENT_PIPELINE_MODE", "sequential"):
            with tempfile.TemporaryDirectory() as tmpdir:
                written = _quiet(plot_comprehensive_analysis, results, [4, 5, 6], tmpdir)
                names = sorted(Path(p).name for p in written)
                self.assertTrue(all(Path(p).exists() for p in written))
        self.assertEqual(names, [
            "01_solutions_vs_N.png",
            "02_nodes_vs_N_log_scale.png",
            "03_time_vs_N_log_scale.png",
            "04_nodes_vs_time.png",
            "05_time_per_node_vs_N.png",
        ])

    def test_parallel_mode_skips_timing_correlation(self):
        results = _quiet(run_enumeration_experiments, [4, 5], runs=1, time_limit=10.0)
        with mock.patch.object(settings, "CURRENT_PIPELINE_MODE", "parallel"):
            with tempfile.TemporaryDirectory() as tmpdir:
                written = _quiet(plot_comprehensive_analysis, results, [4, 5], tmpdir)
        self.assertEqual(len(written), 3)

    def test_solution_gallery(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _quiet(plot_solution_boards, solve(6), tmpdir, max_boards=3)
            self.assertTrue(Path(path).exists())
            self.assertEqual(_quiet(plot_solution_boards, (), tmpdir), "")


if __name__ == "__main__":
    unittest.main()
