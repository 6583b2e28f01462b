"""
Analysis and orchestration package for N-Queens enumeration experiments.

This package contains:
- settings: global knobs and timeouts
- stats: typed summaries and aggregation helpers
- experiments: sequential and parallel enumeration runners
- reporting: CSV exports of aggregates, raw runs and solutions
- plots: chart and board-gallery utilities
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    EnumerationRecord,
    EnumerationEntry,
    ExperimentResults,
    compute_detailed_statistics,
    summarize_runs,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "EnumerationRecord",
    "EnumerationEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "summarize_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
