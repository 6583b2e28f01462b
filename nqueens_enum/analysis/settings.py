"""Global settings and timeouts for the N-Queens enumeration pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`nqueens_enum.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from typing import List, Optional
from datetime import datetime

# Board sizes to enumerate (in ascending order) for scalability analysis
N_VALUES: List[int] = [4, 5, 6, 7, 8, 9, 10, 11, 12]

# Repeated enumerations per N; the search is deterministic, repeats only smooth timings
RUNS_FINAL: int = 5

# Per-run enumeration time limit in seconds (None = no limit)
TIME_LIMIT: Optional[float] = 60.0

# Global timeout per experiment bundle (None = no limit)
EXPERIMENT_TIMEOUT: Optional[float] = 600.0

# Output directory for CSV and charts
OUT_DIR: str = "results_nqueens_enum"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots will include a datestamp suffix (e.g., _20251113-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to filenames to avoid overwriting outputs
RUN_TAG: Optional[str] = None

# Current pipeline mode for plotting/gating decisions: 'sequential' | 'parallel'
CURRENT_PIPELINE_MODE: str = 'parallel'


def set_timeouts(
        time_limit: Optional[float] = 60.0,
        experiment_timeout: Optional[float] = 600.0,
) -> None:
        """Configure the per-run and per-bundle time limits.

        Parameters
        - time_limit: Limit for a single enumeration in seconds (None disables).
        - experiment_timeout: Hard cap for a whole experiment bundle in seconds
            (None disables). When reached, outer loops stop scheduling larger N.

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active limits explicit at run start.
        """
        global TIME_LIMIT, EXPERIMENT_TIMEOUT
        TIME_LIMIT = time_limit
        EXPERIMENT_TIMEOUT = experiment_timeout

        print("Timeout settings configured:")
        print(f"   - Enumeration: {TIME_LIMIT}s" if TIME_LIMIT else "   - Enumeration: unlimited")
        print(
                f"   - Experiment: {EXPERIMENT_TIMEOUT}s"
                if EXPERIMENT_TIMEOUT
                else "   - Experiment: unlimited"
        )
