"""Visualization utilities for enumeration outputs.

Overview
--------
Plotting helpers that turn the aggregated ``ExperimentResults`` into PNG
charts, plus a board gallery for individual solutions.

Chart map (filenames -> content)
--------------------------------
- 01_solutions_vs_N.png: Number of solutions vs N (log scale)
    - X: N (board size). Y: total solutions found (complete runs).
- 02_nodes_vs_N_log_scale.png: Explored nodes vs N (log scale)
    - Hardware-independent effort: candidate cells tested by the safety check.
- 03_time_vs_N_log_scale.png: Mean enumeration time vs N (log scale)
    - Error bars show the population std across repeated runs.
- 04_nodes_vs_time.png: Nodes vs time with a linear trend (sequential only)
    - Near-linearity means time is dominated by the per-node safety scans.
- 05_time_per_node_vs_N.png: Time per node vs N (sequential only)
    - Grows roughly linearly in N because each safety scan is O(N).
- solutions_N{N}.png: Heatmap gallery of the first solutions for one N.

Notes
-----
Charts 04 and 05 are only emitted in sequential mode to avoid wall-clock
noise from parallel execution.
"""
from __future__ import annotations

import math
import os
from typing import List, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402
from matplotlib.colors import ListedColormap  # noqa: E402

from . import settings
from .reporting import _build_suffix
from .stats import ExperimentResults
from nqueens_enum.board import Solution


def _complete_sizes(results: ExperimentResults, N_values: List[int]) -> List[int]:
    return [N for N in N_values if results["BT"].get(N, {}).get("complete", False)]


def plot_comprehensive_analysis(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Generate the per-N charts and return the written file paths.

    Only sizes whose enumeration completed at least once are plotted; a
    timed-out size has no meaningful solution or node total.
    """
    os.makedirs(out_dir, exist_ok=True)
    suffix = _build_suffix()
    written: List[str] = []

    sizes = _complete_sizes(results, N_values)
    if not sizes:
        print("Plotting skipped: no complete enumerations to plot.")
        return written

    entries = [results["BT"][N] for N in sizes]
    counts = [e["solutions"] for e in entries]
    nodes = [e["nodes"] for e in entries]
    mean_time = [e["complete_time"]["mean"] or 0.0 for e in entries]
    std_time = [e["complete_time"]["std"] or 0.0 for e in entries]

    plt.figure(figsize=(12, 8))
    plt.semilogy(sizes, [max(c, 0.5) for c in counts], marker="o", linewidth=2, markersize=8, label="Solutions")
    for n, c in zip(sizes, counts):
        plt.annotate(f"{c}", (n, max(c, 0.5)), textcoords="offset points", xytext=(0, 6), ha="center", fontsize=9)
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Solutions (log scale)", fontsize=12)
    plt.title("Number of Solutions vs Problem Size", fontsize=14)
    plt.grid(True, alpha=0.7)
    plt.xticks(sizes)
    fname = os.path.join(out_dir, f"01_solutions_vs_N{suffix}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    written.append(fname)
    print(f"Saved solutions chart: {fname}")

    plt.figure(figsize=(12, 8))
    plt.semilogy(sizes, nodes, marker="s", linewidth=2, markersize=8, color="tab:orange", label="Explored nodes")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Explored nodes (log scale)", fontsize=12)
    plt.title("Logical Cost vs Problem Size\n(Candidate cells tested by the safety check)", fontsize=14)
    plt.grid(True, alpha=0.7)
    plt.xticks(sizes)
    fname = os.path.join(out_dir, f"02_nodes_vs_N_log_scale{suffix}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    written.append(fname)
    print(f"Saved logical-cost chart (log scale): {fname}")

    plt.figure(figsize=(12, 8))
    plt.errorbar(sizes, [max(t, 1e-6) for t in mean_time], yerr=std_time, marker="^", linewidth=2,
                 markersize=8, capsize=4, color="tab:green")
    plt.yscale("log")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Mean time [s] (log scale)", fontsize=12)
    plt.title("Enumeration Time vs Problem Size", fontsize=14)
    plt.grid(True, alpha=0.7)
    plt.xticks(sizes)
    fname = os.path.join(out_dir, f"03_time_vs_N_log_scale{suffix}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    written.append(fname)
    print(f"Saved execution-time chart (log scale): {fname}")

    if settings.CURRENT_PIPELINE_MODE != "sequential":
        return written

    nodes_valid = [n for n, t in zip(nodes, mean_time) if t > 0]
    time_valid = [t for t in mean_time if t > 0]
    if len(nodes_valid) >= 2:
        plt.figure(figsize=(12, 8))
        plt.scatter(nodes_valid, time_valid, s=60, alpha=0.8, label="Mean time per N")
        z = np.polyfit(nodes_valid, time_valid, 1)
        p = np.poly1d(z)
        x_trend = np.linspace(min(nodes_valid), max(nodes_valid), 100)
        plt.plot(x_trend, p(x_trend), "r--", alpha=0.8, label=f"Trend: y={z[0]:.2e}x+{z[1]:.2e}")
        plt.xlabel("Explored nodes", fontsize=12)
        plt.ylabel("Time [s]", fontsize=12)
        plt.title("Theoretical vs Practical Cost\n(Nodes explored vs wall-clock time)", fontsize=14)
        plt.legend(fontsize=11)
        plt.grid(True, alpha=0.7)
        fname = os.path.join(out_dir, f"04_nodes_vs_time{suffix}.png")
        plt.savefig(fname, bbox_inches="tight", dpi=300)
        plt.close()
        written.append(fname)
        print(f"Saved nodes-vs-time chart: {fname}")

    per_node = [t / n if n else 0.0 for t, n in zip(mean_time, nodes)]
    plt.figure(figsize=(12, 8))
    plt.plot(sizes, per_node, marker="o", linewidth=2, markersize=8, color="tab:purple")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Time per node [s/node]", fontsize=12)
    plt.title("Time per Node vs Problem Size\n(Safety check cost grows with N)", fontsize=14)
    plt.grid(True, alpha=0.7)
    plt.xticks(sizes)
    fname = os.path.join(out_dir, f"05_time_per_node_vs_N{suffix}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    written.append(fname)
    print(f"Saved time-per-node chart: {fname}")

    return written


def plot_solution_boards(solutions: Sequence[Solution], out_dir: str, max_boards: int = 12) -> str:
    """Draw up to ``max_boards`` solutions as a grid of heatmaps.

    Returns the written file path, or an empty string if there is nothing to draw.
    """
    if not solutions:
        print("Board gallery skipped: no solutions.")
        return ""
    os.makedirs(out_dir, exist_ok=True)

    shown = list(solutions[:max_boards])
    n = shown[0].size
    cols = min(4, len(shown))
    rows = math.ceil(len(shown) / cols)

    fig, axes = plt.subplots(rows, cols, figsize=(3 * cols, 3 * rows), squeeze=False)
    for idx, ax in enumerate(axes.flat):
        if idx >= len(shown):
            ax.axis("off")
            continue
        grid = np.array(shown[idx].cells, dtype=int)
        sns.heatmap(grid, ax=ax, cbar=False, square=True, linewidths=0.5, linecolor="gray",
                    cmap=ListedColormap(["#f0d9b5", "#7a4a1d"]), vmin=0, vmax=1,
                    xticklabels=False, yticklabels=False)
        ax.set_title(f"#{idx + 1}: {list(shown[idx].columns)}", fontsize=9)

    fig.suptitle(f"N={n}: first {len(shown)} of {len(solutions)} solutions", fontsize=12)
    fname = os.path.join(out_dir, f"solutions_N{n}{_build_suffix()}.png")
    fig.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close(fig)
    print(f"Saved solution gallery: {fname}")
    return fname


def plot_and_save(results: ExperimentResults, N_values: List[int], out_dir: str) -> None:
    """Thin wrapper to generate the comprehensive analysis figures."""
    plot_comprehensive_analysis(results, N_values, out_dir)
