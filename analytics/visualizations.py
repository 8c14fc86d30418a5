from __future__ import annotations

from typing import Iterable, Optional, Sequence

from models.handicap import HandicapIndexSnapshot
from models.round import Round

from .handicap import sort_chronologically
from .stats import (
    gir_per_round,
    per_par_type_stats,
    putts_per_round,
    score_distribution,
    score_to_par_trend,
)


def _load_plt():
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as exc:
        raise RuntimeError(
            "matplotlib is required for visualizations. Install it with: pip install matplotlib"
        ) from exc
    return plt


def _date_labels(dates) -> list[str]:
    return [d.strftime("%Y-%m-%d") for d in dates]


def _apply_sparse_xticks(ax, labels: Sequence[str], max_labels: int = 12) -> None:
    """
    Keep x-axis readable when there are many rounds.

    Shows at most `max_labels` ticks while preserving order.
    """
    count = len(labels)
    if count <= max_labels:
        ax.set_xticks(range(count))
        ax.set_xticklabels(labels, rotation=45, ha="right")
        return

    step = max(1, count // max_labels)
    tick_positions = list(range(0, count, step))
    if tick_positions[-1] != count - 1:
        tick_positions.append(count - 1)

    ax.set_xticks(tick_positions)
    ax.set_xticklabels([labels[i] for i in tick_positions], rotation=45, ha="right")


def plot_handicap_history(history: Sequence[HandicapIndexSnapshot]):
    """Line chart of the index after each round. Gaps where no index existed yet."""
    plt = _load_plt()
    labels = _date_labels(s.date for s in history)
    values = [s.index if s.index is not None else float("nan") for s in history]
    x = list(range(len(labels)))

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(x, values, marker="o")
    ax.set_title("Handicap Index History")
    ax.set_xlabel("Round")
    ax.set_ylabel("Handicap Index")
    ax.invert_yaxis()  # lower is better
    _apply_sparse_xticks(ax, labels)
    ax.grid(axis="y", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def plot_score_trend(rounds: Sequence[Round]):
    """Line chart: score to par by round."""
    plt = _load_plt()
    rows = score_to_par_trend(rounds)
    labels = _date_labels(row["date"] for row in rows)
    x = list(range(len(labels)))

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(x, [row["score_to_par"] for row in rows], marker="o")
    ax.set_title("Score To Par Trend")
    ax.set_xlabel("Round")
    ax.set_ylabel("Score To Par")
    ax.axhline(0, color="black", linewidth=1, alpha=0.6)
    _apply_sparse_xticks(ax, labels)
    ax.grid(axis="y", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def plot_score_distribution(rounds: Iterable[Round]):
    """Bar chart: share of rounds at each score to par."""
    plt = _load_plt()
    rows = score_distribution(rounds)
    buckets = [f"{row['score_to_par']:+d}" for row in rows]

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.bar(buckets, [row["percentage"] for row in rows])
    ax.set_title("Score Distribution")
    ax.set_xlabel("Score To Par")
    ax.set_ylabel("Percent Of Rounds")
    ax.grid(axis="y", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def plot_scoring_by_par(rounds: Iterable[Round]):
    """Bar chart: average to-par grouped by par 3 / par 4 / par 5."""
    plt = _load_plt()
    rows = per_par_type_stats(rounds)
    pars = [f"Par {row['par']}" for row in rows]
    avg_to_par = [row["average_score_to_par"] for row in rows]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(pars, avg_to_par)
    ax.set_title("Average Score To Par By Hole Par")
    ax.set_xlabel("Hole Type")
    ax.set_ylabel("Average To Par")
    ax.axhline(0, color="black", linewidth=1, alpha=0.6)
    ax.grid(axis="y", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def plot_putts_per_round(rounds: Sequence[Round], labels: Optional[Sequence[str]] = None):
    """Bar chart: total putts per round."""
    plt = _load_plt()
    ordered = sort_chronologically(rounds)
    rows = putts_per_round(ordered)
    x_labels = list(labels) if labels is not None else _date_labels(r.date for r in ordered)
    x = list(range(len(x_labels)))

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.bar(x, [row["total_putts"] or 0 for row in rows])
    ax.set_title("Putts Per Round")
    ax.set_xlabel("Round")
    ax.set_ylabel("Total Putts")
    _apply_sparse_xticks(ax, x_labels)
    ax.grid(axis="y", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def plot_gir_per_round(rounds: Sequence[Round], labels: Optional[Sequence[str]] = None):
    """
    Combined chart:
    - bars: GIR count per round
    - line: GIR percentage per round
    """
    plt = _load_plt()
    ordered = sort_chronologically(rounds)
    rows = gir_per_round(ordered)
    x_labels = list(labels) if labels is not None else _date_labels(r.date for r in ordered)
    x = list(range(len(x_labels)))
    counts = [row["total_gir"] or 0 for row in rows]
    percentages = [row["gir_percentage"] or 0 for row in rows]

    fig, ax1 = plt.subplots(figsize=(11, 5))
    ax1.bar(x, counts, alpha=0.8, label="GIR Count")
    ax1.set_title("GIR Per Round")
    ax1.set_xlabel("Round")
    ax1.set_ylabel("GIR Count")
    _apply_sparse_xticks(ax1, x_labels)
    ax1.grid(axis="y", alpha=0.2)

    ax2 = ax1.twinx()
    ax2.plot(x, percentages, color="black", marker="o", linewidth=1.5, label="GIR %")
    ax2.set_ylabel("GIR %")
    ax2.set_ylim(0, 100)

    lines1, labels1 = ax1.get_legend_handles_labels()
    lines2, labels2 = ax2.get_legend_handles_labels()
    ax1.legend(lines1 + lines2, labels1 + labels2, loc="upper left")

    fig.tight_layout()
    return fig, ax1, ax2
