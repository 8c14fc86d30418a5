from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import List

from analytics.config import get_settings
from analytics.report import build_handicap_report
from analytics.stats import scoring_summary
from analytics.visualizations import (
    plot_gir_per_round,
    plot_handicap_history,
    plot_putts_per_round,
    plot_score_distribution,
    plot_score_trend,
    plot_scoring_by_par,
)
from database.connection import DatabasePool
from database.db_manager import DatabaseManager
from models import Round, RoundFilters

logger = logging.getLogger(__name__)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print a player's handicap report and scoring highlights from PostgreSQL data."
    )
    parser.add_argument("--user-id", required=True, help="Player id in users.rounds")
    parser.add_argument(
        "--dsn",
        default=None,
        help="Optional PostgreSQL DSN. If omitted, uses DATABASE_URL or connection defaults.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=500,
        help="Max rounds to load for the player",
    )
    parser.add_argument(
        "--outdir",
        default="analytics/output",
        help="Directory where chart PNGs are written",
    )
    parser.add_argument("--charts", action="store_true", help="Also write PNG charts")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def _fmt(value, suffix: str = "") -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:.1f}{suffix}"
    return f"{value}{suffix}"


def _has_putt_data(rounds: List[Round]) -> bool:
    return any(h.putts is not None for r in rounds for h in r.holes)


def _has_hole_data(rounds: List[Round]) -> bool:
    return any(r.holes for r in rounds)


async def _load_rounds(user_id: str, dsn: str | None, limit: int) -> List[Round]:
    pool = DatabasePool()
    await pool.initialize(dsn=dsn)
    db = DatabaseManager(pool.pool)
    try:
        rounds = await db.rounds.fetch_rounds(user_id, RoundFilters(limit=limit))
        if not rounds:
            raise RuntimeError(f"No rounds found for user: {user_id}")
        return rounds
    finally:
        await pool.close()


def print_report(rounds: List[Round]) -> dict:
    """Print the handicap report and scoring highlights; returns the handicap report."""
    report = build_handicap_report(rounds, get_settings())
    summary = scoring_summary(rounds)

    print(f"Rounds loaded:     {len(rounds)}")
    print(f"Handicap index:    {_fmt(report['current_index'])}")
    print(f"Low index:         {_fmt(report['low_index'])}")
    print(f"Trend:             {report['trend']}")
    print(f"Potential index:   {_fmt(report['potential_index'])}")
    if report["course_handicap"] is not None:
        print(f"Course handicap:   {report['course_handicap']} (playing {report['playing_handicap']})")

    if report["counting_rounds"]:
        print("Counting rounds:")
        for row in report["counting_rounds"]:
            print(f"  {row['date']}  {row['score']:>3}  {row['differential']:.1f}")

    for label, row in (("Best hole", summary["best_hole"]), ("Worst hole", summary["worst_hole"])):
        if row is not None:
            print(f"{label + ':':<19}{row['hole_number']} (avg {row['average_score_to_par']:+.2f} to par)")

    for row in summary["per_par_type_stats"]:
        print(
            f"Par {row['par']}: avg {_fmt(row['average_score'])}, "
            f"fairways {_fmt(row['fairway_percentage'], '%')}, "
            f"GIR {_fmt(row['gir_percentage'], '%')}, "
            f"putts {_fmt(row['average_putts'])}"
        )
    if summary["skipped_holes"]:
        print(f"Skipped {summary['skipped_holes']} hole(s) with unsupported par.")
    return report


def write_charts(rounds: List[Round], report: dict, outdir: Path) -> List[Path]:
    outdir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []

    def save(fig, name: str) -> None:
        path = outdir / name
        fig.savefig(path, dpi=150)
        written.append(path)

    fig, _ = plot_handicap_history(report["history"])
    save(fig, "handicap_history.png")
    fig, _ = plot_score_trend(rounds)
    save(fig, "score_trend.png")
    fig, _ = plot_score_distribution(rounds)
    save(fig, "score_distribution.png")

    if _has_hole_data(rounds):
        fig, _ = plot_scoring_by_par(rounds)
        save(fig, "scoring_by_par.png")
        fig, _ = plot_gir_per_round(rounds)
        save(fig, "gir_per_round.png")
    else:
        print("Skipping par and GIR charts: no hole-by-hole data.")

    if _has_putt_data(rounds):
        fig, _ = plot_putts_per_round(rounds)
        save(fig, "putts_per_round.png")
    else:
        print("Skipping putts chart: no putt values found.")

    return written


async def main_async(argv=None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rounds = await _load_rounds(args.user_id, args.dsn, args.limit)
    report = print_report(rounds)

    if args.charts:
        written = write_charts(rounds, report, Path(args.outdir))
        print(f"Generated {len(written)} chart(s):")
        for path in written:
            print(path.resolve())


def main(argv=None) -> None:
    asyncio.run(main_async(argv))


if __name__ == "__main__":
    main()
