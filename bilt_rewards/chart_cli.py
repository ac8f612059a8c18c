"""CLI entry point for chart generation."""

import argparse
import sys
from pathlib import Path

from bilt_rewards.calculator import compare_cards
from bilt_rewards.charts import plot_points_comparison
from bilt_rewards.config import parse_args


def _add_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="Output directory (default: reports/charts)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="Output filename suffix (e.g. rent → points-rent.png)",
    )


def main():
    inputs, args = parse_args("Bilt card rewards chart generation", _add_args)

    print(f"Comparing cards ({inputs.period.value})...", file=sys.stderr)
    results = compare_cards(inputs)
    path = plot_points_comparison(
        results, args.output, name=args.name, period_label=inputs.period.value,
    )
    print(f"  → {path}", file=sys.stderr)
    print("Done", file=sys.stderr)


if __name__ == "__main__":
    main()
