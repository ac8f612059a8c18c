"""Chart generation for rewards calculation results."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from bilt_rewards.params import CardVariant
from bilt_rewards.results import CalculatorResult

# Card color mapping
CARD_COLORS = {
    CardVariant.BLUE: "#1f77b4",
    CardVariant.OBSIDIAN: "#2f2f2f",
    CardVariant.PALLADIUM: "#9e9e9e",
}

# Points source color mapping (stack order bottom → top)
SOURCE_COLORS = {
    "Rent": "#ff7f0e",
    "Mortgage": "#2ca02c",
    "Card spend": "#1f77b4",
}

DEFAULT_COLOR = "#7f7f7f"


def _format_points_axis(ax: plt.Axes):
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: f"{x:,.0f}"))


def plot_points_comparison(
    results: dict[CardVariant, CalculatorResult],
    output_path: Path,
    name: str = "",
    period_label: str = "monthly",
) -> Path:
    """Generate a stacked bar chart of points by source for each card.

    Args:
        results: compare_cards() return dict.
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "rent" → "points-rent.png").
        period_label: shown in the title.

    Returns:
        Path to the generated PNG file.
    """
    if not results:
        raise ValueError("No results for points chart")

    cards = list(results)
    labels = [c.display_name for c in cards]
    sources = {
        "Rent": [results[c].points.rent for c in cards],
        "Mortgage": [results[c].points.mortgage for c in cards],
        "Card spend": [results[c].points.card_spend.total for c in cards],
    }

    fig, (ax_points, ax_cash) = plt.subplots(1, 2, figsize=(14, 6))

    bottom = [0] * len(cards)
    for source, values in sources.items():
        ax_points.bar(
            labels, values, bottom=bottom, label=source,
            color=SOURCE_COLORS.get(source, DEFAULT_COLOR),
        )
        bottom = [b + v for b, v in zip(bottom, values)]
    for i, total in enumerate(bottom):
        ax_points.annotate(
            f"{total:,}", xy=(i, total), ha="center", va="bottom", fontsize=10,
        )
    ax_points.set_ylabel("Points")
    ax_points.set_title(f"Points by source ({period_label})")
    ax_points.legend(loc="upper left")
    ax_points.grid(True, axis="y", alpha=0.3)
    _format_points_axis(ax_points)

    # Bilt Cash net change and out-of-pocket fees per card
    width = 0.38
    xs = range(len(cards))
    net = [results[c].bilt_cash.net_change for c in cards]
    fees = [results[c].fees.total_out_of_pocket for c in cards]
    ax_cash.bar(
        [x - width / 2 for x in xs], net, width,
        color=[CARD_COLORS.get(c, DEFAULT_COLOR) for c in cards], label="Net Bilt Cash",
    )
    ax_cash.bar([x + width / 2 for x in xs], fees, width, color="#d62728", label="Fees out of pocket")
    ax_cash.axhline(0, color="#888888", linewidth=0.8)
    ax_cash.set_xticks(list(xs))
    ax_cash.set_xticklabels(labels)
    ax_cash.set_ylabel("USD")
    ax_cash.set_title(f"Bilt Cash and fees ({period_label})")
    ax_cash.legend(loc="upper left")
    ax_cash.grid(True, axis="y", alpha=0.3)
    ax_cash.yaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: f"${x:,.0f}"))

    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"points{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath
