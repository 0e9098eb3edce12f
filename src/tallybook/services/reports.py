"""Chart rendering for statistics results."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .aggregates import CategoryBreakdown, TrendPoint
from .comparison import PeriodComparison

MAX_LEGEND_ITEMS = 12


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def _placeholder(ax, message: str) -> None:
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=14, color="#666")
    ax.axis("off")


def build_category_chart(
    breakdown: Sequence[CategoryBreakdown], *, title: str = "Spending by Category"
) -> Figure:
    """Donut chart of a category breakdown with a legend of amounts and shares.

    Breakdowns longer than ``MAX_LEGEND_ITEMS`` fold the tail into one
    "Other" legend row.
    """

    fig, ax = plt.subplots(figsize=(10, 7))
    items = [entry for entry in breakdown if entry.total_amount > 0]
    if not items:
        _placeholder(ax, "No data for this period")
        return fig

    sizes = [entry.total_amount for entry in items]
    grand_total = sum(sizes)
    cmap = plt.get_cmap("tab20c")
    colors = [cmap(i / max(len(sizes), 1)) for i in range(len(sizes))]

    wedges, _, autotexts = ax.pie(
        sizes,
        labels=None,
        autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
        wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
        startangle=90,
        colors=colors,
        pctdistance=0.78,
    )
    for autotext in autotexts:
        autotext.set_fontsize(9)
        autotext.set_fontweight("bold")
        autotext.set_color("white")

    ax.text(0, 0.08, "Total", ha="center", va="center", fontsize=11, color="#666")
    ax.text(0, -0.08, f"{grand_total:,.2f}", ha="center", va="center",
            fontsize=18, fontweight="bold", color="#1F2937")

    shown = items[:MAX_LEGEND_ITEMS]
    legend_labels = [
        f"{entry.category_name}: {entry.total_amount:,.2f} ({entry.percentage:.1f}%)"
        for entry in shown
    ]
    handles = list(wedges[: len(shown)])
    rest = items[MAX_LEGEND_ITEMS:]
    if rest:
        other_total = sum(entry.total_amount for entry in rest)
        other_pct = sum(entry.percentage for entry in rest)
        legend_labels.append(f"Other ({len(rest)} more): {other_total:,.2f} ({other_pct:.1f}%)")
        handles.append(wedges[-1])

    ax.legend(
        handles,
        legend_labels,
        title="Categories",
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        fontsize=9,
        framealpha=0.9,
    )
    ax.axis("equal")
    ax.set_title(title, fontsize=16, fontweight="bold", pad=20)
    fig.tight_layout()
    return fig


def build_trend_chart(trend_data: Sequence[TrendPoint], *, title: str = "Trend") -> Figure:
    """Income and expense lines over the (sparse) trend buckets."""

    fig, ax = plt.subplots(figsize=(10, 5))
    if not trend_data:
        _placeholder(ax, "No transactions yet")
        return fig

    keys = [point.period_key for point in trend_data]
    ax.plot(keys, [p.expense_total for p in trend_data], marker="o", color="#EF4444", label="Expense")
    ax.plot(keys, [p.income_total for p in trend_data], marker="o", color="#16A34A", label="Income")
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.set_ylabel("Amount")
    ax.grid(axis="y", alpha=0.3)
    ax.legend()
    if len(keys) > 6:
        ax.tick_params(axis="x", labelrotation=45)
    fig.tight_layout()
    return fig


def build_comparison_chart(comparison: PeriodComparison, *, title: str = "This period vs last") -> Figure:
    """Side-by-side bars of previous and current totals."""

    fig, ax = plt.subplots(figsize=(6, 5))
    labels = ["Previous", "Current"]
    values = [comparison.previous.total_amount, comparison.current.total_amount]
    bars = ax.bar(labels, values, color=["#9CA3AF", "#3B82F6"])
    for bar, value in zip(bars, values):
        ax.annotate(f"{value:,.2f}", (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    ha="center", va="bottom", fontsize=10)

    delta = comparison.change.total_amount
    sign = "+" if delta >= 0 else ""
    ax.set_title(f"{title} ({sign}{delta:,.2f})", fontsize=14, fontweight="bold")
    ax.set_ylabel("Amount")
    fig.tight_layout()
    return fig


def export_chart_png(
    figure: Figure, *, output_path: Path, renderer: ReportRenderer | None = None
) -> Path:
    """Write ``figure`` to PNG, close it and return the path."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        if renderer is not None:
            renderer.render(figure, output_path=output_path)
        else:
            figure.savefig(output_path, bbox_inches="tight", dpi=120)
    finally:
        plt.close(figure)
    return output_path
