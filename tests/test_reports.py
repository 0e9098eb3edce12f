"""Chart rendering smoke tests (Agg backend, no display)."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from conftest import NOW, make_txn
from matplotlib.figure import Figure

from tallybook.services import reports
from tallybook.services.aggregates import CategoryBreakdown, aggregate
from tallybook.services.comparison import compare


def _january(categories):
    txns = [
        make_txn(50, datetime(2025, 1, 10), "food"),
        make_txn(30, datetime(2025, 1, 11), "transport"),
        make_txn(900, datetime(2025, 1, 3), "salary", "income"),
    ]
    return aggregate(txns, categories, "month", now=NOW), compare(txns, categories, "month", now=NOW)


def test_category_chart_writes_png(tmp_path, categories):
    stats, _ = _january(categories)
    figure = reports.build_category_chart(stats.category_breakdown)
    assert isinstance(figure, Figure)

    output = reports.export_chart_png(figure, output_path=tmp_path / "charts" / "category.png")
    assert output.exists()
    assert output.stat().st_size > 0


def test_category_chart_folds_long_tail_into_other():
    breakdown = [
        CategoryBreakdown(f"c{i}", f"Cat {i}", float(20 - i), 1, 5.0) for i in range(reports.MAX_LEGEND_ITEMS + 3)
    ]
    figure = reports.build_category_chart(breakdown)
    legend = figure.axes[0].get_legend()
    labels = [text.get_text() for text in legend.get_texts()]
    assert len(labels) == reports.MAX_LEGEND_ITEMS + 1
    assert labels[-1].startswith("Other (3 more)")


def test_trend_and_comparison_charts_render(tmp_path, categories):
    stats, comparison = _january(categories)
    trend = reports.export_chart_png(
        reports.build_trend_chart(stats.trend_data), output_path=tmp_path / "trend.png"
    )
    bars = reports.export_chart_png(
        reports.build_comparison_chart(comparison), output_path=tmp_path / "compare.png"
    )
    assert trend.exists() and bars.exists()


def test_empty_data_renders_placeholder(tmp_path):
    figure = reports.build_trend_chart([])
    texts = [t.get_text() for t in figure.axes[0].texts]
    assert "No transactions yet" in texts
    reports.export_chart_png(figure, output_path=tmp_path / "empty.png")


def test_custom_renderer_is_used(tmp_path, categories):
    stats, _ = _january(categories)
    calls: list[Path] = []

    class _Renderer:
        def render(self, figure, *, output_path: Path) -> None:
            calls.append(output_path)

    out = tmp_path / "x.png"
    reports.export_chart_png(
        reports.build_category_chart(stats.category_breakdown), output_path=out, renderer=_Renderer()
    )
    assert calls == [out]
    assert not out.exists()
