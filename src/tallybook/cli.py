"""Command line interface for TallyBook."""

from __future__ import annotations

import functools
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import TallyBookError
from .logging_config import setup_logging
from .services import reports, transactions
from .services.aggregates import Statistics
from .services.seed import seed_default_categories
from .services.time_range import TimeRange
from .services.transaction_filter import SortOrder, TransactionFilter

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S"]
RANGE_CHOICE = click.Choice([member.value for member in TimeRange], case_sensitive=False)
TYPE_CHOICE = click.Choice(["income", "expense", "transfer"], case_sensitive=False)


def _context(ctx: click.Context) -> AppContext:
    app = ctx.obj
    if app is None:
        config = BaseConfig()
        setup_logging(config)
        app = create_app_context(config)
        ctx.obj = app
        ctx.call_on_close(app.dispose)
    return app


def _resolve_category_id(app: AppContext, value: str) -> str:
    """Accept either a category id or its display name."""

    category = app.category_repo.get_by_id(value) or app.category_repo.get_by_name(value)
    return category.id if category is not None else value


def _echo_statistics(stats: Statistics, heading: str) -> None:
    click.echo(f"{heading}: {stats.start_date:%Y-%m-%d %H:%M} .. {stats.end_date:%Y-%m-%d %H:%M}")
    click.echo(f"  total    {stats.total_amount:,.2f}")
    click.echo(f"  count    {stats.count}")
    click.echo(f"  average  {stats.average_amount:,.2f}")
    click.echo(f"  max/day  {stats.max_daily_amount:,.2f}")
    if stats.category_breakdown:
        click.echo("  categories:")
        for entry in stats.category_breakdown:
            click.echo(
                f"    {entry.category_name:<20} {entry.total_amount:>12,.2f} "
                f"{entry.percentage:>6.1f}%  ({entry.count})"
            )
    if stats.trend_data:
        click.echo("  trend:")
        for point in stats.trend_data:
            click.echo(
                f"    {point.period_key:<16} income {point.income_total:>10,.2f}  "
                f"expense {point.expense_total:>10,.2f}  ({point.transaction_count})"
            )


def _handle_errors(func):
    """Translate application errors into click errors with a non-zero exit code."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except TallyBookError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


@click.group()
def cli() -> None:
    """Record transactions and report on where the money went."""


@cli.command("init")
@click.pass_context
def init_command(ctx: click.Context) -> None:
    """Create the database and seed default categories."""

    app = _context(ctx)
    created = seed_default_categories(app.category_repo)
    click.echo(f"Database ready at {app.config.DATABASE_URL} ({len(created)} categories seeded)")


@cli.command("categories")
@click.pass_context
def categories_command(ctx: click.Context) -> None:
    """List known categories."""

    app = _context(ctx)
    for category in app.category_repo.load_categories():
        click.echo(f"{category.id:<20} {category.category_type:<8} {category.name}")


@cli.command("add")
@click.option("--type", "txn_type", type=TYPE_CHOICE, default="expense", show_default=True)
@click.option("--amount", type=float, required=True)
@click.option("--category", "category", required=True, help="Category id or name")
@click.option("--date", "occurred_at", type=click.DateTime(formats=DATE_FORMATS), default=None,
              help="Defaults to now")
@click.option("--note", default="")
@click.pass_context
@_handle_errors
def add_command(
    ctx: click.Context,
    txn_type: str,
    amount: float,
    category: str,
    occurred_at: Optional[datetime],
    note: str,
) -> None:
    """Record a transaction."""

    app = _context(ctx)
    txn = transactions.add_transaction(
        app.transaction_repo,
        app.category_repo,
        txn_type=txn_type.lower(),
        amount=amount,
        occurred_at=occurred_at or datetime.now(),
        category_id=_resolve_category_id(app, category),
        note=note,
    )
    click.echo(f"Added {txn.id}")


@cli.command("delete")
@click.argument("transaction_id")
@click.pass_context
@_handle_errors
def delete_command(ctx: click.Context, transaction_id: str) -> None:
    """Delete a transaction by id."""

    app = _context(ctx)
    transactions.delete_transaction(app.transaction_repo, transaction_id)
    click.echo(f"Deleted {transaction_id}")


@cli.command("list")
@click.option("--type", "txn_type", type=TYPE_CHOICE, default=None)
@click.option("--category", "categories", multiple=True, help="Category id or name; repeatable")
@click.option("--sort", "sort_by", type=click.Choice([s.value for s in SortOrder]),
              default=SortOrder.NEWEST.value, show_default=True)
@click.pass_context
@_handle_errors
def list_command(ctx: click.Context, txn_type: Optional[str], categories: tuple[str, ...], sort_by: str) -> None:
    """List transactions, filtered and sorted."""

    app = _context(ctx)
    list_filter = TransactionFilter()
    list_filter.set_criteria(
        type_filter=txn_type,
        selected_categories=[_resolve_category_id(app, value) for value in categories],
        sort_by=sort_by,
    )
    rows = app.statistics.list_transactions(list_filter.criteria)
    names = {c.id: c.name for c in app.category_repo.load_categories()}
    for txn in rows:
        click.echo(
            f"{txn.id}  {txn.occurred_at:%Y-%m-%d %H:%M}  {txn.txn_type:<8} "
            f"{txn.amount:>12,.2f}  {names.get(txn.category_id, app.config.UNKNOWN_CATEGORY_LABEL)}"
            + (f"  {txn.note}" if txn.note else "")
        )
    click.echo(f"{len(rows)} transaction(s), {list_filter.active_filter_count} filter(s) active")


def _range_options(func):
    func = click.option("--range", "time_range", type=RANGE_CHOICE, default=TimeRange.MONTH.value,
                        show_default=True)(func)
    func = click.option("--start", type=click.DateTime(formats=DATE_FORMATS), default=None,
                        help="Start of a custom range")(func)
    func = click.option("--end", type=click.DateTime(formats=DATE_FORMATS), default=None,
                        help="End of a custom range")(func)
    func = click.option("--type", "txn_type", type=TYPE_CHOICE, default=None)(func)
    func = click.option("--now", type=click.DateTime(formats=DATE_FORMATS), default=None,
                        help="Reference time (defaults to the current time)")(func)
    return func


@cli.command("stats")
@_range_options
@click.pass_context
@_handle_errors
def stats_command(ctx, time_range, start, end, txn_type, now) -> None:
    """Totals, category breakdown and trend for a range."""

    app = _context(ctx)
    stats = app.statistics.statistics(
        time_range, now=now, custom_start=start, custom_end=end, txn_type=txn_type
    )
    _echo_statistics(stats, f"Statistics ({stats.time_range.value})")


@cli.command("compare")
@_range_options
@click.pass_context
@_handle_errors
def compare_command(ctx, time_range, start, end, txn_type, now) -> None:
    """Compare a range with the equally long period before it."""

    app = _context(ctx)
    result = app.statistics.comparison(
        time_range, now=now, custom_start=start, custom_end=end, txn_type=txn_type
    )
    _echo_statistics(result.current, "Current")
    _echo_statistics(result.previous, "Previous")
    change = result.change
    click.echo(
        f"Change: total {change.total_amount:+,.2f} ({change.total_amount_pct:+.1f}%), "
        f"average {change.average_amount:+,.2f}, count {change.count:+d}"
    )


@cli.command("chart")
@click.argument("kind", type=click.Choice(["category", "trend", "compare"]))
@_range_options
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.pass_context
@_handle_errors
def chart_command(ctx, kind, time_range, start, end, txn_type, now, output: Path) -> None:
    """Render a PNG chart for a range."""

    app = _context(ctx)
    if kind == "compare":
        result = app.statistics.comparison(
            time_range, now=now, custom_start=start, custom_end=end, txn_type=txn_type
        )
        figure = reports.build_comparison_chart(result)
    else:
        stats = app.statistics.statistics(
            time_range, now=now, custom_start=start, custom_end=end, txn_type=txn_type
        )
        if kind == "category":
            figure = reports.build_category_chart(stats.category_breakdown)
        else:
            figure = reports.build_trend_chart(stats.trend_data)
    path = reports.export_chart_png(figure, output_path=output)
    click.echo(f"Chart written: {path}")


def main() -> None:  # pragma: no cover - console entry point
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
