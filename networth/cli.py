"""
Command-Line Interface for networth.

Purpose
-------
Runs the analytics engine over a net-worth spreadsheet export without
writing Python code.

Commands
--------
- summary: KPI table (net worth, assets, debt, liquidity, risk, ratios)
- aggregate: Bucketed table by month/quarter/year
- project: Contribution estimate and compound-phase crossover
- report: Full report as JSON
- export: Re-export the parsed ledger in normalized CSV layout
- plot: Write dashboard charts as PNG files
- info: Package and dependency versions

Example Usage
-------------
    $ networth summary balances.csv --timeframe quarter
    $ networth project balances.csv --growth 6.5 --horizon 240
    $ networth report balances.csv --output report.json
    $ networth --version
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import AnalysisConfig, AppSettings, IngestConfig
from .exceptions import NetWorthError

# Version
__version__ = "0.1.0"

TIMEFRAME_CHOICE = click.Choice(["month", "quarter", "year"])


def _load(path: Path, on_conflict: str):
    """Read a CSV into a Ledger, exiting with a message on failure."""
    from .ingest import read_csv

    try:
        return read_csv(path, IngestConfig(on_conflict=on_conflict))
    except NetWorthError as e:
        click.echo(f"Error loading {path}: {e}", err=True)
        sys.exit(1)


def _analysis_config(ctx: click.Context, **overrides) -> AnalysisConfig:
    settings: AppSettings = ctx.obj["settings"]
    values = {
        "annual_growth_pct": settings.default_growth_pct,
        "horizon_months": settings.default_horizon_months,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return AnalysisConfig(**values)
    except ValueError as e:
        click.echo(f"Invalid options: {e}", err=True)
        sys.exit(1)


def _parse_as_of(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got '{value}'", param_hint="--as-of")


@click.group()
@click.version_option(version=__version__, prog_name="networth")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--on-conflict",
    type=click.Choice(["reject", "overwrite", "merge"]),
    default="overwrite",
    help="How to resolve CSV rows sharing a date (default: overwrite)",
)
@click.pass_context
def main(ctx: click.Context, quiet: bool, verbose: bool, on_conflict: str) -> None:
    """
    networth - Net-worth analytics and compound-phase projection.

    Reads a spreadsheet export with Year, Month and one column per account,
    and reports category totals, drawdown, CAGR and the month in which
    investment returns overtake contributions.

    Use 'networth COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["on_conflict"] = on_conflict
    ctx.obj["console"] = Console()


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--timeframe", "-t", type=TIMEFRAME_CHOICE, default="month",
              help="Bucketing of the view (default: month)")
@click.option("--year", "-y", type=int, default=None, help="Restrict the view to one year")
@click.option("--growth", "-g", type=float, default=None,
              help="Assumed annual growth in percent (default: 7.0)")
@click.pass_context
def summary(
    ctx: click.Context,
    csv_file: Path,
    timeframe: str,
    year: Optional[int],
    growth: Optional[float],
) -> None:
    """
    Show dashboard KPIs.

    Example:
        networth summary balances.csv --timeframe quarter --year 2024
    """
    from .engine import analyze
    from .utils import format_currency, format_delta, format_percent

    console: Console = ctx.obj["console"]
    symbol = ctx.obj["settings"].currency_symbol
    ledger = _load(csv_file, ctx.obj["on_conflict"])
    cfg = _analysis_config(ctx, timeframe=timeframe, selected_year=year, annual_growth_pct=growth)
    report = analyze(ledger, cfg)

    if report.is_empty:
        click.echo("No records in the selected view.", err=True)
        sys.exit(1)

    table = Table(title=f"Net Worth Summary ({report.latest.display_label})", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("%", justify="right")

    for label, trend in (
        ("Net Worth", report.trends.net_worth),
        ("Total Assets", report.trends.total_assets),
        ("Liabilities", report.trends.liability),
        ("Liquidity", report.trends.liquidity),
    ):
        table.add_row(
            label,
            format_currency(trend.value, symbol),
            format_delta(trend.absolute_delta, symbol),
            format_percent(abs(trend.percent_delta)),
        )
    table.add_row("", "", "", "")
    table.add_row("Max Drawdown", format_percent(report.risk.max_drawdown), "", "")
    table.add_row(
        "CAGR",
        format_percent(report.risk.cagr) if report.risk.cagr_defined else "n/a",
        "",
        "",
    )
    table.add_row("YTD Growth", format_delta(report.risk.ytd, symbol), "", "")
    table.add_row("Debt / Assets", format_percent(report.ratios.debt_to_assets), "", "")
    table.add_row("Debt / Equity", format_percent(report.ratios.debt_to_equity), "", "")
    console.print(table)

    if not ctx.obj["quiet"] and report.allocation:
        alloc = Table(title="Allocation", show_header=True)
        alloc.add_column("Category", style="cyan")
        alloc.add_column("Value", justify="right")
        total = sum(s.value for s in report.allocation)
        alloc.add_column("Share", justify="right")
        for s in report.allocation:
            alloc.add_row(s.label, format_currency(s.value, symbol), format_percent(s.value / total, 1))
        console.print(alloc)


# ---------------------------------------------------------------------------
# aggregate
# ---------------------------------------------------------------------------

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--timeframe", "-t", type=TIMEFRAME_CHOICE, default="month",
              help="Bucketing (default: month)")
@click.option("--year", "-y", type=int, default=None, help="Restrict to one year")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="Write the table as CSV instead of printing it")
@click.pass_context
def aggregate(
    ctx: click.Context,
    csv_file: Path,
    timeframe: str,
    year: Optional[int],
    output: Optional[Path],
) -> None:
    """
    Show category totals per month, quarter or year.

    Example:
        networth aggregate balances.csv -t year -o yearly.csv
    """
    from .aggregation import aggregates_to_frame
    from .engine import AnalyticsEngine
    from .utils import format_currency

    console: Console = ctx.obj["console"]
    symbol = ctx.obj["settings"].currency_symbol
    ledger = _load(csv_file, ctx.obj["on_conflict"])
    cfg = _analysis_config(ctx, timeframe=timeframe, selected_year=year)
    aggregates = AnalyticsEngine(cfg).view(ledger)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        aggregates_to_frame(aggregates, ledger.columns).to_csv(output)
        if not ctx.obj["quiet"]:
            click.echo(f"Wrote {len(aggregates)} rows to {output}")
        return

    table = Table(title=f"Aggregates by {timeframe}", show_header=True)
    table.add_column("Period", style="cyan")
    for heading in ("Equity", "Fixed", "Cash", "Other", "Debt", "Net Worth"):
        table.add_column(heading, justify="right")
    for a in aggregates:
        t = a.totals
        table.add_row(
            a.display_label,
            *(format_currency(v, symbol) for v in (t.equity, t.fixed_income, t.cash, t.other, t.liability)),
            format_currency(a.net_worth, symbol),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--growth", "-g", type=float, default=None,
              help="Assumed annual growth in percent (default: 7.0)")
@click.option("--horizon", "-T", type=int, default=None,
              help="Projection cap in months (default: 600)")
@click.option("--window", type=int, default=None,
              help="Trailing records used to estimate contributions (default: 12)")
@click.option("--as-of", type=str, default=None, help="Reference date YYYY-MM-DD (default: today)")
@click.option("--series/--no-series", default=False, help="Also print the yearly projection")
@click.pass_context
def project(
    ctx: click.Context,
    csv_file: Path,
    growth: Optional[float],
    horizon: Optional[int],
    window: Optional[int],
    as_of: Optional[str],
    series: bool,
) -> None:
    """
    Estimate monthly contributions and the compound-phase crossover.

    Example:
        networth project balances.csv --growth 6 --horizon 240 --series
    """
    from .engine import AnalyticsEngine
    from .utils import format_currency

    console: Console = ctx.obj["console"]
    symbol = ctx.obj["settings"].currency_symbol
    ledger = _load(csv_file, ctx.obj["on_conflict"])
    cfg = _analysis_config(
        ctx,
        annual_growth_pct=growth,
        horizon_months=horizon,
        contribution_window=window,
        as_of=_parse_as_of(as_of),
    )
    metrics = AnalyticsEngine(cfg).compound(ledger)

    if metrics.crossover_reached:
        crossover = (
            f"{metrics.crossover_date:%B %Y}\n"
            f"{metrics.years_to_crossover:.1f} years ({metrics.months_to_crossover} months)"
        )
    else:
        crossover = f"Not reached within {metrics.horizon_months} months"

    info = (
        f"[cyan]Current net worth:[/cyan]      {format_currency(metrics.current_net_worth, symbol)}\n"
        f"[cyan]Monthly contribution:[/cyan]   {format_currency(metrics.monthly_contribution, symbol)}\n"
        f"[cyan]Monthly return (est.):[/cyan]  {format_currency(metrics.current_monthly_return, symbol)}\n"
        f"[cyan]Phase progress:[/cyan]         {metrics.phase_progress_percent:.1f}%\n"
        f"[cyan]Crossover:[/cyan]              {crossover}"
    )
    console.print(Panel(info, title=f"Compound Phase @ {metrics.annual_growth_pct:g}%", border_style="green"))

    if series:
        table = Table(title="Yearly Projection", show_header=True)
        table.add_column("Year", style="cyan")
        table.add_column("Net Worth", justify="right")
        table.add_column("Contribution / mo", justify="right")
        table.add_column("Return / mo", justify="right")
        for p in metrics.projection_series:
            table.add_row(
                str(p.year),
                format_currency(p.net_worth, symbol),
                format_currency(p.contribution, symbol),
                format_currency(p.returns, symbol),
            )
        console.print(table)


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--timeframe", "-t", type=TIMEFRAME_CHOICE, default="month")
@click.option("--year", "-y", type=int, default=None)
@click.option("--growth", "-g", type=float, default=None)
@click.option("--horizon", "-T", type=int, default=None)
@click.option("--drawdown-scope", type=click.Choice(["view", "history"]), default="view",
              help="Series behind the drawdown chart (default: view)")
@click.option("--risk-scope", type=click.Choice(["view", "history"]), default="history",
              help="Series behind max drawdown and CAGR (default: history)")
@click.option("--as-of", type=str, default=None, help="Reference date YYYY-MM-DD")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="Write JSON to a file instead of stdout")
@click.pass_context
def report(
    ctx: click.Context,
    csv_file: Path,
    timeframe: str,
    year: Optional[int],
    growth: Optional[float],
    horizon: Optional[int],
    drawdown_scope: str,
    risk_scope: str,
    as_of: Optional[str],
    output: Optional[Path],
) -> None:
    """
    Produce the full analytics report as JSON.

    Example:
        networth report balances.csv --risk-scope view -o report.json
    """
    from .engine import analyze
    from .serialization import report_to_dict, save_report

    ledger = _load(csv_file, ctx.obj["on_conflict"])
    cfg = _analysis_config(
        ctx,
        timeframe=timeframe,
        selected_year=year,
        annual_growth_pct=growth,
        horizon_months=horizon,
        drawdown_scope=drawdown_scope,
        risk_scope=risk_scope,
        as_of=_parse_as_of(as_of),
    )
    result = analyze(ledger, cfg)

    if output:
        save_report(result, output)
        if not ctx.obj["quiet"]:
            click.echo(f"Report saved to {output}")
    else:
        click.echo(json.dumps(report_to_dict(result), indent=2))


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def export(ctx: click.Context, csv_file: Path, output_file: Path) -> None:
    """
    Re-export the ledger with cleaned numbers and recomputed totals.

    Example:
        networth export raw.csv clean.csv
    """
    from .ingest import write_csv

    ledger = _load(csv_file, ctx.obj["on_conflict"])
    output_file.parent.mkdir(parents=True, exist_ok=True)
    write_csv(ledger, output_file)
    if not ctx.obj["quiet"]:
        click.echo(f"Exported {len(ledger)} records to {output_file}")


# ---------------------------------------------------------------------------
# plot
# ---------------------------------------------------------------------------

@main.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--timeframe", "-t", type=TIMEFRAME_CHOICE, default="month")
@click.option("--year", "-y", type=int, default=None)
@click.option("--growth", "-g", type=float, default=None)
@click.option("--horizon", "-T", type=int, default=None)
@click.pass_context
def plot(
    ctx: click.Context,
    csv_file: Path,
    output_dir: Path,
    timeframe: str,
    year: Optional[int],
    growth: Optional[float],
    horizon: Optional[int],
) -> None:
    """
    Write net worth, drawdown, projection and allocation charts as PNG.

    Example:
        networth plot balances.csv charts/ -t quarter
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from .engine import analyze
    from .plotting import plot_allocation, plot_drawdown, plot_net_worth, plot_projection, plot_report

    ledger = _load(csv_file, ctx.obj["on_conflict"])
    cfg = _analysis_config(
        ctx, timeframe=timeframe, selected_year=year, annual_growth_pct=growth, horizon_months=horizon
    )
    result = analyze(ledger, cfg)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, draw in (
        ("net_worth.png", lambda p: plot_net_worth(result.aggregates, save_path=p)),
        ("drawdown.png", lambda p: plot_drawdown(result.drawdown, save_path=p)),
        ("allocation.png", lambda p: plot_allocation(result.allocation, save_path=p)),
        ("dashboard.png", lambda p: plot_report(result, save_path=p)),
    ):
        fig, _ = draw(str(output_dir / name))
        plt.close(fig)
        written.append(name)
    if result.compound is not None:
        fig, _ = plot_projection(result.compound, save_path=str(output_dir / "projection.png"))
        plt.close(fig)
        written.append("projection.png")

    if not ctx.obj["quiet"]:
        click.echo(f"Wrote {', '.join(written)} to {output_dir}")


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display package and dependency versions.
    """
    from importlib.metadata import PackageNotFoundError, version

    console: Console = ctx.obj["console"]
    lines = [
        f"networth Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
    ]
    for dist in ("numpy", "pandas", "pydantic", "pydantic-settings", "matplotlib", "click", "rich"):
        try:
            lines.append(f"{dist}: {version(dist)}")
        except PackageNotFoundError:
            lines.append(f"{dist}: not installed")

    console.print(Panel("\n".join(lines), title="System Information"))


if __name__ == "__main__":
    main()
