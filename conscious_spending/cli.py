"""Typer CLI interface for the Conscious Spending Planner."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from conscious_spending.db.repository import ScenarioRepository
from conscious_spending.db.schema import create_schema
from conscious_spending.engines.categorizer import is_within_target
from conscious_spending.engines.household import HouseholdCalculator
from conscious_spending.engines.tax import TaxEngine
from conscious_spending.exceptions import PlannerError
from conscious_spending.models.enums import Assignee, FilingStatus
from conscious_spending.models.results import HouseholdResult, PersonResult, PersonView
from conscious_spending.reports.household_summary import (
    CATEGORY_LABELS,
    HouseholdSummaryGenerator,
)
from conscious_spending.scenarios.defaults import BASELINE
from conscious_spending.scenarios.store import ScenarioStore

logger = logging.getLogger(__name__)

DEFAULT_DB = Path.home() / ".conscious-spending" / "scenarios.db"
DB_ENVVAR = "CONSCIOUS_SPENDING_DB"

app = typer.Typer(
    name="conscious-spending",
    help="Household take-home pay and conscious-spending planner.",
)


def _db_option() -> Path:
    return typer.Option(
        DEFAULT_DB,
        "--db",
        envvar=DB_ENVVAR,
        help="Path to the SQLite scenario database",
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Household take-home pay and conscious-spending planner."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@contextmanager
def _open_store(db: Path) -> Iterator[ScenarioStore]:
    """Open the scenario store backed by ``db``, reporting failures as CLI errors."""
    conn = None
    try:
        db.parent.mkdir(parents=True, exist_ok=True)
        conn = create_schema(db)
        yield ScenarioStore(ScenarioRepository(conn))
    except (PlannerError, sqlite3.Error) as exc:
        logger.debug("Command failed", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
    finally:
        if conn is not None:
            conn.close()


def _money(value: Decimal) -> str:
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def _pct(value: Decimal) -> str:
    return f"{value:.1f}%"


def _signed_money(value: Decimal) -> str:
    return ("+" if value > 0 else "") + _money(value)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def _income_table(title: str, person: PersonResult) -> Table:
    tbl = Table(title=title, show_header=False, padding=(0, 1))
    tbl.add_column("", style="cyan", min_width=24)
    tbl.add_column("", justify="right", style="green")
    tbl.add_row("Gross Income", _money(person.gross))
    tbl.add_row("Pre-Tax Deductions", _money(person.pre_tax_deductions))
    tbl.add_row("Taxable Income", _money(person.taxable_income))
    tbl.add_row("Federal Tax", _money(person.federal_tax))
    tbl.add_row("State Tax", _money(person.state_tax))
    tbl.add_row("Social Security", _money(person.fica.social_security))
    tbl.add_row("Medicare", _money(person.fica.medicare))
    if person.fica.additional_medicare > 0:
        tbl.add_row("Addl Medicare", _money(person.fica.additional_medicare))
    tbl.add_row("Total Tax", _money(person.total_tax))
    tbl.add_row("Net Annual", _money(person.net_annual))
    tbl.add_row("Net Monthly", _money(person.monthly_net))
    tbl.add_row("Per Paycheck", _money(person.per_paycheck_net))
    tbl.add_row("Effective Rate", _pct(person.effective_rate))
    tbl.add_row("Marginal Rate", _pct(person.marginal_rate))
    return tbl


def _spending_table(title: str, breakdown) -> Table:
    tbl = Table(title=title, show_header=True)
    tbl.add_column("Category", style="cyan")
    tbl.add_column("Monthly", justify="right")
    tbl.add_column("% of Net", justify="right")
    tbl.add_column("Target", justify="right")
    tbl.add_column("Status")
    for key, line in breakdown.by_category().items():
        on_target = is_within_target(line)
        tbl.add_row(
            CATEGORY_LABELS[key],
            _money(line.amount),
            _pct(line.percentage),
            f"{line.target.min:.0f}-{line.target.max:.0f}%",
            "[green]OK[/green]" if on_target else "[yellow]Off target[/yellow]",
        )
    return tbl


def _display_household(name: str, result: HouseholdResult, console: Console) -> None:
    for person in (result.person1, result.person2):
        if person.gross > 0:
            console.print(_income_table(person.name or "Member", person))

    totals = Table(title=f"Household: {name}", show_header=False, padding=(0, 1))
    totals.add_column("", style="cyan", min_width=24)
    totals.add_column("", justify="right", style="green")
    totals.add_row("Gross Income", _money(result.household.gross_income))
    totals.add_row("Net Income", _money(result.household.net_income))
    totals.add_row("Total Taxes", _money(result.household.total_taxes))
    totals.add_row("Effective Rate", _pct(result.household.effective_rate))
    totals.add_row("Marginal Rate", _pct(result.household.marginal_rate))
    console.print(totals)

    console.print(_spending_table("Spending Plan", result.spending_breakdown))

    summary = Table(title="Summary", show_header=False, padding=(0, 1))
    summary.add_column("", style="cyan", min_width=24)
    summary.add_column("", justify="right", style="green")
    summary.add_row("Monthly Net Income", _money(result.summary.monthly_net_income))
    summary.add_row("Monthly Expenses", _money(result.summary.monthly_expenses))
    summary.add_row("Monthly Surplus", _money(result.summary.monthly_surplus))
    summary.add_row("Annual Surplus", _money(result.summary.annual_surplus))
    summary.add_row("Savings Rate", _pct(result.summary.savings_rate))
    summary.add_row("Emergency Fund", _money(result.summary.recommended_emergency_fund))
    console.print(summary)


def _display_person(view: PersonView, console: Console) -> None:
    console.print(_income_table(view.income.name or view.person, view.income))
    console.print(_spending_table("Individual Spending", view.spending_breakdown))
    tbl = Table(show_header=False, padding=(0, 1))
    tbl.add_column("", style="cyan", min_width=24)
    tbl.add_column("", justify="right", style="green")
    tbl.add_row("Monthly Expenses", _money(view.total_expenses))
    tbl.add_row("Monthly Surplus", _money(view.surplus))
    console.print(tbl)


# ---------------------------------------------------------------------------
# Scenario commands
# ---------------------------------------------------------------------------


@app.command(name="list")
def list_cmd(db: Path = _db_option()) -> None:
    """List saved scenarios. The current scenario is marked with *."""
    console = Console()
    with _open_store(db) as store:
        tbl = Table(title="Scenarios", show_header=True)
        tbl.add_column("", width=1)
        tbl.add_column("Key", style="cyan", no_wrap=True)
        tbl.add_column("Name")
        tbl.add_column("Description")
        tbl.add_column("Last Modified")
        for key in store.names():
            meta = store.metadata(key)
            tbl.add_row(
                "*" if key == store.current_name else "",
                key,
                meta.name,
                meta.description,
                meta.last_modified.strftime("%Y-%m-%d %H:%M"),
            )
        console.print(tbl)


@app.command()
def show(
    name: str | None = typer.Argument(None, help="Scenario to show (default: current)"),
    view: str = typer.Option(
        "combined",
        "--view",
        help="combined, person1, or person2",
    ),
    db: Path = _db_option(),
) -> None:
    """Show taxes, take-home pay, and the spending plan for a scenario."""
    if view not in ("combined", Assignee.PERSON1.value, Assignee.PERSON2.value):
        typer.echo(
            f"Error: Invalid view '{view}'. Valid: combined, person1, person2", err=True
        )
        raise typer.Exit(1)

    console = Console()
    calculator = HouseholdCalculator()
    with _open_store(db) as store:
        key = name or store.current_name or BASELINE
        scenario = store.get(key)
        result = calculator.calculate_scenario(scenario)
        if view == "combined":
            _display_household(key, result, console)
        else:
            _display_person(calculator.person_view(view, scenario, result), console)


@app.command()
def create(
    name: str = typer.Argument(..., help="Key for the new scenario"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    base: str = typer.Option(BASELINE, "--from", help="Scenario to copy from"),
    db: Path = _db_option(),
) -> None:
    """Create a scenario as a copy of an existing one."""
    with _open_store(db) as store:
        store.create_scenario(name, description, base_name=base)
    typer.echo(f"Created scenario '{name}' from '{base}'")


@app.command()
def duplicate(
    source: str = typer.Argument(..., help="Scenario to copy"),
    new_name: str = typer.Argument(..., help="Key for the copy"),
    db: Path = _db_option(),
) -> None:
    """Duplicate a scenario under a new key."""
    with _open_store(db) as store:
        store.duplicate_scenario(source, new_name)
    typer.echo(f"Duplicated '{source}' as '{new_name}'")


@app.command()
def delete(
    name: str = typer.Argument(..., help="Scenario to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    db: Path = _db_option(),
) -> None:
    """Delete a scenario. The baseline scenario cannot be deleted."""
    if not yes and not typer.confirm(f"Delete scenario '{name}'?"):
        raise typer.Exit()
    with _open_store(db) as store:
        store.delete_scenario(name)
    typer.echo(f"Deleted scenario '{name}'")


@app.command()
def use(
    name: str = typer.Argument(..., help="Scenario to make current"),
    db: Path = _db_option(),
) -> None:
    """Make a scenario the current one."""
    with _open_store(db) as store:
        if not store.set_current(name):
            typer.echo(f"Error: Scenario not found: {name}", err=True)
            raise typer.Exit(1)
    typer.echo(f"Current scenario: {name}")


@app.command()
def compare(
    first: str = typer.Argument(..., help="Scenario to compare from"),
    second: str = typer.Argument(..., help="Scenario to compare to"),
    db: Path = _db_option(),
) -> None:
    """Compare two scenarios side by side."""
    console = Console()
    with _open_store(db) as store:
        comparison = HouseholdCalculator().compare(store.get(first), store.get(second))

    a, b, diff = comparison.first_result, comparison.second_result, comparison.differences
    tbl = Table(title="Scenario Comparison", show_header=True)
    tbl.add_column("", style="cyan")
    tbl.add_column(first, justify="right")
    tbl.add_column(second, justify="right")
    tbl.add_column("Difference", justify="right")
    tbl.add_row(
        "Net Income",
        _money(a.household.net_income),
        _money(b.household.net_income),
        _signed_money(diff.net_income),
    )
    tbl.add_row(
        "Monthly Expenses",
        _money(a.expenses.total),
        _money(b.expenses.total),
        _signed_money(diff.expenses),
    )
    tbl.add_row(
        "Monthly Surplus",
        _money(a.summary.monthly_surplus),
        _money(b.summary.monthly_surplus),
        _signed_money(diff.surplus),
    )
    tbl.add_row(
        "Savings Rate",
        _pct(a.summary.savings_rate),
        _pct(b.summary.savings_rate),
        f"{diff.savings_rate:+.1f}",
    )
    console.print(tbl)


@app.command()
def export(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout"
    ),
    names: list[str] | None = typer.Option(
        None, "--name", "-n", help="Scenario to export (repeatable; default: all)"
    ),
    db: Path = _db_option(),
) -> None:
    """Export scenarios as JSON."""
    with _open_store(db) as store:
        text = store.export_json(names or None)
    if output is None:
        typer.echo(text)
    else:
        output.write_text(text + "\n")
        typer.echo(f"Exported to {output}", err=True)


@app.command(name="import")
def import_cmd(
    file: Path = typer.Argument(..., help="JSON file of scenarios keyed by name"),
    db: Path = _db_option(),
) -> None:
    """Import scenarios from JSON. Same-named scenarios are overwritten."""
    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    with _open_store(db) as store:
        imported = store.import_json(file.read_text(), source=str(file))
    typer.echo(f"Imported {len(imported)} scenario(s): {', '.join(imported)}")


@app.command()
def report(
    name: str | None = typer.Argument(None, help="Scenario to report (default: current)"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the report to this file"
    ),
    db: Path = _db_option(),
) -> None:
    """Render a plain-text household summary report."""
    with _open_store(db) as store:
        key = name or store.current_name or BASELINE
        scenario = store.get(key)
    result = HouseholdCalculator().calculate_scenario(scenario)
    text = HouseholdSummaryGenerator().render(key, scenario, result)
    if output is None:
        typer.echo(text)
    else:
        output.write_text(text)
        typer.echo(f"Report written to {output}", err=True)


# ---------------------------------------------------------------------------
# Quick tax calculation
# ---------------------------------------------------------------------------


@app.command()
def tax(
    gross: float = typer.Argument(..., help="Annual gross income"),
    pre_tax: float = typer.Option(0.0, "--pre-tax", help="Annual pre-tax deductions"),
    filing_status: str = typer.Option(
        "single",
        "--filing-status",
        "-s",
        help="Filing status: SINGLE, MFJ, MFS, HOH",
    ),
    state: str = typer.Option("CA", "--state", help="Two-letter state code"),
) -> None:
    """Compute taxes and take-home pay for a single earner."""
    try:
        status = FilingStatus.parse(filing_status)
    except PlannerError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    result = TaxEngine().calculate_all_taxes(
        Decimal(str(gross)), Decimal(str(pre_tax)), status, state.upper()
    )

    console = Console()
    tbl = Table(title=f"Tax Estimate ({status.value}, {state.upper()})", show_header=False)
    tbl.add_column("", style="cyan", min_width=24)
    tbl.add_column("", justify="right", style="green")
    tbl.add_row("Gross Income", _money(result.gross_income))
    tbl.add_row("Pre-Tax Deductions", _money(result.pre_tax_deductions))
    tbl.add_row("Standard Deduction", _money(result.standard_deduction))
    tbl.add_row("Taxable Income", _money(result.taxable_income))
    tbl.add_row("Federal Tax", _money(result.federal_tax))
    tbl.add_row("State Tax", _money(result.state_tax))
    tbl.add_row("FICA", _money(result.fica.total))
    tbl.add_row("Total Tax", _money(result.total_tax))
    tbl.add_row("Net Income", _money(result.net_income))
    tbl.add_row("Effective Rate", _pct(result.effective_rate))
    tbl.add_row("Marginal Rate", _pct(result.marginal_rate))
    console.print(tbl)


if __name__ == "__main__":
    app()
