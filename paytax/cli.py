"""Typer CLI interface for PayTax."""

import json
import logging
from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

DEFAULT_DB = Path.home() / ".paytax" / "paytax.db"

app = typer.Typer(
    name="paytax",
    help="PayTax — per-period payroll tax withholding.",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """PayTax — per-period payroll tax withholding."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _parse_as_of(as_of: str | None) -> date | None:
    if as_of is None:
        return None
    try:
        return date.fromisoformat(as_of)
    except ValueError:
        typer.echo(f"Error: Invalid date '{as_of}'. Use YYYY-MM-DD.", err=True)
        raise typer.Exit(1)


@app.command(name="import-brackets")
def import_brackets(
    file: Path = typer.Argument(..., help="JSON file with a list of tax bracket records"),
    db: Path = typer.Option(DEFAULT_DB, "--db", help="Path to the SQLite database file"),
    business: str | None = typer.Option(
        None, "--business", "-b", help="Business the brackets belong to"
    ),
) -> None:
    """Import tax brackets into the PayTax database."""
    from paytax.db.repository import TaxRepository, load_brackets_json
    from paytax.db.schema import create_schema
    from paytax.engines.evaluator import sort_schedule
    from paytax.exceptions import TaxComputationError

    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    try:
        brackets = load_brackets_json(file)
        # Reject overlapping schedules before anything is written; each
        # effective window of a schedule is checked on its own
        groups: dict[tuple, list] = {}
        for bracket in brackets:
            key = (
                bracket.business_id or business,
                bracket.country,
                bracket.tax_type.value,
                bracket.effective_date,
                bracket.end_date,
            )
            groups.setdefault(key, []).append(bracket)
        for group in groups.values():
            sort_schedule(group)
    except TaxComputationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    db.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db)
    repo = TaxRepository(conn, business_id=business)
    for bracket in brackets:
        repo.save_bracket(bracket)
    conn.close()

    typer.echo(f"Imported {len(brackets)} bracket(s) from {file.name}")


@app.command(name="import-profiles")
def import_profiles(
    file: Path = typer.Argument(..., help="JSON file with one or more employee tax profiles"),
    db: Path = typer.Option(DEFAULT_DB, "--db", help="Path to the SQLite database file"),
) -> None:
    """Import employee tax profiles, replacing any existing profile per employee."""
    from paytax.db.repository import TaxRepository, load_profiles_json
    from paytax.db.schema import create_schema
    from paytax.exceptions import TaxComputationError

    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    try:
        profiles = load_profiles_json(file)
    except TaxComputationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    db.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db)
    repo = TaxRepository(conn)
    for profile in profiles:
        repo.save_profile(profile)
    conn.close()

    typer.echo(f"Imported {len(profiles)} profile(s) from {file.name}")


@app.command()
def brackets(
    country: str = typer.Argument(..., help="Country code, e.g. US"),
    tax_type: str = typer.Argument(..., help="federal, state, local, social_security, medicare"),
    db: Path = typer.Option(DEFAULT_DB, "--db", help="Path to the SQLite database file"),
    business: str | None = typer.Option(None, "--business", "-b", help="Business scope"),
    as_of: str | None = typer.Option(None, "--as-of", help="Only brackets effective on YYYY-MM-DD"),
) -> None:
    """List the active brackets for a jurisdiction and tax type."""
    from paytax.db.repository import TaxRepository
    from paytax.db.schema import create_schema
    from paytax.models.enums import TaxType

    try:
        tt = TaxType(tax_type.lower())
    except ValueError:
        valid = ", ".join(t.value for t in TaxType)
        typer.echo(f"Error: Invalid tax type '{tax_type}'. Valid: {valid}", err=True)
        raise typer.Exit(1)

    if not db.exists():
        typer.echo("Error: No database found. Import brackets first with `paytax import-brackets`.", err=True)
        raise typer.Exit(1)

    conn = create_schema(db)
    rows = TaxRepository(conn, business_id=business).get_active_brackets(
        country, tt, _parse_as_of(as_of)
    )
    conn.close()

    if not rows:
        typer.echo(f"No active {tt.value} brackets for {country.upper()}.")
        return

    table = Table(title=f"{country.upper()} {tt.value} brackets")
    table.add_column("Min income", justify="right")
    table.add_column("Max income", justify="right")
    table.add_column("Rate %", justify="right")
    table.add_column("Fixed", justify="right")
    table.add_column("Effective")
    for b in rows:
        table.add_row(
            f"{b.min_income:,.2f}",
            f"{b.max_income:,.2f}" if b.max_income is not None else "—",
            f"{b.tax_rate}",
            f"{b.fixed_amount:,.2f}" if b.fixed_amount else "",
            f"{b.effective_date}" + (f" to {b.end_date}" if b.end_date else ""),
        )
    Console().print(table)


@app.command()
def calculate(
    employee_id: str = typer.Argument(..., help="Employee whose taxes to compute"),
    gross: str = typer.Option(..., "--gross", "-g", help="Gross pay for the period"),
    period: str = typer.Option(
        "monthly",
        "--period",
        "-p",
        help="Pay period: weekly, bi-weekly, semi-monthly, monthly",
    ),
    db: Path = typer.Option(DEFAULT_DB, "--db", help="Path to the SQLite database file"),
    business: str | None = typer.Option(None, "--business", "-b", help="Business scope"),
    config_file: Path | None = typer.Option(
        None, "--config", help="JSON file overriding engine constants"
    ),
    as_of: str | None = typer.Option(
        None, "--as-of", help="Pay date, YYYY-MM-DD (default: today)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Compute one pay period's withholding for an employee."""
    from pydantic import ValidationError

    from paytax.db.repository import TaxRepository
    from paytax.db.schema import create_schema
    from paytax.engines.orchestrator import PayrollTaxCalculator
    from paytax.exceptions import TaxComputationError
    from paytax.models.config import TaxEngineConfig

    pay_date = _parse_as_of(as_of) or date.today()

    config = TaxEngineConfig()
    if config_file is not None:
        try:
            config = TaxEngineConfig.from_file(config_file)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            typer.echo(f"Error: Cannot load config {config_file}: {exc}", err=True)
            raise typer.Exit(1)

    if not db.exists():
        typer.echo("Error: No database found. Import data first with `paytax import-brackets`.", err=True)
        raise typer.Exit(1)

    conn = create_schema(db)
    repo = TaxRepository(conn, business_id=business)
    calculator = PayrollTaxCalculator(repo, config=config)
    try:
        result = calculator.calculate_for_employee(
            employee_id, gross, period, profiles=repo, as_of=pay_date
        )
    except TaxComputationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
    finally:
        conn.close()

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    table = Table(title=f"Withholding for {employee_id} ({period})")
    table.add_column("Tax")
    table.add_column("Amount", justify="right")
    for label, amount in [
        ("Federal", result.federal_tax),
        ("State", result.state_tax),
        ("Local", result.local_tax),
        ("Social Security", result.social_security_tax),
        ("Medicare", result.medicare_tax),
    ]:
        table.add_row(label, f"${amount:,.2f}")
    table.add_row("Total", f"${result.total_tax:,.2f}", style="bold")
    Console().print(table)


if __name__ == "__main__":
    app()
