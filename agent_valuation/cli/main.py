"""
CLI interface for Agent Valuation.

Provides command-line access to classification, pricing, survival status
and ledger totals.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from agent_valuation.config.loader import ValuationConfig, load_valuation_config
from agent_valuation.core.occupations import OccupationCategory
from agent_valuation.core.status import SurvivalStatus
from agent_valuation.storage.db import DEFAULT_DB_PATH
from agent_valuation.storage.models import UsageSummary
from agent_valuation.storage.repository import UsageLedger

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1
EXIT_CODE_INTERVENTION = 1  # Critical or Bankrupt


def _load_config(config_path: Optional[str]) -> ValuationConfig:
    """Load config from a file, or built-in defaults when no file is given."""
    if config_path is None:
        return ValuationConfig()
    return load_valuation_config(config_path)


def _format_currency(amount: float) -> str:
    """Format currency with proper symbols and formatting."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Agent Valuation CLI."""
    if ctx.invoked_subcommand is None:
        console.print("Agent Valuation - Use --help to see available commands")


@app.command()
def init(
    db: str = typer.Option(DEFAULT_DB_PATH, "--db", help="Path to the usage ledger database")
):
    """Initialize the usage ledger database."""
    try:
        UsageLedger(db).initialize_schema()
        console.print("[green]✓[/] Usage ledger initialized successfully")
        sys.exit(EXIT_CODE_PASS)
    except Exception as e:
        console.print(f"[red]Error initializing ledger:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)


@app.command()
def classify(
    instruction: str = typer.Argument(..., help="Work instruction to value"),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to valuation config YAML"
    )
):
    """Classify a work instruction and show its payment ceiling."""
    try:
        classifier = _load_config(config_path).classifier.build_classifier()
    except Exception as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    result = classifier.classify(instruction)

    console.print("\n[bold]Task Classification[/bold]")
    console.print("-" * 40)
    console.print(f"Occupation: {result.occupation}")
    console.print(f"Category: {result.category.display_name}")
    console.print(f"Hourly wage: {_format_currency(result.hourly_wage)}")
    console.print(f"Estimated hours: {result.estimated_hours:.2f}")
    console.print(f"Max payment: {_format_currency(result.max_payment)}")
    console.print(f"Confidence: {result.confidence:.2f}")
    console.print(f"Reasoning: {result.reasoning}")


@app.command()
def occupations(
    category: Optional[OccupationCategory] = typer.Option(
        None,
        "--category",
        help="Only list occupations in this category"
    )
):
    """List catalog occupations and their hourly wages."""
    classifier = ValuationConfig().classifier.build_classifier()
    selected = (
        classifier.occupations_by_category(category)
        if category is not None
        else classifier.occupations
    )

    table = Table(title="Occupations")
    table.add_column("Occupation")
    table.add_column("Category")
    table.add_column("Hourly wage", justify="right")
    for occupation in selected:
        table.add_row(
            occupation.name,
            occupation.category.display_name,
            _format_currency(occupation.hourly_wage)
        )
    console.print(table)


@app.command()
def price(
    provider: str = typer.Argument(..., help="Provider name, e.g. openai"),
    model: str = typer.Argument(..., help="Model name, e.g. gpt-4o-2024-05-13"),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to valuation config YAML"
    )
):
    """Show per-million-token prices resolved for a model."""
    try:
        resolver = _load_config(config_path).pricing.build_resolver()
    except Exception as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    input_price, output_price = resolver.get_pricing(provider, model)
    console.print(f"\n[bold]Pricing for {provider}/{model}[/bold]")
    console.print(f"Input: {_format_currency(input_price)} per 1M tokens")
    console.print(f"Output: {_format_currency(output_price)} per 1M tokens")


@app.command(context_settings={"ignore_unknown_options": True})
def status(
    balance: float = typer.Argument(..., help="Current balance in USD"),
    initial: Optional[float] = typer.Option(
        None,
        "--initial",
        "-i",
        help="Initial balance in USD (overrides config)"
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to valuation config YAML"
    )
):
    """
    Show survival status for a balance.

    Exits with a non-zero code when the agent needs intervention
    (Critical or Bankrupt).
    """
    if initial is None:
        try:
            initial = _load_config(config_path).economic.initial_balance
        except Exception as e:
            console.print(f"[red]Error:[/] {str(e)}")
            sys.exit(EXIT_CODE_FAIL)
    if initial is None:
        console.print("[red]Error:[/] initial balance required (--initial or economic.initial_balance)")
        sys.exit(EXIT_CODE_FAIL)

    survival = SurvivalStatus.from_balance(balance, initial)
    console.print(f"{survival.emoji} Status: {survival}")
    console.print(f"Balance: {_format_currency(balance)} of {_format_currency(initial)}")

    if survival.needs_intervention():
        sys.exit(EXIT_CODE_INTERVENTION)
    sys.exit(EXIT_CODE_PASS)


@app.command()
def summary(
    db: str = typer.Option(DEFAULT_DB_PATH, "--db", help="Path to the usage ledger database")
):
    """Show totals recorded in the usage ledger."""
    if not Path(db).exists():
        totals = UsageSummary.empty()
    else:
        try:
            totals = UsageLedger(db).get_summary()
        except Exception as e:
            console.print(f"[red]Error:[/] {str(e)}")
            sys.exit(EXIT_CODE_FAIL)

    console.print("\n[bold]Usage Summary[/bold]")
    console.print("-" * 40)
    console.print(f"Requests: {totals.request_count:,}")
    console.print(f"Tokens: {totals.total_tokens:,}")
    console.print(f"Total cost: {_format_currency(totals.total_cost_usd)}")


if __name__ == "__main__":
    app()
