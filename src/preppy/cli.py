"""CLI interface using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from preppy.agent.response import AgentResponse, error_response
from preppy.config import get_settings, reload_settings
from preppy.export.formatters import format_result
from preppy.tracking.coaching import run_weekly_check_in
from preppy.tracking.ema import ascending, calculate_adaptive_trend
from preppy.tracking.gap_fill import fill_weight_gaps
from preppy.tracking.loaders import (
    load_macro_log,
    load_weight_log,
    save_macro_log,
    save_weight_log,
)
from preppy.tracking.sample_data import GOAL_PROFILES, generate_sample_logs
from preppy.tracking.tdee_calc import InsufficientDataError, calculate_dynamic_tdee

app = typer.Typer(
    help="Preppy: adaptive TDEE estimation and weekly nutrition coaching",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
tdee_app = typer.Typer(help="TDEE estimation and weekly check-ins")
weight_app = typer.Typer(help="Weight trend analysis")
sample_app = typer.Typer(help="Generate sample logs")
config_app = typer.Typer(help="Manage configuration")

app.add_typer(tdee_app, name="tdee")
app.add_typer(weight_app, name="weight")
app.add_typer(sample_app, name="sample")
app.add_typer(config_app, name="config")

NEED_MORE_DATA_SUGGESTIONS = [
    "Keep logging weight and calories daily",
    "Lower the requirement with --min-days (less accurate)",
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml"
    ),
) -> None:
    """Configure logging and settings for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if config_path is not None:
        reload_settings(config_path)


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: AgentResponse) -> None:
    """Print a JSON response envelope to stdout."""
    print(response.to_json())


def fail(command: str, message: str, json_output: bool, suggestions=None) -> None:
    """Report an error in the requested style and exit with status 1."""
    if json_output:
        output_json(error_response(command, message, suggestions))
    else:
        console.print(f"[red]{message}[/red]")
        for suggestion in suggestions or []:
            console.print(f"  [dim]- {suggestion}[/dim]")
    raise typer.Exit(1)


def load_logs(weights_path: Path, macros_path: Path, command: str, json_output: bool):
    """Load both logs, exiting with a friendly error on bad input."""
    try:
        return load_weight_log(weights_path), load_macro_log(macros_path)
    except (OSError, ValueError) as e:
        fail(command, str(e), json_output)


# ============================================================================
# TDEE Commands
# ============================================================================


@tdee_app.command("estimate")
def tdee_estimate(
    weights_path: Path = typer.Argument(..., help="Weight log (CSV or JSON)"),
    macros_path: Path = typer.Argument(..., help="Calorie/macro log (CSV or JSON)"),
    min_days: Optional[int] = typer.Option(
        None, "--min-days", help="Minimum days of data required"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Estimate TDEE from weight trend and calorie intake."""
    command = "tdee estimate"
    settings = get_settings()
    weights, macros = load_logs(weights_path, macros_path, command, json_output)

    try:
        result = calculate_dynamic_tdee(
            weights,
            macros,
            min_days=min_days if min_days is not None else settings.tdee.min_days,
            window_weights=settings.tdee.window_weights,
            max_gap_days=settings.tdee.max_interpolation_gap_days,
        )
    except InsufficientDataError as e:
        fail(command, str(e), json_output, NEED_MORE_DATA_SUGGESTIONS)

    if json_output:
        output_json(
            AgentResponse(
                success=True,
                command=command,
                data=result.to_dict(),
                human_summary=(
                    f"TDEE: {result.dynamic_tdee} kcal/day "
                    f"({result.confidence.value} confidence)"
                ),
            )
        )
        return

    fmt = output_format or settings.defaults.output_format
    try:
        rendered = format_result(result, fmt, console=console)
    except ValueError as e:
        fail(command, str(e), json_output)
    if rendered is not None:
        print(rendered)


@tdee_app.command("check-in")
def tdee_check_in(
    weights_path: Path = typer.Argument(..., help="Weight log (CSV or JSON)"),
    macros_path: Path = typer.Argument(..., help="Calorie/macro log (CSV or JSON)"),
    previous_tdee: Optional[float] = typer.Option(
        None, "--previous-tdee", help="TDEE behind current targets"
    ),
    days_since: int = typer.Option(
        7, "--days-since", help="Days since targets last changed"
    ),
    rate: float = typer.Option(
        0.0, "--rate", help="Desired weekly weight change in kg (negative to lose)"
    ),
    protein: float = typer.Option(0.0, "--protein", help="Current protein target (g)"),
    fat: float = typer.Option(0.0, "--fat", help="Current fat target (g)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Run the weekly check-in: estimate, gate, and recommend targets."""
    command = "tdee check-in"
    settings = get_settings()
    weights, macros = load_logs(weights_path, macros_path, command, json_output)

    try:
        outcome = run_weekly_check_in(
            weights,
            macros,
            previous_tdee=previous_tdee,
            days_since_last_update=days_since,
            target_weekly_change_kg=rate,
            protein_g=protein,
            fat_g=fat,
            min_days=settings.tdee.min_days,
            min_days_between_updates=settings.coaching.min_days_between_updates,
            thresholds=settings.coaching.thresholds(),
            window_weights=settings.tdee.window_weights,
            max_gap_days=settings.tdee.max_interpolation_gap_days,
        )
    except ValueError as e:
        fail(command, str(e), json_output)

    if not outcome.success:
        fail(command, outcome.message, json_output, NEED_MORE_DATA_SUGGESTIONS)

    if json_output:
        output_json(
            AgentResponse(
                success=True,
                command=command,
                data=outcome.to_dict(),
                human_summary=outcome.summary,
            )
        )
        return

    status = "[green]UPDATE[/green]" if outcome.should_update else "[yellow]HOLD[/yellow]"
    console.print(f"Recommendation: {status}")
    if outcome.recommendation is not None:
        targets = outcome.recommendation
        console.print(
            f"  [bold]{targets.calories} kcal[/bold] - "
            f"P {targets.protein:.0f}g / C {targets.carbs}g / F {targets.fat:.0f}g"
        )
    console.print()
    console.print(outcome.summary)


# ============================================================================
# Weight Commands
# ============================================================================


@weight_app.command("trend")
def weight_trend(
    weights_path: Path = typer.Argument(..., help="Weight log (CSV or JSON)"),
    days: int = typer.Option(14, "--days", "-d", help="Most recent days to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Show gap-filled weights with adaptive trend."""
    command = "weight trend"
    try:
        weights = load_weight_log(weights_path)
    except (OSError, ValueError) as e:
        fail(command, str(e), json_output)

    settings = get_settings()
    filled = fill_weight_gaps(
        weights, max_gap_days=settings.tdee.max_interpolation_gap_days
    )
    recent = calculate_adaptive_trend(filled)[:days]

    if json_output:
        output_json(
            AgentResponse(
                success=True,
                command=command,
                data={
                    "entries": [
                        {
                            "date": e.date.isoformat(),
                            "weightKg": e.weight_kg,
                            "trendWeightKg": e.trend_weight_kg,
                            "isInterpolated": e.is_interpolated,
                        }
                        for e in recent
                    ]
                },
                human_summary=f"{len(recent)} days of trend data",
            )
        )
        return

    table = Table(title="Weight Trend")
    table.add_column("Date", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("Trend", justify="right")
    table.add_column("", justify="center")

    for entry in ascending(recent):
        trend = f"{entry.trend_weight_kg:.2f}" if entry.trend_weight_kg is not None else "-"
        table.add_row(
            entry.date.isoformat(),
            f"{entry.weight_kg:.1f}",
            trend,
            "[dim]interp[/dim]" if entry.is_interpolated else "",
        )

    console.print(table)


# ============================================================================
# Sample Data Commands
# ============================================================================


@sample_app.command("generate")
def sample_generate(
    out_dir: Path = typer.Argument(..., help="Directory for weights.csv and macros.csv"),
    weight: float = typer.Option(80.0, "--weight", help="Starting weight (kg)"),
    tdee: float = typer.Option(2500.0, "--tdee", help="True maintenance calories"),
    goal: str = typer.Option(
        "maintenance", "--goal", help=f"One of: {', '.join(GOAL_PROFILES)}"
    ),
    days: int = typer.Option(21, "--days", help="Days to generate"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
) -> None:
    """Generate sample weight and calorie logs."""
    try:
        weights, macros = generate_sample_logs(weight, tdee, goal, days=days, seed=seed)
    except ValueError as e:
        fail("sample generate", str(e), False)

    out_dir.mkdir(parents=True, exist_ok=True)
    save_weight_log(weights, out_dir / "weights.csv")
    save_macro_log(macros, out_dir / "macros.csv")
    console.print(f"[green]Wrote {days} days of sample data to {out_dir}[/green]")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show() -> None:
    """Show the active configuration."""
    console.print(yaml.dump(get_settings().to_dict(), sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write config.yaml"),
) -> None:
    """Write the default configuration file."""
    settings = get_settings()
    settings.save(path)
    console.print("[green]Configuration saved[/green]")


if __name__ == "__main__":
    app()
