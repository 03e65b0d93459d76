"""Output formatters for TDEE results."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from preppy.tracking.models import Confidence, QualityLevel, TDEECalculationResult

LEVEL_COLORS = {
    "high": "green",
    "medium": "yellow",
    "low": "red",
}


def _colored(level: Confidence | QualityLevel) -> str:
    color = LEVEL_COLORS[level.value]
    return f"[{color}]{level.value.upper()}[/{color}]"


class TableFormatter:
    """Format results as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, result: TDEECalculationResult) -> None:
        """Print formatted tables to console.

        Args:
            result: TDEE result to format
        """
        header_lines = [
            f"[bold]ADAPTIVE TDEE[/bold] - {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            f"TDEE: [bold]{result.dynamic_tdee} kcal/day[/bold]",
            f"Average intake (14 days): {result.avg_daily_calories} kcal/day",
            f"Weekly trend change: {result.weekly_weight_change_kg:+.2f} kg",
            f"Confidence: {_colored(result.confidence)}",
        ]
        self.console.print(Panel("\n".join(header_lines), title="Preppy"))

        window_table = Table(title="Analysis Windows")
        window_table.add_column("Window", style="cyan")
        window_table.add_column("TDEE Estimate", justify="right")
        window_table.add_column("Weight", justify="right")

        for window in result.analysis_windows:
            window_table.add_row(
                f"{window.days} days",
                f"{window.tdee_estimate:.0f} kcal",
                f"{window.weight:.1f}",
            )

        self.console.print(window_table)

        quality = result.data_quality
        quality_table = Table(title="Data Quality")
        quality_table.add_column("Metric")
        quality_table.add_column("Value", justify="right")
        quality_table.add_row("Weight completeness", f"{quality.weight_completeness:.1f}%")
        quality_table.add_row("Calorie completeness", f"{quality.macro_completeness:.1f}%")
        quality_table.add_row("Interpolated days", str(quality.interpolated_days))
        quality_table.add_row("Overall", _colored(quality.overall_quality))

        self.console.print(quality_table)


class JSONFormatter:
    """Format results as JSON for programmatic use."""

    def format(self, result: TDEECalculationResult) -> str:
        """Return JSON string.

        Args:
            result: TDEE result to format

        Returns:
            JSON string
        """
        data: dict[str, Any] = {
            "timestamp": datetime.now().isoformat(),
            **result.to_dict(),
        }
        return json.dumps(data, indent=2)


class MarkdownFormatter:
    """Format results as Markdown for LLM handoff or documentation."""

    def format(self, result: TDEECalculationResult) -> str:
        """Return Markdown string.

        Args:
            result: TDEE result to format

        Returns:
            Markdown string
        """
        quality = result.data_quality
        lines = [
            "# Adaptive TDEE",
            "",
            f"**TDEE:** {result.dynamic_tdee} kcal/day",
            f"**Average Intake:** {result.avg_daily_calories} kcal/day",
            f"**Weekly Trend Change:** {result.weekly_weight_change_kg:+.2f} kg",
            f"**Confidence:** {result.confidence.value}",
            "",
            "## Analysis Windows",
            "",
            "| Window | TDEE Estimate | Weight |",
            "|--------|---------------|--------|",
        ]

        for window in result.analysis_windows:
            lines.append(
                f"| {window.days} days | {window.tdee_estimate:.0f} kcal | {window.weight:.1f} |"
            )

        lines.extend(
            [
                "",
                "## Data Quality",
                "",
                f"- Weight completeness: {quality.weight_completeness:.1f}%",
                f"- Calorie completeness: {quality.macro_completeness:.1f}%",
                f"- Interpolated days: {quality.interpolated_days}",
                f"- Overall: {quality.overall_quality.value}",
            ]
        )

        return "\n".join(lines)


def format_result(
    result: TDEECalculationResult,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a TDEE result in the specified format.

    Args:
        result: TDEE result to format
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format(result)
        return None
    elif output_format == "json":
        return JSONFormatter().format(result)
    elif output_format == "markdown":
        return MarkdownFormatter().format(result)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
