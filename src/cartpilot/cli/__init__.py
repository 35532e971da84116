"""
cartpilot CLI helpers shared by the click commands.
"""
from typing import List

from rich.console import Console
from rich.table import Table

from ..automation.types import ScenarioResult, ScenarioStatus
from ..config import Settings

# Create console for rich output
console = Console()

_STATUS_STYLE = {
    ScenarioStatus.PASSED: "[green]PASSED[/]",
    ScenarioStatus.FAILED: "[red]FAILED[/]",
    ScenarioStatus.SKIPPED: "[yellow]SKIPPED[/]",
}


def print_results_table(results: List[ScenarioResult]) -> None:
    """Print one row per scenario with its status, duration and outcome."""
    table = Table(title="Scenario Results")
    table.add_column("Scenario", style="cyan")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    table.add_column("Details")

    for result in results:
        details = result.message
        if result.warnings:
            details += "\n" + "\n".join(f"[yellow]! {w}[/]" for w in result.warnings)
        table.add_row(
            result.name,
            _STATUS_STYLE[result.status],
            f"{result.duration:.1f}s",
            details,
        )

    console.print(table)


def print_settings_table(settings: Settings) -> None:
    table = Table(title="Resolved Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)
