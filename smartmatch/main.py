"""SmartMatch CLI - rank marketplace providers for a service request."""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from smartmatch.config import DEFAULT_MAX_RESULTS, LOG_LEVEL
from smartmatch.matching.weights import DEFAULT_WEIGHTS, DIMENSIONS
from smartmatch.schemas.match import MatchingResult
from smartmatch.services.match_service import match_from_files
from smartmatch.utils import MatchingConfigurationError

app = typer.Typer(help="SmartMatch - Provider matching and ranking for service requests")
console = Console()

_DIMENSION_TITLES = {
    "distance": "Distance",
    "skills": "Skills",
    "rating": "Rating",
    "availability": "Availability",
    "response_time": "Response time",
    "verification": "Verification",
    "completion_rate": "Completion rate",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def rank(
    request: Path = typer.Option(..., "--request", "-r", help="Path to service request JSON"),
    providers: Path = typer.Option(
        ..., "--providers", "-p", help="Path to candidate providers JSON"
    ),
    top_n: int = typer.Option(
        DEFAULT_MAX_RESULTS, "--top-n", "-n", help="Number of top matches to return"
    ),
    weights: Path | None = typer.Option(
        None, "--weights", "-w", help="JSON file with weight overrides"
    ),
    at: datetime | None = typer.Option(
        None, "--at", help="Reference time for availability (ISO 8601, default now)"
    ),
    min_score: float = typer.Option(
        0.0, "--min-score", help="Drop providers scoring below this (0-1)"
    ),
    require_skill_match: bool = typer.Option(
        False, "--require-skill-match", help="Drop providers without a matching skill"
    ),
    output_json: bool = typer.Option(
        False, "--json", help="Output results as JSON instead of pretty format"
    ),
) -> None:
    """Rank candidate providers for a service request."""
    for path in (request, providers, weights):
        if path is not None and not path.exists():
            console.print(f"[red]Error: File not found: {path}[/red]")
            raise typer.Exit(1)

    reference_time = at or datetime.now(UTC)

    try:
        matches = match_from_files(
            request_path=request,
            providers_path=providers,
            reference_time=reference_time,
            top_n=top_n,
            weights_path=weights,
            min_score=min_score,
            require_skill_match=require_skill_match,
        )
    except MatchingConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error reading input: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(matches=matches)
    elif not matches:
        console.print("[yellow]No matching providers found.[/yellow]")
    else:
        _output_pretty(matches=matches)


@app.command()
def weights() -> None:
    """Display the default weighting policy."""
    table = Table(title="Default Weighting Policy")
    table.add_column("Dimension", style="cyan")
    table.add_column("Weight", style="green", justify="right")

    for dimension in DIMENSIONS:
        table.add_row(_DIMENSION_TITLES[dimension], f"{DEFAULT_WEIGHTS[dimension]:.2f}")

    console.print(table)


def _output_json(matches: list[MatchingResult]) -> None:
    """Output matches as JSON to stdout."""
    output = [match.model_dump(mode="json") for match in matches]
    json.dump(obj=output, fp=sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def _output_pretty(matches: list[MatchingResult]) -> None:
    """Output matches in pretty console format."""
    console.print(f"\n[bold green]Found {len(matches)} top matches![/bold green]\n")

    for i, match in enumerate(iterable=matches, start=1):
        provider = match.provider

        header = f"[bold]#{i} {provider.display_name or provider.id}[/bold]"
        if provider.is_top_rated:
            header += " [yellow](top rated)[/yellow]"

        content = []

        if provider.location:
            content.append(
                f"[cyan]Location:[/cyan] {provider.location.city}, {provider.location.governorate}"
            )

        content.append(f"[cyan]Match Score:[/cyan] {match.score:.1%}")
        content.append(
            "  "
            + ", ".join(
                f"{_DIMENSION_TITLES[d]}: {getattr(match.sub_scores, d):.0%}" for d in DIMENSIONS
            )
        )

        if match.reasons:
            content.append("\n[cyan]Why it's a match:[/cyan]")
            for reason in match.reasons:
                content.append(f"  • {reason}")

        if match.diagnostics:
            content.append("\n[yellow]Data warnings:[/yellow]")
            for warning in match.diagnostics:
                content.append(f"  • {warning}")

        panel = Panel(
            renderable="\n".join(content),
            title=header,
            border_style="green" if i == 1 else "blue",
        )
        console.print(panel)
        console.print()


if __name__ == "__main__":
    app()
