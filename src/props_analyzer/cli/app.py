"""
Command-line interface using Typer and Rich.

Provides:
- ``analyze``: generate mock props for a list of component files
- ``version``: version information
- ``config``: current configuration
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.config import settings
from ..core.exceptions import AnalyzerError
from ..core.logging import get_logger, set_log_level
from ..domain.models import BatchRun, TargetReport, TargetState
from ..services.batch import BatchAnalyzer
from ..services.llm import LLMClient
from ..services.sink import ResultSink

app = typer.Typer(
    name="props-analyzer",
    help="🧠 AI Props Analyzer - realistic mock props for your UI components",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
logger = get_logger(__name__)

STATE_STYLES = {
    TargetState.SUCCEEDED: ("✅ analyzed", "green"),
    TargetState.FAILED_FALLBACK: ("❌ fallback", "red"),
    TargetState.SKIPPED_MISSING: ("⏭  missing", "yellow"),
    TargetState.SKIPPED_DUPLICATE: ("⏭  duplicate", "yellow"),
}


def print_banner() -> None:
    """Display welcome banner."""
    console.print(
        Panel(
            "[bold]🧠 AI PROPS ANALYZER[/bold]\nContext-aware mock data for UI components",
            style="bold blue",
            border_style="blue",
            expand=False,
        )
    )


def print_progress(report: TargetReport) -> None:
    """Print one line per target milestone."""
    if report.state == TargetState.COMPOSING:
        console.print(f"   👉 Analyzing: [yellow]{report.path}[/yellow]")
    elif report.state == TargetState.SUCCEEDED:
        console.print(f"   ✅ [green]Analyzed {report.path}[/green]")
    elif report.state == TargetState.FAILED_FALLBACK:
        console.print(f"   ❌ [red]Failed to analyze {report.path}:[/red] {report.error}")
    elif report.state == TargetState.SKIPPED_MISSING:
        console.print(f"   ⏭  [dim]Skipping {report.path} (not found)[/dim]")
    elif report.state == TargetState.SKIPPED_DUPLICATE:
        console.print(f"   ⏭  [dim]Skipping {report.path} (listed twice)[/dim]")


def print_summary(batch: BatchRun) -> None:
    """
    Display the per-target outcome table.

    Args:
        batch: Completed batch run
    """
    table = Table(
        title="📄 Component Analysis",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
        border_style="cyan",
    )
    table.add_column("Path", style="yellow", no_wrap=False)
    table.add_column("Status", width=14)
    table.add_column("Props", justify="right", style="green", width=6)
    table.add_column("Detail", style="white", no_wrap=False)

    for report in batch.reports:
        label, style = STATE_STYLES.get(report.state, (report.state.value, "white"))
        props = ""
        if report.state == TargetState.SUCCEEDED:
            generated = batch.output[report.path].props
            props = str(len(generated)) if isinstance(generated, (dict, list)) else "1"
        table.add_row(
            report.path,
            f"[{style}]{label}[/{style}]",
            props,
            (report.error or "")[:100],
        )

    console.print(table)


@app.command()
def analyze(
    files: Annotated[
        Optional[list[str]],
        typer.Argument(help="Component source files to analyze, in order"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option(
            "--model",
            "-m",
            help="LLM model to use (e.g. 'gemini/gemini-2.5-flash', 'openai/gpt-4o-mini')",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file path for JSON results",
        ),
    ] = None,
    root: Annotated[
        Path,
        typer.Option(
            "--root",
            help="Project root holding package.json and README.md",
            file_okay=False,
        ),
    ] = Path("."),
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging",
        ),
    ] = False,
) -> None:
    """
    Generate realistic props for each component file.

    Files are analyzed one at a time, spaced to respect the service's rate
    limit. A file that fails to analyze gets empty props; missing files are
    skipped. All results are written to a single JSON document.
    """
    if not files:
        console.print("❌ [red]No files provided to analyze.[/red]")
        raise typer.Exit(1)

    if verbose:
        set_log_level("DEBUG")

    output_path = output or settings.output_path
    print_banner()

    try:
        client = LLMClient(model=model)
        console.print(f"\n[cyan]🤖 Model:[/cyan] {client.model}")
        console.print(f"[cyan]🧠 Starting context-aware analysis for {len(files)} files...[/cyan]\n")

        analyzer = BatchAnalyzer(
            client,
            project_root=root,
            sink=ResultSink(output_path),
            on_progress=print_progress,
        )
        batch = analyzer.run(files)
    except AnalyzerError as e:
        console.print(f"\n❌ [red]Analysis failed:[/red] {e.message}")
        if verbose and e.context:
            console.print(f"[dim]Context: {e.context}[/dim]")
        logger.error("analysis_failed", error=str(e), context=e.context)
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"\n❌ [red]Unexpected error:[/red] {e}")
        logger.exception("unexpected_error")
        raise typer.Exit(1)

    console.print()
    print_summary(batch)
    console.print(
        f"\n✅ [green]Bulk analysis complete![/green] "
        f"{batch.succeeded} analyzed, {batch.failed} fallback, {batch.skipped} skipped. "
        f"Saved to {batch.output_path}"
    )


@app.command()
def version() -> None:
    """Display version information."""
    version_text = Text()
    version_text.append(f"{settings.app_name}\n", style="bold blue")
    version_text.append(f"Version: {settings.app_version}\n", style="green")
    version_text.append(f"Environment: {settings.environment}\n", style="yellow")
    version_text.append(f"Default Model: {settings.model}\n", style="cyan")

    console.print(Panel(version_text, border_style="blue"))


def _mask(secret: str | None) -> str:
    if not secret:
        return "(not set)"
    return f"{secret[:4]}…" if len(secret) > 8 else "****"


@app.command()
def config() -> None:
    """Display current configuration."""
    config_table = Table(
        title="⚙️  Current Configuration",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="yellow")
    config_table.add_column("Value", style="green")

    if settings.throttle_strategy == "window":
        rate_budget = f"{settings.rate_limit_per_minute} requests / minute"
    else:
        rate_budget = f"{settings.throttle_interval_seconds:g}s between calls"

    config_items = [
        ("Model", settings.model),
        ("Gemini API Key", _mask(settings.gemini_api_key)),
        ("OpenAI API Key", _mask(settings.openai_api_key)),
        ("Request Timeout", f"{settings.request_timeout_seconds:g}s"),
        ("Rate Budget", rate_budget),
        ("README Limit", f"{settings.readme_max_chars} chars"),
        ("Output", str(settings.output_path)),
        ("Environment", settings.environment),
        ("Log Level", settings.log_level),
    ]

    for key, value in config_items:
        config_table.add_row(key, str(value))

    console.print(config_table)


def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
