"""
Barrier Report QA - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--visible, --language, etc.)
    2. EMAIL and PASSWORD environment variables
    3. Config file (config.yaml)
    4. BARRIER_QA__* environment variables (BARRIER_QA__BROWSER__HEADLESS, etc.)
    5. Defaults

Usage:
    barrier-report-qa check-env
    barrier-report-qa run --visible --language en
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from barrier_report_qa import __version__
from barrier_report_qa.browsers.playwright_browser import BrowserSession
from barrier_report_qa.config import load_config
from barrier_report_qa.config.settings import Settings
from barrier_report_qa.constants import LANGUAGES
from barrier_report_qa.exceptions import BarrierReportQAError, ConfigurationError
from barrier_report_qa.reporting.step_logger import StepRecorder, StepStatus
from barrier_report_qa.scenarios.barrier_report import ScenarioContext, run_barrier_report_scenario
from barrier_report_qa.utils.data import is_valid_email
from barrier_report_qa.utils.logging import setup_logging

# Create the CLI app
app = typer.Typer(
    name="barrier-report-qa",
    help="End-to-end checks for the TB barrier reporting web application",
    add_completion=False,
)

console = Console()

BRANDED_CHANNELS = ("chrome", "chrome-beta", "msedge", "msedge-beta")


def _browser_overrides(browser: str, visible: bool) -> Dict[str, Any]:
    """Map the --browser value onto browser settings."""
    overrides: Dict[str, Any] = {}
    if visible:
        overrides["headless"] = False
    if browser in BRANDED_CHANNELS:
        overrides["browser_type"] = "chromium"
        overrides["channel"] = browser
    elif browser in ("chromium", "firefox", "webkit"):
        overrides["browser_type"] = browser
    else:
        raise typer.BadParameter(
            f"Unknown browser '{browser}'. Use chromium, firefox, webkit, chrome or msedge.",
            param_hint="--browser",
        )
    return overrides


def _load_settings(
    config: Optional[Path],
    env_file: Optional[Path],
    overrides: Dict[str, Any],
) -> Settings:
    try:
        return load_config(config_path=config, env_file=env_file, **overrides)
    except ConfigurationError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def run(
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    browser: str = typer.Option("chromium", "--browser", "-b", help="Browser: chromium, firefox, webkit, chrome, msedge"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Interface language: ru, en, ro (default: from config)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Path to .env file with EMAIL and PASSWORD"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Directory for screenshots, traces and step logs"),
    trace: bool = typer.Option(False, "--trace", help="Record a Playwright trace"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Report a barrier anonymously and verify it appears in the report panel.

    Examples:
        barrier-report-qa run
        barrier-report-qa run --visible --browser chrome --language en
    """
    if language is not None and language not in LANGUAGES:
        console.print(f"[red]✗ Unsupported language: {language}. Supported languages are: {', '.join(LANGUAGES)}[/red]")
        raise typer.Exit(1)

    overrides: Dict[str, Any] = {"browser": _browser_overrides(browser, visible)}
    if language:
        overrides["app"] = {"language": language}
    reporting: Dict[str, Any] = {}
    if output_dir:
        reporting["output_dir"] = output_dir
    if trace:
        reporting["trace"] = True
    if reporting:
        overrides["reporting"] = reporting
    if verbose:
        overrides["logging"] = {"level": "DEBUG"}

    settings = _load_settings(config, env_file, overrides)
    setup_logging(settings.logging.level, settings.logging.file, settings.logging.json_format)

    try:
        settings.require_credentials()
    except ConfigurationError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(1)

    channel = settings.browser.channel or settings.browser.browser_type
    console.print(Panel.fit(
        f"[bold blue]🩺 Barrier Report QA[/bold blue]\n"
        f"[dim]Browser:[/dim] {channel}"
        + (" (visible)" if not settings.browser.headless else "")
        + f"\n[dim]Language:[/dim] {settings.app.language}\n"
        f"[dim]Target:[/dim] {settings.app.base_url}",
        border_style="blue",
    ))

    recorder = StepRecorder.from_settings(settings)
    try:
        context = asyncio.run(_run_async(settings, recorder))
    except BarrierReportQAError as e:
        _print_steps(recorder)
        console.print(f"\n[red]✗ Failed: {e}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        _print_steps(recorder)
        console.print(f"\n[red]Error: {e}[/red]")
        logging.exception("Execution failed")
        raise typer.Exit(1)
    finally:
        steps_path = recorder.export_json(Path(settings.reporting.output_dir) / recorder.run_id / "steps.json")
        console.print(f"[dim]Step log: {steps_path}[/dim]")

    _print_steps(recorder)
    _print_context(context)
    console.print("\n[green]✓ Success![/green]")


async def _run_async(settings: Settings, recorder: StepRecorder) -> ScenarioContext:
    """Run the scenario in a fresh browser session."""
    async with BrowserSession(settings, run_id=recorder.run_id) as session:
        recorder.page = session.page
        return await run_barrier_report_scenario(session.page, settings, recorder)


def _print_steps(recorder: StepRecorder) -> None:
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("#", width=3)
    table.add_column("Step")
    table.add_column("Status", width=10)
    table.add_column("Duration", justify="right")

    styles = {
        StepStatus.SUCCESS: "[green]passed[/green]",
        StepStatus.ERROR: "[red]failed[/red]",
        StepStatus.START: "[dim]running[/dim]",
    }
    for log in recorder.logs:
        table.add_row(str(log.step_number), log.name, styles[log.status], f"{log.duration_ms / 1000:.1f}s")

    console.print()
    console.print(table)


def _print_context(context: ScenarioContext) -> None:
    console.print("\n[bold]Selected values:[/bold]")
    console.print(f"  Type of user: {context.type_of_user}")
    console.print(f"  Key population: {context.identity}")
    console.print(f"  Age group: {context.age_group}")
    if context.verification:
        console.print(
            f"  Matching rows: {context.verification.matching_rows}/{context.verification.total_rows}"
        )


@app.command("check-env")
def check_env(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Path to .env file"),
):
    """Validate that the required environment variables are set."""
    settings = _load_settings(config, env_file, {})
    missing = settings.missing_credentials()

    for name in ("EMAIL", "PASSWORD"):
        if name in missing:
            console.print(f"[red]✗ {name} is not set[/red]")
        else:
            console.print(f"[green]✓ {name} is set[/green]")

    if "EMAIL" not in missing and not is_valid_email(settings.app.email):
        console.print("[yellow]⚠ EMAIL does not look like an e-mail address[/yellow]")

    if missing:
        console.print(
            f"\n[red]Missing required environment variables: {', '.join(missing)}[/red]\n"
            "Please create a .env file with the required variables."
        )
        raise typer.Exit(1)

    console.print("\n[green]✓ Environment variables validated[/green]")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]Barrier Report QA[/bold] v{__version__}")


if __name__ == "__main__":
    app()
