"""Main CLI interface using Typer."""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import click
import typer
import typer.main
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..core import ClusterListNotFoundError, InvalidClusterListError, ScanOrchestrator
from ..k8s import KubectlBackend, MissingToolError
from ..model import ClusterStatus, ConfigError, ScanFilter, ScanSummary, load_config
from ..utils.logger import get_logger, set_level

# Create CLI app
app = typer.Typer(
    name="hostscan",
    help="Scan a fleet of Kubernetes clusters for pods running with hostNetwork: true",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

STATUS_COLORS: Dict[ClusterStatus, str] = {
    ClusterStatus.SCANNED: "green",
    ClusterStatus.SKIPPED: "dim",
    ClusterStatus.LOGIN_FAILED: "red",
    ClusterStatus.QUERY_FAILED: "yellow",
}


def _print_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)


def _print_summary(summary: ScanSummary) -> None:
    """Print per-cluster results in a formatted table."""
    if summary.outcomes:
        table = Table(title="hostNetwork scan", show_header=True, header_style="bold magenta")
        table.add_column("Cluster", style="cyan")
        table.add_column("Status")
        table.add_column("Context", style="white")
        table.add_column("hostNetwork pods", justify="right")

        for outcome in summary.outcomes:
            color = STATUS_COLORS.get(outcome.status, "white")
            pods = "-" if outcome.status == ClusterStatus.SKIPPED else str(outcome.pod_count)
            table.add_row(
                escape(outcome.cluster),
                f"[{color}]{outcome.status.value}[/{color}]",
                escape(outcome.context or "-"),
                pods,
            )

        console.print(table)

    console.print(f"[green]✓[/green] CSV report: [cyan]{escape(str(summary.csv_path))}[/cyan]")
    console.print(f"[green]✓[/green] Scan log:   [cyan]{escape(str(summary.log_path))}[/cyan]")


def _version_callback(value: bool):
    if value:
        console.print(f"[bold]hostscan[/bold] version {__version__}")
        raise typer.Exit()


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def scan(
    ctx: typer.Context,
    target: Optional[str] = typer.Argument(
        None, help="Environment preset (prod, stg, dev) or path to a clusters file"
    ),
    out_dir: Optional[Path] = typer.Argument(
        None, help="Directory for the CSV report and scan log (default: current directory)"
    ),
    limit_cluster: Optional[str] = typer.Option(
        None,
        "--limit-cluster",
        help="Only scan these clusters, e.g. 'a,b' or '{a,b}'",
    ),
    out_dir_option: Optional[Path] = typer.Option(
        None, "--out-dir", help="Output directory (overrides the positional out_dir)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to a YAML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show diagnostic logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Log in to each cluster in turn and report pods using the host network."""
    if target is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    if verbose:
        set_level(logging.DEBUG)

    try:
        config = load_config(config_path)
        output_dir = out_dir_option or out_dir or config.output_dir

        orchestrator = ScanOrchestrator(
            KubectlBackend(config),
            presets_dir=config.presets_dir,
            console=console,
            err_console=err_console,
        )
        summary = orchestrator.run(target, output_dir, ScanFilter.parse(limit_cluster))
    except (ConfigError, MissingToolError, ClusterListNotFoundError, InvalidClusterListError) as e:
        _print_error(str(e))
        raise typer.Exit(1)
    except OSError as e:
        logger.debug("Scan aborted", exc_info=True)
        _print_error(f"cannot write scan output: {e}")
        raise typer.Exit(1)

    _print_summary(summary)


def _click_exception_modules():
    """Exception modules of every click implementation the app may raise from.

    Recent Typer releases vendor click, so their usage errors do not derive
    from the installed ``click`` package.
    """
    modules = [click.exceptions]
    command_class = type(typer.main.get_command(app))
    for cls in typer.Exit.__mro__ + command_class.__mro__:
        package = cls.__module__.rpartition(".")[0]
        for name in (cls.__module__, f"{package}.exceptions"):
            module = sys.modules.get(name)
            if module is not None and hasattr(module, "UsageError") and hasattr(module, "Abort"):
                modules.append(module)
    return modules


_click_modules = _click_exception_modules()
USAGE_ERRORS = tuple({module.UsageError for module in _click_modules})
ABORT_ERRORS = tuple({module.Abort for module in _click_modules})


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point; usage errors exit with status 1."""
    try:
        result = app(args=argv, prog_name="hostscan", standalone_mode=False)
    except USAGE_ERRORS as e:
        _print_error(e.format_message())
        return 1
    except ABORT_ERRORS:
        err_console.print("Aborted.")
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
