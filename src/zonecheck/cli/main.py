"""Main CLI entry point for zonecheck."""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from zonecheck.core.models import DEFAULT_NAMESERVERS

# Create the main app
app = typer.Typer(
    name="zonecheck",
    help="Verify that live nameservers serve the records DNSControl declared",
    no_args_is_help=True,
)

console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


# Global options stored in context
class GlobalOptions:
    def __init__(self):
        self.output: OutputFormat = OutputFormat.TABLE
        self.verbose: bool = False
        self.debug: bool = False


def configure_logging(verbose: bool, debug: bool) -> None:
    """Route stdlib logging to stderr through rich."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=debug)],
    )


# ============================================================================
# Verify Command
# ============================================================================


@app.command("verify")
def verify(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(
        None, help="DNSControl JSON document (default: read stdin)"
    ),
    nameservers: str = typer.Option(
        ",".join(DEFAULT_NAMESERVERS),
        "--nameservers",
        "-n",
        envvar="ZONECHECK_NAMESERVERS",
        help="Comma separated nameservers, host[:port]",
    ),
    timeout: float = typer.Option(
        5.0, "--timeout", envvar="ZONECHECK_TIMEOUT", help="Per-query timeout in seconds"
    ),
    launch_interval: float = typer.Option(
        0.01,
        "--launch-interval",
        envvar="ZONECHECK_LAUNCH_INTERVAL",
        help="Minimum seconds between check launches (0 disables pacing)",
    ),
    burst: int = typer.Option(
        1, "--burst", envvar="ZONECHECK_BURST", help="Launches allowed back to back"
    ),
):
    """Check every declared record group against every nameserver."""
    from zonecheck.cli.commands.verify import build_config, run_verify

    config = build_config(nameservers, timeout, launch_interval, burst)
    passed = asyncio.run(run_verify(file, config, ctx.obj))
    if not passed:
        raise typer.Exit(code=1)


# ============================================================================
# Version Command
# ============================================================================


@app.command("version")
def version():
    """Show version information."""
    from zonecheck import __version__

    console.print(f"zonecheck version {__version__}")


# ============================================================================
# Main Callback (Global Options)
# ============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--output", "-o", help="Output format"
    ),
):
    """zonecheck - post-deployment DNS verification."""
    ctx.ensure_object(GlobalOptions)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.output = output
    configure_logging(verbose, debug)


if __name__ == "__main__":
    app()
