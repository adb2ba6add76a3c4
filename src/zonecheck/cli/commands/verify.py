"""Verify command implementation."""

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from zonecheck.core.errors import InputError
from zonecheck.core.loader import read_domains
from zonecheck.core.models import CheckOutcome, VerifyConfig, VerifyResult
from zonecheck.core.resolver import ResolverClient
from zonecheck.core.verify.engine import VerifyEngine
from zonecheck.core.verify.ratelimit import RateLimiter
from zonecheck.core.verify.report import VerifyReport, describe_failure

console = Console()
err_console = Console(stderr=True)


def build_config(
    nameservers: str, timeout: float, launch_interval: float, burst: int
) -> VerifyConfig:
    """Validate CLI options into a VerifyConfig, or fail as a usage error."""
    try:
        return VerifyConfig(
            nameservers=nameservers,
            timeout=timeout,
            launch_interval=launch_interval,
            burst=burst,
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e


class ProgressPrinter:
    """Print a dot per passed check and a line per failure as they arrive."""

    def __init__(self):
        self.printed_dots = False

    def __call__(self, outcome: CheckOutcome) -> None:
        if outcome.passed:
            console.print(".", end="")
            self.printed_dots = True
            return
        if self.printed_dots:
            console.print()
            self.printed_dots = False
        err_console.print(f"[red]{escape(describe_failure(outcome))}[/]", highlight=False)


def print_summary(result: VerifyResult, verbose: bool = False) -> None:
    if verbose:
        console.print()
        console.print(escape(VerifyReport(result).summary()), highlight=False)

    if result.success:
        console.print("\n[bold green]All checks passed[/]")
        return

    table = Table(title="Verification Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Checks", str(result.checks))
    table.add_row("Passed", f"[green]{result.passed}[/]")
    table.add_row("Failed", f"[red]{result.failed}[/]")
    table.add_row("Duration", f"{result.duration_ms:.2f}ms")

    console.print()
    console.print(table)
    err_console.print(f"[bold red]{result.failed} of {result.checks} checks failed[/]")


async def run_verify(file: Optional[Path], config: VerifyConfig, options) -> bool:
    """Load declared records, verify them, report. Returns True if all passed."""
    try:
        domains = await read_domains(file)
    except InputError as e:
        err_console.print(f"[red]{escape(str(e))}[/]", highlight=False)
        return False

    engine = VerifyEngine(
        resolver=ResolverClient(timeout=config.timeout),
        nameservers=config.nameservers,
        limiter=RateLimiter.from_interval(config.launch_interval, config.burst),
    )

    as_json = options is not None and options.output.value == "json"
    result = await engine.verify_domains(domains, on_outcome=None if as_json else ProgressPrinter())

    if as_json:
        console.print_json(json.dumps(VerifyReport(result).to_json()))
    else:
        print_summary(result, verbose=options is not None and options.verbose)

    return result.success
