"""aios-core doctor command."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape

from aios_core.cli.context import get_command_context
from aios_core.commands.doctor import CheckStatus, DoctorReport, run_doctor


@click.command(name="doctor")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def doctor_cmd(ctx, as_json: bool):
    """Run system diagnostics.

    \b
    Exit codes:
      0: No check failed (warnings allowed)
      1: One or more checks failed
    """
    context = get_command_context(ctx)
    report = run_doctor(context)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(context.console, report)

    ctx.exit(report.exit_code)


STATUS_LABELS = {
    CheckStatus.PASS: "[green]PASS[/green]",
    CheckStatus.FAIL: "[red]FAIL[/red]",
    CheckStatus.WARN: "[yellow]WARN[/yellow]",
}

SUMMARY_STYLES = {"passed": "green", "failed": "red", "warnings": "yellow"}


def _print_report(console: Console, report: DoctorReport) -> None:
    console.print("\n[bold]AIOS Doctor Report[/bold]\n")

    for check in report.checks:
        console.print(f"  {STATUS_LABELS[check.status]} {check.name}: {escape(check.message)}")
        if check.details:
            console.print(f"       [dim]{escape(check.details)}[/dim]")

    counts = [
        f"[{SUMMARY_STYLES[key]}]{count} {key}[/{SUMMARY_STYLES[key]}]"
        for key, count in report.summary.items()
        if count
    ]
    console.print(f"\nSummary: {', '.join(counts)}\n")
