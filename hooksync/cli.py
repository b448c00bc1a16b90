"""hooksync CLI: install project git hooks from a staging directory."""

from __future__ import annotations

import json
import logging
import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .config import ProjectConfig
from .driver import DecisionSource, PolicyDecisionSource, resolve_conflicts
from .errors import HooksyncError
from .models import Action, SyncReport
from .prepare import verify_git_directory
from .synchronizer import HookSynchronizer

console = Console()
err_console = Console(stderr=True)

CONFLICT_QUESTION = "A {hook} hook already exists for this repository, how would you like to proceed?"

STATE_STYLES = {
    "installed": "[green]✓[/green] installed",
    "differs": "[yellow]~[/yellow] differs",
    "missing": "[dim]✗[/dim] missing",
    "unreadable": "[red]![/red] unreadable",
}


def _setup_logging(verbose: bool) -> logging.Logger:
    """Send hooksync log records to stderr."""
    logger = logging.getLogger("hooksync")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Clear existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)

    return logger


def _display(text: str) -> str:
    """Make a file name printable even when it is not valid UTF-8."""
    return os.fsencode(text).decode("utf-8", "replace")


class PromptDecisionSource:
    """Asks the user on the terminal how to resolve each conflict.

    Once stdin reaches end of file every remaining conflict is skipped,
    the same answer --no-interaction gives.
    """

    def __init__(self):
        self.exhausted = False

    def _ask(self, hook: str, suffix: str, choices: list[str]) -> Action:
        if not self.exhausted:
            try:
                answer = click.prompt(
                    CONFLICT_QUESTION.format(hook=_display(hook)) + suffix,
                    type=click.Choice(choices),
                    default="s",
                    show_choices=False,
                )
                return Action(answer)
            except click.Abort as e:
                # Ctrl-C still aborts, only a closed stdin falls back to skip.
                if not isinstance(e.__context__, EOFError):
                    raise
                click.echo()
                self.exhausted = True

        err_console.print(
            f"[yellow]Warning:[/yellow] No answer given, skipping {escape(_display(hook))}."
        )
        return Action.SKIP

    def decide(self, hook: str) -> Action:
        return self._ask(hook, " [o]verwrite, [s]kip, show [d]ifferences", ["o", "s", "d"])

    def decide_after_diff(self, hook: str, diff: str) -> Action:
        if diff:
            console.print(Syntax(_display(diff), "diff", theme="ansi_dark"))
        else:
            console.print("[dim]No differences in content.[/dim]")

        return self._ask(hook, " [o]verwrite, [s]kip", ["o", "s"])


def _decision_source(on_conflict: str, no_interaction: bool) -> DecisionSource:
    if on_conflict == "overwrite":
        return PolicyDecisionSource(Action.OVERWRITE)
    if on_conflict == "skip" or no_interaction:
        return PolicyDecisionSource(Action.SKIP)
    return PromptDecisionSource()


def _print_report(report: SyncReport) -> None:
    for warning in report.warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(_display(warning))}")

    for hook, detail in report.failed.items():
        err_console.print(
            f"[yellow]Warning:[/yellow] {escape(_display(hook))} was not copied: "
            f"{escape(_display(detail))}"
        )

    # Nothing was copied, stay quiet.
    if not report.copied:
        return

    console.print("[bold]Copied git hooks:[/bold]")
    for hook in report.copied:
        console.print(f"  * {escape(_display(hook))}")


@click.group()
@click.version_option(package_name="hooksync")
def cli():
    """hooksync - install git hooks shipped with a project."""


@cli.command()
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="The path to the root directory of the project",
)
@click.option(
    "--hooks",
    default=None,
    help="The path to the hooks directory, relative to the project root",
)
@click.option(
    "--on-conflict",
    type=click.Choice(["prompt", "overwrite", "skip"]),
    default="prompt",
    help="How to handle hooks that differ from the installed ones",
)
@click.option(
    "--no-interaction", "-n", is_flag=True, help="Never prompt, skip conflicting hooks"
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every step to stderr")
def install(
    base_dir: str | None,
    hooks: str | None,
    on_conflict: str,
    no_interaction: bool,
    output: str,
    verbose: bool,
):
    """Install git hooks for the current project."""
    _setup_logging(verbose)

    config = ProjectConfig.create(base_dir, hooks)
    synchronizer = HookSynchronizer(config)

    try:
        report = resolve_conflicts(
            synchronizer, _decision_source(on_conflict, no_interaction)
        )
    except HooksyncError as e:
        message = escape(_display(e.message))
        err_console.print(
            f"[red]Error:[/red] An error occurred while copying git hooks: {message}"
        )
        sys.exit(1)

    if output == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)


@cli.command()
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="The path to the root directory of the project",
)
@click.option("--yes", "-y", is_flag=True, help="Create a .git directory without asking")
def prepare(base_dir: str | None, yes: bool):
    """Prepare a project for hooksync."""
    config = ProjectConfig.create(base_dir)

    def confirm(question: str) -> bool:
        return yes or click.confirm(question, default=True)

    console.print("Verifying presence of a .git directory...")
    result = verify_git_directory(config.base_dir, confirm)

    if result.status == "ok":
        console.print("[green]OK[/green]")
    elif result.status == "created":
        console.print(f"[green]✓[/green] {result.message}")
    elif result.status == "failed":
        err_console.print(f"[red]Error:[/red] {result.message}")
        if result.output:
            err_console.print(result.output, markup=False)
        sys.exit(1)
    else:
        console.print(f"[yellow]Warning:[/yellow] {result.message}")
        console.print("Run [dim]git init[/dim] to initialize a repository.")
        sys.exit(1)


@cli.command()
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="The path to the root directory of the project",
)
@click.option(
    "--hooks",
    default=None,
    help="The path to the hooks directory, relative to the project root",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def status(base_dir: str | None, hooks: str | None, output: str):
    """Show which staged hooks are installed."""
    config = ProjectConfig.create(base_dir, hooks)

    try:
        states = HookSynchronizer(config).hook_states()
    except HooksyncError as e:
        err_console.print(f"[red]Error:[/red] {escape(_display(e.message))}")
        sys.exit(1)

    if output == "json":
        click.echo(json.dumps([s.to_dict() for s in states], indent=2))
        return

    if not states:
        source = escape(_display(str(config.hooks_source_dir)))
        console.print(f"[yellow]No hooks staged in {source}.[/yellow]")
        return

    table = Table(title=f"Hooks in {config.hooks_dir}")
    table.add_column("Hook", style="cyan")
    table.add_column("State")
    for s in states:
        table.add_row(escape(_display(s.name)), STATE_STYLES.get(s.state, s.state))

    target = escape(_display(str(config.hooks_target_dir)))
    console.print(Panel(f"Target: {target}", style="bold"))
    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
