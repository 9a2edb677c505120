"""hookwright CLI - run git hooks and report their outcome."""

import json
import logging
import signal
import threading
from contextlib import contextmanager
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from hookwright import __version__
from hookwright.checks import check_git, check_hook_tools
from hookwright.config import get_config, normalize_hook_type
from hookwright.errors import ConfigLoadError, ConfigValidationError, NotARepositoryError
from hookwright.git.repo import git_dir, repo_root
from hookwright.hook_runner import HookRunner, RunReport
from hookwright.hooks.base import HookContext
from hookwright.hooks.registry import hooks_for, supported_hook_types

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

STATUS_STYLES = {
    "good": "green",
    "pass": "green",
    "warn": "yellow",
    "fail": "red",
    "skipped": "dim",
    "cancelled": "magenta",
}


def parse_modified_lines(values: tuple[str, ...]) -> dict[str, set[int]]:
    """Parse ``FILE:1,4-6`` specs into a mapping of file to line numbers."""
    modified: dict[str, set[int]] = {}
    for value in values:
        path, sep, spec = value.rpartition(":")
        if not sep or not path:
            raise click.BadParameter(f"expected FILE:LINES, got {value!r}")
        lines = modified.setdefault(path, set())
        for part in filter(None, spec.split(",")):
            start, _, end = part.partition("-")
            try:
                first = int(start)
                last = int(end) if end else first
            except ValueError:
                raise click.BadParameter(f"invalid line range {part!r} in {value!r}") from None
            lines.update(range(first, last + 1))
    return modified


@contextmanager
def _cancel_on_signal():
    """Yield an event that is set on SIGINT/SIGTERM, restoring handlers after."""
    cancel = threading.Event()
    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return

    def handler(signum, frame):
        cancel.set()

    previous = {
        signal.SIGINT: signal.signal(signal.SIGINT, handler),
        signal.SIGTERM: signal.signal(signal.SIGTERM, handler),
    }
    try:
        yield cancel
    finally:
        for signum, old in previous.items():
            signal.signal(signum, old)


def output_report(report: RunReport, output_format: str) -> None:
    """Print a run report as JSON (stdout) or a rich table."""
    if output_format == "json":
        print(report.to_json())
        return

    table = Table(title=f"{report.hook_type} hooks")
    table.add_column("Hook", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Message")

    for entry in report.reports:
        style = STATUS_STYLES.get(entry.status, "white")
        table.add_row(
            entry.name,
            f"[{style}]{entry.status.upper()}[/{style}]",
            entry.message or "",
        )

    console.print(table)
    if report.failed:
        console.print("[red]Hooks failed[/red]")
    elif report.warned:
        console.print("[yellow]Hooks passed with warnings[/yellow]")
    else:
        console.print("[green]All hooks passed[/green]")


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="HOOKWRIGHT_LOG_LEVEL",
    help="Logging level (default: WARNING)",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    envvar="HOOKWRIGHT_OUTPUT_FORMAT",
    help="Output format: text (default) or json",
)
@click.pass_context
def main(ctx: click.Context, log_level: str, output_format: str) -> None:
    """hookwright - run git hooks and classify their outcome."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )
    ctx.ensure_object(dict)
    ctx.obj["output_format"] = output_format


@main.command()
def version() -> None:
    """Show version."""
    console.print(f"hookwright {__version__}")


@main.command()
@click.argument("hook_type")
@click.argument("files", nargs=-1)
@click.option(
    "--commit-msg-file", "-m",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File holding the commit message (commit-msg hooks)",
)
@click.option(
    "--modified-lines", "-l",
    multiple=True,
    help="Modified lines as FILE:1,4-6 (repeatable)",
)
@click.pass_context
def run(
    ctx: click.Context,
    hook_type: str,
    files: tuple[str, ...],
    commit_msg_file: Path | None,
    modified_lines: tuple[str, ...],
) -> None:
    """Run all enabled HOOK_TYPE hooks against FILES."""
    hook_type = normalize_hook_type(hook_type)
    if hook_type not in supported_hook_types():
        console.print(f"[red]Error:[/red] Unsupported hook type: {hook_type}")
        raise SystemExit(1)

    try:
        root = repo_root()
        config = get_config(root)
    except NotARepositoryError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print("Run hookwright from inside a git repository")
        raise SystemExit(1)
    except (ConfigLoadError, ConfigValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    with _cancel_on_signal() as cancel:
        context = HookContext(
            hook_type=hook_type,
            applicable_files=list(files),
            modified_lines=parse_modified_lines(modified_lines),
            commit_message=commit_msg_file.read_text() if commit_msg_file else None,
            cancel=cancel,
        )
        report = HookRunner(config, context).run()

    output_report(report, ctx.obj["output_format"])
    if report.exit_code:
        raise SystemExit(report.exit_code)


@main.command("hooks")
@click.argument("hook_type", required=False)
def list_hooks(hook_type: str | None) -> None:
    """List available hooks, optionally for one HOOK_TYPE."""
    hook_types = [normalize_hook_type(hook_type)] if hook_type else supported_hook_types()

    table = Table(title="Available Hooks")
    table.add_column("Type", style="cyan")
    table.add_column("Hook", style="bold")
    table.add_column("Requires")
    table.add_column("Description")

    for current in hook_types:
        for name, hook_class in hooks_for(current).items():
            defaults = hook_class.default_config
            table.add_row(
                current,
                name,
                defaults.get("required_executable") or "-",
                defaults.get("description", ""),
            )

    console.print(table)


@main.command()
@click.pass_context
def doctor(ctx: click.Context) -> None:
    """Check git and the tools required by enabled hooks."""
    statuses = [check_git()]
    location = None
    try:
        root = repo_root()
        location = {"root": str(root), "git_dir": str(git_dir())}
        statuses.extend(check_hook_tools(get_config(root)))
    except NotARepositoryError as e:
        console.print(f"[yellow]Warning:[/yellow] {e}")

    if ctx.obj["output_format"] == "json":
        print(json.dumps({
            "repository": location,
            "dependencies": [
                {"name": s.name, "ok": s.ok, "version": s.version, "path": s.path,
                 "required_by": s.required_by, "error": s.error}
                for s in statuses
            ],
        }))
    else:
        table = Table(title="Dependency Status")
        table.add_column("Dependency", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Version")
        table.add_column("Path")
        table.add_column("Notes")

        for status in statuses:
            if status.ok:
                label = "[green]OK[/green]"
            elif status.required_by:
                # Missing hook tools only produce warnings at run time
                label = "[yellow]WARN[/yellow]"
            else:
                label = "[red]FAIL[/red]"
            table.add_row(
                status.name,
                label,
                status.version or "-",
                status.path or "-",
                status.error or (f"used by {status.required_by}" if status.required_by else ""),
            )

        console.print(table)

    if not statuses[0].ok:
        raise SystemExit(1)
