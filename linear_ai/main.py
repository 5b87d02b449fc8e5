"""linear-ai-cli — all commands."""

import logging
import signal
import sys
from typing import Annotated, NoReturn

import click
import httpx
import typer
from openai import OpenAIError
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from linear_ai import __version__
from linear_ai.llm import IssueExtractor
from linear_ai.models import CreatedIssue, IssueProposal, Team
from linear_ai.providers.base import TrackerProvider
from linear_ai.providers.linear import LinearProvider
from linear_ai.settings import Credentials, get_settings, get_store

app = typer.Typer(help="convert text to linear issue from terminal", no_args_is_help=True)

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def get_tracker(api_key: str) -> TrackerProvider:
    return LinearProvider(api_key)


def get_extractor(api_key: str, model: str) -> IssueExtractor:
    return IssueExtractor(api_key, model=model)


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _fail(message: str, exc: BaseException | None = None) -> NoReturn:
    detail = f" {escape(str(exc))}" if exc is not None else ""
    err_console.print(f"[red]{message}[/red]{detail}", markup=True, highlight=False)
    raise typer.Exit(1)


def _mask(val: str | None, prefix: str = "") -> str:
    if not val:
        return "[dim](not set)[/dim]"
    if len(val) <= 5:
        return "***"
    return f"{prefix}...{val[-5:]}"


def _print_created(created: list[CreatedIssue]) -> None:
    for issue in created:
        rprint(f"[green]✓[/green] [bold]{issue.identifier}[/bold] {issue.title}")
        rprint(f"  {issue.url}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Selection helpers
# ---------------------------------------------------------------------------


def parse_selection(raw: str, count: int) -> list[int]:
    """Parse a selection like "1,3-4" or "all" into zero-based indices.

    Order follows first mention; duplicates are dropped. Raises ValueError for
    anything out of range, malformed, or empty.
    """
    text = raw.strip().lower()
    if text in ("all", "*"):
        return list(range(count))

    indices: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        start_str, sep, end_str = part.partition("-")
        try:
            start = int(start_str)
            end = int(end_str) if sep else start
        except ValueError:
            raise ValueError(f"'{part}' is not a number or range") from None
        if start > end or start < 1 or end > count:
            raise ValueError(f"'{part}' is outside 1-{count}")
        for number in range(start, end + 1):
            if number - 1 not in indices:
                indices.append(number - 1)

    if not indices:
        raise ValueError("Select at least one issue")
    return indices


def _select_proposals(proposals: list[IssueProposal]) -> list[IssueProposal]:
    table = Table(title="Proposed Issues")
    table.add_column("#", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Description", style="dim")
    for number, proposal in enumerate(proposals, start=1):
        table.add_row(str(number), proposal.title, proposal.description)
    rprint(table)

    while True:
        raw = typer.prompt("Select the issues you want to create (e.g. 1,3-4)", default="all")
        try:
            indices = parse_selection(raw, len(proposals))
        except ValueError as exc:
            rprint(f"[yellow]{exc}[/yellow]")
            continue
        return [proposals[i] for i in indices]


def _select_team(teams: list[Team]) -> Team:
    table = Table(title="Teams")
    table.add_column("#", style="cyan")
    table.add_column("Key")
    table.add_column("Name")
    for number, team in enumerate(teams, start=1):
        table.add_row(str(number), team.key or "—", team.name)
    rprint(table)

    choice = typer.prompt(
        "Select the team to create the issues",
        type=click.IntRange(1, len(teams)),
        default=1,
    )
    return teams[choice - 1]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=_version_callback,
            is_eager=True,
            help="Display the version number.",
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
) -> None:
    _configure_logging(verbose)


@app.command("init")
def init_cmd(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt.")] = False,
) -> None:
    """Initialize your project by storing API keys."""
    openai_key = typer.prompt("Please provide your OpenAI API key", hide_input=True)
    linear_key = typer.prompt("Please provide your Linear API key", hide_input=True)

    if not yes and not typer.confirm("Proceed with storing the provided keys?", default=True):
        raise typer.Exit(0)

    store = get_store()
    try:
        with console.status("Storing API keys..."):
            store.save(Credentials(openai_api_key=openai_key, linear_api_key=linear_key))
    except OSError as exc:
        _fail(f"Could not write {store.path}:", exc)

    rprint("")
    rprint("[green]Success![/green] Project initialization completed. Your API keys have been stored.")
    rprint("")


@app.command("process-text")
def process_text() -> None:
    """Process text input with the OpenAI API and create Linear issues."""
    settings = get_settings()
    try:
        credentials = get_store(settings).load()
    except RuntimeError as exc:
        _fail("Error: could not read API keys:", exc)

    if not credentials.is_configured or not credentials.openai_api_key or not credentials.linear_api_key:
        _fail("Error: API keys not found. Please run the init command first.")
    openai_key = credentials.openai_api_key.get_secret_value()
    linear_key = credentials.linear_api_key.get_secret_value()

    text = typer.prompt("Please provide the text to process", default="", show_default=False).strip()
    if not text:
        _fail("Error: No text input provided.")

    # Step 1: extract proposals
    try:
        extractor = get_extractor(openai_key, settings.model)
        with console.status("Processing text with AI..."):
            proposals = extractor.extract(text)
    except (OpenAIError, RuntimeError) as exc:
        _fail("Error processing text with AI:", exc)

    if not proposals:
        _fail("No issues could be extracted from the provided text.")

    # Step 2: choose which proposals to keep
    selected = _select_proposals(proposals)

    # Step 3: choose the destination team
    tracker = get_tracker(linear_key)
    try:
        with console.status("Fetching teams..."):
            teams = tracker.list_teams()
    except (httpx.HTTPError, RuntimeError) as exc:
        _fail("Error fetching teams:", exc)

    if not teams:
        _fail("No teams found.")
    rprint("[green]Teams fetched successfully.[/green]")
    team = _select_team(teams)
    logger.debug("Selected %d of %d proposal(s) for team %s", len(selected), len(proposals), team.id)

    if not typer.confirm("Do you want to create these issues?", default=True):
        return

    # Step 4: create sequentially, stopping at the first failure
    created: list[CreatedIssue] = []
    try:
        with console.status("Creating issues in Linear..."):
            for proposal in selected:
                created.append(
                    tracker.create_issue(
                        title=proposal.title,
                        description=proposal.description,
                        team_id=team.id,
                    )
                )
    except (httpx.HTTPError, RuntimeError) as exc:
        _print_created(created)
        _fail(
            f"Error creating issues in Linear ({len(created)} of {len(selected)} created, remaining skipped):",
            exc,
        )

    _print_created(created)
    rprint("[green]Issues created successfully.[/green]")


@app.command("config-show")
def config_show() -> None:
    """Show stored configuration (masks credentials)."""
    settings = get_settings()
    store = get_store(settings)
    try:
        credentials = store.load()
    except RuntimeError as exc:
        _fail("Error: could not read API keys:", exc)

    table = Table(title="linear-ai-cli Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("credentials_file", str(store.path))
    table.add_row("model", settings.model)
    table.add_row(
        "openAiKey",
        _mask(
            credentials.openai_api_key.get_secret_value() if credentials.openai_api_key else None,
            prefix="sk-",
        ),
    )
    table.add_row(
        "linearKey",
        _mask(
            credentials.linear_api_key.get_secret_value() if credentials.linear_api_key else None,
            prefix="lin_api_",
        ),
    )

    rprint(table)


def _exit_on_signal(signum: int, frame: object) -> None:
    sys.exit(0)


def main() -> None:
    signal.signal(signal.SIGINT, _exit_on_signal)
    signal.signal(signal.SIGTERM, _exit_on_signal)
    app()


if __name__ == "__main__":
    main()
