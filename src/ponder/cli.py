"""Command-line interface for Ponder.

Configuration comes from ``PONDER_*`` environment variables and ``.env``
(see ``ponder.config.PonderConfig``). The caller is whoever ``--user`` or
``PONDER_USER`` names.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from ponder import __version__
from ponder.config import PonderConfig, create_ponder
from ponder.exceptions import PonderError
from ponder.models import IndexState

if TYPE_CHECKING:
    from ponder.models import ScoredQuestion
    from ponder.ponder import Ponder

app = typer.Typer(
    name="ponder",
    help="Ponder - record questions, find them again by meaning.",
    no_args_is_help=True,
)
console = Console()

DataDirOption = typer.Option(None, "--data-dir", "-d", help="Data directory (default: from config)")
UserOption = typer.Option(None, "--user", "-u", help="Act as this user (default: PONDER_USER)")


def version_callback(value: bool) -> None:
    if value:
        console.print(f"ponder {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Ponder - record questions, find them again by meaning."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(data_dir: str | None, user: str | None) -> PonderConfig:
    config = PonderConfig()
    updates = {}
    if data_dir:
        updates["data_dir"] = data_dir
    if user:
        updates["user"] = user
    return config.model_copy(update=updates) if updates else config


def _get_ponder(data_dir: str | None, user: str | None) -> Ponder:
    try:
        return create_ponder(_load_config(data_dir, user))
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


def _fail(error: Exception) -> typer.Exit:
    console.print(f"[red]Error: {error}[/red]")
    return typer.Exit(1)


def _print_results(results: list[ScoredQuestion], plain: bool) -> None:
    if not results:
        console.print("No results found." if plain else "[yellow]No results found.[/yellow]")
        return

    if plain:
        for i, result in enumerate(results, 1):
            console.print(f"[{i}] {result.question.text} (score: {result.score:.3f})")
            console.print(f"    id: {result.question.id}")
        return

    table = Table(title="Results")
    table.add_column("#", style="dim")
    table.add_column("Question")
    table.add_column("Score", justify="right", style="cyan")
    table.add_column("ID", style="dim")
    for i, result in enumerate(results, 1):
        table.add_row(str(i), result.question.text, f"{result.score:.3f}", result.question.id)
    console.print(table)


@app.command()
def ask(
    text: str = typer.Argument(..., help="Question to record"),
    data_dir: str = DataDirOption,
    user: str = UserOption,
    wait: bool = typer.Option(
        True,
        "--wait/--no-wait",
        help="Wait for the embedding to be generated before exiting",
    ),
) -> None:
    """Record a question and index it in the background."""
    ponder = _get_ponder(data_dir, user)

    try:
        question_id = ponder.create_question(text)
    except PonderError as e:
        raise _fail(e) from None

    console.print(f"[green]Recorded question[/green] {question_id}")

    if not wait:
        console.print("[dim]Run 'ponder reindex' later to make it searchable.[/dim]")
        return

    asyncio.run(ponder.wait_for_jobs())
    status = ponder.embedding_store.get_status(question_id)
    if status.state == IndexState.INDEXED:
        console.print("[green]Indexed.[/green]")
    else:
        console.print(f"[yellow]Not indexed yet ({status.state.value}).[/yellow]")
        if status.last_error:
            console.print(f"[dim]{status.last_error}[/dim]")


@app.command()
def search(
    query: str = typer.Argument(..., help="What to look for"),
    data_dir: str = DataDirOption,
    user: str = UserOption,
    limit: int = typer.Option(None, "--limit", "-k", help="Number of candidates"),
    plain: bool = typer.Option(False, "--plain", help="Plain output (no colors/formatting)"),
) -> None:
    """Search your questions by meaning."""
    ponder = _get_ponder(data_dir, user)

    try:
        results = asyncio.run(ponder.semantic_search(query, limit=limit))
    except (PonderError, ValueError) as e:
        raise _fail(e) from None

    _print_results(results, plain)


@app.command()
def related(
    question_id: str = typer.Argument(..., help="Question to find neighbours for"),
    data_dir: str = DataDirOption,
    user: str = UserOption,
    limit: int = typer.Option(None, "--limit", "-k", help="Number of results"),
    plain: bool = typer.Option(False, "--plain", help="Plain output (no colors/formatting)"),
) -> None:
    """Show questions related to one of yours."""
    ponder = _get_ponder(data_dir, user)

    try:
        results = ponder.get_related_questions(question_id, limit=limit)
    except (PonderError, ValueError) as e:
        raise _fail(e) from None

    _print_results(results, plain)


@app.command(name="list")
def list_questions(
    data_dir: str = DataDirOption,
    user: str = UserOption,
    num_items: int = typer.Option(20, "--num", "-n", help="Page size"),
    cursor: str = typer.Option(None, "--cursor", help="Continue from a previous page"),
) -> None:
    """List your questions, newest first."""
    ponder = _get_ponder(data_dir, user)

    try:
        page = ponder.get_questions(num_items=num_items, cursor=cursor)
    except ValueError as e:
        raise _fail(e) from None

    if not page.page:
        console.print("[yellow]No questions yet.[/yellow]")
        return

    table = Table(title="Questions")
    table.add_column("ID", style="dim")
    table.add_column("Question")
    for question in page.page:
        table.add_row(question.id, question.text)
    console.print(table)

    if not page.is_done:
        console.print(f"[dim]More: ponder list --cursor {page.continue_cursor}[/dim]")


@app.command()
def show(
    question_id: str = typer.Argument(..., help="Question ID"),
    data_dir: str = DataDirOption,
    user: str = UserOption,
) -> None:
    """Show one of your questions and its indexing status."""
    ponder = _get_ponder(data_dir, user)

    try:
        question = ponder.get_question(question_id)
        status = ponder.get_indexing_status(question_id)
    except PonderError as e:
        raise _fail(e) from None

    console.print(f"[bold]{question.text}[/bold]")
    console.print(f"ID: {question.id}")
    console.print(f"Status: {status.state.value}")
    if status.state == IndexState.FAILED:
        console.print(f"Attempts: {status.attempts}")
        if status.last_error:
            console.print(f"[dim]{status.last_error}[/dim]")


@app.command()
def status(
    data_dir: str = DataDirOption,
) -> None:
    """Show database statistics."""
    from ponder.configuration import LocalStorage

    config = _load_config(data_dir, None)
    question_store, embedding_store, vector_index = LocalStorage(
        config.data_dir, vector_index=config.vector_index
    ).build_stores()

    table = Table(title="Ponder Status")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Data directory", config.data_dir)
    table.add_row("Questions", str(question_store.count_questions()))
    table.add_row("Embeddings", str(embedding_store.count_embeddings()))
    table.add_row("Index entries", str(vector_index.count()))
    for state, count in embedding_store.count_by_state().items():
        table.add_row(f"Status: {state.value}", str(count))
    console.print(table)


@app.command()
def reindex(
    data_dir: str = DataDirOption,
    failed_only: bool = typer.Option(False, "--failed-only", help="Only retry failed questions"),
) -> None:
    """Retry embedding for questions that are not indexed."""
    ponder = _get_ponder(data_dir, None)

    states = (IndexState.FAILED,) if failed_only else (IndexState.UNINDEXED, IndexState.FAILED)
    count = ponder.requeue_unindexed(states)
    if count == 0:
        console.print("Nothing to reindex.")
        return

    asyncio.run(ponder.wait_for_jobs())
    counts = ponder.embedding_store.count_by_state()
    console.print(
        f"Requeued {count} question(s): "
        f"{counts[IndexState.INDEXED]} indexed, {counts[IndexState.FAILED]} failed"
    )


if __name__ == "__main__":
    app()
