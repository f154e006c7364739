"""cardwise CLI: review scheduling commands, config and server."""

import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer

from cardwise.application.feedback import feedback_from_value
from cardwise.application.review.formatting import (
    describe_knowledge_level,
    describe_next_review,
)
from cardwise.infrastructure.adapters.json_store import record_to_dict
from cardwise.interface._common import _resolve_with_overrides, _service, _store_errors

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="cardwise: spaced-repetition scheduling for flashcards.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage cardwise configuration.")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    store: Annotated[
        Path | None, typer.Option("--store", help="Review store file (JSON backend).")
    ] = None,
    backend: Annotated[
        str | None, typer.Option(help="Review store backend: json, memory.")
    ] = None,
):
    """Global settings for cardwise."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"store_path": store, "store_backend": backend}

    if verbose >= 2:
        logging.getLogger().setLevel(logging.DEBUG)
    elif verbose == 1:
        logging.getLogger().setLevel(logging.INFO)


# ---------------------------------------------------------------------------
# Review commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    card_ids: Annotated[list[str], typer.Argument(help="Card IDs to start tracking.")],
):
    """Start tracking cards. Cards that already have review state are left alone."""
    service = _service(ctx)
    with _store_errors():
        for card_id in card_ids:
            record = service.register_card(card_id)
            typer.echo(f"{card_id}: {describe_knowledge_level(record.knowledge_level)}")


@app.command()
def review(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card ID.")],
    feedback: Annotated[
        str,
        typer.Argument(
            help=(
                "Feedback: confused, not_sure, got_it, easy, 0-3, "
                "or a reaction label such as 'Got it!'."
            )
        ),
    ],
):
    """[bold green]Record[/bold green] feedback for a card and show its next review."""
    try:
        fb = feedback_from_value(feedback)
    except ValueError as e:
        typer.secho(f"Invalid feedback {feedback!r}: {e}", fg="red", err=True)
        raise typer.Exit(2) from e

    service = _service(ctx)
    with _store_errors():
        now = service.now()
        record = service.process_feedback(card_id, fb, now)

    typer.echo(
        f"{card_id}: {describe_knowledge_level(record.knowledge_level)}, "
        f"{describe_next_review(record.next_review_date, now)} "
        f"(ease {record.easiness_factor:.2f}, streak {record.consecutive_correct})"
    )


@app.command()
def status(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card ID.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show the review state of a card."""
    service = _service(ctx)
    with _store_errors():
        record = service.get_record(card_id)
        now = service.now()

    if json_output:
        typer.echo(json.dumps(record_to_dict(record), indent=2))
        return

    typer.echo(f"Card: {card_id}")
    typer.echo(f"Level: {describe_knowledge_level(record.knowledge_level)}")
    typer.echo(f"Next review: {describe_next_review(record.next_review_date, now)}")
    typer.echo(f"Ease: {record.easiness_factor:.2f}  Streak: {record.consecutive_correct}")


@app.command()
def due(
    ctx: typer.Context,
    days: Annotated[
        int | None, typer.Option(help="Upcoming window in days. Defaults to config.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List cards due now and cards coming due soon."""
    config = _resolve_with_overrides(ctx)
    window = days if days is not None else config.upcoming_window_days
    service = _service(ctx)

    with _store_errors():
        now = service.now()
        due_ids = service.due_cards(now)
        upcoming_ids = service.upcoming_cards(now, window_days=window)

    if json_output:
        typer.echo(json.dumps({"due": due_ids, "upcoming": upcoming_ids}, indent=2))
        return

    if not due_ids and not upcoming_ids:
        typer.secho("No cards due.", fg="green")
        return

    typer.echo(f"Due now: {len(due_ids)}")
    for card_id in due_ids:
        typer.echo(f"  {card_id}")
    typer.echo(f"Upcoming (next {window} days): {len(upcoming_ids)}")
    for card_id in upcoming_ids:
        typer.echo(f"  {card_id}  {service.describe_next_review(card_id, now)}")


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show counts per knowledge level plus due and upcoming totals."""
    config = _resolve_with_overrides(ctx)
    service = _service(ctx)
    with _store_errors():
        result = service.get_stats(window_days=config.upcoming_window_days)

    if json_output:
        typer.echo(json.dumps(asdict(result), indent=2))
        return

    typer.echo(
        f"Cards: {result.total_cards}  New: {result.new_cards}  "
        f"Learning: {result.learning_cards}  Reviewing: {result.reviewing_cards}  "
        f"Mastered: {result.mastered_cards}"
    )
    typer.echo(f"Due: {result.due_cards}  Upcoming: {result.upcoming_cards}")


@app.command()
def forget(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card ID.")],
):
    """Delete a card's review state."""
    service = _service(ctx)
    with _store_errors():
        removed = service.forget_card(card_id)

    if removed:
        typer.secho(f"Forgot {card_id}.", fg="green")
    else:
        typer.secho(f"No review state for {card_id}.", fg="yellow")
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@app.command()
def serve(
    ctx: typer.Context,
    port: Annotated[int | None, typer.Option(help="Port to bind the server to.")] = None,
    host: Annotated[str | None, typer.Option(help="Host to bind the server to.")] = None,
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the HTTP review server."""
    import uvicorn

    config = _resolve_with_overrides(ctx)

    # The server resolves its own config; hand the global options over via env
    os.environ["CARDWISE_STORE_PATH"] = str(config.store_path)
    os.environ["CARDWISE_STORE_BACKEND"] = config.store_backend

    uvicorn.run(
        "cardwise.server:app",
        host=host or config.host,
        port=port or config.port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _resolve_with_overrides(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
