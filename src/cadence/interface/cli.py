"""Cadence CLI: grading, previews, step parsing, study queues and config."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from cadence.application.config import resolve_config
from cadence.application.queue_builder import build_study_queue, count_due
from cadence.application.scheduling import (
    build_review_log,
    grade_card,
    parse_steps,
    preview_intervals,
)
from cadence.consts import VERSION
from cadence.domain.scheduling.errors import UnknownCardStateError, UnknownRatingError
from cadence.domain.scheduling.models import Rating
from cadence.interface._common import (
    _resolve_with_overrides,
    load_cards,
    load_review_logs,
    parse_now,
    review_log_record,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="cadence: Anki-style SM-2 scheduler for flashcards.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage cadence configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


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
    ] = 1,
):
    """Global settings for cadence."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose
    if verbose >= 2:
        logging.getLogger("cadence").setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def steps(
    spec: Annotated[str, typer.Argument(help='Step specification, e.g. "1m 10m 1d".')],
):
    """Parse a learning step specification into minutes."""
    typer.echo(json.dumps(parse_steps(spec)))


@app.command()
def grade(
    card_file: Annotated[Path, typer.Argument(help="YAML/JSON file holding one card.")],
    rating: Annotated[str, typer.Argument(help="again, hard, good or easy.")],
    now: Annotated[
        str | None, typer.Option(help="Current time (ISO-8601). Defaults to local now.")
    ] = None,
    learning_steps: Annotated[
        str | None, typer.Option("--steps", help='Learning steps, e.g. "1m 10m".')
    ] = None,
    with_log: Annotated[
        bool, typer.Option("--with-log", help="Also print the review log entry.")
    ] = False,
    elapsed_ms: Annotated[
        int | None,
        typer.Option(min=0, help="Time spent answering, recorded in the review log."),
    ] = None,
):
    """[bold green]Grade[/bold green] a card and print its next scheduling state."""
    config = _resolve_with_overrides(learning_steps=learning_steps)
    current = parse_now(now)

    try:
        parsed = Rating.parse(rating)
    except UnknownRatingError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(2) from e

    cards = load_cards(card_file)
    if len(cards) != 1:
        typer.secho(f"Expected exactly one card, found {len(cards)}.", fg="red", err=True)
        raise typer.Exit(1)
    card = cards[0]

    try:
        result = grade_card(card, parsed, config.scheduler_settings(), current)
    except UnknownCardStateError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e

    output = result.as_record()
    if with_log:
        log = build_review_log(card, parsed, result, current, elapsed_ms=elapsed_ms)
        output = {"card": output, "review": review_log_record(log)}
    typer.echo(json.dumps(output, indent=2))


@app.command()
def preview(
    card_file: Annotated[Path, typer.Argument(help="YAML/JSON file holding one card.")],
    now: Annotated[
        str | None, typer.Option(help="Current time (ISO-8601). Defaults to local now.")
    ] = None,
    learning_steps: Annotated[
        str | None, typer.Option("--steps", help='Learning steps, e.g. "1m 10m".')
    ] = None,
):
    """Show the interval each answer button would give."""
    config = _resolve_with_overrides(learning_steps=learning_steps)
    current = parse_now(now)

    cards = load_cards(card_file)
    if len(cards) != 1:
        typer.secho(f"Expected exactly one card, found {len(cards)}.", fg="red", err=True)
        raise typer.Exit(1)

    try:
        labels = preview_intervals(cards[0], config.scheduler_settings(), current)
    except UnknownCardStateError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e

    typer.echo(json.dumps(labels.as_dict(), indent=2))


@app.command("queue")
def queue(
    cards_file: Annotated[Path, typer.Argument(help="YAML/JSON file holding a list of cards.")],
    limit: Annotated[int, typer.Option(min=0, help="Maximum cards in the session.")] = 50,
    now: Annotated[
        str | None, typer.Option(help="Current time (ISO-8601). Defaults to local now.")
    ] = None,
    new_cards_per_day: Annotated[int | None, typer.Option(help="Daily new-card limit.")] = None,
    max_reviews_per_day: Annotated[
        int | None, typer.Option(help="Daily review limit.")
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help=(
                "YAML/JSON review logs from today. They use up the daily quotas; "
                "without them quotas start fresh."
            ),
        ),
    ] = None,
):
    """Build today's study queue: learning first, then reviews and new cards.

    Cards without an id are listed by their position in the file. Entries
    printed by `grade --with-log` can be collected into --log-file.
    """
    config = _resolve_with_overrides(
        new_cards_per_day=new_cards_per_day,
        max_reviews_per_day=max_reviews_per_day,
    )
    current = parse_now(now)
    cards = load_cards(cards_file)
    logs = load_review_logs(log_file) if log_file else []

    try:
        result = build_study_queue(
            cards, config.study_limits(), current, reviewed_today=logs, limit=limit
        )
        counts = count_due(cards, current)
    except UnknownCardStateError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e

    positions = {id(card): str(i) for i, card in enumerate(cards)}
    typer.echo(
        json.dumps(
            {
                "queue": [card.card_id or positions[id(card)] for card in result.cards],
                "due": {"new": counts.new, "learning": counts.learning, "review": counts.review},
            },
            indent=2,
        )
    )


@app.command()
def version():
    """Print the cadence version."""
    typer.echo(f"cadence {VERSION}")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display the resolved configuration as JSON."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
