"""Shared helpers for CLI commands: config overrides and card file loading."""

from datetime import date, datetime
from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import ValidationError

from cadence.application.config import AppConfig, resolve_config
from cadence.domain.scheduling.errors import SchedulingError
from cadence.domain.scheduling.models import CardSnapshot, CardState, Rating, ReviewLog

_CARD_FIELDS = (
    "state",
    "due_at",
    "interval_days",
    "ease",
    "learning_step_index",
    "reps",
    "lapses",
    "card_id",
    "created_at",
    "suspended",
)


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config, turning validation failures into a CLI error."""
    try:
        return resolve_config(overrides)
    except ValidationError as e:
        typer.secho(f"Invalid configuration:\n{e}", fg="red", err=True)
        raise typer.Exit(2) from e


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


def parse_now(value: str | None) -> datetime:
    if value is None:
        return datetime.now()
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        typer.secho(f"Invalid --now timestamp: {value}", fg="red", err=True)
        raise typer.Exit(2) from e


def card_from_mapping(raw: dict[str, Any]) -> CardSnapshot:
    """Build a snapshot from a stored row, ignoring unrelated columns."""
    if not isinstance(raw, dict):
        raise TypeError(f"expected a mapping, got {type(raw).__name__}")
    data = {k: raw[k] for k in _CARD_FIELDS if raw.get(k) is not None}
    if "state" not in data or "due_at" not in data:
        raise ValueError("card requires 'state' and 'due_at'")
    if "card_id" in data:
        data["card_id"] = str(data["card_id"])
    data["due_at"] = parse_timestamp(data["due_at"])
    if "created_at" in data:
        data["created_at"] = parse_timestamp(data["created_at"])
    return CardSnapshot(**data)


def _read_data(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        typer.secho(f"Could not read {path}: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def load_cards(path: Path) -> list[CardSnapshot]:
    """
    Load card snapshots from a YAML or JSON file.

    The file holds either a single card mapping, a list of them, or a
    mapping with a 'cards' list.
    """
    raw = _read_data(path)

    if isinstance(raw, dict) and isinstance(raw.get("cards"), list):
        raw = raw["cards"]
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        typer.secho(f"{path} does not contain card data.", fg="red", err=True)
        raise typer.Exit(1)

    try:
        return [card_from_mapping(item) for item in raw]
    except (TypeError, ValueError) as e:
        typer.secho(f"Invalid card in {path}: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def log_from_mapping(raw: dict[str, Any]) -> ReviewLog:
    """
    Build a review log from a stored row or a `grade --with-log` entry.

    Only previous_state and reviewed_at are required; they drive the quotas.
    """
    if not isinstance(raw, dict):
        raise TypeError(f"expected a mapping, got {type(raw).__name__}")
    if raw.get("previous_state") is None or raw.get("reviewed_at") is None:
        raise ValueError("review log requires 'previous_state' and 'reviewed_at'")

    reviewed_at = parse_timestamp(raw["reviewed_at"])
    return ReviewLog(
        card_id=str(raw["card_id"]) if raw.get("card_id") is not None else None,
        rating=Rating.parse(raw.get("rating") or Rating.GOOD),
        reviewed_at=reviewed_at,
        previous_state=CardState.parse(raw["previous_state"]),
        previous_interval=raw.get("previous_interval") or 0,
        new_interval=raw.get("new_interval") or 0,
        new_due_at=parse_timestamp(raw.get("new_due_at") or reviewed_at),
        elapsed_ms=raw.get("elapsed_ms"),
    )


def load_review_logs(path: Path) -> list[ReviewLog]:
    """
    Load review logs from a YAML or JSON file.

    The file holds a list of entries, or a mapping with a 'reviews' list.
    A single `grade --with-log` output (with a 'review' key) is accepted too.
    """
    raw = _read_data(path)

    if isinstance(raw, dict) and isinstance(raw.get("reviews"), list):
        raw = raw["reviews"]
    elif isinstance(raw, dict) and isinstance(raw.get("review"), dict):
        raw = [raw["review"]]
    if raw is None:
        raw = []
    if not isinstance(raw, list):
        typer.secho(f"{path} does not contain review logs.", fg="red", err=True)
        raise typer.Exit(1)

    try:
        return [log_from_mapping(item) for item in raw]
    except (TypeError, ValueError, SchedulingError) as e:
        typer.secho(f"Invalid review log in {path}: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def review_log_record(log: ReviewLog) -> dict[str, Any]:
    return {
        "card_id": log.card_id,
        "rating": log.rating.value,
        "reviewed_at": log.reviewed_at.isoformat(),
        "previous_state": log.previous_state.value,
        "previous_interval": log.previous_interval,
        "new_interval": log.new_interval,
        "new_due_at": log.new_due_at.isoformat(),
        "elapsed_ms": log.elapsed_ms,
    }
