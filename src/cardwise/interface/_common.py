"""Shared helpers for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer
from pydantic import ValidationError

from cardwise.application.config import AppConfig, resolve_config
from cardwise.application.factory import get_review_service
from cardwise.application.review.service import ReviewService
from cardwise.domain.review.ports import ReviewStoreError


def _resolve_with_overrides(ctx: typer.Context | None = None, **kwargs: Any) -> AppConfig:
    """Merge global options stored on the context with per-command overrides."""
    overrides: dict[str, Any] = {}
    if ctx is not None and ctx.obj:
        overrides.update(ctx.obj.get("overrides", {}))
    overrides.update(kwargs)
    try:
        return resolve_config(overrides)
    except ValidationError as e:
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _service(ctx: typer.Context) -> ReviewService:
    return get_review_service(_resolve_with_overrides(ctx))


@contextmanager
def _store_errors() -> Iterator[None]:
    """Turn review store failures into a clean non-zero exit."""
    try:
        yield
    except ReviewStoreError as e:
        typer.secho(f"Review store error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e
