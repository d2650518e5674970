"""Shared option parsing for CLI commands."""

from __future__ import annotations

from datetime import datetime, time, timezone

import click

DATE = click.DateTime(formats=["%Y-%m-%d"])


def start_of(day: datetime | None) -> datetime | None:
    if day is None:
        return None
    return datetime.combine(day.date(), time.min, tzinfo=timezone.utc)


def end_of(day: datetime | None) -> datetime | None:
    if day is None:
        return None
    return datetime.combine(day.date(), time.max, tzinfo=timezone.utc)
