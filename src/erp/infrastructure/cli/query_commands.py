"""CLI commands for client queries."""

from __future__ import annotations

import click

from erp.application.client_queries import (
    ListQueriesHandler,
    QueryStatsHandler,
    RespondToQueryHandler,
    SubmitQueryHandler,
)
from erp.domain.exceptions import DomainException
from erp.infrastructure.bootstrap import query_repository


@click.command("submit")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--message", required=True, help="The question.")
def query_submit(name: str, email: str, message: str) -> None:
    """Submit a customer query."""
    handler = SubmitQueryHandler(query_repo=query_repository())

    try:
        dto = handler.handle(name=name, email=email, message=message)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Query #{dto.id} received and is under review.")


@click.command("list")
@click.option("--email", default=None, help="Only this customer's queries.")
@click.option("--pending", is_flag=True, default=False, help="Only unanswered queries.")
def query_list(email: str | None, pending: bool) -> None:
    """List queries, newest first."""
    queries = ListQueriesHandler(query_repo=query_repository()).handle(
        email=email, pending_only=pending
    )

    if not queries:
        click.echo("No queries found.")
        return

    for q in queries:
        click.echo(f"#{q.id} [{q.status}] {q.created_at}  {q.customer_name} <{q.customer_email}>")
        click.echo(f"    Q: {q.message}")
        if q.response:
            click.echo(f"    A: {q.response}")


@click.command("respond")
@click.option("--id", "query_id", required=True, type=int, help="Query ID.")
@click.option("--response", required=True, help="Answer to send.")
def query_respond(query_id: int, response: str) -> None:
    """Answer a query and mark it complete."""
    handler = RespondToQueryHandler(query_repo=query_repository())

    try:
        handler.handle(query_id, response)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Query #{query_id} answered.")


@click.command("stats")
def query_stats() -> None:
    """Count queries by state."""
    stats = QueryStatsHandler(query_repo=query_repository()).handle()
    click.echo(f"{'Total':<10} {stats.total:>6}")
    click.echo(f"{'Pending':<10} {stats.pending:>6}")
    click.echo(f"{'Completed':<10} {stats.completed:>6}")
    click.echo(f"{'Answered':<10} {stats.answered:>6}")
