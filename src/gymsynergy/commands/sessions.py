"""Training session commands."""

from datetime import date

import click

from ..db.repositories import SessionRepository
from ..models.session import SessionStatus
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)


@click.group()
def sessions():
    """View and update booked sessions."""
    pass


@sessions.command("list")
@click.argument("user_id")
@click.pass_context
@async_command
async def list_sessions(ctx: click.Context, user_id: str):
    """List sessions for an instructor or client."""
    ensure_initialized(ctx)

    booked = await SessionRepository().list_for_user(user_id)
    if not booked:
        echo_info("No sessions found.")
        return

    rows = [
        [
            str(s.id),
            s.date.isoformat(),
            f"{s.start_time}-{s.end_time}",
            s.type.value,
            s.client_name or s.client_id,
            s.get_status_display(),
        ]
        for s in booked
    ]
    click.echo(format_table(["ID", "Date", "Time", "Type", "Client", "Status"], rows))


@sessions.command("upcoming")
@click.argument("instructor_id")
@click.pass_context
@async_command
async def upcoming(ctx: click.Context, instructor_id: str):
    """Scheduled sessions from today onwards."""
    ensure_initialized(ctx)

    booked = await SessionRepository().list_upcoming(instructor_id, date.today())
    if not booked:
        echo_info("No upcoming sessions.")
        return

    rows = [
        [
            str(s.id),
            s.date.isoformat(),
            f"{s.start_time}-{s.end_time}",
            s.client_name or s.client_id,
        ]
        for s in booked
    ]
    click.echo(format_table(["ID", "Date", "Time", "Client"], rows))


@sessions.command("status")
@click.argument("session_id", type=int)
@click.argument("status", type=click.Choice([s.value for s in SessionStatus]))
@click.pass_context
@async_command
async def set_status(ctx: click.Context, session_id: int, status: str):
    """Mark a session scheduled, completed or cancelled."""
    ensure_initialized(ctx)

    if not await SessionRepository().update_status(session_id, SessionStatus(status)):
        echo_error(f"Session {session_id} not found")
        ctx.exit(1)

    echo_success(f"Session {session_id} marked {status}")
