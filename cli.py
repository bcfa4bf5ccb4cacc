"""CLI commands for Invito event and RSVP management."""

import asyncio
from datetime import datetime
from uuid import UUID

import typer

from invito.config.logging import setup_logging
from invito.events.features.create_event.write_model import SqlEventCreateWriteModel
from invito.events.repository.read_models import SqlEventReadModel
from invito.guests.dtos import (
    CapacityExceededError,
    GuestNotFoundError,
    GuestStatus,
    RSVPDeadlinePassedError,
)
from invito.guests.features.invite_guest.write_model import SqlGuestInviteWriteModel
from invito.guests.features.remove_guest.write_model import SqlGuestRemovalWriteModel
from invito.guests.repository.write_models import SqlRSVPWriteModel
from invito.notifications import get_notifier

app = typer.Typer(help="CLI commands for Invito event and RSVP management")


@app.callback()
def main():
    setup_logging()


async def _with_notifications(coro):
    """Run a write model call and wait for the emails it scheduled."""
    try:
        return await coro
    finally:
        await get_notifier().drain()


@app.command()
def create_event(
    title: str = typer.Option(..., "--title", "-t", help="Event title"),
    date: datetime = typer.Option(..., "--date", "-d", help="Event start, ISO format"),
    max_capacity: int = typer.Option(..., "--capacity", "-c", min=1, help="Maximum confirmed guests"),
    rsvp_deadline: datetime | None = typer.Option(None, "--deadline", help="RSVP deadline, ISO format"),
    location: str | None = typer.Option(None, "--location", "-l", help="Where the event takes place"),
):
    """Create an event."""
    event = asyncio.run(
        SqlEventCreateWriteModel().create_event(
            title=title,
            date=date,
            max_capacity=max_capacity,
            rsvp_deadline=rsvp_deadline,
            location=location,
        )
    )
    typer.secho("Event created!", fg=typer.colors.GREEN)
    typer.secho(f"  ID: {event.id}", fg=typer.colors.CYAN)
    typer.secho(f"  Capacity: {event.max_capacity}", fg=typer.colors.BLUE)


@app.command()
def invite_guest(
    event_id: UUID = typer.Argument(..., help="Event to invite the guest to"),
    email: str = typer.Option(..., "--email", "-e", help="Guest email"),
    name: str = typer.Option(..., "--name", "-n", help="Guest name"),
    title: str | None = typer.Option(None, "--title", help="Honorific, e.g. Dr."),
):
    """Invite a guest and email them their invite code."""
    write_model = SqlGuestInviteWriteModel(notifier=get_notifier())
    guest = asyncio.run(
        _with_notifications(
            write_model.invite_guest(event_id=event_id, name=name, email=email, title=title)
        )
    )
    typer.secho("Guest invited!", fg=typer.colors.GREEN)
    typer.secho(f"  Invite code: {guest.invite_code}", fg=typer.colors.CYAN)
    typer.secho(f"  RSVP URL: {get_notifier().rsvp_url(guest.invite_code)}", fg=typer.colors.CYAN)


@app.command()
def rsvp(
    invite_code: str = typer.Argument(..., help="The guest's invite code"),
    status: GuestStatus = typer.Argument(..., help="YES, NO or MAYBE"),
):
    """Answer an invitation on behalf of a guest."""
    write_model = SqlRSVPWriteModel(notifier=get_notifier())
    try:
        guest = asyncio.run(
            _with_notifications(write_model.submit_rsvp(invite_code=invite_code, status=status))
        )
    except GuestNotFoundError:
        typer.secho(f"Invalid invite code: {invite_code}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except (CapacityExceededError, RSVPDeadlinePassedError) as e:
        typer.secho(f"RSVP rejected: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=2)

    typer.secho(f"{guest.name} answered {guest.status.value}", fg=typer.colors.GREEN)


@app.command()
def remove_guest(guest_id: UUID = typer.Argument(..., help="Guest to remove")):
    """Remove a guest from their event and send a cancellation email."""
    write_model = SqlGuestRemovalWriteModel(notifier=get_notifier())
    try:
        guest = asyncio.run(_with_notifications(write_model.remove_guest(guest_id)))
    except GuestNotFoundError:
        typer.secho(f"Guest not found: {guest_id}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.secho(f"Removed {guest.name} <{guest.email}>", fg=typer.colors.GREEN)


@app.command()
def event_summary(event_id: UUID = typer.Argument(..., help="Event to summarize")):
    """Show an event's guest list and how many seats are left."""
    summary = asyncio.run(SqlEventReadModel().get_event_summary(event_id))
    if summary is None:
        typer.secho(f"Event not found: {event_id}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    event = summary.event
    color = typer.colors.RED if summary.is_full else typer.colors.GREEN
    typer.secho(f"{event.title} ({event.date:%Y-%m-%d %H:%M})", fg=typer.colors.BLUE)
    typer.secho(f"  Confirmed: {summary.total_yes}/{event.max_capacity}", fg=color)
    for guest in summary.guests:
        typer.echo(f"  [{guest.status.value:>7}] {guest.name} <{guest.email}> {guest.invite_code}")


if __name__ == "__main__":
    app()
