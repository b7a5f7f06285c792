"""Instructor availability commands."""

from datetime import datetime

import click

from ..errors import GymSynergyError
from ..models.instructor import DEFAULT_SLOT_END, DEFAULT_SLOT_START, TimeSlot, Weekday
from ..services.availability import AvailabilityService
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized

WEEKDAYS = [day.value for day in Weekday]


@click.group()
def availability():
    """Manage an instructor's weekly availability."""
    pass


@availability.command("show")
@click.argument("instructor_id")
@click.option("--date", "on_date", help="Check slots against bookings on YYYY-MM-DD")
@click.pass_context
@async_command
async def show(ctx: click.Context, instructor_id: str, on_date: str | None):
    """Show weekly slots, or free/taken slots for one date."""
    ensure_initialized(ctx)
    service = AvailabilityService()

    try:
        if on_date:
            day = datetime.strptime(on_date, "%Y-%m-%d").date()
            slots = await service.free_slots(instructor_id, day)
            click.echo(click.style(f"{Weekday.from_date(day).value.title()} {day}", bold=True))
            if not slots:
                echo_info("No slots configured for this day.")
            for slot in slots:
                if slot.available:
                    state = click.style("free", fg="green")
                else:
                    state = click.style("booked", fg="red")
                click.echo(f"  {slot.start}-{slot.end}  {state}")
            return

        weekly = await service.get_availability(instructor_id)
    except GymSynergyError as e:
        echo_error(e.message)
        ctx.exit(1)
    except ValueError:
        echo_error(f"Invalid date: {on_date}")
        ctx.exit(1)

    for day in Weekday:
        day_slots = weekly.for_day(day)
        times = ", ".join(f"{s.start}-{s.end}" for s in day_slots) or "-"
        click.echo(f"{day.value.title():<10} {times}")


@availability.command("add")
@click.argument("instructor_id")
@click.argument("day", type=click.Choice(WEEKDAYS, case_sensitive=False))
@click.option("--start", default=DEFAULT_SLOT_START, help="Start time (HH:MM)")
@click.option("--end", default=DEFAULT_SLOT_END, help="End time (HH:MM)")
@click.pass_context
@async_command
async def add(ctx: click.Context, instructor_id: str, day: str, start: str, end: str):
    """Add a time slot to a weekday."""
    ensure_initialized(ctx)
    service = AvailabilityService()

    try:
        weekly = await service.get_availability(instructor_id)
        weekly.add_slot(Weekday.parse(day), TimeSlot(start=start, end=end))
        await service.set_availability(instructor_id, weekly)
    except GymSynergyError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Added {start}-{end} on {day.lower()}")


@availability.command("clear")
@click.argument("instructor_id")
@click.argument("day", type=click.Choice(WEEKDAYS, case_sensitive=False))
@click.option("--index", type=int, help="Remove only the slot at this position (0-based)")
@click.pass_context
@async_command
async def clear(ctx: click.Context, instructor_id: str, day: str, index: int | None):
    """Remove one slot or all slots from a weekday."""
    ensure_initialized(ctx)
    service = AvailabilityService()
    weekday = Weekday.parse(day)

    try:
        weekly = await service.get_availability(instructor_id)
        if index is None:
            weekly.clear(weekday)
        else:
            weekly.remove_slot(weekday, index)
        await service.set_availability(instructor_id, weekly)
    except GymSynergyError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Updated {weekday.value}")
