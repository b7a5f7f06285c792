"""Initialize database command."""

import click

from .. import config
from ..db import get_db_path, init_db, seed_subscription_plans
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the GymSynergy database.

    Creates the data directory, the SQLite schema and the default
    subscription plans. Safe to run more than once.
    """
    db_path = get_db_path(config.DATA_DIR)
    echo_info(f"Initializing GymSynergy in {config.DATA_DIR}")

    await init_db(db_path)
    echo_success("Database initialized")

    count = await seed_subscription_plans(db_path)
    echo_success(f"Subscription plans seeded ({count} new)")

    click.echo()
    click.echo("Next steps:")
    click.echo("  gymsynergy users create      # Create a client or instructor")
    click.echo("  gymsynergy serve             # Start the REST API")
