"""CLI entry point for GymSynergy."""

import click

from . import __version__
from .commands import availability, init, serve, sessions, users
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="gymsynergy")
@click.option("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, ...)")
def main(log_level: str | None):
    """GymSynergy: fitness coaching marketplace backend.

    Example usage:

        # Create the database and default subscription plans
        gymsynergy init

        # Add an account and give an instructor some availability
        gymsynergy users create --role instructor
        gymsynergy availability add <instructor-id> monday --start 09:00 --end 10:00

        # Start the REST API
        gymsynergy serve
    """
    configure_logging(log_level)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(users)
main.add_command(sessions)
main.add_command(availability)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
