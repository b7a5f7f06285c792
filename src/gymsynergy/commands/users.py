"""User account management commands."""

import click

from ..clients.questionnaire import SignupQuestionnaire
from ..db.repositories import ClientProfileRepository, InstructorProfileRepository, UserRepository
from ..errors import GymSynergyError
from ..models.user import UserRole
from ..services.accounts import DELETE_CONFIRMATION, AccountService
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)


@click.group()
def users():
    """Manage client and instructor accounts."""
    pass


@users.command("list")
@click.option(
    "--role", type=click.Choice([r.value for r in UserRole]), help="Only show one account type"
)
@click.pass_context
@async_command
async def list_users(ctx: click.Context, role: str | None):
    """List registered accounts."""
    ensure_initialized(ctx)

    accounts = await UserRepository().list_all(role=role)
    if not accounts:
        echo_info("No users found.")
        return

    rows = [
        [
            user.id,
            user.display_name,
            user.email,
            user.role.value,
            user.created_at.strftime("%Y-%m-%d") if user.created_at else "-",
        ]
        for user in accounts
    ]
    click.echo(format_table(["ID", "Name", "Email", "Role", "Created"], rows))


@users.command("show")
@click.argument("user_id")
@click.pass_context
@async_command
async def show_user(ctx: click.Context, user_id: str):
    """Show an account and its role profile."""
    ensure_initialized(ctx)

    user = await UserRepository().get(user_id)
    if not user:
        echo_error(f"User {user_id} not found")
        ctx.exit(1)

    click.echo()
    click.echo(click.style(user.display_name, bold=True) + f" <{user.email}>")
    click.echo(f"Role: {user.role.value}")
    if user.phone:
        click.echo(f"Phone: {user.phone}")

    if user.is_instructor:
        profile = await InstructorProfileRepository().get(user_id)
        if profile:
            click.echo(f"Bio: {profile.bio or '-'}")
            click.echo(f"Specialties: {', '.join(profile.specialties) or '-'}")
            click.echo(f"Verified: {'yes' if profile.verified else 'no'}")
            click.echo(f"Session fee: {profile.fees.session_fee:.2f}")
    else:
        profile = await ClientProfileRepository().get(user_id)
        if profile:
            demographic = profile.demographic
            click.echo(f"Height: {demographic.height or '-'} cm")
            click.echo(f"Weight: {demographic.weight or '-'} kg")
            click.echo(f"BMI: {profile.health.bmi or '-'}")
            click.echo(f"Subscription: {profile.subscription_status.value}")


@users.command("create")
@click.option("--role", type=click.Choice([r.value for r in UserRole]), help="Account type")
@click.option("--send-email/--no-send-email", default=False, help="Send the welcome email")
@click.pass_context
@async_command
async def create_user(ctx: click.Context, role: str | None, send_email: bool):
    """Create an account interactively."""
    ensure_initialized(ctx)

    form = await SignupQuestionnaire().collect_form(UserRole(role) if role else None)

    try:
        user = await AccountService().signup(form, send_welcome=send_email)
    except GymSynergyError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Created {user.role.value} {user.display_name} ({user.id})")


@users.command("delete")
@click.argument("user_id")
@click.pass_context
@async_command
async def delete_user(ctx: click.Context, user_id: str):
    """Delete an account after typing DELETE to confirm."""
    ensure_initialized(ctx)

    confirmation = click.prompt(f'Type "{DELETE_CONFIRMATION}" to delete {user_id}')
    try:
        await AccountService().delete_account(user_id, confirmation)
    except GymSynergyError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Deleted user {user_id}")
