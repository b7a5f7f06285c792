"""Interactive signup questionnaire for the command line."""

import questionary
from questionary import Style

from ..models.client import Demographic
from ..models.instructor import InstructorProfile
from ..models.user import UserRole
from ..services.accounts import SignupForm

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _is_number(value: str) -> bool | str:
    try:
        return float(value) > 0 or "Must be greater than zero"
    except ValueError:
        return "Please enter a number"


class SignupQuestionnaire:
    """Collect the fields of the signup page interactively."""

    async def collect_form(self, role: UserRole | None = None) -> SignupForm:
        """Ask for account details and, for clients, demographic details.

        The form is returned as entered; `validate_signup` decides whether
        it is acceptable.
        """
        if role is None:
            role = await questionary.select(
                "Account type",
                choices=[
                    questionary.Choice("Client", UserRole.CLIENT),
                    questionary.Choice("Instructor", UserRole.INSTRUCTOR),
                ],
                style=custom_style,
            ).ask_async()

        first_name = await questionary.text("First name", style=custom_style).ask_async()
        last_name = await questionary.text("Last name", style=custom_style).ask_async()
        email = await questionary.text("Email", style=custom_style).ask_async()
        password = await questionary.password("Password", style=custom_style).ask_async()
        confirm_password = await questionary.password(
            "Confirm password", style=custom_style
        ).ask_async()

        form = SignupForm(
            email=email or "",
            password=password or "",
            confirm_password=confirm_password or "",
            first_name=first_name or "",
            last_name=last_name or "",
            role=role,
        )

        if role == UserRole.INSTRUCTOR:
            form.bio = await questionary.text("Short bio", style=custom_style).ask_async() or ""
            specialties = await questionary.text(
                "Specialties (comma-separated)", style=custom_style
            ).ask_async()
            form.specialties = InstructorProfile.parse_specialties(specialties or "")
            return form

        date_of_birth = await questionary.text(
            "Date of birth (YYYY-MM-DD)", style=custom_style
        ).ask_async()
        gender = await questionary.select(
            "Gender",
            choices=["male", "female", "other"],
            style=custom_style,
        ).ask_async()
        height = await questionary.text(
            "Height (cm)", validate=_is_number, style=custom_style
        ).ask_async()
        weight = await questionary.text(
            "Weight (kg)", validate=_is_number, style=custom_style
        ).ask_async()

        form.demographic = Demographic(
            date_of_birth=date_of_birth or "",
            gender=gender or "",
            height=float(height) if height else None,
            weight=float(weight) if weight else None,
        )
        return form
