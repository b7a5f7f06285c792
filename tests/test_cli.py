"""Tests for the command-line interface."""

import asyncio
from datetime import date, timedelta

import pytest
from click.testing import CliRunner

from gymsynergy import config
from gymsynergy.cli import main
from gymsynergy.clients.questionnaire import SignupQuestionnaire
from gymsynergy.db import get_db_path
from gymsynergy.db.repositories import SessionRepository, UserRepository
from gymsynergy.models.session import Session
from gymsynergy.services.accounts import AccountService


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def initialized(runner, data_dir):
    result = runner.invoke(main, ["init"])
    assert result.exit_code == 0, result.output
    return get_db_path(data_dir)


@pytest.fixture
def instructor(initialized, email_service, instructor_form):
    return asyncio.run(
        AccountService(initialized, email_service).signup(instructor_form, send_welcome=False)
    )


class TestInit:
    def test_init_creates_database_and_plans(self, runner, data_dir):
        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert (data_dir / "gymsynergy.db").exists()
        assert "Subscription plans seeded (3 new)" in result.output

    def test_init_is_repeatable(self, runner, initialized):
        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert "(0 new)" in result.output

    def test_commands_require_init(self, runner, data_dir):
        result = runner.invoke(main, ["users", "list"])

        assert result.exit_code == 1
        assert "Database not initialized" in result.output


class TestUsersCommands:
    def test_list_users(self, runner, instructor):
        result = runner.invoke(main, ["users", "list", "--role", "instructor"])

        assert result.exit_code == 0
        assert "coach@example.com" in result.output

    def test_show_instructor(self, runner, instructor):
        result = runner.invoke(main, ["users", "show", instructor.id])

        assert "Specialties: strength, mobility" in result.output

    def test_create_from_questionnaire(self, runner, initialized, client_form, monkeypatch):
        async def fake_collect(self, role=None):
            return client_form

        monkeypatch.setattr(SignupQuestionnaire, "collect_form", fake_collect)

        result = runner.invoke(main, ["users", "create", "--role", "client"])

        assert result.exit_code == 0, result.output
        assert "Created client Jane Doe" in result.output

    def test_delete_requires_typed_confirmation(self, runner, instructor, initialized):
        result = runner.invoke(main, ["users", "delete", instructor.id], input="delete\n")

        assert result.exit_code == 1
        assert asyncio.run(UserRepository(initialized).get(instructor.id)) is not None

    def test_delete(self, runner, instructor, initialized):
        result = runner.invoke(main, ["users", "delete", instructor.id], input="DELETE\n")

        assert result.exit_code == 0
        assert asyncio.run(UserRepository(initialized).get(instructor.id)) is None


class TestAvailabilityCommands:
    def test_add_and_show(self, runner, instructor):
        runner.invoke(
            main,
            ["availability", "add", instructor.id, "Monday", "--start", "09:00", "--end", "10:00"],
        )

        result = runner.invoke(main, ["availability", "show", instructor.id])

        assert result.exit_code == 0
        assert "Monday     09:00-10:00" in result.output

    def test_show_for_date(self, runner, instructor):
        runner.invoke(main, ["availability", "add", instructor.id, "monday"])

        result = runner.invoke(main, ["availability", "show", instructor.id, "--date", "2024-06-03"])

        assert "09:00-17:00" in result.output
        assert "free" in result.output

    def test_clear_one_slot(self, runner, instructor):
        runner.invoke(main, ["availability", "add", instructor.id, "friday", "--start", "08:00"])
        runner.invoke(main, ["availability", "add", instructor.id, "friday", "--start", "12:00"])

        runner.invoke(main, ["availability", "clear", instructor.id, "friday", "--index", "0"])
        result = runner.invoke(main, ["availability", "show", instructor.id])

        assert "12:00-17:00" in result.output
        assert "08:00-17:00" not in result.output

    def test_unknown_instructor(self, runner, initialized):
        result = runner.invoke(main, ["availability", "show", "missing"])

        assert result.exit_code == 1
        assert "Instructor not found" in result.output

    def test_bad_date(self, runner, instructor):
        result = runner.invoke(main, ["availability", "show", instructor.id, "--date", "June 3"])

        assert result.exit_code == 1
        assert "Invalid date" in result.output


class TestSessionsCommands:
    def test_no_sessions(self, runner, instructor):
        result = runner.invoke(main, ["sessions", "list", instructor.id])
        assert "No sessions found." in result.output

    def test_unknown_session(self, runner, initialized):
        result = runner.invoke(main, ["sessions", "status", "42", "completed"])

        assert result.exit_code == 1
        assert "Session 42 not found" in result.output

    def test_upcoming(self, runner, instructor, initialized):
        repo = SessionRepository(initialized)
        for day in (date.today() - timedelta(days=7), date.today() + timedelta(days=1)):
            asyncio.run(
                repo.create(
                    Session(
                        instructor_id=instructor.id,
                        client_id="c1",
                        client_name="Jane Doe",
                        date=day,
                        start_time="09:00",
                        end_time="10:00",
                    )
                )
            )

        result = runner.invoke(main, ["sessions", "upcoming", instructor.id])

        assert result.exit_code == 0
        assert (date.today() + timedelta(days=1)).isoformat() in result.output
        assert (date.today() - timedelta(days=7)).isoformat() not in result.output
        assert "Jane Doe" in result.output

    def test_no_upcoming(self, runner, instructor):
        result = runner.invoke(main, ["sessions", "upcoming", instructor.id])
        assert "No upcoming sessions." in result.output
