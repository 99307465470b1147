"""Tests for user service and commands."""

import pytest
from fintrack.cli.main import cli
from fintrack.domain.category import DEFAULT_CATEGORIES
from fintrack.domain.errors import ConflictError, NotFoundError, ValidationError


def test_register_user_seeds_default_categories(user_service, category_service):
    user_id = user_service.register_user("  Alex@Example.com ", "Alex", "Kim")

    user = user_service.get_user(user_id)
    assert user.email == "alex@example.com"
    assert user.role == "user"
    assert len(category_service.list_categories(user_id)) == len(DEFAULT_CATEGORIES)
    assert {c.name for c in category_service.list_categories(user_id, category_type="income")} == {
        "Salary", "Investments", "Freelance", "Gifts"
    }


def test_register_duplicate_email(user_service, sample_user):
    with pytest.raises(ConflictError, match="already exists"):
        user_service.register_user("JANE@example.com", "Jane", "Again")


def test_register_invalid_email(user_service):
    with pytest.raises(ValidationError, match="Invalid email"):
        user_service.register_user("not-an-email", "No", "Body")


def test_register_unknown_role(user_service):
    with pytest.raises(ValidationError, match="Unknown role"):
        user_service.register_user("root@example.com", "Root", "User", role="superuser")


def test_resolve_user_by_id_or_email(user_service, sample_user):
    assert user_service.resolve_user(sample_user.id) == sample_user
    assert user_service.resolve_user(str(sample_user.id)) == sample_user
    assert user_service.resolve_user("JANE@example.com").id == sample_user.id


def test_resolve_unknown_user(user_service):
    with pytest.raises(NotFoundError, match="User 'ghost@example.com' not found"):
        user_service.resolve_user("ghost@example.com")


def test_user_create_command(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "user", "create", "kim@example.com", "--first-name", "Kim"],
    )

    assert result.exit_code == 0
    assert "Created user 'kim@example.com'" in result.output


def test_user_create_command_duplicate(cli_runner, temp_db, sample_user):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "user", "create", sample_user.email])

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_user_list_command(cli_runner, temp_db, sample_user):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "user", "list"])

    assert result.exit_code == 0
    assert "jane@example.com" in result.output
    assert "Jane Doe" in result.output


def test_command_without_user(cli_runner, temp_db, monkeypatch):
    monkeypatch.delenv("FINTRACK_USER", raising=False)

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "category", "list"])

    assert result.exit_code == 1
    assert "No user selected" in result.output


def test_command_with_unknown_user(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--user", "ghost@example.com", "category", "list"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_update_profile(user_service, sample_user):
    updated = user_service.update_profile(sample_user.id, last_name="Smith", email=" Jane.Smith@Example.com ")

    assert updated.first_name == "Jane"
    assert updated.last_name == "Smith"
    assert updated.email == "jane.smith@example.com"
    assert user_service.resolve_user("jane.smith@example.com").id == sample_user.id


def test_update_profile_keeps_own_email(user_service, sample_user):
    updated = user_service.update_profile(sample_user.id, email="JANE@example.com", first_name="Janet")

    assert updated.email == "jane@example.com"
    assert updated.first_name == "Janet"


def test_update_profile_email_taken(user_service, sample_user, other_user):
    with pytest.raises(ConflictError, match="already exists"):
        user_service.update_profile(sample_user.id, email=other_user.email)

    assert user_service.get_user(sample_user.id).email == "jane@example.com"


def test_update_profile_invalid_email(user_service, sample_user):
    with pytest.raises(ValidationError, match="Invalid email"):
        user_service.update_profile(sample_user.id, email="nobody")


def test_update_profile_unknown_user(user_service):
    with pytest.raises(NotFoundError, match="User 999 not found"):
        user_service.update_profile(999, first_name="Ghost")


def test_user_update_command(cli_runner, cli_args):
    result = cli_runner.invoke(cli, [*cli_args, "user", "update", "--last-name", "Smith"])

    assert result.exit_code == 0, result.output
    assert "jane@example.com (Jane Smith)" in result.output


def test_user_update_command_email_taken(cli_runner, cli_args, other_user):
    result = cli_runner.invoke(cli, [*cli_args, "user", "update", "--email", other_user.email])

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_user_update_command_needs_a_field(cli_runner, cli_args):
    result = cli_runner.invoke(cli, [*cli_args, "user", "update"])

    assert result.exit_code == 1
    assert "Nothing to update" in result.output
