"""Integration tests for end-to-end workflows."""

import re
from datetime import date

import pytest
from fintrack.cli.main import cli


def _created_id(output: str, noun: str) -> int:
    match = re.search(rf"Created {noun} (\d+)", output)
    assert match, output
    return int(match.group(1))


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: user, categories, budget, expenses, alerts, notifications."""
    db = ["--db-path", temp_db.database_path]

    # Step 1: Register a user with default categories
    result = cli_runner.invoke(cli, [*db, "user", "create", "kim@example.com", "--first-name", "Kim"])
    assert result.exit_code == 0
    user = [*db, "--user", "kim@example.com"]

    # Step 2: Create a monthly budget
    result = cli_runner.invoke(
        cli,
        [*user, "budget", "create", "--category", "Food & Dining", "--amount", "500", "--start-date", "2024-01-01"],
    )
    assert result.exit_code == 0, result.output
    assert "Created monthly budget" in result.output
    assert "2024-01-01 to 2024-01-31" in result.output
    budget_id = int(re.search(r"budget (\d+) for", result.output).group(1))

    # Step 3: Record expenses
    for amount, day in [("100", "2024-01-05"), ("$450.00", "2024-01-20")]:
        result = cli_runner.invoke(
            cli,
            [*user, "expense", "add", "--category", "Food & Dining", "--amount", amount,
             "--description", "Food", "--date", day],
        )
        assert result.exit_code == 0, result.output

    # Step 4: Check progress
    result = cli_runner.invoke(cli, [*user, "budget", "progress", str(budget_id)])
    assert result.exit_code == 0
    assert "Spent: $550.00" in result.output
    assert "Remaining: $-50.00" in result.output
    assert "Used: 110.0%" in result.output
    assert "exceeded" in result.output

    # Step 5: Run alert check
    result = cli_runner.invoke(cli, [*user, "alerts", "check"])
    assert result.exit_code == 0
    assert "Budget Exceeded!" in result.output
    assert "You have exceeded your Food & Dining budget of 500.00. Total spent: 550.00" in result.output

    # Step 6: Read notifications
    result = cli_runner.invoke(cli, [*user, "notification", "list", "--type", "budget_exceeded"])
    assert result.exit_code == 0
    assert "Budget Exceeded!" in result.output
    notification_id = int(re.search(r"\*\s+(\d+)", result.output).group(1))

    result = cli_runner.invoke(cli, [*user, "notification", "read", str(notification_id)])
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, [*user, "notification", "list", "--unread", "--type", "budget_exceeded"])
    assert "No notifications found." in result.output


def test_yearly_budget_commands(cli_runner, cli_args, sample_categories):
    result = cli_runner.invoke(
        cli,
        [*cli_args, "budget", "create", "--category", "Housing", "--amount", "2400",
         "--period", "yearly", "--start-date", "2024-06-15"],
    )
    assert result.exit_code == 0, result.output
    assert "2024-01-01 to 2024-12-31" in result.output
    assert "Created 12 monthly budgets" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "budget", "yearly-summary", "--year", "2024"])
    assert result.exit_code == 0
    assert "Yearly budgets:" in result.output
    assert "February:" in result.output
    assert "$200.00" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "budget", "list", "--period", "yearly"])
    assert result.exit_code == 0
    assert "$2,400.00" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "budget", "caps"])
    assert result.exit_code == 0
    assert result.output.count("Housing") == 13


def test_budget_create_invalid_amount(cli_runner, cli_args, sample_categories):
    result = cli_runner.invoke(cli, [*cli_args, "budget", "create", "--category", "Food", "--amount", "-5"])

    assert result.exit_code == 1
    assert "Amount must be positive" in result.output


def test_budget_update_and_alert_settings(cli_runner, cli_args, budget_service, sample_user, sample_categories):
    budget = budget_service.create_budget(sample_user.id, sample_categories["Food"], "500", "monthly", date(2024, 1, 1)).budget

    result = cli_runner.invoke(cli, [*cli_args, "budget", "update", str(budget.id), "--amount", "750"])
    assert result.exit_code == 0
    assert "$750.00" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "budget", "alert-settings", str(budget.id), "--threshold", "90", "--disable"])
    assert result.exit_code == 0
    assert "alerts disabled, threshold 90" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "budget", "alert-settings", str(budget.id), "--threshold", "150"])
    assert result.exit_code == 1
    assert "Alert threshold must be between 0 and 100" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "budget", "delete", str(budget.id)])
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, [*cli_args, "budget", "progress", str(budget.id)])
    assert result.exit_code == 1
    assert f"Budget {budget.id} not found" in result.output


def test_budget_comparison(cli_runner, cli_args, budget_service, expense_service, sample_user, sample_categories):
    food = sample_categories["Food"]
    budget_service.create_budget(sample_user.id, food, "100", "monthly", date(2024, 1, 1))
    expense_service.create_expense(sample_user.id, food, "40", "Lunch", date(2024, 1, 3))

    result = cli_runner.invoke(
        cli, [*cli_args, "budget", "comparison", "--start-date", "2024-01-01", "--end-date", "2024-01-31"]
    )

    assert result.exit_code == 0
    assert "Food" in result.output
    assert "40.0%" in result.output


def test_expense_commands(cli_runner, cli_args, sample_categories):
    result = cli_runner.invoke(
        cli,
        [*cli_args, "expense", "add", "--category", "Food", "--amount", "12.50",
         "--description", "Lunch", "--date", "2024-01-05"],
    )
    assert result.exit_code == 0
    expense_id = _created_id(result.output, "expense")

    result = cli_runner.invoke(cli, [*cli_args, "expense", "update", str(expense_id), "--amount", "15"])
    assert result.exit_code == 0

    result = cli_runner.invoke(
        cli, [*cli_args, "expense", "list", "--start-date", "2024-01-01", "--end-date", "2024-01-31"]
    )
    assert result.exit_code == 0
    assert "Lunch" in result.output
    assert "$15.00" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "expense", "delete", str(expense_id)])
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, [*cli_args, "expense", "list"])
    assert "No expenses found." in result.output


def test_expense_add_unknown_category(cli_runner, cli_args):
    result = cli_runner.invoke(
        cli, [*cli_args, "expense", "add", "--category", "Nope", "--amount", "1", "--description", "x"]
    )

    assert result.exit_code == 1
    assert "Category 'Nope' not found" in result.output


def test_expense_add_invalid_amount(cli_runner, cli_args, sample_categories):
    result = cli_runner.invoke(
        cli, [*cli_args, "expense", "add", "--category", "Food", "--amount", "lots", "--description", "x"]
    )

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_recurring_commands(cli_runner, cli_args, sample_categories):
    result = cli_runner.invoke(
        cli,
        [*cli_args, "expense", "add", "--category", "Housing", "--amount", "1200", "--description", "Rent",
         "--date", "2023-12-15", "--recurring", "monthly"],
    )
    assert result.exit_code == 0
    assert "Repeats: monthly, next on 2024-01-15" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "recurring", "process", "--date", "2024-01-15"])
    assert result.exit_code == 0
    assert "Processed 1 recurring expense(s)." in result.output

    result = cli_runner.invoke(cli, [*cli_args, "recurring", "process", "--date", "2024-01-15"])
    assert "Processed 0 recurring expense(s)." in result.output

    result = cli_runner.invoke(cli, [*cli_args, "recurring", "list"])
    assert result.exit_code == 0
    assert "next: 2024-02-15" in result.output


def test_analytics_commands(cli_runner, cli_args, expense_service, sample_user, sample_categories):
    expense_service.create_expense(sample_user.id, sample_categories["Food"], "30", "Lunch", date(2024, 1, 3))
    expense_service.create_expense(sample_user.id, sample_categories["Transport"], "10", "Bus", date(2024, 1, 4))
    expense_service.create_expense(sample_user.id, sample_categories["Food"], "10", "Snack", date(2024, 1, 5))
    period = ["--start-date", "2024-01-01", "--end-date", "2024-01-31"]

    result = cli_runner.invoke(cli, [*cli_args, "analytics", "summary", *period])
    assert result.exit_code == 0
    assert "$50.00" in result.output
    assert "3 expense(s)" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "analytics", "patterns", *period])
    assert result.exit_code == 0
    assert "$20.00" in result.output

    result = cli_runner.invoke(cli, [*cli_args, "analytics", "budget-analysis", *period])
    assert result.exit_code == 0
    assert "No budgets between 2024-01-01 and 2024-01-31." in result.output

    result = cli_runner.invoke(cli, [*cli_args, "analytics", "trend", "--months", "0"])
    assert result.exit_code == 1


def test_analytics_rejects_two_periods(cli_runner, cli_args):
    result = cli_runner.invoke(cli, [*cli_args, "analytics", "summary", "--this-month", "--last-month"])

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_dashboard_command(cli_runner, cli_args, expense_service, sample_user, sample_categories):
    expense_service.create_expense(sample_user.id, sample_categories["Food"], "8", "Breakfast", date.today())

    result = cli_runner.invoke(cli, [*cli_args, "dashboard"])

    assert result.exit_code == 0
    assert "Total expenses:    $8.00" in result.output
    assert "Breakfast" in result.output


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "budget" in result.output
