# tests/test_cli.py
"""
Tests for the Statecraft command-line interface (CLI).

Scope
-----
These tests verify the interaction layer provided by Typer:
1.  **Command Registration**: `order`, `automaton` and `edit` show up in `--help`.
2.  **Order runs**: collaborator switches drive the transitions deterministically.
3.  **Recognizer runs**: verdicts are rendered per word.
4.  **Edit scripts**: undo/redo are applied and bad scripts exit with code 1.

We use `typer.testing.CliRunner` to invoke the app in-process, avoiding the overhead
of spawning subprocesses. Assertions check `result.output`; log lines may be
interleaved there, so we look for substrings rather than parsing it.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from statecraft.cli import app


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Create a fresh CliRunner for each test."""
    return CliRunner()


def test_cli_help_shows_usage(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    assert "Statecraft" in result.output
    for command in ("order", "automaton", "edit"):
        assert command in result.output


def test_order_happy_path_reaches_delivered(runner: CliRunner) -> None:
    result = runner.invoke(app, ["order"])
    assert result.exit_code == 0, f"CLI Failed with Output:\n{result.output}"
    assert "Delivered" in result.output
    assert "Refund calls: 0" in result.output


def test_order_cancel_after_payment_json(runner: CliRunner) -> None:
    """Two process() calls reach Paid; cancel refunds once and the JSON says so."""
    result = runner.invoke(
        app, ["order", "--id", "ORD-042", "--steps", "2", "--cancel", "--json"]
    )
    assert result.exit_code == 0, f"CLI Failed with Output:\n{result.output}"
    assert '"id": "ORD-042"' in result.output
    assert '"state": "Cancelled"' in result.output
    assert '"payment_status": "refunded"' in result.output
    assert '"transition_count": 3' in result.output


def test_order_unavailable_is_cancelled(runner: CliRunner) -> None:
    result = runner.invoke(app, ["order", "--unavailable", "--steps", "1", "--json"])
    assert result.exit_code == 0, result.output
    assert '"state": "Cancelled"' in result.output


def test_order_handles_unexpected_crash(runner: CliRunner) -> None:
    """Unexpected exceptions are caught, reported and mapped to exit code 1."""
    with patch("statecraft.cli.Order") as mock_order:
        mock_order.side_effect = RuntimeError("gateway offline")
        result = runner.invoke(app, ["order"])

    assert result.exit_code == 1, f"Expected crash (1), got {result.exit_code}:\n{result.output}"
    assert "Order Error" in result.output
    assert "gateway offline" in result.output


def test_automaton_reports_verdicts(runner: CliRunner) -> None:
    result = runner.invoke(app, ["automaton", "abc", "cab"])
    assert result.exit_code == 0, result.output
    assert "ACCEPTED" in result.output
    assert "REJECTED" in result.output


def test_edit_script_with_undo(runner: CliRunner) -> None:
    result = runner.invoke(app, ["edit", "insert:Hello", "insert: World", "undo", "undo", "undo"])
    assert result.exit_code == 0, result.output
    assert "nothing to undo" in result.output
    assert "Final text" in result.output


def test_edit_rejects_unknown_operation(runner: CliRunner) -> None:
    result = runner.invoke(app, ["edit", "insert:x", "explode"])
    assert result.exit_code == 1
    assert "Edit Error" in result.output
    assert "unknown operation" in result.output


def test_edit_rejects_bad_selection(runner: CliRunner) -> None:
    result = runner.invoke(app, ["edit", "insert:abc", "select:2:99"])
    assert result.exit_code == 1
    assert "Edit Error" in result.output
