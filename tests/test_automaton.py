"""Tests for the {a, b, c} recognizer."""

from __future__ import annotations

import pytest

from statecraft.automaton.recognizer import Automaton


@pytest.mark.parametrize(  # type: ignore[misc]
    "word,accepted",
    [
        ("abc", True),
        ("aabc", True),
        ("bbac", True),
        ("bc", True),
        ("cab", False),
        ("abab", False),
        ("abx", False),
        ("", False),
    ],
)
def test_recognizer_verdicts(word: str, accepted: bool) -> None:
    assert Automaton().process_input(word) is accepted


def test_staying_in_a_state_leaves_no_record() -> None:
    machine = Automaton()
    assert machine.process_input("aabc")
    pairs = [(r.from_state, r.to_state) for r in machine.history()]
    assert pairs == [("None", "Initial"), ("Initial", "A"), ("A", "B"), ("B", "FinalC")]
    assert machine.current_state == "FinalC"


def test_rejected_symbol_stops_the_run() -> None:
    machine = Automaton()
    assert machine.process_input("cab") is False
    assert machine.input_history() == ("c",)
    assert machine.current_state == "Initial"
    assert len(machine.history()) == 1


def test_input_after_final_state_is_ignored() -> None:
    machine = Automaton()
    assert machine.process_input("acab")
    assert machine.input_history() == ("a", "c")


def test_each_run_starts_fresh() -> None:
    machine = Automaton()
    machine.process_input("abab")
    machine.process_input("bc")
    info = machine.info()
    assert info["input_history"] == ["b", "c"]
    assert info["is_final"] is True
    assert [h["to"] for h in info["state_history"]] == ["Initial", "B", "FinalC"]
