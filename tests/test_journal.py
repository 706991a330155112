from __future__ import annotations

import pytest

from estate.core.journal import SettlementJournal
from estate.errors import RollbackIncomplete


def test_failure_unwinds_in_reverse_order() -> None:
    journal = SettlementJournal()
    undone: list[str] = []

    with pytest.raises(RuntimeError), journal.transaction():
        journal.record("first", lambda: undone.append("first"))
        journal.record("second", lambda: undone.append("second"))
        raise RuntimeError("boom")

    assert undone == ["second", "first"]
    assert journal.depth == 0


def test_success_discards_entries() -> None:
    journal = SettlementJournal()
    undone: list[str] = []

    with journal.transaction():
        journal.record("kept", lambda: undone.append("kept"))

    assert undone == []


def test_nested_commit_folds_into_outer_rollback() -> None:
    journal = SettlementJournal()
    undone: list[str] = []

    with pytest.raises(ValueError), journal.transaction():
        journal.record("outer", lambda: undone.append("outer"))
        with journal.transaction():
            assert journal.depth == 2
            journal.record("inner", lambda: undone.append("inner"))
        raise ValueError("outer fails later")

    assert undone == ["inner", "outer"]


def test_nested_failure_leaves_outer_intact() -> None:
    journal = SettlementJournal()
    undone: list[str] = []

    with journal.transaction():
        journal.record("outer", lambda: undone.append("outer"))
        with pytest.raises(KeyError), journal.transaction():
            journal.record("inner", lambda: undone.append("inner"))
            raise KeyError("inner")

    assert undone == ["inner"]


def test_failing_reverse_action_surfaces_after_unwind() -> None:
    journal = SettlementJournal()
    undone: list[str] = []

    def broken() -> None:
        raise OSError("cannot undo")

    with pytest.raises(RollbackIncomplete, match="broken") as excinfo, journal.transaction():
        journal.record("first", lambda: undone.append("first"))
        journal.record("broken", broken)
        raise RuntimeError("boom")

    assert undone == ["first"]
    assert excinfo.value.descriptions == ["broken"]
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert journal.depth == 0


def test_record_outside_transaction_is_an_error() -> None:
    with pytest.raises(RuntimeError, match="outside a transaction"):
        SettlementJournal().record("orphan", lambda: None)
