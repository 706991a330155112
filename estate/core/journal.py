"""Reverse-action journal that makes a redemption all-or-nothing.

Every state mutation a redemption performs is recorded together with the
action that undoes it. If the redemption raises, the recorded actions run in
reverse order. A redemption that starts while another is still open (a
recipient calling back in during a payment) runs as a nested transaction: on
success its entries fold into the enclosing one, so a later failure of the
outer redemption also undoes the inner one.

A reverse action that raises does not stop the others; the transaction then
fails with ``RollbackIncomplete`` chained to the original error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from estate.errors import RollbackIncomplete

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class JournalEntry:
    description: str
    reverse: Callable[[], None]


class SettlementJournal:
    def __init__(self) -> None:
        self._open: list[list[JournalEntry]] = []

    @property
    def depth(self) -> int:
        return len(self._open)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        entries: list[JournalEntry] = []
        self._open.append(entries)
        try:
            yield
        except BaseException as exc:
            self._open.pop()
            failed = self._unwind(entries)
            if failed:
                raise RollbackIncomplete(failed) from exc
            raise
        self._open.pop()
        if self._open:
            self._open[-1].extend(entries)

    def record(self, description: str, reverse: Callable[[], None]) -> None:
        if not self._open:
            raise RuntimeError("journal entry recorded outside a transaction")
        self._open[-1].append(JournalEntry(description=description, reverse=reverse))

    def _unwind(self, entries: list[JournalEntry]) -> list[str]:
        failed: list[str] = []
        for entry in reversed(entries):
            try:
                entry.reverse()
            except Exception:
                logger.exception("failed to reverse journal entry: %s", entry.description)
                failed.append(entry.description)
            else:
                logger.debug("reversed %s", entry.description)
        return failed


__all__ = ["JournalEntry", "SettlementJournal"]
