from __future__ import annotations

from dataclasses import dataclass, field

from estate.models.records import RedemptionRecord


@dataclass(slots=True)
class RecordLog:
    """Ordered log of emitted redemption records, as an indexer would see them."""

    records: list[RedemptionRecord] = field(default_factory=list)

    def emit(self, record: RedemptionRecord) -> None:
        self.records.append(record)

    def retract(self, record: RedemptionRecord) -> None:
        # Most recent occurrence only; rollback unwinds in reverse order.
        for index in range(len(self.records) - 1, -1, -1):
            if self.records[index] is record:
                del self.records[index]
                return


__all__ = ["RecordLog"]
