from __future__ import annotations

from typing import Protocol, runtime_checkable

from estate.models.records import RedemptionRecord


@runtime_checkable
class RecordSink(Protocol):
    def emit(self, record: RedemptionRecord) -> None: ...

    def retract(self, record: RedemptionRecord) -> None: ...


__all__ = ["RecordSink"]
