"""
Analysis Store

In-memory list of completed medical analyses, newest first.
Only successful analyses are recorded.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ashwini.models.schemas import HistoryEntry, MedicalResult


class AnalysisStore:
    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []

    def add(self, report_type: str, analysis: MedicalResult) -> HistoryEntry:
        entry = HistoryEntry(
            report_type=report_type,
            analysis=analysis,
            created_at=datetime.now(timezone.utc),
        )
        self._entries.insert(0, entry)
        return entry

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()


analysis_store = AnalysisStore()
