"""Newest-first analysis history persisted as one JSON list."""

from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from meditriage.models import AnalysisRecord, TriageLevel
from meditriage.persistence.protocols import IPersistenceBackend

log = logging.getLogger(__name__)

DEFAULT_SLOT = "analysis_history"
DEFAULT_MAX_RECORDS = 500

_RECORD_LIST = TypeAdapter(list[AnalysisRecord])


class HistoryStore:
    """In-memory history list mirrored to a single persistence slot.

    The list is the unit of persistence: every change rewrites the whole
    slot. Records beyond ``max_records`` are evicted oldest-first; ``0``
    keeps everything.
    """

    def __init__(
        self,
        backend: IPersistenceBackend,
        *,
        slot: str = DEFAULT_SLOT,
        max_records: int = DEFAULT_MAX_RECORDS,
    ) -> None:
        self._backend = backend
        self._slot = slot
        self._max_records = max_records
        self._records: list[AnalysisRecord] = self._load()

    def _load(self) -> list[AnalysisRecord]:
        try:
            raw = self._backend.load(self._slot)
        except KeyError:
            return []
        except Exception as e:
            log.warning("History slot %s unreadable, starting empty: %s", self._slot, e)
            return []
        try:
            return _RECORD_LIST.validate_json(raw)
        except ValidationError as e:
            log.warning("History slot %s is malformed, starting empty: %s", self._slot, e)
            return []

    def _serialize(self) -> str:
        payload = [r.model_dump(mode="json", by_alias=True) for r in self._records]
        return json.dumps(payload, indent=2, ensure_ascii=False)

    @property
    def records(self) -> list[AnalysisRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: AnalysisRecord) -> bool:
        """Prepend *record* and persist the whole list.

        Returns ``False`` when the write failed; the in-memory list is
        updated either way.
        """
        self._records.insert(0, record)
        if self._max_records and len(self._records) > self._max_records:
            evicted = len(self._records) - self._max_records
            del self._records[self._max_records:]
            log.info("History cap %d reached, evicted %d oldest record(s)", self._max_records, evicted)
        try:
            self._backend.save(self._slot, self._serialize())
        except Exception as e:
            log.error("Failed to persist analysis history (record %s kept in memory): %s", record.id, e)
            return False
        log.debug("Persisted %d history record(s) to slot %s", len(self._records), self._slot)
        return True

    def get(self, record_id: str) -> Optional[AnalysisRecord]:
        """Look up a record by id or by a unique id prefix."""
        matches = [r for r in self._records if r.id == record_id]
        if matches:
            return matches[0]
        prefixed = [r for r in self._records if record_id and r.id.startswith(record_id)]
        return prefixed[0] if len(prefixed) == 1 else None

    def filter(
        self,
        triage: Optional[TriageLevel] = None,
        search: Optional[str] = None,
    ) -> list[AnalysisRecord]:
        """Reviewer dashboard filter by triage level and free-text search."""
        results = []
        term = (search or "").lower()
        for record in self._records:
            if triage is not None and TriageLevel.from_label(record.triage_level) != triage:
                continue
            if term:
                haystacks = (
                    (record.conditions or "").lower(),
                    (record.summary_quick or "").lower(),
                    record.patient_age or "",
                )
                if not any(term in h for h in haystacks):
                    continue
            results.append(record)
        return results
