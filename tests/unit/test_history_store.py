"""Tests for the newest-first analysis history store."""

from __future__ import annotations

import json
import logging

import pytest

from meditriage.history.store import DEFAULT_SLOT, HistoryStore
from meditriage.models import AnalysisRecord, TriageLevel
from tests.fakes.fake_persistence import FailingPersistenceBackend, FakePersistenceBackend


def _record(record_id: str, **overrides: str) -> AnalysisRecord:
    fields = {
        "id": record_id,
        "created_at": "2025-01-01T00:00:00+00:00",
        "markdown": f"## Summary\nrecord {record_id}",
    }
    fields.update(overrides)
    return AnalysisRecord(**fields)


class TestLoading:
    def test_missing_slot_is_empty(self, fake_backend: FakePersistenceBackend) -> None:
        assert len(HistoryStore(fake_backend)) == 0

    def test_loads_camel_case_list(self) -> None:
        raw = json.dumps([
            {
                "id": "r1",
                "createdAt": "2025-01-01T00:00:00Z",
                "patientAge": "40",
                "triageLevel": "See a Doctor Soon",
                "summaryQuick": "Cough",
                "markdown": "## Summary\nCough",
            }
        ])
        store = HistoryStore(FakePersistenceBackend({DEFAULT_SLOT: raw}))
        assert store.records[0].patient_age == "40"
        assert store.records[0].triage_level == "See a Doctor Soon"

    def test_malformed_slot_is_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        backend = FakePersistenceBackend({DEFAULT_SLOT: "{not json"})
        with caplog.at_level(logging.WARNING):
            store = HistoryStore(backend)
        assert len(store) == 0
        assert "malformed" in caplog.text


class TestAdd:
    def test_newest_first_and_persisted(self, fake_backend: FakePersistenceBackend) -> None:
        store = HistoryStore(fake_backend)
        assert store.add(_record("a")) is True
        assert store.add(_record("b")) is True
        assert [r.id for r in store.records] == ["b", "a"]

        reloaded = HistoryStore(fake_backend)
        assert [r.id for r in reloaded.records] == ["b", "a"]
        saved = json.loads(fake_backend.load(DEFAULT_SLOT))
        assert saved[0]["createdAt"] == "2025-01-01T00:00:00+00:00"

    def test_write_failure_is_swallowed(self, caplog: pytest.LogCaptureFixture) -> None:
        store = HistoryStore(FailingPersistenceBackend())
        with caplog.at_level(logging.ERROR):
            assert store.add(_record("a")) is False
        assert [r.id for r in store.records] == ["a"]
        assert "Failed to persist" in caplog.text

    def test_cap_evicts_oldest(self, fake_backend: FakePersistenceBackend) -> None:
        store = HistoryStore(fake_backend, max_records=2)
        for record_id in ("a", "b", "c"):
            store.add(_record(record_id))
        assert [r.id for r in store.records] == ["c", "b"]

    def test_zero_cap_is_unbounded(self, fake_backend: FakePersistenceBackend) -> None:
        store = HistoryStore(fake_backend, max_records=0)
        for i in range(20):
            store.add(_record(str(i)))
        assert len(store) == 20

    def test_records_is_a_copy(self, fake_backend: FakePersistenceBackend) -> None:
        store = HistoryStore(fake_backend)
        store.add(_record("a"))
        store.records.clear()
        assert len(store) == 1


class TestLookup:
    @pytest.fixture
    def store(self, fake_backend: FakePersistenceBackend) -> HistoryStore:
        store = HistoryStore(fake_backend)
        store.add(_record("abc111", triage_level="Emergency – Seek Immediate Care",
                          conditions="Asthma", patient_age="62", summary_quick="Chest tightness"))
        store.add(_record("abc222", triage_level="See a Doctor Soon",
                          conditions="Diabetes", patient_age="45", summary_quick="Blurred vision"))
        store.add(_record("def333", triage_level="Likely Mild – Self-care",
                          patient_age="23", summary_quick="Runny nose and sneezing"))
        return store

    def test_get_exact_and_prefix(self, store: HistoryStore) -> None:
        assert store.get("abc222").id == "abc222"
        assert store.get("def").id == "def333"

    def test_get_ambiguous_or_missing(self, store: HistoryStore) -> None:
        assert store.get("abc") is None
        assert store.get("zzz") is None
        assert store.get("") is None

    def test_filter_by_triage(self, store: HistoryStore) -> None:
        assert [r.id for r in store.filter(triage=TriageLevel.EMERGENCY)] == ["abc111"]
        assert [r.id for r in store.filter(triage=TriageLevel.URGENT)] == ["abc222"]
        assert [r.id for r in store.filter(triage=TriageLevel.MILD)] == ["def333"]

    def test_filter_by_search(self, store: HistoryStore) -> None:
        assert [r.id for r in store.filter(search="diabetes")] == ["abc222"]
        assert [r.id for r in store.filter(search="SNEEZING")] == ["def333"]
        assert [r.id for r in store.filter(search="62")] == ["abc111"]

    def test_filter_combined(self, store: HistoryStore) -> None:
        assert store.filter(triage=TriageLevel.MILD, search="asthma") == []
        assert len(store.filter()) == 3
