"""End-to-end analysis flow: validate, call the model, interpret, record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from meditriage.client.protocols import IAnalysisClient
from meditriage.exceptions import AnalysisClientError
from meditriage.history.record_builder import build_record
from meditriage.history.store import HistoryStore
from meditriage.models import AnalysisRecord, AnalysisRequest, PatientInput
from meditriage.parsing.interpreter import AnalysisView, interpret

log = logging.getLogger(__name__)

MISSING_AGE_MESSAGE = "Please provide your Age."
MISSING_SYMPTOMS_MESSAGE = "Please describe your symptoms in text or record audio."
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


def validate_patient_input(patient: PatientInput, has_audio: bool) -> Optional[str]:
    """Return a user-facing message for the first missing field, else ``None``."""
    if not patient.age.strip():
        return MISSING_AGE_MESSAGE
    if not patient.symptoms.strip() and not has_audio:
        return MISSING_SYMPTOMS_MESSAGE
    return None


@dataclass
class AnalysisOutcome:
    """Result of one analysis run; exactly one of ``view``/``error`` is set."""

    view: Optional[AnalysisView] = None
    record: Optional[AnalysisRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.view is not None


class AnalysisService:
    """Runs one analysis against the model and files it in the history."""

    def __init__(self, client: IAnalysisClient, history: HistoryStore) -> None:
        self._client = client
        self._history = history

    async def run(self, request: AnalysisRequest) -> AnalysisOutcome:
        message = validate_patient_input(request.patient, request.audio is not None)
        if message:
            return AnalysisOutcome(error=message)

        try:
            markdown = await self._client.analyze(request)
        except AnalysisClientError as e:
            log.warning("Analysis failed: %s", e.reason)
            return AnalysisOutcome(error=e.reason or GENERIC_ERROR_MESSAGE)
        except Exception as e:
            log.exception("Analysis client raised unexpectedly")
            return AnalysisOutcome(error=str(e) or GENERIC_ERROR_MESSAGE)

        view = interpret(markdown)
        record = build_record(markdown, request.patient)
        if not self._history.add(record):
            log.warning("Analysis %s shown but not saved to history", record.id)
        log.info("Analysis %s complete: triage=%s", record.id, view.triage.value)
        return AnalysisOutcome(view=view, record=record)
