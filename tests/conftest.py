"""Shared fixtures for meditriage tests."""

from __future__ import annotations

import os

# Use litellm's bundled model cost map instead of a background network fetch,
# which can deadlock litellm's lazy imports in offline test environments.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

import pytest

from meditriage.models import AnalysisRequest, Language, PatientInput, Sex
from meditriage.parsing import glyphs
from tests.fakes.fake_persistence import FakePersistenceBackend


@pytest.fixture
def scenario_markdown() -> str:
    """Minimal three-section response: urgent triage, summary, next steps."""
    return (
        "## 🚨 Triage & Urgency\n"
        "See a doctor soon for evaluation.\n"
        "## 📋 Summary of Understanding\n"
        "Patient reports fever and cough for 3 days.\n"
        "## ✅ What You Can Do Next\n"
        "- Rest and hydrate\n"
        "- Monitor temperature\n"
        "- See a doctor if fever persists"
    )


@pytest.fixture
def full_markdown() -> str:
    """A complete response following the prompt's eight-section contract."""
    return "\n".join([
        "## ⚠️ Safety Disclaimer",
        "This is NOT a medical diagnosis. Please consult a qualified doctor.",
        "",
        "## 📋 Summary of Understanding",
        "A 34-year-old female reports a dry cough and mild fever for 3 days.",
        "She has no chronic conditions.",
        "",
        "## 🚨 Triage & Urgency",
        "This looks **likely mild** and suggests a self-limiting viral infection.",
        "",
        "## 🔍 Possible Explanations",
        "- Viral upper respiratory infection",
        "- Early seasonal allergy",
        "",
        "## 🌿 Ayurvedic Lens",
        "Signs point to a Kapha imbalance. Warm fluids may help.",
        "",
        "## ✅ What You Can Do Next",
        "- **Rest** and hydrate well",
        "- Monitor your temperature twice daily",
        "- Gargle with warm salt water",
        "- See a doctor if fever lasts beyond 5 days",
        "",
        f"## {glyphs.DOCTOR} Doctor Handover Summary",
        "34F, 3 days dry cough, low-grade fever, no comorbidities, no medications.",
    ])


@pytest.fixture
def patient() -> PatientInput:
    return PatientInput(
        age="34",
        sex=Sex.FEMALE,
        language=Language.ENGLISH,
        duration="3 days",
        conditions="",
        medications="Paracetamol",
        symptoms="Dry cough and mild fever",
    )


@pytest.fixture
def analysis_request(patient: PatientInput) -> AnalysisRequest:
    return AnalysisRequest(patient=patient)


@pytest.fixture
def fake_backend() -> FakePersistenceBackend:
    return FakePersistenceBackend()
