"""Domain models: enums, dataclasses and pydantic records.

Ephemeral parse products (``Section``, ``ReportContent``) are dataclasses;
anything that crosses a boundary (patient input, media payloads, persisted
history records) is a pydantic model.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ── Triage ───────────────────────────────────────────────────────────


class TriageLevel(str, Enum):
    """Coarse urgency classification derived from the AI response."""

    EMERGENCY = "emergency"
    URGENT = "urgent"
    MILD = "mild"
    UNKNOWN = "unknown"

    @property
    def headline(self) -> str:
        return _TRIAGE_HEADLINES[self]

    @property
    def guidance(self) -> str:
        return _TRIAGE_GUIDANCE[self]

    @property
    def speech(self) -> str:
        """Canned narration sentence; empty for ``UNKNOWN``."""
        return _TRIAGE_SPEECH[self]

    @property
    def record_label(self) -> str:
        """Label stored on history records and printed on exports."""
        return _TRIAGE_RECORD_LABELS[self]

    @classmethod
    def from_label(cls, label: Optional[str]) -> TriageLevel:
        """Map a stored record label (or any free text) back to a level."""
        lower = (label or "").lower()
        if "emergency" in lower:
            return cls.EMERGENCY
        if "soon" in lower or "urgent" in lower:
            return cls.URGENT
        if "mild" in lower:
            return cls.MILD
        return cls.UNKNOWN


_TRIAGE_HEADLINES = {
    TriageLevel.EMERGENCY: "Emergency Recommendation",
    TriageLevel.URGENT: "Medical Attention Advised",
    TriageLevel.MILD: "Likely Mild Condition",
    TriageLevel.UNKNOWN: "Analysis Complete",
}

_TRIAGE_GUIDANCE = {
    TriageLevel.EMERGENCY: "Based on the analysis, immediate medical care is recommended.",
    TriageLevel.URGENT: "You should plan to see a doctor soon for evaluation.",
    TriageLevel.MILD: "Self-care may be sufficient, but monitor symptoms.",
    TriageLevel.UNKNOWN: "Review the detailed breakdown below.",
}

_TRIAGE_SPEECH = {
    TriageLevel.EMERGENCY: "Emergency Recommendation. Immediate medical care is recommended.",
    TriageLevel.URGENT: "Medical Attention Advised. You should plan to see a doctor soon.",
    TriageLevel.MILD: "Likely Mild Condition. Self-care may be sufficient.",
    TriageLevel.UNKNOWN: "",
}

_TRIAGE_RECORD_LABELS = {
    TriageLevel.EMERGENCY: "Emergency – Seek Immediate Care",
    TriageLevel.URGENT: "See a Doctor Soon",
    TriageLevel.MILD: "Likely Mild – Self-care",
    TriageLevel.UNKNOWN: "Unknown",
}


# ── Sections ─────────────────────────────────────────────────────────


class SectionCategory(str, Enum):
    """Presentation category of a response section, derived from its title."""

    SAFETY = "safety"
    SUMMARY = "summary"
    TRIAGE = "triage"
    EXPLANATION = "explanation"
    REPORT = "report"
    AYURVEDA = "ayurveda"
    NEXT_STEPS = "next_steps"
    HANDOVER = "handover"
    GENERAL = "general"


@dataclass
class Section:
    """A titled, contiguous span of the AI's markdown response."""

    title: str
    content: list[str] = field(default_factory=list)
    category: SectionCategory = SectionCategory.GENERAL


# ── Patient input ────────────────────────────────────────────────────


class Sex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    PREFER_NOT_TO_SAY = "Prefer not to say"


class Language(str, Enum):
    """Preferred response language. ``AUTO`` lets the model detect it."""

    AUTO = "Auto"
    ENGLISH = "English"
    HINDI = "Hindi"
    KANNADA = "Kannada"
    TELUGU = "Telugu"
    TAMIL = "Tamil"
    MARATHI = "Marathi"
    BENGALI = "Bengali"
    GUJARATI = "Gujarati"
    MALAYALAM = "Malayalam"
    ODIA = "Odia"

    @property
    def speech_tag(self) -> str:
        """BCP-47 tag for the speech collaborator, ``"auto"`` when unset."""
        return _SPEECH_TAGS.get(self, "auto")


_SPEECH_TAGS = {
    Language.ENGLISH: "en-US",
    Language.HINDI: "hi-IN",
    Language.KANNADA: "kn-IN",
    Language.TELUGU: "te-IN",
    Language.TAMIL: "ta-IN",
    Language.MARATHI: "mr-IN",
    Language.BENGALI: "bn-IN",
    Language.GUJARATI: "gu-IN",
    Language.MALAYALAM: "ml-IN",
    Language.ODIA: "or-IN",
}


class PatientInput(BaseModel):
    """Patient-reported details collected before an analysis."""

    age: str = ""
    sex: Sex = Sex.MALE
    language: Language = Language.AUTO
    duration: str = ""
    conditions: str = ""
    medications: str = ""
    symptoms: str = ""
    include_ayurveda: bool = False


class MediaPayload(BaseModel):
    """Opaque media produced by a capture collaborator: raw bytes + MIME type."""

    data: bytes
    mime_type: str
    filename: str = ""

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


class AnalysisRequest(BaseModel):
    """Everything handed to the analysis collaborator for one run."""

    patient: PatientInput
    images: list[MediaPayload] = Field(default_factory=list)
    document: Optional[MediaPayload] = None
    audio: Optional[MediaPayload] = None


# ── History ──────────────────────────────────────────────────────────


class AnalysisRecord(BaseModel):
    """Persisted, compact summary of one past analysis.

    Serialized with camelCase keys (``createdAt``, ``triageLevel``, ...).
    Immutable once created.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    created_at: str
    patient_age: Optional[str] = None
    patient_sex: Optional[str] = None
    duration: Optional[str] = None
    conditions: Optional[str] = None
    medications: Optional[str] = None
    triage_level: str = TriageLevel.UNKNOWN.record_label
    summary_quick: str = ""
    markdown: str


# ── Export ───────────────────────────────────────────────────────────

REPORT_BUCKETS = ("triage", "summary", "handover", "ayurveda", "next_steps")


@dataclass
class ReportContent:
    """Export-only line buckets, rebuilt from the markdown on every export."""

    triage: list[str] = field(default_factory=list)
    summary: list[str] = field(default_factory=list)
    handover: list[str] = field(default_factory=list)
    ayurveda: list[str] = field(default_factory=list)
    next_steps: list[str] = field(default_factory=list)

    def plain_text(self, bucket: str) -> str:
        """Return *bucket* joined by newlines with markdown stripped."""
        from meditriage.parsing.report import strip_markdown

        if bucket not in REPORT_BUCKETS:
            raise KeyError(f"Unknown report bucket: {bucket}")
        return strip_markdown("\n".join(getattr(self, bucket)))
