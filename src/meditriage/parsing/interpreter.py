"""One-call interpretation of an AI response for the live result view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from meditriage.models import Section, TriageLevel
from meditriage.parsing.sections import display_sections, split_sections
from meditriage.parsing.speech import build_speech_text
from meditriage.parsing.summary import (
    find_next_steps_section,
    find_summary_section,
    quick_actions,
    summary_snippet,
)
from meditriage.parsing.triage import classify_sections


@dataclass(frozen=True)
class AnalysisView:
    """Everything the quick-view card, outline and narration need."""

    markdown: str
    sections: list[Section]
    triage: TriageLevel
    summary_section: Optional[Section]
    next_steps_section: Optional[Section]
    snippet: str
    actions: list[str] = field(default_factory=list)
    outline: list[Section] = field(default_factory=list)
    speech_text: str = ""


def interpret(markdown: str) -> AnalysisView:
    sections = split_sections(markdown)
    triage = classify_sections(sections)
    summary_section = find_summary_section(sections)
    next_steps_section = find_next_steps_section(sections)
    return AnalysisView(
        markdown=markdown,
        sections=sections,
        triage=triage,
        summary_section=summary_section,
        next_steps_section=next_steps_section,
        snippet=summary_snippet(summary_section),
        actions=quick_actions(next_steps_section),
        outline=display_sections(sections),
        speech_text=build_speech_text(triage, summary_section, next_steps_section),
    )
