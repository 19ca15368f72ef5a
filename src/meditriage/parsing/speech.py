"""Narration text for the text-to-speech collaborator.

The speech engine only ever receives the string built here plus a language
tag; it has no view of section structure.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from meditriage.models import Section, TriageLevel
from meditriage.parsing.summary import bullet_lines

_LINK = re.compile(r"\[.*?\]\(.*?\)")
_LEADING_BULLET = re.compile(r"^\s*[-*•]\s+")
_REPEATED_PERIODS = re.compile(r"\.{2,}")


def clean_for_speech(line: str) -> str:
    text = line.replace("**", "").replace("__", "")
    text = _LINK.sub("", text)
    text = _LEADING_BULLET.sub("", text)
    return text.strip()


def _spoken_join(lines: Iterable[str]) -> str:
    cleaned = (clean_for_speech(line) for line in lines)
    return ". ".join(c for c in cleaned if c)


def build_speech_text(
    level: TriageLevel,
    summary_section: Optional[Section],
    next_steps_section: Optional[Section],
) -> str:
    """Compose triage sentence, summary and next steps into one narration."""
    parts: list[str] = []
    if level.speech:
        parts.append(level.speech)

    if summary_section is not None:
        parts.append("Summary: " + _spoken_join(summary_section.content))

    if next_steps_section is not None:
        bullets = bullet_lines(next_steps_section)
        parts.append("Next steps: " + _spoken_join(bullets or next_steps_section.content))

    return _REPEATED_PERIODS.sub(".", ". ".join(parts))
