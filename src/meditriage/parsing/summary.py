"""Quick-view extraction: summary snippet and top next-step actions."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from meditriage.models import Section, SectionCategory
from meditriage.parsing.sections import find_section

SNIPPET_FALLBACK = "Review the full summary below."
MAX_QUICK_ACTIONS = 3

# "- item", "* item", "1. item" or a "**Label:**" lead-in.
BULLET_PATTERN = re.compile(r"^(?:[-*]|\d+\.)\s*")


def strip_bold(text: str) -> str:
    return text.replace("**", "")


def is_bullet(line: str) -> bool:
    return bool(BULLET_PATTERN.match(line.strip()))


def find_summary_section(sections: Iterable[Section]) -> Optional[Section]:
    """First "summary" section that is not the doctor handover summary."""
    return find_section(sections, SectionCategory.SUMMARY, exclude=("handover",))


def find_next_steps_section(sections: Iterable[Section]) -> Optional[Section]:
    return find_section(sections, SectionCategory.NEXT_STEPS)


def summary_snippet(section: Optional[Section]) -> str:
    """First prose line of the summary section, bold markers removed."""
    if section is None:
        return SNIPPET_FALLBACK
    for line in section.content:
        stripped = line.strip()
        if stripped and not stripped.startswith("-"):
            return strip_bold(line).strip()
    return SNIPPET_FALLBACK


def bullet_lines(section: Section) -> list[str]:
    return [line for line in section.content if is_bullet(line)]


def quick_actions(section: Optional[Section], limit: int = MAX_QUICK_ACTIONS) -> list[str]:
    if section is None:
        return []
    actions = []
    for line in bullet_lines(section)[:limit]:
        actions.append(BULLET_PATTERN.sub("", strip_bold(line.strip()), count=1).strip())
    return actions
