"""Export-side section bucketing and markdown stripping.

This is deliberately independent of ``split_sections``: the PDF only needs
five named blocks, and header detection here also accepts a bare leading
emoji so emoji-only headings still switch buckets.
"""

from __future__ import annotations

import re
import unicodedata

from meditriage.models import ReportContent
from meditriage.parsing import glyphs

HEADER_PREFIXES = (
    "#",
    "**",
    glyphs.TRIAGE,
    glyphs.SUMMARY,
    glyphs.DOCTOR,
    glyphs.AYURVEDA,
    glyphs.NEXT_STEPS,
)

_IGNORED = "ignored"
_OTHER = "other"

BULLET_GLYPH = "•"

_HEADING_MARKER = re.compile(r"^#{1,6}\s*", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^>\s?", re.MULTILINE)
_LINK = re.compile(r"\[(.*?)\]\(.*?\)")
_EMPHASIS = re.compile(r"[*_`~]")
_BULLET = re.compile(r"^\s*[-+*]\s+", re.MULTILINE)
_EXTRA_NEWLINES = re.compile(r"\n{3,}")
_EXTRA_SPACES = re.compile(r"[ \t]{2,}")
_KEEP_CONTROLS = frozenset("\n\t")


def is_report_header(line: str) -> bool:
    return line.startswith(HEADER_PREFIXES)


def bucket_for_header(line: str) -> str:
    """Pick the bucket a header line opens, by keyword containment."""
    lower = line.lower()
    if "triage" in lower or "urgency" in lower:
        return "triage"
    if "summary" in lower and "handover" not in lower:
        return "summary"
    if "handover" in lower or "doctor" in lower:
        return "handover"
    if "ayurveda" in lower or "ayurvedic" in lower:
        return "ayurveda"
    if "next" in lower or "can do" in lower:
        return "next_steps"
    if "safety" in lower or "disclaimer" in lower:
        return _IGNORED
    return _OTHER


def extract_report_content(markdown: str) -> ReportContent:
    """Bucket the lines of *markdown* into the five export blocks.

    Lines before the first header and blank lines are dropped; lines under
    safety/disclaimer or unrecognized headers are never emitted.
    """
    content = ReportContent()
    current = ""
    for line in markdown.replace("\r\n", "\n").split("\n"):
        if is_report_header(line):
            current = bucket_for_header(line)
        elif current and line.strip():
            bucket = getattr(content, current, None)
            if isinstance(bucket, list):
                bucket.append(line)
    return content


def _drop_symbols(text: str) -> str:
    kept = []
    for ch in text:
        if ch in _KEEP_CONTROLS:
            kept.append(ch)
            continue
        category = unicodedata.category(ch)
        # Variation selectors are marks (Mn) but only ever decorate emoji.
        if category[0] in ("S", "C") or 0xFE00 <= ord(ch) <= 0xFE0F:
            continue
        kept.append(ch)
    return "".join(kept)


def strip_markdown(text: str) -> str:
    """Plain-text rendering of markdown for the PDF body blocks.

    Bullets and blockquotes are normalized before symbol removal, since
    ``+`` and ``>`` are themselves symbol characters.
    """
    text = _BLOCKQUOTE.sub("", text)
    text = _BULLET.sub(f"{BULLET_GLYPH} ", text)
    text = _drop_symbols(text)
    text = _HEADING_MARKER.sub("", text)
    text = _LINK.sub(r"\1", text)
    text = _EMPHASIS.sub("", text)
    text = _EXTRA_NEWLINES.sub("\n\n", text)
    text = _EXTRA_SPACES.sub(" ", text)
    return text.strip()
