"""PDF output formatter using reportlab.

Renders an ``AnalysisRecord`` as a one-document health triage report that a
patient can hand to a clinician. The report is rebuilt from the stored
markdown on every export; nothing about the layout is persisted.
"""

from __future__ import annotations

import logging
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any, Optional
from xml.sax.saxutils import escape

from meditriage.core.config import PDFFormattingConfig
from meditriage.exceptions import ExportError
from meditriage.formatters.pdf_styles import (
    ACTIONS_TITLE,
    AYURVEDA_COLOR,
    AYURVEDA_TITLE,
    BRAND_COLOR,
    DISCLAIMER_COLOR,
    EMPTY_BLOCK_TEXT,
    HANDOVER_TITLE,
    MUTED_TEXT_COLOR,
    PATIENT_BASICS_TITLE,
    SEPARATOR_COLOR,
    SUMMARY_TITLE,
    TRIAGE_COLORS,
)
from meditriage.models import AnalysisRecord, ReportContent, TriageLevel
from meditriage.parsing.report import BULLET_GLYPH, extract_report_content

try:
    from reportlab.lib import colors as rl_colors
    from reportlab.lib.colors import HexColor
    from reportlab.lib.enums import TA_LEFT, TA_RIGHT
    from reportlab.lib.pagesizes import A4, LETTER
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.lib.units import inch
    from reportlab.platypus import (
        Flowable,
        HRFlowable,
        SimpleDocTemplate,
        Spacer,
        Table,
        TableStyle,
    )
    from reportlab.platypus import (
        Paragraph as _RawParagraph,
    )
except ImportError as _exc:
    raise ImportError(
        "reportlab is required for PDF output. Install with: pip install reportlab"
    ) from _exc

log = logging.getLogger(__name__)


# ── Unicode sanitization ────────────────────────────────────────────
# The base-14 fonts lack glyphs for much of what models emit. Text is
# sanitized at the Paragraph boundary so every flowable is safe.

_UNICODE_REPLACEMENTS: dict[str, str] = {
    chr(0x2010): "-",    # hyphen
    chr(0x2011): "-",    # non-breaking hyphen
    chr(0x2012): "-",    # figure dash
    chr(0x2013): "-",    # en-dash
    chr(0x2014): "-",    # em-dash
    chr(0x2015): "-",    # horizontal bar
    chr(0x00A0): " ",    # non-breaking space
    chr(0x2009): " ",    # thin space
    chr(0x200A): " ",    # hair space
    chr(0x202F): " ",    # narrow no-break space
    chr(0x2018): "'",
    chr(0x2019): "'",
    chr(0x201C): '"',
    chr(0x201D): '"',
    chr(0x2026): "...",
    chr(0x2192): "->",
    chr(0x2191): "^",
    chr(0x2193): "v",
}

# Latin-1 plus the bullet glyph the report relies on.
_MAX_RENDERABLE = 0xFF


def _sanitize_text(text: str) -> str:
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return "".join(
        ch for ch in text if ord(ch) <= _MAX_RENDERABLE or ch == BULLET_GLYPH
    )


def Paragraph(text: str, *args: Any, **kwargs: Any) -> _RawParagraph:  # noqa: N802
    """Sanitized Paragraph wrapper; replaces glyphs Helvetica cannot render."""
    return _RawParagraph(_sanitize_text(str(text)), *args, **kwargs)


_PAGE_SIZES = {"letter": LETTER, "a4": A4}


def _hex(color_str: str) -> HexColor:
    return HexColor(color_str)


def export_filename(record: AnalysisRecord) -> str:
    """Download name for *record*'s PDF report."""
    return f"MediAI-Report-{record.id[:8]}.pdf"


def _format_timestamp(created_at: str) -> str:
    try:
        moment = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return created_at
    return moment.strftime("%d %b %Y, %H:%M %Z").strip()


class ReportPDFFormatter:
    """Renders an ``AnalysisRecord`` as a health triage report PDF."""

    def __init__(self, config: Optional[PDFFormattingConfig] = None) -> None:
        self._config = config or PDFFormattingConfig()
        self._page_size: tuple[float, float] = _PAGE_SIZES.get(self._config.page_size, A4)
        self._margin: float = self._config.margin_inches * inch
        self._styles = self._build_styles()

    # ── Public API ───────────────────────────────────────────────────

    def format(self, record: AnalysisRecord, **kwargs: Any) -> bytes:
        """Render *record* to PDF bytes.

        Raises:
            ExportError: When the document cannot be built.
        """
        try:
            content = extract_report_content(record.markdown)
            buffer = BytesIO()
            doc = SimpleDocTemplate(
                buffer,
                pagesize=self._page_size,
                leftMargin=self._margin,
                rightMargin=self._margin,
                topMargin=self._margin,
                bottomMargin=self._margin + 0.2 * inch,
                title=f"{self._config.app_name} Health Triage Report",
            )
            story = self._build_story(record, content)
            doc.build(story, onFirstPage=self._footer, onLaterPages=self._footer)
        except Exception as e:
            log.error("PDF export failed for record %s: %s", record.id, e)
            raise ExportError(f"Could not generate PDF for record {record.id}: {e}") from e
        log.info("Rendered PDF report for record %s", record.id)
        return buffer.getvalue()

    def format_to_file(self, record: AnalysisRecord, path: Path, **kwargs: Any) -> Path:
        """Write PDF to *path* and return it."""
        data = self.format(record, **kwargs)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise ExportError(f"Could not write {path}: {e}") from e
        return path

    @property
    def content_type(self) -> str:
        return "application/pdf"

    # ── Style setup ──────────────────────────────────────────────────

    def _build_styles(self) -> dict[str, ParagraphStyle]:
        base = getSampleStyleSheet()
        font = self._config.font_family
        body_sz = self._config.body_font_size
        heading_sz = self._config.heading_font_size

        return {
            "title": ParagraphStyle(
                "title",
                parent=base["Title"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz + 6,
                leading=(heading_sz + 6) * 1.2,
                alignment=TA_LEFT,
                textColor=_hex(BRAND_COLOR),
            ),
            "generated": ParagraphStyle(
                "generated",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                alignment=TA_RIGHT,
                textColor=_hex(MUTED_TEXT_COLOR),
            ),
            "disclaimer": ParagraphStyle(
                "disclaimer",
                parent=base["BodyText"],
                fontName=f"{font}-Bold",
                fontSize=body_sz - 1,
                leading=(body_sz - 1) * 1.3,
                textColor=_hex(DISCLAIMER_COLOR),
                spaceBefore=8,
            ),
            "heading": ParagraphStyle(
                "heading",
                parent=base["Heading2"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz,
                leading=heading_sz * 1.3,
                spaceBefore=4,
                spaceAfter=6,
                textColor=rl_colors.black,
            ),
            "ayurveda_heading": ParagraphStyle(
                "ayurveda_heading",
                parent=base["Heading2"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz,
                leading=heading_sz * 1.3,
                spaceBefore=4,
                spaceAfter=6,
                textColor=_hex(AYURVEDA_COLOR),
            ),
            "triage": ParagraphStyle(
                "triage",
                parent=base["Heading2"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz + 2,
                leading=(heading_sz + 2) * 1.3,
                spaceAfter=6,
            ),
            "body": ParagraphStyle(
                "body",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                leading=body_sz * 1.4,
                spaceAfter=4,
            ),
            "bullet": ParagraphStyle(
                "bullet",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                leading=body_sz * 1.4,
                leftIndent=18,
                bulletIndent=6,
                spaceAfter=2,
            ),
            "caption": ParagraphStyle(
                "caption",
                parent=base["BodyText"],
                fontName=f"{font}-Oblique",
                fontSize=body_sz - 1,
                textColor=rl_colors.grey,
            ),
        }

    # ── Story construction ───────────────────────────────────────────

    def _build_story(self, record: AnalysisRecord, content: ReportContent) -> list[Flowable]:
        story: list[Flowable] = []
        story.extend(self._header_block(record))
        story.append(self._separator())
        story.extend(self._patient_basics(record))
        story.append(self._separator())
        story.extend(self._triage_block(record, content))
        story.append(self._separator())
        story.extend(self._text_block(SUMMARY_TITLE, content.plain_text("summary")))
        story.append(self._separator())
        story.extend(self._text_block(HANDOVER_TITLE, content.plain_text("handover")))
        story.append(self._separator())
        story.extend(self._text_block(ACTIONS_TITLE, content.plain_text("next_steps")))

        ayurveda = content.plain_text("ayurveda")
        if ayurveda:
            story.append(self._separator())
            story.extend(
                self._text_block(AYURVEDA_TITLE, ayurveda, heading_style="ayurveda_heading")
            )
        return story

    def _header_block(self, record: AnalysisRecord) -> list[Flowable]:
        title = Paragraph(
            escape(f"{self._config.app_name} - Health Triage Report"), self._styles["title"]
        )
        generated = Paragraph(
            escape(f"Generated: {_format_timestamp(record.created_at)}"),
            self._styles["generated"],
        )
        width = self._content_width()
        header = Table([[title, generated]], colWidths=[width * 0.62, width * 0.38])
        header.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "BOTTOM"),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ]))
        return [header, Paragraph(escape(self._config.disclaimer), self._styles["disclaimer"])]

    def _patient_basics(self, record: AnalysisRecord) -> list[Flowable]:
        basics = [
            f"Age/Sex: {record.patient_age or 'N/A'} / {record.patient_sex or 'N/A'}",
            f"Duration: {record.duration or 'N/A'}",
            f"Conditions: {record.conditions or 'None'}",
            f"Medications: {record.medications or 'None'}",
        ]
        story: list[Flowable] = [Paragraph(PATIENT_BASICS_TITLE, self._styles["heading"])]
        for line in basics:
            story.append(
                Paragraph(escape(line), self._styles["bullet"], bulletText=BULLET_GLYPH)
            )
        return story

    def _triage_block(self, record: AnalysisRecord, content: ReportContent) -> list[Flowable]:
        level = TriageLevel.from_label(record.triage_level)
        style = ParagraphStyle(
            f"triage_{level.value}",
            parent=self._styles["triage"],
            textColor=_hex(TRIAGE_COLORS[level.value]),
        )
        story: list[Flowable] = [
            Paragraph(escape(f"Triage Level: {record.triage_level}"), style)
        ]
        body = content.plain_text("triage")
        if body:
            story.extend(self._body_paragraphs(body))
        return story

    def _text_block(
        self,
        title: str,
        text: str,
        *,
        heading_style: str = "heading",
    ) -> list[Flowable]:
        story: list[Flowable] = [Paragraph(escape(title), self._styles[heading_style])]
        if text:
            story.extend(self._body_paragraphs(text))
        else:
            story.append(Paragraph(EMPTY_BLOCK_TEXT, self._styles["caption"]))
        return story

    def _body_paragraphs(self, text: str) -> list[Flowable]:
        """One paragraph per line; ``• `` lines render as indented bullets."""
        story: list[Flowable] = []
        bullet_prefix = f"{BULLET_GLYPH} "
        for line in text.split("\n"):
            if not line.strip():
                story.append(Spacer(1, 4))
            elif line.startswith(bullet_prefix):
                story.append(
                    Paragraph(
                        escape(line[len(bullet_prefix):]),
                        self._styles["bullet"],
                        bulletText=BULLET_GLYPH,
                    )
                )
            else:
                story.append(Paragraph(escape(line), self._styles["body"]))
        return story

    # ── Helpers ──────────────────────────────────────────────────────

    def _separator(self) -> Flowable:
        return HRFlowable(
            width="100%",
            thickness=0.5,
            color=_hex(SEPARATOR_COLOR),
            spaceBefore=8,
            spaceAfter=10,
        )

    def _footer(self, canvas: Any, doc: Any) -> None:
        canvas.saveState()
        width, _ = self._page_size
        canvas.setFont(self._config.font_family, 8)
        canvas.setFillColor(rl_colors.grey)
        canvas.drawString(self._margin, self._margin - 4, f"Page {canvas.getPageNumber()}")
        canvas.drawRightString(
            width - self._margin,
            self._margin - 4,
            f"Generated by {self._config.app_name}. Not a medical diagnosis.",
        )
        canvas.restoreState()

    def _content_width(self) -> float:
        return float(self._page_size[0]) - 2 * self._margin
