"""Tests for export bucketing and markdown stripping."""

from __future__ import annotations

import pytest

from meditriage.models import ReportContent
from meditriage.parsing.report import bucket_for_header, extract_report_content, strip_markdown


class TestBucketForHeader:
    @pytest.mark.parametrize(
        ("line", "bucket"),
        [
            ("## 🚨 Triage & Urgency", "triage"),
            ("**Urgency**", "triage"),
            ("## 📋 Summary of Understanding", "summary"),
            ("## Doctor Handover Summary", "handover"),
            ("🌿 Ayurvedic Lens", "ayurveda"),
            ("## Ayurveda", "ayurveda"),
            ("✅ What You Can Do Next", "next_steps"),
            ("## ⚠️ Safety Disclaimer", "ignored"),
            ("## Possible Explanations", "other"),
        ],
    )
    def test_keyword_containment(self, line: str, bucket: str) -> None:
        assert bucket_for_header(line) == bucket


class TestExtractReportContent:
    def test_full_response_buckets(self, full_markdown: str) -> None:
        content = extract_report_content(full_markdown)
        assert content.triage == [
            "This looks **likely mild** and suggests a self-limiting viral infection."
        ]
        assert content.summary == [
            "A 34-year-old female reports a dry cough and mild fever for 3 days.",
            "She has no chronic conditions.",
        ]
        assert content.handover == [
            "34F, 3 days dry cough, low-grade fever, no comorbidities, no medications."
        ]
        assert content.ayurveda == ["Signs point to a Kapha imbalance. Warm fluids may help."]
        assert len(content.next_steps) == 4

    def test_safety_and_unknown_sections_are_not_emitted(self, full_markdown: str) -> None:
        content = extract_report_content(full_markdown)
        everything = content.triage + content.summary + content.handover + content.ayurveda + content.next_steps
        assert not any("NOT a medical diagnosis" in line for line in everything)
        assert not any("Viral upper respiratory" in line for line in everything)

    def test_lines_before_any_header_are_dropped(self) -> None:
        content = extract_report_content("stray line\n## Summary\nkept")
        assert content.summary == ["kept"]

    def test_empty_markdown(self) -> None:
        assert extract_report_content("") == ReportContent()


class TestStripMarkdown:
    def test_bucket_text(self) -> None:
        text = "**Bold** text with [a link](http://example.com)\n- a bullet\n+ another"
        assert strip_markdown(text) == "Bold text with a link\n• a bullet\n• another"

    def test_inline_dash_is_not_a_bullet(self) -> None:
        text = "**Bold** text with [a link](http://x) and - a bullet"
        assert strip_markdown(text) == "Bold text with a link and - a bullet"

    def test_headings_blockquotes_and_emoji(self) -> None:
        text = "### 🚨 Heading\n> quoted _advice_"
        assert strip_markdown(text) == "Heading\nquoted advice"

    def test_whitespace_collapse(self) -> None:
        assert strip_markdown("a\n\n\n\nb   c\t\td") == "a\n\nb c d"

    def test_keeps_newlines_and_plain_punctuation(self) -> None:
        assert strip_markdown("Temp 38.5 C, 3 days.\nBP: 120/80") == "Temp 38.5 C, 3 days.\nBP: 120/80"

    def test_plain_text_accessor(self, full_markdown: str) -> None:
        content = extract_report_content(full_markdown)
        assert content.plain_text("next_steps").split("\n") == [
            "• Rest and hydrate well",
            "• Monitor your temperature twice daily",
            "• Gargle with warm salt water",
            "• See a doctor if fever lasts beyond 5 days",
        ]
        assert content.plain_text("triage") == (
            "This looks likely mild and suggests a self-limiting viral infection."
        )
        with pytest.raises(KeyError):
            content.plain_text("other")
