"""Centralized style constants for PDF report output."""

from __future__ import annotations

# ── Triage color palette (hex strings) ───────────────────────────────
# Keyed by ``TriageLevel`` value; converted to reportlab ``HexColor`` by
# the formatter.

TRIAGE_COLORS: dict[str, str] = {
    "emergency": "#DC2626",
    "urgent": "#EA580C",
    "mild": "#16A34A",
    "unknown": "#000000",
}

# ── Layout constants ─────────────────────────────────────────────────

BRAND_COLOR = "#0D9488"
DISCLAIMER_COLOR = "#DC2626"
AYURVEDA_COLOR = "#15803D"
MUTED_TEXT_COLOR = "#646464"
SEPARATOR_COLOR = "#C8C8C8"

# ── Block titles ─────────────────────────────────────────────────────

PATIENT_BASICS_TITLE = "Patient Basics"
SUMMARY_TITLE = "Quick Summary"
HANDOVER_TITLE = "Doctor Handover Summary"
ACTIONS_TITLE = "Recommended Actions"
AYURVEDA_TITLE = "Ayurvedic Overview"

EMPTY_BLOCK_TEXT = "Not provided in this analysis."
