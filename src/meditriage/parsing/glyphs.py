"""Emoji markers the upstream prompt puts in front of section headings."""

from __future__ import annotations

SAFETY = "⚠"
SUMMARY = "📋"
SUMMARY_ALT = "🔎"
TRIAGE = "🚨"
TRAFFIC_LIGHT = "🚦"
EXPLANATIONS = "🔍"
TARGET = "🎯"
REPORT = "📄"
AYURVEDA = "🌿"
NEXT_STEPS = "✅"
COMPASS = "🧭"
# man + ZWJ + staff of aesculapius + VS16
DOCTOR = chr(0x1F468) + chr(0x200D) + chr(0x2695) + chr(0xFE0F)
