"""Tests for the JSON record formatter and formatter protocol."""

from __future__ import annotations

import json
from pathlib import Path

from meditriage.formatters import IOutputFormatter, JSONFormatter
from meditriage.history.record_builder import build_record
from meditriage.models import PatientInput


def test_json_formatter_satisfies_protocol() -> None:
    assert isinstance(JSONFormatter(), IOutputFormatter)


def test_renders_camel_case_record(scenario_markdown: str, patient: PatientInput) -> None:
    record = build_record(scenario_markdown, patient, record_id="r1")
    data = json.loads(JSONFormatter().format(record))
    assert data["id"] == "r1"
    assert data["triageLevel"] == "See a Doctor Soon"
    assert data["patientSex"] == "Female"
    assert data["markdown"] == scenario_markdown


def test_format_to_file(scenario_markdown: str, patient: PatientInput, tmp_path: Path) -> None:
    record = build_record(scenario_markdown, patient)
    out = JSONFormatter().format_to_file(record, tmp_path / "record.json")
    assert json.loads(out.read_text(encoding="utf-8"))["id"] == record.id


def test_content_type() -> None:
    assert JSONFormatter().content_type == "application/json"
