"""Tests for the typer CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from meditriage.cli import main as cli_main
from meditriage.history.record_builder import build_record
from meditriage.history.store import HistoryStore
from meditriage.models import PatientInput
from meditriage.persistence import FilePersistenceBackend
from tests.fakes.fake_analysis_client import FakeAnalysisClient

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point the history at a temp dir and keep global logging untouched."""
    store_path = tmp_path / "history"
    monkeypatch.setenv("MEDITRIAGE_HISTORY_BACKEND", "file")
    monkeypatch.setenv("MEDITRIAGE_HISTORY_STORE_PATH", str(store_path))
    monkeypatch.setattr(cli_main, "setup_logging", lambda config: None)
    monkeypatch.setattr(cli_main, "console", Console(width=200))
    return store_path


@pytest.fixture
def saved_record_id(cli_env: Path, full_markdown: str, patient: PatientInput) -> str:
    store = HistoryStore(FilePersistenceBackend(cli_env))
    record = build_record(full_markdown, patient, record_id="feedc0de0000")
    store.add(record)
    return record.id


class TestAnalyze:
    def test_validation_error_exits_nonzero(self) -> None:
        result = runner.invoke(cli_main.app, ["analyze", "--symptoms", "cough"])
        assert result.exit_code == 1
        assert "Please provide your Age." in result.output

    def test_success_prints_quick_view_and_saves(
        self, monkeypatch: pytest.MonkeyPatch, scenario_markdown: str, cli_env: Path
    ) -> None:
        fake = FakeAnalysisClient(scenario_markdown)
        monkeypatch.setattr(cli_main, "LiteLLMAnalysisClient", lambda config: fake)

        result = runner.invoke(
            cli_main.app,
            ["analyze", "--age", "34", "--sex", "female", "--symptoms", "fever and cough"],
        )

        assert result.exit_code == 0, result.output
        assert "Medical Attention Advised" in result.output
        assert "Rest and hydrate" in result.output
        assert "Saved analysis" in result.output
        assert fake.requests[0].patient.sex.value == "Female"
        saved = json.loads((cli_env / "analysis_history.json").read_text(encoding="utf-8"))
        assert saved[0]["triageLevel"] == "See a Doctor Soon"

    def test_attachments_are_loaded(
        self, monkeypatch: pytest.MonkeyPatch, scenario_markdown: str, tmp_path: Path
    ) -> None:
        fake = FakeAnalysisClient(scenario_markdown)
        monkeypatch.setattr(cli_main, "LiteLLMAnalysisClient", lambda config: fake)
        photo = tmp_path / "rash.png"
        photo.write_bytes(b"\x89PNG")
        report = tmp_path / "labs.pdf"
        report.write_bytes(b"%PDF-1.4")

        result = runner.invoke(
            cli_main.app,
            ["analyze", "--age", "30", "--symptoms", "rash", "--image", str(photo), "--report", str(report)],
        )

        assert result.exit_code == 0, result.output
        request = fake.requests[0]
        assert request.images[0].mime_type == "image/png"
        assert request.document.mime_type == "application/pdf"
        assert request.audio is None

    def test_client_error_exits_nonzero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli_main, "LiteLLMAnalysisClient", lambda config: FakeAnalysisClient(""))
        result = runner.invoke(cli_main.app, ["analyze", "--age", "30", "--symptoms", "cough"])
        assert result.exit_code == 1
        assert "No response generated from the model." in result.output


class TestViewAndSpeak:
    def test_view(self, tmp_path: Path, scenario_markdown: str) -> None:
        md = tmp_path / "response.md"
        md.write_text(scenario_markdown, encoding="utf-8")
        result = runner.invoke(cli_main.app, ["view", str(md)])
        assert result.exit_code == 0, result.output
        assert "Patient reports fever and cough for 3 days." in result.output
        assert "Monitor temperature" in result.output

    def test_speak_text(self, tmp_path: Path, scenario_markdown: str) -> None:
        md = tmp_path / "response.md"
        md.write_text(scenario_markdown, encoding="utf-8")
        result = runner.invoke(cli_main.app, ["speak-text", str(md), "--language", "hindi"])
        assert result.exit_code == 0, result.output
        assert "language: hi-IN" in result.output
        assert "Next steps: Rest and hydrate." in result.output


class TestHistory:
    def test_list(self, saved_record_id: str) -> None:
        result = runner.invoke(cli_main.app, ["history", "list"])
        assert result.exit_code == 0, result.output
        assert saved_record_id[:8] in result.output

    def test_list_filters(self, saved_record_id: str) -> None:
        result = runner.invoke(cli_main.app, ["history", "list", "--triage", "emergency"])
        assert result.exit_code == 0
        assert "No patient records found" in result.output

    def test_show_by_prefix(self, saved_record_id: str) -> None:
        result = runner.invoke(cli_main.app, ["history", "show", "feedc0"])
        assert result.exit_code == 0, result.output
        assert "Likely Mild" in result.output

    def test_show_missing(self) -> None:
        result = runner.invoke(cli_main.app, ["history", "show", "nope"])
        assert result.exit_code == 1


class TestExport:
    def test_json(self, saved_record_id: str, tmp_path: Path) -> None:
        out = tmp_path / "record.json"
        result = runner.invoke(
            cli_main.app, ["export", saved_record_id, "--format", "json", "--output", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["id"] == saved_record_id

    def test_pdf(self, saved_record_id: str, tmp_path: Path) -> None:
        pytest.importorskip("reportlab")
        out = tmp_path / "report.pdf"
        result = runner.invoke(cli_main.app, ["export", saved_record_id, "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert out.read_bytes().startswith(b"%PDF")

    def test_unknown_format(self, saved_record_id: str) -> None:
        result = runner.invoke(cli_main.app, ["export", saved_record_id, "--format", "docx"])
        assert result.exit_code != 0

    def test_unknown_record(self) -> None:
        result = runner.invoke(cli_main.app, ["export", "missing"])
        assert result.exit_code == 1
