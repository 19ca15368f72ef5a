"""Nested pydantic-settings configuration for the application.

Each sub-config reads its own ``MEDITRIAGE_<GROUP>_*`` env vars::

    export MEDITRIAGE_LLM_MODEL=gemini/gemini-2.5-pro
    export MEDITRIAGE_HISTORY_MAX_RECORDS=200
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_DISCLAIMER = (
    "MediAI is an AI assistant, not a doctor. This report is for informational "
    "purposes only and is not a medical diagnosis or treatment plan. Always "
    "consult a professional."
)


class LLMConfig(BaseSettings):
    """AI collaborator configuration.

    Env vars use ``MEDITRIAGE_LLM_`` prefix. ``model`` is a LiteLLM model
    id, so the provider prefix (``gemini/``, ``openai/``, ...) selects the
    transport.
    """

    model_config = {"env_prefix": "MEDITRIAGE_LLM_"}

    provider: Literal["gemini", "openai", "anthropic", "ollama", "bedrock"] = "gemini"
    model: str = "gemini/gemini-2.5-pro"
    api_key: str = ""
    base_url: Optional[str] = None
    temperature: float = 0.4
    timeout: Optional[float] = None


class HistoryConfig(BaseSettings):
    """Local analysis history configuration.

    Env vars use ``MEDITRIAGE_HISTORY_`` prefix. ``max_records`` caps the
    newest-first list; ``0`` disables the cap.
    """

    model_config = {"env_prefix": "MEDITRIAGE_HISTORY_"}

    backend: Literal["file", "memory"] = "file"
    store_path: Path = Path("./.meditriage")
    slot: str = "analysis_history"
    max_records: int = Field(default=500, ge=0)


class PDFFormattingConfig(BaseSettings):
    """PDF export formatting configuration.

    Env vars use ``MEDITRIAGE_PDF_`` prefix::

        export MEDITRIAGE_PDF_PAGE_SIZE=letter
    """

    model_config = {"env_prefix": "MEDITRIAGE_PDF_"}

    page_size: Literal["letter", "a4"] = "a4"
    margin_inches: float = Field(default=0.55, gt=0.0, le=3.0)
    font_family: str = "Helvetica"
    body_font_size: int = Field(default=10, ge=6, le=72)
    heading_font_size: int = Field(default=12, ge=6, le=72)
    app_name: str = "MediAI"
    disclaimer: str = DEFAULT_DISCLAIMER


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``MEDITRIAGE_OBSERVABILITY_`` prefix. ``json_logs`` left
    unset picks JSON lines when stderr is not a terminal.
    """

    model_config = {"env_prefix": "MEDITRIAGE_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: Optional[bool] = None


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    pdf: PDFFormattingConfig = Field(default_factory=PDFFormattingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
