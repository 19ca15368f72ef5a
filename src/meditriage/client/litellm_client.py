"""Analysis client routed through LiteLLM.

One multimodal ``litellm.acompletion()`` call per analysis: system
instruction, patient text, then any images, report and voice recording.
No retry; a failed call surfaces as ``AnalysisClientError``.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from meditriage.client.prompts import (
    AUDIO_ATTACHMENT_NOTE,
    REPORT_ATTACHMENT_NOTE,
    SYSTEM_INSTRUCTION,
    build_prompt_text,
)
from meditriage.core.config import LLMConfig
from meditriage.exceptions import AnalysisClientError
from meditriage.models import AnalysisRequest, MediaPayload

log = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API Key is missing. Please check your environment configuration."
EMPTY_RESPONSE_MESSAGE = "No response generated from the model."
GENERIC_FAILURE_MESSAGE = "Failed to analyze symptoms. Please try again."

# Providers that authenticate without an API key (local server, IAM).
_KEYLESS_PROVIDERS = frozenset({"ollama", "bedrock"})


def _file_part(payload: MediaPayload) -> dict[str, Any]:
    return {"type": "file", "file": {"file_data": payload.to_data_uri()}}


def _image_part(payload: MediaPayload) -> dict[str, Any]:
    return {"type": "image_url", "image_url": {"url": payload.to_data_uri()}}


def build_messages(request: AnalysisRequest) -> list[dict[str, Any]]:
    """Assemble the chat messages for one analysis request."""
    content: list[dict[str, Any]] = [
        {"type": "text", "text": build_prompt_text(request.patient)},
    ]
    content.extend(_image_part(img) for img in request.images)
    if request.document is not None:
        content.append({"type": "text", "text": REPORT_ATTACHMENT_NOTE})
        content.append(_file_part(request.document))
    if request.audio is not None:
        content.append({"type": "text", "text": AUDIO_ATTACHMENT_NOTE})
        content.append(_file_part(request.audio))
    return [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": content},
    ]


class LiteLLMAnalysisClient:
    """``IAnalysisClient`` backed by any LiteLLM-supported provider."""

    def __init__(self, config: LLMConfig) -> None:
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    def _resolve_api_key(self) -> str:
        if self._config.api_key:
            return self._config.api_key
        return os.environ.get(f"{self._config.provider.upper()}_API_KEY", "")

    async def analyze(self, request: AnalysisRequest) -> str:
        from litellm import acompletion

        api_key = self._resolve_api_key()
        if not api_key and self._config.provider not in _KEYLESS_PROVIDERS:
            raise AnalysisClientError(MISSING_KEY_MESSAGE)

        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "messages": build_messages(request),
            "temperature": self._config.temperature,
        }
        if api_key:
            kwargs["api_key"] = api_key
        if self._config.base_url:
            kwargs["api_base"] = self._config.base_url
        if self._config.timeout is not None:
            kwargs["timeout"] = self._config.timeout

        log.info(
            "Requesting analysis from %s (%d image(s), report=%s, audio=%s)",
            self._config.model,
            len(request.images),
            request.document is not None,
            request.audio is not None,
        )
        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            log.error("Analysis request failed: %s", e)
            raise AnalysisClientError(str(e) or GENERIC_FAILURE_MESSAGE) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise AnalysisClientError(EMPTY_RESPONSE_MESSAGE)
        return content
