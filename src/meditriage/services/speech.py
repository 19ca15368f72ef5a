"""Speech capability seam.

Playback belongs to the host environment; the core only decides what to
say and in which language.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

from meditriage.models import Language
from meditriage.parsing.interpreter import AnalysisView

log = logging.getLogger(__name__)


@runtime_checkable
class ISpeechSynthesizer(Protocol):
    """Host text-to-speech capability."""

    def is_available(self) -> bool:
        ...

    def speak(self, text: str, language_tag: Optional[str] = None) -> None:
        ...

    def cancel(self) -> None:
        ...


class NullSpeechSynthesizer:
    """Synthesizer for hosts without speech support."""

    def is_available(self) -> bool:
        return False

    def speak(self, text: str, language_tag: Optional[str] = None) -> None:
        return None

    def cancel(self) -> None:
        return None


def narrate(
    view: AnalysisView,
    language: Language,
    synthesizer: Optional[ISpeechSynthesizer] = None,
) -> bool:
    """Speak the view's narration; ``False`` when speech is unavailable."""
    if synthesizer is None or not synthesizer.is_available():
        log.debug("Speech unavailable, skipping narration")
        return False
    synthesizer.cancel()
    tag = language.speech_tag
    synthesizer.speak(view.speech_text, None if tag == "auto" else tag)
    return True
