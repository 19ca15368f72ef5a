"""Application services built on the parsing, client and history layers."""

from meditriage.services.analysis_service import (
    AnalysisOutcome,
    AnalysisService,
    validate_patient_input,
)
from meditriage.services.speech import ISpeechSynthesizer, NullSpeechSynthesizer, narrate

__all__ = [
    "AnalysisOutcome",
    "AnalysisService",
    "ISpeechSynthesizer",
    "NullSpeechSynthesizer",
    "narrate",
    "validate_patient_input",
]
