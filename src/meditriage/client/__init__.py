"""AI analysis collaborator: protocol, prompt contract and LiteLLM client."""

from meditriage.client.litellm_client import LiteLLMAnalysisClient
from meditriage.client.prompts import SYSTEM_INSTRUCTION, build_prompt_text
from meditriage.client.protocols import IAnalysisClient

__all__ = [
    "IAnalysisClient",
    "LiteLLMAnalysisClient",
    "SYSTEM_INSTRUCTION",
    "build_prompt_text",
]
