"""Analysis collaborator protocol: the only boundary to the generative model."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from meditriage.models import AnalysisRequest


@runtime_checkable
class IAnalysisClient(Protocol):
    """Turns patient input plus media into one markdown response.

    Implementations raise ``AnalysisClientError`` with a user-facing reason
    on any failure (missing credentials, empty output, transport error).
    """

    async def analyze(self, request: AnalysisRequest) -> str:
        ...
