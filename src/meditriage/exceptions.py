"""Exception hierarchy for meditriage."""


class MediTriageError(Exception):
    """Base exception for all meditriage errors."""


class AnalysisClientError(MediTriageError):
    """Raised when the AI analysis collaborator fails for any reason.

    ``reason`` carries the user-facing message (missing credentials, empty
    response, transport failure).
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class PersistenceError(MediTriageError):
    """Raised when a persistence backend operation fails."""


class ExportError(MediTriageError):
    """Raised when an analysis record cannot be rendered for export."""
