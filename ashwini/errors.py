"""
Error Taxonomy

Exceptions raised by the generation client and the response extractor.
Chat sessions and the alert dispatcher never raise these to their callers.
"""


class AshwiniError(Exception):
    """Base exception for all orchestration errors."""
    pass


class GenerationError(AshwiniError):
    """The generation call did not produce usable text."""
    pass


class TransportError(GenerationError):
    """The backend could not be reached."""
    pass


class UpstreamError(GenerationError):
    """The backend rejected or failed the call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(GenerationError):
    """The call succeeded but yielded no text."""
    pass


class MalformedOutputError(AshwiniError):
    """Model text could not be recovered as a structured value."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class AnalysisError(AshwiniError):
    """A workflow failed; ``user_message`` is safe to show in the UI."""

    def __init__(self, user_message: str, kind: str = "") -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.kind = kind
