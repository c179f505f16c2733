"""Error taxonomy for the short-video pipeline."""

from typing import Optional


class ShortFactoryError(Exception):
    """Base class for every error raised by the pipeline."""


class ValidationError(ShortFactoryError):
    """Malformed submission. Raised synchronously, the job is never enqueued."""

    def __init__(self, message: str, missing_fields: Optional[list[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class ProviderError(ShortFactoryError):
    """An external media provider failed."""


class TransientProviderError(ProviderError):
    """Network hiccup or 5xx from a provider; worth retrying."""


class FootageTimeoutError(TransientProviderError):
    """A footage search did not answer within the per-attempt timeout."""


class TerminalProviderError(ProviderError):
    """Provider failure that retrying cannot fix (bad credentials, nothing found)."""


class FootageNotFoundError(TerminalProviderError):
    """No search term produced footage that satisfies the scene."""


class SpeechSynthesisError(ShortFactoryError):
    """The TTS collaborator could not synthesize a scene."""


class TranscriptionError(ShortFactoryError):
    """The transcription collaborator could not caption a scene."""


class RenderError(ShortFactoryError):
    """The rendering engine failed to produce the artifact."""


class StorageCleanupError(ShortFactoryError):
    """A temporary file could not be removed. Logged, never fatal."""


class MusicCatalogError(ShortFactoryError):
    """The music catalog has no track for the requested mood."""
