"""Error Handler - formats pipeline failures for the logs."""

from typing import Optional

from short_factory.core.exceptions import (
    FootageNotFoundError,
    FootageTimeoutError,
    MusicCatalogError,
    RenderError,
    SpeechSynthesisError,
    TerminalProviderError,
    TranscriptionError,
)


def format_error_message(
    operation: str,
    error: Exception,
    context: Optional[dict] = None,
    suggestion: Optional[str] = None,
) -> str:
    """
    Format a readable error message.

    Args:
        operation: What operation was being performed (e.g., "Creating short video")
        error: The exception that occurred
        context: Additional context (e.g., {"job_id": "abc123", "scene": 2})
        suggestion: Optional suggestion for how to fix the issue

    Returns:
        Formatted error message
    """
    error_type = type(error).__name__
    error_msg = str(error)

    context_str = ""
    if context:
        context_parts = [f"{k}={v}" for k, v in context.items()]
        context_str = f" ({', '.join(context_parts)})"

    message = f"❌ {operation} failed{context_str}\n"
    message += f"   Error: {error_type}: {error_msg}"

    if suggestion:
        message += f"\n   💡 Suggestion: {suggestion}"

    return message


def get_failure_suggestion(error: Exception) -> Optional[str]:
    """
    Get a suggestion for how to handle a failed job.

    Args:
        error: The exception that aborted the job

    Returns:
        Suggestion string or None
    """
    error_msg = str(error).lower()

    if isinstance(error, FootageTimeoutError):
        return "Footage provider kept timing out. Check your connection or raise FOOTAGE_SEARCH_TIMEOUT_SECONDS."
    if isinstance(error, FootageNotFoundError):
        return "No stock footage matched. Try broader search terms or a shorter scene."
    if isinstance(error, TerminalProviderError):
        if "api key" in error_msg or "401" in error_msg:
            return "Check PEXELS_API_KEY in your .env file."
        return "The footage provider rejected the request. Check logs for details."
    if isinstance(error, SpeechSynthesisError):
        if "api key" in error_msg or "not configured" in error_msg:
            return "Check your TTS API key in .env file."
        if "rate limit" in error_msg or "429" in error_msg:
            return "TTS rate limit exceeded. Wait a few minutes and resubmit."
        return "Speech synthesis failed. Resubmit the job once the provider recovers."
    if isinstance(error, TranscriptionError):
        return "Transcription failed. Check OPENAI_API_KEY and the audio format."
    if isinstance(error, RenderError):
        return "Rendering failed after all retries. Check ffmpeg is installed and footage URLs are reachable."
    if isinstance(error, MusicCatalogError):
        return "The music catalog has no track for this mood. Add one or pick another mood."

    return None
