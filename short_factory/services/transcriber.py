"""Transcriber - turns narration audio into word-timed caption tokens."""

from pathlib import Path
from typing import Any

from short_factory.core.config import Settings
from short_factory.core.exceptions import StorageCleanupError, TranscriptionError
from short_factory.models.schemas import CaptionToken
from short_factory.utils.io_utils import remove_temp_file


class WhisperTranscriber:
    """Word-level transcription via the OpenAI audio API."""

    def __init__(self, settings: Settings, logger: Any):
        """
        Initialize the transcriber.

        Args:
            settings: Application settings
            logger: Logger instance
        """
        self.settings = settings
        self.logger = logger
        self.provider = "openai" if settings.openai_api_key else "stub"

    def transcribe(self, audio_path: Path) -> list[CaptionToken]:
        """
        Transcribe an audio file and remove it afterwards.

        Args:
            audio_path: Audio file in transient storage

        Returns:
            Caption tokens in playback order

        Raises:
            TranscriptionError: If the transcription request fails
        """
        try:
            if self.provider == "openai":
                return self._transcribe_openai(audio_path)
            self.logger.warning("Using stub transcription - captions will be empty")
            return []
        finally:
            try:
                remove_temp_file(audio_path)
            except StorageCleanupError as e:
                self.logger.warning(str(e))

    def _transcribe_openai(self, audio_path: Path) -> list[CaptionToken]:
        from openai import OpenAI

        client = OpenAI(api_key=self.settings.openai_api_key, timeout=self.settings.http_timeout_seconds)
        self.logger.debug(f"Starting to transcribe audio: {audio_path.name}")

        try:
            with open(audio_path, "rb") as f:
                response = client.audio.transcriptions.create(
                    model=self.settings.whisper_model,
                    file=f,
                    response_format="verbose_json",
                    timestamp_granularities=["word"],
                )
        except Exception as e:
            raise TranscriptionError(f"OpenAI transcription error: {e}") from e

        tokens = [
            CaptionToken(
                text=word.word,
                start_ms=int(round(word.start * 1000)),
                end_ms=int(round(word.end * 1000)),
            )
            for word in (response.words or [])
            if word.word.strip()
        ]
        self.logger.debug(f"Transcription finished: {len(tokens)} tokens")
        return tokens
