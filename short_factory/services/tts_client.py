"""TTS (Text-to-Speech) client abstraction for multiple providers."""

import io
from typing import Any, Optional

import requests
from pydub import AudioSegment

from short_factory.core.config import Settings
from short_factory.core.exceptions import SpeechSynthesisError
from short_factory.models.schemas import SpeechResult

OPENAI_VOICES = ["alloy", "ash", "coral", "echo", "fable", "nova", "onyx", "sage", "shimmer"]


class TTSClient:
    """TTS client supporting ElevenLabs, OpenAI and a silent stub."""

    def __init__(self, settings: Settings, logger: Any):
        """
        Initialize TTS client.

        Args:
            settings: Application settings
            logger: Logger instance
        """
        self.settings = settings
        self.logger = logger
        self.provider = self._detect_provider()

    def _detect_provider(self) -> str:
        """Detect which TTS provider to use based on available credentials."""
        if self.settings.elevenlabs_api_key:
            return "elevenlabs"
        elif self.settings.openai_api_key:
            return "openai"
        else:
            return "stub"

    def list_voices(self) -> list[str]:
        """Voices the active provider accepts."""
        if self.provider == "openai":
            return list(OPENAI_VOICES)
        if self.provider == "elevenlabs":
            return [self.settings.elevenlabs_voice_id] if self.settings.elevenlabs_voice_id else []
        return [self.settings.default_voice]

    def generate(self, text: str, voice_id: Optional[str] = None) -> SpeechResult:
        """
        Synthesize speech for one scene.

        Args:
            text: Text to convert to speech
            voice_id: Provider voice; falls back to the configured default

        Returns:
            Encoded audio and its duration

        Raises:
            SpeechSynthesisError: If generation fails
        """
        if not text or not text.strip():
            raise SpeechSynthesisError("Text cannot be empty")

        self.logger.info(f"Generating speech using {self.provider} provider for {len(text)} characters...")

        if self.provider == "elevenlabs":
            audio, audio_format = self._generate_elevenlabs(text, voice_id)
        elif self.provider == "openai":
            audio, audio_format = self._generate_openai(text, voice_id)
        else:
            audio, audio_format = self._generate_stub(text)

        duration = self._measure_duration(audio, audio_format)
        self.logger.debug(f"Speech generated: {duration:.2f}s of {audio_format}")
        return SpeechResult(audio=audio, duration_seconds=duration, audio_format=audio_format)

    def _generate_elevenlabs(self, text: str, voice_id: Optional[str] = None) -> tuple[bytes, str]:
        """Generate speech using ElevenLabs API."""
        voice_id = voice_id if voice_id and voice_id not in OPENAI_VOICES else self.settings.elevenlabs_voice_id
        if not voice_id:
            raise SpeechSynthesisError("ElevenLabs voice ID not configured")

        url = f"https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"

        headers = {
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
            "xi-api-key": self.settings.elevenlabs_api_key,
        }

        data = {
            "text": text,
            "model_id": self.settings.elevenlabs_model,
            "voice_settings": {
                "stability": 0.5,
                "similarity_boost": 0.75,
            },
        }

        try:
            response = requests.post(url, json=data, headers=headers, timeout=self.settings.http_timeout_seconds)
        except requests.exceptions.RequestException as e:
            raise SpeechSynthesisError(f"Network error calling ElevenLabs API: {e}") from e

        if response.status_code != 200:
            raise SpeechSynthesisError(f"ElevenLabs API returned status {response.status_code}: {response.text}")

        return response.content, "mp3"

    def _generate_openai(self, text: str, voice_id: Optional[str] = None) -> tuple[bytes, str]:
        """Generate speech using OpenAI TTS API."""
        from openai import OpenAI

        client = OpenAI(api_key=self.settings.openai_api_key, timeout=self.settings.http_timeout_seconds)
        voice = voice_id if voice_id in OPENAI_VOICES else self.settings.default_voice

        try:
            response = client.audio.speech.create(
                model=self.settings.openai_tts_model,
                voice=voice,
                input=text,
                response_format="wav",
            )
        except Exception as e:
            raise SpeechSynthesisError(f"OpenAI TTS API error: {e}") from e

        return response.content, "wav"

    def _generate_stub(self, text: str) -> tuple[bytes, str]:
        """
        Generate stub audio (silent placeholder).

        Lets the pipeline run end to end when no TTS provider is configured.
        """
        self.logger.warning("Using stub TTS - generating silent audio placeholder")
        # Rough estimate: 150 words per minute = 2.5 words per second
        word_count = len(text.split())
        duration_seconds = max(1.0, word_count / 2.5)

        silent_audio = AudioSegment.silent(duration=int(duration_seconds * 1000), frame_rate=24000)
        buffer = io.BytesIO()
        silent_audio.export(buffer, format="wav")
        return buffer.getvalue(), "wav"

    @staticmethod
    def _measure_duration(audio: bytes, audio_format: str) -> float:
        try:
            segment = AudioSegment.from_file(io.BytesIO(audio), format=audio_format)
        except Exception as e:
            raise SpeechSynthesisError(f"Could not decode synthesized {audio_format} audio: {e}") from e
        return segment.duration_seconds
