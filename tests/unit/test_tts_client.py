"""Tests for TTS client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from short_factory.core.exceptions import SpeechSynthesisError
from short_factory.services.tts_client import OPENAI_VOICES, TTSClient


@pytest.fixture
def tts_client(settings, logger):
    """Create TTSClient with no provider credentials (stub)."""
    return TTSClient(settings, logger)


def test_provider_detection(settings, logger):
    """Test ElevenLabs wins over OpenAI and the stub is the fallback."""
    assert TTSClient(settings, logger).provider == "stub"

    settings.openai_api_key = "sk-test"
    assert TTSClient(settings, logger).provider == "openai"

    settings.elevenlabs_api_key = "el-test"
    assert TTSClient(settings, logger).provider == "elevenlabs"


@patch("short_factory.services.tts_client.TTSClient._measure_duration", return_value=2.0)
def test_stub_generates_wav(mock_measure, tts_client):
    """Test the stub provider returns wav audio with a measured duration."""
    result = tts_client.generate("one two three four five")

    assert result.audio_format == "wav"
    assert result.audio[:4] == b"RIFF"
    assert result.duration_seconds == 2.0
    mock_measure.assert_called_once()


def test_empty_text_is_rejected(tts_client):
    """Test empty narration raises SpeechSynthesisError."""
    with pytest.raises(SpeechSynthesisError):
        tts_client.generate("   ")


def test_list_voices(settings, logger):
    """Test the voice list follows the active provider."""
    assert TTSClient(settings, logger).list_voices() == [settings.default_voice]

    settings.openai_api_key = "sk-test"
    assert TTSClient(settings, logger).list_voices() == OPENAI_VOICES


@patch("short_factory.services.tts_client.TTSClient._measure_duration", return_value=1.5)
@patch("short_factory.services.tts_client.requests.post")
def test_elevenlabs_generate(mock_post, mock_measure, settings, logger):
    """Test ElevenLabs audio is returned as mp3."""
    settings.elevenlabs_api_key = "el-test"
    settings.elevenlabs_voice_id = "voice-1"
    mock_post.return_value = MagicMock(status_code=200, content=b"mp3-bytes")

    result = TTSClient(settings, logger).generate("Hello there")

    assert result.audio == b"mp3-bytes"
    assert result.audio_format == "mp3"
    assert mock_post.call_args.args[0].endswith("/text-to-speech/voice-1")


@patch("short_factory.services.tts_client.requests.post")
def test_elevenlabs_error_raises(mock_post, settings, logger):
    """Test ElevenLabs failures raise SpeechSynthesisError."""
    settings.elevenlabs_api_key = "el-test"
    settings.elevenlabs_voice_id = "voice-1"
    mock_post.side_effect = requests.exceptions.ConnectionError("down")

    with pytest.raises(SpeechSynthesisError):
        TTSClient(settings, logger).generate("Hello there")


@patch("short_factory.services.tts_client.requests.post")
def test_elevenlabs_bad_status_raises(mock_post, settings, logger):
    """Test non-200 answers raise SpeechSynthesisError."""
    settings.elevenlabs_api_key = "el-test"
    settings.elevenlabs_voice_id = "voice-1"
    mock_post.return_value = MagicMock(status_code=429, text="rate limit")

    with pytest.raises(SpeechSynthesisError, match="429"):
        TTSClient(settings, logger).generate("Hello there")
