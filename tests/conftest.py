"""Shared pytest fixtures and configuration."""

import random

import pytest

from short_factory.core.config import Settings
from short_factory.core.logging_config import get_logger
from short_factory.models.schemas import FootageCandidate, FootageEncoding


@pytest.fixture
def settings(tmp_path):
    """Create test settings instance with storage under a temp directory."""
    return Settings(
        data_dir=str(tmp_path / "data"),
        music_dir=str(tmp_path / "music"),
        elevenlabs_api_key=None,
        openai_api_key=None,
        pexels_api_key="test-pexels-key",
        render_retry_delay_seconds=0,
    )


@pytest.fixture
def logger():
    """Create test logger instance."""
    return get_logger(__name__)


@pytest.fixture
def rng():
    """Seeded randomness source."""
    return random.Random(1234)


def _make_candidate(
    candidate_id: str,
    duration: float = 30.0,
    fps: float = 25.0,
    width: int = 1080,
    height: int = 1920,
    quality: str = "hd",
) -> FootageCandidate:
    """Build a provider search result with one encoding."""
    return FootageCandidate(
        id=candidate_id,
        duration_seconds=duration,
        fps=fps,
        encodings=[
            FootageEncoding(
                quality=quality,
                width=width,
                height=height,
                url=f"https://videos.example.com/{candidate_id}.mp4",
            )
        ],
    )


@pytest.fixture
def make_candidate():
    """Factory for footage search results."""
    return _make_candidate
