"""Application configuration using pydantic-settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via environment variables or a .env file.
    See .env.example for a template.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================================================
    # Application Settings
    # ========================================================================
    app_name: str = Field(default="Short Factory", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")

    # ========================================================================
    # Storage Settings
    # ========================================================================
    data_dir: str = Field(
        default=str(Path.home() / ".short-factory"),
        description="Root directory for rendered videos, temp files and uploaded images",
    )
    music_dir: str = Field(default="static/music", description="Directory holding the music catalog files")

    # ========================================================================
    # TTS (Text-to-Speech) Settings
    # ========================================================================
    elevenlabs_api_key: Optional[str] = Field(default=None, description="ElevenLabs API key")
    elevenlabs_voice_id: Optional[str] = Field(default=None, description="Default ElevenLabs voice ID")
    elevenlabs_model: str = Field(default="eleven_turbo_v2", description="ElevenLabs model ID")
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key (TTS and transcription)")
    openai_tts_model: str = Field(default="tts-1", description="OpenAI TTS model name")
    default_voice: str = Field(default="alloy", description="Voice used when a job does not request one")

    # ========================================================================
    # Transcription Settings
    # ========================================================================
    whisper_model: str = Field(default="whisper-1", description="OpenAI transcription model name")

    # ========================================================================
    # Footage Provider Settings
    # ========================================================================
    pexels_api_key: Optional[str] = Field(
        default=None,
        description="Pexels API key (get one at https://www.pexels.com/api). Set via PEXELS_API_KEY env var.",
    )
    pexels_api_url: str = Field(default="https://api.pexels.com", description="Pexels API base URL")
    footage_search_timeout_seconds: float = Field(
        default=5.0, description="Per-attempt timeout for a single footage search request (default: 5s)"
    )
    footage_max_retries: int = Field(
        default=3, description="How many times a timed-out footage search restarts the term list (default: 3)"
    )
    footage_duration_buffer_seconds: float = Field(
        default=3.0, description="Footage must outlast the narration by at least this much (default: 3s)"
    )
    footage_reference_fps: float = Field(
        default=25.0, description="Frame rate used to normalize the duration of low-fps footage (default: 25)"
    )
    footage_quality: str = Field(default="hd", description="Encoding quality tier footage must provide")
    footage_joker_terms: list[str] = Field(
        default=["nature", "globe", "space", "ocean"],
        description="Generic fallback search terms tried after the scene's own terms",
    )

    # ========================================================================
    # Scene Preparation Settings
    # ========================================================================
    scene_target_seconds: float = Field(
        default=25.0, description="Preferred maximum spoken length of a single scene (default: 25s)"
    )
    speech_chars_per_second: float = Field(
        default=13.0, description="Assumed speaking rate used to estimate scene duration (default: 13 chars/s)"
    )

    # ========================================================================
    # Caption Settings
    # ========================================================================
    caption_line_max_chars: int = Field(default=20, description="Maximum characters on one caption line")
    caption_lines_per_page: int = Field(default=1, description="Maximum caption lines shown at once")
    caption_max_gap_ms: int = Field(
        default=1000, description="Silence (ms) between words that forces a new caption page"
    )
    caption_font_path: Optional[str] = Field(default=None, description="TrueType font used for captions")
    caption_font_size: int = Field(default=72, description="Caption font size in pixels")

    # ========================================================================
    # Rendering Settings
    # ========================================================================
    render_fps: int = Field(default=25, description="Output frame rate")
    render_max_attempts: int = Field(default=3, description="Render attempts before a job fails (default: 3)")
    render_retry_delay_seconds: float = Field(
        default=5.0, description="Delay between render attempts in seconds (default: 5)"
    )

    # ========================================================================
    # Network Settings
    # ========================================================================
    http_timeout_seconds: float = Field(
        default=60.0, description="Default timeout for outbound HTTP calls (TTS, downloads)"
    )

    @property
    def videos_dir(self) -> Path:
        return Path(self.data_dir) / "videos"

    @property
    def temp_dir(self) -> Path:
        return Path(self.data_dir) / "temp"

    @property
    def images_dir(self) -> Path:
        return Path(self.data_dir) / "images"

    def ensure_directories(self) -> None:
        """Create the data directories if they do not exist yet."""
        for directory in (self.videos_dir, self.temp_dir, self.images_dir):
            directory.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
