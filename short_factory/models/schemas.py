"""Pydantic models and schemas for the short-video pipeline."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints


# ============================================================================
# Enums
# ============================================================================


class Orientation(str, Enum):
    """Output frame orientation."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @property
    def dimensions(self) -> tuple[int, int]:
        """(width, height) footage must match exactly."""
        if self is Orientation.PORTRAIT:
            return 1080, 1920
        return 1920, 1080


class CaptionPosition(str, Enum):
    """Vertical placement of the caption pages."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class MusicMood(str, Enum):
    """Mood tags the music catalog is organised by."""

    SAD = "sad"
    MELANCHOLIC = "melancholic"
    HAPPY = "happy"
    EUPHORIC = "euphoric/high"
    EXCITED = "excited"
    CHILL = "chill"
    UNEASY = "uneasy"
    ANGRY = "angry"
    DARK = "dark"
    HOPEFUL = "hopeful"
    CONTEMPLATIVE = "contemplative"
    FUNNY = "funny/quirky"


class MusicVolume(str, Enum):
    """Background music loudness relative to narration."""

    MUTED = "muted"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class JobStatus(str, Enum):
    """Externally visible state of a job."""

    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"


# ============================================================================
# Scene Request Models
# ============================================================================

# Stripped before the length check, so blank input is rejected
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class SearchScene(BaseModel):
    """Narrated scene backed by stock footage found via search terms."""

    kind: Literal["search"] = Field(default="search", description="Scene discriminant")
    text: NonBlankStr = Field(..., description="Text to be spoken in the scene")
    search_terms: list[NonBlankStr] = Field(
        ..., min_length=1, description="Footage search terms, one word each, 2-3 per scene recommended"
    )


class ImageScene(BaseModel):
    """Narrated scene backed by a previously stored image."""

    kind: Literal["image"] = Field(default="image", description="Scene discriminant")
    text: NonBlankStr = Field(..., description="Text to be spoken in the scene")
    image_id: NonBlankStr = Field(..., description="Identifier of a stored image")


SceneRequest = Annotated[Union[SearchScene, ImageScene], Field(discriminator="kind")]


class RenderConfig(BaseModel):
    """Style configuration supplied with a job."""

    padding_back_ms: Optional[int] = Field(
        default=None, ge=0, description="How long the video keeps playing after the speech ends, in ms"
    )
    music: Optional[MusicMood] = Field(default=None, description="Mood used to pick the background music")
    caption_position: Optional[CaptionPosition] = Field(default=None, description="Caption placement")
    caption_background_color: Optional[str] = Field(
        default=None, description="Caption background, any CSS colour name or hex value (default: blue)"
    )
    voice: Optional[str] = Field(default=None, description="Voice used for speech synthesis")
    orientation: Optional[Orientation] = Field(default=None, description="Output orientation (default: portrait)")
    music_volume: Optional[MusicVolume] = Field(default=None, description="Music volume (default: high)")


class CreateShortRequest(BaseModel):
    """A complete submission: ordered scenes plus render configuration."""

    scenes: list[SceneRequest] = Field(..., min_length=1, description="Scenes in playback order")
    config: RenderConfig = Field(default_factory=RenderConfig, description="Render configuration")


class Job(BaseModel):
    """One queued end-to-end video request. Lives only in memory."""

    id: str = Field(..., description="Unique job identifier, also the output artifact id")
    scenes: list[SceneRequest] = Field(..., description="Scenes as submitted")
    config: RenderConfig = Field(..., description="Render configuration")


# ============================================================================
# Media Models
# ============================================================================


class SpeechResult(BaseModel):
    """Synthesized narration for one scene."""

    audio: bytes = Field(..., description="Encoded audio")
    duration_seconds: float = Field(..., ge=0.0, description="Audio length in seconds")
    audio_format: str = Field(default="wav", description="Container format of `audio` (wav, mp3)")


class CaptionToken(BaseModel):
    """A single timed word or word fragment."""

    text: str = Field(..., description="Token text, may carry leading whitespace")
    start_ms: int = Field(..., ge=0, description="Start offset in ms")
    end_ms: int = Field(..., ge=0, description="End offset in ms")


class CaptionLine(BaseModel):
    """One visual row of caption tokens."""

    tokens: list[CaptionToken] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(token.text.strip() for token in self.tokens)


class CaptionPage(BaseModel):
    """Lines shown on screen together."""

    start_ms: int = Field(..., description="First token start")
    end_ms: int = Field(..., description="Last token end")
    lines: list[CaptionLine] = Field(default_factory=list)


class FootageEncoding(BaseModel):
    """One downloadable rendition of a footage asset."""

    quality: str = Field(..., description="Quality tier (sd, hd, uhd)")
    width: int = Field(..., description="Frame width")
    height: int = Field(..., description="Frame height")
    url: str = Field(..., description="Download URL")


class FootageCandidate(BaseModel):
    """A search hit returned by the footage provider."""

    id: str = Field(..., description="Provider asset id")
    duration_seconds: float = Field(..., description="Stated duration")
    fps: float = Field(default=25.0, description="Native frame rate")
    encodings: list[FootageEncoding] = Field(default_factory=list)


class FootageAsset(BaseModel):
    """The footage chosen for a scene."""

    id: str = Field(..., description="Asset id, unique within a job for stock footage")
    url: str = Field(..., description="URL or local path of the media")
    width: int = Field(..., description="Frame width")
    height: int = Field(..., description="Frame height")
    media_type: Literal["video", "image"] = Field(default="video", description="Kind of media")


class AssembledScene(BaseModel):
    """Everything the renderer needs for one scene."""

    captions: list[CaptionToken] = Field(default_factory=list)
    footage: FootageAsset
    audio_path: str = Field(..., description="Narration audio file in transient storage")
    duration_seconds: float = Field(..., description="Speech duration, plus tail padding on the last scene")


class MusicTrack(BaseModel):
    """Catalog entry for a background music file."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(..., description="File name inside the music directory")
    start_sec: float = Field(..., description="Where the usable part of the track starts")
    end_sec: float = Field(..., description="Where the usable part of the track ends")
    mood: MusicMood = Field(..., description="Mood tag")


class CompositionDescriptor(BaseModel):
    """Full description of the video handed to the rendering engine."""

    music: MusicTrack
    music_path: str = Field(..., description="Absolute path of the music file")
    scenes: list[AssembledScene]
    duration_seconds: float = Field(..., description="Total video length")
    padding_back_ms: int = Field(default=0)
    caption_position: CaptionPosition = Field(default=CaptionPosition.CENTER)
    caption_background_color: str = Field(default="blue")
    orientation: Orientation = Field(default=Orientation.PORTRAIT)
    music_volume: MusicVolume = Field(default=MusicVolume.HIGH)


class VideoSummary(BaseModel):
    """Listing entry combining stored artifacts and queued jobs."""

    id: str
    status: JobStatus
