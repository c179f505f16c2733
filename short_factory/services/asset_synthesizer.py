"""Asset Synthesizer - speech, captions and footage for every scene of a job."""

from pathlib import Path
from typing import Any, Optional, Protocol

from short_factory.core.config import Settings
from short_factory.core.exceptions import FootageNotFoundError, StorageCleanupError
from short_factory.models.schemas import (
    AssembledScene,
    CaptionToken,
    FootageAsset,
    ImageScene,
    Orientation,
    RenderConfig,
    SceneRequest,
    SearchScene,
    SpeechResult,
)
from short_factory.services.footage_matcher import FootageMatcher
from short_factory.storage.repository import MediaRepository
from short_factory.utils.io_utils import remove_temp_file, temp_file_path


class SpeechSynthesizer(Protocol):
    def generate(self, text: str, voice_id: Optional[str] = None) -> SpeechResult: ...


class Transcriber(Protocol):
    def transcribe(self, audio_path: Path) -> list[CaptionToken]: ...


class AssetSynthesizer:
    """Runs the per-scene synthesis sequence in order and tracks job duration."""

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        tts_client: SpeechSynthesizer,
        transcriber: Transcriber,
        footage_matcher: FootageMatcher,
        repository: MediaRepository,
    ):
        """
        Initialize the asset synthesizer.

        Args:
            settings: Application settings
            logger: Logger instance
            tts_client: Speech synthesis collaborator
            transcriber: Transcription collaborator
            footage_matcher: Stock footage matcher
            repository: Media repository (stored images)
        """
        self.settings = settings
        self.logger = logger
        self.tts_client = tts_client
        self.transcriber = transcriber
        self.footage_matcher = footage_matcher
        self.repository = repository
        self.temp_dir = settings.temp_dir

    def synthesize(
        self,
        job_id: str,
        scenes: list[SceneRequest],
        config: RenderConfig,
    ) -> tuple[list[AssembledScene], float]:
        """
        Produce audio, captions and footage for each scene.

        Narration audio kept for rendering is deleted again if any scene fails;
        on success the caller owns it.

        Args:
            job_id: Job identifier, used to name temp files
            scenes: Prepared scenes in playback order
            config: Render configuration

        Returns:
            Tuple of (assembled scenes, total duration in seconds)
        """
        orientation = config.orientation or Orientation.PORTRAIT
        voice = config.voice or self.settings.default_voice
        used_footage_ids: set[str] = set()
        assembled: list[AssembledScene] = []
        written: list[Path] = []
        total_duration = 0.0

        try:
            for index, scene in enumerate(scenes):
                is_last = index == len(scenes) - 1
                self.logger.info(f"Synthesizing scene {index + 1}/{len(scenes)}")

                speech = self.tts_client.generate(scene.text, voice)
                duration = speech.duration_seconds
                if is_last and config.padding_back_ms:
                    duration += config.padding_back_ms / 1000

                prefix = f"{job_id}_{index}"
                audio_path = temp_file_path(self.temp_dir, prefix, f".{speech.audio_format}")
                written.append(audio_path)
                audio_path.write_bytes(speech.audio)

                captions = self._transcribe(speech, prefix)

                footage = self._resolve_footage(scene, duration, used_footage_ids, orientation)
                if footage.media_type == "video":
                    used_footage_ids.add(footage.id)

                assembled.append(
                    AssembledScene(
                        captions=captions,
                        footage=footage,
                        audio_path=str(audio_path),
                        duration_seconds=duration,
                    )
                )
                total_duration += duration
        except Exception:
            self.release(written)
            raise

        self.logger.info(f"Synthesized {len(assembled)} scenes, total duration {total_duration:.2f}s")
        return assembled, total_duration

    def release(self, paths: list[Path]) -> None:
        """Remove transient files, logging but never raising on failure."""
        for path in paths:
            try:
                remove_temp_file(path)
            except StorageCleanupError as e:
                self.logger.warning(str(e))

    def _transcribe(self, speech: SpeechResult, prefix: str) -> list[CaptionToken]:
        transcription_path = temp_file_path(self.temp_dir, f"{prefix}_captions", f".{speech.audio_format}")
        transcription_path.write_bytes(speech.audio)
        try:
            return self.transcriber.transcribe(transcription_path)
        finally:
            self.release([transcription_path])

    def _resolve_footage(
        self,
        scene: SceneRequest,
        duration: float,
        used_footage_ids: set[str],
        orientation: Orientation,
    ) -> FootageAsset:
        match scene:
            case SearchScene():
                return self.footage_matcher.find_footage(
                    scene.search_terms,
                    duration,
                    used_footage_ids,
                    orientation=orientation,
                )
            case ImageScene():
                image_path = self.repository.find_image(scene.image_id)
                if image_path is None:
                    raise FootageNotFoundError(f"Image {scene.image_id} not found")
                width, height = orientation.dimensions
                return FootageAsset(
                    id=f"image:{scene.image_id}",
                    url=str(image_path),
                    width=width,
                    height=height,
                    media_type="image",
                )
            case _:
                raise TypeError(f"Unknown scene type: {type(scene).__name__}")

