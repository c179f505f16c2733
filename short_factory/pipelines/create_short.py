"""Short video pipeline - scenes → speech, captions, footage → music → render."""

from pathlib import Path
from typing import Any, Optional

from short_factory.core.config import Settings
from short_factory.core.logging_config import get_logger
from short_factory.models.schemas import AssembledScene, Job
from short_factory.services.asset_synthesizer import AssetSynthesizer
from short_factory.services.footage_matcher import FootageMatcher
from short_factory.services.job_queue import JobQueue
from short_factory.services.music_catalog import DEFAULT_MUSIC_CATALOG
from short_factory.services.music_selector import MusicSelector
from short_factory.services.pexels_client import PexelsClient
from short_factory.services.render_dispatcher import RenderDispatcher
from short_factory.services.scene_preparer import ScenePreparer
from short_factory.services.transcriber import WhisperTranscriber
from short_factory.services.tts_client import TTSClient
from short_factory.services.video_renderer import MoviePyRenderer
from short_factory.storage.repository import MediaRepository


class ShortPipeline:
    """Runs one job end to end. Used as the job queue's processor."""

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        preparer: ScenePreparer,
        synthesizer: AssetSynthesizer,
        music_selector: MusicSelector,
        dispatcher: RenderDispatcher,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Application settings
            logger: Logger instance
            preparer: Splits long scenes
            synthesizer: Produces per-scene audio, captions and footage
            music_selector: Picks the background track
            dispatcher: Builds the composition and renders it
        """
        self.settings = settings
        self.logger = logger
        self.preparer = preparer
        self.synthesizer = synthesizer
        self.music_selector = music_selector
        self.dispatcher = dispatcher

    def run(self, job: Job) -> Path:
        """
        Produce the video for a job.

        Args:
            job: Job to process

        Returns:
            Path of the rendered artifact

        Raises:
            ShortFactoryError: Any stage failure; the job is then considered failed
        """
        logger = self.logger.bind(job_id=job.id)
        logger.info("=" * 60)
        logger.info(f"Creating short video {job.id}")
        logger.info("=" * 60)

        logger.info("Step 1: Preparing scenes...")
        scenes = self.preparer.prepare(job.scenes)
        logger.info(f"{len(job.scenes)} submitted scenes → {len(scenes)} prepared scenes")

        logger.info("Step 2: Synthesizing speech, captions and footage...")
        assembled, total_duration = self.synthesizer.synthesize(job.id, scenes, job.config)

        try:
            logger.info("Step 3: Selecting background music...")
            track = self.music_selector.select(total_duration, job.config.music)
            logger.info(f"Selected music: {track.file} ({track.mood.value})")

            logger.info("Step 4: Rendering video...")
            composition = self.dispatcher.build_composition(
                assembled,
                total_duration,
                track,
                self.music_selector.track_path(track),
                job.config,
            )
            output_path = self.dispatcher.dispatch(composition, job.id)
        finally:
            self._release_audio(assembled)

        logger.info(f"✅ Video ready: {output_path} ({total_duration:.2f}s)")
        return output_path

    def _release_audio(self, scenes: list[AssembledScene]) -> None:
        self.synthesizer.release([Path(scene.audio_path) for scene in scenes])


def build_job_queue(settings: Settings, logger: Optional[Any] = None) -> JobQueue:
    """
    Wire the default collaborators into a ready-to-use job queue.

    Args:
        settings: Application settings
        logger: Logger instance (defaults to a module logger)

    Returns:
        JobQueue whose processor is a ShortPipeline

    Raises:
        MusicCatalogError: If a catalog track is missing from the music directory
    """
    logger = logger or get_logger(__name__)
    settings.ensure_directories()

    music_selector = MusicSelector(settings, logger, DEFAULT_MUSIC_CATALOG)
    music_selector.ensure_files_exist()

    repository = MediaRepository(settings, logger)
    footage_matcher = FootageMatcher(settings, logger, PexelsClient(settings, logger))
    synthesizer = AssetSynthesizer(
        settings,
        logger,
        TTSClient(settings, logger),
        WhisperTranscriber(settings, logger),
        footage_matcher,
        repository,
    )
    pipeline = ShortPipeline(
        settings,
        logger,
        ScenePreparer(settings, logger),
        synthesizer,
        music_selector,
        RenderDispatcher(settings, logger, MoviePyRenderer(settings, logger)),
    )
    return JobQueue(settings, logger, pipeline.run, repository)
