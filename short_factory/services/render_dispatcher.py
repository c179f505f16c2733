"""Render Dispatcher - builds the composition and hands it to the rendering engine."""

import time
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

from short_factory.core.config import Settings
from short_factory.core.exceptions import RenderError
from short_factory.models.schemas import (
    AssembledScene,
    CaptionPosition,
    CompositionDescriptor,
    MusicTrack,
    MusicVolume,
    Orientation,
    RenderConfig,
)


class RenderingEngine(Protocol):
    def render(self, composition: CompositionDescriptor, output_id: str) -> Path: ...


class RenderDispatcher:
    """Submits compositions to the rendering engine with bounded retry."""

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        engine: RenderingEngine,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the render dispatcher.

        Args:
            settings: Application settings
            logger: Logger instance
            engine: Rendering engine
            sleep: Delay function between attempts
        """
        self.settings = settings
        self.logger = logger
        self.engine = engine
        self.sleep = sleep
        self.max_attempts = max(1, settings.render_max_attempts)
        self.retry_delay = settings.render_retry_delay_seconds

    def build_composition(
        self,
        scenes: list[AssembledScene],
        total_duration: float,
        music: MusicTrack,
        music_path: Path,
        config: RenderConfig,
    ) -> CompositionDescriptor:
        return CompositionDescriptor(
            music=music,
            music_path=str(music_path),
            scenes=scenes,
            duration_seconds=total_duration,
            padding_back_ms=config.padding_back_ms or 0,
            caption_position=config.caption_position or CaptionPosition.CENTER,
            caption_background_color=config.caption_background_color or "blue",
            orientation=config.orientation or Orientation.PORTRAIT,
            music_volume=config.music_volume or MusicVolume.HIGH,
        )

    def dispatch(self, composition: CompositionDescriptor, output_id: str) -> Path:
        """
        Render a composition, retrying transient render failures.

        Args:
            composition: What to render
            output_id: Artifact id (the job id)

        Returns:
            Path of the rendered artifact

        Raises:
            RenderError: Once every attempt has failed
        """
        last_error: Optional[RenderError] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                self.logger.info(f"Rendering {output_id} (attempt {attempt}/{self.max_attempts})")
                return self.engine.render(composition, output_id)
            except RenderError as e:
                last_error = e
                self.logger.warning(f"Render attempt {attempt}/{self.max_attempts} failed: {e}")
                if attempt < self.max_attempts:
                    self.sleep(self.retry_delay)

        raise RenderError(f"Rendering {output_id} failed after {self.max_attempts} attempts: {last_error}")
