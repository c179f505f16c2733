"""Scene Preparer - splits long narration into time-bounded scenes."""

from typing import Any

from short_factory.core.config import Settings
from short_factory.models.schemas import ImageScene, SceneRequest, SearchScene
from short_factory.utils.text_utils import estimate_spoken_duration, split_sentences


class ScenePreparer:
    """Expands scenes whose narration would run past the target length."""

    def __init__(self, settings: Settings, logger: Any):
        """
        Initialize the scene preparer.

        Args:
            settings: Application settings
            logger: Logger instance
        """
        self.settings = settings
        self.logger = logger
        self.target_seconds = settings.scene_target_seconds
        self.chars_per_second = settings.speech_chars_per_second

    def prepare(self, scenes: list[SceneRequest]) -> list[SceneRequest]:
        """
        Replace every over-long scene with several shorter ones.

        Args:
            scenes: Scenes as submitted

        Returns:
            Scenes to synthesize, in playback order
        """
        prepared: list[SceneRequest] = []
        for scene in scenes:
            if self._estimate(scene.text) > self.target_seconds:
                prepared.extend(self._with_text(scene, chunk) for chunk in self.chunk_text(scene.text))
            else:
                prepared.append(scene)

        self.logger.debug(f"Scene list prepared: {len(scenes)} submitted, {len(prepared)} to render")
        return prepared

    def chunk_text(self, text: str) -> list[str]:
        """
        Greedily pack whole sentences into chunks of at most the target length.

        A sentence that is longer than the target on its own becomes its own chunk.

        Args:
            text: Narration text

        Returns:
            Chunks in order; joined, they hold every sentence exactly once
        """
        chunks: list[str] = []
        current: list[str] = []
        current_len = 0

        for sentence in split_sentences(text):
            # +1 for the joining space
            projected = current_len + len(sentence) + (1 if current else 0)
            if current and projected / self.chars_per_second > self.target_seconds:
                chunks.append(" ".join(current))
                current = [sentence]
                current_len = len(sentence)
            else:
                current.append(sentence)
                current_len = projected

        if current:
            chunks.append(" ".join(current))
        return chunks

    def _estimate(self, text: str) -> float:
        return estimate_spoken_duration(text, self.chars_per_second)

    @staticmethod
    def _with_text(scene: SceneRequest, text: str) -> SceneRequest:
        match scene:
            case SearchScene():
                return SearchScene(text=text, search_terms=list(scene.search_terms))
            case ImageScene():
                return ImageScene(text=text, image_id=scene.image_id)
            case _:
                raise TypeError(f"Unknown scene type: {type(scene).__name__}")
