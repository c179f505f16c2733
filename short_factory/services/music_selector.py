"""Music Selector - picks a background track for a finished scene list."""

import random
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional

from short_factory.core.config import Settings
from short_factory.core.exceptions import MusicCatalogError
from short_factory.models.schemas import MusicMood, MusicTrack


class MusicSelector:
    """Mood-filtered random pick from an immutable music catalog."""

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        catalog: Sequence[MusicTrack],
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the music selector.

        Args:
            settings: Application settings
            logger: Logger instance
            catalog: Tracks to choose from, never mutated
            rng: Randomness source (seed it for deterministic picks)
        """
        self.settings = settings
        self.logger = logger
        self.catalog = tuple(catalog)
        self.rng = rng or random.Random()
        self.music_dir = Path(settings.music_dir)

    def select(self, duration_seconds: float, mood: Optional[MusicMood] = None) -> MusicTrack:
        """
        Pick a track for a video.

        Args:
            duration_seconds: Total video length (logged; tracks are looped by the renderer)
            mood: Requested mood, or None for any track

        Returns:
            The chosen track

        Raises:
            MusicCatalogError: If no track carries the requested mood
        """
        pool = [track for track in self.catalog if mood is None or track.mood == mood]
        if not pool:
            raise MusicCatalogError(f"No music track in the catalog for mood '{mood.value if mood else 'any'}'")

        track = self.rng.choice(pool)
        self.logger.debug(
            f"Selected music '{track.file}' ({track.mood.value}) for {duration_seconds:.1f}s video "
            f"from {len(pool)} candidates"
        )
        return track

    def available_moods(self) -> list[MusicMood]:
        """Moods covered by the catalog, in catalog order."""
        moods: list[MusicMood] = []
        for track in self.catalog:
            if track.mood not in moods:
                moods.append(track.mood)
        return moods

    def track_path(self, track: MusicTrack) -> Path:
        return self.music_dir / track.file

    def ensure_files_exist(self) -> None:
        """
        Check every catalog track is present in the music directory.

        Raises:
            MusicCatalogError: On the first missing file
        """
        for track in self.catalog:
            if not self.track_path(track).exists():
                raise MusicCatalogError(f"Music file not found: {track.file}")
