"""Storage repository for rendered videos and stored images."""

from pathlib import Path
from typing import Any, Optional

from short_factory.core.config import Settings


class MediaRepository:
    """Repository for rendered video artifacts and uploaded images."""

    def __init__(self, settings: Settings, logger: Any):
        """
        Initialize the repository.

        Args:
            settings: Application settings
            logger: Logger instance
        """
        self.settings = settings
        self.logger = logger
        self.videos_dir = settings.videos_dir
        self.images_dir = settings.images_dir
        self.videos_dir.mkdir(parents=True, exist_ok=True)
        self.images_dir.mkdir(parents=True, exist_ok=True)

    def video_path(self, video_id: str) -> Path:
        """Location of the artifact for `video_id`, whether or not it exists."""
        return self.videos_dir / f"{video_id}.mp4"

    def video_exists(self, video_id: str) -> bool:
        return self.video_path(video_id).exists()

    def list_video_ids(self) -> list[str]:
        """
        List all rendered video IDs.

        Returns:
            List of video IDs, oldest first
        """
        video_files = sorted(self.videos_dir.glob("*.mp4"), key=lambda p: p.stat().st_mtime)
        video_ids = [f.stem for f in video_files]
        self.logger.debug(f"Found {len(video_ids)} rendered videos")
        return video_ids

    def read_video(self, video_id: str) -> bytes:
        """
        Read a rendered video.

        Raises:
            FileNotFoundError: If the video has not been rendered
        """
        path = self.video_path(video_id)
        if not path.exists():
            raise FileNotFoundError(f"Video {video_id} not found")
        return path.read_bytes()

    def delete_video(self, video_id: str) -> None:
        path = self.video_path(video_id)
        if path.exists():
            path.unlink()
            self.logger.info(f"Deleted video: {video_id}")

    def find_image(self, image_id: str) -> Optional[Path]:
        """
        Locate a stored image by id.

        Args:
            image_id: Image identifier (file stem inside the images directory)

        Returns:
            Path to the image if found, None otherwise
        """
        for candidate in self.images_dir.glob(f"{image_id}.*"):
            if candidate.stem == image_id and candidate.is_file():
                return candidate
        self.logger.warning(f"Image not found: {image_id}")
        return None
