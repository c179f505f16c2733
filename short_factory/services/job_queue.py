"""Job Queue - in-memory FIFO of video jobs drained by a single worker thread."""

import threading
from collections import deque
from pathlib import Path
from typing import Any, Callable, Optional

import pydantic

from short_factory.core.config import Settings
from short_factory.core.exceptions import ValidationError
from short_factory.models.schemas import (
    CreateShortRequest,
    ImageScene,
    Job,
    JobStatus,
    RenderConfig,
    SceneRequest,
    VideoSummary,
)
from short_factory.storage.repository import MediaRepository
from short_factory.utils.error_handler import format_error_message, get_failure_suggestion
from short_factory.utils.io_utils import new_job_id

IDLE = "idle"
DRAINING = "draining"


class JobQueue:
    """
    Accepts jobs, runs them one at a time in submission order, reports status.

    Jobs live only in memory. A job's status is derived: "processing" while it
    is queued, otherwise "ready" if its artifact exists and "failed" if not.
    """

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        processor: Callable[[Job], Any],
        repository: MediaRepository,
    ):
        """
        Initialize the job queue.

        Args:
            settings: Application settings
            logger: Logger instance
            processor: Runs one job end to end; exceptions mark the job failed
            repository: Media repository for artifact lookups
        """
        self.settings = settings
        self.logger = logger
        self.processor = processor
        self.repository = repository

        self._jobs: deque[Job] = deque()
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._state = IDLE
        self._worker: Optional[threading.Thread] = None

    def submit(self, scenes: list[Any], config: Optional[Any] = None) -> str:
        """
        Validate and enqueue a job.

        Args:
            scenes: Scene requests (models or plain dicts) in playback order
            config: Render configuration (model, dict or None)

        Returns:
            The new job id

        Raises:
            ValidationError: If the submission is malformed; nothing is enqueued
        """
        request = self._validate(scenes, config)
        self._check_images(request.scenes)

        job = Job(id=new_job_id(), scenes=request.scenes, config=request.config)
        with self._lock:
            self._jobs.append(job)
            position = len(self._jobs)
            if self._state == IDLE:
                self._state = DRAINING
                self._worker = threading.Thread(target=self._drain, name="short-factory-worker", daemon=True)
                self._worker.start()

        self.logger.info(f"Enqueued job {job.id} with {len(job.scenes)} scenes (queue position {position})")
        return job.id

    def status(self, job_id: str) -> JobStatus:
        with self._lock:
            queued = any(job.id == job_id for job in self._jobs)
        if queued:
            return JobStatus.PROCESSING
        if self.repository.video_exists(job_id):
            return JobStatus.READY
        return JobStatus.FAILED

    def list_videos(self) -> list[VideoSummary]:
        """
        List rendered artifacts plus jobs still in the queue.

        Returns:
            Rendered videos first (oldest first), then queued jobs in order
        """
        with self._lock:
            queued_ids = [job.id for job in self._jobs]

        summaries = [
            VideoSummary(id=video_id, status=JobStatus.READY)
            for video_id in self.repository.list_video_ids()
            if video_id not in queued_ids
        ]
        summaries.extend(VideoSummary(id=job_id, status=JobStatus.PROCESSING) for job_id in queued_ids)
        return summaries

    def get_video_path(self, video_id: str) -> Optional[Path]:
        if self.status(video_id) != JobStatus.READY:
            return None
        return self.repository.video_path(video_id)

    def delete_video(self, video_id: str) -> None:
        """
        Delete a rendered video.

        Raises:
            ValidationError: If the job is still being processed
        """
        if self.status(video_id) == JobStatus.PROCESSING:
            raise ValidationError(f"Video {video_id} is still processing")
        self.repository.delete_video(video_id)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._jobs)

    def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every queued job has been processed.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            True if the queue drained, False on timeout
        """
        with self._idle:
            return self._idle.wait_for(lambda: self._state == IDLE, timeout)

    def _validate(self, scenes: list[Any], config: Optional[Any]) -> CreateShortRequest:
        try:
            return CreateShortRequest.model_validate(
                {"scenes": scenes, "config": config if config is not None else RenderConfig()}
            )
        except pydantic.ValidationError as e:
            missing_fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
            raise ValidationError(
                f"Invalid input: {e.error_count()} problem(s) in {', '.join(missing_fields)}",
                missing_fields=missing_fields,
            ) from e

    def _check_images(self, scenes: list[SceneRequest]) -> None:
        missing = [
            f"scenes.{index}.image_id"
            for index, scene in enumerate(scenes)
            if isinstance(scene, ImageScene) and self.repository.find_image(scene.image_id) is None
        ]
        if missing:
            raise ValidationError(f"Unknown image id in {', '.join(missing)}", missing_fields=missing)

    def _drain(self) -> None:
        while True:
            with self._lock:
                if not self._jobs:
                    self._state = IDLE
                    self._worker = None
                    self._idle.notify_all()
                    return
                job = self._jobs[0]

            job_logger = self.logger.bind(job_id=job.id)
            try:
                job_logger.info(f"Processing job {job.id}")
                self.processor(job)
                job_logger.info(f"Job {job.id} finished")
            except Exception as e:
                job_logger.error(
                    format_error_message(
                        "Creating short video",
                        e,
                        context={"job_id": job.id, "scenes": len(job.scenes)},
                        suggestion=get_failure_suggestion(e),
                    )
                )
            finally:
                with self._lock:
                    self._jobs.popleft()
