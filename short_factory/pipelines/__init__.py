"""Pipeline orchestrators for Short Factory."""

from short_factory.pipelines.create_short import ShortPipeline, build_job_queue

__all__ = ["ShortPipeline", "build_job_queue"]
