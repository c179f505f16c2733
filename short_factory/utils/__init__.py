"""Utility functions for Short Factory."""

from short_factory.utils.io_utils import new_job_id, remove_temp_file, temp_file_path
from short_factory.utils.text_utils import estimate_spoken_duration, split_sentences

__all__ = [
    "new_job_id",
    "remove_temp_file",
    "temp_file_path",
    "estimate_spoken_duration",
    "split_sentences",
]
