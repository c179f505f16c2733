"""I/O utility functions for transient file handling."""

import uuid
from pathlib import Path

from short_factory.core.exceptions import StorageCleanupError


def new_job_id() -> str:
    """Generate a unique, filesystem-safe job identifier."""
    return uuid.uuid4().hex


def temp_file_path(temp_dir: Path, prefix: str, suffix: str) -> Path:
    """
    Build a unique path inside the temp directory.

    Args:
        temp_dir: Transient storage directory.
        prefix: Leading part of the name, e.g. "<job_id>_<scene_index>".
        suffix: File extension including the dot.

    Returns:
        Path that no other job or scene will reuse.
    """
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir / f"{prefix}_{uuid.uuid4().hex[:12]}{suffix}"


def remove_temp_file(path: Path) -> bool:
    """
    Remove a transient file if it is still there.

    Args:
        path: File to remove.

    Returns:
        True if a file was deleted, False if it was already gone.

    Raises:
        StorageCleanupError: If the file exists but cannot be removed.
    """
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        raise StorageCleanupError(f"Could not remove temp file {path}: {e}") from e
