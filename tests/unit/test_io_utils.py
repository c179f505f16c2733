"""Tests for I/O utility functions."""

from unittest.mock import patch

import pytest

from short_factory.core.exceptions import StorageCleanupError
from short_factory.utils.io_utils import new_job_id, remove_temp_file, temp_file_path


def test_new_job_id_is_unique():
    """Test job ids never repeat."""
    ids = {new_job_id() for _ in range(100)}
    assert len(ids) == 100


def test_temp_file_path_is_unique_and_prefixed(tmp_path):
    """Test temp paths carry the prefix and never collide."""
    temp_dir = tmp_path / "temp"

    first = temp_file_path(temp_dir, "job_0", ".wav")
    second = temp_file_path(temp_dir, "job_0", ".wav")

    assert temp_dir.is_dir()
    assert first != second
    assert first.name.startswith("job_0_") and first.suffix == ".wav"


def test_remove_temp_file(tmp_path):
    """Test removal reports whether a file was deleted."""
    path = tmp_path / "a.wav"
    path.write_bytes(b"x")

    assert remove_temp_file(path) is True
    assert not path.exists()
    assert remove_temp_file(path) is False


def test_remove_temp_file_failure_raises_cleanup_error(tmp_path):
    """Test OS errors surface as StorageCleanupError."""
    path = tmp_path / "locked.wav"

    with patch("pathlib.Path.unlink", side_effect=PermissionError("denied")):
        with pytest.raises(StorageCleanupError):
            remove_temp_file(path)
