"""Tests for the filesystem adapter."""

from unittest.mock import patch

import pytest

from recordstore.filesystem import FileSystem


class TestFileSystem:
    """Tests for FileSystem primitives."""

    def test_path_for(self, tmp_path):
        """Test store files are <base>/<name>.json."""
        assert FileSystem().path_for(tmp_path, "books") == tmp_path / "books.json"

    def test_ensure_directory_nested(self, tmp_path):
        """Test parents are created and existing directories are fine."""
        fs = FileSystem()
        target = tmp_path / "a" / "b"

        fs.ensure_directory(target)
        fs.ensure_directory(target)

        assert target.is_dir()

    def test_write_replaces_content(self, tmp_path):
        """Test writes overwrite the whole file."""
        fs = FileSystem()
        path = tmp_path / "x.json"

        fs.write_text(path, '[{"id": "long-content"}]')
        fs.write_text(path, "[]")

        assert fs.exists(path)
        assert fs.read_text(path) == "[]"

    def test_write_is_fsynced(self, tmp_path):
        """Test writes are flushed to disk before returning."""
        with patch("recordstore.filesystem.os.fsync") as fsync:
            FileSystem().write_text(tmp_path / "x.json", "[]")

        fsync.assert_called_once()

    def test_utf8(self, tmp_path):
        """Test text round-trips as UTF-8."""
        fs = FileSystem()
        path = tmp_path / "x.json"
        fs.write_text(path, '["żółw"]')

        assert path.read_bytes() == '["żółw"]'.encode("utf-8")
        assert fs.read_text(path) == '["żółw"]'

    def test_read_missing_raises(self, tmp_path):
        """Test errors propagate as OSError."""
        with pytest.raises(OSError):
            FileSystem().read_text(tmp_path / "missing.json")
