"""Filesystem primitives used by the store."""

import os
from pathlib import Path


class FileSystem:
    """
    Thin wrapper over the local filesystem.

    Every method raises OSError on failure; deciding what to do about it is
    left to the caller.
    """

    encoding = "utf-8"

    def ensure_directory(self, path: Path) -> None:
        """Create a directory and its parents if missing."""
        path.mkdir(parents=True, exist_ok=True)

    def path_for(self, base_dir: Path, store_name: str) -> Path:
        """Path of the store file for a store name."""
        return base_dir / f"{store_name}.json"

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        with open(path, "r", encoding=self.encoding) as f:
            return f.read()

    def write_text(self, path: Path, text: str) -> None:
        """Replace the whole file content and fsync before returning."""
        with open(path, "w", encoding=self.encoding) as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
