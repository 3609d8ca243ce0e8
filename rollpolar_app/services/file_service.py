"""
File-system collaborator used by the polar loaders.

The loaders only talk to the `FileSystem` protocol; `LocalFileSystem` maps
forward-slash paths onto a base folder on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol, runtime_checkable

_LOG = logging.getLogger(__name__)


@runtime_checkable
class FileSystem(Protocol):
    def read_binary_file(self, path: str) -> bytes: ...

    def read_text_file(self, path: str) -> str: ...

    def list_directory(self, path: str) -> List[str]: ...

    def file_exists(self, path: str) -> bool: ...

    def directory_exists(self, path: str) -> bool: ...


class LocalFileSystem:
    """Read-only access to files below `base_path`."""

    def __init__(self, base_path: Path | str) -> None:
        self._base = Path(base_path)
        if not self._base.is_dir():
            _LOG.warning("Base path does not exist: %s", self._base)

    @property
    def base_path(self) -> Path:
        return self._base

    def resolve(self, path: str) -> Path:
        return self._base.joinpath(*[p for p in str(path).split("/") if p])

    def read_binary_file(self, path: str) -> bytes:
        full = self.resolve(path)
        _LOG.debug("Reading file: %s", full)
        if not full.is_file():
            raise FileNotFoundError(f"File not found: {full}")
        return full.read_bytes()

    def read_text_file(self, path: str) -> str:
        full = self.resolve(path)
        if not full.is_file():
            raise FileNotFoundError(f"File not found: {full}")
        return full.read_text(encoding="utf-8")

    def list_directory(self, path: str) -> List[str]:
        full = self.resolve(path)
        _LOG.debug("Listing directory: %s", full)
        if not full.is_dir():
            raise FileNotFoundError(f"Directory not found: {full}")
        # os.listdir order: not sorted, platform dependent
        return [entry.name for entry in full.iterdir()]

    def file_exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def directory_exists(self, path: str) -> bool:
        return self.resolve(path).is_dir()
