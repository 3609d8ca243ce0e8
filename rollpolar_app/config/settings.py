"""
Basic settings and logging configuration for the rollpolar app.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path


def _get_resource_root() -> Path:

    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS)
    return Path(__file__).resolve().parents[2]


def _get_user_data_dir(resource_root: Path) -> Path:

    if getattr(sys, "frozen", False):
        exe_path = Path(getattr(sys, "executable", resource_root))
        return exe_path.parent / "rollpolar_app_data"
    return resource_root / "rollpolar_app_data"


@dataclass(slots=True)
class Settings:
    """Application-level settings."""

    project_root: Path
    data_dir: Path
    db_path: Path
    # Folder holding proll.ctl and the draft category folders, relative to project_root
    polar_root: str = "PolarData"
    control_file_name: str = "proll.ctl"

    @property
    def control_file_path(self) -> str:
        return f"{self.polar_root}/{self.control_file_name}"

    @classmethod
    def default(cls) -> "Settings":
        resource_root = _get_resource_root()
        data_dir = _get_user_data_dir(resource_root)
        data_dir.mkdir(exist_ok=True)

        db_path = data_dir / "rollpolar.db"
        return cls(project_root=resource_root, data_dir=data_dir, db_path=db_path)

    @classmethod
    def for_project(cls, project_root: Path, data_dir: Path | None = None) -> "Settings":
        """Settings for a project folder chosen at runtime (the folder containing PolarData)."""
        project_root = Path(project_root)
        if data_dir is None:
            data_dir = _get_user_data_dir(_get_resource_root())
        data_dir.mkdir(parents=True, exist_ok=True)
        return cls(project_root=project_root, data_dir=data_dir, db_path=data_dir / "rollpolar.db")


def init_logging(settings: Settings, console: bool = False) -> None:
    """Configure basic logging to a file in the data dir and optionally the console."""
    log_file = settings.data_dir / "rollpolar.log"

    handlers: list[logging.Handler] = [logging.FileHandler(log_file, encoding="utf-8")]
    if console:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=handlers,
    )

    logging.getLogger(__name__).info(
        "Logging initialized. Project at %s, DB at %s", settings.project_root, settings.db_path
    )
