"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import numpy as np
import pytest

# Ensure project root is on path when running tests
_project_root = Path(__file__).resolve().parents[2]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rollpolar_app.models import OperatingParameters, PolarDataset
from rollpolar_app.services.file_service import LocalFileSystem


# Roll offset per heading; 0 and 360 carry the same value
HEADING_OFFSETS = {0: 1, 45: 3, 90: 6, 135: 4, 180: 2, 225: 4, 270: 6, 315: 3, 360: 1}
SPEEDS = [0.0, 5.0, 10.0, 15.0]
HEADINGS = [float(h) for h in HEADING_OFFSETS]


def sample_roll_matrix() -> np.ndarray:
    """roll[i][j] = i + offset(heading j)."""
    return np.array([[i + HEADING_OFFSETS[int(h)] for h in HEADINGS] for i in range(len(SPEEDS))], dtype=float)


def build_polar_bytes(speeds, headings, roll_matrix, num_parameters: int = 1) -> bytes:
    """Binary polar file contents (little-endian int32 header, float64 body)."""
    speeds = np.asarray(speeds, dtype="<f8")
    headings = np.asarray(headings, dtype="<f8")
    roll = np.asarray(roll_matrix, dtype="<f8")
    header = np.array([speeds.size, headings.size, num_parameters], dtype="<i4")
    return header.tobytes() + speeds.tobytes() + headings.tobytes() + roll.tobytes()


CONTROL_TEXT = """# Polar control file
IMO = 9876543
VesselName = MV Test Carrier

GM_lower = 1.0
GM_upper = 4.0
Hs_lower = 2.0
Hs_upper = 14.0
Tz_lower = 6.0
Tz_upper = 16.0
Ts = 12.5
Td = 11.0
Ti = 9.5
"""


class FakeFileSystem:
    """In-memory file system; directory listings keep the order they were given in."""

    def __init__(self, dirs: Dict[str, List[str]] | None = None, files: Dict[str, bytes] | None = None) -> None:
        self.dirs = dict(dirs or {})
        self.files = dict(files or {})

    def read_binary_file(self, path: str) -> bytes:
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def read_text_file(self, path: str) -> str:
        return self.read_binary_file(path).decode("utf-8")

    def list_directory(self, path: str) -> List[str]:
        if path not in self.dirs:
            raise FileNotFoundError(path)
        return list(self.dirs[path])

    def file_exists(self, path: str) -> bool:
        return path in self.files

    def directory_exists(self, path: str) -> bool:
        # Parents of listed folders exist too
        return path in self.dirs or any(d.startswith(path + "/") for d in self.dirs)


@pytest.fixture
def sample_dataset() -> PolarDataset:
    return PolarDataset(
        speeds=np.array(SPEEDS),
        headings=np.array(HEADINGS),
        roll_matrix=sample_roll_matrix(),
        fitted_gm=2.0,
        fitted_hs=10.0,
        fitted_tz=10.5,
        num_parameters=1,
    )


@pytest.fixture
def polar_project(tmp_path) -> Path:
    """
    Project folder with a control file and a small polar database::

        PolarData/proll.ctl
        PolarData/design/GM=1.0m/bin/MAXROLL_H10.0_T10.5.bpolar
        PolarData/design/GM=2.5m/bin/MAXROLL_H10.0_T10.5.bpolar
        PolarData/design/GM=2.5m/bin/MAXROLL_H12.0_T9.0.bpolar
        PolarData/design/GM=2.5m/bin/notes.txt
        PolarData/scantling/    (no GM folders with numbers)
    """
    root = tmp_path / "PolarData"
    root.mkdir()
    (root / "proll.ctl").write_text(CONTROL_TEXT, encoding="utf-8")

    roll = sample_roll_matrix()
    for gm_folder, files in {
        "GM=1.0m": {"MAXROLL_H10.0_T10.5.bpolar": roll},
        "GM=2.5m": {
            "MAXROLL_H10.0_T10.5.bpolar": roll,
            "MAXROLL_H12.0_T9.0.bpolar": roll + 10.0,
        },
    }.items():
        bin_dir = root / "design" / gm_folder / "bin"
        bin_dir.mkdir(parents=True)
        for name, matrix in files.items():
            (bin_dir / name).write_bytes(build_polar_bytes(SPEEDS, HEADINGS, matrix))
        (bin_dir / "notes.txt").write_text("not a polar file", encoding="utf-8")

    (root / "scantling" / "archive").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def local_fs(polar_project) -> LocalFileSystem:
    return LocalFileSystem(polar_project)


@pytest.fixture
def design_params() -> OperatingParameters:
    return OperatingParameters(gm_m=2.0, hs_m=10.0, tz_s=10.0)


@pytest.fixture
def db_session(tmp_path):
    """Provide a database session with initialized schema."""
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from rollpolar_app.repositories.database import Base
    from rollpolar_app.repositories.case_repository import SavedCaseORM  # noqa: F401

    engine = create_engine(f"sqlite:///{tmp_path / 'cases.db'}", future=True)
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
