"""
Domain models for the rollpolar application.

These are pure Python/domain classes, separate from ORM mappings.
"""

from rollpolar_app.models.operating import DraftCategory, OperatingParameters, WavePeriodType
from rollpolar_app.models.vessel import (
    ControlFile,
    ParameterBounds,
    RepresentativeDrafts,
    VesselInfo,
)
from rollpolar_app.models.polar import PolarDataset
from rollpolar_app.models.saved_case import SavedCase

__all__ = [
    "DraftCategory",
    "OperatingParameters",
    "WavePeriodType",
    "ControlFile",
    "ParameterBounds",
    "RepresentativeDrafts",
    "VesselInfo",
    "PolarDataset",
    "SavedCase",
]
