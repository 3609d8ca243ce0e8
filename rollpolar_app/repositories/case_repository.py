"""
Repository for saved operating cases.

Dataset snapshots stay in memory; only parameters and results are stored.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, Session

from rollpolar_app.repositories.database import Base
from rollpolar_app.models import OperatingParameters, SavedCase


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SavedCaseORM(Base):
    __tablename__ = "saved_cases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    case_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    parameters_json: Mapped[str] = mapped_column(Text, default="{}")
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    is_in_danger_zone: Mapped[bool] = mapped_column(Boolean, default=False)
    roll_deg: Mapped[float | None] = mapped_column(Float, nullable=True)


def _to_domain(obj: SavedCaseORM) -> SavedCase:
    ts = obj.timestamp
    # SQLite drops tzinfo; values are written in UTC
    if ts is not None and ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return SavedCase(
        case_id=obj.case_id,
        parameters=OperatingParameters.from_dict(json.loads(obj.parameters_json or "{}")),
        timestamp=ts,
        is_in_danger_zone=bool(obj.is_in_danger_zone),
        roll_deg=obj.roll_deg,
    )


class SavedCaseRepository:
    """Repository for CRUD operations on saved cases (keyed by case id)."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create(self, case: SavedCase) -> SavedCase:
        obj = SavedCaseORM(
            case_id=case.case_id,
            parameters_json=json.dumps(case.parameters.to_dict()),
            timestamp=case.timestamp,
            is_in_danger_zone=case.is_in_danger_zone,
            roll_deg=case.roll_deg,
        )
        self._db.add(obj)
        self._db.commit()
        self._db.refresh(obj)
        return case

    def get(self, case_id: str) -> Optional[SavedCase]:
        obj = self._db.query(SavedCaseORM).filter(SavedCaseORM.case_id == case_id).one_or_none()
        if obj is None:
            return None
        return _to_domain(obj)

    def list(self) -> List[SavedCase]:
        return [_to_domain(obj) for obj in self._db.query(SavedCaseORM).order_by(SavedCaseORM.id).all()]

    def delete(self, case_id: str) -> None:
        obj = self._db.query(SavedCaseORM).filter(SavedCaseORM.case_id == case_id).one_or_none()
        if obj is None:
            return
        self._db.delete(obj)
        self._db.commit()
