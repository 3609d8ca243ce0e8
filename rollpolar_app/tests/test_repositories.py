"""Tests for repositories."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from rollpolar_app.models import DraftCategory, OperatingParameters, SavedCase
from rollpolar_app.repositories.case_repository import SavedCaseRepository
from rollpolar_app.repositories.database import init_database


@pytest.fixture
def sample_case() -> SavedCase:
    return SavedCase(
        case_id="C1",
        parameters=OperatingParameters(draft_category=DraftCategory.SCANTLING, gm_m=1.8, speed_kn=14.0),
        timestamp=datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc),
        is_in_danger_zone=True,
        roll_deg=23.5,
    )


class TestSavedCaseRepository:
    def test_create_and_get(self, db_session, sample_case):
        repo = SavedCaseRepository(db_session)
        repo.create(sample_case)

        fetched = repo.get("C1")
        assert fetched is not None
        assert fetched.parameters == sample_case.parameters
        assert fetched.timestamp == sample_case.timestamp
        assert fetched.is_in_danger_zone
        assert fetched.roll_deg == 23.5
        assert fetched.dataset is None

    def test_list_empty(self, db_session):
        assert SavedCaseRepository(db_session).list() == []

    def test_list_keeps_insertion_order(self, db_session):
        repo = SavedCaseRepository(db_session)
        for cid in ("B", "A", "C"):
            repo.create(SavedCase(case_id=cid))
        assert [c.case_id for c in repo.list()] == ["B", "A", "C"]

    def test_delete(self, db_session, sample_case):
        repo = SavedCaseRepository(db_session)
        repo.create(sample_case)
        repo.delete("C1")
        repo.delete("missing")
        assert repo.get("C1") is None

    def test_roll_may_be_missing(self, db_session):
        repo = SavedCaseRepository(db_session)
        repo.create(SavedCase(case_id="N"))
        assert repo.get("N").roll_deg is None


def test_init_database(tmp_path, sample_case):
    session_factory = init_database(tmp_path / "rollpolar.db")
    db = session_factory()
    try:
        SavedCaseRepository(db).create(sample_case)
        assert SavedCaseRepository(db).get("C1") is not None
    finally:
        db.close()
