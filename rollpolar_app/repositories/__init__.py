"""
Repository layer for persistence (SQLite via SQLAlchemy).
"""

from rollpolar_app.repositories.database import SessionLocal, Base, init_database
from rollpolar_app.repositories.case_repository import SavedCaseRepository

__all__ = [
    "SessionLocal",
    "Base",
    "init_database",
    "SavedCaseRepository",
]
