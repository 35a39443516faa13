"""
Database schema and connection management.

Uses SQLite with SQLAlchemy as an alternative catalog store.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from sqlalchemy import create_engine, Column, Integer, String, Text, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

TOUR_FIELDS = ("name", "description", "category", "price", "image", "duration", "highlights")


class Tour(Base):
    """Tour package model."""

    __tablename__ = "tours"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String, nullable=False, index=True)  # cultural, beach, nature
    price = Column(String, nullable=True)
    image = Column(String, nullable=True)
    duration = Column(String, nullable=True)
    highlights = Column(Text, nullable=True)  # JSON-encoded list
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id}
        for field in TOUR_FIELDS:
            value = getattr(self, field)
            if field == "highlights":
                value = json.loads(value) if value else None
            if value is not None:
                data[field] = value
        return data


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    get_engine(db_path).dispose()


def get_engine(db_path: Path):
    """Engine for the SQLite file with tables created. Caller disposes it."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    return engine


def get_session(db_path: Path, engine=None):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file
        engine: Existing engine to bind to (default: a new one for db_path)

    Returns:
        SQLAlchemy session
    """
    if engine is None:
        engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def _column_values(tour: Dict[str, Any]) -> Dict[str, Any]:
    values = {field: tour.get(field) for field in TOUR_FIELDS}
    values["description"] = values["description"] or ""
    if values["highlights"] is not None:
        values["highlights"] = json.dumps(values["highlights"], ensure_ascii=False)
    return values


def upsert_tours(tours: List[Dict[str, Any]], db_path: Path) -> Dict[str, int]:
    """
    Insert or update tours by id.

    Returns:
        Counts keyed by "new", "updated" and "no-change"
    """
    engine = get_engine(db_path)
    session = get_session(db_path, engine)
    counts = {"new": 0, "updated": 0, "no-change": 0}
    try:
        for tour in tours:
            values = _column_values(tour)
            row = session.get(Tour, tour["id"])
            if row is None:
                session.add(Tour(id=tour["id"], **values))
                counts["new"] += 1
                continue
            if all(getattr(row, k) == v for k, v in values.items()):
                counts["no-change"] += 1
                continue
            for k, v in values.items():
                setattr(row, k, v)
            counts["updated"] += 1
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
    return counts


def load_tours(db_path: Path) -> List[Dict[str, Any]]:
    """Load all tours as dicts ordered by id. Missing database yields []."""
    if not db_path.exists():
        return []
    engine = get_engine(db_path)
    session = get_session(db_path, engine)
    try:
        return [row.to_dict() for row in session.query(Tour).order_by(Tour.id).all()]
    finally:
        session.close()
        engine.dispose()
