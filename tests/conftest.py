"""
Pytest configuration and shared fixtures.
"""

import os

# Keep the module-level loggers off the filesystem during tests
os.environ.setdefault("TOURFINDER_LOG_FILE", "0")

import pytest
import json
from pathlib import Path
from typing import Any, Dict, List


@pytest.fixture
def small_catalog() -> List[Dict[str, Any]]:
    """Three tours, two of which mention 'tour' in their names."""
    return [
        {"id": 1, "name": "Kuta Beach Tour", "description": "", "category": "beach"},
        {"id": 2, "name": "Ubud Cultural Tour", "description": "", "category": "cultural"},
        {"id": 3, "name": "Nusa Penida Adventure", "description": "", "category": "nature"},
    ]


@pytest.fixture
def valid_tour() -> Dict[str, Any]:
    """Valid tour record."""
    return {
        "id": 42,
        "name": "Tanah Lot Sunset",
        "description": "Sea temple and sunset over the Indian Ocean.",
        "category": "cultural",
        "price": "Rp 300.000",
        "image": "/images/tanah-lot.jpg",
        "duration": "6 hours",
        "highlights": ["Tanah Lot Temple", "Sunset viewpoint"],
    }


@pytest.fixture
def invalid_tour() -> Dict[str, Any]:
    """Invalid tour (missing name, unknown category)."""
    return {
        "id": 7,
        "category": "shopping",
    }


@pytest.fixture
def catalog_file(tmp_path, small_catalog) -> Path:
    """Catalog JSON file with the small catalog."""
    path = tmp_path / "tours.json"
    path.write_text(json.dumps({"tours": small_catalog}), encoding="utf-8")
    return path


@pytest.fixture
def mixed_catalog_file(tmp_path, valid_tour, invalid_tour) -> Path:
    """Catalog JSON file (bare list) with one valid and one invalid tour."""
    path = tmp_path / "mixed.json"
    path.write_text(json.dumps([valid_tour, invalid_tour]), encoding="utf-8")
    return path
