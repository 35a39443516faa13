"""
Tour catalog loading and lookup.

The catalog is a JSON file holding either a list of tours or an object
with a "tours" list. A default catalog ships with the package.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .logger import get_logger
from .schema import validate_tour

DEFAULT_CATALOG = Path(__file__).parent / "data" / "tours.json"


class CatalogError(ValueError):
    """Raised when a catalog file cannot be parsed."""
    pass


def _read_records(path: Path) -> List[Any]:
    if not path.exists():
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
    except UnicodeDecodeError as e:
        raise CatalogError(f"Catalog {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    if not content:
        return []
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("tours", [])
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a list of tours")
    return data


def load_catalog(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """
    Load tours from a JSON catalog, skipping invalid records.

    Args:
        path: Catalog file (default: bundled catalog)

    Returns:
        List of tour dicts in file order

    Raises:
        CatalogError: If the file exists but is not a readable catalog
    """
    logger = get_logger()
    path = path or DEFAULT_CATALOG
    records = _read_records(path)

    tours: List[Dict[str, Any]] = []
    seen_ids = set()
    skipped = 0
    for index, record in enumerate(records):
        errors = validate_tour(record)
        if not errors and record["id"] in seen_ids:
            errors = [f"duplicate id {record['id']}"]
        if errors:
            skipped += 1
            logger.warning("Skipping invalid tour", path=str(path), index=index, errors=errors)
            continue
        seen_ids.add(record["id"])
        tour = dict(record)
        tour.setdefault("description", "")
        tours.append(tour)

    logger.record_catalog_load(skipped)
    logger.debug("Catalog loaded", path=str(path), tours=len(tours), skipped=skipped)
    return tours


def save_catalog(path: Path, tours: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump({"tours": tours}, f, indent=2, ensure_ascii=False)


def find_tour(tours: List[Dict[str, Any]], tour_id: Union[int, str, None]) -> Optional[Dict[str, Any]]:
    """Look up a tour by id. Accepts numeric strings, as found in URLs."""
    if isinstance(tour_id, str):
        try:
            tour_id = int(tour_id.strip())
        except ValueError:
            return None
    if not isinstance(tour_id, int):
        return None
    for tour in tours:
        if tour.get("id") == tour_id:
            return tour
    return None


def list_categories(tours: List[Dict[str, Any]]) -> List[str]:
    """Categories in first-seen order."""
    seen: List[str] = []
    for tour in tours:
        category = tour.get("category")
        if category and category not in seen:
            seen.append(category)
    return seen
