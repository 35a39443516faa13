from typing import Any, Dict, List, Sequence
from urllib.parse import urlparse

CATEGORIES = ("cultural", "beach", "nature")

REQUIRED_STR_FIELDS = ["name", "category"]
OPTIONAL_STR_FIELDS = [
    "description",
    "price",
    "image",
    "duration",
]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _valid_url(v: str) -> bool:
    try:
        p = urlparse(v)
        return bool(p.scheme and p.netloc)
    except ValueError:
        return False


def validate_tour(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Tour must be a JSON object"]

    errors: List[str] = []

    # id: int, but not bool
    if "id" not in data:
        errors.append("Missing required field: id")
    elif isinstance(data["id"], bool) or not isinstance(data["id"], int):
        errors.append("Field 'id' must be an integer")

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    if _is_non_empty_str(data.get("category")) and data["category"] not in CATEGORIES:
        errors.append(
            f"Field 'category' must be one of {', '.join(CATEGORIES)} (got '{data['category']}')"
        )

    for f in OPTIONAL_STR_FIELDS:
        if f in data and data[f] is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    highlights = data.get("highlights")
    if highlights is not None:
        if not isinstance(highlights, list) or not all(isinstance(h, str) for h in highlights):
            errors.append("Field 'highlights' must be a list of strings")

    # Remote images need a full URL; local paths start with "/"
    image = data.get("image")
    if isinstance(image, str) and "://" in image and not _valid_url(image):
        errors.append("Field 'image' must be a valid absolute URL (scheme + host)")

    return errors


def validate_catalog(tours: Sequence[Dict[str, Any]]) -> List[str]:
    """Validate every tour and check that ids are unique."""
    errors: List[str] = []
    seen = set()
    for index, tour in enumerate(tours):
        for e in validate_tour(tour):
            errors.append(f"Tour #{index}: {e}")
        tour_id = tour.get("id") if isinstance(tour, dict) else None
        if isinstance(tour_id, int):
            if tour_id in seen:
                errors.append(f"Tour #{index}: duplicate id {tour_id}")
            seen.add(tour_id)
    return errors
