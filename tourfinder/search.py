import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .matcher import match_score, normalize

ALL_CATEGORIES = "all"
DEFAULT_FIELDS = ("name", "description")
SUGGESTION_LIMIT = 5
PAGE_WINDOW_THRESHOLD = 5

Tour = Dict[str, Any]
ScoredTour = Tuple[Tour, int]


def extract_keywords(query: Optional[str]) -> List[str]:
    return normalize(query).split()


def filter_by_category(tours: Sequence[Tour], category: Optional[str] = ALL_CATEGORIES) -> List[Tour]:
    if not category or category == ALL_CATEGORIES:
        return list(tours)
    return [t for t in tours if t.get("category") == category]


def score_tour(tour: Tour, keywords: Sequence[str], fields: Sequence[str] = DEFAULT_FIELDS) -> int:
    """Sum of match scores over every (keyword, field) pair."""
    score = 0
    for keyword in keywords:
        for field in fields:
            value = tour.get(field)
            score += match_score(keyword, value if isinstance(value, str) else None)
    return score


def rank_tours(
    tours: Sequence[Tour],
    query: Optional[str],
    fields: Sequence[str] = DEFAULT_FIELDS,
) -> List[ScoredTour]:
    """
    Score tours against a free-text query.
    Zero-score tours are dropped; the rest are sorted by descending score,
    ties keeping catalog order.
    """
    keywords = extract_keywords(query)
    if not keywords:
        return [(t, 0) for t in tours]

    scored = [(t, score_tour(t, keywords, fields)) for t in tours]
    scored = [s for s in scored if s[1] > 0]
    return sorted(scored, key=lambda s: s[1], reverse=True)


def search_tours(
    tours: Sequence[Tour],
    query: Optional[str] = "",
    category: Optional[str] = ALL_CATEGORIES,
    fields: Sequence[str] = DEFAULT_FIELDS,
) -> List[Tour]:
    """
    Returns the tours matching category and query, best match first.
    An empty query keeps catalog order.
    """
    candidates = filter_by_category(tours, category)
    return [t for t, _ in rank_tours(candidates, query, fields)]


def suggest(
    tours: Sequence[Tour],
    query: Optional[str],
    category: Optional[str] = ALL_CATEGORIES,
    limit: int = SUGGESTION_LIMIT,
) -> List[Tour]:
    if not query:
        return []
    return search_tours(tours, query, category)[:limit]


def paginate(items: Sequence[Any], page: int = 1, per_page: int = 6) -> Dict[str, Any]:
    """
    Slice items into one page. The page number is clamped into range.

    Returns:
        Dict with items, page, per_page, total_pages, total_items
    """
    if per_page < 1:
        raise ValueError(f"per_page must be a positive integer, got {per_page}")

    total_items = len(items)
    total_pages = math.ceil(total_items / per_page)
    page = max(1, min(page, max(total_pages, 1)))
    start = (page - 1) * per_page

    return {
        "items": list(items[start:start + per_page]),
        "page": page,
        "per_page": per_page,
        "total_pages": total_pages,
        "total_items": total_items,
    }


def page_window(current: int, total_pages: int) -> List[Optional[int]]:
    """
    Page numbers to show in a pager. Long ranges keep the first page, the
    last page and the neighbours of the current one; None marks a gap.
    """
    if total_pages <= PAGE_WINDOW_THRESHOLD:
        pages = list(range(1, total_pages + 1))
    else:
        pages = [
            p for p in range(1, total_pages + 1)
            if p == 1 or p == total_pages or abs(p - current) <= 1
        ]

    window: List[Optional[int]] = []
    for i, p in enumerate(pages):
        if i > 0 and p - pages[i - 1] > 1:
            window.append(None)
        window.append(p)
    return window
