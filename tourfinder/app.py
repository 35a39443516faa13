import argparse
import json
import logging
from pathlib import Path

from . import __version__
from . import env
from .env import load_env
from .catalog import CatalogError, DEFAULT_CATALOG, find_tour, list_categories, load_catalog
from .database import load_tours, upsert_tours
from .links import product_schema, whatsapp_url
from .logger import get_logger
from .schema import validate_catalog, validate_tour
from .search import ALL_CATEGORIES, page_window, paginate, search_tours, suggest


def _catalog_path(args: argparse.Namespace) -> Path:
    if args.catalog:
        return Path(args.catalog)
    return env.catalog_path() or DEFAULT_CATALOG


def _db_path(args: argparse.Namespace):
    if args.db:
        return Path(args.db)
    return env.db_path()


def load_tour_list(args: argparse.Namespace) -> list[dict]:
    db_path = _db_path(args)
    if db_path is not None:
        if not db_path.exists():
            raise SystemExit(f"Database not found: {db_path}")
        return load_tours(db_path)
    try:
        return load_catalog(_catalog_path(args))
    except CatalogError as e:
        raise SystemExit(str(e))


def _print_tour_line(tour: dict) -> None:
    price = tour.get("price") or "-"
    print(f"[{tour['id']}] {tour['name']} ({tour['category']}) - {price}")


def cmd_search(args: argparse.Namespace) -> None:
    logger = get_logger()
    tours = load_tour_list(args)
    results = search_tours(tours, args.query, args.category)
    logger.record_search(args.category, len(results))
    logger.debug("Search", query=args.query, category=args.category, results=len(results))
    logger.log_metrics_summary(logging.DEBUG)

    if not results:
        print("No tours found.")
        return

    per_page = args.per_page if args.per_page is not None else env.per_page()
    try:
        page = paginate(results, args.page, per_page)
    except ValueError as e:
        raise SystemExit(str(e))

    print(f"Found {page['total_items']} tours (page {page['page']}/{page['total_pages']}):\n")
    for tour in page["items"]:
        _print_tour_line(tour)
    if page["total_pages"] > 1:
        pager = " ".join("..." if p is None else (f"[{p}]" if p == page["page"] else str(p))
                         for p in page_window(page["page"], page["total_pages"]))
        print(f"\nPages: {pager}")


def cmd_suggest(args: argparse.Namespace) -> None:
    tours = load_tour_list(args)
    suggestions = suggest(tours, args.query, args.category, limit=args.limit)
    logger = get_logger()
    logger.record_search(args.category, len(suggestions))
    logger.log_metrics_summary(logging.DEBUG)
    if not suggestions:
        print("No suggestions.")
        return
    for tour in suggestions:
        print(tour["name"])


def cmd_show(args: argparse.Namespace) -> None:
    tours = load_tour_list(args)
    tour = find_tour(tours, args.id)
    if tour is None:
        raise SystemExit(f"Tour not found: {args.id}")

    print(f"{tour['name']}")
    print(f"  Category: {tour['category']}")
    print(f"  Price: {tour.get('price') or '-'}")
    if tour.get("duration"):
        print(f"  Duration: {tour['duration']}")
    print(f"  Description: {tour.get('description', '')}")
    if tour.get("highlights"):
        print("  Highlights:")
        for h in tour["highlights"]:
            print(f"   - {h}")
    phone = args.phone or env.whatsapp_number()
    print(f"  WhatsApp: {whatsapp_url(tour, phone)}")
    if args.schema:
        print(json.dumps(product_schema(tour), indent=2, ensure_ascii=False))


def cmd_categories(args: argparse.Namespace) -> None:
    tours = load_tour_list(args)
    categories = list_categories(tours)
    if not categories:
        print("No tours in catalog.")
        return
    for category in categories:
        count = sum(1 for t in tours if t.get("category") == category)
        print(f"{category}: {count}")


def cmd_validate(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SystemExit(f"Invalid JSON in {input_path}: {e}")

    if isinstance(data, dict) and "tours" in data:
        data = data["tours"]
    errors = validate_catalog(data) if isinstance(data, list) else validate_tour(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_import_db(args: argparse.Namespace) -> None:
    logger = get_logger()
    db_path = _db_path(args) or Path("data/tours.db")
    try:
        tours = load_catalog(_catalog_path(args))
    except CatalogError as e:
        raise SystemExit(str(e))
    counts = upsert_tours(tours, db_path)
    logger.info("Catalog imported", db=str(db_path), **counts)
    print(f"Done. new={counts['new']} updated={counts['updated']} no-change={counts['no-change']}")


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--catalog", help="Path to catalog JSON (default: TOURFINDER_CATALOG or bundled catalog)")
    parser.add_argument("--db", help="Read tours from this SQLite database instead (default: TOURFINDER_DB)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tourfinder", description="TourFinder - tour catalog search CLI")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")

    srch = subparsers.add_parser("search", help="Search tours by free text and category")
    srch.add_argument("--query", default="", help="Free-text query (empty lists everything)")
    srch.add_argument("--category", default=ALL_CATEGORIES, help="Category filter: all, cultural, beach, nature")
    srch.add_argument("--page", type=int, default=1, help="Page number (default 1)")
    srch.add_argument("--per-page", type=int, help="Tours per page (default: TOURFINDER_PER_PAGE or 6)")
    _add_source_args(srch)
    srch.set_defaults(func=cmd_search)

    sug = subparsers.add_parser("suggest", help="Show live suggestions for a partial query")
    sug.add_argument("--query", required=True, help="Partial query")
    sug.add_argument("--category", default=ALL_CATEGORIES, help="Category filter")
    sug.add_argument("--limit", type=int, default=5, help="Maximum suggestions (default 5)")
    _add_source_args(sug)
    sug.set_defaults(func=cmd_suggest)

    shw = subparsers.add_parser("show", help="Show tour details with WhatsApp inquiry link")
    shw.add_argument("--id", required=True, help="Tour id")
    shw.add_argument("--phone", help="WhatsApp number (default: TOURFINDER_WHATSAPP)")
    shw.add_argument("--schema", action="store_true", help="Also print schema.org Product JSON")
    _add_source_args(shw)
    shw.set_defaults(func=cmd_show)

    cat = subparsers.add_parser("categories", help="List categories with tour counts")
    _add_source_args(cat)
    cat.set_defaults(func=cmd_categories)

    val = subparsers.add_parser("validate", help="Validate a tour or catalog JSON file")
    val.add_argument("--input", required=True, help="Path to tour or catalog JSON")
    val.set_defaults(func=cmd_validate)

    imp = subparsers.add_parser("import-db", help="Import the catalog JSON into SQLite")
    imp.add_argument("--catalog", help="Path to catalog JSON (default: TOURFINDER_CATALOG or bundled catalog)")
    imp.add_argument("--db", help="Target SQLite database (default: TOURFINDER_DB or data/tours.db)")
    imp.set_defaults(func=cmd_import_db)

    return parser


def main(argv=None):
    # Load .env if present (TOURFINDER_CATALOG, TOURFINDER_WHATSAPP, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
