"""
Tests for the command-line interface.
"""

import json
import logging

import pytest

from tourfinder import __version__
from tourfinder.app import main
from tourfinder.logger import get_logger, reset_logger


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no TourFinder settings."""
    for name in ("TOURFINDER_CATALOG", "TOURFINDER_DB", "TOURFINDER_PER_PAGE", "TOURFINDER_WHATSAPP"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSearchCommand:
    """Test `tourfinder search`."""

    def test_search_ranked(self, capsys, catalog_file):
        main(["search", "--query", "tour", "--catalog", str(catalog_file)])
        out = capsys.readouterr().out
        assert "Found 2 tours" in out
        assert out.index("Kuta Beach Tour") < out.index("Ubud Cultural Tour")
        assert "Nusa Penida" not in out

    def test_search_no_results(self, capsys, catalog_file):
        main(["search", "--query", "xyz", "--catalog", str(catalog_file)])
        assert "No tours found." in capsys.readouterr().out

    def test_search_pages(self, capsys):
        main(["search", "--per-page", "2", "--page", "3"])
        out = capsys.readouterr().out
        assert "Found 10 tours (page 3/5)" in out
        assert "Pages: 1 2 [3] 4 5" in out

    def test_per_page_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("TOURFINDER_PER_PAGE", "4")
        main(["search"])
        assert "(page 1/3)" in capsys.readouterr().out

    @pytest.mark.parametrize("per_page", ["0", "-1"])
    def test_invalid_per_page(self, per_page):
        """Zero is rejected like any other non-positive page size."""
        with pytest.raises(SystemExit) as exc:
            main(["search", "--per-page", per_page])
        assert "per_page must be a positive integer" in str(exc.value.code)

    def test_broken_catalog(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{oops")
        with pytest.raises(SystemExit) as exc:
            main(["search", "--catalog", str(path)])
        assert "not valid JSON" in str(exc.value.code)

    def test_non_utf8_catalog(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"tours": [{"name": "Caf\xe9"}]}')
        with pytest.raises(SystemExit) as exc:
            main(["search", "--catalog", str(path)])
        assert "not valid UTF-8" in str(exc.value.code)


class TestSuggestCommand:
    """Test `tourfinder suggest`."""

    def test_suggestions(self, capsys, catalog_file):
        main(["suggest", "--query", "tour", "--limit", "1", "--catalog", str(catalog_file)])
        assert capsys.readouterr().out.strip() == "Kuta Beach Tour"

    def test_no_suggestions(self, capsys, catalog_file):
        main(["suggest", "--query", "xyz", "--catalog", str(catalog_file)])
        assert "No suggestions." in capsys.readouterr().out


class TestShowCommand:
    """Test `tourfinder show`."""

    def test_show_with_link_and_schema(self, capsys):
        main(["show", "--id", "1", "--phone", "+62811", "--schema"])
        out = capsys.readouterr().out
        assert "Ubud Cultural Tour" in out
        assert "https://wa.me/+62811?text=" in out
        assert '"priceCurrency": "IDR"' in out

    def test_show_unknown(self):
        with pytest.raises(SystemExit) as exc:
            main(["show", "--id", "999"])
        assert "Tour not found" in str(exc.value.code)


class TestOtherCommands:
    """Test categories, validate, import-db and version."""

    def test_categories(self, capsys, catalog_file):
        main(["categories", "--catalog", str(catalog_file)])
        out = capsys.readouterr().out
        assert "beach: 1" in out
        assert "cultural: 1" in out

    def test_validate_valid(self, capsys, catalog_file):
        main(["validate", "--input", str(catalog_file)])
        assert "Valid" in capsys.readouterr().out

    def test_validate_invalid(self, capsys, tmp_path, invalid_tour):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(invalid_tour))
        with pytest.raises(SystemExit) as exc:
            main(["validate", "--input", str(path)])
        assert exc.value.code == 2
        assert "Invalid:" in capsys.readouterr().out

    def test_validate_non_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"id": 1, "name": "Caf\xe9", "category": "beach"}')
        with pytest.raises(SystemExit) as exc:
            main(["validate", "--input", str(path)])
        assert "Invalid JSON" in str(exc.value.code)

    def test_import_then_search_db(self, capsys, tmp_path, catalog_file):
        db_path = tmp_path / "tours.db"
        main(["import-db", "--catalog", str(catalog_file), "--db", str(db_path)])
        assert "new=3" in capsys.readouterr().out

        main(["search", "--query", "ubud", "--db", str(db_path)])
        assert "Ubud Cultural Tour" in capsys.readouterr().out

    def test_missing_db(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["search", "--db", str(tmp_path / "missing.db")])

    def test_version(self, capsys):
        main(["--version"])
        assert capsys.readouterr().out.strip() == __version__


class TestEnvFile:
    """Test settings loaded from .env."""

    @pytest.fixture(autouse=True)
    def fresh_logger(self, monkeypatch):
        # Registered as set-then-delete so values loaded from .env are removed afterwards
        monkeypatch.setenv("TOURFINDER_LOG_LEVEL", "INFO")
        monkeypatch.delenv("TOURFINDER_LOG_LEVEL")
        reset_logger()
        yield
        reset_logger()

    def test_log_level_from_env_file(self, capsys, tmp_path, catalog_file):
        (tmp_path / ".env").write_text("TOURFINDER_LOG_LEVEL=DEBUG\n", encoding="utf-8")

        main(["search", "--query", "kuta", "--catalog", str(catalog_file)])

        assert get_logger().logger.level == logging.DEBUG
        out = capsys.readouterr().out
        assert "DEBUG" in out
        assert "=== Search Session Metrics ===" in out

    def test_summary_hidden_at_info(self, capsys, catalog_file):
        main(["suggest", "--query", "kuta", "--catalog", str(catalog_file)])

        assert get_logger().logger.level == logging.INFO
        out = capsys.readouterr().out
        assert out.strip() == "Kuta Beach Tour"
