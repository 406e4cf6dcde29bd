"""Tests for TOML catalog loading and TranslatorBundle."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import pytest

from iculexengine import ICUResourceError, PathResourceLoader, TranslatorBundle
from iculexengine.diagnostics import DiagnosticCode
from iculexengine.localization import NULL_TRANSLATOR, HierarchicalTranslator, LoadStatus


def bump_mtime(path: Path, seconds: int = 10) -> None:
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + seconds * 1_000_000_000))


class CountingLoader:
    """In-memory loader recording load() calls."""

    def __init__(self, catalogs: dict[str, dict[str, str]]) -> None:
        self.catalogs = catalogs
        self.stamps = dict.fromkeys(catalogs, 1)
        self.loads: list[str] = []

    def load(self, tag: str) -> Mapping[str, str]:
        self.loads.append(tag)
        return self.catalogs[tag]

    def last_modified(self, tag: str) -> int | None:
        return self.stamps.get(tag)

    def describe_path(self, tag: str) -> str:
        return f"memory:{tag}"


class TestPathResourceLoader:
    """Reading catalogs from disk."""

    def test_translations_table(self, catalog_dir: Path) -> None:
        """A [translations] table is read."""
        catalog = PathResourceLoader(str(catalog_dir)).load("en")
        assert catalog["greeting"] == "Hello {name}!"
        assert len(catalog) == 3

    def test_top_level_keys(self, catalog_dir: Path) -> None:
        """Top-level string keys are read when there is no table."""
        catalog = PathResourceLoader(str(catalog_dir)).load("de")
        assert catalog == {
            "greeting": "Hallo {name}!",
            "items": "{count, plural, one {# Artikel} other {# Artikel}}",
        }

    def test_capitalized_table_with_tag_field(self, tmp_path: Path) -> None:
        """A Tag field plus a [Translations] table loads the table only."""
        (tmp_path / "de.toml").write_text(
            'Tag = "de"\n\n[Translations]\ngreet = "Hallo {name}!"\n', encoding="utf-8"
        )
        catalog = PathResourceLoader(str(tmp_path)).load("de")
        assert catalog == {"greet": "Hallo {name}!"}

    def test_capitalized_table_translates(self, tmp_path: Path) -> None:
        """Catalogs in the Tag/Translations layout render through a bundle."""
        (tmp_path / "de.toml").write_text(
            'Tag = "de"\n\n[Translations]\ngreet = "Hallo {name}!"\n', encoding="utf-8"
        )
        bundle = TranslatorBundle(PathResourceLoader(str(tmp_path)), "de")
        assert bundle.translator_for_tag("de").translate("greet", {"name": "Ada"}) == "Hallo Ada!"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing catalog raises RESOURCE_NOT_FOUND."""
        loader = PathResourceLoader(str(tmp_path))
        with pytest.raises(ICUResourceError) as exc_info:
            loader.load("fr")
        assert exc_info.value.locale_tag == "fr"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.RESOURCE_NOT_FOUND
        assert loader.last_modified("fr") is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Undecodable TOML raises RESOURCE_DECODE_FAILED."""
        (tmp_path / "en.toml").write_text("greeting = ", encoding="utf-8")
        with pytest.raises(ICUResourceError) as exc_info:
            PathResourceLoader(str(tmp_path)).load("en")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.RESOURCE_DECODE_FAILED

    def test_non_string_value(self, tmp_path: Path) -> None:
        """Non-string translations raise RESOURCE_INVALID_ENTRY."""
        (tmp_path / "en.toml").write_text("count = 3\n", encoding="utf-8")
        with pytest.raises(ICUResourceError) as exc_info:
            PathResourceLoader(str(tmp_path)).load("en")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.RESOURCE_INVALID_ENTRY

    def test_translations_not_a_table(self, tmp_path: Path) -> None:
        """A scalar translations key is an invalid entry."""
        (tmp_path / "en.toml").write_text('translations = "x"\n', encoding="utf-8")
        with pytest.raises(ICUResourceError):
            PathResourceLoader(str(tmp_path)).load("en")

    @pytest.mark.parametrize("tag", ["", " en", "../etc", "a/b", "a\\b", ".."])
    def test_invalid_tags(self, tmp_path: Path, tag: str) -> None:
        """Tags that cannot name a file inside the directory are rejected."""
        loader = PathResourceLoader(str(tmp_path))
        with pytest.raises(ICUResourceError) as exc_info:
            loader.load(tag)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.INVALID_LOCALE_TAG
        with pytest.raises(ICUResourceError):
            loader.last_modified(tag)

    def test_describe_path(self) -> None:
        """describe_path() shows the configured location."""
        assert PathResourceLoader("locales/").describe_path("de-CH") == "locales/de-CH.toml"
        assert PathResourceLoader("cat", suffix=".tml").describe_path("en") == "cat/en.tml"

    def test_last_modified(self, catalog_dir: Path) -> None:
        """last_modified() reports the file's mtime in nanoseconds."""
        loader = PathResourceLoader(str(catalog_dir))
        assert loader.last_modified("en") == (catalog_dir / "en.toml").stat().st_mtime_ns


class TestBundleCaching:
    """One cache entry per tag, refreshed on modification-time change."""

    def test_catalog_cached(self) -> None:
        """An unchanged stamp serves the cached catalog."""
        loader = CountingLoader({"en": {"k": "v"}})
        bundle = TranslatorBundle(loader, "en")
        first = bundle.catalog("en")
        second = bundle.catalog("en")
        assert first is second
        assert loader.loads == ["en"]

    def test_reload_on_new_stamp(self) -> None:
        """A different stamp triggers a reload."""
        loader = CountingLoader({"en": {"k": "v1"}})
        bundle = TranslatorBundle(loader, "en")
        assert bundle.translator_for_tag("en").translate("k") == "v1"
        loader.catalogs["en"] = {"k": "v2"}
        assert bundle.translator_for_tag("en").translate("k") == "v1"
        loader.stamps["en"] = 2
        assert bundle.translator_for_tag("en").translate("k") == "v2"
        assert loader.loads == ["en", "en"]

    def test_reload_from_disk(self, catalog_dir: Path) -> None:
        """Editing a catalog file is picked up after its mtime changes."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        assert bundle.translator_for_tag("en").translate("farewell") == "Goodbye"
        path = catalog_dir / "en.toml"
        path.write_text('[translations]\nfarewell = "Bye now"\n', encoding="utf-8")
        bump_mtime(path)
        assert bundle.translator_for_tag("en").translate("farewell") == "Bye now"

    def test_removed_catalog(self, catalog_dir: Path) -> None:
        """A deleted catalog is dropped from the cache."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        assert bundle.catalog("de") is not None
        (catalog_dir / "de.toml").unlink()
        assert bundle.catalog("de") is None

    def test_load_results(self, catalog_dir: Path) -> None:
        """The last load attempt per tag is recorded."""
        (catalog_dir / "it.toml").write_text("x = 1\n", encoding="utf-8")
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        bundle.catalog("en")
        bundle.catalog("fr")
        bundle.catalog("it")
        results = {result.tag: result for result in bundle.load_results()}
        assert results["en"].is_success
        assert results["en"].entries == 3
        assert results["fr"].status is LoadStatus.NOT_FOUND
        assert results["it"].status is LoadStatus.ERROR
        assert results["it"].error is not None

    def test_clear(self) -> None:
        """clear() forces the next lookup to load again."""
        loader = CountingLoader({"en": {"k": "v"}})
        bundle = TranslatorBundle(loader, "en")
        bundle.catalog("en")
        bundle.clear()
        bundle.catalog("en")
        assert loader.loads == ["en", "en"]
        assert bundle.load_results()[0].is_success

    def test_logs_loads(self, catalog_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Successful loads are logged at INFO."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        with caplog.at_level(logging.INFO, logger="iculexengine.localization.loading"):
            bundle.catalog("en")
        assert any("Loaded translations for 'en'" in r.getMessage() for r in caplog.records)


class TestBundleFallback:
    """Fallback chains and negotiation."""

    def test_chain_for_regional_tag(self, catalog_dir: Path) -> None:
        """de-CH falls back to de, then to the default tag."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        translator = bundle.translator_for_tag("de-CH")
        assert isinstance(translator, HierarchicalTranslator)
        assert translator.tag == "de-CH"
        assert translator.translate("greeting", {"name": "Uli"}) == "Grüezi Uli!"
        assert translator.translate("items", {"count": 2}) == "2 Artikel"
        assert translator.translate("farewell") == "Goodbye"
        assert translator.translate("unknown.key") == "unknown.key"

    def test_missing_levels_are_skipped(self, catalog_dir: Path) -> None:
        """A tag without its own catalog starts at its base language."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        translator = bundle.translator_for_tag("de-AT")
        assert isinstance(translator, HierarchicalTranslator)
        assert translator.tag == "de"

    def test_unknown_tag_uses_default(self, catalog_dir: Path) -> None:
        """Unknown tags get the default catalog."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        assert bundle.translator_for_tag("ja").translate("farewell") == "Goodbye"

    def test_nothing_loads(self, tmp_path: Path) -> None:
        """With no catalogs at all the key passes through."""
        bundle = TranslatorBundle(PathResourceLoader(str(tmp_path)), "en")
        translator = bundle.translator_for_tag("de")
        assert translator is NULL_TRANSLATOR
        assert translator.translate("greeting") == "greeting"

    def test_malformed_catalog_degrades(self, catalog_dir: Path) -> None:
        """A broken catalog is skipped, not fatal."""
        (catalog_dir / "fr.toml").write_text("not toml at all [", encoding="utf-8")
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        assert bundle.translator_for_tag("fr").translate("farewell") == "Goodbye"

    def test_invalid_tag_degrades(self, catalog_dir: Path) -> None:
        """Unsafe tags are rejected and the default is used."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        assert bundle.translator_for_tag("../en").translate("farewell") == "Goodbye"
        statuses = {r.tag: r.status for r in bundle.load_results()}
        assert statuses["../en"] is LoadStatus.ERROR

    def test_header_picks_first_loadable(self, catalog_dir: Path) -> None:
        """Unavailable ranges are skipped in preference order."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        translator = bundle.translator_for_header("fr-FR, ja;q=0.9, de-CH;q=0.8, en;q=0.5")
        assert translator.translate("greeting", {"name": "Uli"}) == "Grüezi Uli!"

    def test_header_uses_base_language_catalog(self, catalog_dir: Path) -> None:
        """A regional range is usable through its base language."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        translator = bundle.translator_for_header("de-AT")
        assert translator.translate("greeting", {"name": "Uli"}) == "Hallo Uli!"

    @pytest.mark.parametrize("header", [None, "", "*", "xx, yy;q=0.5", "de;q=bad"])
    def test_header_falls_back_to_default(self, catalog_dir: Path, header: str | None) -> None:
        """Nothing usable in the header yields the default tag."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        translator = bundle.translator_for_header(header)
        assert translator.translate("greeting", {"name": "Bo"}) == "Hello Bo!"

    def test_repr(self, catalog_dir: Path) -> None:
        """repr shows default tag and cache size."""
        bundle = TranslatorBundle(PathResourceLoader(str(catalog_dir)), "en")
        bundle.catalog("en")
        assert repr(bundle) == "TranslatorBundle(default_tag='en', cached=1)"
