"""Translation catalog loading and per-tag translator bundles.

Catalogs are TOML files, one per locale tag, holding message templates:

    # locales/de.toml
    [translations]
    greeting = "Hallo {name}!"
    items = "{count, plural, one {# Artikel} other {# Artikel}}"

The table name is matched case-insensitively, so catalogs written as
``Tag = "de"`` plus a ``[Translations]`` table load as well; the Tag field
is informational. Top-level string keys without a translations table are
accepted too.

Components:
    ResourceLoader - Protocol for catalog loaders (structural typing)
    PathResourceLoader - Disk-based loader with path-traversal prevention
    ResourceLoadResult - Immutable record of the last load attempt for a tag
    TranslatorBundle - Tag -> Translator with modification-time reloads

Python 3.13+. Uses stdlib tomllib.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock
from types import MappingProxyType
from typing import Protocol

from iculexengine.constants import DEFAULT_LOCALE
from iculexengine.diagnostics import ErrorTemplate, ICUResourceError
from iculexengine.enums import LoadStatus
from iculexengine.locale_utils import base_language
from iculexengine.localization.negotiation import parse_accept_language
from iculexengine.localization.translator import (
    NULL_TRANSLATOR,
    HierarchicalTranslator,
    Translator,
)
from iculexengine.localization.types import LocaleTag, TemplateSource, TranslationKey
from iculexengine.runtime import MessageFormatter

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceLoader",
    # Concrete loader
    "PathResourceLoader",
    # Load result
    "ResourceLoadResult",
    # Bundle
    "TranslatorBundle",
]

logger = logging.getLogger(__name__)

TRANSLATIONS_TABLE = "translations"
TAG_FIELD = "tag"

WILDCARD_RANGE = "*"


class ResourceLoader(Protocol):
    """Protocol for loading translation catalogs by locale tag.

    Example:
        >>> class MemoryLoader:
        ...     def __init__(self, catalogs):
        ...         self.catalogs = catalogs
        ...     def load(self, tag):
        ...         return self.catalogs[tag]
        ...     def last_modified(self, tag):
        ...         return 0 if tag in self.catalogs else None
        ...     def describe_path(self, tag):
        ...         return f"memory:{tag}"
        ...
        >>> bundle = TranslatorBundle(MemoryLoader({"en": {"hi": "Hi"}}), "en")
        >>> bundle.translator_for_tag("en").translate("hi")
        'Hi'
    """

    def load(self, tag: LocaleTag) -> Mapping[TranslationKey, TemplateSource]:
        """Load the catalog for tag.

        Raises:
            ICUResourceError: If the catalog is missing or malformed
        """
        ...  # pragma: no cover  # Protocol stub - not executable

    def last_modified(self, tag: LocaleTag) -> int | None:
        """Opaque modification stamp of the catalog, or None if it does not exist."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def describe_path(self, tag: LocaleTag) -> str:
        """Return human-readable location for diagnostics."""
        ...  # pragma: no cover  # Protocol stub - not executable


def _find_field(data: Mapping[str, object], name: str) -> str | None:
    """Key of data matching name case-insensitively, or None."""
    for key in data:
        if key.lower() == name:
            return key
    return None


@dataclass(frozen=True, slots=True)
class PathResourceLoader:
    """File system catalog loader: ``<directory>/<tag><suffix>``.

    Security:
        Tags containing path separators or ".." are rejected, and every
        resolved path is verified to stay inside the catalog directory.

    Example:
        >>> loader = PathResourceLoader("locales")
        >>> loader.describe_path("de-CH")
        'locales/de-CH.toml'

    Attributes:
        directory: Directory holding the catalogs
        suffix: Catalog file extension
    """

    directory: str
    suffix: str = ".toml"
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_resolved_root", Path(self.directory).resolve())

    @staticmethod
    def _validate_tag(tag: LocaleTag) -> None:
        """Reject tags that cannot name a catalog file.

        Raises:
            ICUResourceError: If tag is empty or contains unsafe path components
        """
        if not tag or tag != tag.strip():
            reason = "tag must be non-empty without surrounding whitespace"
        elif ".." in tag:
            reason = "path traversal sequences are not allowed"
        elif "/" in tag or "\\" in tag:
            reason = "path separators are not allowed"
        else:
            return
        raise ICUResourceError(ErrorTemplate.invalid_locale_tag(tag, reason), locale_tag=tag)

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        """Check if full_path is safely within base_dir."""
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def _path_for(self, tag: LocaleTag) -> Path:
        self._validate_tag(tag)
        full_path = self._resolved_root / f"{tag}{self.suffix}"
        if not self._is_safe_path(self._resolved_root, full_path):
            reason = "resolved path escapes the catalog directory"
            raise ICUResourceError(ErrorTemplate.invalid_locale_tag(tag, reason), locale_tag=tag)
        return full_path

    def describe_path(self, tag: LocaleTag) -> str:
        """Return the catalog path as configured (not resolved)."""
        return f"{self.directory.rstrip('/')}/{tag}{self.suffix}"

    def last_modified(self, tag: LocaleTag) -> int | None:
        """Modification time of the catalog in nanoseconds, or None if missing.

        Raises:
            ICUResourceError: If tag is invalid
        """
        path = self._path_for(tag)
        try:
            return path.stat().st_mtime_ns
        except FileNotFoundError:
            return None

    def load(self, tag: LocaleTag) -> dict[TranslationKey, TemplateSource]:
        """Read and decode the catalog for tag.

        Returns:
            Key -> template mapping

        Raises:
            ICUResourceError: If the tag is invalid, the file is missing,
                cannot be decoded, or holds a non-string translation
        """
        path = self._path_for(tag)
        described = self.describe_path(tag)
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ICUResourceError(
                ErrorTemplate.resource_not_found(tag, described), locale_tag=tag
            ) from e
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            raise ICUResourceError(
                ErrorTemplate.resource_decode_failed(tag, described, str(e)), locale_tag=tag
            ) from e

        table_key = _find_field(data, TRANSLATIONS_TABLE)
        if table_key is None:
            table = data
        else:
            table = data[table_key]
            tag_key = _find_field(data, TAG_FIELD)
            declared = data.get(tag_key) if tag_key is not None else None
            if isinstance(declared, str) and declared != tag:
                logger.debug(
                    "Catalog %s declares tag '%s'; loading as '%s'", described, declared, tag
                )
        if not isinstance(table, dict):
            entry = table_key or TRANSLATIONS_TABLE
            raise ICUResourceError(
                ErrorTemplate.resource_invalid_entry(tag, described, entry),
                locale_tag=tag,
            )

        translations: dict[TranslationKey, TemplateSource] = {}
        for key, template in table.items():
            if not isinstance(template, str):
                raise ICUResourceError(
                    ErrorTemplate.resource_invalid_entry(tag, described, key), locale_tag=tag
                )
            translations[key] = template
        return translations


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Outcome of the most recent load attempt for a tag.

    Attributes:
        tag: Locale tag of the catalog
        status: Load status (success, not_found, error)
        source_path: Human-readable location of the catalog
        error: Exception if status is ERROR, None otherwise
        entries: Number of translations loaded
    """

    tag: LocaleTag
    status: LoadStatus
    source_path: str
    error: ICUResourceError | None = None
    entries: int = 0

    @property
    def is_success(self) -> bool:
        """Check if the catalog loaded successfully."""
        return self.status is LoadStatus.SUCCESS


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    stamp: int
    translations: Mapping[TranslationKey, TemplateSource]


class TranslatorBundle:
    """Maps locale tags to translators over a catalog loader.

    Catalogs are cached one entry per tag and reloaded only when the
    loader reports a modification stamp different from the cached one.

    Fallback chain for a tag: the tag itself, then its base language, then
    the default tag. Levels whose catalog is missing or malformed are
    skipped; with no loadable level the NullTranslator is returned.

    Thread Safety:
        The per-tag cache is guarded by an RLock. Translators handed out
        hold immutable catalog snapshots.

    Example:
        >>> bundle = TranslatorBundle(PathResourceLoader("locales"), "en")
        >>> translator = bundle.translator_for_header("de-CH, de;q=0.9")
    """

    __slots__ = ("_default_tag", "_entries", "_formatter", "_load_results", "_loader", "_lock")

    def __init__(
        self,
        loader: ResourceLoader,
        default_tag: LocaleTag = DEFAULT_LOCALE,
        *,
        formatter: MessageFormatter | None = None,
    ) -> None:
        """Initialize bundle.

        Args:
            loader: Catalog loader
            default_tag: Tag used when nothing better is available
            formatter: Formatter shared by all translators of this bundle
                (default: a new formatter for default_tag)
        """
        self._loader = loader
        self._default_tag = default_tag
        self._formatter = formatter if formatter is not None else MessageFormatter(default_tag)
        self._entries: dict[LocaleTag, _CacheEntry] = {}
        self._load_results: dict[LocaleTag, ResourceLoadResult] = {}
        self._lock = RLock()

    @property
    def default_tag(self) -> LocaleTag:
        """Tag used when nothing better is available."""
        return self._default_tag

    @property
    def formatter(self) -> MessageFormatter:
        """Formatter shared by this bundle's translators."""
        return self._formatter

    def __repr__(self) -> str:
        return f"TranslatorBundle(default_tag={self._default_tag!r}, cached={len(self._entries)})"

    def _record(self, result: ResourceLoadResult) -> None:
        self._load_results[result.tag] = result

    def catalog(self, tag: LocaleTag) -> Mapping[TranslationKey, TemplateSource] | None:
        """Current catalog for exactly this tag, reloading if it changed.

        Returns:
            Read-only key -> template mapping, or None if unavailable
        """
        with self._lock:
            try:
                stamp = self._loader.last_modified(tag)
            except ICUResourceError as e:
                logger.warning("Cannot load translations for '%s': %s", tag, e)
                self._record(ResourceLoadResult(tag, LoadStatus.ERROR, "", error=e))
                return None

            source_path = self._loader.describe_path(tag)
            if stamp is None:
                if self._entries.pop(tag, None) is not None:
                    logger.info("Translations for '%s' removed (%s)", tag, source_path)
                self._record(ResourceLoadResult(tag, LoadStatus.NOT_FOUND, source_path))
                return None

            cached = self._entries.get(tag)
            if cached is not None and cached.stamp == stamp:
                return cached.translations

            try:
                loaded = self._loader.load(tag)
            except ICUResourceError as e:
                logger.warning("Cannot load translations for '%s': %s", tag, e)
                self._entries.pop(tag, None)
                self._record(ResourceLoadResult(tag, LoadStatus.ERROR, source_path, error=e))
                return None

            entry = _CacheEntry(stamp, MappingProxyType(dict(loaded)))
            self._entries[tag] = entry
            self._record(
                ResourceLoadResult(tag, LoadStatus.SUCCESS, source_path, entries=len(loaded))
            )
            logger.info(
                "%s translations for '%s' from %s (%d entries)",
                "Reloaded" if cached is not None else "Loaded",
                tag,
                source_path,
                len(loaded),
            )
            return entry.translations

    def _fallback_chain(self, tag: LocaleTag) -> tuple[LocaleTag, ...]:
        chain = [tag, base_language(tag), self._default_tag]
        return tuple(dict.fromkeys(level for level in chain if level))

    def translator_for_tag(self, tag: LocaleTag) -> Translator:
        """Translator for tag, chained toward its base language and the default tag."""
        base: HierarchicalTranslator | None = None
        for level in reversed(self._fallback_chain(tag)):
            translations = self.catalog(level)
            if translations is None:
                continue
            base = HierarchicalTranslator(level, translations, base, formatter=self._formatter)

        if base is None:
            logger.debug("No translations for '%s'; using key passthrough", tag)
            return NULL_TRANSLATOR
        return base

    def translator_for_header(self, accept_language: str | None) -> Translator:
        """Translator for the first negotiated range with a loadable catalog.

        A range counts as loadable when its own catalog or that of its base
        language loads. Falls back to the default tag.
        """
        for language_range in parse_accept_language(accept_language):
            tag = language_range.tag
            if tag == WILDCARD_RANGE:
                continue
            if any(self.catalog(level) is not None for level in (tag, base_language(tag)) if level):
                return self.translator_for_tag(tag)
        return self.translator_for_tag(self._default_tag)

    def load_results(self) -> tuple[ResourceLoadResult, ...]:
        """Most recent load result for every tag this bundle has tried."""
        with self._lock:
            return tuple(self._load_results.values())

    def clear(self) -> None:
        """Drop all cached catalogs."""
        with self._lock:
            self._entries.clear()
            self._load_results.clear()
