"""Accept-Language negotiation.

Parses HTTP Accept-Language values into language ranges ordered by
preference:

    "de-CH, de;q=0.9, en;q=0.8" -> de-CH (1.0), de (0.9), en (0.8)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from iculexengine.localization.types import LocaleTag

__all__ = ["LanguageRange", "parse_accept_language", "preferred_tag"]


@dataclass(frozen=True, slots=True)
class LanguageRange:
    """One language range with its quality weight.

    Attributes:
        tag: Language tag as sent by the client (may be '*')
        quality: Preference weight, 1.0 when omitted
    """

    tag: LocaleTag
    quality: float = 1.0


def _parse_quality(parameters: list[str]) -> float | None:
    """Quality from the range parameters; None if a q value is malformed."""
    quality = 1.0
    for parameter in parameters:
        name, sep, value = parameter.partition("=")
        if name.strip().lower() != "q":
            continue
        if not sep:
            return None
        try:
            quality = float(value.strip())
        except ValueError:
            return None
        if not math.isfinite(quality) or not 0.0 <= quality <= 1.0:
            return None
    return quality


def parse_accept_language(header: str | None) -> tuple[LanguageRange, ...]:
    """Parse an Accept-Language header value.

    Entries with an empty tag or an invalid quality are dropped. The
    result is sorted by descending quality; entries of equal quality keep
    their order from the header.

    Examples:
        >>> parse_accept_language("fr;q=0.5, de, en;q=0.8")
        (LanguageRange(tag='de', quality=1.0), LanguageRange(tag='en', quality=0.8), LanguageRange(tag='fr', quality=0.5))
        >>> parse_accept_language("de;q=abc, , it")
        (LanguageRange(tag='it', quality=1.0),)
    """
    if not header:
        return ()

    ranges: list[LanguageRange] = []
    for part in header.split(","):
        tag, *parameters = part.split(";")
        tag = tag.strip()
        if not tag:
            continue
        quality = _parse_quality(parameters)
        if quality is None:
            continue
        ranges.append(LanguageRange(tag, quality))

    ranges.sort(key=lambda r: r.quality, reverse=True)
    return tuple(ranges)


def preferred_tag(header: str | None) -> LocaleTag:
    """Most preferred tag of an Accept-Language value, or "" if none.

    Example:
        >>> preferred_tag("en;q=0.3, pt-BR")
        'pt-BR'
    """
    ranges = parse_accept_language(header)
    return ranges[0].tag if ranges else ""
