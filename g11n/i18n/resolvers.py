"""Locale resolution helpers.

Provides strategies for deriving locale preferences from host signals
(Accept-Language headers, POSIX locale variables) and matching them
against the supported set.
"""

import os
from typing import Iterable, List, Mapping, Optional, Sequence

from g11n.locale_utils import locale_subtags, normalize_locale
from g11n.logging import get_module_logger

logger = get_module_logger()

# POSIX variables consulted for host preferences, highest priority first
LOCALE_ENV_VARS = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")

__all__ = [
    "normalize_locale",
    "is_locale_supported",
    "match_supported_locale",
    "find_best_matching_locale",
    "parse_accept_language",
    "system_locale_preferences",
]


def is_locale_supported(locale: str, supported_locales: Sequence[str]) -> bool:
    """Check if a locale, once normalized, is in the supported set."""
    return normalize_locale(locale) in supported_locales


def match_supported_locale(
    candidates: Iterable[str], supported_locales: Sequence[str]
) -> Optional[str]:
    """Return the first candidate whose normalized form is supported.

    Args:
        candidates: Locale tags in priority order.
        supported_locales: Normalized supported locale codes.

    Returns:
        The matching supported code, or None.
    """
    for candidate in candidates:
        normalized = normalize_locale(candidate)
        if normalized in supported_locales:
            return normalized
    return None


def find_best_matching_locale(
    candidates: Sequence[str],
    supported_locales: Sequence[str],
    fallback_locale: str,
) -> str:
    """Find the best supported locale for a list of candidates.

    Tries the primary subtag of each candidate first, then any subtag
    (so "x-pirate-en" can still match "en").

    Args:
        candidates: Locale tags in priority order.
        supported_locales: Normalized supported locale codes.
        fallback_locale: Returned when nothing matches.

    Returns:
        Best matching supported locale code.
    """
    match = match_supported_locale(candidates, supported_locales)
    if match is not None:
        return match

    for candidate in candidates:
        for part in locale_subtags(candidate):
            if part in supported_locales:
                return part

    return fallback_locale


def parse_accept_language(accept_language: Optional[str]) -> List[str]:
    """Parse an Accept-Language header into tags ordered by quality.

    Example:
        >>> parse_accept_language("fr-CA;q=0.8,en-US,en;q=0.9")
        ['en-US', 'en', 'fr-CA']

    Args:
        accept_language: Accept-Language header value.

    Returns:
        Language ranges, highest quality first; wildcards are dropped.
    """
    if not accept_language:
        return []

    preferences = []
    for part in accept_language.split(","):
        lang_range = part.split(";")[0].strip()
        if not lang_range or lang_range == "*":
            continue

        quality = 1.0
        if ";" in part and "q=" in part:
            try:
                quality = float(part.split("q=")[1])
            except ValueError:
                quality = 1.0

        preferences.append((lang_range, quality))

    # sorted() is stable, so equal qualities keep header order
    return [
        lang_range
        for lang_range, _ in sorted(preferences, key=lambda x: x[1], reverse=True)
    ]


def system_locale_preferences(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Read the host's locale preferences from POSIX environment variables.

    ``LANGUAGE`` may hold a colon-separated priority list; the other
    variables hold a single tag. "C" and "POSIX" carry no preference.

    Args:
        environ: Environment mapping (default: os.environ).

    Returns:
        Locale tags in priority order, without duplicates.
    """
    environ = os.environ if environ is None else environ
    preferences: List[str] = []
    for name in LOCALE_ENV_VARS:
        value = environ.get(name)
        if not value:
            continue
        for tag in value.split(":"):
            tag = tag.strip()
            if normalize_locale(tag) in ("", "c", "posix") or tag in preferences:
                continue
            preferences.append(tag)
    logger.debug("read_system_locale_preferences", preferences=preferences)
    return preferences
