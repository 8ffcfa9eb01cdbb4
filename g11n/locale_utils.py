"""Locale code normalization helpers.

Kept free of package imports so configuration and logging can use them.
"""

import re

_SUBTAG_SEPARATOR = re.compile(r"[-_]")


def normalize_locale(locale: str | None) -> str:
    """Reduce a locale tag to its lowercase primary language subtag.

    Examples: "en-US" -> "en", "pt_BR" -> "pt", "FR" -> "fr".

    Args:
        locale: Locale tag in BCP 47 or POSIX form.

    Returns:
        Primary language subtag, or "" for empty input.
    """
    if not locale:
        return ""
    # POSIX tags may carry an encoding or modifier ("de_DE.UTF-8@euro")
    tag = locale.strip().split(".", 1)[0].split("@", 1)[0]
    return _SUBTAG_SEPARATOR.split(tag.lower())[0]


def locale_subtags(locale: str) -> list[str]:
    """Split a locale tag into lowercase subtags."""
    tag = locale.strip().split(".", 1)[0].split("@", 1)[0]
    return [part for part in _SUBTAG_SEPARATOR.split(tag.lower()) if part]
