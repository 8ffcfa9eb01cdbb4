"""Exceptions for the i18n system.

Only configuration misuse is exception-worthy: resolution paths degrade to
visible output (literal key, untouched placeholder, stringified count).
"""

from typing import Iterable, Optional


class I18nError(Exception):
    """Base exception for all i18n errors.

    Attributes:
        code: Stable machine-readable error code.
    """

    code = "I18N_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidLocaleError(I18nError):
    """Raised when a locale is not in the supported set.

    Example:
        >>> manager.set_locale("xx")
        Traceback (most recent call last):
        ...
        InvalidLocaleError: Invalid locale: xx. Supported locales: en, fr
    """

    code = "INVALID_LOCALE"

    def __init__(self, locale: str, supported_locales: Iterable[str]):
        self.locale = locale
        self.supported_locales = list(supported_locales)
        super().__init__(
            f"Invalid locale: {locale}. "
            f"Supported locales: {', '.join(self.supported_locales)}"
        )


class NotInitializedError(I18nError):
    """Raised when the translation service is used before initialize()."""

    code = "NOT_INITIALIZED"

    def __init__(self, state: str):
        self.state = state
        super().__init__(
            f"Translation service is not ready (state: {state}). "
            "Await initialize() before using it."
        )


class TranslationLoadError(I18nError):
    """Raised by loaders when a bundle cannot be fetched or decoded.

    Loaders catch this at their own boundary and return an empty bundle.
    """

    code = "TRANSLATION_LOAD_ERROR"

    def __init__(
        self, locale: str, namespace: str, cause: Optional[BaseException] = None
    ):
        self.locale = locale
        self.namespace = namespace
        self.cause = cause
        super().__init__(f"Failed to load translation: {locale}/{namespace}")
