"""Process-wide providers.

Application-scoped singletons for hosts that accept one translation
service per process. Everything else should build a service with
``create_translation_service`` and pass it explicitly.
"""

from functools import lru_cache

from g11n.configuration import Settings
from g11n.i18n.factory import create_translation_service
from g11n.i18n.service import TranslationService


@lru_cache
def get_settings() -> Settings:
    """Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_translation_service() -> TranslationService:
    """Get application-scoped translation service singleton.

    The service starts UNINITIALIZED; the host awaits ``initialize()`` once
    at startup.

    Returns:
        TranslationService: Cached service built from ``get_settings()``.

    Usage:
        service = get_translation_service()
        await service.initialize()
        service.t("common.welcome")
    """
    return create_translation_service(get_settings().i18n)
