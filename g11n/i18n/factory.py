"""Factory functions for creating i18n components.

Wires settings and collaborators (loader, persistence, host locale source)
into a ready-to-initialize TranslationService.
"""

from pathlib import Path
from typing import Optional

from g11n.configuration.settings import I18nSettings
from g11n.i18n.interpolator import Interpolator, MissingVariablesHandler
from g11n.i18n.loader import BundleLoader, FileBundleLoader
from g11n.i18n.locale_manager import HostLocaleSource, LocaleManager
from g11n.i18n.persistence import LocalePersistence
from g11n.i18n.pluralizer import Pluralizer
from g11n.i18n.service import TranslationService
from g11n.i18n.store import BundleCache
from g11n.i18n.translator import MissingTranslationHandler, Translator
from g11n.logging import get_module_logger

logger = get_module_logger()


def create_translation_service(
    settings: I18nSettings,
    loader: Optional[BundleLoader] = None,
    persistence: Optional[LocalePersistence] = None,
    host_locales: Optional[HostLocaleSource] = None,
    initial_locale: Optional[str] = None,
    base_dir: Path | str = ".",
    on_missing_translation: Optional[MissingTranslationHandler] = None,
    on_missing_variables: Optional[MissingVariablesHandler] = None,
) -> TranslationService:
    """Create and wire a TranslationService.

    The returned service is UNINITIALIZED; await ``initialize()`` before use.

    Args:
        settings: Translation system settings.
        loader: Bundle loader (default: FileBundleLoader over ``base_dir``
            using ``settings.load_path``).
        persistence: Locale preference storage (default: in-memory).
        host_locales: Host locale preference source (default: POSIX env vars).
        initial_locale: Explicit initial locale, highest priority.
        base_dir: Base directory for the default file loader.
        on_missing_translation: Callback(locale, namespace, key) for misses.
        on_missing_variables: Callback(template, names) for unresolved placeholders.

    Returns:
        TranslationService: Wired service instance

    Usage:
        service = create_translation_service(
            I18nSettings(default_locale="en", supported_locales=["en", "fr"]),
            loader=HttpBundleLoader("https://cdn.example.com"),
        )
        await service.initialize()
    """
    if loader is None:
        loader = FileBundleLoader(
            base_dir=base_dir, load_path=settings.load_path, debug=settings.debug
        )

    store = BundleCache(loader, debug=settings.debug)
    interpolator = Interpolator(
        settings.interpolation, on_missing_variables=on_missing_variables
    )
    translator = Translator(
        store,
        interpolator,
        Pluralizer(),
        settings,
        on_missing_translation=on_missing_translation,
    )
    locale_manager = LocaleManager(
        settings,
        initial_locale=initial_locale,
        persistence=persistence,
        host_locales=host_locales,
    )

    logger.info(
        "translation_service_created",
        loader=type(loader).__name__,
        locale=locale_manager.get_current_locale(),
        supported_locales=settings.supported_locales,
    )
    return TranslationService(settings, locale_manager, store, translator)
