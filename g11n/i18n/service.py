"""Translation service facade.

Binds the locale state, bundle cache and translator into one object with
an explicit lifecycle, for dependency injection or use through the
process-wide provider in ``g11n.i18n.providers``.
"""

import asyncio
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from g11n.configuration.settings import I18nSettings
from g11n.i18n.errors import InvalidLocaleError, NotInitializedError
from g11n.i18n.locale_manager import LocaleChangeListener, LocaleManager
from g11n.i18n.models import LocaleInfo, TextDirection, TranslationOptions
from g11n.i18n.resolvers import normalize_locale
from g11n.i18n.store import BundleCache
from g11n.i18n.translator import Translator
from g11n.logging import get_module_logger

logger = get_module_logger()


class ServiceState(str, Enum):
    """Lifecycle of a TranslationService.

    UNINITIALIZED -> INITIALIZING -> READY. A failed initialization
    returns to UNINITIALIZED.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class TranslationService:
    """Class-based translation service.

    Usage:
        service = create_translation_service(settings)
        await service.initialize()

        service.t("greeting", name="Ada")
        service.t("items", count=3)

        await service.change_locale("fr")

    Attributes:
        settings: I18nSettings the service was built from.
        locale_manager: Current-locale state.
        store: Bundle cache.
        translator: Key resolution engine.
    """

    def __init__(
        self,
        settings: I18nSettings,
        locale_manager: LocaleManager,
        store: BundleCache,
        translator: Translator,
    ):
        self.settings = settings
        self.locale_manager = locale_manager
        self.store = store
        self.translator = translator
        self._state = ServiceState.UNINITIALIZED
        self._init_task: Optional["asyncio.Future[None]"] = None
        self._namespaces: List[str] = list(settings.namespaces)
        self._locale_request = 0

    @property
    def state(self) -> ServiceState:
        return self._state

    def is_initialized(self) -> bool:
        return self._state is ServiceState.READY

    async def initialize(self) -> None:
        """Preload configured namespaces and move to READY.

        Namespaces are loaded for the current locale and for the fallback
        locale. Concurrent calls share one initialization; calls after READY
        return immediately.
        """
        if self._state is ServiceState.READY:
            logger.warning("translation_service_already_initialized")
            return

        if self._init_task is None:
            self._state = ServiceState.INITIALIZING
            self._init_task = asyncio.ensure_future(self._initialize())

        try:
            await asyncio.shield(self._init_task)
        except Exception:
            self._state = ServiceState.UNINITIALIZED
            self._init_task = None
            raise

    async def _initialize(self) -> None:
        current = self.locale_manager.get_current_locale()
        locales = list(dict.fromkeys([current, self.locale_manager.fallback_locale]))
        await asyncio.gather(
            *(self.store.preload_locale(locale, self._namespaces) for locale in locales)
        )
        self._state = ServiceState.READY
        logger.info(
            "translation_service_initialized",
            locale=current,
            namespaces=self._namespaces,
        )

    def t(self, key: str, options: Optional[TranslationOptions] = None, **kwargs: Any) -> str:
        """Translate a key in the current locale.

        Raises:
            NotInitializedError: If the service is not READY.
        """
        self._ensure_ready()
        locale = self.locale_manager.get_current_locale()
        return self.translator.translate(locale, key, options, **kwargs)

    def get_locale(self) -> str:
        self._ensure_ready()
        return self.locale_manager.get_current_locale()

    def get_supported_locales(self) -> List[LocaleInfo]:
        self._ensure_ready()
        return self.locale_manager.get_supported_locales()

    def get_text_direction(self) -> TextDirection:
        self._ensure_ready()
        return self.locale_manager.get_text_direction()

    async def change_locale(self, locale: str) -> bool:
        """Switch to a locale once its namespaces are loaded.

        The locale is committed only after its preload settles. If another
        change_locale call starts while this one is loading, this call is
        superseded and does not commit.

        Args:
            locale: Locale code in any casing or region form.

        Returns:
            True if this call committed its locale, False if superseded.

        Raises:
            NotInitializedError: If the service is not READY.
            InvalidLocaleError: If the locale is not supported.
        """
        self._ensure_ready()
        normalized = normalize_locale(locale)
        if not self.locale_manager.is_locale_supported(normalized):
            raise InvalidLocaleError(normalized, self.locale_manager.supported_locales)

        self._locale_request += 1
        request = self._locale_request

        await self.store.preload_locale(normalized, self._namespaces)

        if request != self._locale_request:
            logger.info("locale_change_superseded", locale=normalized)
            return False

        self.locale_manager.set_locale(normalized)
        return True

    def subscribe(self, listener: LocaleChangeListener) -> Callable[[], None]:
        """Subscribe to locale changes; returns an unsubscribe function."""
        self._ensure_ready()
        return self.locale_manager.subscribe(listener)

    async def load_namespaces(self, namespaces: Iterable[str]) -> None:
        """Load extra namespaces for the current locale.

        They are also preloaded on subsequent locale changes.
        """
        self._ensure_ready()
        namespaces = list(namespaces)
        for namespace in namespaces:
            if namespace not in self._namespaces:
                self._namespaces.append(namespace)
        await self.store.preload_locale(
            self.locale_manager.get_current_locale(), namespaces
        )

    def get_missing_keys(self) -> List[str]:
        self._ensure_ready()
        return self.store.get_missing_keys()

    def _ensure_ready(self) -> None:
        if self._state is not ServiceState.READY:
            raise NotInitializedError(self._state.value)
