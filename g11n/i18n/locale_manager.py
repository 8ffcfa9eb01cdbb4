"""Locale state management.

Responsibilities:
- Maintain the current locale
- Validate locale codes against the supported set
- Detect the host's preferred locale
- Persist locale changes through an injected LocalePersistence
- Notify subscribers of locale changes
- Provide locale display metadata
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from g11n.configuration.settings import I18nSettings
from g11n.i18n.errors import InvalidLocaleError
from g11n.i18n.models import LocaleInfo, TextDirection
from g11n.i18n.persistence import InMemoryLocalePersistence, LocalePersistence
from g11n.i18n.resolvers import (
    is_locale_supported,
    match_supported_locale,
    normalize_locale,
    system_locale_preferences,
)
from g11n.logging import get_module_logger

logger = get_module_logger()

LocaleChangeListener = Callable[[str], None]
HostLocaleSource = Callable[[], Sequence[str]]

LOCALE_METADATA: Dict[str, Tuple[str, str, TextDirection]] = {
    "en": ("English", "English", TextDirection.LTR),
    "es": ("Spanish", "Español", TextDirection.LTR),
    "fr": ("French", "Français", TextDirection.LTR),
    "de": ("German", "Deutsch", TextDirection.LTR),
    "it": ("Italian", "Italiano", TextDirection.LTR),
    "pt": ("Portuguese", "Português", TextDirection.LTR),
    "ru": ("Russian", "Русский", TextDirection.LTR),
    "ja": ("Japanese", "日本語", TextDirection.LTR),
    "zh": ("Chinese", "中文", TextDirection.LTR),
    "ko": ("Korean", "한국어", TextDirection.LTR),
    "ar": ("Arabic", "العربية", TextDirection.RTL),
    "he": ("Hebrew", "עברית", TextDirection.RTL),
    "hi": ("Hindi", "हिन्दी", TextDirection.LTR),
    "tr": ("Turkish", "Türkçe", TextDirection.LTR),
    "pl": ("Polish", "Polski", TextDirection.LTR),
    "nl": ("Dutch", "Nederlands", TextDirection.LTR),
    "sv": ("Swedish", "Svenska", TextDirection.LTR),
    "da": ("Danish", "Dansk", TextDirection.LTR),
    "fi": ("Finnish", "Suomi", TextDirection.LTR),
    "no": ("Norwegian", "Norsk", TextDirection.LTR),
}


def get_locale_info(locale: str) -> LocaleInfo:
    """Get display metadata for a locale.

    Unknown locales get their upper-cased code as name and left-to-right
    direction.
    """
    code = normalize_locale(locale)
    metadata = LOCALE_METADATA.get(code)
    if metadata is None:
        return LocaleInfo(code=code, name=code.upper(), native_name=code.upper())
    name, native_name, direction = metadata
    return LocaleInfo(code=code, name=name, native_name=native_name, direction=direction)


class LocaleManager:
    """Holds the current locale and broadcasts changes.

    The initial locale is chosen from, in order: the explicit
    ``initial_locale``, the persisted value, the host's detected preference,
    and the configured default. ``set_locale`` is the only mutation path.

    Attributes:
        supported_locales: Normalized supported codes, in configured order.
        default_locale: Configured default locale.
        fallback_locale: Locale used by detection and reset_to_default.
        persistence: Locale preference storage.
        debug: Emit verbose diagnostics.
    """

    def __init__(
        self,
        settings: I18nSettings,
        initial_locale: Optional[str] = None,
        persistence: Optional[LocalePersistence] = None,
        host_locales: Optional[HostLocaleSource] = None,
    ):
        self.supported_locales: List[str] = list(settings.supported_locales)
        self.default_locale = settings.default_locale
        self.fallback_locale = settings.effective_fallback_locale
        self.persistence = persistence or InMemoryLocalePersistence()
        self.host_locales = host_locales or system_locale_preferences
        self.debug = settings.debug
        self._listeners: List[Tuple[object, LocaleChangeListener]] = []
        self.log = logger.bind(supported_locales=self.supported_locales)

        self._current_locale = self._determine_initial_locale(initial_locale)
        if self.debug:
            self.log.info("initialized_locale_manager", locale=self._current_locale)

    def get_current_locale(self) -> str:
        """Get the current locale code."""
        return self._current_locale

    def is_locale_supported(self, locale: str) -> bool:
        """Check if a locale, once normalized, is supported."""
        return is_locale_supported(locale, self.supported_locales)

    def set_locale(self, locale: str) -> None:
        """Set the current locale.

        Setting the already-current locale is a no-op: no persistence write
        and no notification. Otherwise the new locale is persisted (failures
        are logged, not raised) and subscribers are notified in registration
        order.

        Args:
            locale: Locale code in any casing or region form.

        Raises:
            InvalidLocaleError: If the normalized locale is not supported.
        """
        normalized = normalize_locale(locale)
        if not self.is_locale_supported(normalized):
            self.log.warning("invalid_locale", locale=locale)
            raise InvalidLocaleError(normalized, self.supported_locales)

        if normalized == self._current_locale:
            if self.debug:
                self.log.info("locale_unchanged", locale=normalized)
            return

        previous = self._current_locale
        self._current_locale = normalized
        self._persist(normalized)
        self.log.info("locale_changed", previous=previous, locale=normalized)
        self._notify_listeners()

    def reset_to_default(self) -> None:
        """Set the locale to the configured fallback locale."""
        self.set_locale(self.fallback_locale)

    def detect_preferred_locale(self) -> str:
        """Detect the host's preferred supported locale.

        Returns:
            The first host preference that is supported once normalized,
            or the fallback locale.
        """
        detected = self._match_host_preference()
        return detected if detected is not None else self.fallback_locale

    def subscribe(self, listener: LocaleChangeListener) -> Callable[[], None]:
        """Subscribe to locale changes.

        Args:
            listener: Called with the new locale code after each change.

        Returns:
            Function removing the subscription; calling it twice is harmless.
        """
        token = object()
        self._listeners.append((token, listener))

        def unsubscribe() -> None:
            self._listeners[:] = [
                entry for entry in self._listeners if entry[0] is not token
            ]

        return unsubscribe

    def get_listener_count(self) -> int:
        return len(self._listeners)

    def get_supported_locales(self) -> List[LocaleInfo]:
        """Get metadata for every supported locale, in configured order."""
        return [get_locale_info(code) for code in self.supported_locales]

    def get_locale_info(self, locale: str) -> LocaleInfo:
        return get_locale_info(locale)

    def get_text_direction(self) -> TextDirection:
        """Get the text direction of the current locale."""
        return get_locale_info(self._current_locale).direction

    def get_text_direction_for_locale(self, locale: str) -> TextDirection:
        return get_locale_info(locale).direction

    def _determine_initial_locale(self, initial_locale: Optional[str]) -> str:
        if initial_locale:
            normalized = normalize_locale(initial_locale)
            if self.is_locale_supported(normalized):
                return normalized
            self.log.warning("unsupported_initial_locale", locale=initial_locale)

        persisted = self._read_persisted()
        if persisted:
            normalized = normalize_locale(persisted)
            if self.is_locale_supported(normalized):
                if self.debug:
                    self.log.info("using_persisted_locale", locale=normalized)
                return normalized

        detected = self._match_host_preference()
        if detected is not None:
            if self.debug:
                self.log.info("using_detected_locale", locale=detected)
            return detected

        if self.debug:
            self.log.info("using_default_locale", locale=self.default_locale)
        return self.default_locale

    def _read_persisted(self) -> Optional[str]:
        try:
            return self.persistence.get()
        except Exception as e:
            self.log.error("locale_read_failed", error=str(e))
            return None

    def _match_host_preference(self) -> Optional[str]:
        try:
            preferences = list(self.host_locales())
        except Exception as e:
            self.log.error("host_locale_detection_failed", error=str(e))
            return None
        return match_supported_locale(preferences, self.supported_locales)

    def _persist(self, locale: str) -> None:
        try:
            stored = self.persistence.set(locale)
        except Exception as e:
            self.log.error("locale_persist_failed", locale=locale, error=str(e))
            return
        if not stored:
            self.log.warning("locale_not_persisted", locale=locale)

    def _notify_listeners(self) -> None:
        locale = self._current_locale
        for _, listener in list(self._listeners):
            try:
                listener(locale)
            except Exception as e:
                listener_name = getattr(listener, "__name__", "unknown")
                self.log.error(
                    "locale_change_listener_failed",
                    listener=listener_name,
                    locale=locale,
                    error=str(e),
                )
