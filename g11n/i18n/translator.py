"""Translation service for resolving keys into display strings.

Orchestrates key lookup in the BundleCache, pluralization, interpolation
and the fallback chain: requested locale, then fallback locale, then the
caller's default value or the literal key.
"""

from typing import Any, Callable, Dict, Optional

from g11n.configuration.settings import I18nSettings
from g11n.i18n.interpolator import Interpolator
from g11n.i18n.models import (
    ContextLeaf,
    FormsLeaf,
    TextLeaf,
    TranslationOptions,
)
from g11n.i18n.pluralizer import Pluralizer, format_count
from g11n.i18n.resolvers import normalize_locale
from g11n.i18n.store import BundleCache
from g11n.logging import get_module_logger

logger = get_module_logger()

MissingTranslationHandler = Callable[[str, str, str], None]


class Translator:
    """Resolves translation keys for a locale.

    Attributes:
        store: BundleCache holding loaded bundles.
        interpolator: Interpolator for template substitution.
        pluralizer: Pluralizer for count-based forms.
        default_namespace: Namespace used when options do not name one.
        fallback_locale: Locale retried when a key is unresolved.
        on_missing_translation: Optional callback(locale, namespace, key).
    """

    def __init__(
        self,
        store: BundleCache,
        interpolator: Interpolator,
        pluralizer: Pluralizer,
        settings: I18nSettings,
        on_missing_translation: Optional[MissingTranslationHandler] = None,
    ):
        self.store = store
        self.interpolator = interpolator
        self.pluralizer = pluralizer
        self.default_namespace = settings.default_namespace
        self.fallback_locale: Optional[str] = settings.effective_fallback_locale
        self.debug = settings.debug
        self.on_missing_translation = on_missing_translation

    def translate(
        self,
        locale: str,
        key: str,
        options: Optional[TranslationOptions] = None,
        **kwargs: Any,
    ) -> str:
        """Translate a key into a display string.

        Options may be given as a TranslationOptions instance or as keyword
        arguments; unreserved keyword arguments become interpolation values.

        Example:
            >>> translator.translate("en", "greeting", name="Ada")
            'Hello, Ada!'
            >>> translator.translate("en", "items", count=3)
            '3 items'

        Args:
            locale: Locale to resolve in.
            key: Dot-separated translation key.
            options: Translation options.
            **kwargs: Options and variables, merged over ``options`` when both are given.

        Returns:
            The translated string, the default value, or the key itself.
        """
        if options is None:
            options = TranslationOptions.from_kwargs(**kwargs)
        elif kwargs:
            options = options.merged(**kwargs)
        locale = normalize_locale(locale)
        namespace = options.ns or self.default_namespace

        translation = self._resolve(locale, key, namespace, options)

        if (
            translation is None
            and self.fallback_locale
            and self.fallback_locale != locale
        ):
            translation = self._resolve(self.fallback_locale, key, namespace, options)
            if translation is not None and self.debug:
                logger.info(
                    "used_fallback_translation",
                    key=key,
                    namespace=namespace,
                    requested_locale=locale,
                    fallback_locale=self.fallback_locale,
                )

        if translation is None:
            return self._apply_fallback(locale, key, namespace, options)

        return translation

    def exists(self, locale: str, key: str, ns: Optional[str] = None) -> bool:
        """Check whether a key resolves to a leaf in a locale (no fallback)."""
        namespace = ns or self.default_namespace
        return self.store.get_leaf(locale, namespace, key) is not None

    def _resolve(
        self,
        locale: str,
        key: str,
        namespace: str,
        options: TranslationOptions,
    ) -> Optional[str]:
        if options.count is not None:
            return self._resolve_plural(locale, key, namespace, options)

        translation = self.store.get_translation(locale, namespace, key)
        if translation is None:
            return None

        values = options.interpolation_values()
        if values:
            return self.interpolator.interpolate(translation, values)
        return translation

    def _resolve_plural(
        self,
        locale: str,
        key: str,
        namespace: str,
        options: TranslationOptions,
    ) -> Optional[str]:
        leaf = self.store.get_leaf(locale, namespace, key)
        if leaf is None:
            return None

        values: Dict[str, Any] = {
            **options.interpolation_values(),
            "count": format_count(options.count),
        }

        if isinstance(leaf, TextLeaf):
            return self.interpolator.interpolate(leaf.value, values)

        if isinstance(leaf, (FormsLeaf, ContextLeaf)):
            template = self.pluralizer.pluralize(
                locale,
                options.count,
                leaf.forms,
                ordinal=options.ordinal,
                context=options.context,
            )
            return self.interpolator.interpolate(template, values)

        return None

    def _apply_fallback(
        self,
        locale: str,
        key: str,
        namespace: str,
        options: TranslationOptions,
    ) -> str:
        logger.warning(
            "translation_missing",
            key=key,
            namespace=namespace,
            locale=locale,
            fallback_locale=self.fallback_locale,
            has_default=options.default_value is not None,
        )
        if self.on_missing_translation is not None:
            try:
                self.on_missing_translation(locale, namespace, key)
            except Exception as e:
                logger.error("missing_translation_handler_failed", key=key, error=str(e))

        if options.default_value is not None:
            return options.default_value
        return key
