"""i18n system - locale state, bundle caching and translation resolution.

Main components:
- models: bundle leaves, TranslationOptions, LocaleInfo
- plural_rules / pluralizer: CLDR plural form selection
- interpolator: template substitution with HTML escaping
- loader: BundleLoader and file, HTTP and in-memory loaders
- store: BundleCache with deduplicated loading and missing-key ledger
- persistence: LocalePersistence implementations
- resolvers: locale normalization and host preference detection
- locale_manager: LocaleManager for locale state and change notification
- translator: Translator with fallback chain
- service / factory / providers: TranslationService facade and wiring
"""

from g11n.i18n.errors import (
    I18nError,
    InvalidLocaleError,
    NotInitializedError,
    TranslationLoadError,
)
from g11n.i18n.factory import create_translation_service
from g11n.i18n.interpolator import Interpolator
from g11n.i18n.loader import (
    BundleLoader,
    FileBundleLoader,
    HttpBundleLoader,
    StaticBundleLoader,
)
from g11n.i18n.locale_manager import LocaleManager
from g11n.i18n.models import (
    ContextLeaf,
    FormsLeaf,
    LocaleInfo,
    TextDirection,
    TextLeaf,
    TranslationOptions,
)
from g11n.i18n.persistence import (
    FileLocalePersistence,
    InMemoryLocalePersistence,
    LocalePersistence,
)
from g11n.i18n.plural_rules import PluralForm
from g11n.i18n.pluralizer import Pluralizer
from g11n.i18n.service import ServiceState, TranslationService
from g11n.i18n.store import BundleCache
from g11n.i18n.translator import Translator

__all__ = [
    "I18nError",
    "InvalidLocaleError",
    "NotInitializedError",
    "TranslationLoadError",
    "BundleLoader",
    "FileBundleLoader",
    "HttpBundleLoader",
    "StaticBundleLoader",
    "BundleCache",
    "LocalePersistence",
    "InMemoryLocalePersistence",
    "FileLocalePersistence",
    "LocaleManager",
    "LocaleInfo",
    "TextDirection",
    "TextLeaf",
    "FormsLeaf",
    "ContextLeaf",
    "TranslationOptions",
    "PluralForm",
    "Pluralizer",
    "Interpolator",
    "Translator",
    "TranslationService",
    "ServiceState",
    "create_translation_service",
]
