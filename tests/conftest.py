"""Shared fixtures for g11n tests.

Provides settings factories and sample translation bundles for en, es, fr
and ar.
"""

import copy

import pytest

from g11n.configuration import I18nSettings

SAMPLE_BUNDLES = {
    "en": {
        "common": {
            "welcome": "Welcome to our application",
            "farewell": "Goodbye!",
            "greeting": "Hello, {{name}}!",
            "profile": "{{user.name}} lives in {{user.address.city}}",
            "nested": {
                "deep": {
                    "key": "Deeply nested value",
                },
            },
            "errors": {
                "notFound": "Item not found",
                "unauthorized": "You are not authorized",
            },
            "items": {
                "zero": "No items",
                "one": "One item",
                "other": "{{count}} items",
            },
            "ordinal": {
                "one": "{{count}}st place",
                "two": "{{count}}nd place",
                "few": "{{count}}rd place",
                "other": "{{count}}th place",
            },
            "itemsWithContext": {
                "male": {
                    "one": "{{count}} item for him",
                    "other": "{{count}} items for him",
                },
                "female": {
                    "one": "{{count}} item for her",
                    "other": "{{count}} items for her",
                },
            },
            "stock": {
                "0": "Sold out",
                "2-5": "Only a few left",
                "20+": "Plenty in stock",
                "one": "Last one",
                "other": "{{count}} in stock",
            },
            "messages": "You have {{count}} messages",
            "emptyForms": {},
            "english_only": "Only in English",
        },
        "auth": {
            "login": "Log in",
            "logout": "Log out",
        },
    },
    "es": {
        "common": {
            "welcome": "Bienvenido a nuestra aplicación",
            "greeting": "¡Hola, {{name}}!",
            "items": {
                "zero": "Sin artículos",
                "one": "Un artículo",
                "other": "{{count}} artículos",
            },
            "ordinal": {
                "other": "{{count}}º lugar",
            },
        },
        "auth": {
            "login": "Iniciar sesión",
            "logout": "Cerrar sesión",
        },
    },
    "fr": {
        "common": {
            "welcome": "Bienvenue dans notre application",
            "greeting": "Bonjour, {{name}} !",
            "items": {
                "one": "{{count}} article",
                "other": "{{count}} articles",
            },
            "ordinal": {
                "one": "{{count}}er place",
                "other": "{{count}}ème place",
            },
        },
        "auth": {
            "login": "Se connecter",
        },
    },
    "ar": {
        "common": {
            "welcome": "مرحبا بكم في تطبيقنا",
            "items": {
                "zero": "لا عناصر",
                "one": "عنصر واحد",
                "two": "عنصران",
                "few": "{{count}} عناصر",
                "many": "{{count}} عنصرًا",
                "other": "{{count}} عنصر",
            },
        },
    },
}


@pytest.fixture
def sample_bundles():
    """Deep copy of the sample bundles, safe to mutate per test."""
    return copy.deepcopy(SAMPLE_BUNDLES)


@pytest.fixture
def make_settings():
    """Factory for I18nSettings with test-friendly defaults."""

    def _make_settings(**overrides):
        values = {
            "default_locale": "en",
            "supported_locales": ["en", "es", "fr", "ar"],
            "namespaces": ["common", "auth"],
        }
        values.update(overrides)
        return I18nSettings(**values)

    return _make_settings


@pytest.fixture
def i18n_settings(make_settings):
    """Default I18nSettings: en default, en/es/fr/ar supported."""
    return make_settings()
