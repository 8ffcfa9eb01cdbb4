"""Feature-level fixtures for i18n system tests.

Provides loaders, a primed bundle cache and wired components for
resolution scenarios.
"""

import json

import pytest
import pytest_asyncio
import yaml

from g11n.i18n import (
    BundleCache,
    InMemoryLocalePersistence,
    Interpolator,
    LocaleManager,
    Pluralizer,
    StaticBundleLoader,
    Translator,
)


@pytest.fixture
def static_loader(sample_bundles):
    """StaticBundleLoader over the sample bundles."""
    return StaticBundleLoader(sample_bundles)


@pytest.fixture
def store(static_loader):
    """Empty BundleCache backed by the static loader."""
    return BundleCache(static_loader)


@pytest_asyncio.fixture
async def loaded_store(store):
    """BundleCache with common and auth loaded for en, es, fr and ar."""
    for locale in ("en", "es", "fr", "ar"):
        await store.preload_locale(locale, ["common", "auth"])
    return store


@pytest.fixture
def interpolator():
    """Interpolator with default delimiters and HTML escaping."""
    return Interpolator()


@pytest.fixture
def pluralizer():
    return Pluralizer()


@pytest_asyncio.fixture
async def translator(loaded_store, interpolator, pluralizer, i18n_settings):
    """Translator over the loaded store, falling back to en."""
    return Translator(loaded_store, interpolator, pluralizer, i18n_settings)


@pytest.fixture
def persistence():
    return InMemoryLocalePersistence()


@pytest.fixture
def no_host_locales():
    """Host locale source reporting no preferences."""
    return lambda: []


@pytest.fixture
def locale_manager(i18n_settings, persistence, no_host_locales):
    """LocaleManager starting at the default locale."""
    return LocaleManager(
        i18n_settings, persistence=persistence, host_locales=no_host_locales
    )


@pytest.fixture
def temp_locales_dir(tmp_path):
    """Create a temporary locales tree with JSON and YAML bundles.

    Returns a directory structure like:
    - locales/en/common.json
    - locales/fr/common.json
    - locales/en/auth.yml
    - locales/es/common.json (not valid JSON)
    - locales/de/common.json (JSON list, not an object)
    """
    en_dir = tmp_path / "locales" / "en"
    fr_dir = tmp_path / "locales" / "fr"
    es_dir = tmp_path / "locales" / "es"
    de_dir = tmp_path / "locales" / "de"
    for directory in (en_dir, fr_dir, es_dir, de_dir):
        directory.mkdir(parents=True)

    (en_dir / "common.json").write_text(
        json.dumps({"welcome": "Welcome", "greeting": "Hello, {{name}}!"}),
        encoding="utf-8",
    )
    (fr_dir / "common.json").write_text(
        json.dumps({"welcome": "Bienvenue"}), encoding="utf-8"
    )
    with open(en_dir / "auth.yml", "w", encoding="utf-8") as f:
        yaml.dump({"login": "Log in", "nested": {"key": "Nested"}}, f)
    (es_dir / "common.json").write_text("{not json", encoding="utf-8")
    (de_dir / "common.json").write_text(json.dumps(["a", "b"]), encoding="utf-8")

    return tmp_path
