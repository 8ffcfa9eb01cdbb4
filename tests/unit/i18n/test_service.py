"""Tests for g11n.i18n.service module."""

# pylint: disable=protected-access

import asyncio
from unittest.mock import MagicMock

import pytest

from g11n.i18n import (
    InMemoryLocalePersistence,
    StaticBundleLoader,
    create_translation_service,
)
from g11n.i18n.errors import InvalidLocaleError, NotInitializedError
from g11n.i18n.loader import BundleLoader
from g11n.i18n.models import TextDirection, TranslationOptions
from g11n.i18n.service import ServiceState

pytestmark = pytest.mark.unit


class SlowLoader(BundleLoader):
    """Static loader whose fetches for chosen locales wait on an event."""

    def __init__(self, bundles, slow_locales):
        super().__init__()
        self.inner = StaticBundleLoader(bundles)
        self.slow_locales = set(slow_locales)
        self.release = asyncio.Event()

    async def fetch(self, locale, namespace):
        if locale in self.slow_locales:
            await self.release.wait()
        return await self.inner.fetch(locale, namespace)


@pytest.fixture
def persistence():
    return InMemoryLocalePersistence()


@pytest.fixture
def make_service(i18n_settings, sample_bundles, persistence):
    """Factory for services over the sample bundles."""

    def _make_service(loader=None, **kwargs):
        return create_translation_service(
            kwargs.pop("settings", i18n_settings),
            loader=loader or StaticBundleLoader(sample_bundles),
            persistence=persistence,
            host_locales=lambda: [],
            **kwargs,
        )

    return _make_service


class TestLifecycle:
    """State machine and readiness checks."""

    def test_starts_uninitialized(self, make_service):
        service = make_service()
        assert service.state is ServiceState.UNINITIALIZED
        assert not service.is_initialized()

    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.t("welcome"),
            lambda s: s.get_locale(),
            lambda s: s.get_supported_locales(),
            lambda s: s.get_text_direction(),
            lambda s: s.subscribe(lambda locale: None),
            lambda s: s.get_missing_keys(),
        ],
    )
    def test_use_before_initialize_raises(self, make_service, call):
        service = make_service()
        with pytest.raises(NotInitializedError) as exc_info:
            call(service)
        assert exc_info.value.code == "NOT_INITIALIZED"
        assert exc_info.value.state == "uninitialized"

    @pytest.mark.asyncio
    async def test_change_locale_before_initialize_raises(self, make_service):
        with pytest.raises(NotInitializedError):
            await make_service().change_locale("fr")

    @pytest.mark.asyncio
    async def test_initialize_preloads_current_and_fallback(self, make_service):
        service = make_service(initial_locale="es")
        await service.initialize()

        assert service.state is ServiceState.READY
        for locale in ("es", "en"):
            assert service.store.has_namespace(locale, "common")
            assert service.store.has_namespace(locale, "auth")
        assert not service.store.has_namespace("fr", "common")

    @pytest.mark.asyncio
    async def test_state_is_initializing_while_loading(self, make_service, sample_bundles):
        loader = SlowLoader(sample_bundles, slow_locales={"en"})
        service = make_service(loader=loader)

        task = asyncio.ensure_future(service.initialize())
        await asyncio.sleep(0)
        assert service.state is ServiceState.INITIALIZING
        with pytest.raises(NotInitializedError):
            service.t("welcome")

        loader.release.set()
        await task
        assert service.state is ServiceState.READY

    @pytest.mark.asyncio
    async def test_concurrent_initialize_shares_one_run(self, make_service, sample_bundles):
        loader = StaticBundleLoader(sample_bundles)
        service = make_service(loader=loader)

        await asyncio.gather(service.initialize(), service.initialize())

        assert service.is_initialized()
        assert loader.calls == {"en:common": 1, "en:auth": 1}

    @pytest.mark.asyncio
    async def test_initialize_twice_is_harmless(self, make_service, sample_bundles):
        loader = StaticBundleLoader(sample_bundles)
        service = make_service(loader=loader)
        await service.initialize()
        await service.initialize()
        assert loader.calls == {"en:common": 1, "en:auth": 1}

    @pytest.mark.asyncio
    async def test_failed_initialize_returns_to_uninitialized(self, make_service):
        service = make_service()
        service.store.preload_locale = MagicMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await service.initialize()

        assert service.state is ServiceState.UNINITIALIZED
        assert service._init_task is None


class TestTranslation:
    """Translating through the facade."""

    @pytest.mark.asyncio
    async def test_t_uses_current_locale(self, make_service):
        service = make_service()
        await service.initialize()

        assert service.t("greeting", name="Ada") == "Hello, Ada!"
        assert service.t("items", count=3) == "3 items"
        assert service.get_locale() == "en"

    @pytest.mark.asyncio
    async def test_t_merges_options_and_keywords(self, make_service):
        service = make_service()
        await service.initialize()
        assert service.t("greeting", TranslationOptions(ns="common"), name="Ada") == "Hello, Ada!"

    @pytest.mark.asyncio
    async def test_missing_keys_are_exposed(self, make_service):
        service = make_service()
        await service.initialize()
        service.t("nope")
        assert service.get_missing_keys() == ["en:common:nope"]

    @pytest.mark.asyncio
    async def test_supported_locales_and_direction(self, make_service):
        service = make_service(initial_locale="ar")
        await service.initialize()

        assert [info.code for info in service.get_supported_locales()] == [
            "en",
            "es",
            "fr",
            "ar",
        ]
        assert service.get_text_direction() is TextDirection.RTL


class TestChangeLocale:
    """Tests for change_locale."""

    @pytest.mark.asyncio
    async def test_loads_then_commits(self, make_service, persistence):
        service = make_service()
        await service.initialize()
        listener = MagicMock()
        service.subscribe(listener)

        assert await service.change_locale("fr-FR") is True

        assert service.get_locale() == "fr"
        assert service.store.has_namespace("fr", "auth")
        assert service.t("welcome") == "Bienvenue dans notre application"
        assert persistence.get() == "fr"
        listener.assert_called_once_with("fr")

    @pytest.mark.asyncio
    async def test_invalid_locale_raises(self, make_service):
        service = make_service()
        await service.initialize()

        with pytest.raises(InvalidLocaleError):
            await service.change_locale("de")

        assert service.get_locale() == "en"
        assert not service.store.has_namespace("de", "common")

    @pytest.mark.asyncio
    async def test_locale_not_committed_until_loaded(self, make_service, sample_bundles):
        loader = SlowLoader(sample_bundles, slow_locales={"fr"})
        service = make_service(loader=loader)
        await service.initialize()

        task = asyncio.ensure_future(service.change_locale("fr"))
        await asyncio.sleep(0)
        assert service.get_locale() == "en"

        loader.release.set()
        assert await task is True
        assert service.get_locale() == "fr"

    @pytest.mark.asyncio
    async def test_superseded_change_does_not_commit(self, make_service, sample_bundles):
        loader = SlowLoader(sample_bundles, slow_locales={"fr"})
        service = make_service(loader=loader)
        await service.initialize()
        listener = MagicMock()
        service.subscribe(listener)

        slow = asyncio.ensure_future(service.change_locale("fr"))
        await asyncio.sleep(0)
        assert await service.change_locale("es") is True

        loader.release.set()
        assert await slow is False
        assert service.get_locale() == "es"
        listener.assert_called_once_with("es")

    @pytest.mark.asyncio
    async def test_load_namespaces_joins_later_switches(self, make_service, sample_bundles):
        bundles = {**sample_bundles}
        bundles["en"]["extra"] = {"title": "Extra"}
        bundles["es"]["extra"] = {"title": "Adicional"}
        service = make_service(loader=StaticBundleLoader(bundles))
        await service.initialize()

        await service.load_namespaces(["extra"])
        assert service.t("title", ns="extra") == "Extra"

        await service.change_locale("es")
        assert service.store.has_namespace("es", "extra")
        assert service.t("title", ns="extra") == "Adicional"
