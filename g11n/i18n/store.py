"""In-memory bundle cache.

Handles:
- Caching of loaded (locale, namespace) bundles
- Deduplication of concurrent loads for the same (locale, namespace)
- Dot-path key lookup within cached bundles
- A missing-key ledger for diagnostics
"""

import asyncio
from functools import partial
from typing import Any, Dict, Iterable, List, Optional, Tuple

from g11n.i18n.loader import BundleLoader
from g11n.i18n.models import Bundle, Leaf, classify_leaf
from g11n.logging import get_module_logger

logger = get_module_logger()

_MISSING = object()


def _cache_key(locale: str, namespace: str) -> str:
    return f"{locale}:{namespace}"


class BundleCache:
    """Store of loaded bundles keyed by locale then namespace.

    A bundle is committed once per cache lifetime, whether its load
    succeeded or failed (failures commit an empty bundle). Committed bundles
    are only replaced after ``clear_cache`` or ``clear_locale_cache``.

    Attributes:
        loader: BundleLoader used to fetch bundles.
        debug: Emit verbose cache diagnostics.
    """

    def __init__(self, loader: BundleLoader, debug: bool = False):
        self.loader = loader
        self.debug = debug
        self._bundles: Dict[str, Dict[str, Bundle]] = {}
        self._inflight: Dict[str, "asyncio.Future[Bundle]"] = {}
        self._missing_keys: Dict[str, None] = {}
        self._epoch = 0
        self._locale_generations: Dict[str, int] = {}

    async def load_namespace(self, locale: str, namespace: str) -> Bundle:
        """Load a namespace for a locale.

        Concurrent callers for the same (locale, namespace) share a single
        loader invocation and receive the same bundle.

        Args:
            locale: Locale code.
            namespace: Namespace name.

        Returns:
            The cached bundle.
        """
        cached = self.get_bundle(locale, namespace)
        if cached is not None:
            return cached

        key = _cache_key(locale, namespace)
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(
                self._perform_load(locale, namespace, self._generation(locale))
            )
            self._inflight[key] = task
            task.add_done_callback(partial(self._forget_inflight, key))

        # A cancelled caller must not cancel the load shared with others
        return await asyncio.shield(task)

    def has_namespace(self, locale: str, namespace: str) -> bool:
        """Check whether a namespace is cached for a locale."""
        return namespace in self._bundles.get(locale, {})

    def is_loading(self, locale: str, namespace: str) -> bool:
        """Check whether a load for (locale, namespace) is in flight."""
        return _cache_key(locale, namespace) in self._inflight

    async def preload_locale(self, locale: str, namespaces: Iterable[str]) -> None:
        """Load several namespaces for a locale in parallel.

        Individual failures do not abort sibling loads.

        Args:
            locale: Locale code.
            namespaces: Namespace names to load.
        """
        unique = list(dict.fromkeys(namespaces))
        results = await asyncio.gather(
            *(self.load_namespace(locale, namespace) for namespace in unique),
            return_exceptions=True,
        )
        for namespace, result in zip(unique, results):
            if isinstance(result, BaseException):
                logger.error(
                    "namespace_preload_failed",
                    locale=locale,
                    namespace=namespace,
                    error=str(result),
                )

    def get_bundle(self, locale: str, namespace: str) -> Optional[Bundle]:
        """Get the cached bundle for a locale and namespace, if any."""
        return self._bundles.get(locale, {}).get(namespace)

    def get_loaded_namespaces(self, locale: str) -> List[str]:
        """List the namespaces cached for a locale."""
        return list(self._bundles.get(locale, {}))

    def get_translation(self, locale: str, namespace: str, key: str) -> Optional[str]:
        """Get a string translation by dot-path key.

        Plural-form objects are not resolved here and count as missing.

        Args:
            locale: Locale code.
            namespace: Namespace name.
            key: Dot-separated key path (e.g., "errors.not_found").

        Returns:
            The string leaf, or None if absent or not a string.
        """
        bundle = self.get_bundle(locale, namespace)
        if bundle is None:
            return None

        value = self._descend(bundle, key)
        if not isinstance(value, str):
            self._track_missing_key(locale, namespace, key)
            return None
        return value

    def get_raw_data(self, locale: str, namespace: str, key: str) -> Any:
        """Get the raw value at a dot-path key.

        Returns:
            A string, a plural-form mapping, or None if the path is absent.
        """
        bundle = self.get_bundle(locale, namespace)
        if bundle is None:
            return None
        value = self._descend(bundle, key)
        return None if value is _MISSING else value

    def get_leaf(self, locale: str, namespace: str, key: str) -> Optional[Leaf]:
        """Get the tagged leaf at a dot-path key."""
        return classify_leaf(self.get_raw_data(locale, namespace, key))

    def get_missing_keys(self) -> List[str]:
        """Get tracked missing keys as "locale:namespace:key" strings."""
        return list(self._missing_keys)

    def clear_cache(self) -> None:
        """Clear all bundles, in-flight loads and the missing-key ledger.

        Loads still in flight complete without committing.
        """
        self._epoch += 1
        self._bundles.clear()
        self._inflight.clear()
        self._missing_keys.clear()
        logger.info("cleared_bundle_cache")

    def clear_locale_cache(self, locale: str) -> None:
        """Clear bundles and in-flight loads for one locale."""
        self._locale_generations[locale] = self._locale_generations.get(locale, 0) + 1
        self._bundles.pop(locale, None)
        prefix = f"{locale}:"
        for key in [k for k in self._inflight if k.startswith(prefix)]:
            del self._inflight[key]
        logger.info("cleared_locale_cache", locale=locale)

    async def _perform_load(
        self, locale: str, namespace: str, generation: Tuple[int, int]
    ) -> Bundle:
        try:
            data = await self.loader.load(locale, namespace)
        except Exception as e:
            logger.error(
                "namespace_load_failed",
                locale=locale,
                namespace=namespace,
                error=str(e),
            )
            data = {}

        if generation != self._generation(locale):
            logger.info("discarded_stale_bundle", locale=locale, namespace=namespace)
            return data

        self._bundles.setdefault(locale, {})[namespace] = data
        if self.debug:
            logger.info("cached_bundle", locale=locale, namespace=namespace)
        return data

    def _forget_inflight(self, key: str, task: "asyncio.Future[Bundle]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    def _generation(self, locale: str) -> Tuple[int, int]:
        return (self._epoch, self._locale_generations.get(locale, 0))

    def _track_missing_key(self, locale: str, namespace: str, key: str) -> None:
        entry = f"{locale}:{namespace}:{key}"
        if entry not in self._missing_keys:
            self._missing_keys[entry] = None
            if self.debug:
                logger.info("tracked_missing_key", key=entry)

    @staticmethod
    def _descend(data: Bundle, key: str) -> Any:
        current: Any = data
        for segment in key.split("."):
            if not isinstance(current, dict):
                return _MISSING
            current = current.get(segment, _MISSING)
            if current is _MISSING:
                return _MISSING
        return current
