"""Bundle loading interface and implementations.

Defines the contract for fetching a (locale, namespace) bundle and provides
file, HTTP and in-memory loaders. Loaders never raise to their callers: any
transport, status or decode failure yields an empty bundle.
"""

import asyncio
import copy
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import requests
import yaml

from g11n.i18n.errors import TranslationLoadError
from g11n.i18n.models import Bundle
from g11n.logging import get_module_logger

logger = get_module_logger()

DEFAULT_LOAD_PATH = "locales/{{locale}}/{{namespace}}.json"


class BundleLoader(ABC):
    """Abstract base for bundle loaders.

    Implementations define ``fetch``; ``load`` wraps it so failures degrade
    to an empty bundle.

    Attributes:
        load_path: Path template with {{locale}}/{{lng}} and
            {{namespace}}/{{ns}} placeholders.
        debug: Emit verbose load diagnostics.
    """

    def __init__(self, load_path: str = DEFAULT_LOAD_PATH, debug: bool = False):
        self.load_path = load_path
        self.debug = debug

    def get_load_path(self, locale: str, namespace: str) -> str:
        """Resolve the path template for a locale and namespace.

        Example:
            >>> loader.get_load_path("fr", "auth")
            'locales/fr/auth.json'
        """
        return (
            self.load_path.replace("{{locale}}", locale)
            .replace("{{namespace}}", namespace)
            .replace("{{lng}}", locale)
            .replace("{{ns}}", namespace)
        )

    async def load(self, locale: str, namespace: str) -> Bundle:
        """Load a bundle, returning an empty one on any failure.

        Args:
            locale: Locale code.
            namespace: Namespace name.

        Returns:
            The bundle key tree, or {} if it could not be loaded.
        """
        path = self.get_load_path(locale, namespace)
        if self.debug:
            logger.info("loading_bundle", locale=locale, namespace=namespace, path=path)
        try:
            data = await self.fetch(locale, namespace)
        except TranslationLoadError as e:
            logger.warning(
                "bundle_load_failed",
                locale=locale,
                namespace=namespace,
                path=path,
                error=str(e.cause or e),
            )
            return {}

        if not isinstance(data, dict):
            logger.warning(
                "invalid_bundle_format",
                locale=locale,
                namespace=namespace,
                path=path,
                expected="dict",
            )
            return {}

        if self.debug:
            logger.info(
                "loaded_bundle",
                locale=locale,
                namespace=namespace,
                key_count=len(data),
            )
        return data

    @abstractmethod
    async def fetch(self, locale: str, namespace: str) -> Any:
        """Fetch and decode a bundle.

        Raises:
            TranslationLoadError: If the bundle cannot be fetched or decoded.
        """
        pass


class FileBundleLoader(BundleLoader):
    """Loader for JSON or YAML bundle files on disk.

    The file format is chosen by extension: ``.yml``/``.yaml`` are parsed
    with PyYAML, everything else as JSON.

    Attributes:
        base_dir: Directory the resolved load path is relative to.
    """

    def __init__(
        self,
        base_dir: Path | str = ".",
        load_path: str = DEFAULT_LOAD_PATH,
        debug: bool = False,
    ):
        super().__init__(load_path=load_path, debug=debug)
        self.base_dir = Path(base_dir)

    async def fetch(self, locale: str, namespace: str) -> Any:
        path = self.base_dir / self.get_load_path(locale, namespace).lstrip("/")
        return await asyncio.to_thread(self._read, path, locale, namespace)

    @staticmethod
    def _read(path: Path, locale: str, namespace: str) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix in (".yml", ".yaml"):
                    return yaml.safe_load(f)
                return json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise TranslationLoadError(locale, namespace, e) from e


class HttpBundleLoader(BundleLoader):
    """Loader fetching JSON bundles over HTTP.

    Requests run in a worker thread so the event loop is not blocked.

    Attributes:
        base_url: URL prefix joined with the resolved load path.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        load_path: str = DEFAULT_LOAD_PATH,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
        debug: bool = False,
    ):
        super().__init__(load_path=load_path, debug=debug)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_url(self, locale: str, namespace: str) -> str:
        path = self.get_load_path(locale, namespace)
        return f"{self.base_url}/{path.lstrip('/')}"

    async def fetch(self, locale: str, namespace: str) -> Any:
        url = self.get_url(locale, namespace)
        return await asyncio.to_thread(self._get, url, locale, namespace)

    def _get(self, url: str, locale: str, namespace: str) -> Any:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise TranslationLoadError(locale, namespace, e) from e


class StaticBundleLoader(BundleLoader):
    """Loader serving bundles from an in-memory mapping.

    Useful for embedded translations and tests.

    Attributes:
        bundles: Mapping of locale -> namespace -> bundle.
        calls: Number of fetches performed, by "locale:namespace".
    """

    def __init__(
        self,
        bundles: Mapping[str, Mapping[str, Bundle]],
        debug: bool = False,
    ):
        super().__init__(load_path="{{locale}}/{{namespace}}", debug=debug)
        self.bundles = bundles
        self.calls: Dict[str, int] = {}

    async def fetch(self, locale: str, namespace: str) -> Any:
        key = f"{locale}:{namespace}"
        self.calls[key] = self.calls.get(key, 0) + 1
        try:
            bundle = self.bundles[locale][namespace]
        except KeyError as e:
            raise TranslationLoadError(locale, namespace, e) from e
        # Cached bundles never alias the source mapping
        return copy.deepcopy(bundle)
