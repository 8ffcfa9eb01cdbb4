"""Locale preference persistence.

Defines the contract for remembering the user's locale across sessions.
Implementations swallow storage errors: ``get`` degrades to None and
``set``/``clear`` to False.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from g11n.logging import get_module_logger

logger = get_module_logger()


class LocalePersistence(ABC):
    """Abstract base for locale preference storage."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Get the persisted locale.

        Returns:
            The stored locale code, or None if absent or unavailable.
        """
        pass

    @abstractmethod
    def set(self, value: str) -> bool:
        """Persist a locale.

        Returns:
            True if stored, False if storage failed.
        """
        pass

    @abstractmethod
    def clear(self) -> bool:
        """Remove the persisted locale.

        Returns:
            True if removed (or nothing was stored), False on failure.
        """
        pass


class InMemoryLocalePersistence(LocalePersistence):
    """Process-local storage, for tests and single-session hosts."""

    def __init__(self, initial: Optional[str] = None):
        self.value = initial

    def get(self) -> Optional[str]:
        return self.value

    def set(self, value: str) -> bool:
        self.value = value
        return True

    def clear(self) -> bool:
        self.value = None
        return True


class FileLocalePersistence(LocalePersistence):
    """Stores the locale code in a plain text file.

    Attributes:
        path: File holding the locale code.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def get(self) -> Optional[str]:
        try:
            value = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("locale_read_failed", path=str(self.path), error=str(e))
            return None
        return value or None

    def set(self, value: str) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(value, encoding="utf-8")
        except OSError as e:
            logger.error("locale_persist_failed", path=str(self.path), error=str(e))
            return False
        return True

    def clear(self) -> bool:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("locale_clear_failed", path=str(self.path), error=str(e))
            return False
        return True
