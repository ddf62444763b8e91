"""
Key-value blob storage backends for StudyCards
"""
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from diskcache import Cache

from config import settings
from studycards.utils.exceptions import DeserializationError
from studycards.utils.logger import get_logger

logger = get_logger(__name__)


class KeyValueStorage(ABC):
    """Synchronous string store with atomic single-key overwrite"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never set"""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key"""
        pass


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage, lost when the process exits"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStorage(KeyValueStorage):
    """
    Stores each key as a JSON file in a directory.
    """

    def __init__(self, storage_path: Path = None):
        """
        Initialize the file storage.

        Args:
            storage_path: Directory for the key files. Uses settings.STORAGE_PATH if not provided.
        """
        self.storage_path = Path(storage_path or settings.STORAGE_PATH)
        self.storage_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"FileStorage initialized at: {self.storage_path}")

    def _get_key_path(self, key: str) -> Path:
        """Get the file path for a key"""
        return self.storage_path / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        key_path = self._get_key_path(key)
        if not key_path.exists():
            return None
        try:
            with open(key_path, 'r', encoding='utf-8') as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise DeserializationError(f"{key_path.name} is not valid UTF-8: {e}") from e

    def set(self, key: str, value: str) -> None:
        # Write to a sibling temp file then rename so readers never see a partial value
        fd, tmp_path = tempfile.mkstemp(dir=self.storage_path, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(value)
            os.replace(tmp_path, self._get_key_path(key))
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


class DiskCacheStorage(KeyValueStorage):
    """Storage backed by a diskcache.Cache directory"""

    def __init__(self, storage_path: Path = None):
        self.storage_path = Path(storage_path or settings.STORAGE_PATH)
        self.cache = Cache(str(self.storage_path))
        logger.info(f"DiskCacheStorage initialized at: {self.storage_path}")

    def get(self, key: str) -> Optional[str]:
        return self.cache.get(key)

    def set(self, key: str, value: str) -> None:
        self.cache.set(key, value)

    def close(self):
        self.cache.close()


def create_storage(backend: str = None, storage_path: Path = None) -> KeyValueStorage:
    """Build the storage backend named in settings (file, diskcache, memory)"""
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "file":
        return FileStorage(storage_path)
    if backend == "diskcache":
        return DiskCacheStorage(storage_path)
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {backend}")
