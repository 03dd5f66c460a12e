"""Mini README: Key-value persistence backends for the beacon store.

Structure:
    * KeyValueBackend - abstract ``get``/``set`` interface over text blobs.
    * InMemoryBackend - dictionary backed implementation for tests and demos.
    * JsonFileBackend - one file per key inside a data directory.

The store serialises its whole collection into a single value, so a backend
only needs to read and overwrite text by key. Any medium that can do that
(browser storage, a file, a database row) can host the beacons.
"""

from __future__ import annotations

import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class KeyValueBackend(ABC):
    """Minimal text key-value storage used by ``BeaconStore``."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None`` when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under ``key``."""


class InMemoryBackend(KeyValueBackend):
    """Volatile backend keeping values in a dictionary."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileBackend(KeyValueBackend):
    """Persist each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        LOGGER.debug("Initialised JsonFileBackend in %s", self.directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{_SAFE_KEY.sub('_', key)}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write through a temporary file so readers never see half a payload."""

        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        descriptor, temp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(temp_name, path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise
        LOGGER.debug("Persisted %s bytes to %s", len(value), path)
