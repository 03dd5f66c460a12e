"""Mini README: Beacon storage package for OrientaTrainer.

``store`` holds the ``Beacon`` record and ``BeaconStore``; ``backends``
provides the key-value media the store can persist to.
"""

from .backends import InMemoryBackend, JsonFileBackend, KeyValueBackend
from .store import DEFAULT_STORAGE_KEY, Beacon, BeaconStore

__all__ = [
    "Beacon",
    "BeaconStore",
    "DEFAULT_STORAGE_KEY",
    "InMemoryBackend",
    "JsonFileBackend",
    "KeyValueBackend",
]
