"""
Key-value stores for persisted dashboard records.

Values are opaque strings (JSON in practice) keyed by fixed identifiers.
Two backends:
- MemoryStore: a dict, lost with the process
- JsonFileStore: one JSON object on disk, rewritten on every change
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Iterator, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Protocol for string key-value stores."""

    def get(self, key: str) -> str | None:
        """Value for key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        ...

    def clear(self) -> None:
        """Remove every key."""
        ...

    def keys(self) -> Iterator[str]:
        ...


class MemoryStore:
    """In-process store."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStore:
    """
    Store backed by a single JSON file.

    The file holds one object mapping keys to string values. It is read
    once on construction and rewritten in full after every change.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, str] = {}
        if self.path.exists():
            self._data = self._read()

    def _read(self) -> dict[str, str]:
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"{self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise ValueError(f"{self.path} must hold a JSON object of string values")
        return data

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self.path)
        logger.debug("Wrote %d keys to %s", len(self._data), self.path)

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._write()

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._write()

    def clear(self) -> None:
        self._data.clear()
        self._write()

    def keys(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)
