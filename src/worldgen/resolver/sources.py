"""Value sources: where named JSON documents come from.

A value source maps a definition name such as ``minecraft:overworld/continents``
to its parsed JSON document. Sources are layered with
:class:`CascadeValueSource` and memoized with :class:`CachedValueSource`.
"""

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Sequence

import structlog

from ..exceptions import ConfigurationError, ValueNotFoundError

logger = structlog.get_logger()

NAMESPACE = "minecraft:"


class ValueSource(ABC):
    """Loader of named JSON documents."""

    @abstractmethod
    def load(self, name: str) -> Any:
        """Return the parsed document for ``name``.

        Raises:
            ValueNotFoundError: If this source has no document by that name.
            ConfigurationError: If the document exists but cannot be parsed.
        """


class FilesystemValueSource(ValueSource):
    """Reads ``<root>/<name>.json`` with the namespace prefix removed."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        return self.root / f"{name.removeprefix(NAMESPACE)}.json"

    def load(self, name: str) -> Any:
        path = self.path_for(name)
        if not path.is_file():
            raise ValueNotFoundError(f'Value "{name}" not found at {path}')
        try:
            with open(path, "rb") as f:
                return json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Failed to read {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Malformed JSON in {path}: {e}") from e

    def __repr__(self) -> str:
        return f"FilesystemValueSource({self.root})"


class MappingValueSource(ValueSource):
    """In-memory documents keyed by full name."""

    def __init__(self, values: Mapping[str, Any]):
        self.values = dict(values)

    def load(self, name: str) -> Any:
        try:
            return self.values[name]
        except KeyError:
            raise ValueNotFoundError(f'Value "{name}" not found') from None


class CascadeValueSource(ValueSource):
    """Asks each child in order; the first one that has the name wins.

    Only :class:`ValueNotFoundError` moves on to the next child. Any other
    error from a child propagates.
    """

    def __init__(self, sources: Sequence[ValueSource]):
        if not sources:
            raise ValueError("CascadeValueSource requires at least one source")
        self.sources = tuple(sources)

    def load(self, name: str) -> Any:
        for source in self.sources:
            try:
                return source.load(name)
            except ValueNotFoundError:
                continue
        raise ValueNotFoundError(
            f'CascadeValueSource failed to resolve "{name}" value with all child sources: not found'
        )


class CachedValueSource(ValueSource):
    """Loads each name from ``source`` at most once.

    Documents are shared between callers and must be treated as read-only.
    """

    def __init__(self, source: ValueSource):
        self.source = source
        self._cache: dict[str, Any] = {}
        self._lock = threading.Lock()

    def load(self, name: str) -> Any:
        with self._lock:
            if name in self._cache:
                return self._cache[name]
            value = self.source.load(name)
            self._cache[name] = value
        logger.debug("value_loaded", name=name)
        return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
