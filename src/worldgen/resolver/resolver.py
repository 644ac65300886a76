"""Builds density-function graphs from JSON documents."""

from typing import Any, Mapping

import structlog

from ..density import Constant, DensityFunction
from ..exceptions import (
    CircularReferenceError,
    ConfigurationError,
    MissingFieldError,
    UnknownTypeError,
)
from .deserializers import Deserializer
from .fields import FieldKind, T, describe, require
from .sources import ValueSource

logger = structlog.get_logger()


class Resolver:
    """Turns JSON values into density-function nodes.

    Dispatch on the JSON shape:

    * a string names another document, loaded from ``source`` and resolved
      once per name; later references share the same node object;
    * a number becomes a :class:`Constant`;
    * an object is handed to the deserializer registered for its ``type``.

    A resolver is meant to be used from one thread while the engine starts
    up. The graphs it returns are immutable and may be shared freely.

    Args:
        deserializers: Type tag to deserializer table.
        source: Where named documents are loaded from.
    """

    def __init__(self, deserializers: Mapping[str, Deserializer], source: ValueSource):
        self.deserializers = dict(deserializers)
        self.source = source
        self._named: dict[str, DensityFunction] = {}
        self._stack: list[str] = []

    def load(self, name: str) -> Any:
        return self.source.load(name)

    def dereference(self, value: Any, name: str | None) -> tuple[Any, str | None]:
        """Follow a string alias, returning the document and its contextual name."""
        if isinstance(value, str):
            return self.load(value), value
        return value, name

    def field(self, obj: Any, key: str, kind: FieldKind[T], name: str | None) -> T:
        """Convert field ``key`` of ``obj`` with ``kind``.

        Raises:
            MissingFieldError: If ``obj`` has no such field.
        """
        return kind(require(obj, key), self, name)

    def resolve(self, value: Any, name: str | None = None) -> DensityFunction:
        """Build the node described by ``value``.

        Args:
            value: A parsed JSON value.
            name: Contextual name for inline definitions inside ``value``.
        """
        if isinstance(value, str):
            return self.resolve_named(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return Constant(float(value))
        if isinstance(value, dict):
            return self._deserialize(value, name)
        raise ConfigurationError(f"Expected Object or String, but given: {describe(value)}")

    def _deserialize(self, obj: dict[str, Any], name: str | None) -> DensityFunction:
        if "type" not in obj:
            raise MissingFieldError('No "type" field found')
        tag = obj["type"]
        deserializer = self.deserializers.get(tag) if isinstance(tag, str) else None
        if deserializer is None:
            raise UnknownTypeError(f'No deserializer for type "{tag}" found')
        return deserializer(obj, self, name)

    def resolve_named(self, name: str) -> DensityFunction:
        """Build (or return the already built) node for the document ``name``.

        A document without a ``type`` field whose name is itself a registered
        type tag is deserialized as that type.

        Raises:
            CircularReferenceError: If ``name`` is reached again while it is
                still being resolved.
            ConfigurationError: Any resolution error, re-raised with the same
                type and the value name prepended.
        """
        node = self._named.get(name)
        if node is not None:
            return node
        if name in self._stack:
            chain = " -> ".join([*self._stack[self._stack.index(name):], name])
            raise CircularReferenceError(f'Circular reference to "{name}": {chain}')

        self._stack.append(name)
        try:
            document = self.load(name)
            if isinstance(document, dict) and "type" not in document and name in self.deserializers:
                node = self.deserializers[name](document, self, name)
            else:
                node = self.resolve(document, name)
        except ConfigurationError as e:
            raise type(e)(f'Error occurred during deserialization of value "{name}": {e}') from e
        finally:
            self._stack.pop()

        self._named[name] = node
        logger.debug("value_resolved", name=name, node=repr(node))
        return node

    def __len__(self) -> int:
        """Number of named values built so far."""
        return len(self._named)

    def __contains__(self, name: str) -> bool:
        return name in self._named
