"""Graph passes over density-function DAGs.

A mapper is a callable taking a node and returning a replacement.
:func:`map_graph` applies it bottom-up: every node is offered to the mapper
after its children have been mapped and the node rebuilt on top of them.
Shared subtrees are visited once and stay shared in the result.
"""

import threading
from typing import TypeVar

import structlog

from ..rng import RandomPositional
from .base import DensityFunction, Mapper
from .debug import Traced
from .noise import NoiseHolder, NoiseLeaf, OldBlendedNoise

logger = structlog.get_logger()

T = TypeVar("T", bound=DensityFunction)

# Hash tag seeding the blended terrain noise.
TERRAIN_NOISE_TAG = "minecraft:terrain"


def map_graph(
    node: DensityFunction,
    mapper: Mapper,
    memo: dict[DensityFunction, DensityFunction] | None = None,
) -> DensityFunction:
    """Rebuild ``node`` bottom-up through ``mapper``.

    Args:
        node: Root of the graph.
        mapper: Replacement function applied to every node.
        memo: Results of already mapped nodes. Pass the same dict to several
            calls to keep sharing across roots.

    Returns:
        The mapped root.
    """
    if memo is None:
        memo = {}
    done = memo.get(node)
    if done is not None:
        return done

    children = node.children()
    mapped = [map_graph(child, mapper, memo) for child in children]
    rebuilt = node
    if any(new is not old for new, old in zip(mapped, children)):
        rebuilt = node.rebuild(mapped)

    result = mapper(rebuilt)
    memo[node] = result
    return result


def collect(node: DensityFunction, kind: type[T]) -> list[T]:
    """All distinct nodes of type ``kind`` reachable from ``node``, children first."""
    found: list[T] = []
    seen: set[int] = set()

    def visit(current: DensityFunction) -> None:
        if id(current) in seen:
            return
        seen.add(id(current))
        for child in current.children():
            visit(child)
        if isinstance(current, kind):
            found.append(current)

    visit(node)
    return found


class NoiseRegistry:
    """Process-wide memo of bound noise holders, keyed by definition name.

    Each name is seeded from ``positional.by_hash(name)``. Threads racing to
    bind the same name may both construct a noise, but all of them receive
    the instance that was inserted first.
    """

    def __init__(self, positional: RandomPositional):
        self.positional = positional
        self._holders: dict[str, NoiseHolder] = {}
        self._lock = threading.Lock()

    def get(self, holder: NoiseHolder) -> NoiseHolder:
        with self._lock:
            existing = self._holders.get(holder.name)
        if existing is not None:
            return existing

        bound = holder.bind(self.positional.by_hash(holder.name))
        with self._lock:
            existing = self._holders.setdefault(holder.name, bound)
        if existing is bound:
            logger.debug("noise_bound", name=holder.name, max_value=bound.max_value())
        return existing

    def __len__(self) -> int:
        with self._lock:
            return len(self._holders)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._holders


class BindNoises:
    """Mapper replacing unbound noise holders with seeded ones.

    Blended terrain noise is redrawn from ``by_hash("minecraft:terrain")``.
    """

    def __init__(self, registry: NoiseRegistry):
        self.registry = registry

    def __call__(self, node: DensityFunction) -> DensityFunction:
        if isinstance(node, NoiseLeaf):
            return node.with_holder(self.registry.get(node.holder))
        if isinstance(node, OldBlendedNoise):
            return node.reseed(self.registry.positional.by_hash(TERRAIN_NOISE_TAG))
        return node


class TraceMapper:
    """Mapper wrapping every node in :class:`Traced`."""

    def __call__(self, node: DensityFunction) -> DensityFunction:
        if isinstance(node, Traced):
            return node
        return Traced(node)
