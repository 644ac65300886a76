"""Nearest-rectangle index over the six-dimensional climate space.

The index is a static R-tree bulk-loaded with Sort-Tile-Recursive packing.
Queries run a best-first branch-and-bound search on exact integer squared
distances, so classification never depends on float rounding.
"""

import heapq
import math
from itertools import count
from typing import Iterable, Iterator, Sequence

import numpy as np
from numpy.typing import NDArray

from .point import AXES, BiomeEntry, ClimatePoint

DIMENSIONS = len(AXES)
NODE_CAPACITY = 8


class _Node:
    """Tree node holding the bounding boxes of its children.

    Leaf nodes point into the entry list; inner nodes point at nodes.
    """

    __slots__ = ("lower", "upper", "children", "entries")

    def __init__(
        self,
        lower: NDArray[np.int64],
        upper: NDArray[np.int64],
        children: list["_Node"] | None = None,
        entries: NDArray[np.intp] | None = None,
    ):
        self.lower = lower
        self.upper = upper
        self.children = children
        self.entries = entries

    @property
    def leaf(self) -> bool:
        return self.entries is not None


def _str_groups(
    indices: NDArray[np.intp], centers: NDArray[np.int64], capacity: int, dim: int = 0
) -> list[NDArray[np.intp]]:
    """Partition ``indices`` into runs of at most ``capacity`` nearby boxes."""
    n = len(indices)
    order = indices[np.argsort(centers[indices, dim], kind="stable")]
    if n <= capacity:
        return [order]
    if dim == DIMENSIONS - 1:
        return [order[i : i + capacity] for i in range(0, n, capacity)]

    leaves = math.ceil(n / capacity)
    slabs = math.ceil(leaves ** (1.0 / (DIMENSIONS - dim)))
    per_slab = capacity * math.ceil(leaves / slabs)
    groups = []
    for start in range(0, n, per_slab):
        groups.extend(_str_groups(order[start : start + per_slab], centers, capacity, dim + 1))
    return groups


def _box_distance2(lower: NDArray[np.int64], upper: NDArray[np.int64], point: NDArray[np.int64]) -> NDArray[np.int64]:
    """Squared distance from ``point`` to each box (row) of ``lower``/``upper``."""
    below = np.maximum(lower - point, 0)
    above = np.maximum(point - upper, 0)
    gap = below + above
    return (gap * gap).sum(axis=1)


class BiomeIndex:
    """Immutable R-tree of biome rectangles.

    Build it with :meth:`build`. Instances are read-only and safe to share
    between threads.
    """

    def __init__(self, entries: Sequence[BiomeEntry], root: _Node, height: int):
        self.entries = tuple(entries)
        self.root = root
        self.height = height

    @classmethod
    def build(cls, entries: Iterable[BiomeEntry], capacity: int = NODE_CAPACITY) -> "BiomeIndex":
        """Bulk-load an index.

        Raises:
            ValueError: If ``entries`` is empty or ``capacity`` is below 2.
        """
        entries = tuple(entries)
        if not entries:
            raise ValueError("Cannot build a biome index without entries")
        if capacity < 2:
            raise ValueError(f"Node capacity must be at least 2, got {capacity}")

        lower = np.array([e.lower for e in entries], dtype=np.int64).reshape(-1, DIMENSIONS)
        upper = np.array([e.upper for e in entries], dtype=np.int64).reshape(-1, DIMENSIONS)

        indices = np.arange(len(entries))
        nodes = [
            _Node(lower[group], upper[group], entries=group)
            for group in _str_groups(indices, lower + upper, capacity)
        ]
        height = 1
        while len(nodes) > 1:
            node_lower = np.array([n.lower.min(axis=0) for n in nodes], dtype=np.int64)
            node_upper = np.array([n.upper.max(axis=0) for n in nodes], dtype=np.int64)
            groups = _str_groups(np.arange(len(nodes)), node_lower + node_upper, capacity)
            nodes = [
                _Node(node_lower[group], node_upper[group], children=[nodes[i] for i in group])
                for group in groups
            ]
            height += 1
        return cls(entries, nodes[0], height)

    def nearest(self, point: ClimatePoint) -> BiomeEntry:
        """Entry whose rectangle is closest to ``point``.

        Among equally distant rectangles the first one reached by the
        search wins, which is deterministic for a given index.
        """
        target = np.asarray(point, dtype=np.int64)
        tiebreak = count()
        heap: list[tuple[int, int, _Node | None, int]] = [(0, next(tiebreak), self.root, -1)]
        while heap:
            distance, _, node, entry = heapq.heappop(heap)
            if node is None:
                return self.entries[entry]
            distances = _box_distance2(node.lower, node.upper, target)
            if node.leaf:
                for i, d in zip(node.entries, distances):
                    heapq.heappush(heap, (int(d), next(tiebreak), None, int(i)))
            else:
                for child, d in zip(node.children, distances):
                    heapq.heappush(heap, (int(d), next(tiebreak), child, -1))
        raise AssertionError("Biome index has no entries")

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[BiomeEntry]:
        return iter(self.entries)

    def biomes(self) -> list[str]:
        """Distinct biome names in insertion order."""
        return list(dict.fromkeys(e.biome for e in self.entries))
