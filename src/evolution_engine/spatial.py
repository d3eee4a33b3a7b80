"""Nearest-neighbour queries in objective space."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy.spatial import cKDTree


class NeighborIndex:
    """KD-tree over a fixed set of points that supports removing points.

    The tree itself is built once; removed points are masked out and queries
    over-fetch by the number of removals so that enough live neighbours are
    always returned.
    """

    def __init__(self, points: Sequence[Sequence[float]]) -> None:
        coords = np.asarray(points, dtype=float)
        if coords.ndim == 1:
            coords = coords.reshape(len(coords), -1)
        self._points = coords
        self._alive = np.ones(len(coords), dtype=bool)
        self._removed = 0
        self._tree = cKDTree(coords) if len(coords) else None

    def __len__(self) -> int:
        return len(self._points) - self._removed

    def __contains__(self, index: int) -> bool:
        return 0 <= index < len(self._points) and bool(self._alive[index])

    def remove(self, index: int) -> None:
        if index not in self:
            msg = f"Point {index} is not in the index."
            raise KeyError(msg)
        self._alive[index] = False
        self._removed += 1

    def nearest_distances(self, index: int, depth: int) -> tuple[float, ...]:
        """Ascending distances from point ``index`` to its ``depth`` nearest live neighbours.

        The point itself is never counted as its own neighbour, even when other
        points share its coordinates.
        """
        wanted = min(depth, len(self) - 1)
        if wanted <= 0 or self._tree is None:
            return ()
        total = len(self._points)
        k = min(total, wanted + 1 + self._removed)
        dists, idxs = self._tree.query(self._points[index], k=k)
        found: list[float] = []
        for dist, idx in zip(np.atleast_1d(dists), np.atleast_1d(idxs)):
            if idx == index or idx >= total or not self._alive[idx]:
                continue
            found.append(float(dist))
            if len(found) == wanted:
                break
        return tuple(found)

    def kth_distance(self, index: int, k: int) -> float:
        """Distance to the k-th nearest neighbour, or the farthest one if fewer exist."""
        distances = self.nearest_distances(index, k)
        return distances[-1] if distances else 0.0
