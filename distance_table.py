"""
Per-router distance tables stored as one dense arena.

values[r, d, v] is router r's believed cost to destination d when the first
hop is v. Indices come from the alphabetically sorted node list. Entries with
r == d or v == r are never meaningful and stay INFINITY.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np

from graph import INFINITY, Graph


class DistanceTable:
    """
    D[router][destination][via] for every router in the network.
    """

    def __init__(self, nodes: Sequence[str], values: np.ndarray | None = None) -> None:
        self._nodes: List[str] = sorted(nodes)
        self._index: Dict[str, int] = {name: i for i, name in enumerate(self._nodes)}
        n = len(self._nodes)
        if values is None:
            values = np.full((n, n, n), INFINITY)
        if values.shape != (n, n, n):
            raise ValueError(f"Distance arena has shape {values.shape}, expected {(n, n, n)}.")
        self.values = values

    @classmethod
    def initialize(cls, nodes: Sequence[str], topology: Graph) -> "DistanceTable":
        """
        Fresh table: everything INFINITY except the direct-link seeds
        D[r][d][d] = cost(r, d) for every finite link.
        """
        table = cls(nodes)
        for r in table.nodes:
            for d, cost in topology.outgoing(r).items():
                if d in table._index:
                    table.values[table.index(r), table.index(d), table.index(d)] = cost
        return table

    # --- Lookup --------------------------------------------------------------

    @property
    def nodes(self) -> List[str]:
        return list(self._nodes)

    def index(self, name: str) -> int:
        return self._index[name]

    def entry(self, router: str, dest: str, via: str) -> float:
        """Believed cost from router to dest through via."""
        return float(self.values[self._index[router], self._index[dest], self._index[via]])

    # --- Mutation ------------------------------------------------------------

    def set_direct(self, a: str, b: str, cost: float) -> None:
        """Pin the direct-link rows D[a][b][b] and D[b][a][a] to cost."""
        i, j = self._index[a], self._index[b]
        self.values[i, j, j] = cost
        self.values[j, i, i] = cost

    def invalidate_via(self, router: str, via: str) -> None:
        """Drop every path router believes it has through via."""
        self.values[self._index[router], :, self._index[via]] = INFINITY

    def grow(self, nodes: Sequence[str]) -> "DistanceTable":
        """
        Table over a superset of the current nodes, carrying entries over by
        name. Newly declared nodes start at INFINITY everywhere.
        """
        missing = set(self._nodes) - set(nodes)
        if missing:
            raise ValueError(f"Nodes cannot be dropped from a distance table: {sorted(missing)}")
        grown = DistanceTable(nodes)
        positions = [grown.index(name) for name in self._nodes]
        grown.values[np.ix_(positions, positions, positions)] = self.values
        return grown
