"""
Undirected, weighted graph abstraction for the DV simulator.

Nodes are router names (strings).
Edges are symmetric: cost(u, v) == cost(v, u), absent edges cost INFINITY.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping
import math

INFINITY: float = math.inf


class Graph(ABC):
    """Undirected, weighted graph over router names."""

    @abstractmethod
    def nodes(self) -> Iterable[str]:
        """Return all nodes in alphabetical order."""
        raise NotImplementedError

    @abstractmethod
    def outgoing(self, node: str) -> Mapping[str, float]:
        """
        Direct neighbours of node and the finite link cost to each.

        Returns: dict[str, float]
        """
        raise NotImplementedError

    @abstractmethod
    def cost(self, a: str, b: str) -> float:
        """Link cost between a and b (0 for a == b, INFINITY if unlinked)."""
        raise NotImplementedError
