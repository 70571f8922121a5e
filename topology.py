"""
Topology store for the DV simulator.

Implements the Graph interface with a symmetric pair -> cost mapping.
Links are only ever re-costed or removed; declared nodes stay for the run.
"""

from typing import Dict, FrozenSet, Iterable, List, Mapping, Sequence, Tuple
import math

import numpy as np

from errors import InvalidLinkError, InvalidReferenceError
from graph import INFINITY, Graph

# Wire-level cost meaning "remove this link".
REMOVE_LINK = -1

LinkUpdate = Tuple[str, str, int]


class Topology(Graph):
    """
    Node set plus symmetric link costs keyed by unordered node pairs.
    """

    def __init__(self, nodes: Iterable[str] = ()) -> None:
        self._nodes: set[str] = set()
        self._links: Dict[FrozenSet[str], float] = {}
        for node in nodes:
            self.add_node(node)

    # --- Mutation API ---------------------------------------------------------

    def add_node(self, node: str) -> None:
        """Declare node; declaring an existing node is a no-op."""
        self._nodes.add(node)

    def set_cost(self, a: str, b: str, cost: int) -> None:
        """
        Set cost(a, b) = cost(b, a) = cost.

        A cost of -1 removes the link (stored as INFINITY). Both endpoints
        must already be declared.
        """
        self.validate_link(a, b, cost)
        self._links[frozenset((a, b))] = INFINITY if cost == REMOVE_LINK else cost

    def validate_link(self, a: str, b: str, cost: int) -> None:
        """Raise if set_cost(a, b, cost) would be rejected."""
        if a == b:
            raise InvalidLinkError(f"Self-link on '{a}' is not allowed.")
        for node in (a, b):
            if node not in self._nodes:
                raise InvalidReferenceError(node)
        if cost < 0 and cost != REMOVE_LINK:
            raise InvalidLinkError(f"Link {a}-{b} has negative cost {cost}.")

    def remove_link(self, a: str, b: str) -> None:
        self.set_cost(a, b, REMOVE_LINK)

    # --- Graph interface -----------------------------------------------------

    def nodes(self) -> List[str]:
        return sorted(self._nodes)

    def outgoing(self, node: str) -> Mapping[str, float]:
        neighbours: Dict[str, float] = {}
        for pair, cost in self._links.items():
            if node in pair and math.isfinite(cost):
                (other,) = pair - {node}
                neighbours[other] = cost
        return neighbours

    def cost(self, a: str, b: str) -> float:
        if a == b:
            return 0
        return self._links.get(frozenset((a, b)), INFINITY)

    # --- Helpers -------------------------------------------------------------

    def initial_cost(self, a: str, b: str) -> float:
        """Cost used to seed a fresh distance table."""
        return self.cost(a, b)

    def finite_cost_total(self) -> float:
        """Sum of every finite link cost; no simple path can cost more."""
        return float(sum(c for c in self._links.values() if math.isfinite(c)))

    def cost_matrix(self, nodes: Sequence[str]) -> np.ndarray:
        """
        Dense link-cost matrix over nodes (in the given order).

        Diagonal is 0, unlinked pairs are INFINITY.
        """
        index = {name: i for i, name in enumerate(nodes)}
        matrix = np.full((len(nodes), len(nodes)), INFINITY)
        np.fill_diagonal(matrix, 0.0)
        for pair, cost in self._links.items():
            a, b = tuple(pair)
            if a in index and b in index:
                matrix[index[a], index[b]] = cost
                matrix[index[b], index[a]] = cost
        return matrix
