"""
Routing abstractions for the DV simulator.

Routing entries are derived from a distance table on demand and never stored.
"""

from dataclasses import dataclass
from typing import List, Union
import math

import numpy as np

from distance_table import DistanceTable

UNREACHABLE = "INF"


@dataclass(frozen=True)
class RouteEntry:
    """
    Single forwarding entry in a router's routing table.
    """
    dest: str
    next_hop: str           # UNREACHABLE when no finite path exists
    cost: Union[int, str]   # UNREACHABLE when no finite path exists

    @property
    def is_reachable(self) -> bool:
        return self.next_hop != UNREACHABLE


def routing_entry(table: DistanceTable, router: str, dest: str) -> RouteEntry:
    """
    Best (next hop, cost) from router to dest.

    Candidate first hops are scanned alphabetically and the first minimum
    wins, so ties resolve to the smallest neighbour name.
    """
    r = table.index(router)
    d = table.index(dest)
    row = table.values[r, d].copy()
    row[r] = math.inf  # a router is never its own first hop
    best = int(np.argmin(row))
    cost = row[best]
    if not math.isfinite(cost):
        return RouteEntry(dest, UNREACHABLE, UNREACHABLE)
    return RouteEntry(dest, table.nodes[best], int(cost))


def extract_routing_table(table: DistanceTable, router: str) -> List[RouteEntry]:
    """Routing entries for every other destination, in alphabetical order."""
    return [routing_entry(table, router, dest) for dest in table.nodes if dest != router]
