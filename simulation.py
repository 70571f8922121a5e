"""
Round-synchronous distance-vector simulation.

Owns the topology and the distance tables for one run, steps the network
round by round until nothing changes, and re-converges after link updates.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple
import math

import numpy as np

from algorithms import DistanceVectorEngine
from config import ReconvergencePolicy, SimulationConfig
from distance_table import DistanceTable
from distance_vector_engine import SynchronousDistanceVectorEngine
from errors import NonConvergenceError
from graph import INFINITY
from routing import RouteEntry, extract_routing_table, routing_entry
from topology import LinkUpdate, Topology


class RoundState(Enum):
    INITIALIZED = "initialized"
    ROUND_IN_PROGRESS = "round_in_progress"
    CHANGED = "changed"
    STABLE = "stable"


class Simulation:
    """
    Drives advertise-then-relax rounds over every router at once.

    The round index counts displayed time steps: it starts at 0 for the
    freshly seeded tables, advances on every round that changes an entry,
    and advances once more when an update batch is applied. A round that
    changes nothing confirms convergence without advancing it.
    """

    def __init__(
        self,
        topology: Topology,
        config: Optional[SimulationConfig] = None,
        engine: Optional[DistanceVectorEngine] = None,
    ) -> None:
        self._topology = topology
        self._config = config or SimulationConfig()
        self._engine = engine or SynchronousDistanceVectorEngine()
        self._table: Optional[DistanceTable] = None
        self._state = RoundState.INITIALIZED
        self._round = 0
        self._phase = 0
        self._link_costs: Optional[np.ndarray] = None
        self._limit: float = INFINITY
        # Advertisements replayed by the first round after an incremental update.
        self._stale_adverts: Optional[np.ndarray] = None

    # --- Lifecycle -----------------------------------------------------------

    def start(self) -> None:
        """Seed every table from the current topology at round 0."""
        self._table = DistanceTable.initialize(self._topology.nodes(), self._topology)
        self._round = 0
        self._phase = 0
        self._state = RoundState.INITIALIZED
        self._stale_adverts = None
        self._refresh_phase()

    def step(self) -> bool:
        """
        Run one synchronous round. Returns True if any entry changed.
        """
        table = self._require_table()
        self._state = RoundState.ROUND_IN_PROGRESS

        stale = self._stale_adverts is not None
        if stale:
            adverts = self._stale_adverts
            self._stale_adverts = None
        else:
            adverts = self._engine.advertise(table.values)

        relaxed, changed = self._engine.relax(table.values, self._link_costs, adverts, self._limit)
        self._table = DistanceTable(table.nodes, relaxed)

        if changed:
            self._round += 1
        # A replayed round cannot prove stability; only fresh adverts can.
        self._state = RoundState.CHANGED if changed or stale else RoundState.STABLE
        return changed

    def run_until_converged(self, on_round: Optional[Callable[["Simulation"], None]] = None) -> int:
        """
        Step until a round changes nothing.

        Calls on_round after every round that changed the tables and
        returns how many such rounds ran.
        """
        changes = 0
        for _ in range(self._config.max_rounds):
            if self.step():
                changes += 1
                if on_round is not None:
                    on_round(self)
            if self._state is RoundState.STABLE:
                return changes
        raise NonConvergenceError(self._config.max_rounds)

    def apply_updates(self, updates: Iterable[LinkUpdate]) -> None:
        """
        Apply a batch of (a, b, cost) link updates and prepare the next phase.

        Nodes declared on the topology since the last phase join the tables.
        """
        table = self._require_table()
        adverts = self._engine.advertise(table.values)
        previous_total = self._topology.finite_cost_total()

        updates = list(updates)
        for a, b, cost in updates:
            self._topology.validate_link(a, b, cost)
        touched: Dict[FrozenSet[str], Tuple[str, str]] = {}
        for a, b, cost in updates:
            self._topology.set_cost(a, b, cost)
            touched[frozenset((a, b))] = (a, b)

        nodes = self._topology.nodes()
        if self._config.policy is ReconvergencePolicy.FULL_RESET:
            self._table = DistanceTable.initialize(nodes, self._topology)
            self._stale_adverts = None
        else:
            if nodes != table.nodes:
                adverts = _grow_adverts(adverts, table.nodes, nodes)
                table = table.grow(nodes)
            for a, b in touched.values():
                cost = self._topology.cost(a, b)
                if math.isfinite(cost):
                    table.set_direct(a, b, cost)
                else:
                    table.invalidate_via(a, b)
                    table.invalidate_via(b, a)
            self._table = table
            self._stale_adverts = adverts

        self._round += 1
        self._phase += 1
        self._state = RoundState.INITIALIZED
        if self._config.policy is ReconvergencePolicy.INCREMENTAL:
            self._refresh_phase(carried_total=previous_total)
        else:
            self._refresh_phase()

    # --- Read surface --------------------------------------------------------

    def current_round_index(self) -> int:
        return self._round

    def is_converged(self) -> bool:
        return self._state is RoundState.STABLE

    def distance_entry(self, router: str, dest: str, via: str) -> float:
        return self._require_table().entry(router, dest, via)

    def routing_entry(self, router: str, dest: str) -> RouteEntry:
        return routing_entry(self._require_table(), router, dest)

    def routing_table(self, router: str) -> List[RouteEntry]:
        return extract_routing_table(self._require_table(), router)

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def phase(self) -> int:
        """0 for the initial topology, then one per applied update batch."""
        return self._phase

    @property
    def nodes(self) -> List[str]:
        return self._require_table().nodes

    @property
    def table(self) -> DistanceTable:
        return self._require_table()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    # --- Internal helpers ----------------------------------------------------

    def _require_table(self) -> DistanceTable:
        if self._table is None:
            raise RuntimeError("Simulation has not been started; call start() first.")
        return self._table

    def _refresh_phase(self, carried_total: float = 0.0) -> None:
        table = self._require_table()
        self._link_costs = self._topology.cost_matrix(table.nodes)
        if self._config.infinity is not None:
            self._limit = self._config.infinity
        else:
            # An entry is one link plus a simple path; neither exceeds the total.
            # Kept entries and replayed adverts are priced on the previous
            # topology, so an incremental phase also covers its total.
            total = max(self._topology.finite_cost_total(), carried_total)
            self._limit = 2 * total


def _grow_adverts(adverts: np.ndarray, old_nodes: List[str], new_nodes: List[str]) -> np.ndarray:
    """Re-index an advert matrix onto a larger node list; new nodes advertise nothing."""
    index = {name: i for i, name in enumerate(new_nodes)}
    positions = [index[name] for name in old_nodes]
    grown = np.full((len(new_nodes), len(new_nodes)), INFINITY)
    np.fill_diagonal(grown, 0.0)
    grown[np.ix_(positions, positions)] = adverts
    return grown
