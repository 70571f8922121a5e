import math

import numpy as np

from distance_table import DistanceTable
from distance_vector_engine import SynchronousDistanceVectorEngine
from topology import Topology


def _line_topology() -> Topology:
    # A -2- B -4- C, no A-C link
    topo = Topology(["A", "B", "C"])
    topo.set_cost("A", "B", 2)
    topo.set_cost("B", "C", 4)
    return topo


def test_advertise_reports_zero_to_self_and_best_via():
    """Advert is the per-destination minimum, with 0 for the router itself."""
    dv = SynchronousDistanceVectorEngine()
    values = np.full((2, 2, 2), math.inf)
    values[0, 1, 1] = 5.0

    adverts = dv.advertise(values)

    assert adverts[0, 0] == 0.0
    assert adverts[1, 1] == 0.0
    assert adverts[0, 1] == 5.0
    assert math.isinf(adverts[1, 0])


def test_relax_combines_link_cost_with_neighbour_advert():
    """Two-hop destinations appear through the shared neighbour."""
    dv = SynchronousDistanceVectorEngine()
    topo = _line_topology()
    table = DistanceTable.initialize(topo.nodes(), topo)
    costs = topo.cost_matrix(table.nodes)

    relaxed, changed = dv.relax(table.values, costs, dv.advertise(table.values))
    result = DistanceTable(table.nodes, relaxed)

    assert changed
    assert result.entry("A", "C", "B") == 6.0  # 2 + 4
    assert result.entry("C", "A", "B") == 6.0
    # no A-C link, so nothing is learnt through it
    assert math.isinf(result.entry("A", "B", "C"))
    # direct rows stay pinned
    assert result.entry("A", "B", "B") == 2.0


def test_relax_does_not_mutate_the_snapshot():
    """The relax pass writes a new arena and leaves its input alone."""
    dv = SynchronousDistanceVectorEngine()
    topo = _line_topology()
    table = DistanceTable.initialize(topo.nodes(), topo)
    before = table.values.copy()

    dv.relax(table.values, topo.cost_matrix(table.nodes), dv.advertise(table.values))

    assert np.array_equal(table.values, before)


def test_relax_saturates_candidates_above_limit():
    """Candidates over the limit become INFINITY rather than large numbers."""
    dv = SynchronousDistanceVectorEngine()
    topo = _line_topology()
    table = DistanceTable.initialize(topo.nodes(), topo)

    relaxed, changed = dv.relax(
        table.values, topo.cost_matrix(table.nodes), dv.advertise(table.values), limit=5.0
    )

    assert not changed  # 6 > 5, and the entry was already INFINITY
    assert math.isinf(relaxed[0, 2, 1])


def test_relax_reports_no_change_on_fixed_point():
    """Relaxing a converged table against its own adverts changes nothing."""
    dv = SynchronousDistanceVectorEngine()
    topo = _line_topology()
    table = DistanceTable.initialize(topo.nodes(), topo)
    costs = topo.cost_matrix(table.nodes)

    values = table.values
    for _ in range(len(table.nodes)):
        values, _ = dv.relax(values, costs, dv.advertise(values))

    again, changed = dv.relax(values, costs, dv.advertise(values))
    assert not changed
    assert np.array_equal(again, values)
