"""
Unit tests for the Topology store.
"""

import math

import pytest

from errors import InvalidLinkError, InvalidReferenceError
from topology import Topology


def test_set_cost_is_symmetric():
    topo = Topology(["A", "B", "C"])

    topo.set_cost("A", "B", 1)
    topo.set_cost("C", "A", 2)

    assert topo.cost("A", "B") == topo.cost("B", "A") == 1
    assert topo.cost("A", "C") == topo.cost("C", "A") == 2
    assert topo.outgoing("A") == {"B": 1, "C": 2}
    assert topo.outgoing("B") == {"A": 1}


def test_unset_pairs_are_infinite_and_self_is_zero():
    topo = Topology(["A", "B"])

    assert math.isinf(topo.initial_cost("A", "B"))
    assert topo.initial_cost("A", "A") == 0


def test_minus_one_removes_link():
    """The wire sentinel -1 turns the link into INFINITY in both directions."""
    topo = Topology(["A", "B"])
    topo.set_cost("A", "B", 4)

    topo.set_cost("B", "A", -1)

    assert math.isinf(topo.cost("A", "B"))
    assert math.isinf(topo.cost("B", "A"))
    assert topo.outgoing("A") == {}
    # the node itself is never forgotten
    assert topo.nodes() == ["A", "B"]


def test_remove_link_shorthand():
    topo = Topology(["A", "B"])
    topo.set_cost("A", "B", 4)

    topo.remove_link("A", "B")

    assert math.isinf(topo.cost("A", "B"))


def test_self_link_rejected():
    topo = Topology(["A"])
    with pytest.raises(InvalidLinkError):
        topo.set_cost("A", "A", 1)


def test_unknown_node_rejected():
    """Links to undeclared nodes are refused instead of creating the node."""
    topo = Topology(["A"])
    with pytest.raises(InvalidReferenceError) as excinfo:
        topo.set_cost("A", "Q", 1)
    assert excinfo.value.node == "Q"
    assert topo.nodes() == ["A"]


def test_negative_cost_other_than_sentinel_rejected():
    topo = Topology(["A", "B"])
    with pytest.raises(InvalidLinkError):
        topo.set_cost("A", "B", -5)


def test_nodes_are_sorted_alphabetically():
    topo = Topology(["Z", "X", "Y"])
    topo.add_node("X")
    assert topo.nodes() == ["X", "Y", "Z"]


def test_cost_matrix_and_total():
    topo = Topology(["A", "B", "C"])
    topo.set_cost("A", "B", 2)
    topo.set_cost("B", "C", 3)
    topo.set_cost("A", "C", 9)
    topo.remove_link("A", "C")

    matrix = topo.cost_matrix(topo.nodes())

    assert matrix[0, 0] == 0
    assert matrix[0, 1] == matrix[1, 0] == 2
    assert math.isinf(matrix[0, 2])
    assert topo.finite_cost_total() == 5.0
