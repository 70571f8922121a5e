"""
Parser for line-oriented topology scripts.

    X              <- node declarations
    Y
    START
    X Y 2          <- initial links
    UPDATE
    X Y -1         <- link update (-1 removes the link)
    W              <- a new node declared inside an update
    END
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from errors import TopologyParseError
from topology import LinkUpdate

START = "START"
UPDATE = "UPDATE"
END = "END"


@dataclass(frozen=True)
class UpdateBatch:
    new_nodes: Tuple[str, ...] = ()
    links: Tuple[LinkUpdate, ...] = ()


@dataclass(frozen=True)
class TopologyScript:
    nodes: Tuple[str, ...]
    initial_links: Tuple[LinkUpdate, ...] = ()
    updates: Tuple[UpdateBatch, ...] = ()


def _parse_link(tokens: List[str], line_number: int, line: str) -> LinkUpdate:
    a, b, raw_cost = tokens
    try:
        cost = int(raw_cost)
    except ValueError:
        raise TopologyParseError(line_number, line, "cost is not an integer") from None
    return a, b, cost


def parse_script(lines: Iterable[str]) -> TopologyScript:
    """
    Parse a topology script into nodes, initial links and update batches.

    Input stops at END, or at the end of lines when END is missing.
    """
    section = "nodes"
    nodes: List[str] = []
    initial: List[LinkUpdate] = []
    batches: List[Tuple[List[str], List[LinkUpdate]]] = []

    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        if line == END:
            break
        if line == START:
            if section != "nodes":
                raise TopologyParseError(line_number, line, "START after the node list")
            section = "links"
            continue
        if line == UPDATE:
            if section == "nodes":
                raise TopologyParseError(line_number, line, "UPDATE before START")
            section = "update"
            batches.append(([], []))
            continue

        tokens = line.split()
        if section == "nodes":
            if len(tokens) != 1:
                raise TopologyParseError(line_number, line, "expected a single node name")
            if tokens[0] not in nodes:
                nodes.append(tokens[0])
        elif section == "links":
            if len(tokens) != 3:
                raise TopologyParseError(line_number, line, "expected 'node node cost'")
            initial.append(_parse_link(tokens, line_number, line))
        else:
            new_nodes, links = batches[-1]
            if len(tokens) == 1:
                new_nodes.append(tokens[0])
            elif len(tokens) == 3:
                links.append(_parse_link(tokens, line_number, line))
            else:
                raise TopologyParseError(line_number, line, "expected a node name or 'node node cost'")

    return TopologyScript(
        nodes=tuple(nodes),
        initial_links=tuple(initial),
        updates=tuple(UpdateBatch(tuple(n), tuple(l)) for n, l in batches),
    )
