"""
Text rendering of distance tables and routing tables.

Reads only the simulation's read surface; every block ends with a blank line.
"""

from typing import List
import math

from simulation import Simulation

HEADER_PAD = "     "
CELL_PAD = "    "


def _cell(value: float) -> str:
    if not math.isfinite(value):
        return "INF  "
    return f"{int(value)}{CELL_PAD}"


def _others(sim: Simulation, router: str) -> List[str]:
    return [n for n in sim.nodes if n != router]


def format_distance_table(sim: Simulation, router: str) -> str:
    """
    One block: destinations across, candidate first hops down.
    """
    others = _others(sim, router)
    lines = [
        f"Distance Table of router {router} at t={sim.current_round_index()}:",
        HEADER_PAD + "".join(f"{dest}{CELL_PAD}" for dest in others),
    ]
    for via in others:
        cells = "".join(_cell(sim.distance_entry(router, dest, via)) for dest in others)
        lines.append(f"{via}{CELL_PAD}{cells}")
    return "\n".join(lines) + "\n\n"


def format_round(sim: Simulation) -> str:
    """Distance tables of every router at the current time step."""
    return "".join(format_distance_table(sim, router) for router in sim.nodes)


def format_routing_table(sim: Simulation, router: str) -> str:
    lines = [f"Routing Table of router {router}:"]
    for entry in sim.routing_table(router):
        lines.append(f"{entry.dest},{entry.next_hop},{entry.cost}")
    return "\n".join(lines) + "\n\n"


def format_routing_tables(sim: Simulation) -> str:
    return "".join(format_routing_table(sim, router) for router in sim.nodes)
