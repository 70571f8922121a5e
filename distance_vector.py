"""
CLI to run a distance-vector topology script.

Reads a script (file or stdin), converges the network, prints every changed
round's distance tables and the routing tables after each convergence, then
replays each UPDATE batch the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import argparse
import csv
import math
import sys

from config import ReconvergencePolicy, SimulationConfig, load_config
from errors import NonConvergenceError
from simulation import Simulation
from table_formatter import format_round, format_routing_tables
from topology import Topology
from topology_parser import TopologyScript, parse_script

TRACE_FIELDS = ["phase", "round", "router", "destination", "via", "cost"]


@dataclass
class SimulationRun:
    output: str
    trace: List[Dict[str, object]] = field(default_factory=list)
    # Changing rounds per phase: initial topology first, then one per update.
    rounds_per_phase: List[int] = field(default_factory=list)


def _log(message: str, verbose: bool) -> None:
    if verbose:
        print(f"[dv] {message}", file=sys.stderr)


def run_script(
    script: TopologyScript,
    config: Optional[SimulationConfig] = None,
    verbose: bool = False,
) -> SimulationRun:
    topology = Topology(script.nodes)
    for a, b, cost in script.initial_links:
        topology.set_cost(a, b, cost)

    sim = Simulation(topology, config)
    run = SimulationRun(output="")
    chunks: List[str] = []

    def record(s: Simulation) -> None:
        chunks.append(format_round(s))
        run.trace.extend(_trace_rows(s))

    sim.start()
    _log(f"starting with {len(sim.nodes)} routers, policy={sim.config.policy.value}", verbose)
    record(sim)
    _converge(sim, record, run, verbose)
    chunks.append(format_routing_tables(sim))

    for batch in script.updates:
        for node in batch.new_nodes:
            topology.add_node(node)
        sim.apply_updates(batch.links)
        _log(f"applied {len(batch.links)} link updates at t={sim.current_round_index()}", verbose)
        record(sim)
        _converge(sim, record, run, verbose)
        chunks.append(format_routing_tables(sim))

    run.output = "".join(chunks)
    return run


def _converge(sim: Simulation, record, run: SimulationRun, verbose: bool) -> None:
    rounds = sim.run_until_converged(on_round=record)
    run.rounds_per_phase.append(rounds)
    _log(f"phase {sim.phase} converged after {rounds} changing rounds (t={sim.current_round_index()})", verbose)


def _trace_rows(sim: Simulation) -> List[Dict[str, object]]:
    rows: List[Dict[str, object]] = []
    for router in sim.nodes:
        for dest in sim.nodes:
            if dest == router:
                continue
            for via in sim.nodes:
                if via == router:
                    continue
                cost = sim.distance_entry(router, dest, via)
                rows.append(
                    {
                        "phase": sim.phase,
                        "round": sim.current_round_index(),
                        "router": router,
                        "destination": dest,
                        "via": via,
                        "cost": int(cost) if math.isfinite(cost) else "INF",
                    }
                )
    return rows


def write_trace_csv(rows: List[Dict[str, object]], path: Path) -> None:
    """
    Write one row per distance-table entry per displayed time step.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=TRACE_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate distance-vector routing over a topology script.",
    )
    parser.add_argument("input", nargs="?", help="Topology script (defaults to stdin)")
    parser.add_argument("--config", help="Simulation settings file (YAML)")
    parser.add_argument(
        "--policy",
        choices=[p.value for p in ReconvergencePolicy],
        help="How to re-converge after an UPDATE batch",
    )
    parser.add_argument("--max-rounds", type=int, help="Give up after this many rounds per phase")
    parser.add_argument("--infinity", type=float, help="Costs above this are treated as INF")
    parser.add_argument("--trace-csv", help="Write every displayed distance table to this CSV file")
    parser.add_argument("--verbose", action="store_true", help="Print progress to stderr")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = load_config(Path(args.config)) if args.config else SimulationConfig()
        config = config.with_overrides(
            policy=ReconvergencePolicy(args.policy) if args.policy else None,
            max_rounds=args.max_rounds,
            infinity=args.infinity,
        )
        if args.input:
            lines = Path(args.input).read_text().splitlines()
        else:
            lines = sys.stdin.read().splitlines()
        run = run_script(parse_script(lines), config, verbose=args.verbose)
    except (ValueError, NonConvergenceError) as exc:
        print(f"[dv] error: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(run.output)
    if args.trace_csv:
        write_trace_csv(run.trace, Path(args.trace_csv))
        _log(f"wrote {len(run.trace)} trace rows to {args.trace_csv}", args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
