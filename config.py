"""
Simulation settings, loadable from a YAML file.

Example:

    policy: incremental      # or full_reset
    max_rounds: 1000
    infinity: null           # null derives the limit from the topology
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml


class ReconvergencePolicy(Enum):
    """
    How the simulator re-converges after a topology update.

    INCREMENTAL: keep the current tables, invalidate paths through severed
        links, and relax the first round against the previous phase's
        advertisements.
    FULL_RESET: rebuild every table from the new topology and start over.
    """

    INCREMENTAL = "incremental"
    FULL_RESET = "full_reset"


@dataclass(frozen=True)
class SimulationConfig:
    policy: ReconvergencePolicy = ReconvergencePolicy.INCREMENTAL
    max_rounds: int = 1000
    # Costs above this count as INFINITY; None uses twice the sum of all link costs.
    infinity: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_rounds <= 0:
            raise ValueError("max_rounds must be positive")
        if self.infinity is not None and self.infinity < 0:
            raise ValueError("infinity must be non-negative")

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def config_from_mapping(data: Mapping[str, Any]) -> SimulationConfig:
    unknown = set(data) - {"policy", "max_rounds", "infinity"}
    if unknown:
        raise ValueError(f"Unknown simulation settings: {sorted(unknown)}")
    defaults = SimulationConfig()
    infinity = data.get("infinity", defaults.infinity)
    return SimulationConfig(
        policy=ReconvergencePolicy(data.get("policy", defaults.policy.value)),
        max_rounds=int(data.get("max_rounds", defaults.max_rounds)),
        infinity=None if infinity is None else float(infinity),
    )


def load_config(path: Path) -> SimulationConfig:
    data = yaml.safe_load(path.read_text())
    if data is None:
        return SimulationConfig()
    if not isinstance(data, dict):
        raise ValueError("config file must contain a mapping at the root")
    return config_from_mapping(data)
