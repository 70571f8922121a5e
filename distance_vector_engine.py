"""
Synchronous Bellman–Ford distance-vector engine.

Both passes are vectorised over the whole network so no router ever sees
another router's same-round result.
"""

from typing import Tuple

import numpy as np

from algorithms import DistanceVectorEngine
from graph import INFINITY


class SynchronousDistanceVectorEngine(DistanceVectorEngine):
    """
    Advertise-then-relax over a frozen snapshot of every distance table.
    """

    def advertise(self, values: np.ndarray) -> np.ndarray:
        adverts = np.min(values, axis=2, initial=INFINITY)
        np.fill_diagonal(adverts, 0.0)
        return adverts

    def relax(
        self,
        values: np.ndarray,
        link_costs: np.ndarray,
        adverts: np.ndarray,
        limit: float = INFINITY,
    ) -> Tuple[np.ndarray, bool]:
        """
        Relax D[r, d, v] = cost(r, v) + adv[v, d] for every live link.

        Only entries with a finite link r-v, d != r and d != v are rewritten.
        The direct rows (d == v) stay pinned to the link cost, and columns
        of absent links stay INFINITY. Candidates above limit saturate to
        INFINITY; inf + x is already inf so nothing ever wraps.
        """
        n = values.shape[0]
        not_self = ~np.eye(n, dtype=bool)
        live_link = np.isfinite(link_costs) & not_self

        # mask[r, d, v]
        mask = live_link[:, None, :] & not_self[:, :, None] & not_self[None, :, :]

        # candidate[r, d, v] = cost[r, v] + adv[v, d]
        candidate = link_costs[:, None, :] + adverts.T[None, :, :]
        candidate = np.where(candidate > limit, INFINITY, candidate)

        relaxed = np.where(mask, candidate, values)
        changed = not np.array_equal(relaxed, values)
        return relaxed, changed
