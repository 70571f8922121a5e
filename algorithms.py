"""
Algorithm interfaces for routing.

Keeps the distance-vector arithmetic separate from round bookkeeping and
simulation details.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np


class DistanceVectorEngine(ABC):
    """
    Interface for a synchronous Bellman–Ford-style distance-vector round.
    """

    @abstractmethod
    def advertise(self, values: np.ndarray) -> np.ndarray:
        """
        Compute every router's advertised vector from a frozen table.

        Args:
            values: distance arena D[router, dest, via].

        Returns:
            adv[router, dest], the best known cost with adv[r, r] == 0.
        """
        raise NotImplementedError

    @abstractmethod
    def relax(
        self,
        values: np.ndarray,
        link_costs: np.ndarray,
        adverts: np.ndarray,
        limit: float,
    ) -> Tuple[np.ndarray, bool]:
        """
        Perform one relaxation pass for all routers against adverts.

        Args:
            values: distance arena as it stood before the round (not modified).
            link_costs: cost[r, v] of the direct link, INFINITY if absent.
            adverts: adv[v, d] as advertised by each router v.
            limit: candidates above this cost count as INFINITY.

        Returns:
            (new arena, whether any entry changed).
        """
        raise NotImplementedError
