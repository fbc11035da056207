"""
Initialization from previous solution or custom centers.

Useful for warm starts or when you have good initial guesses.
"""

from typing import List, Sequence, Union
import torch

from ..base.interfaces import InitializationStrategy, DistanceMetric, Record
from ..base.feature_spec import FeatureSpec
from ..representations.kluster import Kluster


class FromPreviousInit(InitializationStrategy):
    """Initialize from caller-supplied centers.

    Accepts either:
    - A list of center records
    - A list of Kluster objects from a previous run (their centers are reused)
    """

    def __init__(self, initial_state: Sequence[Union[Record, Kluster]]):
        """
        Args:
            initial_state: Previous solution to use for initialization
        """
        if initial_state is None or len(initial_state) == 0:
            raise ValueError("no initial centroids")
        self.initial_state = list(initial_state)

    def initialize(self, points: Sequence[Record], n_clusters: int,
                   specs: Sequence[FeatureSpec], distance: DistanceMetric,
                   generator: torch.Generator) -> List[Kluster]:
        """Initialize from previous state.

        Args:
            points: Records (used for validation)
            n_clusters: Expected number of clusters

        Returns:
            List of fresh Klusters without members
        """
        if len(self.initial_state) != n_clusters:
            raise ValueError(f"Provided {len(self.initial_state)} initial centers, "
                             f"but n_clusters={n_clusters}")

        representations = []
        for i, state in enumerate(self.initial_state):
            center = state.center if isinstance(state, Kluster) else [
                '' if token is None else str(token) for token in state
            ]
            if len(center) != len(specs):
                raise ValueError(f"Initial center {i} has dimension {len(center)}, "
                                 f"but specs describe {len(specs)} dimensions")
            representations.append(Kluster(center))
        return representations
