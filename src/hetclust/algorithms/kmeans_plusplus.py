"""
K-means++ clustering.

Same refinement loop as KMeans; only the seeding differs.
"""

from typing import Optional, Union
import torch

from .kmeans import KMeans
from ..base.interfaces import DistanceMetric


class KMeansPlusPlus(KMeans):
    """K-means with D²-weighted (k-means++) seeding.

    Seeds tend to be spread out, which lowers the chance of a poor local
    optimum compared with uniform seeding.
    """

    def __init__(self,
                 max_iter: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 distance: Optional[DistanceMetric] = None):
        super().__init__(
            init='k-means++',
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state,
            distance=distance
        )
