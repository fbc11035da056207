"""
KMeansPlusPlus: k-means with D² seeding.
"""

from __future__ import annotations

import pytest

from hetclust import KMeansPlusPlus, KMeans, Numeric, NominalSingle
from hetclust.initialization import KMeansPlusPlusInit

from data_gen import make_survey
from utils import assert_partition, labels_equal_up_to_perm

SPECS = [Numeric(0, 20), NominalSingle()]


def test_is_kmeans_with_plusplus_init():
    model = KMeansPlusPlus(random_state=0)
    assert isinstance(model, KMeans)
    assert model.init == "k-means++"
    model.fit([["1", "A"], ["2", "A"], ["10", "B"]], 2, specs=SPECS)
    assert isinstance(model.initialization_strategy, KMeansPlusPlusInit)


def test_identical_data_terminates():
    data = [["5", "A"]] * 8
    model = KMeansPlusPlus(random_state=0, max_iter=20)
    clusters = model.fit(data, 4, specs=SPECS)
    assert len(clusters) == 4
    assert all(c.size() >= 1 for c in clusters)
    assert sum(c.size() for c in clusters) == 8
    assert model.n_iter_ <= 20


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_recovers_personas(seed):
    data, y, specs = make_survey(n_per=12, n_groups=3, seed=seed)
    model = KMeansPlusPlus(random_state=seed)
    clusters = model.fit(data, 3, specs=specs)

    assert len(clusters) == 3
    assert_partition(clusters, data)
    assert labels_equal_up_to_perm(y, model.labels_.numpy(), K=3)
