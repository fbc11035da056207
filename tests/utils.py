# tests/utils.py
"""
Small, reusable helpers used across the hetclust test suite.

Functions:
- labels_equal_up_to_perm(y1, y2, K): True if y2 is a relabeling of y1.
- partition_of(clusters): members of every cluster as a set of tuples.
- assert_partition(clusters, data): every record appears in exactly one cluster.
- time_block(label, meta=None): context manager that prints wall-clock time.
"""

from __future__ import annotations

import itertools
import json
import time
from collections import Counter
from contextlib import contextmanager
from typing import Any, Dict, FrozenSet, List, Sequence, Tuple

import numpy as np


def labels_equal_up_to_perm(y1: Sequence[int], y2: Sequence[int], K: int) -> bool:
    """Return True if y2 can be permuted to equal y1 exactly."""
    y1 = np.asarray(y1)
    y2 = np.asarray(y2)
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(y1, mapping[y2]):
            return True
    return False


def partition_of(clusters) -> FrozenSet[FrozenSet[Tuple[str, ...]]]:
    """Order-free view of a clustering, for comparing runs."""
    return frozenset(
        frozenset(tuple(m) for m in cluster.members) for cluster in clusters
    )


def assert_partition(clusters, data: List[List[str]]) -> None:
    """Check that the members of all clusters are exactly the input records."""
    seen: Counter = Counter()
    for cluster in clusters:
        for member in cluster.members:
            seen[tuple(member)] += 1
    expected = Counter(tuple(str(t) for t in row) for row in data)
    assert seen == expected, "Cluster members do not partition the input"


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    payload: Dict[str, Any] = {"label": label, "seconds": round(seconds, 6)}
    if meta:
        payload["meta"] = meta
    print("[timing] " + json.dumps(payload, sort_keys=True))


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    start = time.perf_counter()
    try:
        yield
    finally:
        print_timing(label, time.perf_counter() - start, **(meta or {}))
