"""
Heterogeneous distance: local distances per kind, aggregation, metric axioms.
"""

from __future__ import annotations

import math

import pytest
import torch

from hetclust import (
    DistanceCalculator, Numeric, Ordinal, NominalSingle, NominalMulti, FreeText
)
from hetclust.distances import (
    numeric_distance, ordinal_distance, jaccard_distance, token_text_distance,
    levenshtein, levenshtein_text_distance, get_text_metric
)
from hetclust.utils.tokens import parse_number, parse_selections, tokenize_text, is_missing

from data_gen import make_survey


# ----------------------------
# Token helpers
# ----------------------------

def test_token_helpers():
    assert is_missing(None) and is_missing("") and is_missing("   ")
    assert not is_missing("0")
    assert parse_number(" 3.5 ") == 3.5
    assert parse_number("abc") is None
    assert parse_number("inf") is None
    assert parse_number("nan") is None
    assert parse_selections(" red, blue,,red ") == ["red", "blue"]
    assert parse_selections("") == []
    assert tokenize_text("Hello, WORLD! hello") == ["hello", "world", "hello"]


# ----------------------------
# Local distances
# ----------------------------

def test_numeric_local_distance():
    spec = Numeric(0, 20)
    assert numeric_distance("1", "11", spec) == pytest.approx(0.5)
    assert numeric_distance("-100", "100", spec) == 1.0  # clamped
    assert numeric_distance("x", "3", spec) == 1.0
    assert numeric_distance("3", "7", Numeric(5, 5)) == 0.0


def test_ordinal_local_distance():
    spec = Ordinal(["low", "mid", "high"])
    assert ordinal_distance("low", "high", spec) == 1.0
    assert ordinal_distance("low", "mid", spec) == pytest.approx(0.5)
    assert ordinal_distance("low", "unknown", spec) == 1.0
    single = Ordinal(["only"])
    assert ordinal_distance("only", "only ", single) == 0.0


def test_jaccard_and_text_distances():
    assert jaccard_distance(set(), set()) == 0.0
    assert jaccard_distance({"a", "b"}, {"b", "c"}) == pytest.approx(2 / 3)
    assert token_text_distance("The cat sat", "the CAT sat") == 0.0
    assert token_text_distance("red apple", "green pear") == 1.0
    assert token_text_distance("!!!", "???") == 1.0
    assert token_text_distance("!!!", " !!! ") == 0.0


def test_levenshtein():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("same", "same") == 0
    assert levenshtein_text_distance("kitten", "sitting") == pytest.approx(3 / 7)
    assert levenshtein_text_distance("", "") == 0.0


def test_unknown_text_metric():
    assert get_text_metric(None) is token_text_distance
    with pytest.raises(ValueError):
        get_text_metric("cosine")
    with pytest.raises(ValueError):
        DistanceCalculator(text_metric="cosine")


# ----------------------------
# DistanceCalculator
# ----------------------------

def test_mean_aggregation_worked_example():
    specs = [Numeric(0, 20), NominalSingle()]
    dc = DistanceCalculator()
    # (|1 - 11| / 20 + 1) / 2
    assert dc.distance(["1", "A"], ["11", "B"], specs) == pytest.approx(0.75)
    assert dc(["1", "A"], ["2", "A"], specs) == pytest.approx(0.025)


def test_rms_aggregation():
    specs = [Numeric(0, 20), NominalSingle()]
    dc = DistanceCalculator(aggregation="rms")
    expected = math.sqrt((0.5 ** 2 + 1.0) / 2)
    assert dc.distance(["1", "A"], ["11", "B"], specs) == pytest.approx(expected)
    with pytest.raises(ValueError):
        DistanceCalculator(aggregation="max")


def test_missing_values():
    specs = [Numeric(0, 10), Ordinal(["a", "b"]), NominalSingle(), NominalMulti(), FreeText()]
    dc = DistanceCalculator()
    blank = ["", "", "", "", ""]
    full = ["5", "a", "x", "p,q", "some text"]
    assert dc.distance(blank, blank, specs) == 0.0
    assert dc.distance(blank, full, specs) == 1.0
    assert dc.local_distance(None, "  ", NominalSingle()) == 0.0


def test_multi_select_is_order_insensitive():
    dc = DistanceCalculator()
    specs = [NominalMulti()]
    assert dc.distance(["red,blue"], ["blue, red"], specs) == 0.0
    assert dc.distance(["red,blue"], ["blue,green"], specs) == pytest.approx(2 / 3)


def test_levenshtein_text_option():
    dc = DistanceCalculator(text_metric="levenshtein")
    assert dc.distance(["kitten"], ["sitting"], [FreeText()]) == pytest.approx(3 / 7)
    assert dc.text_distance("abc", "abc") == 0.0


def test_argument_errors():
    dc = DistanceCalculator()
    specs = [NominalSingle(), NominalSingle()]
    with pytest.raises(ValueError):
        dc.distance(None, ["a", "b"], specs)
    with pytest.raises(ValueError):
        dc.distance(["a", "b"], ["a"], specs)
    with pytest.raises(ValueError):
        dc.distance(["a", "b"], ["a", "b"], None)
    assert dc.distance([], [], []) == 0.0


def test_non_string_tokens_are_coerced():
    specs = [Numeric(0, 20), NominalSingle()]
    dc = DistanceCalculator()
    assert dc.distance([1, "A"], ["1", "A"], specs) == 0.0
    assert dc.distance([1, "A"], [11, "A"], specs) == pytest.approx(0.25)
    assert dc.distance([None, "A"], ["", "A"], specs) == 0.0
    assert dc.distance([None, "A"], [3.0, "A"], specs) == pytest.approx(0.5)
    assert dc.local_distance(2.5, "2.5", Numeric(0, 10)) == 0.0


def test_unknown_spec_type_raises():
    class Weird:
        pass

    with pytest.raises(TypeError):
        DistanceCalculator().local_distance("a", "b", Weird())


@pytest.mark.parametrize("aggregation", ["mean", "rms"])
def test_metric_axioms_on_survey(aggregation):
    data, _, specs = make_survey(n_per=6, n_groups=3, seed=3, missing_rate=0.1)
    dc = DistanceCalculator(aggregation=aggregation)
    for a in data:
        assert dc.distance(a, a, specs) == 0.0
        for b in data:
            d = dc.distance(a, b, specs)
            assert 0.0 <= d <= 1.0
            assert d == dc.distance(b, a, specs)


def test_pairwise_matrix():
    data, _, specs = make_survey(n_per=4, n_groups=2, seed=1)
    dc = DistanceCalculator()
    D = dc.pairwise(data, specs=specs)
    assert D.shape == (8, 8)
    assert D.dtype == torch.float64
    assert torch.allclose(D, D.T)
    assert torch.all(torch.diagonal(D) == 0)
    assert D[0, 5].item() == pytest.approx(dc.distance(data[0], data[5], specs))

    cross = dc.pairwise(data[:3], data[3:], specs=specs)
    assert cross.shape == (3, 5)
    assert cross[1, 2].item() == pytest.approx(dc.distance(data[1], data[5], specs))
