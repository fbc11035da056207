"""
Per-dimension type descriptors for heterogeneous records.

A list of FeatureSpec objects fixes the dimensionality of the records being
clustered and tells the distance and aggregation code how to interpret each
token:

- Numeric: a value inside a known [min, max] range
- Ordinal: a label from an ordered list of options
- NominalSingle: one unordered label
- NominalMulti: a comma-separated set of unordered labels
- FreeText: arbitrary text
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple
import math


class VariableKind(Enum):
    """Kind of variable described by a FeatureSpec."""
    NUMERIC = 'numeric'
    ORDINAL = 'ordinal'
    NOMINAL_SINGLE = 'nominal_single'
    NOMINAL_MULTI = 'nominal_multi'
    FREE_TEXT = 'free_text'


@dataclass(frozen=True)
class FeatureSpec:
    """Base class of the feature spec variants.

    Use one of the subclasses (or the convenience constructors below) to
    describe a dimension.
    """

    @property
    def kind(self) -> VariableKind:
        raise NotImplementedError

    @staticmethod
    def numeric(min: float, max: float) -> 'Numeric':
        return Numeric(min, max)

    @staticmethod
    def ordinal(order: Sequence[str], cardinality: Optional[int] = None) -> 'Ordinal':
        return Ordinal(order, cardinality)

    @staticmethod
    def nominal_single() -> 'NominalSingle':
        return NominalSingle()

    @staticmethod
    def nominal_multi(max_selections: Optional[int] = None) -> 'NominalMulti':
        return NominalMulti(max_selections)

    @staticmethod
    def free_text() -> 'FreeText':
        return FreeText()


@dataclass(frozen=True)
class Numeric(FeatureSpec):
    """Numeric variable with a value range used for normalization."""

    min: float
    max: float

    def __post_init__(self):
        lo, hi = float(self.min), float(self.max)
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise ValueError(f"Numeric range must be finite, got [{self.min}, {self.max}]")
        object.__setattr__(self, 'min', lo)
        object.__setattr__(self, 'max', hi)

    @property
    def kind(self) -> VariableKind:
        return VariableKind.NUMERIC

    @property
    def span(self) -> float:
        """Width of the range, 0 when the range is degenerate."""
        return max(self.max - self.min, 0.0)


@dataclass(frozen=True)
class Ordinal(FeatureSpec):
    """Ordered categorical variable.

    Args:
        order: Labels from lowest to highest rank
        cardinality: Number of modalities m; defaults to len(order)
    """

    order: Tuple[str, ...]
    cardinality: Optional[int] = None

    def __post_init__(self):
        if self.order is None or isinstance(self.order, str):
            raise TypeError(f"order must be a sequence of labels, got {type(self.order)}")
        order = tuple(str(label) for label in self.order)
        if len(order) == 0:
            raise ValueError("order cannot be empty for an Ordinal feature")
        object.__setattr__(self, 'order', order)

        if self.cardinality is None:
            object.__setattr__(self, 'cardinality', len(order))
        elif not isinstance(self.cardinality, int) or self.cardinality <= 0:
            raise ValueError(f"cardinality must be a positive int, got {self.cardinality}")

    @property
    def kind(self) -> VariableKind:
        return VariableKind.ORDINAL

    def rank(self, label: str) -> Optional[int]:
        """Position of label in the order, or None if it is not an option."""
        label = label.strip()
        try:
            return self.order.index(label)
        except ValueError:
            return None


@dataclass(frozen=True)
class NominalSingle(FeatureSpec):
    """Unordered categorical variable with a single selection."""

    @property
    def kind(self) -> VariableKind:
        return VariableKind.NOMINAL_SINGLE


@dataclass(frozen=True)
class NominalMulti(FeatureSpec):
    """Unordered categorical variable allowing several selections.

    Tokens hold the selections separated by commas, e.g. "red,blue".
    """

    max_selections: Optional[int] = None

    def __post_init__(self):
        if self.max_selections is not None:
            if not isinstance(self.max_selections, int) or self.max_selections <= 0:
                raise ValueError(f"max_selections must be a positive int, got {self.max_selections}")

    @property
    def kind(self) -> VariableKind:
        return VariableKind.NOMINAL_MULTI


@dataclass(frozen=True)
class FreeText(FeatureSpec):
    """Unstructured text answer."""

    @property
    def kind(self) -> VariableKind:
        return VariableKind.FREE_TEXT
