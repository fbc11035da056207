"""Base classes, feature specs and interfaces for hetclust algorithms."""

from .feature_spec import (
    VariableKind,
    FeatureSpec,
    Numeric,
    Ordinal,
    NominalSingle,
    NominalMulti,
    FreeText
)

from .interfaces import (
    Record,
    DistanceMetric,
    ClusterRepresentation,
    AssignmentStrategy,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringAlgorithm
)

from .data_structures import OptimalKResult, AnalysisResult

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Feature specs
    'VariableKind',
    'FeatureSpec',
    'Numeric',
    'Ordinal',
    'NominalSingle',
    'NominalMulti',
    'FreeText',

    # Interfaces
    'Record',
    'DistanceMetric',
    'ClusterRepresentation',
    'AssignmentStrategy',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringAlgorithm',

    # Results
    'OptimalKResult',
    'AnalysisResult',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
