"""Utility functions for distances and configuration handling."""

from .coordinates import (
    distances_to_samples,
    compute_pairwise_distances,
    condensed_pairwise_distances
)
from .config import (
    GridConfig,
    IDWConfig,
    PolynomialConfig,
    VariogramConfig,
    InterpolationConfig,
    load_config,
    config_from_dict
)

__all__ = [
    'distances_to_samples',
    'compute_pairwise_distances',
    'condensed_pairwise_distances',
    'GridConfig',
    'IDWConfig',
    'PolynomialConfig',
    'VariogramConfig',
    'InterpolationConfig',
    'load_config',
    'config_from_dict'
]
