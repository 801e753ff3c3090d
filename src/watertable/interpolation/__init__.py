"""Spatial interpolation modules for water-table surfaces."""

from .base import Interpolator, RowParallelInterpolator
from .idw import (
    idw_weights,
    DistanceWeightedInterpolator
)
from .polynomial import (
    design_matrix,
    FittedSurface,
    PolynomialSurfaceFitter
)
from .kriging import (
    build_kriging_matrix,
    KrigingResult,
    KrigingSystem,
    KrigingInterpolator
)

__all__ = [
    'Interpolator',
    'RowParallelInterpolator',
    'idw_weights',
    'DistanceWeightedInterpolator',
    'design_matrix',
    'FittedSurface',
    'PolynomialSurfaceFitter',
    'build_kriging_matrix',
    'KrigingResult',
    'KrigingSystem',
    'KrigingInterpolator'
]
