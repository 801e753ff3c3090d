"""
Water Table Interpolation Package

This package estimates a water-table elevation surface over a bounded 2D
domain from a small set of monitoring wells, using inverse distance
weighting, polynomial trend surfaces and ordinary kriging.
"""

__version__ = "1.0.0"
__author__ = "Serhat Tadik"

from .exceptions import (
    InterpolationError,
    DegenerateInputError,
    UnderdeterminedSystemError,
    SingularMatrixError,
    InvalidModelParameterError,
    ConfigurationError,
    InvalidSurfaceError
)
from .data_processing import (
    Point2D,
    Sample,
    SampleSet,
    Grid,
    PredictionSurface,
    VarianceSurface
)
from .interpolation import (
    DistanceWeightedInterpolator,
    PolynomialSurfaceFitter,
    FittedSurface,
    KrigingInterpolator
)
from .variogram import (
    EmpiricalVariogram,
    PowerModel,
    build_variogram_model
)
from .pipeline import interpolate_all

__all__ = [
    'InterpolationError',
    'DegenerateInputError',
    'UnderdeterminedSystemError',
    'SingularMatrixError',
    'InvalidModelParameterError',
    'ConfigurationError',
    'InvalidSurfaceError',
    'Point2D',
    'Sample',
    'SampleSet',
    'Grid',
    'PredictionSurface',
    'VarianceSurface',
    'DistanceWeightedInterpolator',
    'PolynomialSurfaceFitter',
    'FittedSurface',
    'KrigingInterpolator',
    'EmpiricalVariogram',
    'PowerModel',
    'build_variogram_model',
    'interpolate_all'
]
