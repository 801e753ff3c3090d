"""Empirical semivariogram and closed-form variogram models."""

from .empirical import (
    EmpiricalVariogram,
    EmpiricalVariogramBin,
    compute_empirical_variogram,
    pairwise_semivariances
)
from .models import (
    VariogramModel,
    PowerModel,
    LinearModel,
    SphericalModel,
    ExponentialModel,
    GaussianModel,
    VARIOGRAM_MODELS,
    build_variogram_model
)

__all__ = [
    'EmpiricalVariogram',
    'EmpiricalVariogramBin',
    'compute_empirical_variogram',
    'pairwise_semivariances',
    'VariogramModel',
    'PowerModel',
    'LinearModel',
    'SphericalModel',
    'ExponentialModel',
    'GaussianModel',
    'VARIOGRAM_MODELS',
    'build_variogram_model'
]
