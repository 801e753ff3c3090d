"""Exception types raised by the interpolation engine."""

import numpy as np


class InterpolationError(Exception):
    """Base class for all errors raised by this package."""
    pass


class DegenerateInputError(InterpolationError, ValueError):
    """Empty or insufficient sample set for the requested model."""
    pass


class UnderdeterminedSystemError(DegenerateInputError):
    """Fewer samples than unknowns in a least-squares fit."""
    pass


class SingularMatrixError(InterpolationError, np.linalg.LinAlgError):
    """Linear system could not be solved (collinear or coincident samples)."""
    pass


class InvalidModelParameterError(InterpolationError, ValueError):
    """Variogram model parameter outside its valid domain."""
    pass


class ConfigurationError(InterpolationError, ValueError):
    """Invalid interpolator or grid configuration."""
    pass


class InvalidSurfaceError(InterpolationError, ValueError):
    """Surface values that do not fit their grid or violate its constraints."""
    pass
