"""
Closed-form variogram models.

Every model is an immutable object with fixed parameters and a pure
``semivariance(distance)`` function. Parameters are supplied by the caller;
nothing here estimates them from data.

Conventions
-----------
- ``semivariance(0) == 0`` for every model. The nugget only applies to
  strictly positive separations.
- ``structure(d)`` is the semivariance without the nugget. The kriging matrix
  uses ``nugget + structure(d)`` between distinct samples, so two samples at
  the same location still see the nugget.
- Covariance is ``C(d) = C(0) - semivariance(d)``. Bounded models have
  ``C(0) = nugget + psill``. The power and linear models have no sill; their
  ``C(0)`` is taken from the data (see ``reference_sill``).
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass

import numpy as np

from ..exceptions import InvalidModelParameterError


def _require_non_negative(name, value):
    if not np.isfinite(value) or value < 0:
        raise InvalidModelParameterError(f"{name} must be non-negative, got {value}")


def _require_positive(name, value):
    if not np.isfinite(value) or value <= 0:
        raise InvalidModelParameterError(f"{name} must be positive, got {value}")


class VariogramModel(ABC):
    """Abstract base class for variogram models."""

    kind = None

    @abstractmethod
    def structure(self, distance):
        """
        Semivariance contribution of the spatial structure (no nugget).

        Parameters
        ----------
        distance : ndarray
            Non-negative separation distances

        Returns
        -------
        ndarray
            Same shape as ``distance``
        """
        pass

    @property
    def sill(self):
        """Total sill ``C(0)``, or None for unbounded models."""
        return None

    def semivariance(self, distance):
        """
        Evaluate the model at the given separation distances.

        Parameters
        ----------
        distance : float or array-like
            Non-negative separation distances

        Returns
        -------
        float or ndarray
            ``nugget + structure(d)`` where ``d > 0`` and 0 where ``d == 0``
        """
        d = np.asarray(distance, dtype=float)
        gamma = np.where(d > 0, self.nugget + self.structure(d), 0.0)
        return float(gamma) if gamma.ndim == 0 else gamma

    def covariance(self, distance, total_sill):
        """``C(d) = total_sill - semivariance(d)``."""
        return total_sill - self.semivariance(distance)

    def reference_sill(self, values):
        """
        ``C(0)`` used to turn semivariance into covariance.

        Bounded models return their sill. Unbounded models use the population
        variance of the sample values, or 1.0 if the values are constant.
        Ordinary-kriging weights and variances do not depend on this constant
        because the weights sum to one.

        Parameters
        ----------
        values : array-like
            Sample values

        Returns
        -------
        float
        """
        if self.sill is not None:
            return float(self.sill)
        variance = float(np.var(np.asarray(values, dtype=float)))
        return variance if variance > 0 else 1.0

    def parameters(self):
        """Model parameters as a plain dict (inverse of ``build_variogram_model``)."""
        params = {'kind': self.kind}
        params.update(asdict(self))
        return params


@dataclass(frozen=True)
class PowerModel(VariogramModel):
    """
    Power variogram ``gamma(d) = nugget + scale * d**exponent``.

    Unbounded; valid for ``0 < exponent < 2``.

    Examples
    --------
    >>> model = PowerModel(scale=0.5, exponent=1.0)
    >>> model.semivariance([0.0, 2.0])
    array([0., 1.])
    """

    scale: float
    exponent: float
    nugget: float = 0.0
    kind = 'power'

    def __post_init__(self):
        _require_positive('scale', self.scale)
        _require_non_negative('nugget', self.nugget)
        if not np.isfinite(self.exponent) or not 0 < self.exponent < 2:
            raise InvalidModelParameterError(
                f"exponent must lie in (0, 2), got {self.exponent}"
            )

    def structure(self, distance):
        return self.scale * np.power(distance, self.exponent)


@dataclass(frozen=True)
class LinearModel(VariogramModel):
    """Linear variogram ``gamma(d) = nugget + slope * d``. Unbounded."""

    slope: float
    nugget: float = 0.0
    kind = 'linear'

    def __post_init__(self):
        _require_positive('slope', self.slope)
        _require_non_negative('nugget', self.nugget)

    def structure(self, distance):
        return self.slope * distance


@dataclass(frozen=True)
class _BoundedModel(VariogramModel):
    psill: float
    range: float
    nugget: float = 0.0

    def __post_init__(self):
        _require_positive('psill', self.psill)
        _require_positive('range', self.range)
        _require_non_negative('nugget', self.nugget)

    @property
    def sill(self):
        return self.nugget + self.psill


@dataclass(frozen=True)
class SphericalModel(_BoundedModel):
    """Spherical variogram; reaches ``nugget + psill`` at ``range``."""

    kind = 'spherical'

    def structure(self, distance):
        h = np.minimum(distance / self.range, 1.0)
        return self.psill * (1.5 * h - 0.5 * h ** 3)


@dataclass(frozen=True)
class ExponentialModel(_BoundedModel):
    """Exponential variogram with practical range ``3 * range``."""

    kind = 'exponential'

    def structure(self, distance):
        return self.psill * (1.0 - np.exp(-distance / self.range))


@dataclass(frozen=True)
class GaussianModel(_BoundedModel):
    """Gaussian variogram with practical range ``sqrt(3) * range``."""

    kind = 'gaussian'

    def structure(self, distance):
        return self.psill * (1.0 - np.exp(-(distance / self.range) ** 2))


VARIOGRAM_MODELS = {
    'power': PowerModel,
    'linear': LinearModel,
    'spherical': SphericalModel,
    'exponential': ExponentialModel,
    'gaussian': GaussianModel
}


def build_variogram_model(kind, **params):
    """
    Construct a variogram model by name.

    Parameters
    ----------
    kind : str
        One of 'power', 'linear', 'spherical', 'exponential', 'gaussian'
    **params
        Model parameters, e.g. ``scale``, ``exponent``, ``nugget`` for the
        power model or ``psill``, ``range``, ``nugget`` for bounded models

    Returns
    -------
    VariogramModel

    Raises
    ------
    InvalidModelParameterError
        If the kind is unknown or the parameters are invalid.

    Examples
    --------
    >>> build_variogram_model('power', scale=0.05, exponent=1.5)
    PowerModel(scale=0.05, exponent=1.5, nugget=0.0)
    """
    if kind not in VARIOGRAM_MODELS:
        raise InvalidModelParameterError(
            f"Unknown variogram model '{kind}'. Supported: {sorted(VARIOGRAM_MODELS)}"
        )
    try:
        return VARIOGRAM_MODELS[kind](**params)
    except TypeError as e:
        raise InvalidModelParameterError(
            f"Invalid parameters for '{kind}' model: {e}"
        ) from e
