"""Inverse Distance Weighting (IDW) interpolation."""

import numpy as np

from .base import RowParallelInterpolator, as_query_points
from ..data_processing.grid import PredictionSurface
from ..exceptions import ConfigurationError
from ..utils.coordinates import distances_to_samples

DEFAULT_POWER = 1.0
DEFAULT_EPSILON = 1e-5


def idw_weights(distances, power=DEFAULT_POWER):
    """
    Calculate normalized IDW interpolation weights.

        w_k = (1 / d_k^p) / sum_j (1 / d_j^p)

    Parameters
    ----------
    distances : ndarray
        Strictly positive distances from the samples to one target point, or
        an (m, n) array with one row per target point
    power : float, optional
        Power parameter for distance weighting (default: 1)

    Returns
    -------
    ndarray
        Normalized weights; each row sums to 1

    Examples
    --------
    >>> weights = idw_weights(np.array([1.0, 2.0, 4.0]), power=1)
    >>> abs(weights.sum() - 1.0) < 1e-10
    True
    >>> weights[0] > weights[1] > weights[2]
    True
    """
    distances = np.asarray(distances, dtype=float)
    # Scaled by the nearest distance, the largest raw weight is exactly 1
    weights = (distances / distances.min(axis=-1, keepdims=True)) ** -power
    return weights / np.sum(weights, axis=-1, keepdims=True)


def _idw_block(points, sample_coordinates, sample_values, power, epsilon):
    """
    IDW estimate at every point of a block.

    A point within ``epsilon`` of a sample takes that sample's value; with
    several such samples the first in sample order wins.
    """
    distances = distances_to_samples(points, sample_coordinates)

    coincident = distances <= epsilon
    has_match = np.any(coincident, axis=1)
    first_match = np.argmax(coincident, axis=1)

    # Matched rows get dummy unit distances so no division by zero occurs.
    safe = np.where(has_match[:, np.newaxis], 1.0, distances)
    estimates = idw_weights(safe, power) @ sample_values

    return np.where(has_match, sample_values[first_match], estimates)


class DistanceWeightedInterpolator(RowParallelInterpolator):
    """
    Inverse distance weighted mean of the samples.

    Each grid value is ``sum(z_k / d_k^p) / sum(1 / d_k^p)``. The default
    power of 1 reproduces the plain inverse-distance variant; ``power=2``
    gives the conventional inverse-square weighting.

    A query point closer than ``epsilon`` to a sample is assigned that
    sample's value exactly; ties between coincident samples resolve to the
    first one in SampleSet order.

    Parameters
    ----------
    power : float, optional
        Distance exponent, must be positive (default: 1.0)
    epsilon : float, optional
        Coincidence radius for exact substitution (default: 1e-5)
    n_jobs : int, optional
        Joblib workers for grid rows (default: 1)
    verbose : bool, optional
        Print progress information (default: False)

    Raises
    ------
    ConfigurationError
        If ``power <= 0`` or ``epsilon < 0``.

    Examples
    --------
    >>> samples = SampleSet.from_arrays([0, 10], [0, 0], [10.0, 20.0])
    >>> idw = DistanceWeightedInterpolator()
    >>> float(idw.predict_points(samples, [5.0], [0.0])[0])
    15.0
    """

    name = 'idw'

    def __init__(self, power=DEFAULT_POWER, epsilon=DEFAULT_EPSILON,
                 n_jobs=1, verbose=False):
        super().__init__(n_jobs=n_jobs, verbose=verbose)

        if not np.isfinite(power) or power <= 0:
            raise ConfigurationError(f"IDW power must be positive, got {power}")
        if not np.isfinite(epsilon) or epsilon < 0:
            raise ConfigurationError(f"IDW epsilon must be non-negative, got {epsilon}")

        self.power = float(power)
        self.epsilon = float(epsilon)

    def predict_points(self, samples, x, y):
        return _idw_block(as_query_points(x, y), samples.coordinates,
                          samples.values, self.power, self.epsilon)

    def predict(self, samples, grid):
        """
        Interpolate the samples onto every grid point.

        Parameters
        ----------
        samples : SampleSet
            Control points
        grid : Grid
            Evaluation grid

        Returns
        -------
        PredictionSurface
        """
        rows = self._map_rows(_idw_block, grid, samples.coordinates,
                              samples.values, self.power, self.epsilon)
        return PredictionSurface(grid, np.vstack(rows))

    def __repr__(self):
        return f"DistanceWeightedInterpolator(power={self.power:g}, epsilon={self.epsilon:g})"
