"""
Ordinary kriging with a supplied variogram model.

For a target point g the kriging weights solve

    [ C   1 ] [ lambda ]   [ c_g ]
    [ 1^T 0 ] [   mu   ] = [  1  ]

where ``C_ij = C(0) - gamma_ij`` between samples and ``c_g`` holds the
sample-to-target covariances. The prediction is ``lambda . z`` and the
kriging variance is ``C(0) - lambda . c_g - mu``.

Because the weights sum to one, ``C(0)`` cancels: the same weights and
multiplier solve

    [ -G/s  1 ] [ lambda ]   [ -gamma_g/s ]
    [  1^T  0 ] [  mu/s  ] = [      1     ]

and the variance reduces to ``lambda . gamma_g - mu``. ``KrigingSystem``
factorizes this form, with ``s`` the largest off-diagonal semivariance, so
the singularity test depends only on the sample layout and the model shape.

The system matrix does not depend on the target, so it is LU-factorized once
per run and every grid point only costs a pair of triangular solves.
"""

import warnings
from dataclasses import dataclass

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from .base import RowParallelInterpolator, as_query_points
from ..data_processing.grid import PredictionSurface, VarianceSurface
from ..exceptions import ConfigurationError, SingularMatrixError
from ..utils.coordinates import compute_pairwise_distances, distances_to_samples

# Pivot magnitude, relative to the largest, below which the system is singular
SINGULAR_TOLERANCE = 1e-12
NEAR_SINGULAR_WARNING = 1e-9


@dataclass(frozen=True)
class KrigingResult:
    """
    Kriging predictions at a set of query points.

    Attributes
    ----------
    predictions : ndarray of shape (m,)
    variance : ndarray of shape (m,)
        Kriging variance, clamped at zero
    weights : ndarray of shape (m, n)
        Kriging weight of each sample for each query point
    lagrange_multiplier : ndarray of shape (m,)
    """

    predictions: np.ndarray
    variance: np.ndarray
    weights: np.ndarray
    lagrange_multiplier: np.ndarray

    def __repr__(self):
        return (
            f"KrigingResult(n_predictions={len(self.predictions)}, "
            f"mean_prediction={self.predictions.mean():.4f}, "
            f"mean_variance={self.variance.mean():.4f})"
        )


def build_kriging_matrix(coordinates, model, total_sill):
    """
    Assemble the bordered ordinary-kriging matrix.

    Distinct samples use ``nugget + structure(d)`` even at zero separation;
    the diagonal uses ``gamma = 0``.

    Parameters
    ----------
    coordinates : ndarray of shape (n, 2)
        Sample coordinates
    model : VariogramModel
        Variogram model with fixed parameters
    total_sill : float
        ``C(0)`` used to convert semivariance to covariance

    Returns
    -------
    ndarray of shape (n + 1, n + 1)
    """
    n = len(coordinates)
    distances = compute_pairwise_distances(coordinates)

    gamma = model.nugget + model.structure(distances)
    np.fill_diagonal(gamma, 0.0)

    K = np.zeros((n + 1, n + 1))
    K[:n, :n] = total_sill - gamma
    K[:n, n] = 1.0
    K[n, :n] = 1.0
    return K


class KrigingSystem:
    """
    LU-factorized kriging system shared by every query point of a run.

    Parameters
    ----------
    samples : SampleSet
        Control points
    model : VariogramModel
        Variogram model with fixed parameters

    Raises
    ------
    SingularMatrixError
        If the kriging matrix is singular, e.g. coincident samples with a
        zero nugget. The sample values play no part in this test.
    """

    def __init__(self, samples, model):
        self.model = model
        self.coordinates = samples.coordinates
        self.values = samples.values
        # Reported only; C(0) cancels from weights and variances
        self.total_sill = model.reference_sill(samples.values)

        n = len(self.values)
        K = build_kriging_matrix(self.coordinates, model, 0.0)
        gamma_max = float(np.max(-K[:n, :n]))
        self.gamma_scale = gamma_max if gamma_max > 0 else 1.0
        K[:n, :n] /= self.gamma_scale

        with warnings.catch_warnings():
            warnings.simplefilter('error', LinAlgWarning)
            try:
                lu, piv = lu_factor(K)
            except (LinAlgWarning, ValueError) as e:
                raise SingularMatrixError(self._singular_message()) from e

        pivots = np.abs(np.diag(lu))
        ratio = pivots.min() / pivots.max()
        if ratio <= SINGULAR_TOLERANCE:
            raise SingularMatrixError(self._singular_message())
        if ratio <= NEAR_SINGULAR_WARNING:
            warnings.warn(
                f"Kriging matrix is nearly singular (pivot ratio {ratio:.2e}); "
                "consider adding a nugget."
            )

        self._lu_piv = (lu, piv)

    def _singular_message(self):
        return (
            f"Kriging matrix for {len(self.values)} samples is singular "
            f"(nugget={self.model.nugget}). Coincident samples need a positive "
            "nugget to regularize the system."
        )

    def solve(self, points):
        """
        Kriging weights, predictions and variances at the given points.

        Parameters
        ----------
        points : ndarray of shape (m, 2)
            Query point coordinates

        Returns
        -------
        KrigingResult
        """
        n = len(self.values)
        distances = distances_to_samples(points, self.coordinates)
        target_gamma = np.atleast_2d(self.model.semivariance(distances))

        rhs = np.vstack((-target_gamma.T / self.gamma_scale,
                         np.ones((1, len(points)))))
        solution = lu_solve(self._lu_piv, rhs)

        weights = solution[:n].T
        mu = solution[n] * self.gamma_scale
        predictions = weights @ self.values
        variance = np.sum(weights * target_gamma, axis=1) - mu

        # Negative values are round-off; report them as zero
        variance = np.maximum(variance, 0.0)

        return KrigingResult(
            predictions=predictions,
            variance=variance,
            weights=weights,
            lagrange_multiplier=mu
        )


def _krige_block(points, system):
    result = system.solve(points)
    return result.predictions, result.variance


class KrigingInterpolator(RowParallelInterpolator):
    """
    Ordinary kriging interpolator producing predictions and variances.

    Parameters
    ----------
    model : VariogramModel, optional
        Default variogram model; may instead be passed per call
    n_jobs : int, optional
        Joblib workers for grid rows (default: 1)
    verbose : bool, optional
        Print progress information (default: False)

    Examples
    --------
    >>> samples = SampleSet.from_arrays([0, 10, 0], [0, 0, 10], [1.0, 2.0, 3.0])
    >>> kriging = KrigingInterpolator(PowerModel(scale=0.1, exponent=1.5))
    >>> result = kriging.krige_points(samples, [0.0], [0.0])
    >>> float(np.round(result.predictions[0], 6))
    1.0
    """

    name = 'kriging'

    def __init__(self, model=None, n_jobs=1, verbose=False):
        super().__init__(n_jobs=n_jobs, verbose=verbose)
        self.model = model

    def _resolve_model(self, model):
        model = self.model if model is None else model
        if model is None:
            raise ConfigurationError(
                "No variogram model supplied to KrigingInterpolator"
            )
        return model

    def factorize(self, samples, model=None):
        """Build and factorize the kriging system for ``samples``."""
        system = KrigingSystem(samples, self._resolve_model(model))
        if self.verbose:
            print(f"  Kriging system factorized: {len(samples)} samples, "
                  f"model={system.model}, C(0)={system.total_sill:.4g}")
        return system

    def krige_points(self, samples, x, y, model=None):
        """
        Kriging at arbitrary query points, with weights.

        Parameters
        ----------
        samples : SampleSet
            Control points
        x, y : array-like
            Query point coordinates
        model : VariogramModel, optional
            Overrides the interpolator's model

        Returns
        -------
        KrigingResult
        """
        return self.factorize(samples, model).solve(as_query_points(x, y))

    def predict_points(self, samples, x, y, model=None):
        return self.krige_points(samples, x, y, model).predictions

    def predict(self, samples, grid, model=None):
        """
        Krige the samples onto every grid point.

        Parameters
        ----------
        samples : SampleSet
            Control points
        grid : Grid
            Evaluation grid
        model : VariogramModel, optional
            Overrides the interpolator's model

        Returns
        -------
        tuple of (PredictionSurface, VarianceSurface)

        Raises
        ------
        SingularMatrixError
            If the kriging system cannot be factorized.
        """
        system = self.factorize(samples, model)
        rows = self._map_rows(_krige_block, grid, system)

        predictions = np.vstack([row[0] for row in rows])
        variance = np.vstack([row[1] for row in rows])
        return PredictionSurface(grid, predictions), VarianceSurface(grid, variance)

    def __repr__(self):
        return f"KrigingInterpolator(model={self.model!r})"
