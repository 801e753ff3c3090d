"""Least-squares polynomial trend surfaces."""

import warnings

import numpy as np
from scipy import linalg
from sklearn.metrics import r2_score

from .base import Interpolator, as_query_points
from ..data_processing.grid import PredictionSurface
from ..exceptions import (
    ConfigurationError,
    SingularMatrixError,
    UnderdeterminedSystemError
)

POLYNOMIAL_TERMS = {
    1: ('1', 'x', 'y'),
    2: ('1', 'x', 'y', 'xy', 'x2', 'y2')
}

# Relative singular value below which the design matrix is rank deficient
RANK_TOLERANCE = 1e-10
CONDITION_WARNING = 1e8


def _check_degree(degree):
    if degree not in POLYNOMIAL_TERMS:
        raise ConfigurationError(
            f"Polynomial degree must be one of {sorted(POLYNOMIAL_TERMS)}, got {degree}"
        )


def design_matrix(x, y, degree):
    """
    Build the polynomial design matrix.

    Degree 1 columns are ``[1, x, y]``; degree 2 columns are
    ``[1, x, y, x*y, x^2, y^2]``.

    Parameters
    ----------
    x, y : array-like
        Point coordinates
    degree : int
        1 (planar) or 2 (quadratic)

    Returns
    -------
    ndarray of shape (len(x), n_terms)

    Examples
    --------
    >>> design_matrix([2.0], [3.0], degree=2)
    array([[1., 2., 3., 6., 4., 9.]])
    """
    _check_degree(degree)
    x = np.asarray(x, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()

    columns = [np.ones_like(x), x, y]
    if degree == 2:
        columns += [x * y, x ** 2, y ** 2]
    return np.column_stack(columns)


class FittedSurface:
    """
    Polynomial surface produced by ``PolynomialSurfaceFitter.fit``.

    Attributes
    ----------
    degree : int
        Polynomial degree
    coefficients : ndarray
        One coefficient per term, ordered as ``term_names``
    residuals : ndarray
        ``z - fitted`` at each training sample, in sample order
    """

    def __init__(self, degree, coefficients, residuals, observed):
        coefficients = np.array(coefficients, dtype=float)
        residuals = np.array(residuals, dtype=float)
        observed = np.array(observed, dtype=float)
        for array in (coefficients, residuals, observed):
            array.setflags(write=False)

        self.degree = degree
        self.coefficients = coefficients
        self.residuals = residuals
        self._observed = observed

    @property
    def term_names(self):
        return POLYNOMIAL_TERMS[self.degree]

    @property
    def residual_sum_of_squares(self):
        return float(np.sum(self.residuals ** 2))

    @property
    def r_squared(self):
        """Coefficient of determination on the training samples."""
        return float(r2_score(self._observed, self._observed - self.residuals))

    def predict_points(self, x, y):
        """Evaluate the polynomial at arbitrary points."""
        points = as_query_points(x, y)
        return design_matrix(points[:, 0], points[:, 1], self.degree) @ self.coefficients

    def predict(self, grid):
        """
        Evaluate the polynomial at every grid point.

        Parameters
        ----------
        grid : Grid
            Evaluation grid

        Returns
        -------
        PredictionSurface
        """
        X, Y = grid.mesh()
        values = design_matrix(X.ravel(), Y.ravel(), self.degree) @ self.coefficients
        return PredictionSurface(grid, values.reshape(grid.shape))

    def as_dict(self):
        """Coefficients keyed by term name."""
        return dict(zip(self.term_names, self.coefficients.tolist()))

    def __repr__(self):
        terms = ", ".join(f"{name}={c:.4g}" for name, c in self.as_dict().items())
        return f"FittedSurface(degree={self.degree}, {terms})"


class PolynomialSurfaceFitter(Interpolator):
    """
    Ordinary least-squares trend surface of degree 1 or 2.

    Coefficients are obtained from an SVD least-squares solve on the
    column-equilibrated design matrix, so exact rank deficiency (collinear
    samples, a shared coordinate for degree 2, ...) is detected instead of
    returning an arbitrary minimum-norm solution.

    Parameters
    ----------
    degree : int, optional
        Default degree for ``fit`` and ``predict`` (default: 1)
    verbose : bool, optional
        Print fit summaries (default: False)

    Examples
    --------
    >>> samples = SampleSet.from_arrays([0, 1, 0], [0, 0, 1], [1.0, 3.0, 4.0])
    >>> surface = PolynomialSurfaceFitter(degree=1).fit(samples)
    >>> np.round(surface.coefficients, 6)
    array([1., 2., 3.])
    """

    name = 'polynomial'

    def __init__(self, degree=1, verbose=False):
        super().__init__(verbose=verbose)
        _check_degree(degree)
        self.degree = degree

    def fit(self, samples, degree=None):
        """
        Fit the polynomial to the samples.

        Parameters
        ----------
        samples : SampleSet
            Control points
        degree : int, optional
            Overrides the fitter's default degree

        Returns
        -------
        FittedSurface

        Raises
        ------
        ConfigurationError
            If the degree is not 1 or 2.
        UnderdeterminedSystemError
            If there are fewer samples than polynomial terms.
        SingularMatrixError
            If the sample layout cannot determine every coefficient.
        """
        degree = self.degree if degree is None else degree
        _check_degree(degree)

        n_terms = len(POLYNOMIAL_TERMS[degree])
        if len(samples) < n_terms:
            raise UnderdeterminedSystemError(
                f"Degree-{degree} fit needs at least {n_terms} samples, got {len(samples)}"
            )

        coords = samples.coordinates
        z = samples.values
        A = design_matrix(coords[:, 0], coords[:, 1], degree)

        # Equilibrate columns so the rank test is scale independent
        column_norms = np.linalg.norm(A, axis=0)
        column_norms[column_norms == 0] = 1.0
        A_scaled = A / column_norms

        singular_values = linalg.svdvals(A_scaled)
        if singular_values[-1] <= RANK_TOLERANCE * singular_values[0]:
            raise SingularMatrixError(
                f"Design matrix for degree-{degree} fit is rank deficient; samples "
                "are collinear or otherwise degenerate for this degree."
            )

        condition = singular_values[0] / singular_values[-1]
        if condition > CONDITION_WARNING:
            warnings.warn(
                f"Degree-{degree} design matrix is ill-conditioned "
                f"(condition number {condition:.2e}); coefficients may be unstable."
            )

        solution, _, _, _ = linalg.lstsq(A_scaled, z)
        coefficients = solution / column_norms
        residuals = z - A @ coefficients

        surface = FittedSurface(degree, coefficients, residuals, z)

        if self.verbose:
            print(f"  Degree-{degree} fit on {len(samples)} samples")
            print(f"    coefficients: {surface.as_dict()}")
            print(f"    RSS: {surface.residual_sum_of_squares:.4e}")

        return surface

    def predict_points(self, samples, x, y):
        return self.fit(samples).predict_points(x, y)

    def predict(self, samples, grid):
        """Fit with the default degree and evaluate on ``grid``."""
        return self.fit(samples).predict(grid)

    def __repr__(self):
        return f"PolynomialSurfaceFitter(degree={self.degree})"
