"""Evaluation grid and grid-shaped result surfaces."""

import numpy as np
import pandas as pd

from ..exceptions import ConfigurationError, InvalidSurfaceError


def _validate_axis(axis, name):
    axis = np.array(axis, dtype=float).ravel()
    if axis.size == 0:
        raise ConfigurationError(f"Grid axis '{name}' must not be empty")
    if not np.all(np.isfinite(axis)):
        raise ConfigurationError(f"Grid axis '{name}' must be finite")
    if axis.size > 1 and not np.all(np.diff(axis) > 0):
        raise ConfigurationError(f"Grid axis '{name}' must be strictly increasing")
    axis.setflags(write=False)
    return axis


class Grid:
    """
    Rectilinear evaluation domain.

    Cell ``(i, j)`` is the query point ``(xs[j], ys[i])``, so surfaces have
    shape ``(len(ys), len(xs))`` with rows running along y.

    Parameters
    ----------
    xs : array-like
        Column axis coordinates, strictly increasing
    ys : array-like
        Row axis coordinates, strictly increasing

    Raises
    ------
    ConfigurationError
        If an axis is empty, non-finite or not strictly increasing.

    Examples
    --------
    >>> grid = Grid.regular(1, 50, 1, 50, step=1)
    >>> grid.shape
    (50, 50)
    """

    def __init__(self, xs, ys):
        self._xs = _validate_axis(xs, 'xs')
        self._ys = _validate_axis(ys, 'ys')

    @classmethod
    def regular(cls, x_min, x_max, y_min, y_max, step=1.0):
        """
        Evenly spaced grid with both bounds included.

        Parameters
        ----------
        x_min, x_max : float
            Column axis bounds
        y_min, y_max : float
            Row axis bounds
        step : float, optional
            Spacing on both axes (default: 1.0)

        Returns
        -------
        Grid
        """
        if step <= 0:
            raise ConfigurationError(f"Grid step must be positive, got {step}")
        if x_max < x_min or y_max < y_min:
            raise ConfigurationError("Grid upper bounds must not be below lower bounds")

        nx = int(np.floor((x_max - x_min) / step + 1e-9)) + 1
        ny = int(np.floor((y_max - y_min) / step + 1e-9)) + 1
        xs = x_min + step * np.arange(nx)
        ys = y_min + step * np.arange(ny)
        return cls(xs, ys)

    @property
    def xs(self):
        return self._xs

    @property
    def ys(self):
        return self._ys

    @property
    def shape(self):
        return (len(self._ys), len(self._xs))

    @property
    def size(self):
        return len(self._ys) * len(self._xs)

    def row_points(self, i):
        """ndarray of shape (len(xs), 2): query points of row ``i``."""
        return np.column_stack((self._xs, np.full(len(self._xs), self._ys[i])))

    def mesh(self):
        """(X, Y) meshgrid arrays, each of shape ``self.shape``."""
        return np.meshgrid(self._xs, self._ys)

    def points(self):
        """ndarray of shape (size, 2): every query point in row-major order."""
        X, Y = self.mesh()
        return np.column_stack((X.ravel(), Y.ravel()))

    def nearest_index(self, x, y):
        """
        Grid index (i, j) of the cell closest to (x, y).

        Ties go to the lower index.
        """
        j = int(np.argmin(np.abs(self._xs - x)))
        i = int(np.argmin(np.abs(self._ys - y)))
        return i, j

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (np.array_equal(self._xs, other._xs)
                and np.array_equal(self._ys, other._ys))

    def __hash__(self):
        return hash((self._xs.tobytes(), self._ys.tobytes()))

    def __repr__(self):
        return (
            f"Grid(x=[{self._xs[0]:g}..{self._xs[-1]:g}], "
            f"y=[{self._ys[0]:g}..{self._ys[-1]:g}], shape={self.shape})"
        )


class GridSurface:
    """
    Read-only grid-shaped array bound to the axes of its Grid.

    Parameters
    ----------
    grid : Grid
        Evaluation grid the values belong to
    values : array-like of shape grid.shape
        Surface values
    """

    kind = 'surface'

    def __init__(self, grid, values):
        values = np.array(values, dtype=float)
        if values.shape != grid.shape:
            raise InvalidSurfaceError(
                f"Surface shape {values.shape} does not match grid shape {grid.shape}"
            )
        self._check(values)
        values.setflags(write=False)
        self._grid = grid
        self._values = values

    def _check(self, values):
        pass

    @property
    def grid(self):
        return self._grid

    @property
    def values(self):
        return self._values

    @property
    def shape(self):
        return self._values.shape

    def as_tuple(self):
        """
        Export as the (rows, cols, values) contract.

        Returns
        -------
        tuple of ndarray
            ``rows`` is the ys axis, ``cols`` the xs axis and ``values`` has
            shape (len(rows), len(cols)).
        """
        return self._grid.ys, self._grid.xs, self._values

    def value_at(self, x, y):
        """Value of the grid cell nearest to (x, y)."""
        i, j = self._grid.nearest_index(x, y)
        return float(self._values[i, j])

    def to_dataframe(self):
        """
        Long-form table with one row per grid cell.

        Returns
        -------
        pd.DataFrame
            Columns ``x``, ``y`` and the surface kind.
        """
        X, Y = self._grid.mesh()
        return pd.DataFrame({
            'x': X.ravel(),
            'y': Y.ravel(),
            self.kind: self._values.ravel()
        })

    def __repr__(self):
        return (
            f"{type(self).__name__}(shape={self.shape}, "
            f"range=[{np.nanmin(self._values):.3f}, {np.nanmax(self._values):.3f}])"
        )


class PredictionSurface(GridSurface):
    """Predicted values on a Grid."""

    kind = 'prediction'


class VarianceSurface(GridSurface):
    """Non-negative kriging variance on a Grid."""

    kind = 'variance'

    def _check(self, values):
        if np.any(values < 0):
            raise InvalidSurfaceError("Variance surface values must be non-negative")

    @property
    def standard_deviation(self):
        return np.sqrt(self._values)
