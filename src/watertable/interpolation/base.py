from abc import ABC, abstractmethod

import numpy as np
from joblib import Parallel, delayed
from tqdm import tqdm


class Interpolator(ABC):
    """
    Abstract base class for surface interpolators.

    Interpolators hold configuration only. Every call receives its own
    SampleSet and Grid and returns freshly allocated surfaces.

    Parameters
    ----------
    verbose : bool, optional
        Print progress information (default: False)
    """

    name = None

    def __init__(self, verbose=False):
        self.verbose = verbose

    @abstractmethod
    def predict_points(self, samples, x, y):
        """
        Evaluate the interpolator at arbitrary query points.

        Parameters
        ----------
        samples : SampleSet
            Control points
        x, y : array-like
            Query point coordinates (same length)

        Returns
        -------
        ndarray
            Predicted value per query point
        """
        pass


class RowParallelInterpolator(Interpolator):
    """
    Interpolator whose grid rows are evaluated independently with joblib.

    Parameters
    ----------
    n_jobs : int, optional
        Number of joblib workers used to evaluate grid rows (default: 1).
        Use -1 for all cores.
    verbose : bool, optional
        Print progress information (default: False)
    """

    def __init__(self, n_jobs=1, verbose=False):
        super().__init__(verbose=verbose)
        self.n_jobs = n_jobs

    def _map_rows(self, row_function, grid, *args):
        """
        Evaluate ``row_function(points, *args)`` for every grid row.

        Results are returned in row order regardless of completion order.

        Parameters
        ----------
        row_function : callable
            Module-level function taking an ndarray of shape (len(xs), 2)
            followed by ``args``
        grid : Grid
            Evaluation grid

        Returns
        -------
        list
            One result per row of ``grid``
        """
        rows = range(grid.shape[0])

        if self.verbose:
            print(f"{type(self).__name__}: evaluating {grid.size} grid points "
                  f"({grid.shape[0]} rows, n_jobs={self.n_jobs})...")
            rows = tqdm(rows)

        return Parallel(n_jobs=self.n_jobs)(
            delayed(row_function)(grid.row_points(i), *args)
            for i in rows
        )


def as_query_points(x, y):
    """Stack x and y query coordinates into an (m, 2) array."""
    x = np.atleast_1d(np.asarray(x, dtype=float)).ravel()
    y = np.atleast_1d(np.asarray(y, dtype=float)).ravel()
    if x.shape != y.shape:
        raise ValueError(f"Query coordinate mismatch: {x.shape} vs {y.shape}")
    return np.column_stack((x, y))
