"""Binned experimental semivariogram."""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from ..exceptions import ConfigurationError, DegenerateInputError
from ..utils.coordinates import condensed_pairwise_distances

DEFAULT_N_BINS = 6


@dataclass(frozen=True)
class EmpiricalVariogramBin:
    """
    Pair statistics of one distance bin.

    ``lag`` and ``semivariance`` are None when the bin holds no pairs.
    """

    lower: float
    upper: float
    lag: Optional[float]
    semivariance: Optional[float]
    n_pairs: int

    @property
    def is_empty(self):
        return self.n_pairs == 0


def pairwise_semivariances(samples):
    """
    Separation distance and half squared difference of every sample pair.

    Implements the Matheron estimator terms:
        gamma_ij = 0.5 * (z_i - z_j)^2

    Parameters
    ----------
    samples : SampleSet
        Control points

    Returns
    -------
    distances : ndarray of shape (n_pairs,)
    half_sq_diff : ndarray of shape (n_pairs,)
        Both ordered like ``scipy.spatial.distance.pdist`` (pairs ``i < j``).
    """
    distances = condensed_pairwise_distances(samples.coordinates)
    i, j = np.triu_indices(len(samples), k=1)
    values = samples.values
    half_sq_diff = 0.5 * (values[i] - values[j]) ** 2
    return distances, half_sq_diff


def compute_empirical_variogram(samples, n_bins=DEFAULT_N_BINS, max_lag=None):
    """
    Compute the binned empirical semivariogram.

    Pairs are split into ``n_bins`` equal-width bins spanning the observed
    separation range ``[d_min, d_max]`` (or ``[d_min, max_lag]``). Each bin
    is half-open except the last, which includes its upper edge.

    Parameters
    ----------
    samples : SampleSet
        Control points; at least two are required
    n_bins : int, optional
        Number of distance bins (default: 6)
    max_lag : float, optional
        Ignore pairs farther apart than this (default: None, no limit)

    Returns
    -------
    tuple of EmpiricalVariogramBin
        One entry per bin, in increasing distance order

    Raises
    ------
    DegenerateInputError
        If fewer than two samples (or no pairs within ``max_lag``) are given.
    ConfigurationError
        If ``n_bins < 1`` or ``max_lag`` is not positive.

    Examples
    --------
    >>> samples = SampleSet.from_arrays([0, 1, 3], [0, 0, 0], [1.0, 2.0, 4.0])
    >>> bins = compute_empirical_variogram(samples, n_bins=2)
    >>> [b.n_pairs for b in bins]
    [1, 2]
    """
    if int(n_bins) != n_bins or n_bins < 1:
        raise ConfigurationError(f"n_bins must be a positive integer, got {n_bins}")
    n_bins = int(n_bins)
    if len(samples) < 2:
        raise DegenerateInputError("Empirical variogram requires at least two samples")
    if max_lag is not None and max_lag <= 0:
        raise ConfigurationError(f"max_lag must be positive, got {max_lag}")

    distances, half_sq_diff = pairwise_semivariances(samples)

    if max_lag is not None:
        keep = distances <= max_lag
        distances = distances[keep]
        half_sq_diff = half_sq_diff[keep]
        if distances.size == 0:
            raise DegenerateInputError(f"No sample pairs within max_lag={max_lag}")

    d_min = float(distances.min())
    d_max = float(max_lag) if max_lag is not None else float(distances.max())
    edges = np.linspace(d_min, d_max, n_bins + 1)

    # Interior edges only: values at or past the last interior edge fall in
    # the closed final bin
    if d_max > d_min and n_bins > 1:
        bin_index = np.digitize(distances, edges[1:-1], right=False)
    else:
        bin_index = np.zeros(distances.size, dtype=int)

    bins = []
    for k in range(n_bins):
        in_bin = bin_index == k
        n_pairs = int(np.sum(in_bin))
        if n_pairs == 0:
            lag = None
            gamma = None
        else:
            lag = float(np.mean(distances[in_bin]))
            gamma = float(np.mean(half_sq_diff[in_bin]))
        bins.append(EmpiricalVariogramBin(
            lower=float(edges[k]),
            upper=float(edges[k + 1]),
            lag=lag,
            semivariance=gamma,
            n_pairs=n_pairs
        ))

    return tuple(bins)


class EmpiricalVariogram:
    """
    Diagnostic semivariogram used to check a hand-picked model against data.

    Parameters
    ----------
    n_bins : int, optional
        Number of equal-width distance bins (default: 6)
    max_lag : float, optional
        Maximum pair separation considered (default: None)
    """

    def __init__(self, n_bins=DEFAULT_N_BINS, max_lag=None):
        if int(n_bins) != n_bins or n_bins < 1:
            raise ConfigurationError(f"n_bins must be a positive integer, got {n_bins}")
        self.n_bins = int(n_bins)
        self.max_lag = max_lag

    def compute(self, samples, n_bins=None):
        """Bin the sample pairs; see ``compute_empirical_variogram``."""
        return compute_empirical_variogram(
            samples,
            n_bins=self.n_bins if n_bins is None else n_bins,
            max_lag=self.max_lag
        )

    def to_dataframe(self, samples):
        """
        Empirical variogram as a table for plotting collaborators.

        Empty bins keep their row with ``lag`` and ``semivariance`` missing.

        Returns
        -------
        pd.DataFrame
            Columns ``lower``, ``upper``, ``lag``, ``semivariance``, ``n_pairs``
        """
        bins = self.compute(samples)
        return pd.DataFrame(
            [(b.lower, b.upper, b.lag, b.semivariance, b.n_pairs) for b in bins],
            columns=['lower', 'upper', 'lag', 'semivariance', 'n_pairs']
        )

    def compare_model(self, samples, model):
        """
        Model semivariance versus empirical semivariance at each bin lag.

        Parameters
        ----------
        samples : SampleSet
            Control points
        model : VariogramModel
            Candidate model with fixed parameters

        Returns
        -------
        pd.DataFrame
            One row per non-empty bin with columns ``lag``, ``empirical``,
            ``model``, ``residual`` (model minus empirical) and ``n_pairs``
        """
        rows = []
        for b in self.compute(samples):
            if b.is_empty:
                continue
            modelled = float(model.semivariance(b.lag))
            rows.append((b.lag, b.semivariance, modelled,
                         modelled - b.semivariance, b.n_pairs))
        return pd.DataFrame(
            rows, columns=['lag', 'empirical', 'model', 'residual', 'n_pairs']
        )
