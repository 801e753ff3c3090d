"""
Metrics for evaluating interpolated surfaces against control points.
"""

import numpy as np
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score


def residual_sum_of_squares(observed, predicted):
    """Sum of squared differences between observed and predicted values."""
    observed = np.asarray(observed, dtype=float)
    predicted = np.asarray(predicted, dtype=float)
    return float(np.sum((observed - predicted) ** 2))


def compute_fit_metrics(observed, predicted):
    """
    Compute error statistics of predictions at control points.

    Parameters
    ----------
    observed : array-like
        Measured values
    predicted : array-like
        Interpolated values at the same locations

    Returns
    -------
    dict
        Dictionary containing:
        - 'n': Number of points
        - 'rss': Residual sum of squares
        - 'rmse': Root mean squared error
        - 'mae': Mean absolute error
        - 'bias': Mean of predicted minus observed
        - 'r2': Coefficient of determination (NaN with fewer than 2 points)

    Examples
    --------
    >>> metrics = compute_fit_metrics([1.0, 2.0, 3.0], [1.0, 2.0, 3.0])
    >>> metrics['rmse']
    0.0
    """
    observed = np.asarray(observed, dtype=float)
    predicted = np.asarray(predicted, dtype=float)

    if observed.shape != predicted.shape:
        raise ValueError(
            f"Observed shape {observed.shape} does not match predicted shape {predicted.shape}"
        )

    metrics = {
        'n': int(observed.size),
        'rss': residual_sum_of_squares(observed, predicted),
        'rmse': float(np.sqrt(mean_squared_error(observed, predicted))),
        'mae': float(mean_absolute_error(observed, predicted)),
        'bias': float(np.mean(predicted - observed)),
        'r2': np.nan
    }

    if observed.size >= 2:
        metrics['r2'] = float(r2_score(observed, predicted))

    return metrics
