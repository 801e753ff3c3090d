"""Cross-validation and cross-method comparison of interpolators."""

import numpy as np
import pandas as pd
from sklearn.model_selection import LeaveOneOut

from .metrics import compute_fit_metrics
from ..exceptions import InterpolationError


def leave_one_out(samples, interpolator, verbose=False):
    """
    Leave-one-out cross-validation of an interpolator.

    Each sample is withheld in turn, the interpolator is run on the remaining
    samples, and the withheld location is predicted.

    Parameters
    ----------
    samples : SampleSet
        Control points; at least two are required
    interpolator : Interpolator
        Any interpolator exposing ``predict_points(samples, x, y)``
    verbose : bool, optional
        Print the summary metrics (default: False)

    Returns
    -------
    predictions : pd.DataFrame
        One row per sample with columns ``name``, ``x``, ``y``,
        ``observed``, ``predicted`` and ``error`` (predicted minus observed).
        ``predicted`` is NaN where the reduced sample set cannot support the
        method (e.g. too few samples for a quadratic fit).
    metrics : dict
        ``compute_fit_metrics`` over the folds that produced a prediction.

    Raises
    ------
    ValueError
        If fewer than two samples are given.
    """
    if len(samples) < 2:
        raise ValueError("Leave-one-out validation requires at least two samples")

    coords = samples.coordinates
    observed = samples.values
    predicted = np.full(len(samples), np.nan)

    for train_index, test_index in LeaveOneOut().split(coords):
        k = int(test_index[0])
        training = samples.subset(train_index)
        try:
            predicted[k] = interpolator.predict_points(
                training, coords[k:k + 1, 0], coords[k:k + 1, 1]
            )[0]
        except InterpolationError as e:
            if verbose:
                print(f"  Fold {k} skipped: {e}")

    table = pd.DataFrame({
        'name': samples.names,
        'x': coords[:, 0],
        'y': coords[:, 1],
        'observed': observed,
        'predicted': predicted,
        'error': predicted - observed
    })

    valid = ~np.isnan(predicted)
    metrics = compute_fit_metrics(observed[valid], predicted[valid]) if valid.any() else {}

    if verbose:
        print(f"Leave-one-out ({type(interpolator).__name__}): "
              f"{int(valid.sum())}/{len(samples)} folds")
        if metrics:
            print(f"  RMSE: {metrics['rmse']:.4f}, MAE: {metrics['mae']:.4f}, "
                  f"bias: {metrics['bias']:.4f}")

    return table, metrics


def surface_agreement(surfaces, samples):
    """
    Value of every surface at the grid cell nearest to each sample.

    Parameters
    ----------
    surfaces : dict of str -> GridSurface
        Surfaces to compare, e.g. the output of ``interpolate_all``
        restricted to prediction surfaces
    samples : SampleSet
        Control points

    Returns
    -------
    pd.DataFrame
        One row per sample with its name, coordinates, observed value, one
        column per surface, and ``spread`` (max minus min across surfaces)
    """
    rows = []
    for sample in samples:
        row = {
            'name': sample.name,
            'x': sample.x,
            'y': sample.y,
            'observed': sample.z
        }
        for key, surface in surfaces.items():
            row[key] = surface.value_at(sample.x, sample.y)
        rows.append(row)

    table = pd.DataFrame(rows)
    keys = list(surfaces)
    table['spread'] = table[keys].max(axis=1) - table[keys].min(axis=1)
    return table
