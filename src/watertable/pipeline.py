"""Run every interpolation method over one sample set and grid."""

import time

from .interpolation import (
    DistanceWeightedInterpolator,
    KrigingInterpolator,
    PolynomialSurfaceFitter
)
from .utils.config import InterpolationConfig


def build_interpolators(config, verbose=False):
    """
    Instantiate the configured interpolators.

    Parameters
    ----------
    config : InterpolationConfig
        Run configuration
    verbose : bool, optional
        Passed to every interpolator (default: False)

    Returns
    -------
    dict
        ``'idw'``, ``'polynomial_<degree>'`` for each configured degree, and
        ``'kriging'``
    """
    interpolators = {
        'idw': DistanceWeightedInterpolator(
            power=config.idw.power,
            epsilon=config.idw.epsilon,
            n_jobs=config.n_jobs,
            verbose=verbose
        )
    }
    for degree in config.polynomial.degrees:
        interpolators[f'polynomial_{degree}'] = PolynomialSurfaceFitter(
            degree=degree, verbose=verbose
        )
    interpolators['kriging'] = KrigingInterpolator(
        model=config.variogram.build_model(),
        n_jobs=config.n_jobs,
        verbose=verbose
    )
    return interpolators


def interpolate_all(samples, grid, config=None, verbose=False):
    """
    Interpolate the samples onto the grid with every configured method.

    Methods are independent; an error in any of them propagates to the
    caller.

    Parameters
    ----------
    samples : SampleSet
        Control points
    grid : Grid
        Evaluation grid
    config : InterpolationConfig, optional
        Run configuration (default: built-in defaults)
    verbose : bool, optional
        Print progress information (default: False)

    Returns
    -------
    dict
        Prediction surfaces keyed ``'idw'``, ``'polynomial_1'``,
        ``'polynomial_2'``, ``'kriging'``, plus the ``'kriging_variance'``
        VarianceSurface

    Examples
    --------
    >>> surfaces = interpolate_all(samples, Grid.regular(1, 50, 1, 50))
    >>> surfaces['kriging'].shape
    (50, 50)
    """
    config = config or InterpolationConfig()
    surfaces = {}

    for key, interpolator in build_interpolators(config, verbose=verbose).items():
        if verbose:
            print(f"\n{key}: {interpolator!r}")
        start = time.time()

        if key == 'kriging':
            surfaces['kriging'], surfaces['kriging_variance'] = interpolator.predict(
                samples, grid
            )
        else:
            surfaces[key] = interpolator.predict(samples, grid)

        if verbose:
            print(f"  ✓ {key} done in {time.time() - start:.2f}s")

    return surfaces
