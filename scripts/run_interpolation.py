#!/usr/bin/env python
"""
Water-Table Interpolation Runner

Interpolates the configured monitoring wells onto the configured grid with
every method and saves the surfaces for the plotting/reporting layer.

Steps:
    1. Load configuration and wells
    2. Empirical variogram check of the configured model
    3. IDW, degree-1 and degree-2 polynomial, ordinary kriging surfaces
    4. Leave-one-out cross-validation of every method
    5. Save surfaces to .npz

Usage:
    python run_interpolation.py --config config/interpolation.yaml
    python run_interpolation.py --config config/interpolation.yaml --output-dir ./data/results/
    python run_interpolation.py --config config/interpolation.yaml --n-jobs -1
"""

import argparse
import sys
import time
from pathlib import Path

import numpy as np

from watertable.data_processing import samples_from_records
from watertable.evaluation import leave_one_out, surface_agreement
from watertable.exceptions import InterpolationError
from watertable.pipeline import build_interpolators, interpolate_all
from watertable.utils.config import load_config
from watertable.variogram import EmpiricalVariogram


def check_variogram(samples, config):
    """Print the empirical variogram next to the configured model."""
    variogram = EmpiricalVariogram(n_bins=config.variogram.n_bins,
                                   max_lag=config.variogram.max_lag)
    comparison = variogram.compare_model(samples, config.variogram.build_model())

    print(f"Variogram model: {config.variogram.kind} {config.variogram.parameters}")
    print(comparison.to_string(index=False, float_format=lambda v: f"{v:.4f}"))


def cross_validate(samples, config):
    """Leave-one-out RMSE of every configured method."""
    for key, interpolator in build_interpolators(config).items():
        _, metrics = leave_one_out(samples, interpolator)
        if metrics:
            print(f"  {key:<14} RMSE: {metrics['rmse']:.4f}  "
                  f"MAE: {metrics['mae']:.4f}  folds: {metrics['n']}")
        else:
            print(f"  {key:<14} not enough samples for any fold")


def main(args):
    """Run the interpolation pipeline."""
    print(f"\n{'#'*70}")
    print("# WATER-TABLE INTERPOLATION")
    print(f"{'#'*70}\n")

    config = load_config(args.config)
    if args.n_jobs is not None:
        config.n_jobs = args.n_jobs

    samples = samples_from_records(config.wells)
    grid = config.grid.to_grid()
    print(f"Wells: {len(samples)}  {samples!r}")
    print(f"Grid: {grid!r}")

    print(f"\n{'='*70}\nSTEP: Empirical variogram check\n{'='*70}")
    try:
        check_variogram(samples, config)
    except InterpolationError as e:
        print(f"✗ Variogram check skipped: {e}")

    print(f"\n{'='*70}\nSTEP: Interpolation\n{'='*70}")
    start_time = time.time()
    try:
        surfaces = interpolate_all(samples, grid, config, verbose=args.verbose)
    except InterpolationError as e:
        print(f"\n✗ Interpolation failed: {e}")
        return 1
    print(f"\n✓ All surfaces computed in {time.time() - start_time:.1f}s")

    predictions = {k: v for k, v in surfaces.items() if k != 'kriging_variance'}
    agreement = surface_agreement(predictions, samples)
    print("\nSurface values at the cells nearest each well:")
    print(agreement.to_string(index=False, float_format=lambda v: f"{v:.3f}"))

    if not args.skip_validation:
        print(f"\n{'='*70}\nSTEP: Leave-one-out cross-validation\n{'='*70}")
        cross_validate(samples, config)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / 'water_table_surfaces.npz'

    save_dict = {'xs': grid.xs, 'ys': grid.ys}
    for key, surface in surfaces.items():
        save_dict[key] = surface.values
    np.savez(output_file, **save_dict)
    print(f"\n✓ Surfaces saved to {output_file}")

    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description='Interpolate water-table elevation from monitoring wells',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with the bundled six-well configuration
  python run_interpolation.py --config config/interpolation.yaml

  # Use all cores for the grid evaluation
  python run_interpolation.py --n-jobs -1
        """
    )

    parser.add_argument('--config', type=str, default='config/interpolation.yaml',
                       help='Path to configuration file')
    parser.add_argument('--output-dir', type=str, default='./data/results/',
                       help='Output directory for the surface archive')
    parser.add_argument('--n-jobs', type=int, default=None,
                       help='Override the number of parallel workers')
    parser.add_argument('--skip-validation', action='store_true',
                       help='Skip leave-one-out cross-validation')
    parser.add_argument('--verbose', action='store_true',
                       help='Print per-method progress')

    args = parser.parse_args()

    exit_code = main(args)
    sys.exit(exit_code)
