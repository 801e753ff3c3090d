"""Evaluation of interpolated surfaces against control points."""

from .metrics import residual_sum_of_squares, compute_fit_metrics
from .validation import leave_one_out, surface_agreement

__all__ = [
    'residual_sum_of_squares',
    'compute_fit_metrics',
    'leave_one_out',
    'surface_agreement'
]
