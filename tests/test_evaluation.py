import numpy as np
import pytest

from watertable.evaluation import (
    compute_fit_metrics,
    leave_one_out,
    residual_sum_of_squares,
    surface_agreement
)
from watertable.interpolation import (
    DistanceWeightedInterpolator,
    KrigingInterpolator,
    PolynomialSurfaceFitter
)


def test_residual_sum_of_squares():
    assert residual_sum_of_squares([1.0, 2.0, 3.0], [1.0, 3.0, 1.0]) == 5.0


def test_fit_metrics():
    metrics = compute_fit_metrics([1.0, 2.0, 3.0, 4.0], [1.5, 2.0, 2.5, 4.0])

    assert metrics['n'] == 4
    assert metrics['rss'] == pytest.approx(0.5)
    assert metrics['rmse'] == pytest.approx(np.sqrt(0.125))
    assert metrics['mae'] == pytest.approx(0.25)
    assert metrics['bias'] == pytest.approx(0.0)
    assert metrics['r2'] == pytest.approx(1.0 - 0.5 / 5.0)


def test_fit_metrics_single_point_has_no_r2():
    metrics = compute_fit_metrics([1.0], [2.0])
    assert np.isnan(metrics['r2'])
    assert metrics['rmse'] == pytest.approx(1.0)


def test_fit_metrics_shape_mismatch():
    with pytest.raises(ValueError):
        compute_fit_metrics([1.0, 2.0], [1.0])


def test_leave_one_out_idw(six_wells):
    table, metrics = leave_one_out(six_wells, DistanceWeightedInterpolator())

    assert list(table.columns) == ['name', 'x', 'y', 'observed', 'predicted', 'error']
    assert table['name'].tolist() == six_wells.names
    assert table['predicted'].notna().all()
    np.testing.assert_allclose(table['error'], table['predicted'] - table['observed'])
    assert metrics['n'] == 6
    # IDW predictions stay within the range of the remaining wells
    assert table['predicted'].between(six_wells.values.min(),
                                      six_wells.values.max()).all()


def test_leave_one_out_plane_on_planar_data(six_wells):
    _, metrics = leave_one_out(six_wells, PolynomialSurfaceFitter(degree=1))
    assert metrics['rmse'] < 0.5


def test_leave_one_out_kriging(six_wells, power_model):
    table, metrics = leave_one_out(six_wells, KrigingInterpolator(power_model))
    assert table['predicted'].notna().all()
    assert np.isfinite(metrics['rmse'])


def test_leave_one_out_records_unsupported_folds(six_wells):
    # Five remaining wells cannot determine six quadratic coefficients
    table, metrics = leave_one_out(six_wells, PolynomialSurfaceFitter(degree=2))

    assert table['predicted'].isna().all()
    assert metrics == {}


def test_leave_one_out_requires_two_samples(six_wells):
    with pytest.raises(ValueError):
        leave_one_out(six_wells.subset([0]), DistanceWeightedInterpolator())


def test_surface_agreement(six_wells, grid_50, power_model):
    surfaces = {
        'idw': DistanceWeightedInterpolator().predict(six_wells, grid_50),
        'kriging': KrigingInterpolator(power_model).predict(six_wells, grid_50)[0],
    }
    table = surface_agreement(surfaces, six_wells)

    assert list(table.columns) == ['name', 'x', 'y', 'observed', 'idw', 'kriging', 'spread']
    assert len(table) == 6
    # Both methods honour the wells, which sit on grid nodes
    np.testing.assert_allclose(table['idw'], table['observed'])
    np.testing.assert_allclose(table['kriging'], table['observed'], atol=1e-8)
    assert (table['spread'] < 1e-6).all()
