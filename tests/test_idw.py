import numpy as np
import pytest

from watertable.data_processing import Grid, SampleSet
from watertable.exceptions import ConfigurationError
from watertable.interpolation import DistanceWeightedInterpolator, idw_weights


def test_idw_weights_power_one():
    distances = np.array([1.0, 2.0, 4.0])
    weights = idw_weights(distances, power=1)

    raw = 1.0 / distances
    np.testing.assert_allclose(weights, raw / raw.sum(), rtol=1e-12)
    assert np.isclose(weights.sum(), 1.0)
    assert weights[0] > weights[1] > weights[2]


def test_idw_weights_rows_normalized():
    weights = idw_weights(np.array([[1.0, 3.0], [2.0, 2.0]]), power=2)
    np.testing.assert_allclose(weights.sum(axis=1), 1.0)
    np.testing.assert_allclose(weights[1], [0.5, 0.5])


def test_midpoint_of_two_samples():
    samples = SampleSet.from_arrays([0, 10], [0, 0], [10.0, 20.0])
    value = DistanceWeightedInterpolator().predict_points(samples, [5.0], [0.0])
    assert value[0] == pytest.approx(15.0)


def test_power_one_matches_closed_form():
    samples = SampleSet.from_arrays([0, 4], [0, 0], [0.0, 12.0])
    # d = 1 and 3: (0/1 + 12/3) / (1/1 + 1/3) = 3
    value = DistanceWeightedInterpolator(power=1).predict_points(samples, [1.0], [0.0])
    assert value[0] == pytest.approx(3.0)


def test_inverse_square_alternative():
    samples = SampleSet.from_arrays([0, 4], [0, 0], [0.0, 12.0])
    # (12/9) / (1 + 1/9) = 1.2
    value = DistanceWeightedInterpolator(power=2).predict_points(samples, [1.0], [0.0])
    assert value[0] == pytest.approx(1.2)


def test_surface_within_sample_range(six_wells, grid_50):
    surface = DistanceWeightedInterpolator().predict(six_wells, grid_50)

    assert surface.shape == (50, 50)
    assert np.all(surface.values >= six_wells.values.min() - 1e-9)
    assert np.all(surface.values <= six_wells.values.max() + 1e-9)


def test_exact_at_sample_locations(six_wells, grid_50):
    surface = DistanceWeightedInterpolator().predict(six_wells, grid_50)

    for sample in six_wells:
        assert surface.value_at(sample.x, sample.y) == sample.z


def test_near_coincident_substitution():
    samples = SampleSet.from_arrays([0, 10], [0, 0], [10.0, 20.0])
    idw = DistanceWeightedInterpolator(epsilon=1e-5)

    near = idw.predict_points(samples, [5e-6], [0.0])
    outside = idw.predict_points(samples, [1e-3], [0.0])

    assert near[0] == 10.0
    assert 10.0 < outside[0] < 20.0


def test_first_coincident_sample_wins():
    samples = SampleSet.from_arrays([3, 3, 8], [3, 3, 1], [1.0, 2.0, 5.0])
    grid = Grid([3.0, 4.0], [3.0])

    surface = DistanceWeightedInterpolator().predict(samples, grid)

    assert surface.values[0, 0] == 1.0


def test_rows_match_pointwise_evaluation(six_wells, small_grid):
    idw = DistanceWeightedInterpolator(power=1.5)
    surface = idw.predict(six_wells, small_grid)

    points = small_grid.points()
    pointwise = idw.predict_points(six_wells, points[:, 0], points[:, 1])
    np.testing.assert_allclose(surface.values.ravel(), pointwise)


def test_parallel_rows_match_serial(six_wells, small_grid):
    serial = DistanceWeightedInterpolator(n_jobs=1).predict(six_wells, small_grid)
    parallel = DistanceWeightedInterpolator(n_jobs=2).predict(six_wells, small_grid)
    np.testing.assert_allclose(serial.values, parallel.values)


def test_single_sample_is_constant(small_grid):
    samples = SampleSet.from_arrays([1.0], [1.0], [42.0])
    surface = DistanceWeightedInterpolator().predict(samples, small_grid)
    np.testing.assert_allclose(surface.values, 42.0)


@pytest.mark.parametrize('kwargs', [
    {'power': 0},
    {'power': -1.0},
    {'epsilon': -1e-6},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ConfigurationError):
        DistanceWeightedInterpolator(**kwargs)


def test_large_power_and_distances_stay_finite():
    samples = SampleSet.from_arrays([0, 1000], [0, 0], [10.0, 20.0])
    idw = DistanceWeightedInterpolator(power=120)

    value = idw.predict_points(samples, [400.0], [0.0])

    assert np.isfinite(value[0])
    assert value[0] == pytest.approx(10.0)


def test_weights_unchanged_by_distance_units():
    distances = np.array([[1.0, 2.0, 4.0]])
    np.testing.assert_allclose(idw_weights(distances, power=3),
                               idw_weights(distances * 1e6, power=3))
