import numpy as np
import pytest

from watertable.data_processing import SampleSet
from watertable.exceptions import (
    ConfigurationError,
    DegenerateInputError,
    InvalidModelParameterError
)
from watertable.variogram import (
    EmpiricalVariogram,
    ExponentialModel,
    GaussianModel,
    LinearModel,
    PowerModel,
    SphericalModel,
    build_variogram_model,
    compute_empirical_variogram,
    pairwise_semivariances
)


class TestPowerModel:

    def test_semivariance_values(self):
        model = PowerModel(scale=0.5, exponent=1.5, nugget=0.2)
        gamma = model.semivariance(np.array([0.0, 1.0, 4.0]))
        np.testing.assert_allclose(gamma, [0.0, 0.7, 0.2 + 0.5 * 8.0])

    def test_zero_distance_is_zero_even_with_nugget(self):
        assert PowerModel(scale=1.0, exponent=1.0, nugget=3.0).semivariance(0.0) == 0.0

    def test_scalar_in_scalar_out(self):
        value = PowerModel(scale=2.0, exponent=1.0).semivariance(3.0)
        assert isinstance(value, float)
        assert value == 6.0

    def test_unbounded_uses_sample_variance(self):
        model = PowerModel(scale=1.0, exponent=1.0)
        assert model.sill is None
        assert model.reference_sill([1.0, 2.0, 3.0]) == pytest.approx(2.0 / 3.0)
        assert model.reference_sill([5.0, 5.0]) == 1.0

    def test_covariance(self):
        model = PowerModel(scale=1.0, exponent=1.0)
        np.testing.assert_allclose(model.covariance(np.array([0.0, 2.0]), 10.0),
                                   [10.0, 8.0])

    @pytest.mark.parametrize('params', [
        {'scale': 1.0, 'exponent': 0.0},
        {'scale': 1.0, 'exponent': -0.5},
        {'scale': 1.0, 'exponent': 2.0},
        {'scale': 0.0, 'exponent': 1.0},
        {'scale': 1.0, 'exponent': 1.0, 'nugget': -0.1},
        {'scale': np.nan, 'exponent': 1.0},
    ])
    def test_invalid_parameters(self, params):
        with pytest.raises(InvalidModelParameterError):
            PowerModel(**params)

    def test_immutable(self):
        model = PowerModel(scale=1.0, exponent=1.0)
        with pytest.raises(AttributeError):
            model.scale = 2.0


class TestOtherModels:

    def test_bounded_models_reach_sill(self):
        for cls in (SphericalModel, ExponentialModel, GaussianModel):
            model = cls(psill=2.0, range=10.0, nugget=0.5)
            assert model.sill == 2.5
            assert model.reference_sill([0.0, 100.0]) == 2.5
            assert model.semivariance(1e6) == pytest.approx(2.5)

    def test_spherical_flat_beyond_range(self):
        model = SphericalModel(psill=1.0, range=10.0)
        assert model.semivariance(10.0) == pytest.approx(1.0)
        assert model.semivariance(25.0) == pytest.approx(1.0)
        assert model.semivariance(5.0) == pytest.approx(1.5 * 0.5 - 0.5 * 0.125)

    def test_linear_equals_power_with_unit_exponent(self):
        d = np.linspace(0, 20, 11)
        np.testing.assert_allclose(
            LinearModel(slope=0.3, nugget=0.1).semivariance(d),
            PowerModel(scale=0.3, exponent=1.0, nugget=0.1).semivariance(d)
        )

    def test_bounded_invalid_range(self):
        with pytest.raises(InvalidModelParameterError):
            ExponentialModel(psill=1.0, range=0.0)


class TestFactory:

    def test_build_power_model(self):
        model = build_variogram_model('power', scale=0.05, exponent=1.5)
        assert model == PowerModel(scale=0.05, exponent=1.5, nugget=0.0)
        assert model.parameters() == {
            'kind': 'power', 'scale': 0.05, 'exponent': 1.5, 'nugget': 0.0
        }

    def test_parameters_round_trip(self):
        model = SphericalModel(psill=1.0, range=20.0, nugget=0.1)
        assert build_variogram_model(**model.parameters()) == model

    def test_unknown_kind(self):
        with pytest.raises(InvalidModelParameterError):
            build_variogram_model('cubic', psill=1.0, range=1.0)

    def test_wrong_parameter_names(self):
        with pytest.raises(InvalidModelParameterError):
            build_variogram_model('power', slope=1.0)


class TestEmpiricalVariogram:

    def test_pairwise_terms(self):
        samples = SampleSet.from_arrays([0, 3, 0], [0, 4, 1], [1.0, 3.0, 2.0])
        distances, half_sq = pairwise_semivariances(samples)

        # pairs (0,1), (0,2), (1,2)
        np.testing.assert_allclose(distances, [5.0, 1.0, np.hypot(3, 3)])
        np.testing.assert_allclose(half_sq, [2.0, 0.5, 0.5])

    def test_bins_cover_all_pairs(self, six_wells):
        bins = compute_empirical_variogram(six_wells, n_bins=4)

        assert len(bins) == 4
        assert sum(b.n_pairs for b in bins) == 15
        for lower, upper in zip(bins[:-1], bins[1:]):
            assert lower.upper == pytest.approx(upper.lower)

    def test_bin_means(self):
        samples = SampleSet.from_arrays([0, 1, 3], [0, 0, 0], [1.0, 2.0, 4.0])
        bins = compute_empirical_variogram(samples, n_bins=2)

        # d = 1 -> bin 0; d = 2 and d = 3 -> bin 1 (last bin is closed)
        assert [b.n_pairs for b in bins] == [1, 2]
        assert bins[0].lag == pytest.approx(1.0)
        assert bins[0].semivariance == pytest.approx(0.5)
        assert bins[1].lag == pytest.approx(2.5)
        assert bins[1].semivariance == pytest.approx((2.0 + 4.5) / 2)

    def test_empty_bins_are_flagged(self):
        samples = SampleSet.from_arrays([0, 1, 10], [0, 0, 0], [1.0, 2.0, 4.0])
        bins = compute_empirical_variogram(samples, n_bins=5)

        empty = [b for b in bins if b.is_empty]
        assert empty
        for b in empty:
            assert b.lag is None and b.semivariance is None
        assert not any(np.isnan(b.semivariance) for b in bins if not b.is_empty)

    def test_identical_distances_single_bin(self):
        samples = SampleSet.from_arrays([0, 1], [0, 0], [1.0, 3.0])
        bins = compute_empirical_variogram(samples, n_bins=3)
        assert bins[0].n_pairs == 1
        assert bins[0].semivariance == pytest.approx(2.0)

    def test_max_lag(self, six_wells):
        bins = compute_empirical_variogram(six_wells, n_bins=3, max_lag=25.0)
        assert bins[-1].upper == 25.0
        assert sum(b.n_pairs for b in bins) < 15

    def test_requires_two_samples(self):
        with pytest.raises(DegenerateInputError):
            compute_empirical_variogram(SampleSet.from_arrays([0], [0], [1.0]))

    @pytest.mark.parametrize('n_bins', [0, -2, 2.5])
    def test_invalid_bin_count(self, six_wells, n_bins):
        with pytest.raises(ConfigurationError):
            compute_empirical_variogram(six_wells, n_bins=n_bins)

    def test_dataframe_export(self, six_wells):
        df = EmpiricalVariogram(n_bins=4).to_dataframe(six_wells)
        assert list(df.columns) == ['lower', 'upper', 'lag', 'semivariance', 'n_pairs']
        assert df['n_pairs'].sum() == 15

    def test_compare_model(self, six_wells, power_model):
        comparison = EmpiricalVariogram(n_bins=4).compare_model(six_wells, power_model)
        assert list(comparison.columns) == ['lag', 'empirical', 'model', 'residual', 'n_pairs']
        np.testing.assert_allclose(
            comparison['residual'], comparison['model'] - comparison['empirical']
        )


def test_bin_membership_matches_reported_edges():
    # Pair distances 1, 2, 4, 1, 3, 2: the 2s sit exactly on an interior edge
    samples = SampleSet.from_arrays([0, 1, 2, 4], [0, 0, 0, 0], [1.0, 2.0, 4.0, 3.0])
    bins = compute_empirical_variogram(samples, n_bins=3)

    assert [b.n_pairs for b in bins] == [2, 2, 2]
    assert bins[1].lower == 2.0 and bins[1].lag == pytest.approx(2.0)


def test_pair_counts_agree_with_edges(six_wells):
    distances, _ = pairwise_semivariances(six_wells)
    bins = compute_empirical_variogram(six_wells, n_bins=5)

    for b in bins[:-1]:
        assert b.n_pairs == np.sum((distances >= b.lower) & (distances < b.upper))
    last = bins[-1]
    assert last.n_pairs == np.sum((distances >= last.lower) & (distances <= last.upper))
