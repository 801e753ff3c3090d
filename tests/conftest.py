import sys
from pathlib import Path

import pytest

# Add src directory to path so the suite runs without installation
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from watertable.data_processing import Grid, SampleSet
from watertable.variogram import PowerModel


# Six monitoring wells in a 50 x 50 domain, z = TOC - depth to water.
# Values follow a gentle plane plus a few centimetres of local variation.
SIX_WELLS = [
    ('MW-1', 5.0, 8.0, 100.23),
    ('MW-2', 12.0, 40.0, 98.38),
    ('MW-3', 25.0, 22.0, 102.84),
    ('MW-4', 38.0, 45.0, 103.07),
    ('MW-5', 44.0, 10.0, 107.81),
    ('MW-6', 30.0, 3.0, 105.67),
]


@pytest.fixture
def six_wells():
    names, x, y, z = zip(*SIX_WELLS)
    return SampleSet.from_arrays(x, y, z, names=list(names))


@pytest.fixture
def grid_50():
    return Grid.regular(1, 50, 1, 50, step=1)


@pytest.fixture
def small_grid():
    return Grid([0.0, 2.5, 5.0, 10.0], [0.0, 4.0, 8.0])


@pytest.fixture
def power_model():
    return PowerModel(scale=0.05, exponent=1.5, nugget=0.0)
