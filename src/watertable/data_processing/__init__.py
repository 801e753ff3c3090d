"""Sample containers, evaluation grids and well-table adapters."""

from .samples import Point2D, Sample, SampleSet
from .grid import Grid, GridSurface, PredictionSurface, VarianceSurface
from .loader import (
    water_table_elevation,
    samples_from_dataframe,
    samples_from_records,
    load_wells
)

__all__ = [
    'Point2D',
    'Sample',
    'SampleSet',
    'Grid',
    'GridSurface',
    'PredictionSurface',
    'VarianceSurface',
    'water_table_elevation',
    'samples_from_dataframe',
    'samples_from_records',
    'load_wells'
]
