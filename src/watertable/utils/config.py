"""
Run configuration loaded from YAML.

Example ``config/interpolation.yaml``::

    grid:
      x_min: 1
      x_max: 50
      y_min: 1
      y_max: 50
      step: 1
    idw:
      power: 1.0
      epsilon: 1.0e-5
    polynomial:
      degrees: [1, 2]
    variogram:
      kind: power
      parameters:
        scale: 0.05
        exponent: 1.5
        nugget: 0.0
      n_bins: 6
    parallel:
      n_jobs: 1
    wells:
      - {name: MW-1, x: 5, y: 8, top_of_casing: 120.0, depth_to_water: 19.77}
"""

from dataclasses import dataclass, field
from typing import Optional

import yaml

from ..data_processing.grid import Grid
from ..exceptions import ConfigurationError
from ..variogram.models import build_variogram_model


@dataclass
class GridConfig:
    x_min: float = 1.0
    x_max: float = 50.0
    y_min: float = 1.0
    y_max: float = 50.0
    step: float = 1.0

    def to_grid(self):
        return Grid.regular(self.x_min, self.x_max, self.y_min, self.y_max,
                            step=self.step)


@dataclass
class IDWConfig:
    power: float = 1.0
    epsilon: float = 1e-5


@dataclass
class PolynomialConfig:
    degrees: tuple = (1, 2)

    def __post_init__(self):
        self.degrees = tuple(int(d) for d in self.degrees)
        for degree in self.degrees:
            if degree not in (1, 2):
                raise ConfigurationError(
                    f"Polynomial degree must be 1 or 2, got {degree}"
                )


@dataclass
class VariogramConfig:
    """Variogram model choice; parameters are fixed by the user, not fitted."""

    kind: str = 'power'
    parameters: dict = field(default_factory=lambda: {
        'scale': 0.05, 'exponent': 1.5, 'nugget': 0.0
    })
    n_bins: int = 6
    max_lag: Optional[float] = None

    def build_model(self):
        return build_variogram_model(self.kind, **self.parameters)


@dataclass
class InterpolationConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    idw: IDWConfig = field(default_factory=IDWConfig)
    polynomial: PolynomialConfig = field(default_factory=PolynomialConfig)
    variogram: VariogramConfig = field(default_factory=VariogramConfig)
    n_jobs: int = 1
    wells: list = field(default_factory=list)


def _section(config, name, cls):
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping")
    try:
        return cls(**section)
    except TypeError as e:
        raise ConfigurationError(f"Invalid '{name}' section: {e}") from e


def config_from_dict(config):
    """
    Build an InterpolationConfig from a parsed YAML mapping.

    Missing sections and keys fall back to defaults. The variogram model is
    constructed once here so invalid parameters fail early.

    Parameters
    ----------
    config : dict
        Parsed configuration

    Returns
    -------
    InterpolationConfig

    Raises
    ------
    ConfigurationError
        On unknown keys or invalid values.
    InvalidModelParameterError
        On invalid variogram parameters.
    """
    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration root must be a mapping")

    variogram = _section(config, 'variogram', VariogramConfig)
    variogram.build_model()

    parallel = config.get('parallel') or {}
    wells = config.get('wells') or []
    if not isinstance(wells, list):
        raise ConfigurationError("'wells' must be a list")

    return InterpolationConfig(
        grid=_section(config, 'grid', GridConfig),
        idw=_section(config, 'idw', IDWConfig),
        polynomial=_section(config, 'polynomial', PolynomialConfig),
        variogram=variogram,
        n_jobs=int(parallel.get('n_jobs', 1)),
        wells=wells
    )


def load_config(config_path):
    """
    Load an InterpolationConfig from a YAML file.

    Parameters
    ----------
    config_path : str or Path
        Path to the YAML configuration

    Returns
    -------
    InterpolationConfig
    """
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    return config_from_dict(config)
