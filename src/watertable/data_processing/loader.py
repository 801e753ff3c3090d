"""Adapters that turn well tables into SampleSets."""

import numpy as np
import pandas as pd
import yaml

from .samples import SampleSet
from ..exceptions import ConfigurationError, DegenerateInputError


def water_table_elevation(top_of_casing, depth_to_water):
    """
    Water-table elevation from a casing survey and a depth reading.

    Parameters
    ----------
    top_of_casing : float or array-like
        Top-of-casing elevation
    depth_to_water : float or array-like
        Measured depth from the top of casing down to water

    Returns
    -------
    float or ndarray
        ``top_of_casing - depth_to_water``

    Examples
    --------
    >>> water_table_elevation(120.0, 19.5)
    100.5
    """
    result = np.subtract(top_of_casing, depth_to_water)
    return float(result) if np.ndim(result) == 0 else result


def samples_from_dataframe(df, x_col='x', y_col='y', z_col=None,
                           toc_col='top_of_casing', depth_col='depth_to_water',
                           name_col='name'):
    """
    Build a SampleSet from a well table.

    The value of each sample is taken from ``z_col`` when given, otherwise it
    is derived as ``toc_col - depth_col``. Every row must be complete.

    Parameters
    ----------
    df : pd.DataFrame
        Well table with one row per control point
    x_col, y_col : str, optional
        Coordinate columns (default: 'x', 'y')
    z_col : str, optional
        Column holding ready water-table elevations
    toc_col : str, optional
        Top-of-casing elevation column (default: 'top_of_casing')
    depth_col : str, optional
        Depth-to-water column (default: 'depth_to_water')
    name_col : str, optional
        Well identifier column; ignored if absent (default: 'name')

    Returns
    -------
    SampleSet

    Raises
    ------
    ValueError
        If a required column is missing.
    DegenerateInputError
        If the table is empty or a row has missing coordinates or readings.

    Examples
    --------
    >>> df = pd.DataFrame({'name': ['MW-1'], 'x': [5], 'y': [8],
    ...                    'top_of_casing': [120.0], 'depth_to_water': [19.5]})
    >>> samples_from_dataframe(df).values
    array([100.5])
    """
    value_cols = [z_col] if z_col is not None else [toc_col, depth_col]
    required = [x_col, y_col] + value_cols
    for col in required:
        if col not in df.columns:
            raise ValueError(f"Column '{col}' not found in DataFrame")

    if df.empty:
        raise DegenerateInputError("No well rows to build samples from")

    incomplete = df[required].isna().any(axis=1)
    if incomplete.any():
        if name_col in df.columns:
            labels = df.loc[incomplete, name_col].astype(str).tolist()
        else:
            labels = [str(label) for label in df.index[incomplete]]
        raise DegenerateInputError(
            f"Well rows with missing {required}: {', '.join(labels)}"
        )

    if z_col is not None:
        z = df[z_col].to_numpy(dtype=float)
    else:
        z = water_table_elevation(df[toc_col].to_numpy(dtype=float),
                                  df[depth_col].to_numpy(dtype=float))

    names = df[name_col].astype(str).tolist() if name_col in df.columns else None

    return SampleSet.from_arrays(
        df[x_col].to_numpy(dtype=float),
        df[y_col].to_numpy(dtype=float),
        z,
        names=names
    )


def samples_from_records(records):
    """
    Build a SampleSet from a list of well dictionaries.

    Each record needs ``x`` and ``y`` plus either ``z`` or both
    ``top_of_casing`` and ``depth_to_water``; ``name`` is optional.

    Parameters
    ----------
    records : list of dict
        Well entries, e.g. the ``wells`` list of a YAML config

    Returns
    -------
    SampleSet
    """
    rows = []
    for k, record in enumerate(records):
        if 'x' not in record or 'y' not in record:
            raise ConfigurationError(f"Well entry {k} is missing 'x' or 'y'")

        if 'z' in record:
            z = float(record['z'])
        elif 'top_of_casing' in record and 'depth_to_water' in record:
            z = water_table_elevation(float(record['top_of_casing']),
                                      float(record['depth_to_water']))
        else:
            raise ConfigurationError(
                f"Well entry {k} needs 'z' or both 'top_of_casing' and 'depth_to_water'"
            )

        rows.append({
            'name': record.get('name', f"well-{k + 1}"),
            'x': float(record['x']),
            'y': float(record['y']),
            'z': z
        })

    return samples_from_dataframe(pd.DataFrame(rows, columns=['name', 'x', 'y', 'z']),
                                  z_col='z')


def load_wells(config_path):
    """
    Load the ``wells`` list of a YAML file as a SampleSet.

    Parameters
    ----------
    config_path : str or Path
        YAML file with a top-level ``wells`` list

    Returns
    -------
    SampleSet
    """
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    if 'wells' not in config:
        raise ConfigurationError(f"No 'wells' section in {config_path}")

    return samples_from_records(config['wells'])
