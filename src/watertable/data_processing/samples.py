"""Immutable containers for measured control points."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..exceptions import DegenerateInputError


@dataclass(frozen=True)
class Point2D:
    """Planar coordinate pair."""

    x: float
    y: float


@dataclass(frozen=True)
class Sample:
    """
    A single control point: location plus measured value.

    Attributes
    ----------
    location : Point2D
        Sample coordinates
    z : float
        Measured value (water-table elevation)
    name : str, optional
        Well identifier
    """

    location: Point2D
    z: float
    name: Optional[str] = None

    @property
    def x(self):
        return self.location.x

    @property
    def y(self):
        return self.location.y


class SampleSet:
    """
    Fixed-size, ordered, read-only collection of samples.

    Order is irrelevant to every algorithm except the IDW exact-match
    tie-break, where the first coincident sample wins.

    Parameters
    ----------
    samples : iterable of Sample
        Control points. Must be non-empty, with finite coordinates and values.

    Raises
    ------
    DegenerateInputError
        If the collection is empty or contains non-finite data.

    Examples
    --------
    >>> samples = SampleSet.from_arrays([0, 10], [0, 5], [101.2, 99.8])
    >>> len(samples)
    2
    >>> samples.values
    array([101.2,  99.8])
    """

    def __init__(self, samples):
        samples = tuple(samples)
        if not samples:
            raise DegenerateInputError("SampleSet requires at least one sample")

        coordinates = np.array([[s.x, s.y] for s in samples], dtype=float)
        values = np.array([s.z for s in samples], dtype=float)

        if not (np.all(np.isfinite(coordinates)) and np.all(np.isfinite(values))):
            raise DegenerateInputError("Sample coordinates and values must be finite")

        coordinates.setflags(write=False)
        values.setflags(write=False)

        self._samples = samples
        self._coordinates = coordinates
        self._values = values

    @classmethod
    def from_arrays(cls, x, y, z, names=None):
        """
        Build a SampleSet from parallel coordinate and value sequences.

        Parameters
        ----------
        x, y : array-like
            Sample coordinates
        z : array-like
            Sample values
        names : sequence of str, optional
            Well identifiers

        Returns
        -------
        SampleSet
        """
        x = np.asarray(x, dtype=float).ravel()
        y = np.asarray(y, dtype=float).ravel()
        z = np.asarray(z, dtype=float).ravel()

        if not (len(x) == len(y) == len(z)):
            raise DegenerateInputError(
                f"Coordinate/value length mismatch: x={len(x)}, y={len(y)}, z={len(z)}"
            )
        if names is None:
            names = [None] * len(x)
        elif len(names) != len(x):
            raise DegenerateInputError(
                f"Expected {len(x)} names, got {len(names)}"
            )

        return cls(
            Sample(Point2D(float(xi), float(yi)), float(zi), name)
            for xi, yi, zi, name in zip(x, y, z, names)
        )

    @property
    def coordinates(self):
        """ndarray of shape (n, 2): sample (x, y) pairs, read-only."""
        return self._coordinates

    @property
    def values(self):
        """ndarray of shape (n,): sample values, read-only."""
        return self._values

    @property
    def names(self):
        return [s.name for s in self._samples]

    def without(self, index):
        """Return a new SampleSet with the sample at ``index`` removed."""
        remaining = [s for i, s in enumerate(self._samples) if i != index]
        return SampleSet(remaining)

    def subset(self, indices):
        """Return a new SampleSet with only the samples at ``indices``."""
        return SampleSet(self._samples[i] for i in indices)

    def __len__(self):
        return len(self._samples)

    def __iter__(self):
        return iter(self._samples)

    def __getitem__(self, index):
        return self._samples[index]

    def __repr__(self):
        return (
            f"SampleSet(n={len(self)}, "
            f"z_range=[{self._values.min():.3f}, {self._values.max():.3f}])"
        )
