"""Euclidean distance helpers shared by the interpolators."""

import numpy as np
from scipy.spatial.distance import cdist, pdist


def distances_to_samples(points, sample_coordinates):
    """
    Distance from every query point to every sample.

    Parameters
    ----------
    points : ndarray of shape (m, 2)
        Query point coordinates
    sample_coordinates : ndarray of shape (n, 2)
        Sample coordinates

    Returns
    -------
    ndarray of shape (m, n)
    """
    return cdist(np.atleast_2d(points), sample_coordinates, metric='euclidean')


def compute_pairwise_distances(points):
    """
    Compute the square matrix of distances between all points.

    Parameters
    ----------
    points : ndarray of shape (n, 2)
        Point coordinates

    Returns
    -------
    ndarray of shape (n, n)
        Symmetric distance matrix with a zero diagonal

    Examples
    --------
    >>> compute_pairwise_distances(np.array([[0, 0], [3, 4]]))
    array([[0., 5.],
           [5., 0.]])
    """
    return cdist(points, points, metric='euclidean')


def condensed_pairwise_distances(points):
    """
    Distances of every unordered pair ``i < j``, in ``pdist`` order.

    Parameters
    ----------
    points : ndarray of shape (n, 2)

    Returns
    -------
    ndarray of shape (n * (n - 1) / 2,)
    """
    return pdist(points, metric='euclidean')
