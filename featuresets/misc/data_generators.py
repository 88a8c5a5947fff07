# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Miscellaneous data generators for unittests and demos"""

__docformat__ = 'restructuredtext'

import numpy as np

from featuresets.datasets.base import FeatureSet
from featuresets._random import get_rng

if __debug__:
    from featuresets.base import debug


def _standard_normal(rng, i, j):
    return rng.standard_normal()


def random_featureset(sample_count=10, feature_count=10, label_count=None,
                      center=None, place=None, noise=None, rng=None,
                      label_type=int, dtype=float):
    """Generate a FeatureSet with equally many samples per label.

    The value of feature ``j`` of sample ``i`` (both 1-based) is
    ``center(i) * place(j) + noise(rng, i, j)``, so by default every
    feature grows linearly along the samples, at a slope growing with the
    feature.

    Parameters
    ----------
    sample_count : int, optional
      Number of samples (rows).
    feature_count : int, optional
      Number of features (columns), named ``1..feature_count``.
    label_count : int, optional
      Number of labels ``1..label_count``, each assigned to a consecutive
      block of ``sample_count // label_count`` samples.  Defaults to
      ``sample_count // 5``.
    center : callable, optional
      Sample term, defaults to ``(i - 1) / label_count + 1``.
    place : callable, optional
      Feature term, defaults to ``7 * j / feature_count``.
    noise : callable, optional
      Called with the generator and the sample and feature number.
      Defaults to standard normal noise.
    rng : None or int or numpy.random.Generator, optional
      Source of randomness.  If None, it follows `featuresets.seed()`.
    label_type : type, optional
      Applied to every label.
    dtype : dtype, optional
      Element type of the features.

    Raises
    ------
    ValueError
      If `sample_count` is not a multiple of `label_count`.
    """
    if label_count is None:
        label_count = sample_count // 5
    if label_count < 1 or sample_count % label_count:
        raise ValueError("Cannot distribute %d samples equally among %d "
                         "labels" % (sample_count, label_count))
    if center is None:
        center = lambda i: (i - 1) / label_count + 1
    if place is None:
        place = lambda j: 7 * j / feature_count
    if noise is None:
        noise = _standard_normal
    rng = get_rng(rng)

    if __debug__:
        debug('DG', "Generating %d x %d FeatureSet with %d labels"
              % (sample_count, feature_count, label_count))

    per_label = sample_count // label_count
    labels = [label_type(l) for l in
              np.repeat(np.arange(1, label_count + 1), per_label).tolist()]
    names = np.arange(1, feature_count + 1)
    features = np.array([[center(i) * place(j) + noise(rng, i, j)
                          for j in range(1, feature_count + 1)]
                         for i in range(1, sample_count + 1)],
                        dtype=dtype).reshape((sample_count, feature_count))
    return FeatureSet(labels, names, features)
