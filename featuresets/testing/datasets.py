# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Provides convenience FeatureSets for unittesting."""

__docformat__ = 'restructuredtext'

import numpy as np

from featuresets import cfg
from featuresets.datasets.base import FeatureSet
from featuresets.misc.data_generators import random_featureset
from featuresets.testing.tools import reseed_rng

__all__ = ['datasets', 'five_classes', 'small_int_featureset',
           'random_featureset']

# scale of the noise added to the five class fixture
noise_scale = cfg.get_as_dtype('tests', 'noise scale', float, default=0.3)


def five_classes(noise=noise_scale, rng=None):
    """25 samples of 5 classes ('a'..'e') x 11 features ('01'..'11')

    Feature ``j`` (0-based) of class ``k`` (0-based) has the mean
    ``(k - 2) * 0.1 * j``, so features further right separate the classes
    better.  Normal noise of standard deviation `noise` is added.
    """
    rng = np.random.default_rng(rng)
    labels = np.repeat(['a', 'b', 'c', 'd', 'e'], 5)
    names = ['%02d' % j for j in range(1, 12)]
    slopes = np.repeat([-0.2, -0.1, 0.0, 0.1, 0.2], 5)
    X = slopes[:, None] * np.arange(11)[None, :]
    return FeatureSet(labels, names, X + noise * rng.standard_normal(X.shape))


def small_int_featureset():
    """9 samples of 3 classes x 4 integer features 'feature1'..'feature4'"""
    return FeatureSet([1, 1, 1, 2, 2, 2, 3, 3, 3],
                      ['feature%d' % i for i in range(1, 5)],
                      np.array([[10, 11, 12, 13],
                                [11, 11, 12, 13],
                                [13, 12, 11, 12],
                                [21, 20, 23, 24],
                                [22, 21, 22, 23],
                                [21, 22, 22, 22],
                                [33, 32, 31, 32],
                                [31, 34, 31, 34],
                                [39, 30, 30, 32]]))


# to assure reproducibility -- lets reseed the RNG at this point
@reseed_rng()
def generate_testing_featuresets():
    datasets = {}
    datasets['five_classes'] = five_classes(rng=np.random.randint(2**31 - 1))
    datasets['small_int'] = small_int_featureset()
    datasets['random'] = random_featureset(50, 30, label_count=10)
    datasets['random_subset'] = datasets['random'][:, [1, 2, 3, 4, 5]]
    return datasets

datasets = generate_testing_featuresets()
