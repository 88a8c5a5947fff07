# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for the data generators"""

import numpy as np

import featuresets
from featuresets.testing import *
from featuresets.misc.data_generators import random_featureset


def test_random_featureset_defaults():
    fs = random_featureset(rng=1)
    assert_equal(fs.shape, (10, 10))
    # sample_count // 5 labels, equally many samples each
    assert_equal(fs.labels.tolist(), [1] * 5 + [2] * 5)
    assert_equal(fs.names.tolist(), list(range(1, 11)))
    assert_equal(fs.features.dtype, float)


def test_random_featureset_layout():
    fs = random_featureset(12, 3, label_count=4, noise=lambda rng, i, j: 0.0)
    assert_equal(fs.labels.tolist(), [1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4])
    # no noise: center(i) * place(j)
    expected = np.array([[((i - 1) / 4. + 1) * 7 * j / 3.
                          for j in range(1, 4)] for i in range(1, 13)])
    assert_array_almost_equal(fs.features, expected)


def test_random_featureset_custom_terms():
    fs = random_featureset(4, 2, label_count=2,
                           center=lambda i: i,
                           place=lambda j: 10 * j,
                           noise=lambda rng, i, j: 0.5,
                           label_type=str, dtype=np.float32)
    assert_equal(fs.labels.tolist(), ['1', '1', '2', '2'])
    assert_equal(fs.features.dtype, np.float32)
    assert_array_almost_equal(fs.features,
                              [[10.5, 20.5], [20.5, 40.5],
                               [30.5, 60.5], [40.5, 80.5]])


def test_random_featureset_reproducible():
    assert_featuresets_equal(random_featureset(20, 4, rng=42),
                             random_featureset(20, 4, rng=42))
    rng1 = np.random.default_rng(7)
    rng2 = np.random.default_rng(7)
    assert_featuresets_equal(random_featureset(rng=rng1),
                             random_featureset(rng=rng2))
    assert_false(random_featureset(rng=1) == random_featureset(rng=2))


@reseed_rng()
def test_random_featureset_follows_seed():
    fs1 = random_featureset()
    featuresets.seed(featuresets._random_seed)
    fs2 = random_featureset()
    assert_featuresets_equal(fs1, fs2)


def test_random_featureset_invalid():
    assert_raises(ValueError, random_featureset, 10, 2, label_count=3)
    assert_raises(ValueError, random_featureset, 3, 2)
    assert_raises(ValueError, random_featureset, 10, 2, label_count=0)
