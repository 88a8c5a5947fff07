# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for merging FeatureSets"""

import copy

import numpy as np

from featuresets.testing import *
from featuresets import FeatureSet, merge, RowMismatchError, \
     LabelMismatchError, ValueConflictError


def _root():
    return FeatureSet([1, 2], ['a', 'b', 'c', 'd', 'e'],
                      np.array([[1, 2, 3, 4, 5], [6, 7, 8, 9, 10]]))


def test_merge_self():
    fs = _root()
    assert_is(fs.merge(fs), fs)
    v = fs.view(slice(None), ['a', 'b'])
    assert_is(v.merge(v), v)
    assert_is(merge(fs), fs)


def test_merge_views_same_root():
    root = _root()
    v1 = root.view(slice(None), ['a', 'b'])
    v2 = root.view(slice(None), ['b', 'c', 'd'])
    m = v1.merge(v2)
    assert_true(m.is_view)
    assert_is(m.parent, root)
    assert_equal(m.names.tolist(), ['a', 'b', 'c', 'd'])
    assert_equal(m.labels.tolist(), [1, 2])
    assert_array_equal(m.features, [[1, 2, 3, 4], [6, 7, 8, 9]])
    # storage is still shared with the root
    assert_true(np.may_share_memory(m.features, root.features))


def test_merge_views_column_order():
    root = _root()
    v1 = root.view([1, 0], ['e', 'a'])
    v2 = root.view([1, 0], ['c', 'e'])
    m = v1.merge(v2)
    assert_is(m.parent, root)
    # columns of the first view come first
    assert_equal(m.names.tolist(), ['e', 'a', 'c'])
    assert_equal(m.labels.tolist(), [2, 1])
    assert_array_equal(m.features, [[10, 6, 8], [5, 1, 3]])


def test_merge_root_with_view():
    root = _root()
    v = root.view(slice(None), ['b'])
    m = root.merge(v)
    assert_is(m.parent, root)
    assert_featuresets_equal(m, root)
    m = v.merge(root)
    assert_equal(m.names.tolist(), ['b', 'a', 'c', 'd', 'e'])


def test_merge_views_row_mismatch():
    root = _root()
    v1 = root.view([0], ['a'])
    v2 = root.view([1], ['b'])
    assert_raises(RowMismatchError, v1.merge, v2)
    # row order matters as well
    v1 = root.view([0, 1], ['a'])
    v2 = root.view([1, 0], ['b'])
    assert_raises(RowMismatchError, v1.merge, v2)


def test_merge_disjoint():
    a = FeatureSet([1, 2], ['a', 'b', 'c'], np.array([[1, 2, 3], [4, 5, 6]]))
    b = FeatureSet([1, 2], ['d', 'e'], np.array([[7, 8], [9, 10]]))
    m = a.merge(b)
    assert_false(m.is_view)
    assert_is(m.parent, None)
    assert_equal(m.labels.tolist(), [1, 2])
    assert_equal(m.names.tolist(), ['a', 'b', 'c', 'd', 'e'])
    assert_array_equal(m.features, [[1, 2, 3, 7, 8], [4, 5, 6, 9, 10]])
    assert_true(m.id not in (a.id, b.id))


def test_merge_overlapping():
    a = FeatureSet([1, 2], ['a', 'b', 'c'], np.array([[1, 2, 3], [4, 5, 6]]))
    b = FeatureSet([1, 2], ['a', 'b', 'd'], np.array([[1, 2, 7], [4, 5, 8]]))
    m = a.merge(b)
    assert_equal(m.names.tolist(), ['a', 'b', 'c', 'd'])
    assert_array_equal(m.features, [[1, 2, 3, 7], [4, 5, 6, 8]])
    # only other names keep their order
    c = FeatureSet([1, 2], ['z', 'a', 'y'], np.array([[0, 1, 2], [0, 4, 5]]))
    assert_equal(a.merge(c).names.tolist(), ['a', 'b', 'c', 'z', 'y'])


def test_merge_conflict():
    a = FeatureSet([1, 2], ['a', 'b'], np.array([[1, 2], [3, 4]]))
    b = FeatureSet([1, 2], ['b', 'c'], np.array([[2, 5], [0, 6]]))
    assert_raises(ValueConflictError, a.merge, b)


def test_merge_label_mismatch():
    a = FeatureSet([1, 2], ['a'], np.array([[1], [2]]))
    assert_raises(LabelMismatchError, a.merge,
                  FeatureSet([2, 1], ['b'], np.array([[1], [2]])))
    assert_raises(LabelMismatchError, a.merge,
                  FeatureSet([1, 2, 3], ['b'], np.array([[1], [2], [3]])))


def test_merge_views_of_different_roots():
    a = _root()
    b = FeatureSet([1, 2], ['e', 'f'], np.array([[5, 11], [10, 12]]))
    m = a.view(slice(None), ['a', 'e']).merge(b.view(slice(None), ['e', 'f']))
    assert_false(m.is_view)
    assert_equal(m.names.tolist(), ['a', 'e', 'f'])
    assert_array_equal(m.features, [[1, 5, 11], [6, 10, 12]])


def test_merge_heterogeneous_names():
    a = FeatureSet([1, 2], ['a'], np.array([[1], [2]]))
    b = FeatureSet.from_xy(np.array([[3, 4], [5, 6]]), [1, 2])
    m = a.merge(b)
    assert_equal(m.names.tolist(), ['a', 1, 2])
    assert_equal(m.names.dtype, object)
    assert_array_equal(m[:, 2], [4, 6])
    assert_array_equal(m[:, 'a'], [1, 2])


def test_merge_nary():
    root = _root()
    parts = [FeatureSet([1, 2], [n], root[:, [n]].features)
             for n in ['a', 'b', 'c']]
    m = merge(*parts)
    assert_equal(m.names.tolist(), ['a', 'b', 'c'])
    assert_array_equal(m.features, root.features[:, :3])
    assert_featuresets_equal(m, parts[0].merge(parts[1]).merge(parts[2]))
    assert_raises(ValueError, merge)


def test_merge_type_error():
    assert_raises(TypeError, _root().merge, np.zeros((2, 2)))


def test_merge_with_deepcopy():
    fs = _root()
    dc = copy.deepcopy(fs)
    m = fs.merge(dc)
    # unrelated storage: generic merge into an owned FeatureSet
    assert_is(m.parent, None)
    assert_true(m == fs)
    assert_true(m is not fs)
