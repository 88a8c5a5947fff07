# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Things concerned with types and type-checking in featuresets"""

import numbers

import numpy as np


def is_featuresetlike(obj):
    """Check if an object looks like a FeatureSet."""
    if hasattr(obj, 'labels') and \
       hasattr(obj, 'names') and \
       hasattr(obj, 'features'):
        return True

    return False


def is_scalar_name(x):
    """Return True if `x` addresses a single feature name

    Strings and bytes are names, not sequences of characters.
    """
    if isinstance(x, (str, bytes)):
        return True
    if isinstance(x, np.ndarray):
        return x.ndim == 0
    return not isinstance(x, (list, tuple, range, slice, type(Ellipsis)))


def is_scalar_index(x):
    """Return True if `x` is an integral position (booleans are not)"""
    if isinstance(x, (bool, np.bool_)):
        return False
    return isinstance(x, (numbers.Integral, np.integer))


def asobjarray(x):
    """Generates numpy.ndarray with dtype object from an iterable

    Is needed to assure object dtype, so first empty array of
    dtype=object needs to be constructed and then only items to be
    assigned.

    Parameters
    ----------
    x : list or tuple or ndarray
    """
    res = np.empty(len(x), dtype=object)
    res[:] = x
    return res
