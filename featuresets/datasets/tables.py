# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Row- and column-oriented tabular access to FeatureSets

Only the feature matrix is considered to be the table, with the feature
names as its column names.  Labels are not part of the table (but become
the index on conversion to a `pandas.DataFrame`).
"""

__docformat__ = 'restructuredtext'

from collections import namedtuple

import numpy as np

from featuresets.base import externals
from featuresets.base.types import is_featuresetlike

if __debug__:
    from featuresets.base import debug

Schema = namedtuple('Schema', ['names', 'types'])
"""Column names and column element types of a table"""


def istable(obj):
    """FeatureSets (and their classes) are tables"""
    if isinstance(obj, type):
        from featuresets.base.dataset import AbstractFeatureSet
        return issubclass(obj, AbstractFeatureSet)
    return is_featuresetlike(obj)

rowaccess = istable
columnaccess = istable


def rows(fs):
    """Iterate over the rows of `fs`

    Each row is a tuple of (feature name, value) pairs in column order.
    Duplicated names are kept, so turn a row into a dict only for
    FeatureSets with unique names.
    """
    names = fs.names.tolist()
    for row in fs.features:
        yield tuple(zip(names, row.tolist()))


def columns(fs):
    """Return a dict of feature name -> column, in column order

    Like the name index, a duplicated name maps to its last column.
    """
    if __debug__:
        debug('TBL', "Column access to %s" % fs)
    return dict(fs.eachcol())


def schema(fs):
    """Return the `Schema` of `fs`

    All columns share the element type of the feature matrix.
    """
    return Schema(tuple(fs.names.tolist()),
                  (fs.features.dtype,) * fs.shape[1])


def subset(fs, inds, viewhint=None):
    """Select rows `inds` of `fs`

    Parameters
    ----------
    fs : FeatureSet
    inds : int or slice or sequence
      Row positions.
    viewhint : None or bool
      Only if False, the selected data is copied.  Otherwise a view is
      returned.
    """
    if __debug__:
        debug('TBL', "Subsetting %s (viewhint=%s)" % (fs, viewhint))
    if viewhint is False:
        return fs[inds, :]
    return fs.view(inds, slice(None))


def to_dataframe(fs):
    """Convert `fs` into a `pandas.DataFrame`

    Columns are named after the features, and the index holds the labels.
    """
    externals.exists('pandas', raise_=True)
    import pandas as pd

    return pd.DataFrame(np.array(fs.features),
                        columns=fs.names.tolist(),
                        index=pd.Index(fs.labels.tolist(), name='label'))


def from_dataframe(df, labels=None):
    """Build a FeatureSet from a `pandas.DataFrame`

    Parameters
    ----------
    df : pandas.DataFrame
      Columns become features, column names feature names.
    labels : str or sequence, optional
      Column holding the labels (removed from the features), or the labels
      themselves.  If None, the index of `df` is used.
    """
    externals.exists('pandas', raise_=True)
    from featuresets.datasets.base import FeatureSet

    if labels is None:
        labels = df.index.to_numpy()
    elif isinstance(labels, str):
        df, labels = df.drop(columns=[labels]), df[labels].to_numpy()
    return FeatureSet(labels, df.columns.tolist(), df.to_numpy())
