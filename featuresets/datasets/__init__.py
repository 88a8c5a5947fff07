# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Data containers and utility functions

A FeatureSet holds a two-dimensional matrix of feature values with samples
in its rows and features in its columns.  Each sample carries a label
(e.g. the class it belongs to), each feature a name.

* `featuresets.datasets.base` provides the `FeatureSet` itself, with
  copying (``fs[rows, cols]``) and sharing (``fs.view(rows, cols)``)
  selection and merging.
* `featuresets.datasets.tables` exposes FeatureSets through a row/column
  oriented tabular interface and converts them into `pandas.DataFrame`.
"""

__docformat__ = 'restructuredtext'

if __debug__:
    from featuresets.base import debug
    debug('INIT', 'featuresets.datasets')
