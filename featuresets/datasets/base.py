# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Feature matrix container with name-based column access and views."""

__docformat__ = 'restructuredtext'

import uuid
from datetime import datetime, timezone

import numpy as np

from featuresets.base import externals
from featuresets.base.dataset import AbstractFeatureSet, ShapeMismatchError, \
     RowMismatchError, LabelMismatchError, ValueConflictError
from featuresets.base.dochelpers import _strid
from featuresets.base.names import ALL, build_name_index, resolve_names
from featuresets.base.types import asobjarray, is_scalar_index, \
     is_scalar_name

if __debug__:
    from featuresets.base import debug


def _readonly(arr):
    """Read-only view of an array, sharing its memory"""
    out = arr.view()
    out.flags.writeable = False
    return out


def _as_vector(values):
    """Turn a sequence of labels or names into a 1D array

    Heterogeneous sequences (e.g. mixing numbers and strings) become object
    arrays instead of being coerced into a common type.
    """
    if isinstance(values, np.ndarray):
        return values
    values = list(values)
    arr = np.array(values)
    if arr.ndim != 1 or arr.tolist() != values:
        arr = asobjarray(values)
    return arr


def _as_slice(indices):
    """Express positions as a slice if they form a regular stride

    Returns None otherwise.  Basic slicing with the returned slice yields
    the same elements as fancy indexing with `indices`, but as a view.
    """
    n = len(indices)
    if n == 0:
        return slice(0, 0)
    start = int(indices[0])
    if n == 1:
        return slice(start, start + 1)
    steps = np.diff(indices)
    step = int(steps[0])
    if step == 0 or not np.all(steps == step):
        return None
    stop = int(indices[-1]) + (1 if step > 0 else -1)
    if stop < 0:
        stop = None
    return slice(start, stop, step)


def _ordered_unique(values):
    return np.array(list(dict.fromkeys(values.tolist())), dtype=np.intp)


class FeatureSet(AbstractFeatureSet):
    """Labelled feature matrix with named columns.

    A FeatureSet couples a samples x features matrix with one label per
    sample and one name per feature.  Instances are immutable: all data is
    exposed through read-only arrays.

    Columns are addressed by feature name, rows by position::

      fs[:, 'fA']               # all rows of the column named 'fA'
      fs[0, ['fA', 'fB']]       # first row, two columns
      fs[:10]                   # new FeatureSet with a copy of the data
      fs.view(slice(0, 10))     # new FeatureSet sharing the data

    Selecting with scalars on both axes yields the single value; a scalar on
    one axis yields a plain 1D array.  Selecting with ranges, sequences or
    slices on both axes yields a new FeatureSet.  `get` (``[]``) copies,
    `view()` shares the storage of the FeatureSet owning it (the `root`).

    Views keep a reference to their root (`parent`) and the positions of
    their rows and columns in it.  Views with irregular row or column
    positions hold a gathered copy of their features, made on first
    access.  Merging two views of the same root gives another view of that
    root; merging unrelated FeatureSets gives a new FeatureSet with the
    union of their features.

    Attributes
    ----------
    id : str
      Globally unique identifier (UUID4).
    created_at : datetime
      UTC time of construction.
    labels : ndarray
      One label per sample (row).
    names : ndarray
      One name per feature (column).
    features : ndarray
      Samples x features matrix of a single element type.
    name_index : dict
      Feature name -> column position.  For duplicated names the last
      position is used.
    parent : FeatureSet or None
      The root FeatureSet of a view, None for owned FeatureSets.
    """

    def __init__(self, labels, names, features, id=None, created_at=None):
        """
        Parameters
        ----------
        labels : sequence
          One label per row of `features`.
        names : sequence
          One name per column of `features`.
        features : array-like
          2D matrix.  Not copied.
        id : str, optional
          Generated (UUID4) if not given.
        created_at : datetime, optional
          Current UTC time if not given.

        Raises
        ------
        ShapeMismatchError
          If `features` is not 2D or the lengths of `labels` and `names` do
          not match its shape.
        """
        labels = _as_vector(labels)
        names = _as_vector(names)
        features = np.asanyarray(features)

        if features.ndim != 2:
            raise ShapeMismatchError(
                "Features must be a 2D matrix, got %d dimension(s)"
                % features.ndim)
        if labels.ndim != 1 or len(labels) != features.shape[0]:
            raise ShapeMismatchError(
                "Got %d labels for %d samples"
                % (len(labels), features.shape[0]))
        if names.ndim != 1 or len(names) != features.shape[1]:
            raise ShapeMismatchError(
                "Got %d names for %d features"
                % (len(names), features.shape[1]))

        self._id = str(uuid.uuid4()) if id is None else str(id)
        self._created_at = datetime.now(timezone.utc) \
                           if created_at is None else created_at
        self._labels = _readonly(labels)
        self._names = _readonly(names)
        self._features = _readonly(features)
        self._parent = None
        self._rows = None
        self._cols = None
        self._name_index = build_name_index(self._names)

        if __debug__:
            debug('DS', "Created %s %s" % (self, _strid(self)))


    @classmethod
    def from_xy(cls, X, y, id=None, created_at=None):
        """Build a FeatureSet from a matrix and labels

        Features are named ``1..K`` after their (1-based) column.
        """
        X = np.asanyarray(X)
        if X.ndim != 2:
            raise ShapeMismatchError(
                "Features must be a 2D matrix, got %d dimension(s)" % X.ndim)
        return cls(y, np.arange(1, X.shape[1] + 1), X,
                   id=id, created_at=created_at)


    @classmethod
    def _as_view(cls, root, rows, cols):
        """View on `root` for the given root row and column positions"""
        fs = cls.__new__(cls)
        fs._id = str(uuid.uuid4())
        fs._created_at = datetime.now(timezone.utc)
        fs._parent = root
        fs._rows = rows
        fs._cols = cols

        rslice, cslice = _as_slice(rows), _as_slice(cols)
        fs._labels = _readonly(root._labels[rows if rslice is None
                                            else rslice])
        fs._names = _readonly(root._names[cols if cslice is None
                                          else cslice])
        if rslice is not None and cslice is not None:
            # regular strides -- a genuine view on the root storage
            fs._features = root._features[rslice, cslice]
        else:
            # gathered from the root on first access, then kept
            fs._features = None
        fs._name_index = build_name_index(fs._names)

        if __debug__:
            debug('DS', "Created %s %s of %s %s (%s)"
                  % (fs, _strid(fs), root, _strid(root),
                     {True: 'gathered', False: 'strided'}[
                         fs._features is None]))
        return fs


    #
    # Accessors
    #
    id = property(fget=lambda self: self._id)
    created_at = property(fget=lambda self: self._created_at)
    labels = property(fget=lambda self: self._labels)
    names = property(fget=lambda self: self._names)
    name_index = property(fget=lambda self: self._name_index)
    parent = property(fget=lambda self: self._parent)

    @property
    def features(self):
        if self._features is None:
            # gathered once on first access, read-only like the root
            self._features = _readonly(
                self._parent._features[np.ix_(self._rows, self._cols)])
        return self._features


    def _root_rows(self):
        if self._rows is None:
            return np.arange(len(self._labels))
        return self._rows


    def _root_cols(self):
        if self._cols is None:
            return np.arange(len(self._names))
        return self._cols


    def _split_args(self, args):
        """Uniformize selection into a (rows, cols) pair"""
        # it is not a tuple if just single slicing spec is passed
        if not isinstance(args, tuple):
            return args, slice(None)
        if len(args) > 2:
            raise ValueError("Too many arguments (%i). At most there can be "
                             "two arguments, one for samples selection and one "
                             "for features selection" % len(args))
        if len(args) == 1:
            return args[0], slice(None)
        return args


    def _row_positions(self, rows):
        if isinstance(rows, (bool, np.bool_)):
            raise IndexError("Rows cannot be selected by a single boolean")
        if isinstance(rows, range):
            rows = np.asarray(rows, dtype=np.intp)
        elif isinstance(rows, (list, tuple)):
            rows = np.asarray(rows)
            if not len(rows):
                rows = rows.astype(np.intp)
        return np.arange(len(self._labels))[rows]


    def _col_positions(self, cols):
        resolved = resolve_names(self._name_index, cols, self._names)
        if resolved is ALL:
            return np.arange(len(self._names))
        return np.asarray(resolved, dtype=np.intp)


    def _select(self, args, as_view):
        rows, cols = self._split_args(args)
        root = self.root
        rr, rc = self._root_rows(), self._root_cols()
        scalar_row = is_scalar_index(rows)
        scalar_col = is_scalar_name(cols)

        if scalar_col:
            c = rc[resolve_names(self._name_index, cols)]
        else:
            c = rc[self._col_positions(cols)]
        if scalar_row:
            r = rr[rows]
        else:
            r = rr[self._row_positions(rows)]

        if scalar_row or scalar_col:
            # a single value or a plain vector (always a copy)
            return root._features[r, c]

        if __debug__:
            debug('DS_', "Selecting %d x %d of %s (view=%s)"
                  % (len(r), len(c), self, as_view))
        if as_view:
            return self._as_view(root, r, c)
        return self.__class__(root._labels[r],
                              root._names[c],
                              root._features[np.ix_(r, c)])


    def __getitem__(self, args):
        """Select rows (by position) and columns (by name), copying data
        """
        return self._select(args, as_view=False)


    def view(self, rows=slice(None), cols=slice(None)):
        """Select rows (by position) and columns (by name) without copying

        Unlike ``[]`` the resulting FeatureSet shares the storage of the
        `root` FeatureSet and has it as its `parent`.  Views of views refer
        to the root directly.
        """
        return self._select((rows, cols), as_view=True)


    def merge(self, other):
        """Combine the features of two FeatureSets describing the same samples

        - ``a.merge(a)`` is ``a``.
        - Two views of the same root (or a root and a view of it) must
          select the same rows.  The result is a view of the root with the
          columns of `self` followed by the ones only `other` has.
        - Otherwise labels must be equal and features named alike must have
          equal values.  The result is a new FeatureSet with the features of
          `self` followed by the ones only `other` has.

        Raises
        ------
        RowMismatchError
          Views of the same root with different rows.
        LabelMismatchError
          Unrelated FeatureSets with different labels.
        ValueConflictError
          Identically named features with different values.
        """
        if self is other:
            return self

        if not isinstance(other, AbstractFeatureSet):
            raise TypeError("Cannot merge %s with %s"
                            % (self.__class__.__name__, type(other)))

        if __debug__:
            debug('MERGE', "Merging %s %s with %s %s"
                  % (self, _strid(self), other, _strid(other)))

        if self.root is other.root:
            return self._merge_views(other)
        return self._merge_generic(other)


    def _merge_views(self, other):
        rows = self._root_rows()
        if not np.array_equal(rows, other._root_rows()):
            raise RowMismatchError(
                "Cannot merge views of the same FeatureSet selecting "
                "different rows")
        cols = _ordered_unique(np.concatenate((self._root_cols(),
                                               other._root_cols())))
        return self._as_view(self.root, rows, cols)


    def _merge_generic(self, other):
        if self.labels.tolist() != other.labels.tolist():
            raise LabelMismatchError(
                "Cannot merge FeatureSets with different labels")

        own_index, other_index = self.name_index, other.name_index
        only_other = []
        for name in other_index:
            if name in own_index:
                # identically named features must be identical
                if not np.array_equal(self[:, name], other[:, name]):
                    raise ValueConflictError(
                        "Identically named features with different values: "
                        "%r" % (name,))
            else:
                only_other.append(name)
        # ordered as in `other`, duplicates addressed by their last position
        positions = sorted(set(other_index[n] for n in only_other))
        positions = np.array(positions, dtype=np.intp)

        other_names = other.names[positions]
        if self.names.dtype.kind == other_names.dtype.kind:
            names = np.concatenate((self.names, other_names))
        else:
            names = _as_vector(self.names.tolist() + other_names.tolist())
        features = np.hstack((self.features, other.features[:, positions]))
        return self.__class__(np.array(self.labels), names, features)


    #
    # Copying
    #
    def __copy__(self):
        return self.view()


    def __deepcopy__(self, memo=None):
        return self.copy(deep=True)


    def __reduce__(self):
        return (self.__class__,
                    (np.array(self.labels),
                     np.array(self.names),
                     np.array(self.features),
                     self.id,
                     self.created_at))


    def copy(self, deep=True):
        """Create a copy of a FeatureSet.

        Parameters
        ----------
        deep : boolean, optional
          By default an owned FeatureSet with its own copy of the data is
          returned, retaining `id` and `created_at`.  If False, a view of
          all of the data is returned instead.
        """
        if not deep:
            return self.view()
        if __debug__:
            debug('DS_', "Duplicating features shaped %s" % str(self.shape))
        return self.__class__(np.array(self.labels),
                              np.array(self.names),
                              np.array(self.features),
                              id=self.id,
                              created_at=self.created_at)


    def __array__(self, *args, **kwargs):
        """Provide an 'array' copy of the features"""
        return np.asarray(self.features).__array__(*args, **kwargs)


    #
    # Persistence
    #
    def save(self, destination, compression=None, mkdir=True):
        """Store in an HDF5 file (see `featuresets.base.hdf5.save`)"""
        externals.exists('h5py', raise_=True)
        from featuresets.base.hdf5 import save
        return save(self, destination, compression=compression, mkdir=mkdir)


    def save_to_directory(self, directory='.', **kwargs):
        """Store as ``<directory>/<id>.hdf5``; returns the path"""
        externals.exists('h5py', raise_=True)
        from featuresets.base.hdf5 import save_to_directory
        return save_to_directory(self, directory, **kwargs)


    @classmethod
    def load(cls, source, mmap=False):
        """Load a FeatureSet stored in an HDF5 file

        See `featuresets.base.hdf5.load`.
        """
        externals.exists('h5py', raise_=True)
        from featuresets.base.hdf5 import load
        return load(source, mmap=mmap)


    @staticmethod
    def is_valid(source):
        """Whether `source` is a FeatureSet container file"""
        externals.exists('h5py', raise_=True)
        from featuresets.base.hdf5 import is_valid
        return is_valid(source)
