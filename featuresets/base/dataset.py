# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Abstract interface of labelled feature matrix containers."""

__docformat__ = 'restructuredtext'

from abc import ABC, abstractmethod
from functools import reduce

import numpy as np

from featuresets.base import cfg
from featuresets.base.dochelpers import _str, _repr

if __debug__:
    from featuresets.base import debug

__REPR_STYLE__ = cfg.get('datasets', 'repr', 'full')

if not __REPR_STYLE__ in ('full', 'str'):
    raise ValueError("Incorrect value %r for option datasets.repr."
                     " Valid are 'full' and 'str'." % __REPR_STYLE__)


class FeatureSetError(Exception):
    """Base class of all problems with the integrity of a FeatureSet
    """
    pass


class ShapeMismatchError(FeatureSetError, ValueError):
    """Lengths of labels or names disagree with the feature matrix"""
    pass


class UnknownNameError(FeatureSetError, KeyError):
    """Feature name not present in a FeatureSet"""

    def __str__(self):
        return "Unknown feature name %r" % (self.args[0],)


class RowMismatchError(FeatureSetError, ValueError):
    """Views of the same root select different rows"""
    pass


class LabelMismatchError(FeatureSetError, ValueError):
    """Unrelated FeatureSets carry different labels"""
    pass


class ValueConflictError(FeatureSetError, ValueError):
    """Identically named features with different values"""
    pass


class InvalidContainerError(FeatureSetError, IOError):
    """Container file is not a FeatureSet container"""
    pass


class UnimplementedCapabilityError(FeatureSetError, NotImplementedError):
    """Operation is not provided by a FeatureSet variant"""
    pass


class ContainerConversionError(FeatureSetError, TypeError):
    """Values cannot be represented in the container file"""
    pass


def _unimplemented(obj, capability):
    raise UnimplementedCapabilityError(
        "%s does not implement %r" % (obj.__class__.__name__, capability))


class AbstractFeatureSet(ABC):
    """Labelled, named feature matrix.

    A feature set couples a two-dimensional matrix of feature values
    (samples in rows, features in columns) with a vector of labels (one per
    row) and a vector of feature names (one per column).  Columns can be
    addressed by name, rows by position.

    Concrete variants provide the data accessors, element selection (`get`
    through ``[]`` and `view`) and `merge`.  Everything else (shape, length,
    iteration, comparison and rendering) is derived here from those
    accessors.

    Attributes
    ----------
    labels : ndarray
      One label per sample (row).
    names : ndarray
      One name per feature (column).
    features : ndarray
      Samples x features matrix.
    """

    #
    # Required capabilities
    #
    @property
    @abstractmethod
    def id(self):
        """Globally unique identifier (UUID4 text)"""
        _unimplemented(self, 'id')

    @property
    @abstractmethod
    def created_at(self):
        """UTC timestamp of construction"""
        _unimplemented(self, 'created_at')

    @property
    @abstractmethod
    def labels(self):
        _unimplemented(self, 'labels')

    @property
    @abstractmethod
    def names(self):
        _unimplemented(self, 'names')

    @property
    @abstractmethod
    def features(self):
        _unimplemented(self, 'features')

    @property
    @abstractmethod
    def name_index(self):
        """Mapping of feature names onto column positions"""
        _unimplemented(self, 'name_index')

    @property
    @abstractmethod
    def parent(self):
        """Root FeatureSet a view refers to, None for owned instances"""
        _unimplemented(self, 'parent')

    @abstractmethod
    def __getitem__(self, args):
        _unimplemented(self, 'get')

    @abstractmethod
    def view(self, rows=slice(None), cols=slice(None)):
        _unimplemented(self, 'view')

    @abstractmethod
    def merge(self, other):
        _unimplemented(self, 'merge')

    #
    # Derived capabilities
    #
    @property
    def root(self):
        """The FeatureSet owning the storage"""
        parent = self.parent
        return self if parent is None else parent

    @property
    def is_view(self):
        return self.parent is not None

    @property
    def shape(self):
        return (len(self.labels), len(self.names))

    size = shape
    ndim = property(fget=lambda self: 2)
    nsamples = property(fget=lambda self: self.shape[0])
    nfeatures = property(fget=lambda self: self.shape[1])


    def __len__(self):
        return self.shape[0]


    def axes(self, dim=None):
        """Index ranges of both dimensions, or of the 1-based `dim`

        Rows are addressed by position, columns by feature name.
        """
        axes = (range(self.shape[0]), self.names)
        if dim is None:
            return axes
        if dim not in (1, 2):
            raise ValueError("FeatureSets have 2 dimensions, not %r" % (dim,))
        return axes[dim - 1]


    def eachrow(self):
        """Iterate over (label, feature row) pairs"""
        features = self.features
        for i, label in enumerate(self.labels):
            yield label, features[i]


    def eachcol(self):
        """Iterate over (name, feature column) pairs"""
        features = self.features
        for j, name in enumerate(self.names):
            yield name, features[:, j]


    def __iter__(self):
        return self.eachrow()


    def _element_types(self):
        """Kinds of labels and names, dtype of features

        String lengths do not matter for labels and names, hence only their
        kind is compared.
        """
        return (self.labels.dtype.kind, self.names.dtype.kind,
                self.features.dtype)


    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        if self._element_types() != other._element_types():
            return False
        return self.labels.tolist() == other.labels.tolist() \
               and self.names.tolist() == other.names.tolist() \
               and np.array_equal(self.features, other.features)


    def __ne__(self, other):
        res = self.__eq__(other)
        if res is NotImplemented:
            return res
        return not res


    def __hash__(self):
        return hash((self.__class__.__name__,
                     self._element_types(),
                     tuple(self.labels.tolist()),
                     tuple(self.names.tolist()),
                     self.shape,
                     tuple(self.features.ravel().tolist())))


    def __str__(self):
        shapestr = '<%s>' % ' x '.join(["%d" % x for x in self.shape])
        if self.is_view:
            return _str(self, shapestr, 'view')
        return _str(self, shapestr)


    def __repr_full__(self):
        return _repr(self,
                     labels=repr(self.labels),
                     names=repr(self.names),
                     features=repr(self.features),
                     id=repr(self.id))

    __repr__ = {'full' : __repr_full__,
                'str'  : __str__}[__REPR_STYLE__]


def merge(*featuresets):
    """Merge any number of FeatureSets left to right

    ``merge(a, b, c)`` is ``a.merge(b).merge(c)``.

    Raises
    ------
    ValueError
      If no FeatureSet is given.
    """
    if not len(featuresets):
        raise ValueError('merging of zero FeatureSets is impossible')
    if __debug__:
        debug('MERGE', "Merging %d feature sets" % len(featuresets))
    return reduce(lambda a, b: a.merge(b), featuresets)
