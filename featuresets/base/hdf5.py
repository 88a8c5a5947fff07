# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""HDF5-based file IO for FeatureSets.

Based on the `h5py` package, this module stores a FeatureSet as a flat HDF5
file with five datasets at the root level:

``id``
  scalar UTF-8 string holding the UUID of the stored FeatureSet
``created_at``
  scalar ISO-8601 string with the UTC construction time
``labels``
  1D dataset (numeric, boolean or UTF-8 strings)
``names``
  1D dataset (numeric, boolean or UTF-8 strings)
``features``
  contiguous 2D dataset (samples x features)

Since `features` is stored contiguously (unless compression was requested),
a stored FeatureSet can be loaded as a read-only memory map without reading
the matrix into memory.

.. note::

  A view is stored as a regular FeatureSet with the visible slice of its
  data.  The identity of the stored FeatureSet is retained on loading, but
  the view/parent relation is not.
"""

__docformat__ = 'restructuredtext'

import os
import os.path as osp
from datetime import datetime, timezone

import numpy as np
import h5py

import featuresets
from featuresets.base import cfg, externals, verbose, warning
from featuresets.base.dataset import InvalidContainerError, \
     ContainerConversionError

if __debug__:
    from featuresets.base import debug

REQUIRED_FIELDS = ('id', 'created_at', 'labels', 'names', 'features')
"""Datasets every FeatureSet container file must have at its root"""

_NATIVE_KINDS = 'biufc'


def _vector2hdf(hdf, field, values, **kwargs):
    """Store a 1D vector of labels or names"""
    arr = np.asanyarray(values)
    kind = arr.dtype.kind
    if kind in _NATIVE_KINDS or kind == 'S':
        hdf.create_dataset(field, data=arr, **kwargs)
    elif kind == 'U' or (kind == 'O'
                         and all(isinstance(v, str) for v in arr.tolist())):
        hdf.create_dataset(field, data=[str(v) for v in arr.tolist()],
                           dtype=h5py.string_dtype(), **kwargs)
    else:
        raise ContainerConversionError(
            "Cannot store %s of dtype %s in HDF5. Only numbers, booleans and "
            "strings are supported." % (field, arr.dtype))


def _hdf2vector(dset):
    """Reconstruct a 1D vector of labels or names"""
    if dset.dtype.kind != 'S' \
       and h5py.check_string_dtype(dset.dtype) is not None:
        values = dset.asstr()[()].tolist()
        return np.array(values, dtype=str)
    return dset[()]


def _hdf2str(dset):
    value = dset[()]
    if isinstance(value, bytes):
        value = value.decode('utf-8')
    return str(value)


def filename(featureset):
    """File name a FeatureSet is stored under by `save_to_directory()`"""
    return '%s.%s' % (featureset.id, cfg.get('hdf5', 'extension', 'hdf5'))


def save(featureset, destination, compression=None, mkdir=True):
    """Store a FeatureSet in an HDF5 file.

    Parameters
    ----------
    featureset : FeatureSet
      Views are stored with their visible content only.
    destination : str or h5py.File
      Name of the file the FeatureSet shall be stored in, or an HDF5 file
      opened for writing.  An existing file of the same name is replaced.
    compression : None or int or {'gzip', 'lzf'}, optional
      Level of compression for gzip, or another compression strategy
      for the `features` dataset.  Compressed feature matrices cannot be
      memory mapped on loading.
    mkdir : bool, optional
      Create target directory if it does not exist yet.

    Raises
    ------
    ContainerConversionError
      If labels, names or features are of a type HDF5 cannot hold.
    """
    features = featureset.features
    if features.dtype.kind not in _NATIVE_KINDS:
        raise ContainerConversionError(
            "Cannot store features of dtype %s in HDF5" % features.dtype)

    if isinstance(destination, h5py.File):
        own_file = False
        hdf = destination
    else:
        own_file = True
        if mkdir:
            target_dir = osp.dirname(destination)
            if target_dir and not osp.exists(target_dir):
                os.makedirs(target_dir)
        hdf = h5py.File(destination, 'w')

    if __debug__:
        debug('HDF5', "Storing %s into %s" % (featureset, hdf.filename))

    try:
        hdf.attrs['__featuresets_version__'] = featuresets.__version__
        hdf.create_dataset('id', data=featureset.id,
                           dtype=h5py.string_dtype())
        hdf.create_dataset('created_at',
                           data=featureset.created_at.isoformat(),
                           dtype=h5py.string_dtype())
        _vector2hdf(hdf, 'labels', featureset.labels)
        _vector2hdf(hdf, 'names', featureset.names)
        kwargs = {}
        if compression is not None:
            kwargs['compression'] = compression
        hdf.create_dataset('features', data=np.ascontiguousarray(features),
                           **kwargs)
    finally:
        # if we opened the file ourselves we close it now
        if own_file:
            hdf.close()


def save_to_directory(featureset, directory='.', **kwargs):
    """Store a FeatureSet under its generated file name in `directory`

    Parameters
    ----------
    featureset : FeatureSet
    directory : str, optional
      Created if it does not exist yet.
    **kwargs
      Passed to `save()`.

    Returns
    -------
    str
      Path of the created file (``<directory>/<id>.hdf5``).
    """
    path = osp.join(directory, filename(featureset))
    save(featureset, path, mkdir=True, **kwargs)
    verbose(1, "Created file %s" % path)
    return path


def _open(source):
    """Return an HDF5 file and whether it was opened here"""
    if isinstance(source, h5py.File):
        return source, False
    if not osp.exists(source):
        raise InvalidContainerError("No such file: %r" % (source,))
    if not h5py.is_hdf5(source):
        raise InvalidContainerError("%r is not an HDF5 file" % (source,))
    return h5py.File(source, 'r'), True


def _missing_fields(hdf):
    return [f for f in REQUIRED_FIELDS if not f in hdf]


def is_valid(source):
    """Check whether `source` holds a stored FeatureSet

    Parameters
    ----------
    source : str or h5py.File

    Returns
    -------
    bool
      True if all required datasets are present at the root level.
      Files which are not HDF5 files are not valid.
    """
    try:
        hdf, own_file = _open(source)
    except InvalidContainerError:
        return False
    try:
        return not len(_missing_fields(hdf))
    finally:
        if own_file:
            hdf.close()


def _mmap_features(dset, path):
    """Memory map a contiguous 2D dataset read-only"""
    if dset.size == 0:
        # nothing to map
        return np.empty(dset.shape, dtype=dset.dtype)
    offset = dset.id.get_offset()
    if offset is None:
        warning("Features in %s are not stored contiguously (chunked or "
                "compressed) and cannot be memory mapped. Reading them "
                "into memory instead." % path)
        return dset[()]
    if __debug__:
        debug('HDF5', "Memory mapping features %s of %s at offset %d"
                      % (dset.shape, path, offset))
    return np.memmap(path, dtype=dset.dtype, mode='r', offset=offset,
                     shape=dset.shape, order='C')


def load(source, mmap=False):
    """Load a FeatureSet stored by `save()`.

    Parameters
    ----------
    source : str or h5py.File
      Name of the file, or an open HDF5 file, to load the FeatureSet from.
    mmap : bool, optional
      If True, `features` is a read-only `numpy.memmap` into the file
      instead of an in-memory array.

    Returns
    -------
    FeatureSet
      Owned (not a view) instance with the stored `id` and `created_at`.

    Raises
    ------
    InvalidContainerError
      If `source` is not an HDF5 file or lacks any of the required
      datasets.
    """
    from featuresets.datasets.base import FeatureSet

    hdf, own_file = _open(source)
    try:
        missing = _missing_fields(hdf)
        if len(missing):
            raise InvalidContainerError(
                "%s is not a FeatureSet container. Missing datasets: %s"
                % (hdf.filename, ', '.join(missing)))

        if __debug__:
            debug('HDF5', "Loading FeatureSet from %s (mmap=%s)"
                          % (hdf.filename, mmap))
        fsid = _hdf2str(hdf['id'])
        created_at = datetime.fromisoformat(_hdf2str(hdf['created_at']))
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        labels = _hdf2vector(hdf['labels'])
        names = _hdf2vector(hdf['names'])
        if mmap:
            externals.exists('h5py mmap', raise_=True)
            features = _mmap_features(hdf['features'], hdf.filename)
        else:
            features = hdf['features'][()]
    finally:
        if own_file:
            hdf.close()

    return FeatureSet(labels, names, features, id=fsid, created_at=created_at)
