# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Labelled feature matrices with named columns, views and HDF5 storage


Package Organization
====================
The featuresets package contains the following subpackages and modules:

:group Basic Data Structures: datasets
:group Learners: clfs
:group Miscellaneous: base misc testing
:group Unittests: tests

:requires: Python 3.7+
:version: 0.4.0

:license: The MIT License <http://www.opensource.org/licenses/mit-license.php>
"""

__docformat__ = 'restructuredtext'

# canonical featuresets version string
__version__ = '0.4.0'

import numpy as np
from featuresets.base import cfg
from featuresets.base import externals

if __debug__:
    from featuresets.base import debug
    debug('INIT', 'featuresets')

#
# RNGs control
#

from featuresets._random import _random_seed, seed, get_random_seed, get_rng

#
# Public API
#

from featuresets.base.dataset import AbstractFeatureSet, FeatureSetError, \
     ShapeMismatchError, UnknownNameError, RowMismatchError, \
     LabelMismatchError, ValueConflictError, InvalidContainerError, \
     UnimplementedCapabilityError, ContainerConversionError, merge
from featuresets.datasets.base import FeatureSet

#
# Externals-dependent tune ups
#

# featuresets is useless without numpy
# Also, this check enforcing population of externals.versions
# for possible later version checks, hence don't remove
externals.exists('numpy', force=True, raise_=True)

# If instructed -- no python or numpy warnings
if cfg.getboolean('warnings', 'suppress', default=False):
    import warnings
    warnings.simplefilter('ignore')
    # NumPy
    np.seterr(**dict([(x, 'ignore') for x in np.geterr()]))

if externals.exists('h5py'):
    from featuresets.base.hdf5 import save, save_to_directory, load, \
         is_valid, filename

if __debug__:
    debug('INIT', 'featuresets end')
