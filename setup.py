#!/usr/bin/env python
# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Python setuptools setup for featuresets"""

import sys

from setuptools import setup


if sys.version_info[:2] < (3, 7):
    raise RuntimeError("featuresets requires Python 3.7 or higher")

# Notes on the setup
# Version scheme is: major.minor.patch<suffix>

# define the setup
def setup_package():
    setup(name='featuresets',
          version='0.4.0',
          license='MIT License',
          description='Labelled feature matrices with named columns, views '
                      'and HDF5 storage',
          long_description=
              "featuresets couples a samples x features matrix with one "
              "label per sample and one name per feature. Columns are "
              "addressed by name, rows by position. Subsets can be copied "
              "or viewed without copying, FeatureSets describing the same "
              "samples can be merged, and FeatureSets are stored in (and "
              "memory mapped from) HDF5 files. Adapters provide tabular "
              "access and random forests on top of scikit-learn.",
          python_requires='>=3.7',
          install_requires=['numpy', 'h5py'],
          extras_require={
              'learn': ['scikit-learn'],
              'tables': ['pandas'],
              'tests': ['pytest', 'scikit-learn', 'pandas'],
          },
          # please maintain alphanumeric order
          packages=[ 'featuresets',
                     'featuresets.base',
                     'featuresets.clfs',
                     'featuresets.datasets',
                     'featuresets.misc',
                     'featuresets.testing',
                     'featuresets.tests',
                   ],
          )


if __name__ == '__main__':
    setup_package()
