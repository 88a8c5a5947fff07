# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for the checks of external dependencies"""

from featuresets.testing import *
from featuresets.base import externals, cfg


def test_externals_numpy():
    assert_true(externals.exists('numpy'))
    assert_true(externals.versions['numpy'])
    # result is cached in the configuration
    assert_equal(cfg.get('externals', 'have numpy'), 'yes')


def test_externals_unknown():
    assert_raises(ValueError, externals.exists, 'nonexisting_dependency')
    assert_raises(ValueError, externals.exists, 'numpy', raise_='sometimes')


def test_externals_cached_absence():
    cfgid = 'have pandas'
    old = cfg.get('externals', cfgid)
    cfg.set('externals', cfgid, 'no')
    try:
        # not retested unless forced
        assert_false(externals.exists('pandas'))
        assert_raises(RuntimeError, externals.exists, 'pandas',
                      raise_='always')
        assert_raises(LookupError, externals.exists, 'pandas',
                      raise_='always', exception=LookupError)
    finally:
        if old is None:
            cfg.remove_option('externals', cfgid)
        else:
            cfg.set('externals', cfgid, old)


def test_externals_list():
    assert_true(externals.exists(['numpy', 'numpy']))


def test_externals_h5py_versions():
    skip_if_no_external('h5py')
    assert_true(externals.versions['h5py'])
    assert_true(externals.versions['hdf5'])


def test_check_all_dependencies():
    externals.check_all_dependencies(verbosity=0)
    # every known dependency was checked
    for dep in ('numpy', 'h5py', 'skl', 'pandas'):
        assert_true(cfg.has_option('externals', 'have %s' % dep))
