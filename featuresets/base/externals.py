# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Helper to verify presence of external libraries and modules
"""

__docformat__ = 'restructuredtext'

import importlib

import numpy as np                      # NumPy is required anyways

from featuresets.base import cfg, warning

if __debug__:
    from featuresets.base import debug


class _VersionsChecker(dict):
    """Helper class to check the versions of the available externals
    """

    def __init__(self, *args, **kwargs):
        self._KNOWN = {}
        dict.__init__(self, *args, **kwargs)

    def __getitem__(self, key):
        if key not in self:
            if key in self._KNOWN:
                # run registered procedure to obtain versions
                self._KNOWN[key]()
            else:
                # just check for presence -- that function might set
                # the version information
                exists(key, force=True, raise_=True)
        return super(_VersionsChecker, self).__getitem__(key)

versions = _VersionsChecker()
"""Versions of available externals, as strings
"""


def __check(name, a='__version__'):
    """Import module `name` and record its version if it exposes one"""
    module = importlib.import_module(name)
    v = module
    try:
        for attr in a.split('.'):
            v = getattr(v, attr)
        versions[name.split('.')[0]] = str(v)
    except AttributeError as e:
        # we can't assign version but it is there
        if __debug__:
            debug('EXT', 'Failed to acquire a version of %s: %s' % (name, e))
    return True


def __assign_numpy_version():
    versions['numpy'] = np.__version__


def __check_h5py():
    __check('h5py', 'version.version')
    import h5py
    versions['hdf5'] = h5py.version.hdf5_version


def __check_h5py_mmap():
    """Memory mapping needs the raw file offset of a dataset"""
    __check_h5py()
    import h5py
    if not hasattr(h5py.h5d.DatasetID, 'get_offset'):
        raise ImportError("Installed h5py cannot report dataset offsets")


def __assign_skl_version():
    import sklearn as skl
    versions['skl'] = skl.__version__


_KNOWN = {'numpy': __assign_numpy_version,
          'h5py': __check_h5py,
          'hdf5': __check_h5py,
          'h5py mmap': __check_h5py_mmap,
          'skl': __assign_skl_version,
          'pandas': lambda: __check('pandas'),
          }


def exists(dep, force=False, raise_=False, issueWarning=None,
           exception=RuntimeError):
    """
    Test whether a known dependency is installed on the system.

    This method allows us to test for individual dependencies without
    testing all known dependencies. It also ensures that we only test
    for a dependency once.

    Parameters
    ----------
    dep : string or list of string
      The dependency key(s) to test.
    force : boolean
      Whether to force the test even if it has already been
      performed.
    raise_ : boolean, str
      Whether to raise an exception if dependency is missing.
      If True, it is still conditioned on the global setting
      FSETS_EXTERNALS_RAISE_EXCEPTION, while would raise exception
      if missing despite the configuration if 'always'.
    issueWarning : string or None or True
      If string, warning with given message would be thrown.
      If True, standard message would be used for the warning
      text.
    exception : exception, optional
      What exception to raise.  Defaults to RuntimeError
    """
    # if we are provided with a list of deps - go through all of them
    if isinstance(dep, (list, tuple)):
        results = [exists(dep_, force, raise_) for dep_ in dep]
        return all(results)

    # where to look in cfg
    cfgid = 'have ' + dep

    # pre-handle raise_ according to the global settings and local argument
    if isinstance(raise_, str):
        if raise_.lower() == 'always':
            raise_ = True
        else:
            raise ValueError("Unknown value of raise_=%s. "
                             "Must be bool or 'always'" % raise_)
    else: # must be bool conditioned on the global settings
        raise_ = raise_ \
                and cfg.getboolean('externals', 'raise exception', True)

    # prevent unnecessarry testing
    if cfg.has_option('externals', cfgid) \
       and not cfg.getboolean('externals', 'retest', default='no') \
       and not force:
        if __debug__:
            debug('EXT', "Skip retesting for '%s'." % dep)

        # check whether an exception should be raised, even though the external
        # was already tested previously
        if not cfg.getboolean('externals', cfgid) and raise_:
            raise exception("Required external '%s' was not found" % dep)
        return cfg.getboolean('externals', cfgid)

    # default to 'not found'
    result = False

    if dep not in _KNOWN:
        raise ValueError("%r is not a known dependency key." % (dep,))

    # try and load the specific dependency
    if __debug__:
        debug('EXT', "Checking for the presence of %s" % dep)

    estr = ''
    # Suppress NumPy warnings while testing for externals
    olderr = np.seterr(all="ignore")
    try:
        _KNOWN[dep]()
        result = True
    except (ImportError, AttributeError, RuntimeError) as e:
        estr = ". Caught exception was: " + str(e)
    finally:
        # And restore warnings
        np.seterr(**olderr)

    if __debug__:
        debug('EXT', "Presence of %s is%s verified%s" %
              (dep, {True: '', False: ' NOT'}[result], estr))

    if not result:
        if raise_:
            raise exception("Required external '%s' was not found" % dep)
        if issueWarning is not None \
               and cfg.getboolean('externals', 'issue warning', True):
            if issueWarning is True:
                warning("Required external '%s' was not found" % dep)
            else:
                warning(issueWarning)

    # store result in config manager
    if not cfg.has_section('externals'):
        cfg.add_section('externals')
    cfg.set('externals', cfgid, {True: 'yes', False: 'no'}[result])

    return result


def check_all_dependencies(force=False, verbosity=1):
    """
    Test for all known dependencies.

    Parameters
    ----------
    force : boolean
      Whether to force the test even if it has already been
      performed.

    """
    # loop over all known dependencies
    for dep in _KNOWN:
        if not exists(dep, force):
            if verbosity:
                warning("%s is not available." % dep)

    if __debug__:
        debug('EXT', 'The following optional externals are present: %s'
                     % [k[5:] for k in cfg.options('externals')
                        if k.startswith('have')
                        and cfg.getboolean('externals', k)])
