# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Plumbing layer for featuresets

Module Organization
===================

featuresets.base module contains various modules which are used through
out featuresets code, and are generic building blocks

:group Basic: externals, config, verbosity, dochelpers, types
:group Containers: names, dataset, hdf5
"""

__docformat__ = 'restructuredtext'


import os
import traceback
from functools import reduce

from featuresets.base.config import ConfigManager
from featuresets.base.verbosity import LevelLogger, OnceLogger


#
# Setup verbose and debug outputs
#
class _SingletonType(type):
    """Simple singleton implementation adjusted from
    http://aspn.activestate.com/ASPN/Cookbook/Python/Recipe/412551
    """
    def __init__(mcs, *args):
        type.__init__(mcs, *args)
        mcs._instances = {}

    def __call__(mcs, sid, instance, *args):
        if not sid in mcs._instances:
            mcs._instances[sid] = instance
        return mcs._instances[sid]


class __Singleton(metaclass=_SingletonType):
    """To ensure single instance of a class instantiation (object)

    """

    def __init__(self, *args):
        pass

    # Provided __call__ just to make silly pylint happy
    def __call__(self):
        raise NotImplementedError

#
# As the very first step: Setup configuration registry instance and
# read all configuration settings from files and env variables
#
_cfgfile = os.environ.get('FSETSCONFIG', None)
if _cfgfile:
    # We have to provide a list
    _cfgfile = [_cfgfile]
cfg = __Singleton('cfg', ConfigManager(_cfgfile))

verbose = __Singleton("verbose", LevelLogger(
    handlers=cfg.get('verbose', 'output', default='stdout').split(',')))

# Levels for verbose
# 0 -- nothing besides errors
# 1 -- high level stuff -- file operations
# 2 -- construction and merging of feature sets
# 3 -- learner training and evaluation

# Lets check if environment can tell us smth
if cfg.has_option('general', 'verbose'):
    verbose.level = cfg.getint('general', 'verbose')


class WarningLog(OnceLogger):
    """Logging class of messsages to be printed just once per each message

    """

    def __init__(self, btlevels=10, btdefault=False,
                 maxcount=1, *args, **kwargs):
        """Define Warning logger.

        It is defined by
          btlevels : int
            how many levels of backtrack to print to give a hint on WTF
          btdefault : bool
            if to print backtrace for all warnings at all
          maxcount : int
            how many times to print each warning
        """
        OnceLogger.__init__(self, *args, **kwargs)
        self.__btlevels = btlevels
        self.__btdefault = btdefault
        self.__maxcount = maxcount
        self.__explanation_seen = False

    def __call__(self, msg, bt=None):
        if bt is None:
            bt = self.__btdefault
        tb = traceback.extract_stack(limit=2)
        msgid = repr(tuple(tb[-2]))         # take parent as the source of ID
        fullmsg = "WARNING: %s" % msg
        if not self.__explanation_seen:
            self.__explanation_seen = True
            fullmsg += "\n * Please note: warnings are " + \
                "printed only once, but underlying problem might " + \
                "occur many times *"
        if bt and self.__btlevels > 0:
            fullmsg += "Top-most backtrace:\n"
            fullmsg += reduce(
                lambda x, y:
                x + "\t%s:%d in %s where '%s'\n" % tuple(y),
                traceback.extract_stack(limit=self.__btlevels),
                "")

        OnceLogger.__call__(self, msgid, fullmsg, self.__maxcount)

    def _set_max_count(self, value):
        """Set maxcount for the warning"""
        self.__maxcount = value

    maxcount = property(fget=lambda x: x.__maxcount, fset=_set_max_count)

if cfg.has_option('warnings', 'bt'):
    warnings_btlevels = cfg.getint('warnings', 'bt')
    warnings_bt = True
else:
    warnings_btlevels = 10
    warnings_bt = False

if cfg.has_option('warnings', 'count'):
    warnings_maxcount = cfg.getint('warnings', 'count')
else:
    warnings_maxcount = 1

warning = WarningLog(
    handlers={
        False: cfg.get('warnings', 'output', default='stdout').split(','),
        True: []}[cfg.getboolean('warnings', 'suppress', default=False)],
    btlevels=warnings_btlevels,
    btdefault=warnings_bt,
    maxcount=warnings_maxcount
)


if __debug__:
    from featuresets.base.verbosity import DebugLogger
    # NOTE: all calls to debug must be preconditioned with
    # if __debug__:

    debug = __Singleton("debug", DebugLogger(
        handlers=cfg.get('debug', 'output', default='stdout').split(',')))

    # List agreed sets for debug
    debug.register('VERBOSE', "Verbose control debugging")
    debug.register('DBG', "Debug output itself")
    debug.register('INIT', "Just sequence of inits")
    debug.register('RANDOM', "Random number generation")
    debug.register('EXT', "External dependencies")
    debug.register('EXT_', "External dependencies (verbose)")
    debug.register('TEST', "Debug unittests")
    debug.register('MODULE_IN_REPR', "Include module path in __repr__")
    debug.register('ID_IN_REPR', "Include id in __repr__")

    debug.register('DS', "*FeatureSet")
    debug.register('DS_', "*FeatureSet (verbose)")
    debug.register('NAMES', "Feature name resolution")
    debug.register('MERGE', "Merging of feature sets")
    debug.register('HDF5', "HDF5 IO")
    debug.register('DG', "Data generators")
    debug.register('TBL', "Tabular access adapter")
    debug.register('CLF', "Random forest adapter")
    debug.register('CLF_', "Random forest adapter (verbose)")

    # Lets check if environment can tell us smth
    if cfg.has_option('general', 'debug'):
        debug.set_active_from_string(cfg.get('general', 'debug'))

    # Lets check if environment can tell us smth
    if cfg.has_option('debug', 'metrics'):
        debug.register_metric(cfg.get('debug', 'metrics').split(","))

else:  # if not __debug__

    # this debugger function does absolutely nothing.
    # It avoids the need of using 'if __debug__' for debug(...) calls.

    from featuresets.base.verbosity import BlackHoleLogger

    debug = __Singleton("debug", BlackHoleLogger())

if __debug__:
    debug('INIT', 'featuresets.base end')
