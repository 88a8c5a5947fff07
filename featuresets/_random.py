# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Helper module for control of RNGs (numpy and stock python)"""

import random
import numpy as np

from featuresets.base import cfg
if __debug__:
    from featuresets.base import debug

#
# RNG seeding
#

def get_random_seed():
    """Generate a random int good for seeding RNG via `seed` function"""
    return int(np.random.uniform()*(2**31-1))

if cfg.has_option('general', 'seed'):
    _random_seed = cfg.getint('general', 'seed')
else:
    _random_seed = get_random_seed()

def seed(random_seed=_random_seed):
    """Uniform and combined seeding of all relevant random number
    generators.
    """
    if __debug__:
        debug('RANDOM', 'Reseeding RNGs with %s' % random_seed)
    np.random.seed(random_seed)
    random.seed(random_seed)


def get_rng(rng=None):
    """Return a `numpy.random.Generator`

    Parameters
    ----------
    rng : None or int or Generator
      A Generator is returned as is, an int seeds a new one.  If None, a
      new Generator is seeded from the global numpy RNG, so it follows
      `seed()`.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        rng = np.random.randint(2**31 - 1)
    if __debug__:
        debug('RANDOM', 'Creating Generator seeded with %s' % rng)
    return np.random.default_rng(rng)

seed(_random_seed)
