# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Helpers to unify/facilitate unittesting within featuresets

"""

__docformat__ = 'restructuredtext'

import numpy as np            # we barely can step somewhere without it
from featuresets.base import externals

if __debug__:
    from featuresets.base import debug
    debug('INIT', 'featuresets.testing')

from featuresets.testing.tools import *

if __debug__:
    debug('INIT', 'featuresets.testing end')
