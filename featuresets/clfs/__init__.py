# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Import helper for learners trained on FeatureSets

Module Organization
===================
featuresets.clfs module contains adapters of external learners

:group External Interfaces: forest
"""

__docformat__ = 'restructuredtext'

if __debug__:
    from featuresets.base import debug
    debug('INIT', 'featuresets.clfs')
