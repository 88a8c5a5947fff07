# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Translation of feature names into column positions

Feature names may be of any hashable type (strings, integers, ...).  The
mapping from name to position is built once per container; whenever a name
occurs more than once the last position wins.
"""

__docformat__ = 'restructuredtext'

import numpy as np

from featuresets.base import warning
from featuresets.base.dataset import UnknownNameError
from featuresets.base.types import is_scalar_name

if __debug__:
    from featuresets.base import debug


class _AllNames(object):
    """Marker for a column selector addressing every feature"""

    def __repr__(self):
        return 'ALL'

    def __reduce__(self):
        return 'ALL'

ALL = _AllNames()


def _as_key(name):
    """Convert numpy scalars into their Python equivalents for dict lookup"""
    if isinstance(name, np.generic):
        return name.item()
    return name


def build_name_index(names):
    """Build the name -> column position mapping

    Parameters
    ----------
    names : sequence
      Feature names in column order.

    Returns
    -------
    dict
      For duplicated names the position of the last occurrence is stored.
    """
    if isinstance(names, np.ndarray):
        names = names.tolist()
    index = {}
    for i, name in enumerate(names):
        index[name] = i
    if len(index) != len(names):
        warning("Feature names contain %d duplicate(s); the last occurrence "
                "of each duplicated name is addressed by name"
                % (len(names) - len(index)))
    if __debug__:
        debug('NAMES', "Built name index for %d features" % len(names))
    return index


def resolve_names(name_index, selector, names=None):
    """Translate a column selector into column positions

    Parameters
    ----------
    name_index : dict
      Mapping as returned by `build_name_index`.
    selector
      ``slice(None)`` or ``Ellipsis`` address all columns and yield `ALL`.
      A single name yields its position.  A sequence of names (list, tuple,
      range or array) yields a list of positions in selector order.  A
      partial slice selects the names at those positions of `names`, which
      are then resolved through the mapping.
    names : sequence, optional
      Feature names in column order.  Only needed for partial slices.

    Raises
    ------
    UnknownNameError
      If any requested name is not known.
    """
    if selector is Ellipsis or (isinstance(selector, slice)
                                and selector == slice(None)):
        return ALL

    if isinstance(selector, slice):
        if names is None:
            raise ValueError("Feature names are required to resolve %r"
                             % (selector,))
        selector = list(names[selector])

    if is_scalar_name(selector):
        key = _as_key(selector)
        try:
            return name_index[key]
        except (KeyError, TypeError):
            raise UnknownNameError(key)

    if isinstance(selector, np.ndarray):
        selector = selector.tolist()

    positions = []
    for name in selector:
        key = _as_key(name)
        try:
            positions.append(name_index[key])
        except (KeyError, TypeError):
            raise UnknownNameError(key)
    return positions
