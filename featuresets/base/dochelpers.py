# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Various helpers to render __str__ and __repr__ of featuresets objects"""

__docformat__ = 'restructuredtext'

import re
from reprlib import Repr

from featuresets.base import cfg

if __debug__:
    from featuresets.base import debug

__saferepr = Repr()
__saferepr.maxstring = 40
__saferepr.maxother = 40


def _saferepr(obj):
    """Abbreviated repr which never spits out megabytes of array content
    """
    return __saferepr.repr(obj)


def _repr_attrs(obj, attrs, default=None, error_value='ERROR'):
    """Helper to obtain a list of formatted attributes different from
    the default
    """
    out = []
    for a in attrs:
        v = getattr(obj, a, error_value)
        if not (v is default or isinstance(v, str) and v == default):
            out.append('%s=%s' % (a, _saferepr(v)))
    return out


def _repr(obj, *args, **kwargs):
    """Helper to get a structured __repr__ for all objects.

    Parameters
    ----------
    obj : object
      This will typically be `self` of the to be documented object.
    *args, **kwargs : str
      An arbitrary number of additional items. All of them must be of type
      `str`. All items will be appended comma separated to the class name.
      Keyword arguments will be appended as `key`=`value.

    Returns
    -------
    str
    """
    cls_name = obj.__class__.__name__
    if __debug__ and 'MODULE_IN_REPR' in debug.active:
        cls_name = '%s.%s' % (obj.__class__.__module__, cls_name)
    truncate = cfg.get_as_dtype('verbose', 'truncate repr', int, default=200)
    # -5 to take (...) into account
    max_length = truncate - 5 - len(cls_name)
    if max_length < 0:
        max_length = 0
    auto_repr = ', '.join(list(args)
                   + ["%s=%s" % (k, v) for k, v in kwargs.items()])

    if truncate is not None and len(auto_repr) > max_length:
        auto_repr = auto_repr[:max_length] + '...'

    return "%s(%s)" % (cls_name, auto_repr)


def _strid(obj):
    """Helper for centralized string id representation in debug msgs
    """
    return "#%d" % (id(obj))


def strip_strid(s):
    """Strip off strids (#NUMBER) within a string
    """
    return re.sub("#[0-9]{7,100}", "", s)


def _str(obj, *args, **kwargs):
    """Helper to get a structured __str__ for all objects.

    Optional additional information might be added under certain debugging
    conditions (e.g. `id(obj)`).

    Parameters
    ----------
    obj : object
      This will typically be `self` of the to be documented object.
    *args, **kwargs : str
      An arbitrary number of additional items. All of them must be of type
      `str`. All items will be appended after the class name.

    Returns
    -------
    str
    """
    truncate = cfg.get_as_dtype('verbose', 'truncate str', int, default=200)

    s = obj.__class__.__name__
    auto_descr = ' '.join(list(args)
                   + ["%s=%s" % (k, v) for k, v in kwargs.items()])
    if len(auto_descr):
        s = s + auto_descr

    if truncate is not None and len(s) > truncate - 5:
        # -5 to take <...> into account
        s = s[:truncate-5] + '...'

    if __debug__ and 'ID_IN_REPR' in debug.active:
        s += ' ' + _strid(obj)

    return s
