# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Verbose output and debugging facility

Examples:
from featuresets.base import verbose, debug; debug.active = ['DS']; debug('DS', "blah")

"""

__docformat__ = 'restructuredtext'

import re
import sys


class Logger(object):
    """Base class to provide logging
    """

    def __init__(self, handlers=None):
        """Initialize the logger with a set of handlers to use for output

        Each handler must have write() method implemented
        """
        if handlers is None:
            handlers = [sys.stdout]
        self.__close_handlers = []
        self.__handlers = []
        self._set_handlers(handlers)
        self.__lfprev = True
        self.__crprev = 0               # number of symbols in previous cr-ed

    def __del__(self):
        self._close_opened_handlers()

    def _set_handlers(self, handlers):
        """Set list of handlers for the log.

        A handler can be opened files, stdout, stderr, or a string, which
        will be considered a filename to be opened for writing
        """
        handlers_ = []
        self._close_opened_handlers()
        for handler in handlers:
            if isinstance(handler, str):
                stream = {'stdout': sys.stdout,
                          'stderr': sys.stderr}.get(handler.lower())
                if stream is None:
                    try:
                        stream = open(handler, 'w')
                    except OSError as e:
                        raise RuntimeError(
                            "Cannot open file %s for writing by the logger: %s"
                            % (handler, e))
                    self.__close_handlers.append(stream)
                handler = stream
            handlers_.append(handler)
        self.__handlers = handlers_

    def _close_opened_handlers(self):
        """Close opened handlers (such as opened logfiles)
        """
        for handler in getattr(self, '_Logger__close_handlers', []):
            handler.close()
        self.__close_handlers = []

    def _get_handlers(self):
        """Return active handlers
        """
        return self.__handlers


    def __call__(self, msg, args=None, lf=True, cr=False, **kwargs):
        """Write msg to each of the handlers.

        It can append a newline (lf = Line Feed) or return
        to the beginning before output and to take care about
        cleaning previous message if present
        """
        if args is not None:
            try:
                msg = msg % args
            except (TypeError, ValueError) as e:
                msg = "%s [%% FAILED due to %s]" % (msg, e)

        if 'msgargs' in kwargs:
            msg = msg % kwargs['msgargs']

        if cr:
            msg_ = ""
            if self.__crprev > 0:
                # wipe out older line to make sure to see no ghosts
                msg_ = "\r%s" % (" " * self.__crprev)
            msg_ += "\r" + msg
            self.__crprev = len(msg)
            msg = msg_
            lf = False
        else:
            self.__crprev += len(msg)

        if lf:
            msg = msg + "\n"
            self.__crprev = 0

        for handler in self.__handlers:
            handler.write(msg)
            flush = getattr(handler, 'flush', None)
            if flush is not None:
                flush()

        self.__lfprev = lf

    handlers = property(fget=_get_handlers, fset=_set_handlers)
    lfprev = property(fget=lambda self: self.__lfprev)



class LevelLogger(Logger):
    """Logger not to log anything with a level smaller than specified.
    """

    def __init__(self, level=0, indent=" ", *args, **kwargs):
        """
        Parameters
        ----------
        level : int, optional
          Level to consider be active.
        indent : str, optional
          String to use for indentation.
        """
        Logger.__init__(self, *args, **kwargs)
        self.__level = 0
        self.__indent = indent
        self._set_level(level)
        self._set_indent(indent)

    def _set_level(self, level):
        """Set logging level
        """
        ilevel = int(level)
        if ilevel < 0:
            raise ValueError(
                "Negative verbosity levels (got %d) are not supported"
                % ilevel)
        self.__level = ilevel

    def _set_indent(self, indent):
        """Either to indent the lines based on message log level"""
        self.__indent = "%s" % indent

    def __call__(self, level, msg, *args, **kwargs):
        """Write msg and indent using self.indent it if it was requested.

        It appends a newline since most commonly each call is a separate
        message
        """
        if level <= self.level:
            if self.lfprev and self.indent:
                # indent if previous line ended with newline
                msg = self.indent * level + msg
            Logger.__call__(self, msg, *args, **kwargs)

    level = property(fget=lambda self: self.__level, fset=_set_level)
    indent = property(fget=lambda self: self.__indent, fset=_set_indent)


class OnceLogger(Logger):
    """Logger which prints a message for a given ID just once.

    It could be used for one-time warning to don't overfill the output
    with useless repeatative messages.
    """

    def __init__(self, *args, **kwargs):
        Logger.__init__(self, *args, **kwargs)
        self._known = {}

    def __call__(self, ident, msg, count=1, *args, **kwargs):
        """Write `msg` if `ident` occured less than `count` times by now.
        """
        if ident not in self._known:
            self._known[ident] = 0

        if count < 0 or self._known[ident] < count:
            self._known[ident] += 1
            Logger.__call__(self, msg, *args, **kwargs)


class SetLogger(Logger):
    """Logger which prints based on defined sets identified by Id.
    """

    def __init__(self, register=None, active=None, printsetid=True,
                 *args, **kwargs):
        """
        Parameters
        ----------
        register : dict or None
          What Ids are to be known. Each item dictionary contains consists
          of concise key and a description as the value.
        active : iterable
          What Ids to consider active upon initialization.
        printsetid : bool, optional
          Either to prefix each line with the target Id of a set in which
          the line was printed to (default behavior).
        """
        if register is None:
            register = {}
        if active is None:
            active = []
        Logger.__init__(self, *args, **kwargs)
        self.__printsetid = printsetid
        self.__registered = register
        self.__active = []
        self.__maxstrlength = 0
        self._set_active(active)
        self._set_printsetid(printsetid)

    def _set_active(self, active):
        """Set active logging set
        """
        registered_keys = list(self.__registered.keys())
        self.__active = []
        for item in set(active):
            if item == '':
                continue
            if isinstance(item, str):
                if item.upper() == "ALL":
                    self.__active = registered_keys
                    break
                # try to match item as it is regexp
                regexp_str = "^%s$" % item
                try:
                    regexp = re.compile(regexp_str)
                except re.error:
                    raise ValueError(
                        "Unable to create regular expression out of %s" % item)
                toactivate = [k for k in registered_keys if regexp.match(k)]
                if not len(toactivate):
                    raise ValueError(
                        "Unknown debug ID '%s' was asked to become active,"
                        " or regular expression '%s' did not get any match"
                        " among known ids: %s"
                        % (item, regexp_str, sorted(registered_keys)))
            else:
                toactivate = [item]

            for item_ in toactivate:
                if item_ not in registered_keys:
                    raise ValueError(
                        "Unknown debug ID %s was asked to become active"
                        % item_)
            self.__active += toactivate

        self.__active = list(set(self.__active))
        self.__maxstrlength = max([len(str(x)) for x in self.__active] + [0])

    def _set_printsetid(self, printsetid):
        """Either to print set Id at each line"""
        self.__printsetid = printsetid

    def __call__(self, setid, msg, *args, **kwargs):
        """
        Write msg

        It appends a newline since most commonly each call is a separate
        message
        """
        if setid in self.__active:
            if len(msg) > 0 and self.__printsetid:
                msg = "[%%-%ds] " % self.__maxstrlength % (setid) + msg
            Logger.__call__(self, msg, *args, **kwargs)

    def register(self, setid, description):
        """ "Register" a new setid with a given description for easy finding
        """
        if setid in self.__registered:
            raise ValueError(
                "Setid %r is already known with description '%s'"
                % (setid, self.__registered[setid]))
        self.__registered[setid] = description

    def set_active_from_string(self, value):
        """Given a string listing registered(?) setids, make then active
        """
        self.active = value.split(",")

    def print_registered(self, detailed=True):
        kd = self.registered
        rks = sorted(kd.keys())
        if not detailed:
            print("Registered debug entries: %s" % ', '.join(rks))
        else:
            print("Registered debug entries:")
            maxl = max([len(k) for k in rks] + [0])
            for k in rks:
                print('%%%ds  %%s' % maxl % (k, kd[k]))

    printsetid = property(fget=lambda self: self.__printsetid,
                          fset=_set_printsetid)
    active = property(fget=lambda self: self.__active, fset=_set_active)
    registered = property(fget=lambda self: self.__registered)


if __debug__:

    import os
    import time
    import traceback

    def mbasename(s):
        """Custom function to include directory name if filename is too common

        Also strip .py at the end
        """
        base = os.path.basename(s)
        if base.endswith('.py'):
            base = base[:-3]
        if base in set(['base', '__init__']):
            base = os.path.basename(os.path.dirname(s)) + '.' + base
        return base

    class TraceBack(object):
        """Customized traceback to be included in debug messages
        """

        def __call__(self):
            ftb = traceback.extract_stack(limit=100)[:-2]
            entries = [[mbasename(x[0]), str(x[1])] for x in ftb]
            entries = [e for e in entries if e[0] != 'unittest']

            # collapse consecutive frames from the same module
            entries_out = [entries[0]]
            for entry in entries[1:]:
                if entry[0] == entries_out[-1][0]:
                    entries_out[-1][1] += ',%s' % entry[1]
                else:
                    entries_out.append(entry)
            return '>'.join(['%s:%s' % (x[0], x[1]) for x in entries_out])


    class RelativeTime(object):
        """Simple helper class to provide relative time it took from previous
        invocation"""

        def __init__(self, format="%3.3f sec"):
            self.__prev = None
            self.__format = format

        def __call__(self):
            dt = 0.0
            ct = time.time()
            if self.__prev is not None:
                dt = ct - self.__prev
            self.__prev = ct
            return self.__format % dt


    class DebugLogger(SetLogger):
        """
        Logger for debugging purposes.

        Expands SetLogger with ability to print some interesting information
        (metrics) about current process at each debug printout
        """

        _known_metrics = {
            'pid': os.getpid,
            'asctime': time.asctime,
            'tb': TraceBack(),
            }

        def __init__(self, metrics=None, offsetbydepth=True, *args, **kwargs):
            """
            Parameters
            ----------
            metrics : iterable of (func or str) or None
              What metrics (functions) to be reported.  If item is a string,
              it is matched against `_known_metrics` keys.
            offsetbydepth : bool, optional
              Either to offset lines depending on backtrace depth (default
              behavior).
            *args, **kwargs
              Passed to SetLogger initialization
            """
            if metrics is None:
                metrics = []
            SetLogger.__init__(self, *args, **kwargs)
            self.__metrics = []
            self._offsetbydepth = offsetbydepth
            self._known_metrics = dict(DebugLogger._known_metrics)
            self._known_metrics['reltime'] = RelativeTime()
            for metric in metrics:
                self.register_metric(metric)

        def register_metric(self, func):
            """Register some metric to report

            func can be either a function call or a string which should
            correspond to known metrics
            """
            if isinstance(func, str):
                if func in ['all', 'ALL']:
                    func = list(self._known_metrics.keys())

            if isinstance(func, str):
                if func in self._known_metrics:
                    func = self._known_metrics[func]
                else:
                    raise ValueError(
                        "Unknown name %s for metric in DebugLogger. "
                        "Known metrics are %s"
                        % (func, sorted(self._known_metrics.keys())))
            elif isinstance(func, list):
                self.__metrics = []     # reset
                for item in func:
                    self.register_metric(item)
                return

            if func not in self.__metrics:
                self.__metrics.append(func)

        def __call__(self, setid, msg, *args, **kwargs):
            if setid not in self.registered:
                raise ValueError("Not registered debug ID %s" % setid)

            if setid not in self.active:
                # don't even compute the metrics, since they might
                # be stateful as RelativeTime
                return

            msg_ = ' / '.join([str(x()) for x in self.__metrics])

            if len(msg_) > 0:
                msg_ = "{%s}" % msg_

            if len(msg) > 0:
                # determine blank offset using backstacktrace
                if self._offsetbydepth:
                    level = len(traceback.extract_stack()) - 2
                else:
                    level = 1
                msg = "DBG%s:%s%s" % (msg_, " " * level, msg)
                SetLogger.__call__(self, setid, msg, *args, **kwargs)
            else:
                msg = msg_
                Logger.__call__(self, msg, *args, **kwargs)

        def _set_offset_by_depth(self, b):
            self._offsetbydepth = b

        offsetbydepth = property(fget=lambda x: x._offsetbydepth,
                                 fset=_set_offset_by_depth)

        metrics = property(fget=lambda x: x.__metrics,
                           fset=register_metric)

else:

    class BlackHoleLogger(SetLogger):
        '''A logger that does absolutely nothing - it is used as a fallback
        so that debug(...) can still be called even if not __debug__'''

        def __init__(self, metrics=None, offsetbydepth=True, *args, **kwargs):
            SetLogger.__init__(self, *args, **kwargs)

        def __call__(self, setid, msg, *args, **kwargs):
            pass

        def register_metric(self, func):
            pass

        def register(self, setid, description):
            pass

        def set_active_from_string(self, value):
            pass

        def print_registered(self, detailed=True):
            print("BlackHoleLogger: nothing registered")
