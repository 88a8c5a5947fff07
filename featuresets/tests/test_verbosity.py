# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for featuresets verbose, warning and debug output"""

import unittest, re
from io import StringIO

from featuresets.base.verbosity import OnceLogger, LevelLogger, SetLogger

from featuresets.base import verbose, warning, WarningLog

if __debug__:
    from featuresets.base import debug
    debug.register('1', 'id 1')           # needed for testing
    debug.register('2', 'id 2')


class VerboseOutputTest(unittest.TestCase):

    def setUp(self):
        self.msg = "Test level 2"
        # output stream
        self.sout = StringIO()

        self.once = OnceLogger(handlers=[self.sout])

        # set verbose to 4th level
        self.__oldverbosehandlers = verbose.handlers
        self.__oldverbose_level = verbose.level
        verbose.handlers = []           # so debug doesn't spoil it
        verbose.level = 4
        if __debug__:
            self.__olddebughandlers = debug.handlers
            self.__olddebugactive = debug.active
            self.__olddebugmetrics = debug.metrics
            debug.active = ['1', '2', 'DS']
            debug.handlers = [self.sout]
            debug.offsetbydepth = False
        verbose.handlers = [self.sout]

    def tearDown(self):
        if __debug__:
            debug.active = self.__olddebugactive
            debug.handlers = self.__olddebughandlers
            debug.metrics = self.__olddebugmetrics
            debug.offsetbydepth = True
        verbose.handlers = self.__oldverbosehandlers
        verbose.level = self.__oldverbose_level
        self.sout.close()


    def test_verbose_above(self):
        """Test if it doesn't output at higher levels"""
        verbose(5, self.msg)
        self.assertEqual(self.sout.getvalue(), "")


    def test_verbose_below(self):
        """Test if outputs at lower levels and indents
        by default with spaces
        """
        verbose(2, self.msg)
        self.assertEqual(self.sout.getvalue(),
                         "  %s\n" % self.msg)

    def test_verbose_indent(self):
        """Test indent symbol
        """
        verbose.indent = "."
        verbose(2, self.msg)
        self.assertEqual(self.sout.getvalue(), "..%s\n" % self.msg)
        verbose.indent = " "            # restore

    def test_verbose_negative(self):
        """Test if chokes on negative level"""
        self.assertRaises(ValueError,
                          verbose._set_level, -10)

    def test_no_lf(self):
        """Test if it works fine with no newline (LF) symbol"""
        verbose(2, self.msg, lf=False)
        verbose(2, " continue ", lf=False)
        verbose(2, "end")
        verbose(0, "new %s" % self.msg)
        self.assertEqual(self.sout.getvalue(),
                         "  %s continue end\nnew %s\n" % \
                         (self.msg, self.msg))

    def test_cr(self):
        """Test if works fine with carriage return (cr) symbol"""
        verbose(2, self.msg, cr=True)
        verbose(2, "rewrite", cr=True)
        verbose(1, "rewrite 2", cr=True)
        verbose(1, " add", cr=False, lf=False)
        verbose(1, " finish")
        target = '\r  %s\r              \rrewrite' % self.msg + \
                 '\r       \rrewrite 2 add finish\n'
        self.assertEqual(self.sout.getvalue(), target)

    def test_once_logger(self):
        """Test once logger"""
        self.once("X", self.msg)
        self.once("X", self.msg)
        self.assertEqual(self.sout.getvalue(), self.msg+"\n")

        self.once("Y", "XXX", 2)
        self.once("Y", "XXX", 2)
        self.once("Y", "XXX", 2)
        self.assertEqual(self.sout.getvalue(), self.msg+"\nXXX\nXXX\n")


    def test_level_logger_own_handlers(self):
        sout = StringIO()
        logger = LevelLogger(level=1, handlers=[sout])
        logger(1, "shown")
        logger(2, "hidden")
        self.assertEqual(sout.getvalue(), " shown\n")


    def test_set_logger(self):
        sout = StringIO()
        logger = SetLogger(register={'A': 'a', 'B': 'b'}, active=['A'],
                           handlers=[sout])
        logger('A', "first")
        logger('B', "second")
        self.assertEqual(sout.getvalue(), "[A] first\n")
        self.assertRaises(ValueError, logger._set_active, ['C'])
        self.assertRaises(ValueError, logger.register, 'A', 'again')


    def test_warning(self):
        """Warnings are printed once per place they are issued from"""
        sout = StringIO()
        warn = WarningLog(handlers=[sout])
        for i in range(3):
            warn("Careful %d" % i)
        value = sout.getvalue()
        self.assertTrue(value.startswith("WARNING: Careful 0"))
        self.assertEqual(value.count("WARNING"), 1)
        self.assertTrue("printed only once" in value)
        warn.maxcount = 5
        self.assertEqual(warn.maxcount, 5)


    def test_warning_singleton_handlers(self):
        # the global warning log can be redirected as well
        sout = StringIO()
        oldhandlers = warning.handlers
        warning.handlers = [sout]
        try:
            warning("to be redirected %s" % self.msg)
        finally:
            warning.handlers = oldhandlers
        self.assertTrue("to be redirected" in sout.getvalue())


    if __debug__:
        def test_debug(self):
            verbose.handlers = []           # so debug doesn't spoil it
            debug.active = ['1', '2', 'DS']
            debug.metrics = list(debug._known_metrics.keys())
            # do not offset for this test
            debug('DS', self.msg, lf=False)
            self.assertRaises(ValueError, debug, 3, 'bugga')
            #Should complain about unknown debug id
            svalue = self.sout.getvalue()
            regexp = r"\[DS\] DBG(?:{.*})?: %s" % self.msg
            rematch = re.match(regexp, svalue)
            self.assertTrue(rematch, msg="Cannot match %s with regexp %s" %
                            (svalue, regexp))
            # find metrics
            self.assertTrue('>test_verbosity:' in svalue,
                            msg="Cannot find tb metric in " + svalue)
            self.assertTrue(' sec' in svalue,
                            msg="Cannot find reltime metric in " + svalue)


        def test_debug_rgexp(self):
            verbose.handlers = []           # so debug doesn't spoil it
            debug.active = ['.*']
            # we should have enabled all of them
            self.assertEqual(set(debug.active),
                             set(debug.registered.keys()))
            debug.active = ['D.*', 'CLF']
            self.assertEqual(set(debug.active),
                             set([x for x in debug.registered.keys()
                                  if x.startswith('D')] + ['CLF']))
            debug.active = ['DS', 'CLF']
            self.assertEqual(set(debug.active), set(['DS', 'CLF']),
                             msg="debug should do full line matching")

            debug.offsetbydepth = True


        def test_debug_inactive(self):
            debug.active = ['1']
            debug('2', "should not show up")
            self.assertEqual(self.sout.getvalue(), "")
            debug('1', "should show up")
            self.assertTrue("should show up" in self.sout.getvalue())
