# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the featuresets package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Configuration registry shared by all featuresets components"""

__docformat__ = 'restructuredtext'

from configparser import ConfigParser
import io
import os
from os.path import join as pathjoin


class ConfigManager(ConfigParser):
    """Central configuration registry for featuresets.

    Configuration files (INI syntax) are read from multiple locations
    whenever the class is instantiated or `ConfigManager.reload()` is
    called.  By default it looks for a file named `featuresets.cfg` in the
    current directory and `.featuresets.cfg` in the user's home directory.
    The constructor takes an optional list of additional file names which
    take precedence over both.

    Finally, environment variables starting with `FSETS_` override any
    setting read from a file.  The remainder of the variable name is the
    section followed by the option, separated by '_'.  If no section is
    given, the option goes into section `general`::

        FSETS_VERBOSE=2

    becomes::

        [general]
        verbose = 2

    whereas `FSETS_HDF5_EXTENSION=h5` becomes::

        [hdf5]
        extension = h5

    Longer option names map their remaining underscores to spaces, so
    `FSETS_WARNINGS_SUPPRESS=yes` and `FSETS_FOREST_N_JOBS=2` set
    ``[warnings] suppress`` and ``[forest] n jobs``.
    """

    # things we want to count on to be available
    _DEFAULTS = {'general':
                  {
                    'verbose': '1',
                  },
                 'hdf5':
                  {
                    'extension': 'hdf5',
                  },
                }

    _ENV_PREFIX = 'FSETS_'


    def __init__(self, filenames=None):
        """Initialization reads settings from config files and env. variables.

        Parameters
        ----------
        filenames : list of filenames
        """
        ConfigParser.__init__(self, interpolation=None)

        if filenames is not None:
            self.__cfg_filenames = list(filenames)
        else:
            self.__cfg_filenames = []

        # set critical defaults
        for sec, options in ConfigManager._DEFAULTS.items():
            self.add_section(sec)
            for key, value in options.items():
                self.set(sec, key, value)

        self.reload()


    def reload(self):
        """Re-read settings from all configured locations.
        """
        homedir = os.path.expanduser('~')
        user_configfile = pathjoin(homedir, '.featuresets.cfg')
        # user config first, then local and custom files on top
        filenames = [user_configfile, 'featuresets.cfg'] + self.__cfg_filenames
        self.read(filenames)

        prefix = ConfigManager._ENV_PREFIX
        for var in [v for v in os.environ if v.startswith(prefix)]:
            svar = var[len(prefix):].lower()

            # section is the next element in the name
            if not svar.count('_'):
                sec = 'general'
            else:
                cut = svar.find('_')
                sec = svar[:cut]
                svar = svar[cut + 1:].replace('_', ' ')

            if not self.has_section(sec):
                self.add_section(sec)

            self.set(sec, svar, os.environ[var])


    def __repr__(self):
        """Generate INI file content with current configuration.
        """
        out = io.StringIO()
        self.write(out)
        return out.getvalue()


    def save(self, filename):
        """Write current configuration to a file.
        """
        with open(filename, 'w') as f:
            self.write(f)


    def get(self, section, option, default=None, **kwargs):
        """Wrapper around ConfigParser.get() with a custom default value.

        The value of `default` is returned whenever the config parser does
        not have the requested option and/or section.
        """
        if not self.has_option(section, option):
            return default

        try:
            return ConfigParser.get(self, section, option, **kwargs)
        except ValueError as e:
            raise ValueError(
                "Failed to obtain value from configuration for %s.%s. "
                "Original exception was: %s" % (section, option, e))


    def getboolean(self, section, option, default=None, **kwargs):
        """Wrapper around ConfigParser.getboolean() with a custom default.

        `default` might be a bool or any string ConfigParser considers a
        boolean (e.g. 'yes', 'off').
        """
        if not self.has_option(section, option):
            if isinstance(default, bool) or default is None:
                return default
            if default.lower() not in self.BOOLEAN_STATES:
                raise ValueError('Not a boolean: %s' % default)
            return self.BOOLEAN_STATES[default.lower()]

        return ConfigParser.getboolean(self, section, option, **kwargs)


    def get_as_dtype(self, section, option, dtype, default=None):
        """Convenience method to query options with a custom default and type

        The returned value is converted into the specified `dtype`.
        """
        if not self.has_option(section, option):
            return default
        try:
            return dtype(ConfigParser.get(self, section, option))
        except ValueError as e:
            raise ValueError(
                "Failed to obtain value from configuration for %s.%s. "
                "Original exception was: %s" % (section, option, e))
