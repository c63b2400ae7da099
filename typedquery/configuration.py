"""Configuration settings for a typedquery connection.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Configuration -- Settings for a connection, loadable from a mapping or INI.
"""

__all__ = ['Configuration']

import configparser
import copy
import os
from typing import Any, Dict, Mapping, Optional  # pylint: disable=unused-import

from .exception import InterfaceError, InvalidArgumentError
from .parser import QUERY_DEFAULT, QUERY_CLASSIC

# Section name used when an INI source has no sections at all.
_ROOT_SECTION = 'typedquery'


def _to_int(name, value):
    # type: (str, Any) -> int
    if isinstance(value, bool):
        raise InvalidArgumentError(
            'Invalid value provided for configuration value "%s".' % (name))
    try:
        ival = int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            'Invalid value provided for configuration value "%s".' % (name))
    if isinstance(value, float) and ival != value:
        raise InvalidArgumentError(
            'Invalid value provided for configuration value "%s".' % (name))
    return ival


def _to_bool(name, value):
    # type: (str, Any) -> bool
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        val = configparser.ConfigParser.BOOLEAN_STATES.get(value.strip().lower())
        if val is not None:
            return val
    raise InvalidArgumentError(
        'Invalid value provided for configuration value "%s".' % (name))


class Configuration(object):
    """Settings for a connection.

    Public Attributes:
    hostname -- Host of the database server.
    engine -- Database engine ('mysql' or 'sqlite').
    database -- Name of the database (file name for sqlite).
    username -- User to connect as.
    password -- Password to connect with.
    error_reporting -- Bitmask of ERRORS_* values.
    error_log_file -- File errors are appended to with ERRORS_LOGFILE.
    maintain_query_log -- True to keep a log of every query.
    query_mode -- QUERY_DEFAULT or QUERY_CLASSIC placeholders.
    """

    # Degree of error reporting; combine with |.
    ERRORS_IGNORE = 0
    ERRORS_ECHO = 1
    ERRORS_EXCEPTION = 2
    ERRORS_LOGFILE = 4

    QUERY_DEFAULT = QUERY_DEFAULT
    QUERY_CLASSIC = QUERY_CLASSIC

    # Keys understood by from_dict() and the INI loaders.
    KEYS = {'Hostname': 'hostname',
            'Engine': 'engine',
            'Database': 'database',
            'Username': 'username',
            'Password': 'password',
            'ErrorReporting': 'error_reporting',
            'ErrorLog': 'error_log_file',
            'LogQueries': 'maintain_query_log',
            'QueryMode': 'query_mode'}

    def __init__(self, hostname='localhost',   # type: str
                 engine='mysql',               # type: str
                 database='',                  # type: str
                 username='',                  # type: str
                 password='',                  # type: str
                 error_reporting=ERRORS_EXCEPTION,  # type: int
                 error_log_file=None,          # type: Optional[str]
                 maintain_query_log=True,      # type: bool
                 query_mode=QUERY_DEFAULT      # type: int
                 ):
        # type: (...) -> None
        self.hostname = hostname
        self.engine = engine
        self.database = database
        self.username = username
        self.password = password
        self.error_reporting = error_reporting
        self.error_log_file = error_log_file
        self.maintain_query_log = maintain_query_log
        self.query_mode = query_mode
        self.validate()

    def validate(self):
        # type: () -> None
        """Check the settings are consistent.

        :raises InvalidArgumentError: If a setting is invalid.
        """
        allerrs = self.ERRORS_ECHO | self.ERRORS_EXCEPTION | self.ERRORS_LOGFILE
        val = _to_int('ErrorReporting', self.error_reporting)
        if val < self.ERRORS_IGNORE or val > allerrs:
            raise InvalidArgumentError(
                'Invalid value provided for configuration value "ErrorReporting".')
        self.error_reporting = val

        self.maintain_query_log = _to_bool('LogQueries', self.maintain_query_log)

        if self.reports(self.ERRORS_LOGFILE) and not self.error_log_file:
            raise InvalidArgumentError(
                'Invalid Configuration.  Error file logging, but no error file provided.')

        val = _to_int('QueryMode', self.query_mode)
        if val not in (self.QUERY_DEFAULT, self.QUERY_CLASSIC):
            raise InvalidArgumentError(
                'Invalid value provided for configuration value "QueryMode".')
        self.query_mode = val

    def reports(self, flag):
        # type: (int) -> bool
        """Return True if the ERRORS_* FLAG is set."""
        return (self.error_reporting & flag) == flag and flag != self.ERRORS_IGNORE

    def connection_string(self):
        # type: () -> str
        """Derive the connection string for the configured engine."""
        engine = (self.engine or '').lower()
        if engine == 'mysql':
            return 'mysql:host=%s;dbname=%s' % (self.hostname, self.database)
        if engine == 'sqlite':
            return 'sqlite:%s' % (self.database or ':memory:')
        raise InterfaceError('Unsupported database engine "%s"' % (self.engine))

    def copy(self):
        # type: () -> Configuration
        return copy.copy(self)

    def as_dict(self):
        # type: () -> Dict[str, Any]
        """Return the settings keyed as from_dict() expects them."""
        return dict((key, getattr(self, attr)) for key, attr in self.KEYS.items())

    @classmethod
    def from_dict(cls, config):
        # type: (Mapping[str, Any]) -> Configuration
        """Build a Configuration from a mapping.

        Only the keys in KEYS are used; absent keys keep their defaults.

        :raises InvalidArgumentError: If a value is invalid.
        """
        kwargs = {}
        for key, attr in cls.KEYS.items():
            if config.get(key) is not None:
                kwargs[attr] = config[key]
        return cls(**kwargs)

    @classmethod
    def from_ini_string(cls, ini_string, section=None):
        # type: (str, Optional[str]) -> Configuration
        """Build a Configuration from the text of an INI file.

        :param ini_string: The INI text.
        :param section: Section holding the settings; None if the text has
                        no sections.
        :raises InterfaceError: If the string is empty.
        :raises InvalidArgumentError: If the INI text is invalid.
        """
        if not ini_string or not ini_string.strip():
            raise InterfaceError('Configuration string not available')

        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        try:
            if section is None:
                parser.read_string('[%s]\n%s' % (_ROOT_SECTION, ini_string))
                section = _ROOT_SECTION
            else:
                parser.read_string(ini_string)
        except configparser.Error as ex:
            raise InvalidArgumentError('Invalid INI string provided: %s' % (ex))

        if not parser.has_section(section):
            raise InvalidArgumentError('Section "%s" not found.' % (section))

        values = dict((k, _unquote(v)) for k, v in parser.items(section))
        return cls.from_dict(values)

    @classmethod
    def from_ini_file(cls, ini_file, section=None):
        # type: (str, Optional[str]) -> Configuration
        """Build a Configuration from an INI file.

        :raises InterfaceError: If the file does not exist.
        :raises InvalidArgumentError: If the INI file is invalid.
        """
        if not os.path.isfile(ini_file):
            raise InterfaceError('Configuration file not available: %s' % (ini_file))
        with open(ini_file, 'r') as f:
            return cls.from_ini_string(f.read(), section)

    def __repr__(self):
        return 'Configuration(engine=%r, hostname=%r, database=%r)' % (
            self.engine, self.hostname, self.database)


def _unquote(value):
    # type: (str) -> str
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
        return value[1:-1]
    return value
