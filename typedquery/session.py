"""Establish and manage a session with a PEP 249 database driver.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ["Session", "open_session", "SEQUENTIAL_ENGINES"]

# This module is the only place that talks to the underlying driver.  A
# Session wraps an open DB-API connection and exposes the few operations the
# query pipeline needs: prepare a statement, report the last inserted id and
# drive transactions.  Every exception raised by the driver is translated
# into a DriverError here.

import importlib
import logging
import sqlite3
from typing import Any, Optional  # pylint: disable=unused-import

from .exception import DriverError, InterfaceError, driver_error_handler
from .statement import Statement

_log = logging.getLogger(__name__)

# Engines whose cursors cannot be positioned absolutely.
SEQUENTIAL_ENGINES = ('mysql', 'sqlite')


class Session(object):
    """An open connection to a database through a PEP 249 driver."""

    __conn = None  # type: Any

    def __init__(self, connection,   # type: Any
                 engine=None,         # type: Optional[str]
                 paramstyle=None      # type: Optional[str]
                 ):
        # type: (...) -> None
        """Wrap an open DB-API connection.

        :param connection: The PEP 249 connection object.
        :param engine: Engine name; derived from the driver module if None.
        :param paramstyle: Driver paramstyle; read from the driver module if
                           None.
        """
        self.__conn = connection
        module = self.__driver_module(connection)
        if engine is None:
            engine = getattr(module, '__name__', 'generic')
            if engine == 'sqlite3':
                engine = 'sqlite'
        if paramstyle is None:
            paramstyle = getattr(module, 'paramstyle', 'qmark')
        self.engine = engine.lower()
        self.paramstyle = paramstyle
        # PEP 249 recommends that the driver exceptions be exposed as
        # attributes of the connection; use the module as a fallback.
        self.Error = getattr(connection, 'Error', None) or \
            getattr(module, 'Error', Exception)
        self.closed = False
        self._last_insert_id = None  # type: Any
        self._in_transaction = False

    @staticmethod
    def __driver_module(connection):
        # type: (Any) -> Any
        name = type(connection).__module__.split('.')[0]
        try:
            return importlib.import_module(name)
        except ImportError:
            return None

    @property
    def marker(self):
        # type: () -> str
        """The bind marker understood by the driver."""
        if self.paramstyle in ('format', 'pyformat'):
            return '%s'
        return '?'

    @property
    def in_transaction(self):
        # type: () -> bool
        return self._in_transaction

    def _check_closed(self):
        # type: () -> None
        if self.closed:
            raise DriverError("connection is closed")

    def prepare(self, sql):
        # type: (str) -> Statement
        """Return a new Statement for SQL on a fresh cursor."""
        self._check_closed()
        try:
            cursor = self.__conn.cursor()
        except self.Error as ex:
            raise driver_error_handler(ex) from ex
        return Statement(cursor, sql, self.Error)

    def executed(self, statement):
        # type: (Statement) -> None
        """Record the insert id produced by an executed statement."""
        rowid = statement.lastrowid
        if rowid:
            self._last_insert_id = rowid

    def last_insert_id(self):
        # type: () -> Any
        """Return the id of the last row inserted on this connection."""
        return self._last_insert_id

    def begin(self):
        # type: () -> None
        """Start a transaction."""
        self._check_closed()
        if self._in_transaction:
            raise DriverError("a transaction is already active")
        try:
            begin = getattr(self.__conn, 'begin', None)
            if callable(begin):
                begin()
            else:
                cursor = self.__conn.cursor()
                try:
                    cursor.execute("BEGIN")
                finally:
                    cursor.close()
        except self.Error as ex:
            raise driver_error_handler(ex) from ex
        self._in_transaction = True

    def commit(self):
        # type: () -> None
        """Commit the current transaction."""
        self._check_closed()
        try:
            self.__conn.commit()
        except self.Error as ex:
            raise driver_error_handler(ex) from ex
        finally:
            self._in_transaction = False

    def rollback(self):
        # type: () -> None
        """Rollback any uncommitted changes."""
        self._check_closed()
        try:
            self.__conn.rollback()
        except self.Error as ex:
            raise driver_error_handler(ex) from ex
        finally:
            self._in_transaction = False

    def close(self):
        # type: () -> None
        """Close the driver connection."""
        if self.closed:
            return
        self.closed = True
        try:
            self.__conn.close()
        except self.Error as ex:
            raise driver_error_handler(ex) from ex


def _open_sqlite(configuration):
    # type: (Any) -> Session
    # Autocommit unless a transaction is started explicitly.
    try:
        conn = sqlite3.connect(configuration.database or ':memory:',
                               isolation_level=None)
    except sqlite3.Error as ex:
        raise driver_error_handler(ex) from ex
    return Session(conn, engine='sqlite', paramstyle='qmark')


def _open_mysql(configuration):
    # type: (Any) -> Session
    try:
        pymysql = importlib.import_module('pymysql')
    except ImportError:
        raise InterfaceError("The mysql engine requires PyMySQL: "
                             "pip install 'typedquery[mysql]'")
    try:
        conn = pymysql.connect(host=configuration.hostname,
                               user=configuration.username,
                               password=configuration.password,
                               database=configuration.database,
                               autocommit=True)
    except pymysql.Error as ex:
        raise driver_error_handler(ex) from ex
    return Session(conn, engine='mysql', paramstyle='format')


_OPENERS = {'sqlite': _open_sqlite,
            'mysql': _open_mysql}


def open_session(configuration):
    # type: (Any) -> Session
    """Open a driver connection for CONFIGURATION.

    :raises InterfaceError: If the engine is not supported.
    :raises DriverError: If the driver cannot connect.
    """
    opener = _OPENERS.get((configuration.engine or '').lower())
    if opener is None:
        raise InterfaceError('Unsupported database engine "%s"' % (configuration.engine))
    _log.debug("Connecting to %s", configuration.connection_string())
    return opener(configuration)
