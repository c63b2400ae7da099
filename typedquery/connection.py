"""A module for running typed query templates against a database.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Connection -- Class for running query templates over a driver connection.

Exported Functions:
connect -- Creates a connection object.
"""

__all__ = ['connect', 'Connection']

import logging
import os
import re
import time
import traceback
from typing import Any, Callable, List, Optional, Sequence  # pylint: disable=unused-import

from .configuration import Configuration
from .exception import Error, DriverError, InvalidArgumentError
from .log import LogEntry
from .parser import parser_for
from .result import QueryResult
from .session import Session, open_session, SEQUENTIAL_ENGINES
from .statement import Statement, bind_parameters  # pylint: disable=unused-import

_log = logging.getLogger(__name__)

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

_SELECT = re.compile(r'\s*\(?\s*SELECT\b', re.IGNORECASE)

Hook = Callable[[QueryResult], Any]


def connect(configuration=None,  # type: Optional[Configuration]
            connection=None,     # type: Any
            **kwargs
            ):
    # type: (...) -> Connection
    """Return a new Connection object.

    :param configuration: Connection settings; built from kwargs if None.
    :param connection: An open PEP 249 connection or Session to use instead
                       of opening one from the configuration.
    :param kwargs: Configuration attributes, used if configuration is None.
    :returns: A new Connection object.
    """
    if configuration is None:
        configuration = Configuration(**kwargs)
    return Connection(configuration, connection)


class Connection(object):
    """A connection which runs typed query templates.

    Public Functions:
    query -- Parse, bind and execute a query template.
    start_transaction -- Begin a transaction.
    commit -- Commit the current transaction.
    rollback -- Rollback the current transaction.
    set_before_hook -- Call a function before each query executes.
    set_after_hook -- Call a function after each query executes.
    close -- Closes the connection with the database.

    Properties:
    configuration -- The Configuration in use.
    session -- The driver Session.
    log -- List of LogEntry objects, if the query log is maintained.
    query_count -- Number of queries executed successfully.
    total_time -- Milliseconds spent connecting and running queries.
    """

    # PEP 249 recommends that all exceptions be exposed as attributes in the
    # Connection object.
    from .exception import Error, InterfaceError, InvalidArgumentError
    from .exception import OutOfBoundsError, DriverError

    __session = None  # type: Optional[Session]

    def __init__(self, configuration, connection=None):
        # type: (Configuration, Any) -> None
        """Construct a Connection object.

        :param configuration: Connection settings.
        :param connection: An open PEP 249 connection or Session to use;
                           if None one is opened from the configuration.
        :raises InvalidArgumentError: If the configuration is invalid.
        """
        configuration.validate()
        self.__config = configuration
        self.__log = []  # type: List[LogEntry]
        self.__total_time = 0.0
        self.__query_count = 0
        self.__before_hook = None  # type: Optional[Hook]
        self.__after_hook = None   # type: Optional[Hook]

        if connection is None:
            self._connect()
        elif isinstance(connection, Session):
            self.__session = connection
        else:
            self.__session = Session(connection, engine=configuration.engine)

    def _connect(self):
        # type: () -> None
        start = time.perf_counter()
        try:
            self.__session = open_session(self.__config)
        except DriverError as ex:
            _log.warning("Connection failed: %s", ex)
            self._error(ex)
            return
        duration = (time.perf_counter() - start) * 1000.0
        _log.debug("Connection created in %.3f ms", duration)
        self._add_to_log('Connection Created', duration, None)

    @property
    def configuration(self):
        # type: () -> Configuration
        return self.__config

    @property
    def session(self):
        # type: () -> Optional[Session]
        return self.__session

    @property
    def log(self):
        # type: () -> List[LogEntry]
        """The query execution log."""
        return self.__log

    @property
    def query_count(self):
        # type: () -> int
        """The number of queries which have been executed."""
        return self.__query_count

    @property
    def total_time(self):
        # type: () -> float
        """Milliseconds spent by this connection processing requests."""
        return self.__total_time

    def set_before_hook(self, hook):
        # type: (Optional[Hook]) -> Connection
        """Call HOOK with the QueryResult before each query executes."""
        self.__before_hook = hook
        return self

    def set_after_hook(self, hook):
        # type: (Optional[Hook]) -> Connection
        """Call HOOK with the QueryResult after each query executes.

        The hook is called even if the query failed.
        """
        self.__after_hook = hook
        return self

    def _get_session(self):
        # type: () -> Session
        if self.__session is None:
            raise DriverError("connection is not open")
        return self.__session

    def query(self, *args):
        # type: (*Any) -> QueryResult
        """Parse, validate, bind and execute a query template.

        The first argument is the template and the rest are the values for
        its placeholders.  Alternatively a single list or tuple holding the
        template and its values may be passed.

        :raises InvalidArgumentError: If no query is provided, a placeholder
                                      is invalid or a value does not match
                                      its type.
        :raises OutOfBoundsError: If a placeholder has no value.
        :raises DriverError: If execution fails and the configuration
                             re-raises errors.
        :returns: The QueryResult; check its success before reading rows.
        """
        if not args:
            raise InvalidArgumentError('No query provided.')

        if isinstance(args[0], (list, tuple)):
            if len(args) > 1:
                raise InvalidArgumentError(
                    'Pass the query and its values either as one sequence '
                    'or as separate arguments, not both.')
            args = tuple(args[0])
            if not args:
                raise InvalidArgumentError('No query provided.')

        marker = self.__session.marker if self.__session is not None else '?'
        parser = parser_for(self.__config.query_mode, marker)
        result = parser.parse(args[0], args[1:])

        self._run(result)
        return result

    def _run(self, result):
        # type: (QueryResult) -> None
        """Execute a parsed query, recording the outcome in RESULT."""
        start = time.perf_counter()

        if self.__before_hook is not None:
            self.__before_hook(result)

        statement = None  # type: Optional[Statement]
        try:
            session = self._get_session()
            _log.debug("Executing %s with %d parameter(s)",
                       result.query, len(result.parameters))
            statement = session.prepare(result.query)
            bind_parameters(statement, result.parameters)
            statement.execute()
            session.executed(statement)

            result.attach(statement, session.engine in SEQUENTIAL_ENGINES)
            result.number_of_rows = self._derive_row_count(session, result, statement)
            result.insert_id = session.last_insert_id()

            self.__query_count += 1
        except DriverError as ex:
            duration = (time.perf_counter() - start) * 1000.0
            _log.warning("Query failed: %s", ex)
            self._add_to_log(str(ex), duration, result.original_query, count=False)
            result.exception = ex
            result.success = False
            if statement is not None and result.statement is None:
                statement.close()
        finally:
            if self.__after_hook is not None:
                self.__after_hook(result)

        duration = (time.perf_counter() - start) * 1000.0
        result.success = result.exception is None
        self._add_to_log(None, duration, result.original_query)

        if result.exception is not None:
            self._error(result.exception)

    def _derive_row_count(self, session, result, statement):
        # type: (Session, QueryResult, Statement) -> int
        """Return the rows returned or affected by an executed statement.

        Drivers often cannot count the rows of a SELECT before they are
        fetched; those are counted with a second query.  If the count query
        fails the count is unknown (-1); the statement itself succeeded.
        """
        count = statement.row_count()
        if count >= 0 or not _SELECT.match(result.query):
            return count

        # The newline ends any trailing '--' comment before the parenthesis.
        sql = 'SELECT COUNT(*) FROM (%s\n) AS typedquery_count' % (result.query)
        try:
            counter = session.prepare(sql)
            try:
                bind_parameters(counter, result.parameters)
                counter.execute()
                row = counter.fetchone()
            finally:
                counter.close()
        except DriverError as ex:
            _log.debug("Cannot count rows of %s: %s", result.query, ex)
            return -1
        if not row:
            return -1
        return int(list(row.values())[0])

    def start_transaction(self):
        # type: () -> None
        """Start a transaction."""
        try:
            self._get_session().begin()
        except DriverError as ex:
            self._error(ex)

    def commit(self):
        # type: () -> None
        """Commit the current transaction."""
        try:
            self._get_session().commit()
        except DriverError as ex:
            self._error(ex)

    def rollback(self):
        # type: () -> None
        """Rollback any uncommitted changes."""
        try:
            self._get_session().rollback()
        except DriverError as ex:
            self._error(ex)

    def close(self):
        # type: () -> None
        """Close this connection to the database."""
        if self.__session is None:
            return
        try:
            self.__session.close()
        except DriverError as ex:
            self._error(ex)

    def _add_to_log(self, message, duration, query, count=True):
        # type: (Optional[str], float, Optional[str], bool) -> None
        """Record a step in the query log.

        :param count: False if the duration is already part of a later entry.
        """
        if count:
            self.__total_time += duration

        if self.__config.maintain_query_log:
            self.__log.append(LogEntry(message, duration, query,
                                       traceback.extract_stack()[:-2]))

    def _error(self, exception):
        # type: (Error) -> None
        """Report EXCEPTION as the configuration's error reporting requires.

        :raises Error: The exception, if the configuration re-raises errors.
        """
        config = self.__config
        if config.error_reporting == config.ERRORS_IGNORE:
            return

        frame = _caller_frame()
        message = str(exception)
        if frame is not None:
            message += '\nFile: %s\nLine Number: %s' % (frame.filename, frame.lineno)

        if config.reports(config.ERRORS_ECHO):
            print(message)

        if config.reports(config.ERRORS_LOGFILE):
            with open(config.error_log_file, 'a') as f:
                f.write(message + '\n')

        if config.reports(config.ERRORS_EXCEPTION):
            raise exception

    def __enter__(self):
        # Return self to allow use within the 'with' block
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # type: (Any, Any, Any) -> None
        try:
            session = self.__session
            if session is not None and not session.closed and session.in_transaction:
                if exc_type is None:
                    self.commit()
                else:
                    self.rollback()
        finally:
            self.close()


def _caller_frame():
    # type: () -> Optional[traceback.FrameSummary]
    """Return the innermost stack frame outside this package."""
    for frame in reversed(traceback.extract_stack()):
        if not os.path.abspath(frame.filename).startswith(_PACKAGE_DIR + os.sep):
            return frame
    return None
