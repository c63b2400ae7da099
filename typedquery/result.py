"""typedquery query result

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['QueryResult']

from typing import Any, Iterator, List, Mapping, Optional, Sequence  # pylint: disable=unused-import

from .cursor import RowCursor
from .exception import Error, InterfaceError  # pylint: disable=unused-import
from .statement import BoundParameter, Statement  # pylint: disable=unused-import


class QueryResult(object):
    """Everything known about one query: what was asked, what was run and
    what came back.

    Public Attributes:
    query -- The statement sent to the driver, with bind markers.
    original_query -- The template as passed in by the caller.
    original_parameters -- The arguments as passed in by the caller.
    parameters -- The BoundParameter list, in bind order.
    success -- True if the statement executed without error.
    number_of_rows -- Rows returned or affected, -1 if unknown.
    insert_id -- Id of the last inserted row on the connection.
    exception -- The DriverError captured while executing, if any.
    statement -- The executed Statement, until close() is called.

    Rows are read lazily with fetchone(), fetchmany(), fetchall(), by
    iterating, or by index: result[2] is the third row and result['name'] is
    the 'name' column of the first row.  The result is read-only.
    """

    arraysize = 1

    def __init__(self, original_query, original_parameters):
        # type: (str, Sequence[Any]) -> None
        self.query = original_query
        self.original_query = original_query
        self.original_parameters = list(original_parameters)
        self.parameters = []  # type: List[BoundParameter]
        self.success = False
        self.number_of_rows = None  # type: Optional[int]
        self.insert_id = None  # type: Any
        self.exception = None  # type: Optional[Error]
        self.statement = None  # type: Optional[Statement]
        self._cursor = None  # type: Optional[RowCursor]

    def attach(self, statement, sequential=True):
        # type: (Statement, bool) -> None
        """Attach the executed statement rows are read from."""
        self.statement = statement
        self._cursor = RowCursor(statement, sequential)

    def _check_rows(self):
        # type: () -> RowCursor
        if self._cursor is None:
            if self.exception is not None:
                raise InterfaceError("query failed: %s" % (self.exception))
            raise InterfaceError("query has no result rows")
        return self._cursor

    def fetchone(self):
        # type: () -> Optional[Mapping[str, Any]]
        """Return the next row, or None when there are no more."""
        return self._check_rows().fetchone()

    def fetchmany(self, size=None):
        # type: (Optional[int]) -> List[Mapping[str, Any]]
        if size is None:
            size = self.arraysize
        return self._check_rows().fetchmany(size)

    def fetchall(self):
        # type: () -> List[Mapping[str, Any]]
        """Return all remaining rows."""
        return self._check_rows().fetchall()

    def __iter__(self):
        # type: () -> Iterator[Mapping[str, Any]]
        cursor = self._check_rows()
        while True:
            row = cursor.fetchone()
            if row is None:
                return
            yield row

    def __getitem__(self, key):
        # type: (Any) -> Any
        if isinstance(key, int) and not isinstance(key, bool):
            row = self._check_rows().get(key)
            if row is None:
                raise IndexError("row %d is out of range" % (key))
            return row
        row = self._check_rows().get(0)
        if row is None:
            raise KeyError(key)
        return row[key]

    def __contains__(self, key):
        # type: (Any) -> bool
        try:
            self[key]
        except (IndexError, KeyError):
            return False
        return True

    def close(self):
        # type: () -> None
        """Release the statement.  Rows can no longer be read."""
        cursor, self._cursor = self._cursor, None
        self.statement = None
        if cursor is not None:
            cursor.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return '<QueryResult %r success=%s rows=%s>' % (
            self.query, self.success, self.number_of_rows)
