"""typedquery SQL statement.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['BoundParameter', 'Statement', 'bind_parameters']

import html
from typing import Any, Dict, List, Mapping, Optional  # pylint: disable=unused-import

from .datatype import Binary, TypeObject, ValueType  # pylint: disable=unused-import
from .datatype import STRING, BINARY, NUMBER
from .exception import DriverError, driver_error_handler


class BoundParameter(object):
    """A validated value and the type it will be bound as."""

    def __init__(self, value, value_type):
        # type: (Any, ValueType) -> None
        self.value = value
        self.type = value_type

    def __eq__(self, other):
        if not isinstance(other, BoundParameter):
            return NotImplemented
        return self.value == other.value and self.type is other.type

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return 'BoundParameter(%r, %r)' % (self.value, self.type)


class Statement(object):
    """A SQL statement prepared on a driver cursor.

    Values are bound by 1-based position and sent to the driver when the
    statement is executed.
    """

    def __init__(self, cursor, sql, error_class=Exception):
        # type: (Any, str, type) -> None
        """Create a statement.

        :param cursor: PEP 249 cursor the statement runs on.
        :param sql: The statement text.
        :param error_class: Base class of the driver's exceptions.
        """
        self.sql = sql
        self.closed = False
        self._cursor = cursor
        self._error_class = error_class
        self._values = {}   # type: Dict[int, Any]
        self._sizes = {}    # type: Dict[int, Optional[int]]

    def _check_closed(self):
        # type: () -> None
        if self.closed:
            raise DriverError("statement is closed")

    def bind(self, position, value, kind=STRING, length=None):
        # type: (int, Any, TypeObject, Optional[int]) -> None
        """Bind a value to a marker of the statement.

        :param position: 1-based position of the marker.
        :param value: The value to bind.
        :param kind: One of STRING, NUMBER or BINARY.
        :param length: Size hint for the driver.
        """
        self._check_closed()
        if position < 1:
            raise DriverError("invalid parameter position %d" % (position))
        if value is not None:
            try:
                if kind is NUMBER:
                    value = int(value)
                elif kind is BINARY:
                    # Drivers look up adapters by exact type.
                    value = bytes(Binary(value))
                elif not isinstance(value, str):
                    value = str(value)
            except (TypeError, ValueError) as ex:
                raise DriverError("cannot bind parameter %d: %s" % (position, ex), ex)
        self._values[position] = value
        self._sizes[position] = length

    def execute(self):
        # type: () -> None
        """Send the statement and its bound values to the driver."""
        self._check_closed()
        count = max(self._values) if self._values else 0
        missing = [i for i in range(1, count + 1) if i not in self._values]
        if missing:
            raise DriverError("parameter %d is not bound" % (missing[0]))
        params = tuple(self._values[i] for i in range(1, count + 1))
        # Drivers raise these outside their Error hierarchy for values they
        # cannot convert, e.g. integers too large for the column type.
        try:
            setinputsizes = getattr(self._cursor, 'setinputsizes', None)
            if setinputsizes is not None and params:
                setinputsizes([self._sizes[i] for i in range(1, count + 1)])
            self._cursor.execute(self.sql, params)
        except (self._error_class, OverflowError, TypeError, ValueError) as ex:
            raise driver_error_handler(ex) from ex

    def row_count(self):
        # type: () -> int
        """Return the number of rows the driver reports, or -1."""
        count = getattr(self._cursor, 'rowcount', -1)
        if count is None or count < 0:
            return -1
        return count

    @property
    def lastrowid(self):
        # type: () -> Any
        return getattr(self._cursor, 'lastrowid', None)

    @property
    def description(self):
        # type: () -> Any
        return getattr(self._cursor, 'description', None)

    @property
    def can_scroll(self):
        # type: () -> bool
        return callable(getattr(self._cursor, 'scroll', None))

    def _row_to_mapping(self, row):
        # type: (Any) -> Mapping[str, Any]
        if isinstance(row, Mapping):
            return row
        desc = self.description
        if not desc:
            raise DriverError("statement has no description; cannot map rows")
        return dict(zip([d[0] for d in desc], row))

    def fetchone(self):
        # type: () -> Optional[Mapping[str, Any]]
        """Return the next row as a mapping, or None when exhausted."""
        self._check_closed()
        if self.description is None:
            return None
        try:
            row = self._cursor.fetchone()
        except self._error_class as ex:
            raise driver_error_handler(ex) from ex
        if row is None:
            return None
        return self._row_to_mapping(row)

    def scroll(self, index):
        # type: (int) -> None
        """Move the cursor so that the next row fetched is row INDEX."""
        self._check_closed()
        if not self.can_scroll:
            raise DriverError("cursor does not support absolute positioning")
        try:
            self._cursor.scroll(index, mode='absolute')
        except (self._error_class, IndexError) as ex:
            raise driver_error_handler(ex) from ex

    def close(self):
        # type: () -> None
        """Release the driver cursor."""
        if self.closed:
            return
        self.closed = True
        try:
            self._cursor.close()
        except self._error_class as ex:
            raise driver_error_handler(ex) from ex


def bind_parameters(statement, parameters):
    # type: (Statement, List[BoundParameter]) -> None
    """Bind each parameter to STATEMENT in order.

    Escaped strings are HTML-escaped before they are bound.
    """
    for position, param in enumerate(parameters, 1):
        value = param.value
        kind = param.type.kind
        if kind is STRING:
            if param.type.escape and value is not None:
                value = html.escape(str(value))
            length = len(str(value)) if value is not None else None
            statement.bind(position, value, STRING, length)
        else:
            statement.bind(position, value, kind)
