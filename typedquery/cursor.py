"""typedquery lazy row cursor

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['RowCursor']

from typing import Any, Dict, List, Mapping, Optional  # pylint: disable=unused-import

from .statement import Statement  # pylint: disable=unused-import

Row = Mapping[str, Any]


class RowCursor(object):
    """Forward and positional access to the rows of an executed statement.

    Every row fetched is cached by its 0-based index.  With a sequential
    cursor, positional access reads forward from the current position until
    the requested row is reached; MySQL and SQLite cursors are always treated
    this way since absolute positioning is unreliable there.  Otherwise the
    driver cursor is moved with scroll().
    """

    def __init__(self, statement, sequential=True):
        # type: (Statement, bool) -> None
        self.statement = statement
        self.sequential = sequential or not statement.can_scroll
        self.position = 0
        self.results = {}  # type: Dict[int, Row]
        self.complete = False

    def fetchone(self):
        # type: () -> Optional[Row]
        if self.complete:
            return None
        row = self.statement.fetchone()
        if row is None:
            self.complete = True
            return None
        self.results[self.position] = row
        self.position += 1
        return row

    def fetchmany(self, size):
        # type: (int) -> List[Row]
        rows = []
        while len(rows) < size:
            row = self.fetchone()
            if row is None:
                break
            rows.append(row)
        return rows

    def fetchall(self):
        # type: () -> List[Row]
        rows = []
        while True:
            row = self.fetchone()
            if row is None:
                break
            rows.append(row)
        return rows

    def get(self, index):
        # type: (int) -> Optional[Row]
        """Return row INDEX, or None if the result has no such row."""
        if index < 0:
            return None
        if index in self.results:
            return self.results[index]

        if self.sequential:
            while self.position <= index:
                if self.fetchone() is None:
                    return None
            return self.results.get(index)

        self.statement.scroll(index)
        self.position = index
        self.complete = False
        return self.fetchone()

    def close(self):
        # type: () -> None
        self.results.clear()
        self.statement.close()
