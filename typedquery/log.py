"""Entries of the query log kept by a connection.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['LogEntry', 'LOCALZONE']

import traceback
from datetime import datetime
from typing import List, Optional  # pylint: disable=unused-import

import tzlocal

LOCALZONE = tzlocal.get_localzone()


class LogEntry(object):
    """One step performed by a connection (connecting, running a query)."""

    def __init__(self, message=None,  # type: Optional[str]
                 duration=0.0,         # type: float
                 query=None,           # type: Optional[str]
                 backtrace=None        # type: Optional[List[traceback.FrameSummary]]
                 ):
        # type: (...) -> None
        """Create a log entry.

        :param message: None if the step succeeded, else the error text.
        :param duration: Milliseconds spent on the step.
        :param query: The query as passed in by the caller, if any.
        :param backtrace: Call stack when the entry was made.
        """
        self.message = message
        self.duration = duration
        self.query = query
        if backtrace is None:
            backtrace = traceback.extract_stack()[:-1]
        self.backtrace = backtrace
        self.timestamp = datetime.now(LOCALZONE)

    def __str__(self):
        string = 'Query: %s\nDuration: %.3f ms\n' % (self.query, self.duration)
        if self.message is not None:
            string += 'Message: %s' % (self.message)
        return string

    def __repr__(self):
        return '<LogEntry %s %r %.3f ms>' % (
            self.timestamp.isoformat(), self.message, self.duration)
