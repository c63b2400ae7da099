"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import logging

from typing import Any, List  # pylint: disable=unused-import

_log = logging.getLogger("typedquerytest")

# The tables every test starts with.
SETUP_SQL = """
DROP TABLE IF EXISTS foo;
CREATE TABLE foo (bar INTEGER, blah INTEGER, foo VARCHAR(32));
INSERT INTO foo (bar, blah, foo) VALUES (12, 0, 'asdf');
INSERT INTO foo (bar, blah, foo) VALUES (15, -1, 'Something');
INSERT INTO foo (bar, blah, foo) VALUES (20, 2, 'Testing');
DROP TABLE IF EXISTS blobs;
CREATE TABLE blobs (id INTEGER PRIMARY KEY, data BLOB, label VARCHAR(64))
"""


def setup_statements():
    # type: () -> List[str]
    return [s.strip() for s in SETUP_SQL.split(';') if s.strip()]


def build_database(con):
    # type: (Any) -> None
    """Create the test tables on connection CON."""
    for stmt in setup_statements():
        _log.debug("setup: %s", stmt)
        con.query(stmt).close()
