"""
(C) Copyright 2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import logging
import os

import pytest

from typing import Any, Dict, Generator  # pylint: disable=unused-import

from typedquery.configuration import Configuration

_log = logging.getLogger("typedquerytest")

TEST_INI = """\
Hostname = 127.0.0.1
Engine = sqlite
Database = :memory:
Username = testing
Password = testing
ErrorReporting = 2
ErrorLog = typedquery-errors.log
LogQueries = true
QueryMode = 1
"""


@pytest.fixture
def ini_file(tmp_path):
    # type: (Any) -> str
    """Write the test configuration to an INI file."""
    path = os.path.join(str(tmp_path), 'testconfig.ini')
    with open(path, 'w') as f:
        f.write(TEST_INI)
    return path


@pytest.fixture
def config_values():
    # type: () -> Dict[str, Any]
    """The test configuration as from_dict() expects it."""
    return {'Hostname': '127.0.0.1',
            'Engine': 'sqlite',
            'Database': ':memory:',
            'Username': 'testing',
            'Password': 'testing',
            'ErrorReporting': Configuration.ERRORS_EXCEPTION,
            'LogQueries': True,
            'QueryMode': Configuration.QUERY_DEFAULT}


@pytest.fixture
def database(config_values):
    # type: (Dict[str, Any]) -> Generator[Configuration, None, None]
    """A configuration for a fresh in-memory SQLite database."""
    config = Configuration.from_dict(config_values)
    _log.info("Using %s", config.connection_string())
    yield config
