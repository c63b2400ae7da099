#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import pytest

from typedquery import datatype
from typedquery.configuration import Configuration
from typedquery.exception import DriverError, InvalidArgumentError, OutOfBoundsError

from .typedquery_base import TypedQueryBase


class TestTypedQueryBasic(TypedQueryBase):

    def test_noop(self):
        con = self._connect(build=False)
        try:
            result = con.query("SELECT 1 AS one")
            assert result.success
            assert result.exception is None
            assert result.parameters == []
            assert result.query == "SELECT 1 AS one"
            assert result[0] == {'one': 1}
        finally:
            con.close()

    def test_location_binding(self):
        con = self._connect()
        try:
            result = con.query("SELECT * FROM foo WHERE bar={0:ud}", 12)
            assert result.success
            assert result.query == "SELECT * FROM foo WHERE bar=?"
            assert result.number_of_rows == 1
            row = result.fetchone()
            assert row == {'bar': 12, 'blah': 0, 'foo': 'asdf'}
            assert result.fetchone() is None
        finally:
            con.close()

    def test_inferred_binding(self):
        con = self._connect()
        try:
            result = con.query("SELECT foo FROM foo WHERE bar>{d} AND blah<>{d} ORDER BY bar",
                               10, '2')
            assert [r['foo'] for r in result] == ['asdf', 'Something']
        finally:
            con.close()

    def test_list_binding(self):
        con = self._connect()
        try:
            result = con.query("SELECT bar FROM foo WHERE blah IN {0:ld} AND bar IN {1:lud} "
                               "ORDER BY bar", "0,-1,2", [12, 15, 99])
            assert result.query == ("SELECT bar FROM foo WHERE blah IN (?,?,?) AND bar IN (?,?,?) "
                                    "ORDER BY bar")
            assert len(result.parameters) == 6
            assert [p.type for p in result.parameters] == \
                [datatype.SIGNED_INTEGER] * 3 + [datatype.UNSIGNED_INTEGER] * 3
            assert [r['bar'] for r in result.fetchall()] == [12, 15]
            assert result.number_of_rows == 2
        finally:
            con.close()

    def test_sequence_argument(self):
        con = self._connect()
        try:
            result = con.query(["SELECT foo FROM foo WHERE bar={0:d}", 20])
            assert result['foo'] == 'Testing'
            result = con.query(("SELECT foo FROM foo WHERE bar={0:d}", 15))
            assert result['foo'] == 'Something'
        finally:
            con.close()

    def test_no_query(self):
        con = self._connect(build=False)
        try:
            with pytest.raises(InvalidArgumentError) as ex:
                con.query()
            assert str(ex.value) == 'No query provided.'
            with pytest.raises(InvalidArgumentError):
                con.query([])
            with pytest.raises(InvalidArgumentError):
                con.query(None)
            assert con.query_count == 0
        finally:
            con.close()

    def test_parse_errors_never_reach_driver(self):
        con = self._connect(error_reporting=0)
        hooked = []
        con.set_before_hook(hooked.append)
        count = con.query_count
        try:
            with pytest.raises(InvalidArgumentError):
                con.query("SELECT * FROM foo WHERE bar={0:ud} AND blah={s}", 0)
            with pytest.raises(OutOfBoundsError):
                con.query("SELECT * FROM foo WHERE bar={1:ud}", 0)
            with pytest.raises(InvalidArgumentError):
                con.query("SELECT * FROM foo WHERE bar={ud}", 'twelve')
            assert hooked == []
            assert con.query_count == count
        finally:
            con.close()

    def test_insert(self):
        con = self._connect()
        try:
            result = con.query("INSERT INTO foo (bar, blah, foo) VALUES ({d}, {d}, {s})",
                               30, -3, 'Inserted')
            assert result.success
            assert result.number_of_rows == 1
            assert result.fetchall() == []

            result = con.query("UPDATE foo SET blah={0:d} WHERE bar>{1:d}", 7, 14)
            assert result.number_of_rows == 3

            result = con.query("SELECT COUNT(*) AS n FROM foo WHERE blah={d}", 7)
            assert result['n'] == 3
        finally:
            con.close()

    def test_insert_id(self):
        con = self._connect()
        try:
            result = con.query("INSERT INTO blobs (data, label) VALUES ({b}, {s})",
                               b'\x00\x01', 'first')
            assert result.insert_id == 1
            result = con.query("INSERT INTO blobs (data, label) VALUES ({b}, {s})",
                               b'\x02', 'second')
            assert result.insert_id == 2

            # The last insert id belongs to the connection
            result = con.query("SELECT label FROM blobs WHERE id={ud}", 1)
            assert result.insert_id == 2
        finally:
            con.close()

    def test_escaped_string(self):
        con = self._connect()
        try:
            con.query("INSERT INTO foo (bar, blah, foo) VALUES ({d}, {d}, {es})",
                      40, 0, '<b>"Tom" & Jerry</b>')
            result = con.query("SELECT foo FROM foo WHERE bar={d}", 40)
            assert result['foo'] == '&lt;b&gt;&quot;Tom&quot; &amp; Jerry&lt;/b&gt;'

            con.query("INSERT INTO foo (bar, blah, foo) VALUES ({d}, {d}, {s})",
                      41, 0, '<i>')
            result = con.query("SELECT foo FROM foo WHERE bar={d}", 41)
            assert result['foo'] == '<i>'
        finally:
            con.close()

    def test_escaped_string_list(self):
        con = self._connect()
        try:
            con.query("INSERT INTO foo (bar, blah, foo) VALUES ({d}, {d}, {s})",
                      50, 0, 'a&amp;b')
            result = con.query("SELECT bar FROM foo WHERE foo IN {les}", ['a&b', 'c'])
            assert [r['bar'] for r in result] == [50]
        finally:
            con.close()

    def test_decimal_and_string_lists(self):
        con = self._connect()
        try:
            result = con.query("SELECT {f} + 0 AS total", '1.5')
            assert result['total'] == 1.5

            result = con.query("SELECT bar FROM foo WHERE foo IN {ls} ORDER BY bar",
                               'asdf,Testing')
            assert [r['bar'] for r in result] == [12, 20]
        finally:
            con.close()

    def test_binary(self):
        con = self._connect()
        try:
            data = bytes(range(256))
            con.query("INSERT INTO blobs (data, label) VALUES ({b}, {s})", data, 'all')
            con.query("INSERT INTO blobs (data, label) VALUES ({b}, {s})", 'abc', 'text')

            result = con.query("SELECT data FROM blobs ORDER BY id")
            assert result[0]['data'] == data
            assert result[1]['data'] == b'abc'
        finally:
            con.close()

    def test_null_values(self):
        con = self._connect()
        try:
            con.query("INSERT INTO blobs (data, label) VALUES ({b}, {s})", None, None)
            result = con.query("SELECT data, label FROM blobs")
            assert result[0] == {'data': None, 'label': None}
        finally:
            con.close()

    def test_sequence_and_arguments_mixed(self):
        con = self._connect(build=False)
        try:
            with pytest.raises(InvalidArgumentError):
                con.query(["SELECT {d} AS a", 1], 2)
            assert con.query_count == 0
        finally:
            con.close()

    def test_integer_too_large_for_driver(self):
        con = self._connect(error_reporting=Configuration.ERRORS_IGNORE)
        try:
            entries = len(con.log)
            result = con.query("SELECT * FROM foo WHERE bar={d}", "99999999999999999999")
            assert not result.success
            assert isinstance(result.exception, DriverError)
            assert str(result.exception).startswith('OverflowError: ')
            assert len(con.log) == entries + 2
        finally:
            con.close()

    def test_integer_too_large_raises(self):
        con = self._connect()
        try:
            with pytest.raises(DriverError):
                con.query("SELECT * FROM foo WHERE bar={d}", "99999999999999999999")
        finally:
            con.close()

    def test_binary_rejects_integer(self):
        con = self._connect(error_reporting=Configuration.ERRORS_IGNORE)
        try:
            result = con.query("INSERT INTO blobs (data, label) VALUES ({b}, {s})", 3, 'x')
            assert not result.success
            assert 'cannot convert int to Binary' in str(result.exception)
            assert con.query("SELECT COUNT(*) AS n FROM blobs")['n'] == 0
        finally:
            con.close()

    def test_select_with_trailing_comment(self):
        con = self._connect()
        try:
            result = con.query("SELECT bar FROM foo WHERE bar={d} -- by id", 12)
            assert result.success
            assert result.number_of_rows == 1
            assert result['bar'] == 12
        finally:
            con.close()
