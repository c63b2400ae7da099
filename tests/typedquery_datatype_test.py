"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import pytest

from typedquery import datatype
from typedquery.datatype import Binary, STRING, BINARY, NUMBER
from typedquery.exception import InvalidArgumentError


def test_lookup_any_case():
    assert datatype.lookup('ud') is datatype.UNSIGNED_INTEGER
    assert datatype.lookup('UD') is datatype.UNSIGNED_INTEGER
    assert datatype.lookup('Les') is datatype.VALUE_LIST_ESCAPED_STRING


def test_lookup_invalid():
    with pytest.raises(InvalidArgumentError) as ex:
        datatype.lookup('zz')
    assert str(ex.value) == 'The data type "zz" is invalid.'


def test_normalize():
    assert datatype.normalize('d') is datatype.SIGNED_INTEGER
    assert datatype.normalize('ld') is datatype.SIGNED_INTEGER
    assert datatype.normalize('lud') is datatype.UNSIGNED_INTEGER
    assert datatype.normalize('lf') is datatype.SIGNED_DECIMAL
    assert datatype.normalize('luf') is datatype.UNSIGNED_DECIMAL
    assert datatype.normalize('ls') is datatype.STRING_VALUE
    assert datatype.normalize('l') is datatype.STRING_VALUE
    assert datatype.normalize('les') is datatype.ESCAPED_STRING
    with pytest.raises(InvalidArgumentError):
        datatype.normalize('lb')


def test_bind_kinds():
    assert datatype.SIGNED_INTEGER.kind is NUMBER
    assert datatype.UNSIGNED_INTEGER.kind is NUMBER
    assert datatype.BINARY_VALUE.kind is BINARY
    for code in ('s', 'es', 'f', 'uf'):
        assert datatype.lookup(code).kind is STRING

    # TypeObjects compare equal to the Python types they describe
    assert NUMBER == int
    assert BINARY == bytes
    assert STRING == str
    assert STRING != NUMBER


@pytest.mark.parametrize('value', ['12', '-12', '+12', 0, -5, '007'])
def test_signed_integer_valid(value):
    assert datatype.SIGNED_INTEGER.check(value) is None


@pytest.mark.parametrize('value', ['1.5', 'abc', '12a', '', ' 12', '1 2', '-'])
def test_signed_integer_invalid(value):
    assert datatype.SIGNED_INTEGER.check(value) is not None


def test_unsigned_integer():
    assert datatype.UNSIGNED_INTEGER.check('42') is None
    assert datatype.UNSIGNED_INTEGER.check(0) is None
    assert datatype.UNSIGNED_INTEGER.check('-1') is not None
    assert datatype.UNSIGNED_INTEGER.check('+1') is not None


def test_decimals():
    for value in ('1', '1.5', '-1.5', '+2.25', 3.5):
        assert datatype.SIGNED_DECIMAL.check(value) is None
    for value in ('1.', '.5', '1.2.3', 'x'):
        assert datatype.SIGNED_DECIMAL.check(value) is not None

    assert datatype.UNSIGNED_DECIMAL.check('1.5') is None
    assert datatype.UNSIGNED_DECIMAL.check('-1.5') is not None


def test_strings_and_binary_accept_anything():
    for vtype in (datatype.STRING_VALUE, datatype.ESCAPED_STRING,
                  datatype.BINARY_VALUE):
        assert vtype.check('<b>anything</b>') is None
        assert vtype.check(b'\x00\x01') is None


def test_invalid_message():
    with pytest.raises(InvalidArgumentError) as ex:
        datatype.SIGNED_INTEGER.validate('abc')
    assert str(ex.value) == "Invalid data for a \"integer\" parameter ('abc')."


def test_lists():
    assert datatype.VALUE_LIST_SIGNED_INTEGER.is_list
    assert not datatype.SIGNED_INTEGER.is_list

    assert datatype.VALUE_LIST_SIGNED_INTEGER.check('0,-1,2') is None
    assert datatype.VALUE_LIST_SIGNED_INTEGER.check([0, -1, 2]) is None
    assert datatype.VALUE_LIST_UNSIGNED_INTEGER.check((0, 1, 2)) is None

    err = datatype.VALUE_LIST_UNSIGNED_INTEGER.check('0,-1,2')
    assert err == "Invalid data for a \"unsigned integer list value\" parameter ('-1')."


def test_empty_list():
    with pytest.raises(InvalidArgumentError):
        datatype.VALUE_LIST_STRING.validate([])


def test_split_values():
    assert datatype.split_values('a,b,c') == ['a', 'b', 'c']
    assert datatype.split_values(['a', 1]) == ['a', 1]
    assert datatype.split_values((1, 2)) == [1, 2]
    assert datatype.split_values(7) == ['7']


def test_binary():
    assert Binary('abc') == b'abc'
    assert Binary('\xff') == b'\xff'
    assert Binary(bytearray(b'\x00\x01')) == b'\x00\x01'
    assert isinstance(Binary(b'x'), bytes)


@pytest.mark.parametrize('value', [3, 1.5, ['a']])
def test_binary_rejects_other_types(value):
    with pytest.raises(TypeError):
        Binary(value)
