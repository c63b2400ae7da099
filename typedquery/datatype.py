"""A module for housing the value type classes.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Binary -- Class for a Binary object
ValueType -- A placeholder type code and its validation rule.

Exported Functions:
lookup -- Converts a type code to its ValueType.
normalize -- Converts a type code to the ValueType of a single bound value.
split_values -- Splits a list value into its elements.

TypeObject Variables (bind kinds):
STRING -- TypeObject(str)
BINARY -- TypeObject(bytes)
NUMBER -- TypeObject(int)

ValueType Variables:
SIGNED_INTEGER, UNSIGNED_INTEGER, SIGNED_DECIMAL, UNSIGNED_DECIMAL,
STRING_VALUE, ESCAPED_STRING, BINARY_VALUE, VALUE_LIST,
VALUE_LIST_SIGNED_INTEGER, VALUE_LIST_UNSIGNED_INTEGER,
VALUE_LIST_SIGNED_DECIMAL, VALUE_LIST_UNSIGNED_DECIMAL,
VALUE_LIST_STRING, VALUE_LIST_ESCAPED_STRING
"""

__all__ = ['Binary', 'STRING', 'BINARY', 'NUMBER', 'ValueType',
           'SIGNED_INTEGER', 'UNSIGNED_INTEGER', 'SIGNED_DECIMAL',
           'UNSIGNED_DECIMAL', 'STRING_VALUE', 'ESCAPED_STRING',
           'BINARY_VALUE', 'VALUE_LIST', 'VALUE_LIST_SIGNED_INTEGER',
           'VALUE_LIST_UNSIGNED_INTEGER', 'VALUE_LIST_SIGNED_DECIMAL',
           'VALUE_LIST_UNSIGNED_DECIMAL', 'VALUE_LIST_STRING',
           'VALUE_LIST_ESCAPED_STRING', 'lookup', 'normalize',
           'split_values']

import re
from typing import Any, List, Optional, Union  # pylint: disable=unused-import

from .exception import InvalidArgumentError


class Binary(bytes):
    """A binary string.

    If passed a string we assume it's encoded as LATIN-1, which ensures that
    the characters 0-255 are considered single-character sequences.
    """

    def __new__(cls, data):
        # type: (Union[str, bytes, bytearray, memoryview]) -> Binary
        if isinstance(data, str):
            return bytes.__new__(cls, data.encode('latin-1'))
        # bytes(n) would build n zero bytes from an integer
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("cannot convert %s to Binary" % (type(data).__name__))
        return bytes.__new__(cls, data)

    def __str__(self):
        # type: () -> str
        return repr(self)[2:-1]


class TypeObject(object):
    """A driver bind kind."""

    def __init__(self, name, *values):
        self.name = name
        self.values = values

    def __eq__(self, other):
        if isinstance(other, TypeObject):
            return self is other
        return other in self.values

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return 'TypeObject(%s)' % (self.name)


STRING = TypeObject('STRING', str)
BINARY = TypeObject('BINARY', bytes, bytearray)
NUMBER = TypeObject('NUMBER', int)


def split_values(value):
    # type: (Any) -> List[Any]
    """Return the elements of a list value.

    Lists and tuples are used as they are; anything else is converted to a
    string and split on commas.
    """
    if isinstance(value, (list, tuple)):
        return list(value)
    return str(value).split(',')


class ValueType(object):
    """A type code which may appear in a query placeholder.

    List types carry the scalar ValueType of their elements.
    """

    def __init__(self, code,           # type: str
                 description,          # type: str
                 pattern=None,         # type: Optional[str]
                 kind=STRING,          # type: TypeObject
                 escape=False,         # type: bool
                 element=None          # type: Optional[ValueType]
                 ):
        # type: (...) -> None
        self.code = code
        self.description = description
        self.kind = kind
        self.escape = escape
        self.element = element
        self.__regex = re.compile(pattern) if pattern is not None else None

    @property
    def is_list(self):
        # type: () -> bool
        return self.element is not None

    @property
    def scalar(self):
        # type: () -> ValueType
        """The type of each value bound for this type."""
        return self.element if self.element is not None else self

    def check(self, value, is_list_element=False):
        # type: (Any, bool) -> Optional[str]
        """Check the shape of a value.

        :param value: The value supplied for a placeholder of this type.
        :param is_list_element: True if value is one element of a list.
        :returns: None if the value is valid, else the reason it is not.
        """
        if self.element is not None:
            values = split_values(value)
            if not values:
                return 'No values provided for a "%s" parameter.' % (
                    self.description)
            for val in values:
                err = self.element.check(val, True)
                if err is not None:
                    return err
            return None

        if self.__regex is None:
            return None

        if self.__regex.fullmatch(str(value)) is None:
            desc = self.description
            if is_list_element:
                desc += ' list value'
            return 'Invalid data for a "%s" parameter (%r).' % (desc, value)
        return None

    def validate(self, value, is_list_element=False):
        # type: (Any, bool) -> None
        """Check the shape of a value.

        :raises InvalidArgumentError: If the value does not match.
        """
        err = self.check(value, is_list_element)
        if err is not None:
            raise InvalidArgumentError(err)

    def __repr__(self):
        return 'ValueType(%s)' % (self.code)


SIGNED_INTEGER = ValueType('d', 'integer', r'[-+]?[0-9]+', kind=NUMBER)
UNSIGNED_INTEGER = ValueType('ud', 'unsigned integer', r'[0-9]+', kind=NUMBER)
SIGNED_DECIMAL = ValueType('f', 'decimal', r'[-+]?[0-9]+(\.[0-9]+)?')
UNSIGNED_DECIMAL = ValueType('uf', 'unsigned decimal', r'[0-9]+(\.[0-9]+)?')
STRING_VALUE = ValueType('s', 'string')
ESCAPED_STRING = ValueType('es', 'escaped string', escape=True)
BINARY_VALUE = ValueType('b', 'binary', kind=BINARY)

VALUE_LIST = ValueType('l', 'list', element=STRING_VALUE)
VALUE_LIST_SIGNED_INTEGER = ValueType(
    'ld', 'integer list', element=SIGNED_INTEGER)
VALUE_LIST_UNSIGNED_INTEGER = ValueType(
    'lud', 'unsigned integer list', element=UNSIGNED_INTEGER)
VALUE_LIST_SIGNED_DECIMAL = ValueType(
    'lf', 'decimal list', element=SIGNED_DECIMAL)
VALUE_LIST_UNSIGNED_DECIMAL = ValueType(
    'luf', 'unsigned decimal list', element=UNSIGNED_DECIMAL)
VALUE_LIST_STRING = ValueType('ls', 'string list', element=STRING_VALUE)
VALUE_LIST_ESCAPED_STRING = ValueType(
    'les', 'escaped string list', element=ESCAPED_STRING)

TYPEMAP = dict((t.code, t) for t in (
    SIGNED_INTEGER, UNSIGNED_INTEGER, SIGNED_DECIMAL, UNSIGNED_DECIMAL,
    STRING_VALUE, ESCAPED_STRING, BINARY_VALUE, VALUE_LIST,
    VALUE_LIST_SIGNED_INTEGER, VALUE_LIST_UNSIGNED_INTEGER,
    VALUE_LIST_SIGNED_DECIMAL, VALUE_LIST_UNSIGNED_DECIMAL,
    VALUE_LIST_STRING, VALUE_LIST_ESCAPED_STRING))


def lookup(code):
    # type: (str) -> ValueType
    """Return the ValueType for the supplied type code (any case)."""
    obj = TYPEMAP.get(code.strip().lower())
    if obj is None:
        raise InvalidArgumentError('The data type "%s" is invalid.' % (code))
    return obj


def normalize(code):
    # type: (str) -> ValueType
    """Return the ValueType of a single value bound for a type code."""
    return lookup(code).scalar
