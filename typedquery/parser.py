"""Parse query templates into statements with bound parameters.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Two placeholder dialects are supported:

basic   -- {type} or {location:type}, e.g. "SELECT * FROM t WHERE id={0:ud}".
           A query uses either inferred ({type}) or location ({n:type})
           binding, never both.
classic -- %type, e.g. "SELECT * FROM t WHERE id=%ud".  Arguments are bound
           strictly in order.

Exported Classes:
Parser -- Common parsing loop.
BasicParser -- Parser for the basic dialect.
ClassicParser -- Parser for the classic dialect.

Exported Functions:
expand -- Build the bind markers and values for one placeholder.
parser_for -- Return the parser for a configured query mode.
"""

__all__ = ['Parser', 'BasicParser', 'ClassicParser', 'expand', 'parser_for',
           'QUERY_DEFAULT', 'QUERY_CLASSIC']

import re
from typing import Any, List, Optional, Sequence, Tuple  # pylint: disable=unused-import

from . import datatype
from .exception import InvalidArgumentError, OutOfBoundsError
from .result import QueryResult
from .statement import BoundParameter

QUERY_DEFAULT = 0
QUERY_CLASSIC = 1

_LOCATION = re.compile(r'[0-9]+')


def expand(value_type, value, marker='?'):
    # type: (datatype.ValueType, Any, str) -> Tuple[str, List[Any]]
    """Return the text replacing a placeholder and the values it binds.

    A list type becomes a parenthesized group with one marker per element,
    any other type a single marker.
    """
    if value_type.is_list:
        values = datatype.split_values(value)
        if not values:
            raise InvalidArgumentError(
                'No values provided for a "%s" parameter.' % (value_type.description))
        return '(' + ','.join([marker] * len(values)) + ')', values
    return marker, [value]


def clean(template):
    # type: (str) -> str
    """Strip surrounding whitespace and a single trailing semicolon."""
    template = template.strip()
    if template.endswith(';'):
        template = template[:-1]
    return template


class Parser(object):
    """Rewrite a query template into a QueryResult ready to execute.

    Subclasses supply the placeholder pattern and resolve each match to the
    index of the argument it binds.
    """

    pattern = None  # type: re.Pattern

    def __init__(self, marker='?'):
        # type: (str) -> None
        self.marker = marker

    def parse(self, template, arguments):
        # type: (str, Sequence[Any]) -> QueryResult
        """Parse TEMPLATE, binding ARGUMENTS.

        :raises InvalidArgumentError: For an invalid placeholder or value.
        :raises OutOfBoundsError: If a placeholder has no argument.
        """
        if not isinstance(template, str):
            raise InvalidArgumentError('No query provided.')
        template = clean(template)
        result = QueryResult(template, arguments)
        self.reset()

        # Placeholders are replaced where they were matched: a '%s' marker
        # would itself match a later classic placeholder.
        pieces = []  # type: List[str]
        end = 0
        for match in self.pattern.finditer(template):
            index, code = self.resolve(match)
            if index >= len(arguments):
                raise OutOfBoundsError(
                    'The specified parameter location is invalid (%d).' % (index),
                    index)
            value = arguments[index]

            value_type = datatype.lookup(code)
            value_type.validate(value)

            text, values = expand(value_type, value, self.marker)
            pieces.append(self.literal(template[end:match.start()]))
            pieces.append(text)
            end = match.end()

            scalar = value_type.scalar
            result.parameters.extend(BoundParameter(v, scalar) for v in values)

        pieces.append(self.literal(template[end:]))
        result.query = ''.join(pieces)
        return result

    def literal(self, text):
        # type: (str) -> str
        """Return template text as the driver must receive it."""
        if self.marker == '%s':
            return text.replace('%', '%%')
        return text

    def reset(self):
        # type: () -> None
        """Forget the state of a previous parse."""
        pass

    def resolve(self, match):
        # type: (re.Match) -> Tuple[int, str]
        """Return (argument index, type code) for a placeholder match."""
        raise NotImplementedError


class BasicParser(Parser):
    """Parser for {type} and {location:type} placeholders."""

    pattern = re.compile(r'\{(((\w+):)?(\w+))\}')

    __MIXED = 'You cannot have both inferred, and location binding in the same query.'

    def reset(self):
        # type: () -> None
        self._location = False
        self._inferred = False
        self._slots = 0

    def resolve(self, match):
        # type: (re.Match) -> Tuple[int, str]
        location = match.group(3)
        if location:
            self._location = True
            if self._inferred:
                raise InvalidArgumentError(self.__MIXED)
            if _LOCATION.fullmatch(location) is None:
                raise InvalidArgumentError(
                    'Invalid parameter number value (%s).' % (location))
            index = int(location)
        else:
            self._inferred = True
            if self._location:
                raise InvalidArgumentError(self.__MIXED)
            index = self._slots
            self._slots += 1
        return index, match.group(4)


class ClassicParser(Parser):
    """Parser for %type placeholders, bound strictly in order."""

    pattern = re.compile(r'%(\w+)')

    def reset(self):
        # type: () -> None
        self._next = 0

    def resolve(self, match):
        # type: (re.Match) -> Tuple[int, str]
        index = self._next
        self._next += 1
        return index, match.group(1)


PARSERS = {QUERY_DEFAULT: BasicParser,
           QUERY_CLASSIC: ClassicParser}


def parser_for(query_mode, marker='?'):
    # type: (int, str) -> Parser
    """Return a parser for QUERY_MODE."""
    cls = PARSERS.get(query_mode)
    if cls is None:
        raise InvalidArgumentError('Invalid query mode (%r).' % (query_mode))
    return cls(marker)
