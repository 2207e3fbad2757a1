"""Escaping of literals and identifiers for the placeholder types.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Functions:
escape_int -- Render a value for ?i.
escape_string -- Render a value for ?s.
escape_ident -- Render a value for ?n.
build_in -- Render a sequence for ?a.
build_set -- Render a mapping for ?u.
"""

__all__ = ['escape_int', 'escape_string', 'escape_ident', 'build_in',
           'build_set']

import decimal

from collections.abc import Mapping
from typing import Any, Optional, Sequence  # pylint: disable=unused-import

from .exception import ArgumentTypeError, EmptyIdentifierError, EmptySetError
from .exception import type_name
from . import datatype
from . import session  # pylint: disable=unused-import

NULL = 'NULL'


def escape_int(value):
    # type: (Any) -> str
    """Render VALUE as an unquoted integer literal.

    :raises ArgumentTypeError: If VALUE is not numeric.
    """
    if value is None:
        return NULL
    if not datatype.is_numeric(value):
        raise ArgumentTypeError("Integer (?i) placeholder expects numeric value, %s given"
                                % (type_name(value)))
    if isinstance(value, (float, decimal.Decimal)):
        return datatype.format_integral(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('ascii').strip()
    if isinstance(value, str):
        return value.strip()
    return str(value)


def escape_string(sess, value):
    # type: (session.Session, Any) -> str
    """Render VALUE as a single-quoted string literal escaped by SESS."""
    if value is None:
        return NULL
    text = datatype.to_literal_text(value, sess.timezone_name)
    return "'" + sess.escape_literal(text) + "'"


def escape_ident(value):
    # type: (Any) -> str
    """Render VALUE as a backtick-quoted identifier.

    :raises EmptyIdentifierError: If VALUE is empty or None.
    """
    if value is None or value == '' or value == b'':
        raise EmptyIdentifierError()
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode('utf-8', 'surrogateescape')
    return "`" + str(value).replace("`", "``") + "`"


def build_in(sess, data):
    # type: (session.Session, Sequence[Any]) -> str
    """Render DATA as the body of an IN() list.

    Every element is string-escaped, integers included, and the server
    coerces them back.  An empty list renders as NULL so "x IN (NULL)"
    matches nothing.

    :raises ArgumentTypeError: If DATA is not a list or tuple.
    """
    if not isinstance(data, (list, tuple)):
        raise ArgumentTypeError("Value for IN (?a) placeholder should be list, %s given"
                                % (type_name(data)))
    if not data:
        return NULL
    return ','.join(escape_string(sess, value) for value in data)


def build_set(sess, data):
    # type: (session.Session, Mapping[Any, Any]) -> str
    """Render DATA as a SET assignment list: `k`='v',`k2`='v2'.

    :raises ArgumentTypeError: If DATA is not a mapping.
    :raises EmptySetError: If DATA is empty.
    """
    if not isinstance(data, Mapping):
        raise ArgumentTypeError("SET (?u) placeholder expects mapping, %s given"
                                % (type_name(data)))
    if not data:
        raise EmptySetError()
    return ','.join(escape_ident(key) + '=' + escape_string(sess, value)
                    for key, value in data.items())
