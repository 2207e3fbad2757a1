"""Materialize query templates into executable SQL.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Placeholders are bound strictly by position:

  ?n  identifier          escape_ident     SELECT * FROM ?n
  ?s  string literal      escape_string    WHERE name = ?s
  ?i  integer literal     escape_int       WHERE id = ?i
  ?a  IN list body        build_in         WHERE id IN (?a)
  ?u  SET list body       build_set        UPDATE t SET ?u
  ?p  pre-parsed SQL      inserted as-is   WHERE ?p

?p bypasses all escaping.  Only pass it text that came out of
materialize() (or Database.parse()) or that is otherwise trusted.
"""

__all__ = ['materialize']

from typing import Any, Sequence  # pylint: disable=unused-import

from .exception import ArgumentTypeError
from . import escape
from . import parser
from . import session  # pylint: disable=unused-import


def _raw(value):
    # type: (Any) -> str
    if value is None:
        raise ArgumentTypeError("Parsed (?p) placeholder expects SQL text, NoneType given")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8', 'surrogateescape')
    return str(value)


def materialize(sess, template, args):
    # type: (session.Session, str, Sequence[Any]) -> str
    """Return TEMPLATE with every placeholder replaced by its escaped ARG.

    :raises ArityMismatchError: If ARGS does not match the placeholders.
    :raises ArgumentTypeError: If an argument doesn't suit its placeholder.
    """
    parts = parser.parse_template(template, args)
    query = []
    values = iter(args)
    for i, part in enumerate(parts):
        if i % 2 == 0:
            query.append(part)
            continue

        value = next(values)
        if part == '?n':
            part = escape.escape_ident(value)
        elif part == '?s':
            part = escape.escape_string(sess, value)
        elif part == '?i':
            part = escape.escape_int(value)
        elif part == '?a':
            part = escape.build_in(sess, value)
        elif part == '?u':
            part = escape.build_set(sess, value)
        elif part == '?p':
            part = _raw(value)
        query.append(part)
    return ''.join(query)
