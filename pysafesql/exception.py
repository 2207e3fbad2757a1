"""Classes containing the exceptions for reporting errors.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['Warning', 'Error', 'InterfaceError', 'DatabaseError',
           'DataError', 'OperationalError', 'ProgrammingError',
           'ArityMismatchError', 'ArgumentTypeError', 'EmptyIdentifierError',
           'EmptySetError', 'ExecutionError', 'TransactionStateError',
           'type_name']

from typing import Any, Optional  # pylint: disable=unused-import


class Warning(Exception):  # pylint: disable=redefined-builtin
    def __init__(self, value):
        # type: (Any) -> None
        super(Warning, self).__init__(value)
        self.__value = value

    def __str__(self):
        return str(self.__value)


class Error(Exception):
    def __init__(self, value):
        # type: (Any) -> None
        super(Error, self).__init__(value)
        self.__value = value

    def __str__(self):
        return str(self.__value)


class InterfaceError(Error):
    def __init__(self, value):
        Error.__init__(self, value)


class DatabaseError(Error):
    def __init__(self, value):
        Error.__init__(self, value)


class DataError(DatabaseError):
    def __init__(self, value):
        DatabaseError.__init__(self, value)


class OperationalError(DatabaseError):
    def __init__(self, value):
        DatabaseError.__init__(self, value)


class ProgrammingError(DatabaseError):
    def __init__(self, value):
        DatabaseError.__init__(self, value)


class ArityMismatchError(ProgrammingError):
    """The number of arguments does not match the number of placeholders."""

    def __init__(self, got, want, template):
        # type: (int, int, str) -> None
        ProgrammingError.__init__(
            self, "Number of args (%d) doesn't match number of placeholders"
                  " (%d) in [%s]" % (got, want, template))
        self.got = got
        self.want = want
        self.template = template


class ArgumentTypeError(DataError):
    """A placeholder received a value of a type it cannot render."""

    def __init__(self, value):
        DataError.__init__(self, value)


class EmptyIdentifierError(ProgrammingError):
    """An identifier placeholder (?n) received an empty value."""

    def __init__(self, value="Empty value for identifier (?n) placeholder"):
        ProgrammingError.__init__(self, value)


class EmptySetError(ProgrammingError):
    """A SET placeholder (?u) received an empty mapping."""

    def __init__(self, value="Empty mapping for SET (?u) placeholder"):
        ProgrammingError.__init__(self, value)


class ExecutionError(DatabaseError):
    """The server rejected a materialized statement.

    The message holds both the server's message and the full statement.
    The original driver exception is chained as ``__cause__``.
    """

    def __init__(self, server_message, statement, errno=None):
        # type: (str, str, Optional[int]) -> None
        DatabaseError.__init__(
            self, "%s. Full query: [%s]" % (server_message, statement))
        self.server_message = server_message
        self.statement = statement
        self.errno = errno


class TransactionStateError(InterfaceError):
    """A transaction primitive was called in the wrong state."""

    def __init__(self, value):
        InterfaceError.__init__(self, value)


def type_name(value):
    # type: (Any) -> str
    """Return a short type name for use in error messages."""
    if value is None:
        return 'NoneType'
    return type(value).__name__
