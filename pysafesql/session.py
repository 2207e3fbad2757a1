"""Establish and manage a SQL session with a MySQL database.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ["SessionException", "Session", "MySQLSession", "split_error"]

# This module defines the primitive operations the query layer needs from a
# server session: run a textual statement, read back the affected row count
# and the last insert id, escape a literal against the session charset, and
# drive a transaction.  Everything else (placeholders, shaping, telemetry)
# is built on top of these in the executor and the database facade.

import logging

from typing import Any, Optional, Tuple, Union  # pylint: disable=unused-import

import pymysql

from .exception import OperationalError
from .datatype import LOCALZONE_NAME
from .result_set import ResultSet

_log = logging.getLogger('pysafesql.session')


class SessionException(OperationalError):
    """Raised when the server rejects a statement sent on a session.

    Carries the server's error code and message so the executor can
    annotate its telemetry before raising ExecutionError.
    """

    def __init__(self, message, errno=None):
        # type: (str, Optional[int]) -> None
        OperationalError.__init__(self, message)
        self.message = message
        self.errno = errno


class Session(object):
    """The primitive operations the query layer consumes.

    Public Functions:
    execute -- Run a statement; return a ResultSet or True.
    affected_rows -- Rows changed by the last statement.
    insert_id -- AUTO_INCREMENT value generated by the last statement.
    escape_literal -- Escape text against the session's charset (no quotes).
    begin -- Start a transaction.
    commit -- Commit the current transaction.
    rollback -- Roll back the current transaction.
    error_message -- Message of the last failed statement.
    close -- Close the session.
    """

    # Name of the zone that naive DATETIME literals are expressed in
    timezone_name = LOCALZONE_NAME  # type: str

    closed = False

    def execute(self, statement):
        # type: (str) -> Union[ResultSet, bool]
        raise NotImplementedError

    def affected_rows(self):
        # type: () -> int
        raise NotImplementedError

    def insert_id(self):
        # type: () -> int
        raise NotImplementedError

    def escape_literal(self, value):
        # type: (Union[str, bytes]) -> str
        raise NotImplementedError

    def begin(self):
        # type: () -> None
        raise NotImplementedError

    def commit(self):
        # type: () -> None
        raise NotImplementedError

    def rollback(self):
        # type: () -> None
        raise NotImplementedError

    def error_message(self):
        # type: () -> Optional[str]
        raise NotImplementedError

    def close(self):
        # type: () -> None
        self.closed = True


def split_error(exc):
    # type: (pymysql.MySQLError) -> Tuple[Optional[int], str]
    """Return (errno, message) for a PyMySQL error."""
    args = exc.args
    if len(args) >= 2 and isinstance(args[0], int):
        return args[0], str(args[1])
    if args:
        return None, str(args[0])
    return None, exc.__class__.__name__


class MySQLSession(Session):
    """A session over a PyMySQL connection.

    The connection runs in autocommit mode; begin() opens an explicit
    transaction that lasts until commit() or rollback().  Cursors are
    buffered, so the row count of a result is known as soon as the
    statement returns.
    """

    def __init__(self, connection, timezone_name=None):
        # type: (pymysql.connections.Connection, Optional[str]) -> None
        """
        :param connection: An open PyMySQL connection.
        :param timezone_name: Zone naive DATETIME literals are expressed in.
        """
        self.__conn = connection
        self.__error = None  # type: Optional[str]
        if timezone_name:
            self.timezone_name = timezone_name

    @property
    def connection(self):
        # type: () -> pymysql.connections.Connection
        """The underlying PyMySQL connection."""
        return self.__conn

    @property
    def encoding(self):
        # type: () -> str
        return self.__conn.encoding

    def execute(self, statement):
        # type: (str) -> Union[ResultSet, bool]
        """Run STATEMENT and return a ResultSet, or True if it has no rows.

        :raises SessionException: If the server rejects the statement.
        """
        cursor = self.__conn.cursor()
        try:
            # No args: PyMySQL must not apply %-interpolation to the text
            cursor.execute(statement)
        except pymysql.MySQLError as e:
            cursor.close()
            errno, message = split_error(e)
            self.__error = message
            raise SessionException(message, errno) from e
        self.__error = None
        if cursor.description:
            return ResultSet(cursor)
        cursor.close()
        return True

    def affected_rows(self):
        # type: () -> int
        return self.__conn.affected_rows()

    def insert_id(self):
        # type: () -> int
        return self.__conn.insert_id()

    def escape_literal(self, value):
        # type: (Union[str, bytes]) -> str
        """Escape VALUE for use inside single quotes.

        Bytes are decoded with surrogateescape; PyMySQL encodes the final
        statement the same way, so arbitrary binary data survives intact.
        """
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode(self.encoding, 'surrogateescape')
        return self.__conn.escape_string(value)

    def _transact(self, name, func):
        # type: (str, Any) -> None
        _log.debug(name)
        try:
            func()
        except pymysql.MySQLError as e:
            errno, message = split_error(e)
            self.__error = message
            raise SessionException("%s failed: %s" % (name, message), errno) from e

    def begin(self):
        # type: () -> None
        self._transact("BEGIN", self.__conn.begin)

    def commit(self):
        # type: () -> None
        self._transact("COMMIT", self.__conn.commit)

    def rollback(self):
        # type: () -> None
        self._transact("ROLLBACK", self.__conn.rollback)

    def error_message(self):
        # type: () -> Optional[str]
        return self.__error

    def close(self):
        # type: () -> None
        if not self.closed:
            self.__conn.close()
        Session.close(self)
