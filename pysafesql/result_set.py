""" pysafesql result set

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['RESULT_ASSOC', 'RESULT_NUM', 'ResultSet', 'RowCursor']

from typing import Any, Dict, List, Optional, Tuple, Union  # pylint: disable=unused-import

from .exception import InterfaceError

RESULT_ASSOC = 1
RESULT_NUM = 2

Row = Union[Dict[str, Any], Tuple[Any, ...]]


class ResultSet(object):
    """A row stream produced by a statement.

    Wraps a DB-API cursor positioned on a result.  Rows are read either as
    dicts keyed by column name (RESULT_ASSOC) or as tuples (RESULT_NUM).
    The result must be closed before the next statement runs on the same
    session; ResultSet is a context manager for that reason.
    """

    def __init__(self, cursor):
        # type: (Any) -> None
        """
        :param cursor: DB-API cursor holding the result.
        """
        self.__cursor = cursor
        self.columns = [d[0] for d in cursor.description]  # type: List[str]
        self.row_count = cursor.rowcount  # type: int
        self.closed = False

    def fetchone(self, mode=RESULT_ASSOC):
        # type: (int) -> Optional[Row]
        """Return the next row, or None when the result is exhausted."""
        if self.closed:
            raise InterfaceError("result set is closed")
        row = self.__cursor.fetchone()
        if row is None:
            return None
        if mode == RESULT_NUM:
            return tuple(row)
        # Duplicate column names collapse: the rightmost column wins.
        return dict(zip(self.columns, row))

    def __iter__(self):
        while True:
            row = self.fetchone()
            if row is None:
                return
            yield row

    def close(self):
        # type: () -> None
        """Release the result.  Closing twice is harmless."""
        if self.closed:
            return
        self.closed = True
        self.__cursor.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class RowCursor(object):
    """A lazy, single-use iterator over the rows of a result.

    The result is released when the iterator is exhausted, when close() is
    called, when a ``with`` block around it exits, or when the iterator is
    garbage collected after being abandoned.  A RowCursor over no result
    (a statement that returned no rows at all) is empty and already closed.
    """

    def __init__(self, result=None):
        # type: (Optional[ResultSet]) -> None
        self._result = result

    @property
    def closed(self):
        # type: () -> bool
        return self._result is None or self._result.closed

    def __iter__(self):
        return self

    def __next__(self):
        # type: () -> Row
        if self.closed:
            raise StopIteration
        row = self._result.fetchone()
        if row is None:
            self._result.close()
            raise StopIteration
        return row

    def close(self):
        # type: () -> None
        if self._result is not None:
            self._result.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __del__(self):
        result = getattr(self, '_result', None)
        if result is not None and not result.closed:
            result.close()
