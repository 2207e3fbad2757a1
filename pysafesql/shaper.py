"""Reduce result sets into the container shapes callers ask for.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Every function here except cursor() consumes the whole result and closes
it before returning, whether or not the reduction succeeds.
"""

__all__ = ['scalar', 'row', 'column', 'all_rows', 'indexed',
           'indexed_column', 'assoc', 'tree', 'cursor', 'tree_keys']

from typing import Any, Dict, List, Optional, Sequence, Union  # pylint: disable=unused-import

from .exception import ProgrammingError
from .result_set import RESULT_ASSOC, RESULT_NUM, ResultSet, RowCursor


def scalar(result):
    # type: (ResultSet) -> Any
    """First column of the first row, or None."""
    try:
        first = result.fetchone(RESULT_NUM)
        return first[0] if first else None
    finally:
        result.close()


def row(result):
    # type: (ResultSet) -> Optional[Dict[str, Any]]
    """First row as a dict, or None."""
    try:
        return result.fetchone(RESULT_ASSOC)
    finally:
        result.close()


def column(result):
    # type: (ResultSet) -> List[Any]
    """First column of every row."""
    ret = []
    try:
        while True:
            r = result.fetchone(RESULT_NUM)
            if r is None:
                return ret
            ret.append(r[0])
    finally:
        result.close()


def all_rows(result):
    # type: (ResultSet) -> List[Dict[str, Any]]
    try:
        return list(result)
    finally:
        result.close()


def _check_column(result, name):
    # type: (ResultSet, str) -> None
    if name not in result.columns:
        raise ProgrammingError("Column %r is not in the result: %s"
                               % (name, ', '.join(result.columns)))


def indexed(result, index):
    # type: (ResultSet, str) -> Dict[Any, Dict[str, Any]]
    """Rows keyed by their INDEX column.  Later duplicates overwrite."""
    ret = {}
    try:
        _check_column(result, index)
        for r in result:
            ret[r[index]] = r
        return ret
    finally:
        result.close()


def indexed_column(result, index):
    # type: (ResultSet, str) -> Dict[Any, Any]
    """Map each row's INDEX column to the first of its other columns."""
    ret = {}
    try:
        _check_column(result, index)
        for r in result:
            key = r.pop(index)
            ret[key] = next(iter(r.values()), None)
        return ret
    finally:
        result.close()


def assoc(result):
    # type: (ResultSet) -> Dict[Any, Any]
    """Map the first column to the second, read positionally."""
    ret = {}
    try:
        if len(result.columns) < 2:
            raise ProgrammingError("assoc needs at least two columns, got %d"
                                   % len(result.columns))
        while True:
            r = result.fetchone(RESULT_NUM)
            if r is None:
                return ret
            ret[r[0]] = r[1]
    finally:
        result.close()


def tree_keys(keys):
    # type: (Union[str, Sequence[str]]) -> List[str]
    """Accept either "a, b" or ['a', 'b']."""
    if isinstance(keys, str):
        keys = keys.split(',')
    ret = [key.strip() for key in keys]
    if not ret or not all(ret):
        raise ProgrammingError("tree needs a non-empty list of key fields")
    return ret


def tree(result, keys):
    # type: (ResultSet, Union[str, Sequence[str]]) -> Dict[Any, Any]
    """Nest rows under their KEYS values, outermost first.

    Leaves are whole rows; rows sharing every key overwrite each other.
    """
    ret = {}  # type: Dict[Any, Any]
    try:
        keys = tree_keys(keys)
        for key in keys:
            _check_column(result, key)
        for r in result:
            node = ret
            for key in keys[:-1]:
                node = node.setdefault(r[key], {})
            node[r[keys[-1]]] = r
        return ret
    finally:
        result.close()


def cursor(result):
    # type: (Optional[ResultSet]) -> RowCursor
    """Return a lazy iterator over the rows; it releases RESULT itself.

    A None RESULT gives an empty, closed iterator.
    """
    return RowCursor(result)
