"""The Database facade: typed-placeholder queries over one session.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Database -- Build, run and shape queries with typed placeholders.

Every query method takes a template followed by its arguments:

    user = db.get_row("SELECT * FROM ?n WHERE id = ?i", "users", 5)
    ids = db.get_col("SELECT id FROM users WHERE role IN (?a)", roles)
    db.query("UPDATE ?n SET ?u WHERE id = ?i", "users", changes, 5)

See pysafesql.placeholder for the placeholder alphabet.
"""

__all__ = ['Database', 'TRANS_NONE', 'TRANS_OPEN', 'TRANS_COMMITTED',
           'TRANS_ROLLED_BACK']

import contextlib
import logging

from typing import Any, Callable, Dict, Iterable, Iterator, List  # pylint: disable=unused-import
from typing import Mapping, Optional, Sequence, Union  # pylint: disable=unused-import

from .exception import Error, InterfaceError, ProgrammingError
from .exception import TransactionStateError
from .executor import Executor
from .result_set import RESULT_ASSOC, ResultSet, RowCursor  # pylint: disable=unused-import
from .session import Session  # pylint: disable=unused-import
from .stats import QueryStat, StatsRing  # pylint: disable=unused-import
from . import escape
from . import guard
from . import placeholder
from . import shaper

_log = logging.getLogger('pysafesql.database')

TRANS_NONE = 'none'
TRANS_OPEN = 'open'
TRANS_COMMITTED = 'committed'
TRANS_ROLLED_BACK = 'rolled_back'


class Database(object):
    """A query facade that owns one session.

    Public Functions:
    query -- Run a template; return a ResultSet or True.
    parse -- Materialize a template without running it.
    get_one, get_row, get_col, get_all -- Scalar / row / column / rows.
    get_ind, get_ind_col, get_assoc, get_tree -- Keyed shapes.
    cursor -- Lazy row iterator.
    insert, update, delete, upsert, insert_batch -- Write helpers.
    count, exists, find_by_id, find_by, find_all -- Read helpers.
    begin, commit, rollback, transaction, transactional -- Transactions.
    whitelist, filter_fields -- Input guards.
    last_query, stats -- Telemetry.

    A Database is not safe to share between threads.  Result sets returned
    by query() and iterators returned by cursor() hold the session until
    they are closed or exhausted.
    """

    RESULT_ASSOC = 1
    RESULT_NUM = 2

    def __init__(self, session):
        # type: (Session) -> None
        self.__session = session
        self.__stats = StatsRing()
        self.__executor = Executor(session, self.__stats)
        self.__trans_state = TRANS_NONE

    @property
    def session(self):
        # type: () -> Session
        """The underlying session."""
        return self.__session

    @property
    def closed(self):
        # type: () -> bool
        return self.__session.closed

    def close(self):
        # type: () -> None
        """Close the session."""
        self._check_closed()
        self.__session.close()

    def _check_closed(self):
        # type: () -> None
        if self.__session.closed:
            raise Error("connection is closed")

    # Core pipeline

    def parse(self, template, *args):
        # type: (str, *Any) -> str
        """Return TEMPLATE materialized with ARGS, without running it.

        The result may be spliced into another template through ?p.
        """
        return placeholder.materialize(self.__session, template, args)

    def _run(self, statement):
        # type: (str) -> Union[ResultSet, bool]
        return self.__executor.run(statement)

    def _select(self, template, args):
        # type: (str, Sequence[Any]) -> Optional[ResultSet]
        res = self._run(self.parse(template, *args))
        if isinstance(res, ResultSet):
            return res
        # Statement produced no rows at all (e.g. DML passed to get_*)
        return None

    def query(self, template, *args):
        # type: (str, *Any) -> Union[ResultSet, bool]
        """Run TEMPLATE.

        :returns: A ResultSet that the caller must close, or True.
        """
        return self._run(self.parse(template, *args))

    def fetch(self, result, mode=RESULT_ASSOC):
        # type: (ResultSet, int) -> Any
        return result.fetchone(mode)

    def free(self, result):
        # type: (ResultSet) -> None
        result.close()

    def num_rows(self, result):
        # type: (ResultSet) -> int
        return result.row_count

    def affected_rows(self):
        # type: () -> int
        return self.__session.affected_rows()

    def insert_id(self):
        # type: () -> int
        return self.__session.insert_id()

    # Result shapes

    def get_one(self, template, *args):
        # type: (str, *Any) -> Any
        """First column of the first row, or None."""
        res = self._select(template, args)
        return shaper.scalar(res) if res else None

    def get_row(self, template, *args):
        # type: (str, *Any) -> Optional[Dict[str, Any]]
        """First row as a dict, or None."""
        res = self._select(template, args)
        return shaper.row(res) if res else None

    query_first = get_row

    def get_col(self, template, *args):
        # type: (str, *Any) -> List[Any]
        """First column of every row."""
        res = self._select(template, args)
        return shaper.column(res) if res else []

    def get_all(self, template, *args):
        # type: (str, *Any) -> List[Dict[str, Any]]
        """Every row as a dict."""
        res = self._select(template, args)
        return shaper.all_rows(res) if res else []

    def get_ind(self, index, template, *args):
        # type: (str, str, *Any) -> Dict[Any, Dict[str, Any]]
        """Rows keyed by the INDEX column; later duplicates win."""
        res = self._select(template, args)
        return shaper.indexed(res, index) if res else {}

    def get_ind_col(self, index, template, *args):
        # type: (str, str, *Any) -> Dict[Any, Any]
        """INDEX column mapped to the first of the remaining columns."""
        res = self._select(template, args)
        return shaper.indexed_column(res, index) if res else {}

    def get_assoc(self, template, *args):
        # type: (str, *Any) -> Dict[Any, Any]
        """First column mapped to the second."""
        res = self._select(template, args)
        return shaper.assoc(res) if res else {}

    def get_tree(self, keys, template, *args):
        # type: (Union[str, Sequence[str]], str, *Any) -> Dict[Any, Any]
        """Rows nested under the values of KEYS ("a,b" or ['a', 'b'])."""
        keys = shaper.tree_keys(keys)
        res = self._select(template, args)
        return shaper.tree(res, keys) if res else {}

    def cursor(self, template, *args):
        # type: (str, *Any) -> RowCursor
        """Run TEMPLATE now and return an iterator over its rows.

        The session stays busy until the iterator is exhausted, closed, or
        dropped:

            with db.cursor("SELECT * FROM ?n", "logs") as rows:
                for entry in rows:
                    ...
        """
        return shaper.cursor(self._select(template, args))

    # Read helpers

    def exists(self, template, *args):
        # type: (str, *Any) -> bool
        """True if TEMPLATE returns at least one row."""
        res = self._select(template, args)
        if res is None:
            return False
        try:
            return res.row_count > 0
        finally:
            res.close()

    def count(self, table, where=None, *args):
        # type: (str, Optional[str], *Any) -> int
        """Number of rows in TABLE, optionally filtered by a WHERE template.

            db.count("users", "status = ?s", "active")
        """
        if where is None:
            return int(self.get_one("SELECT COUNT(*) FROM ?n", table))
        condition = self.parse(where, *args)
        return int(self.get_one("SELECT COUNT(*) FROM ?n WHERE ?p", table, condition))

    def find_by_id(self, table, id, id_column='id'):  # pylint: disable=redefined-builtin
        # type: (str, Any, str) -> Optional[Dict[str, Any]]
        return self.get_row("SELECT * FROM ?n WHERE ?n = ?i", table, id_column, id)

    def find_by(self, table, field, value):
        # type: (str, str, Any) -> Optional[Dict[str, Any]]
        return self.get_row("SELECT * FROM ?n WHERE ?n = ?s", table, field, value)

    def find_all(self, table, where=None, *args):
        # type: (str, Optional[str], *Any) -> List[Dict[str, Any]]
        if where is None:
            return self.get_all("SELECT * FROM ?n", table)
        condition = self.parse(where, *args)
        return self.get_all("SELECT * FROM ?n WHERE ?p", table, condition)

    # Write helpers

    def insert(self, table, data):
        # type: (str, Mapping[str, Any]) -> int
        """Insert one row.  Returns the AUTO_INCREMENT id (0 if none)."""
        self.query("INSERT INTO ?n SET ?u", table, data)
        return self.insert_id()

    def update(self, table, data, where=None, *args):
        # type: (str, Mapping[str, Any], Optional[str], *Any) -> int
        """Update rows of TABLE matching WHERE; return the affected count.

        Without WHERE every row in the table is updated.
        """
        if where is None:
            self.query("UPDATE ?n SET ?u", table, data)
        else:
            condition = self.parse(where, *args)
            self.query("UPDATE ?n SET ?u WHERE ?p", table, data, condition)
        return self.affected_rows()

    def delete(self, table, where=None, *args):
        # type: (str, Optional[str], *Any) -> int
        """Delete rows of TABLE matching WHERE; return the affected count.

        Without WHERE every row in the table is deleted.
        """
        if where is None:
            self.query("DELETE FROM ?n", table)
        else:
            condition = self.parse(where, *args)
            self.query("DELETE FROM ?n WHERE ?p", table, condition)
        return self.affected_rows()

    def upsert(self, table, data):
        # type: (str, Mapping[str, Any]) -> int
        """INSERT ... ON DUPLICATE KEY UPDATE with the same DATA twice.

        TABLE needs a primary or unique key.  Returns the new id if a row
        was inserted, else the affected row count.
        """
        self.query("INSERT INTO ?n SET ?u ON DUPLICATE KEY UPDATE ?u", table, data, data)
        return self.insert_id() or self.affected_rows()

    def insert_batch(self, table, rows):
        # type: (str, Sequence[Mapping[str, Any]]) -> int
        """Insert ROWS with one statement; return the affected count.

        The column list is taken from rows[0] and every row must supply
        those keys.  All values are string-escaped.
        """
        if not rows:
            return 0
        keys = list(rows[0].keys())
        if not keys:
            raise ProgrammingError("insert_batch rows must not be empty")
        values = []
        for i, row in enumerate(rows):
            try:
                escaped = [escape.escape_string(self.__session, row[key]) for key in keys]
            except KeyError as e:
                raise ProgrammingError("insert_batch row %d is missing column %s"
                                       % (i, e.args[0]))
            values.append("(" + ",".join(escaped) + ")")
        fields = [escape.escape_ident(key) for key in keys]
        statement = ("INSERT INTO " + escape.escape_ident(table) +
                     " (" + ",".join(fields) + ") VALUES " + ",".join(values))
        self._run(statement)
        return self.affected_rows()

    # Guards and telemetry

    whitelist = staticmethod(guard.whitelist)
    filter_fields = staticmethod(guard.filter_fields)
    filter_array = filter_fields

    def last_query(self):
        # type: () -> Optional[str]
        """The most recently executed statement, or None."""
        last = self.__stats.last()
        return last.statement if last is not None else None

    def stats(self):
        # type: () -> List[QueryStat]
        """A snapshot of the last (up to 100) query records, oldest first."""
        return self.__stats.snapshot()

    # Transactions

    @property
    def transaction_state(self):
        # type: () -> str
        """One of TRANS_NONE, TRANS_OPEN, TRANS_COMMITTED, TRANS_ROLLED_BACK."""
        return self.__trans_state

    @property
    def in_transaction(self):
        # type: () -> bool
        return self.__trans_state == TRANS_OPEN

    def begin(self):
        # type: () -> Database
        """Open a transaction.  Transactions do not nest.

        :raises TransactionStateError: If a transaction is already open.
        """
        self._check_closed()
        if self.__trans_state == TRANS_OPEN:
            raise TransactionStateError("transaction already open")
        self.__session.begin()
        self.__trans_state = TRANS_OPEN
        return self

    def commit(self):
        # type: () -> Database
        """:raises TransactionStateError: If no transaction is open."""
        self._check_closed()
        if self.__trans_state != TRANS_OPEN:
            raise TransactionStateError("no transaction to commit")
        self.__session.commit()
        self.__trans_state = TRANS_COMMITTED
        return self

    def rollback(self):
        # type: () -> Database
        """:raises TransactionStateError: If no transaction is open."""
        self._check_closed()
        if self.__trans_state != TRANS_OPEN:
            raise TransactionStateError("no transaction to roll back")
        try:
            self.__session.rollback()
        finally:
            # The server discards the transaction even if the reply is lost
            self.__trans_state = TRANS_ROLLED_BACK
        return self

    def _abort(self):
        # type: () -> None
        if self.__trans_state != TRANS_OPEN:
            return
        try:
            self.rollback()
        except Error:
            _log.exception("Rollback failed while handling an error")

    @contextlib.contextmanager
    def transaction(self):
        # type: () -> Iterator[Database]
        """Run a ``with`` block inside a transaction.

        Commits when the block finishes, rolls back and re-raises when it
        raises anything, including KeyboardInterrupt or task cancellation.
        """
        self.begin()
        try:
            yield self
            self.commit()
        except BaseException:
            self._abort()
            raise

    def transactional(self, func):
        # type: (Callable[[Database], Any]) -> Any
        """Call FUNC(self) inside transaction() and return its result."""
        with self.transaction():
            return func(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if self.in_transaction:
                if exc_type is None:
                    self.commit()
                else:
                    self.rollback()
        finally:
            if not self.closed:
                self.close()
