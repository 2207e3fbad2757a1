"""Submit materialized statements to a session and record telemetry.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Executor -- Runs statements on one session, keeping a StatsRing.
"""

__all__ = ['Executor']

import logging
import time

from typing import Optional, Union  # pylint: disable=unused-import

from .exception import ExecutionError, InterfaceError
from .result_set import ResultSet
from .session import Session, SessionException  # pylint: disable=unused-import
from .stats import QueryStat, StatsRing

_log = logging.getLogger('pysafesql.executor')


class Executor(object):
    """Run statements on SESSION, one at a time.

    A ResultSet returned by run() holds the session until it is closed;
    running another statement before that raises InterfaceError.
    """

    def __init__(self, session, stats=None):
        # type: (Session, Optional[StatsRing]) -> None
        self.session = session
        self.stats = stats if stats is not None else StatsRing()
        self.__open = None  # type: Optional[ResultSet]

    def _check_released(self):
        # type: () -> None
        if self.__open is not None and not self.__open.closed:
            raise InterfaceError("previous result set has not been released")
        self.__open = None

    def run(self, statement):
        # type: (str) -> Union[ResultSet, bool]
        """Execute STATEMENT.

        :returns: A ResultSet for row-producing statements, else True.
        :raises ExecutionError: If the server rejects the statement.
        """
        if self.session.closed:
            raise InterfaceError("connection is closed")
        self._check_released()

        start = time.time()
        try:
            res = self.session.execute(statement)
        except SessionException as e:
            elapsed = time.time() - start
            message = self.session.error_message() or e.message
            self.stats.append(QueryStat(statement, start, elapsed, message))
            _log.warning("Query failed after %.4fs: %s [%s]", elapsed, message, statement)
            raise ExecutionError(message, statement, e.errno) from e
        elapsed = time.time() - start
        self.stats.append(QueryStat(statement, start, elapsed))
        _log.debug("Query took %.4fs: %s", elapsed, statement)

        if isinstance(res, ResultSet):
            self.__open = res
        return res
