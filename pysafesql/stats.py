"""Per-query telemetry.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['STATS_LIMIT', 'QueryStat', 'StatsRing']

import collections
from datetime import datetime

from typing import Any, Deque, Dict, List, Optional  # pylint: disable=unused-import

from .datatype import LOCALZONE

STATS_LIMIT = 100


class QueryStat(object):
    """Telemetry for one executed statement."""

    __slots__ = ('statement', 'start', 'elapsed', 'error')

    def __init__(self, statement, start, elapsed, error=None):
        # type: (str, float, float, Optional[str]) -> None
        """
        :param statement: The materialized statement that was sent.
        :param start: Wall-clock start time in seconds since the epoch.
        :param elapsed: Seconds spent waiting for the server.
        :param error: Server message if the statement failed.
        """
        self.statement = statement
        self.start = start
        self.elapsed = elapsed
        self.error = error

    @property
    def started(self):
        # type: () -> datetime
        """The start time as a timezone-aware datetime in the local zone."""
        return datetime.fromtimestamp(self.start, LOCALZONE)

    def as_dict(self):
        # type: () -> Dict[str, Any]
        ret = {'query': self.statement, 'start': self.start,
               'timer': self.elapsed}  # type: Dict[str, Any]
        if self.error is not None:
            ret['error'] = self.error
        return ret

    def __repr__(self):
        return ('QueryStat(statement=%r, start=%r, elapsed=%r, error=%r)'
                % (self.statement, self.start, self.elapsed, self.error))


class StatsRing(object):
    """A FIFO of the most recent QueryStat records, bounded to LIMIT."""

    def __init__(self, limit=STATS_LIMIT):
        # type: (int) -> None
        self.limit = limit
        self.__stats = collections.deque(maxlen=limit)  # type: Deque[QueryStat]

    def append(self, stat):
        # type: (QueryStat) -> None
        self.__stats.append(stat)

    def last(self):
        # type: () -> Optional[QueryStat]
        return self.__stats[-1] if self.__stats else None

    def snapshot(self):
        # type: () -> List[QueryStat]
        """Return the records, oldest first.  Later appends don't affect it."""
        return list(self.__stats)

    def total_time(self):
        # type: () -> float
        return sum(stat.elapsed for stat in self.__stats)

    def clear(self):
        # type: () -> None
        self.__stats.clear()

    def __len__(self):
        return len(self.__stats)

    def __iter__(self):
        return iter(self.snapshot())
