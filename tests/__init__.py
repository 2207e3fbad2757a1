"""
(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import os
import logging

from typing import Any, Dict  # pylint: disable=unused-import

_log = logging.getLogger("pysafesqltest")


def _setting(name, default=None):
    # type: (str, Any) -> Any
    """Prefer PYSAFESQL_TEST_<NAME>, then DB_<NAME>, then DEFAULT."""
    value = os.environ.get('PYSAFESQL_TEST_' + name)
    if value is None:
        value = os.environ.get('DB_' + ('NAME' if name == 'DATABASE' else name))
    return default if value is None else value


def live_settings():
    # type: () -> Dict[str, Any]
    """Connection arguments for the live-server tests, from the environment.

    Returns an empty dict if no database is configured.
    """
    database = _setting('DATABASE')
    user = _setting('USER')
    if not database or not user:
        return {}
    return {'host': _setting('HOST', '127.0.0.1'),
            'port': int(_setting('PORT', 3306)),
            'user': user,
            'password': _setting('PASSWORD', ''),
            'database': database,
            'charset': _setting('CHARSET', 'utf8mb4')}
