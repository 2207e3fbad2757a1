"""
(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import time
import logging

import pytest

from typing import Any, Dict, Generator, Mapping  # pylint: disable=unused-import

import pysafesql

from . import live_settings
from .mock_session import MockSession

_log = logging.getLogger("pysafesqltest")

DATABASE_FIXTURE = Mapping[str, Any]


@pytest.fixture
def session():
    # type: () -> MockSession
    return MockSession()


@pytest.fixture
def db(session):
    # type: (MockSession) -> pysafesql.Database
    return pysafesql.Database(session)


@pytest.fixture(scope='session')
def database():
    # type: () -> DATABASE_FIXTURE
    """Find a MySQL server to run the live tests against.

    Skips every test using it when none is configured or reachable.
    """
    connect_args = live_settings()
    if not connect_args:
        pytest.skip("No MySQL server configured (set PYSAFESQL_TEST_DATABASE"
                    " and PYSAFESQL_TEST_USER)")

    _log.info("Creating a SQL connection to %s as user %s",
              connect_args['database'], connect_args['user'])
    end = time.time() + 10
    system_information = {'version': None}  # type: Dict[str, Any]
    while True:
        try:
            con = pysafesql.connect(**connect_args)
            try:
                system_information['version'] = con.get_one("SELECT VERSION()")
            finally:
                con.close()
            break
        except pysafesql.OperationalError as e:
            if time.time() > end:
                pytest.skip("MySQL server not reachable: %s" % (e))
            time.sleep(1)

    _log.info("Database %s is available (%s)", connect_args['database'],
              system_information['version'])

    return {'connect_args': connect_args, 'system_information': system_information}
