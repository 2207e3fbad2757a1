"""A module for connecting to a MySQL database.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Functions:
connect -- Open a session and return a Database facade.
load_env -- Load KEY=VALUE pairs from a .env file into os.environ.
connection_options -- Resolve connection settings from arguments and env.

Exported Classes:
ConnectionSettings -- DB_* environment variables, read by pydantic-settings.
"""

__all__ = ['threadsafety', 'connect', 'load_env', 'connection_options',
           'ConnectionSettings']

import os
import logging

from typing import Any, Dict, Optional  # pylint: disable=unused-import

import pymysql
from dotenv import dotenv_values
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exception import InterfaceError, OperationalError
from .database import Database
from .datatype import LOCALZONE_NAME, get_timezone
from .session import MySQLSession, split_error

# A Database (and its session) must not be shared between threads
threadsafety = 1

DEFAULT_HOST = 'localhost'
DEFAULT_PORT = 3306
DEFAULT_CHARSET = 'utf8mb4'

_log = logging.getLogger('pysafesql.connection')


class ConnectionSettings(BaseSettings):
    """Connection settings taken from DB_HOST, DB_USER, ... DB_TIMEZONE.

    Empty variables count as unset.
    """

    model_config = SettingsConfigDict(env_prefix='DB_', env_ignore_empty=True,
                                      extra='ignore')

    host: str = DEFAULT_HOST
    user: Optional[str] = None
    password: str = ''
    name: Optional[str] = None
    charset: str = DEFAULT_CHARSET
    port: int = DEFAULT_PORT
    timezone: Optional[str] = None


def load_env(path, override=True):
    # type: (str, bool) -> Dict[str, str]
    """Load a .env file into os.environ and return what was loaded.

    The file is parsed by python-dotenv: comments, inline comments after
    unquoted values, quoting and ``export`` prefixes are understood.
    ${VAR} references are kept literally and keys given without a value
    are skipped.

    :param override: Replace variables already set in the process.  When
                     False the process value is kept and is not returned.
    :raises InterfaceError: If PATH does not exist.
    """
    if not os.path.isfile(path):
        raise InterfaceError("Environment file not found: %s" % (path))

    loaded = {}
    for name, value in dotenv_values(path, interpolate=False, encoding='utf-8').items():
        if value is None:
            continue
        if not override and name in os.environ:
            continue
        loaded[name] = value
        os.environ[name] = value
    return loaded


def connection_options(host=None,      # type: Optional[str]
                       user=None,      # type: Optional[str]
                       password=None,  # type: Optional[str]
                       database=None,  # type: Optional[str]
                       charset=None,   # type: Optional[str]
                       port=None,      # type: Optional[int]
                       timezone=None,  # type: Optional[str]
                       ):
    # type: (...) -> Dict[str, Any]
    """Fill unset settings from DB_* environment variables.

    :raises InterfaceError: If no user or database can be found, or the
                            port or timezone is invalid.
    """
    try:
        env = ConnectionSettings()
    except ValidationError as e:
        names = sorted(set('DB_' + str(err['loc'][0]).upper() for err in e.errors()))
        raise InterfaceError("Invalid value for %s" % (', '.join(names)))

    opts = {'host': host or env.host,
            'user': user if user is not None else env.user,
            'password': password if password is not None else env.password,
            'database': database if database is not None else env.name,
            'charset': charset or env.charset,
            'timezone': timezone or env.timezone or LOCALZONE_NAME}

    if not opts['user']:
        raise InterfaceError("No user provided.")
    if not opts['database']:
        raise InterfaceError("No database provided.")

    if port is None:
        port = env.port
    try:
        opts['port'] = int(port)
    except ValueError:
        raise InterfaceError("Invalid port: %s" % (port))

    try:
        get_timezone(opts['timezone'])
    except (KeyError, ValueError):
        raise InterfaceError("Invalid TimeZone %s" % (opts['timezone']))
    return opts


def connect(host=None,       # type: Optional[str]
            user=None,       # type: Optional[str]
            password=None,   # type: Optional[str]
            database=None,   # type: Optional[str]
            charset=None,    # type: Optional[str]
            port=None,       # type: Optional[int]
            timezone=None,   # type: Optional[str]
            env_file=None,   # type: Optional[str]
            **kwargs
            ):
    # type: (...) -> Database
    """Return a Database facade over a new MySQL session.

    :param host: Server host name.  Default $DB_HOST or localhost.
    :param user: User name.  Default $DB_USER.
    :param password: Password.  Default $DB_PASSWORD or empty.
    :param database: Schema to use.  Default $DB_NAME.
    :param charset: Session charset.  Default $DB_CHARSET or utf8mb4.
    :param port: Server port.  Default $DB_PORT or 3306.
    :param timezone: Zone naive DATETIME literals are expressed in.
                     Default $DB_TIMEZONE or the local zone.
    :param env_file: A .env file to load before reading the environment.
                     Its values replace variables already set.
    :param kwargs: Extra arguments passed to pymysql.connect().
    :raises InterfaceError: If the settings are incomplete.
    :raises OperationalError: If the server can't be reached.
    """
    if env_file is not None:
        load_env(env_file)

    opts = connection_options(host=host, user=user, password=password,
                              database=database, charset=charset, port=port,
                              timezone=timezone)

    _log.info("Connecting to %s@%s:%d/%s",
              opts['user'], opts['host'], opts['port'], opts['database'])
    try:
        conn = pymysql.connect(host=opts['host'], user=opts['user'],
                               password=opts['password'],
                               database=opts['database'],
                               port=opts['port'], charset=opts['charset'],
                               autocommit=True, **kwargs)
    except pymysql.MySQLError as e:
        _, message = split_error(e)
        raise OperationalError("Connection failed: %s" % (message)) from e

    return Database(MySQLSession(conn, opts['timezone']))
