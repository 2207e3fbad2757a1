"""A module for converting Python values into SQL literal text.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Functions:
get_timezone -- Return a tzinfo for a zone name.
is_numeric -- Check whether a value is acceptable to the ?i placeholder.
to_literal_text -- Convert a value to the text that is quoted by ?s.
format_integral -- Print a numeric value without fractional digits.
TimestampToText -- Converts a Timestamp object to a DATETIME literal.
TimeDeltaToText -- Converts a TimeDelta object to a TIME literal.

Variables:
LOCALZONE_NAME -- Name of the local timezone, as reported by tzlocal.
"""

__all__ = ['LOCALZONE', 'LOCALZONE_NAME', 'get_timezone', 'is_numeric',
           'to_literal_text', 'format_integral', 'TimestampToText',
           'TimeDeltaToText']

import re
import math
import decimal
from datetime import datetime as Timestamp, date as Date, time as Time
from datetime import timedelta as TimeDelta
from datetime import tzinfo  # pylint: disable=unused-import
from zoneinfo import ZoneInfo

from typing import Any, Optional, Union  # pylint: disable=unused-import

import tzlocal

LOCALZONE = tzlocal.get_localzone()
LOCALZONE_NAME = tzlocal.get_localzone_name()

# Decimal numeric literal with optional sign, fraction and exponent.
# Hex, "inf" and "nan" are not numeric for the ?i placeholder.
_NUMERIC = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')


def get_timezone(name=None):
    # type: (Optional[str]) -> tzinfo
    """Return a tzinfo for NAME, or the local zone if NAME is not set."""
    if not name or name == LOCALZONE_NAME:
        return LOCALZONE
    return ZoneInfo(name)


def is_numeric(value):
    # type: (Any) -> bool
    """Return True if VALUE may be rendered by the integer placeholder.

    Booleans are rejected even though bool subclasses int.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, decimal.Decimal):
        return value.is_finite()
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode('ascii')
        except UnicodeDecodeError:
            return False
    if isinstance(value, str):
        return _NUMERIC.match(value) is not None
    return False


def format_integral(value):
    # type: (Union[float, decimal.Decimal]) -> str
    """Print VALUE with no fractional digits and no thousands separator.

    Halves are rounded away from zero.
    """
    dec = value if isinstance(value, decimal.Decimal) else decimal.Decimal(repr(value))
    # Large magnitudes need more digits than the default context allows
    ctx = decimal.Context(prec=max(28, dec.adjusted() + 2))
    dec = dec.quantize(decimal.Decimal(1), rounding=decimal.ROUND_HALF_UP, context=ctx)
    text = format(dec, 'f')
    return '0' if text == '-0' else text


def TimestampToText(value, zoneinfo=None):
    # type: (Timestamp, Optional[tzinfo]) -> str
    """Convert a Timestamp object to a DATETIME literal body.

    Timezone-aware values are moved into the session's zone first; naive
    values are assumed to already be expressed in it.
    """
    if value.tzinfo is not None:
        value = value.astimezone(zoneinfo or LOCALZONE).replace(tzinfo=None)
    if value.microsecond:
        return value.strftime('%Y-%m-%d %H:%M:%S.%f')
    return value.strftime('%Y-%m-%d %H:%M:%S')


def TimeDeltaToText(value):
    # type: (TimeDelta) -> str
    """Convert a TimeDelta object to a TIME literal body ([-]H:MM:SS[.ffffff])."""
    sign = ''
    if value < TimeDelta(0):
        sign = '-'
        value = -value
    seconds = value.days * 86400 + value.seconds
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    text = '%s%d:%02d:%02d' % (sign, hours, minutes, seconds)
    if value.microseconds:
        text += '.%06d' % value.microseconds
    return text


def to_literal_text(value, timezone_name=None):
    # type: (Any, Optional[str]) -> Union[str, bytes]
    """Convert VALUE into the text that a string literal should contain.

    Aware datetimes are moved into the zone TIMEZONE_NAME (default local).

    Binary values are returned as bytes so they can be escaped without a
    round trip through a text encoding.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, bool):
        return '1' if value else '0'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, decimal.Decimal):
        return format(value, 'f')
    # datetime is a subclass of date: check it first
    if isinstance(value, Timestamp):
        if value.tzinfo is not None:
            return TimestampToText(value, get_timezone(timezone_name))
        return TimestampToText(value)
    if isinstance(value, Date):
        return value.isoformat()
    if isinstance(value, Time):
        return value.replace(tzinfo=None).isoformat()
    if isinstance(value, TimeDelta):
        return TimeDeltaToText(value)
    return str(value)
