"""
(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import datetime
import decimal

import pytest

from pysafesql import datatype
from pysafesql.datatype import LOCALZONE


class TestIsNumeric(object):

    @pytest.mark.parametrize('value', [0, -1, 10 ** 30, 1.5, decimal.Decimal('2.50'),
                                       '42', '-4.2', '+.5', '3.', '1E-3', b'7'])
    def test_numeric(self, value):
        assert datatype.is_numeric(value)

    @pytest.mark.parametrize('value', [True, None, '', ' ', '1,000', '0x10', 'inf',
                                       '1 2', float('-inf'), b'\xff', object()])
    def test_not_numeric(self, value):
        assert not datatype.is_numeric(value)


class TestFormatIntegral(object):

    def test_rounding(self):
        assert datatype.format_integral(0.5) == '1'
        assert datatype.format_integral(-0.5) == '-1'
        assert datatype.format_integral(1.49) == '1'
        assert datatype.format_integral(decimal.Decimal('-0.2')) == '0'

    def test_no_exponent(self):
        assert datatype.format_integral(1.5e16) == '15000000000000000'
        assert datatype.format_integral(decimal.Decimal('1E+3')) == '1000'


class TestLiteralText(object):

    def test_scalars(self):
        assert datatype.to_literal_text('x') == 'x'
        assert datatype.to_literal_text(b'\x00\x01') == b'\x00\x01'
        assert datatype.to_literal_text(bytearray(b'ab')) == b'ab'
        assert datatype.to_literal_text(True) == '1'
        assert datatype.to_literal_text(7) == '7'
        assert datatype.to_literal_text(0.1) == '0.1'
        assert datatype.to_literal_text(decimal.Decimal('1E+2')) == '100'

    def test_datetime(self):
        value = datetime.datetime(2024, 5, 6, 7, 8, 9, 120000)
        assert datatype.to_literal_text(value) == '2024-05-06 07:08:09.120000'

    def test_aware_datetime_is_localized(self):
        value = datetime.datetime(2024, 5, 6, 12, 0, 0, tzinfo=datetime.timezone.utc)
        expected = value.astimezone(LOCALZONE).strftime('%Y-%m-%d %H:%M:%S')
        assert datatype.to_literal_text(value) == expected

    def test_aware_datetime_in_session_zone(self):
        value = datetime.datetime(2024, 1, 15, 12, 0, 0, tzinfo=datetime.timezone.utc)
        assert datatype.to_literal_text(value, 'America/New_York') == '2024-01-15 07:00:00'
        assert datatype.to_literal_text(value, 'UTC') == '2024-01-15 12:00:00'

    def test_time_and_interval(self):
        assert datatype.to_literal_text(datetime.time(1, 2, 3, 4)) == '01:02:03.000004'
        assert datatype.to_literal_text(datetime.timedelta(days=2, seconds=5)) == '48:00:05'
        assert datatype.to_literal_text(datetime.timedelta(microseconds=-1)) \
            == '-0:00:00.000001'

    def test_fallback_is_str(self):
        class Money(object):
            def __str__(self):
                return '9.99 EUR'
        assert datatype.to_literal_text(Money()) == '9.99 EUR'


class TestTimezone(object):

    def test_local(self):
        assert datatype.get_timezone() is LOCALZONE
        assert datatype.get_timezone(datatype.LOCALZONE_NAME) is LOCALZONE

    def test_named(self):
        tz = datatype.get_timezone('Europe/Paris')
        assert datetime.datetime(2024, 7, 1, tzinfo=tz).utcoffset() == datetime.timedelta(hours=2)

    def test_unknown(self):
        with pytest.raises(KeyError):
            datatype.get_timezone('Not/AZone')
