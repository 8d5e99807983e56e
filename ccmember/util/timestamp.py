#
# ccmember - Copyright (C) ccmember contributors.
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or (at your option) any later version.
#
# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301
#

"""Conversion of the service's date/time strings to unix timestamps."""

import re
import pytz

from calendar import timegm
from datetime import date, datetime

from pytz import FixedOffset

from ccmember.error import ProtocolShapeError


DATE_PATTERN = r'(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})'
TIME_PATTERN = r'(?P<hr>\d{2}):(?P<min>\d{2}):(?P<sec>\d{2})(?P<sec_frac>\.\d+)?'
OFFSET_PATTERN = r'(?P<tz_sign>[+-])(?P<tz_hr>\d{2}):?(?P<tz_min>\d{2})'
DATETIME_PATTERN = DATE_PATTERN + '[T ]' + TIME_PATTERN

_local_re = re.compile(DATETIME_PATTERN + '$')
_utc_re = re.compile(DATETIME_PATTERN + 'Z$')
_offset_re = re.compile(DATETIME_PATTERN + OFFSET_PATTERN + '$')
_date_re = re.compile(DATE_PATTERN + '$')

LOCAL_TZ = pytz.utc
"""Time zone assumed for date/time strings that don't carry one."""


def _parse_datetime_iso_match(date_match, tz=None):
    fields = date_match.groupdict()

    year = int(fields.get('year'))
    month = int(fields.get('month'))
    day = int(fields.get('day'))
    hour = int(fields.get('hr'))
    minute = int(fields.get('min'))
    second = int(fields.get('sec'))
    usecond = fields.get("sec_frac")
    if usecond is None:
        usecond = 0
    else:
        # datetime can't handle more than 6 digits, the rest is dropped
        usecond = int(usecond[1:7].ljust(6, '0'))

    return datetime(year, month, day, hour, minute, second, usecond, tz)


def parse_datetime(string, tz=LOCAL_TZ):
    """Parses an ISO-8601-ish date/time string as sent by the service. Strings
    without time zone information are taken to be in ``tz``.

    :returns: An aware :class:`datetime.datetime` instance.
    :raises ProtocolShapeError: When the string can't be parsed.
    """

    string = string.strip()

    match = _utc_re.match(string)
    if match:
        return _parse_datetime_iso_match(match, tz=pytz.utc)

    match = _offset_re.match(string)
    if match:
        offset = int(match.group('tz_hr')) * 60 + int(match.group('tz_min'))
        if match.group('tz_sign') == '-':
            offset = -offset
        return _parse_datetime_iso_match(match, tz=FixedOffset(offset))

    match = _local_re.match(string)
    if match:
        return tz.localize(_parse_datetime_iso_match(match))

    match = _date_re.match(string)
    if match:
        return tz.localize(datetime(int(match.group('year')),
                               int(match.group('month')), int(match.group('day'))))

    raise ProtocolShapeError("Invalid date/time value %r" % (string,))


def to_timestamp(value, tz=LOCAL_TZ):
    """Converts a date/time string, a :class:`datetime.datetime` or a
    :class:`datetime.date` instance to an integer unix timestamp. Naive values
    are taken to be in ``tz``. ``None`` stays ``None``."""

    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = tz.localize(value)

    elif isinstance(value, date):
        value = tz.localize(datetime(value.year, value.month, value.day))

    else:
        value = parse_datetime(str(value), tz=tz)

    return int(timegm(value.astimezone(pytz.utc).timetuple()))
