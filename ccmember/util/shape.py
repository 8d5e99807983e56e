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

"""The same member record comes back in different wrappings depending on the
remote operation. Every wrapping has a tag here, and every tag has exactly one
normalizer. The normalizers turn raw payloads into records, that is, plain
dicts of field names to values.

========================  ====================================================
Tag                       Raw payload
========================  ====================================================
:const:`SHAPE_SINGLE`     ``{attributes: {entry: [{key, value}, ...]}}``, or a
                          list whose first element is that.
:const:`SHAPE_LIST`       A list of the above. ``None`` means no results.
:const:`SHAPE_PAGED`      ``{list: [...]}``. ``None`` means no results.
========================  ====================================================
"""

import logging
logger = logging.getLogger(__name__)

from ccmember.const import JOIN_DATE_FIELD
from ccmember.error import ProtocolShapeError
from ccmember.util.timestamp import to_timestamp


SHAPE_SINGLE = 'single'
SHAPE_LIST = 'list'
SHAPE_PAGED = 'paged'


def get_field(obj, key, default=None):
    """Gets ``key`` from a dict or an attribute of an object, whichever
    applies."""

    if obj is None:
        return default

    if isinstance(obj, dict):
        return obj.get(key, default)

    return getattr(obj, key, default)


def _entries(raw):
    return get_field(get_field(raw, 'attributes'), 'entry')


def entries_to_record(entries):
    """Converts a list of ``{key, value}`` pairs to a dict. A lone pair is
    accepted as well. Missing values become ``None`` and the join date is
    converted to a unix timestamp."""

    if isinstance(entries, dict):
        entries = [entries]

    retval = {}
    for entry in entries:
        key = str(get_field(entry, 'key'))
        value = get_field(entry, 'value')

        if key == JOIN_DATE_FIELD and value is not None:
            value = to_timestamp(value)

        retval[key] = value

    return retval


def normalize_single(raw, operation=None):
    # some lookups answer with a list, the first one is the member
    if isinstance(raw, (list, tuple)):
        if len(raw) == 0:
            raise ProtocolShapeError(operation=operation)
        raw = raw[0]

    entries = _entries(raw)
    if entries is None:
        raise ProtocolShapeError(operation=operation)

    return entries_to_record(entries)


def normalize_list(raw, operation=None):
    if raw is None:
        return []

    if isinstance(raw, dict) or not isinstance(raw, (list, tuple)):
        raw = [raw]

    retval = []
    for row in raw:
        entries = _entries(row)
        if entries is None:
            logger.debug("%s: skipping row without attributes: %r",
                                                                operation, row)
            continue

        retval.append(entries_to_record(entries))

    return retval


def normalize_paged(raw, operation=None):
    if raw is None:
        return []

    rows = get_field(raw, 'list')
    if rows is None:
        raise ProtocolShapeError(operation=operation)

    return normalize_list(rows, operation=operation)


NORMALIZERS = {
    SHAPE_SINGLE: normalize_single,
    SHAPE_LIST: normalize_list,
    SHAPE_PAGED: normalize_paged,
}


def normalize(shape, raw, operation=None):
    """Runs the normalizer for ``shape`` on ``raw``."""

    return NORMALIZERS[shape](raw, operation=operation)
