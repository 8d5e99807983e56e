#!/usr/bin/env python
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

import unittest

from datetime import date
from datetime import datetime

import pytz

from lxml import etree

from ccmember.error import ProtocolShapeError
from ccmember.util.etreeconv import etree_to_dict
from ccmember.util.etreeconv import fault_detail_to_dict
from ccmember.util.shape import SHAPE_LIST
from ccmember.util.shape import SHAPE_PAGED
from ccmember.util.shape import SHAPE_SINGLE
from ccmember.util.shape import entries_to_record
from ccmember.util.shape import get_field
from ccmember.util.shape import normalize
from ccmember.util.text import canonical_params
from ccmember.util.text import canonical_string
from ccmember.util.timestamp import parse_datetime
from ccmember.util.timestamp import to_timestamp


class TestTimestamp(unittest.TestCase):
    def test_naive_is_utc(self):
        assert to_timestamp("2021-01-01T00:00:00") == 1609459200
        assert to_timestamp("2021-01-01 00:00:00") == 1609459200

    def test_none(self):
        assert to_timestamp(None) is None

    def test_utc(self):
        assert to_timestamp("2021-01-01T00:00:00Z") == 1609459200
        assert to_timestamp("2021-01-01T00:00:00.250Z") == 1609459200

    def test_offset(self):
        assert to_timestamp("2021-01-01T02:00:00+02:00") == 1609459200
        assert to_timestamp("2020-12-31T19:00:00-05:00") == 1609459200
        assert to_timestamp("2021-01-01T01:00:00+0100") == 1609459200

    def test_date_only(self):
        assert to_timestamp("2021-01-01") == 1609459200

    def test_native_values(self):
        assert to_timestamp(datetime(2021, 1, 1)) == 1609459200
        assert to_timestamp(datetime(2021, 1, 1, tzinfo=pytz.utc)) == \
                                                                     1609459200
        assert to_timestamp(date(2021, 1, 1)) == 1609459200

    def test_other_time_zone(self):
        tz = pytz.timezone('Europe/Brussels')
        assert to_timestamp("2021-01-01T01:00:00", tz=tz) == 1609459200

    def test_parse(self):
        val = parse_datetime("2011-02-20T12:34:56.5")
        assert val == datetime(2011, 2, 20, 12, 34, 56, 500000,
                                                               tzinfo=pytz.utc)

    def test_parse_long_fraction(self):
        val = parse_datetime("2011-02-20T12:34:56.9999996")
        assert val == datetime(2011, 2, 20, 12, 34, 56, 999999,
                                                               tzinfo=pytz.utc)

        val = parse_datetime("2011-02-20T12:34:56.000001234Z")
        assert val.microsecond == 1

    def test_garbage(self):
        self.assertRaises(ProtocolShapeError, to_timestamp, "yesterday")


class TestText(unittest.TestCase):
    def test_string(self):
        assert canonical_string(u'abc') == u'abc'
        assert canonical_string(b'caf\xe9') == u'caf\xe9'
        assert canonical_string(b'caf\xc3\xa9', 'utf8') == u'caf\xe9'

    def test_normalization(self):
        # e + combining acute accent
        assert canonical_string(u'cafe\u0301') == u'caf\xe9'

    def test_nested(self):
        params = {
            'a': b'\xe9',
            'b': 5,
            'c': None,
            'd': [b'x', 1.5, (b'y', True)],
            'e': {'f': {'g': b'z'}},
        }

        ret = canonical_params(params)

        assert ret == {
            'a': u'\xe9',
            'b': 5,
            'c': None,
            'd': [u'x', 1.5, (u'y', True)],
            'e': {'f': {'g': u'z'}},
        }

        assert params['a'] == b'\xe9'
        assert params['e']['f']['g'] == b'z'
        assert ret['e'] is not params['e']

    def test_non_strings_untouched(self):
        obj = object()
        assert canonical_params(obj) is obj
        assert canonical_params(12) == 12


class TestShape(unittest.TestCase):
    def test_get_field(self):
        class C(object):
            a = 1

        assert get_field({'a': 1}, 'a') == 1
        assert get_field(C(), 'a') == 1
        assert get_field(C(), 'b', 2) == 2
        assert get_field(None, 'a') is None

    def test_entries(self):
        ret = entries_to_record([
            {'key': 'EMAIL', 'value': 'a@example.com'},
            {'key': 'DATEJOIN', 'value': '2021-01-01T00:00:00'},
            {'key': 'DATEUNJOIN', 'value': '2021-01-01T00:00:00'},
            {'key': 'FIRSTNAME'},
        ])

        assert ret == {
            'EMAIL': 'a@example.com',
            'DATEJOIN': 1609459200,
            'DATEUNJOIN': '2021-01-01T00:00:00',
            'FIRSTNAME': None,
        }

    def test_single_entry(self):
        assert entries_to_record({'key': 'A', 'value': 'b'}) == {'A': 'b'}

    def test_single(self):
        raw = {'attributes': {'entry': [{'key': 'A', 'value': 'b'}]}}

        assert normalize(SHAPE_SINGLE, raw) == {'A': 'b'}
        assert normalize(SHAPE_SINGLE, [raw, {}]) == {'A': 'b'}

    def test_single_invalid(self):
        self.assertRaises(ProtocolShapeError, normalize, SHAPE_SINGLE, None)
        self.assertRaises(ProtocolShapeError, normalize, SHAPE_SINGLE, [])
        self.assertRaises(ProtocolShapeError, normalize, SHAPE_SINGLE,
                                                         {'attributes': {}})

    def test_list(self):
        raw = {'attributes': {'entry': [{'key': 'A', 'value': 'b'}]}}

        assert normalize(SHAPE_LIST, None) == []
        assert normalize(SHAPE_LIST, []) == []
        assert normalize(SHAPE_LIST, raw) == [{'A': 'b'}]
        assert normalize(SHAPE_LIST, [raw, {}, raw]) == [{'A': 'b'}, {'A': 'b'}]

    def test_paged(self):
        raw = {'attributes': {'entry': [{'key': 'A', 'value': 'b'}]}}

        assert normalize(SHAPE_PAGED, None) == []
        assert normalize(SHAPE_PAGED, {'list': []}) == []
        assert normalize(SHAPE_PAGED, {'list': [raw]}) == [{'A': 'b'}]

        self.assertRaises(ProtocolShapeError, normalize, SHAPE_PAGED, {})

    def test_error_carries_operation(self):
        try:
            normalize(SHAPE_SINGLE, None, operation='getMemberById')
        except ProtocolShapeError as e:
            assert e.operation == 'getMemberById'
            assert e.faultstring == 'Invalid response'
        else:
            raise Exception("must fail")


class TestEtreeConv(unittest.TestCase):
    def test_fault_detail(self):
        detail = etree.fromstring(
            b'<detail xmlns:ns1="http://api.service.apimember.emailvision.com/">'
              b'<ns1:CcmdServiceException>'
                b'<description> Invalid field </description>'
                b'<fields>FIRSTNAME</fields>'
                b'<status/>'
              b'</ns1:CcmdServiceException>'
              b'<!-- a comment -->'
            b'</detail>'
        )

        assert fault_detail_to_dict(detail) == {
            'CcmdServiceException': {
                'description': 'Invalid field',
                'fields': 'FIRSTNAME',
                'status': None,
            },
        }

    def test_no_detail(self):
        assert fault_detail_to_dict(None) == {}

    def test_nested(self):
        elt = etree.fromstring(b'<a><b><c>1</c></b><d>2</d></a>')
        assert etree_to_dict(elt) == {'b': {'c': '1'}, 'd': '2'}


if __name__ == '__main__':
    unittest.main()
