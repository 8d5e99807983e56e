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

"""This module contains the utility methods that convert an ElementTree
hierarchy to python dicts.
"""

from lxml import etree


def localname(tag):
    """Strips the namespace part off a tag name."""

    return etree.QName(tag).localname


def etree_to_dict(element):
    """Converts an element to a dict of its children's local names. Leaf
    children map to their text, non-leaf children are converted recursively.
    Comments and processing instructions are ignored. When a tag repeats,
    the last one wins.
    """

    retval = {}

    for child in element:
        if not isinstance(child.tag, str):
            continue

        if len(child) == 0:
            text = child.text
            if text is not None:
                text = text.strip()
            retval[localname(child.tag)] = text

        else:
            retval[localname(child.tag)] = etree_to_dict(child)

    return retval


def fault_detail_to_dict(detail):
    """Converts the ``<detail>`` element of a SOAP fault to a dict that maps
    the fault type tags to dicts of their sub-fields. e.g.: ::

        <detail>
          <ns1:MemberServiceException>
            <description>Not allowed</description>
          </ns1:MemberServiceException>
        </detail>

    becomes: ::

        {'MemberServiceException': {'description': 'Not allowed'}}

    ``None`` becomes an empty dict.
    """

    if detail is None:
        return {}

    retval = {}
    for child in detail:
        if not isinstance(child.tag, str):
            continue

        retval[localname(child.tag)] = etree_to_dict(child)

    return retval
