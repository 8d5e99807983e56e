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

"""Text handling for outgoing parameters.

The service wants every string in one encoding. We make sure every string in a
parameter bag is a normalized unicode string and let the transport take care of
putting it on the wire as utf-8.
"""

import unicodedata

from ccmember.const import DEFAULT_STRING_ENCODING


def canonical_string(value, encoding=DEFAULT_STRING_ENCODING):
    """Returns ``value`` as a NFC-normalized ``str``. ``bytes`` are decoded
    with ``encoding`` first."""

    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode(encoding)

    return unicodedata.normalize('NFC', value)


def canonical_params(params, encoding=DEFAULT_STRING_ENCODING):
    """Returns a copy of ``params`` where every string, however deeply nested
    in dicts, lists or tuples, went through :func:`canonical_string`. Other
    values are left alone. The argument is not modified."""

    if isinstance(params, (str, bytes, bytearray)):
        return canonical_string(params, encoding)

    if isinstance(params, dict):
        return dict((k, canonical_params(v, encoding))
                                                      for k, v in params.items())

    if isinstance(params, list):
        return [canonical_params(v, encoding) for v in params]

    if isinstance(params, tuple):
        return tuple(canonical_params(v, encoding) for v in params)

    return params
