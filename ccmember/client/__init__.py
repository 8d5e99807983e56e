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

"""The ``ccmember.client`` package contains the transports that place the
actual remote calls.

A transport knows nothing about tokens or retries. It takes an operation name
and a parameter dict, and either returns the response body parts as a dict or
raises :class:`TransportFault`.
"""

from ccmember.const import DEFAULT_TIMEOUT


class TransportFault(Exception):
    """Raised by transports for anything that prevents a normal response:
    SOAP faults, HTTP errors, timeouts...

    :param message: The fault string, or the text of the underlying error.
    :param code: The fault code, when there's one.
    :param detail: The fault detail as ``{tag: {sub_field: text}}``. Empty for
        errors that don't come with a SOAP fault.
    """

    def __init__(self, message, code=None, detail=None):
        super(TransportFault, self).__init__(message)

        self.message = message
        self.code = code
        if detail is None:
            detail = {}
        self.detail = detail

    def __repr__(self):
        return "TransportFault(%r, code=%r, detail=%r)" % (self.message,
                                                        self.code, self.detail)


class TransportBase(object):
    """The base class for all transports.

    :param wsdl_url: Where the service description lives.
    :param timeout: Timeout of every call, in seconds.
    :param user_agent: Value of the User-Agent header, where applicable.
    """

    def __init__(self, wsdl_url, timeout=DEFAULT_TIMEOUT, user_agent=None):
        self.wsdl_url = wsdl_url
        self.timeout = timeout
        self.user_agent = user_agent

    def call(self, operation, params):
        """Calls the remote ``operation`` with the given parameters.

        :returns: A dict with the body parts of the response. The payload of
            the member service is under the ``'return'`` key, which is absent
            when the response was empty.
        :raises TransportFault: When the call did not produce a response.
        """

        raise NotImplementedError()

    @property
    def last_request(self):
        """The last outgoing payload as a string, for diagnostics only."""
        return None

    @property
    def last_response(self):
        """The last incoming payload as a string, for diagnostics only."""
        return None

    def close(self):
        pass
