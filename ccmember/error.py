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


"""The ``ccmember.error`` module contains the exceptions the client raises.

Every one of them is a :class:`Fault`, so callers that don't care about the
details can catch that and be done with it.
"""

from ccmember.const import INVALID_RESPONSE
from ccmember.const import MEMBER_FAULT_TAG
from ccmember.const import MEMBER_NOT_FOUND_DESCRIPTION
from ccmember.const import MEMBER_NOT_FOUND_STATUS


class Fault(Exception):
    """Base class for all exceptions of this package. Loosely follows the
    SOAP 1.1 Fault definition:

    :param faultcode: A dot-delimited string whose first fragment is either
        'Client' or 'Server'. 'Client' means something was wrong with what
        we tried to send, 'Server' means the remote end didn't play along.
    :param faultstring: The human-readable explanation of the exception.
    """

    CODE = 'Server'

    def __init__(self, faultcode=None, faultstring=""):
        if faultcode is None:
            faultcode = self.CODE

        super(Fault, self).__init__(faultstring)

        self.faultcode = faultcode
        self.faultstring = faultstring or self.__class__.__name__

    @property
    def message(self):
        return self.faultstring

    def __str__(self):
        return self.faultstring

    def __repr__(self):
        return "%s(%s: %r)" % (self.__class__.__name__,
                                               self.faultcode, self.faultstring)


class ServiceFault(Fault):
    """Raised when the remote service reports an error.

    :param faultstring: The message the service sent.
    :param operation: Name of the remote operation that failed.
    :param is_token_expired: True when the call failed because the session
        token was rejected, even after re-authenticating.
    :param fault_type: The fault detail tag the message was taken from, if
        any. E.g. ``'MemberServiceException'``.
    :param fields: The ``fields`` sub-field of the fault detail, if any.
    :param status: The ``status`` sub-field of the fault detail, if any.
    """

    CODE = 'Server.ServiceFault'

    def __init__(self, faultstring, operation=None, is_token_expired=False,
                                   fault_type=None, fields=None, status=None):
        super(ServiceFault, self).__init__(self.CODE, faultstring)

        self.operation = operation
        self.is_token_expired = is_token_expired
        self.fault_type = fault_type
        self.fields = fields
        self.status = status

    @property
    def is_member_not_found(self):
        if self.status == MEMBER_NOT_FOUND_STATUS:
            return True
        if self.fault_type != MEMBER_FAULT_TAG:
            return False
        return self.faultstring.strip().lower() == \
                                           MEMBER_NOT_FOUND_DESCRIPTION.lower()

    def __repr__(self):
        return "%s(%s: %r operation=%r)" % (self.__class__.__name__,
                              self.faultcode, self.faultstring, self.operation)


class AuthenticationError(ServiceFault):
    """Raised when the service refuses to open a connection with the given
    credentials."""

    CODE = 'Client.AuthenticationError'


class TokenExpiredError(Fault):
    """Raised when the service rejects the session token. It's handled
    inside :meth:`ccmember.session.SessionManager.invoke` and never reaches
    the caller."""

    CODE = 'Client.TokenExpired'

    def __init__(self, faultstring, operation=None):
        super(TokenExpiredError, self).__init__(self.CODE, faultstring)

        self.operation = operation


class ValidationError(Fault):
    """Raised when a request can't be built from the given arguments. No
    remote call is made in that case."""

    CODE = 'Client.ValidationError'

    def __init__(self, obj,
                      custom_msg='The value %r could not be validated.'):
        try:
            msg = custom_msg % (obj,)
        except TypeError:
            msg = custom_msg

        super(ValidationError, self).__init__(self.CODE, msg)


class ProtocolShapeError(Fault):
    """Raised when a response misses a field or holds a value the remote
    api contract doesn't allow."""

    CODE = 'Server.ProtocolShapeError'

    def __init__(self, faultstring=INVALID_RESPONSE, operation=None):
        super(ProtocolShapeError, self).__init__(self.CODE, faultstring)

        self.operation = operation
