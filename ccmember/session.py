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

"""The ``ccmember.session`` module contains the :class:`SessionManager`, which
makes sure every remote call is placed over an authenticated connection.

A session goes through three states: ::

    disconnected --> authenticating --> authenticated
         ^                 |                  |
         +-----------------+------------------+
          (auth failure)       (close, expired token)

The first call opens the connection. When the service rejects the token in the
middle of a session, the manager authenticates again and places the same call
once more, with the same parameters. If the fresh token is rejected as well,
the caller gets a :class:`ccmember.error.ServiceFault`.
"""

import logging
logger = logging.getLogger(__name__)

import threading

from ccmember import __version__

from ccmember._base import Credentials
from ccmember._base import Session

from ccmember.client import TransportFault
from ccmember.client.zeep import ZeepTransport

from ccmember.const import MAX_ATTEMPTS
from ccmember.const import TOKEN_KEY
from ccmember.const import DEFAULT_TIMEOUT
from ccmember.const import DEFAULT_STRING_ENCODING
from ccmember.const import USER_AGENT_PREFIX
from ccmember.const import TOKEN_EXPIRED_MESSAGE
from ccmember.const import CCMD_FAULT_TAG
from ccmember.const import FAULT_DETAIL_TAGS
from ccmember.const import FAULT_DETAIL_DESCRIPTION
from ccmember.const import FAULT_DETAIL_FIELDS
from ccmember.const import FAULT_DETAIL_STATUS
from ccmember.const import DEFAULT_FAULT_MESSAGE
from ccmember.const import CONNECTION_CLOSED
from ccmember.const import OP_OPEN_CONNECTION
from ccmember.const import OP_CLOSE_CONNECTION

from ccmember.error import Fault
from ccmember.error import ServiceFault
from ccmember.error import TokenExpiredError
from ccmember.error import AuthenticationError
from ccmember.error import ProtocolShapeError

from ccmember.util.text import canonical_params


def _fault_detail(fault):
    for tag in FAULT_DETAIL_TAGS:
        detail = fault.detail.get(tag)
        if detail and detail.get(FAULT_DETAIL_DESCRIPTION) is not None:
            return tag, detail

    return None, None


def describe_fault(fault):
    """Finds the most specific description of a :class:`TransportFault`.

    Only ``CcmdServiceException`` descriptions get the ``fields`` and
    ``status`` sub-fields appended.

    :returns: A ``(message, fault_type, fields, status)`` tuple. ``fault_type``
        is the detail tag the message came from, or ``None``.
    """

    tag, detail = _fault_detail(fault)
    if detail is None:
        return fault.message or DEFAULT_FAULT_MESSAGE, None, None, None

    message = str(detail[FAULT_DETAIL_DESCRIPTION])
    fields = detail.get(FAULT_DETAIL_FIELDS)
    status = detail.get(FAULT_DETAIL_STATUS)

    if tag == CCMD_FAULT_TAG:
        if fields is not None:
            message += ' fields: %s' % (fields,)
        if status is not None:
            message += ' status: %s' % (status,)

    return message, tag, fields, status


def is_token_expired(fault):
    """Tells whether the service rejected the session token. Looks at the bare
    description, without the sub-fields :func:`describe_fault` appends."""

    tag, detail = _fault_detail(fault)
    if detail is None:
        description = fault.message or ''
    else:
        description = str(detail[FAULT_DETAIL_DESCRIPTION])

    return description.strip() == TOKEN_EXPIRED_MESSAGE


class SessionManager(object):
    """Owns the connection to the member service and places calls over it.

    :param credentials: A :class:`ccmember._base.Credentials` instance.
    :param transport_factory: A callable that takes the wsdl url with the
        ``timeout`` and ``user_agent`` keyword arguments and returns a
        :class:`ccmember.client.TransportBase` instance. It's called every
        time a connection is opened.
    :param timeout: Timeout of every remote call, in seconds.
    :param user_agent: Your application's user agent. It's appended to ours.
    :param string_encoding: Encoding of ``bytes`` parameters.

    Use it as a context manager to make sure the connection gets closed: ::

        with SessionManager(Credentials('login', 'pwd', 'key')) as session:
            session.invoke('getMemberByEmail', {'email': 'x@example.com'})
    """

    max_attempts = MAX_ATTEMPTS

    def __init__(self, credentials, transport_factory=ZeepTransport,
                            timeout=DEFAULT_TIMEOUT, user_agent=None,
                            string_encoding=DEFAULT_STRING_ENCODING):
        if not isinstance(credentials, Credentials):
            credentials = Credentials(*credentials)

        self.credentials = credentials
        self.transport_factory = transport_factory
        self.string_encoding = string_encoding
        self.transport = None

        self._session = Session()
        self._lock = threading.RLock()
        self._timeout = DEFAULT_TIMEOUT
        self._user_agent = ''

        self.set_timeout(timeout)
        if user_agent is not None:
            self.set_user_agent(user_agent)

    @property
    def state(self):
        return self._session.state

    def get_timeout(self):
        return self._timeout

    def set_timeout(self, seconds):
        """Sets the timeout of every call, in seconds. Takes effect when the
        next connection is opened."""

        self._timeout = int(seconds)

    def get_user_agent(self):
        """Returns the user agent that's sent with every request. It looks like:
        ``"Python Campaign Commander Member/<version> <your-user-agent>"``."""

        return "%s/%s %s" % (USER_AGENT_PREFIX, __version__, self._user_agent)

    def set_user_agent(self, user_agent):
        """Sets your application's user agent. It should look like
        ``<app-name>/<app-version>``. Takes effect when the next connection is
        opened."""

        self._user_agent = str(user_agent)

    def invoke(self, operation, params=None):
        """Calls the remote ``operation`` with the given parameters, opening
        the connection first if needed.

        :returns: The ``return`` part of the response as it came from the
            transport, or ``None`` when the response had none.
        :raises ServiceFault: When the service reported an error.
        :raises AuthenticationError: When the connection could not be opened.
        :raises ProtocolShapeError: When the connection was opened but no token
            came back.
        """

        if params is None:
            params = {}

        with self._lock:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    return self._invoke_once(operation, params)

                except TokenExpiredError as e:
                    self._session.reset()

                    if attempt >= self.max_attempts:
                        logger.warning("%s: token rejected again after "
                                "re-authenticating, giving up", operation)
                        raise ServiceFault(e.faultstring, operation=operation,
                                                          is_token_expired=True)

                    logger.info("%s: token expired, re-authenticating "
                                      "(attempt %d of %d)", operation,
                                                attempt + 1, self.max_attempts)

    def _invoke_once(self, operation, params):
        if not self._session.is_authenticated:
            self._authenticate()

        params = canonical_params(dict(params), self.string_encoding)
        params[TOKEN_KEY] = self._session.token

        logger.debug("calling %s", operation)
        response = self._dispatch(operation, params)

        return response.get('return')

    def _dispatch(self, operation, params):
        try:
            return self.transport.call(operation, params)

        except TransportFault as e:
            message, fault_type, fields, status = describe_fault(e)

            if is_token_expired(e):
                raise TokenExpiredError(message, operation=operation)

            self._log_exchange(operation)
            raise ServiceFault(message, operation=operation,
                    fault_type=fault_type, fields=fields, status=status)

    def _authenticate(self):
        self._session.begin()

        if self.transport is not None:
            self.transport.close()

        self.transport = self.transport_factory(self.credentials.wsdl_url,
                timeout=self.get_timeout(), user_agent=self.get_user_agent())

        params = {
            'login': self.credentials.login,
            'pwd': self.credentials.password,
            'key': self.credentials.key,
        }

        logger.debug("opening connection to %s as %r",
                                 self.credentials.server, self.credentials.login)

        try:
            response = self.transport.call(OP_OPEN_CONNECTION, params)

        except TransportFault as e:
            message, fault_type, fields, status = describe_fault(e)

            if is_token_expired(e):
                raise TokenExpiredError(message, operation=OP_OPEN_CONNECTION)

            self._session.reset()
            self._log_exchange(OP_OPEN_CONNECTION)
            raise AuthenticationError(message, operation=OP_OPEN_CONNECTION,
                    fault_type=fault_type, fields=fields, status=status)

        token = response.get('return')
        if token is None:
            self._session.reset()
            raise ProtocolShapeError(operation=OP_OPEN_CONNECTION)

        self._session.establish(str(token))

    def _log_exchange(self, operation):
        if not logger.isEnabledFor(logging.DEBUG) or self.transport is None:
            return

        logger.debug("%s: last request:\n%s", operation,
                                                    self.transport.last_request)
        logger.debug("%s: last response:\n%s", operation,
                                                   self.transport.last_response)

    def close(self):
        """Closes the connection, if there's one. Errors are logged and
        swallowed. The session is reset and the transport released no matter
        what, also after a failed login.

        :returns: True when the service confirmed the connection was closed,
            False otherwise.
        """

        with self._lock:
            retval = False
            try:
                if self._session.is_authenticated:
                    params = {TOKEN_KEY: self._session.token}
                    response = self.transport.call(OP_CLOSE_CONNECTION, params)
                    retval = response.get('return') == CONNECTION_CLOSED

            except (TransportFault, Fault) as e:
                logger.warning("could not close the connection: %r", e)

            finally:
                self._session.reset()
                if self.transport is not None:
                    self.transport.close()
                    self.transport = None

            return retval

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return "%s(%r, state=%r)" % (self.__class__.__name__,
                                               self.credentials, self.state)
