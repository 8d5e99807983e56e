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

"""The ``ccmember.client.null`` module contains the NullTransport class.

The name comes from the "null modem connection". Nothing leaves the process:
responses are scripted beforehand, which makes it useful for testing code that
talks to the member service.
"""

import logging
logger = logging.getLogger(__name__)

from collections import defaultdict
from collections import deque
from copy import deepcopy

from ccmember.client import TransportBase
from ccmember.client import TransportFault
from ccmember.const import DEFAULT_TIMEOUT


class NullTransport(TransportBase):
    """A transport that answers from a script.

    Register what an operation should answer with :meth:`respond`. An answer
    can be:

        * a payload, which is returned as the ``'return'`` part,
        * the :const:`EMPTY` marker, for a response with no ``'return'``,
        * an exception instance, which is raised,
        * a callable, which is called with the parameters and whose return
          value is treated the same way.

    Answers registered with ``once=True`` are used up in order, after that the
    permanent answer, if any, is used. Calls to operations without any answer
    raise a :class:`TransportFault`.

    Every call is recorded in :attr:`calls` as an ``(operation, params)`` pair.
    """

    EMPTY = object()

    def __init__(self, wsdl_url=None, timeout=DEFAULT_TIMEOUT, user_agent=None):
        super(NullTransport, self).__init__(wsdl_url, timeout=timeout,
                                                          user_agent=user_agent)

        self.calls = []
        self.closed = False

        self._queued = defaultdict(deque)
        self._permanent = {}
        self._last_request = None
        self._last_response = None

    def respond(self, operation, answer, once=False):
        if once:
            self._queued[operation].append(answer)
        else:
            self._permanent[operation] = answer

        return self

    def __call__(self, wsdl_url, timeout=DEFAULT_TIMEOUT, user_agent=None):
        """Lets the instance stand in for a transport factory, so that the
        same script survives reconnections."""

        self.wsdl_url = wsdl_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.closed = False

        return self

    def operations(self):
        """Returns the names of the called operations, in order."""

        return [op for op, _ in self.calls]

    def call(self, operation, params):
        params = deepcopy(params)
        self.calls.append((operation, params))
        self._last_request = (operation, params)

        queue = self._queued.get(operation)
        if queue:
            answer = queue.popleft()
        elif operation in self._permanent:
            answer = self._permanent[operation]
        else:
            raise TransportFault("No answer for operation %r" % (operation,))

        if callable(answer) and not isinstance(answer, BaseException):
            answer = answer(params)

        self._last_response = answer
        logger.debug("%s -> %r", operation, answer)

        if isinstance(answer, BaseException):
            raise answer

        if answer is self.EMPTY:
            return {}

        return {'return': answer}

    @property
    def last_request(self):
        return repr(self._last_request)

    @property
    def last_response(self):
        return repr(self._last_response)

    def close(self):
        self.closed = True
