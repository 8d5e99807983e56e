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

import logging
logger = logging.getLogger('ccmember')

from collections import namedtuple

from ccmember.const import DEFAULT_SERVER
from ccmember.const import WSDL_PATH


SESSION_DISCONNECTED = 'disconnected'
SESSION_AUTHENTICATING = 'authenticating'
SESSION_AUTHENTICATED = 'authenticated'


_CredentialsBase = namedtuple("Credentials", ["login", "password", "key",
                                                                    "server"])


class Credentials(_CredentialsBase):
    """What's needed to open a connection to the member service.

    :param login: Login provided for api access.
    :param password: The password.
    :param key: Manager key copied from the web application.
    :param server: The server to use, defaults to
        :const:`ccmember.const.DEFAULT_SERVER`.
    """

    __slots__ = ()

    def __new__(cls, login, password, key, server=None):
        if server is None:
            server = DEFAULT_SERVER

        return super(Credentials, cls).__new__(cls, str(login), str(password),
                                                         str(key), str(server))

    @property
    def wsdl_url(self):
        return "%s/%s" % (self.server.rstrip('/'), WSDL_PATH)

    def __repr__(self):
        # password and key are left out
        return "Credentials(login=%r, server=%r)" % (self.login, self.server)


class Session(object):
    """The token and the connection state of one :class:`SessionManager`.

    It never leaves the manager that owns it.
    """

    def __init__(self):
        self.token = None
        self.state = SESSION_DISCONNECTED

    @property
    def is_authenticated(self):
        return self.state == SESSION_AUTHENTICATED and self.token is not None

    def begin(self):
        logger.debug("session: %s -> %s", self.state, SESSION_AUTHENTICATING)
        self.token = None
        self.state = SESSION_AUTHENTICATING

    def establish(self, token):
        assert self.state == SESSION_AUTHENTICATING, \
                                  "session must be authenticating, not %r" % \
                                                                     self.state

        logger.debug("session: %s -> %s", self.state, SESSION_AUTHENTICATED)
        self.token = token
        self.state = SESSION_AUTHENTICATED

    def reset(self):
        if self.state != SESSION_DISCONNECTED:
            logger.debug("session: %s -> %s", self.state, SESSION_DISCONNECTED)

        self.token = None
        self.state = SESSION_DISCONNECTED

    def __repr__(self):
        return "Session(state=%r)" % (self.state,)
