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

"""The SOAP 1.1 client transport, on top of zeep."""

import logging
logger = logging.getLogger(__name__)

from lxml import etree

from requests import Session as HttpSession
from requests import RequestException

from zeep import Client
from zeep import Settings
from zeep.helpers import serialize_object
from zeep.plugins import HistoryPlugin
from zeep.transports import Transport
from zeep.exceptions import Fault as ZeepFault
from zeep.exceptions import Error as ZeepError

from ccmember.client import TransportBase
from ccmember.client import TransportFault
from ccmember.const import DEFAULT_TIMEOUT
from ccmember.util.etreeconv import fault_detail_to_dict


def _envelope_to_string(history, direction):
    try:
        entry = getattr(history, direction)
    except IndexError: # nothing was sent yet
        return None

    if entry is None:
        return None

    return etree.tostring(entry['envelope'], pretty_print=True,
                                                            encoding='unicode')


class ZeepTransport(TransportBase):
    """Places calls through a :class:`zeep.Client`. The WSDL is fetched on
    the first call.

    :param wsdl_url: Where the service description lives.
    :param timeout: Timeout of the WSDL download and of every call, in seconds.
    :param user_agent: Value of the User-Agent header.
    :param settings: A :class:`zeep.Settings` instance. The default one turns
        strict mode off, as the service doesn't always follow its own schema.
    """

    def __init__(self, wsdl_url, timeout=DEFAULT_TIMEOUT, user_agent=None,
                                                                 settings=None):
        super(ZeepTransport, self).__init__(wsdl_url, timeout=timeout,
                                                          user_agent=user_agent)

        if settings is None:
            settings = Settings(strict=False)

        self.settings = settings
        self.history = HistoryPlugin()

        self._http = None
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self.close()

            self._http = HttpSession()
            transport = Transport(session=self._http, timeout=self.timeout,
                                               operation_timeout=self.timeout)

            # zeep sets its own user agent on the session
            if self.user_agent is not None:
                self._http.headers['User-Agent'] = self.user_agent

            logger.debug("loading wsdl from %s", self.wsdl_url)
            self._client = Client(self.wsdl_url, transport=transport,
                             settings=self.settings, plugins=[self.history])

        return self._client

    def call(self, operation, params):
        try:
            result = self.client.service[operation](**params)

        except ZeepFault as e:
            raise TransportFault(e.message, code=e.code,
                                          detail=fault_detail_to_dict(e.detail))

        except (ZeepError, RequestException) as e:
            raise TransportFault(str(e))

        # zeep unwraps single-part responses, so put the part's name back
        if result is None:
            return {}

        return {'return': serialize_object(result, target_cls=dict)}

    @property
    def last_request(self):
        return _envelope_to_string(self.history, "last_sent")

    @property
    def last_response(self):
        return _envelope_to_string(self.history, "last_received")

    def close(self):
        if self._http is not None:
            self._http.close()

        self._http = None
        self._client = None
