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

__version__ = '1.1.0'

from ccmember._base import Credentials
from ccmember._base import Session
from ccmember._base import SESSION_DISCONNECTED
from ccmember._base import SESSION_AUTHENTICATING
from ccmember._base import SESSION_AUTHENTICATED

from ccmember.error import Fault
from ccmember.error import ServiceFault
from ccmember.error import AuthenticationError
from ccmember.error import TokenExpiredError
from ccmember.error import ValidationError
from ccmember.error import ProtocolShapeError

from ccmember.client import TransportBase
from ccmember.client import TransportFault

from ccmember.session import SessionManager

from ccmember.member import MemberOperations
from ccmember.member import MemberClient
