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

"""The ``ccmember.const`` module contains the constant values of the remote
member service contract and the defaults of the client."""


DEFAULT_SERVER = 'http://emvapi.emv3.com'
"""Base url of the api host. Ask your account manager which one is yours."""

WSDL_PATH = 'apimember/services/MemberService?wsdl'
"""Location of the member service WSDL, relative to the server url."""

DEFAULT_TIMEOUT = 60
"""Default timeout for every remote call, in seconds."""

USER_AGENT_PREFIX = 'Python Campaign Commander Member'
"""Product part of the User-Agent header. The version and the application's
own user agent are appended to it."""

MAX_ATTEMPTS = 2
"""How many times a call is placed at most. Everything above 1 is spent on
re-authenticating after an expired token."""

DEFAULT_STRING_ENCODING = 'latin1'
"""Encoding used to decode ``bytes`` parameters before they're sent."""

TOKEN_EXPIRED_MESSAGE = \
                      'Please enter a valid token to validate your connection.'
"""Fault description the service uses for invalid or expired tokens."""

TOKEN_KEY = 'token'
"""Reserved parameter key that carries the session token."""

CCMD_FAULT_TAG = 'CcmdServiceException'
MEMBER_FAULT_TAG = 'MemberServiceException'
CONNECTION_FAULT_TAG = 'ConnectionServiceException'

FAULT_DETAIL_TAGS = (
    CCMD_FAULT_TAG,
    MEMBER_FAULT_TAG,
    CONNECTION_FAULT_TAG,
)
"""Fault detail tags, most specific first. The first one present wins."""

FAULT_DETAIL_DESCRIPTION = 'description'
FAULT_DETAIL_FIELDS = 'fields'
FAULT_DETAIL_STATUS = 'status'

DEFAULT_FAULT_MESSAGE = 'Internal Error'
"""Message used when a fault carries no description at all."""

INVALID_RESPONSE = 'Invalid response'

CONNECTION_CLOSED = 'connection closed'
"""What closeApiConnection returns on success."""

JOIN_DATE_FIELD = 'DATEJOIN'
"""Member field that is converted to a unix timestamp."""

MEMBER_NOT_FOUND_STATUS = 'MEMBER_NOT_FOUND'
"""Fault status the service sends when a member lookup comes up empty."""

MEMBER_NOT_FOUND_DESCRIPTION = 'Member not found'
"""Description of the MemberServiceException sent for missing members.
Compared case-insensitively."""

JOB_STATUS_INSERT = 'Insert'
JOB_STATUS_PROCESSING = 'Processing'
JOB_STATUS_PROCESSED = 'Processed'
JOB_STATUS_ERROR = 'Error'
JOB_STATUS_DONE_OR_MISSING = 'Job_Done_Or_Does_Not_Exist'

JOB_STATUSES = frozenset((
    JOB_STATUS_INSERT,
    JOB_STATUS_PROCESSING,
    JOB_STATUS_PROCESSED,
    JOB_STATUS_ERROR,
    JOB_STATUS_DONE_OR_MISSING,
))
"""The closed set of values getMemberJobStatus can return."""

#
# Remote operation catalogue
#

OP_OPEN_CONNECTION = 'openApiConnection'
OP_CLOSE_CONNECTION = 'closeApiConnection'
OP_DESC_MEMBER_TABLE = 'descMemberTable'
OP_GET_MEMBER_BY_EMAIL = 'getMemberByEmail'
OP_GET_MEMBER_BY_ID = 'getMemberById'
OP_GET_LIST_MEMBERS_BY_OBJ = 'getListMembersByObj'
OP_GET_LIST_MEMBERS_BY_PAGE = 'getListMembersByPage'
OP_INSERT_MEMBER = 'insertMember'
OP_UPDATE_MEMBER = 'updateMember'
OP_INSERT_OR_UPDATE_MEMBER_BY_OBJ = 'insertOrUpdateMemberByObj'
OP_UPDATE_MEMBER_BY_OBJ = 'updateMemberByObj'
OP_GET_MEMBER_JOB_STATUS = 'getMemberJobStatus'
OP_UNJOIN_MEMBER_BY_EMAIL = 'unjoinMemberByEmail'
OP_UNJOIN_MEMBER_BY_ID = 'unjoinMemberById'
OP_UNJOIN_MEMBER_BY_OBJ = 'unjoinMemberByObj'
OP_REJOIN_MEMBER_BY_EMAIL = 'rejoinMemberByEmail'
OP_REJOIN_MEMBER_BY_ID = 'rejoinMemberById'

OPERATIONS = (
    OP_OPEN_CONNECTION,
    OP_CLOSE_CONNECTION,
    OP_DESC_MEMBER_TABLE,
    OP_GET_MEMBER_BY_EMAIL,
    OP_GET_MEMBER_BY_ID,
    OP_GET_LIST_MEMBERS_BY_OBJ,
    OP_GET_LIST_MEMBERS_BY_PAGE,
    OP_INSERT_MEMBER,
    OP_UPDATE_MEMBER,
    OP_INSERT_OR_UPDATE_MEMBER_BY_OBJ,
    OP_UPDATE_MEMBER_BY_OBJ,
    OP_GET_MEMBER_JOB_STATUS,
    OP_UNJOIN_MEMBER_BY_EMAIL,
    OP_UNJOIN_MEMBER_BY_ID,
    OP_UNJOIN_MEMBER_BY_OBJ,
    OP_REJOIN_MEMBER_BY_EMAIL,
    OP_REJOIN_MEMBER_BY_ID,
)
"""Every operation of the member service this client knows about."""
