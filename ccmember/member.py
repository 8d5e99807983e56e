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

"""The ``ccmember.member`` module contains the typed calls of the member
service.

Every method builds the parameters of one remote operation, places the call
through a :class:`ccmember.session.SessionManager` and reshapes what comes
back. ::

    from ccmember import MemberClient

    with MemberClient('login', 'password', 'key') as client:
        member = client.get_member_by_email('jane@example.com')
        job_id = client.update_member('jane@example.com', 'FIRSTNAME', 'Jane')
        status = client.get_member_job_status(job_id)
"""

import logging
logger = logging.getLogger(__name__)

from ccmember._base import Credentials

from ccmember.const import JOB_STATUSES
from ccmember.const import OP_DESC_MEMBER_TABLE
from ccmember.const import OP_GET_MEMBER_BY_EMAIL
from ccmember.const import OP_GET_MEMBER_BY_ID
from ccmember.const import OP_GET_LIST_MEMBERS_BY_OBJ
from ccmember.const import OP_GET_LIST_MEMBERS_BY_PAGE
from ccmember.const import OP_INSERT_MEMBER
from ccmember.const import OP_UPDATE_MEMBER
from ccmember.const import OP_INSERT_OR_UPDATE_MEMBER_BY_OBJ
from ccmember.const import OP_UPDATE_MEMBER_BY_OBJ
from ccmember.const import OP_GET_MEMBER_JOB_STATUS
from ccmember.const import OP_UNJOIN_MEMBER_BY_EMAIL
from ccmember.const import OP_UNJOIN_MEMBER_BY_ID
from ccmember.const import OP_UNJOIN_MEMBER_BY_OBJ
from ccmember.const import OP_REJOIN_MEMBER_BY_EMAIL
from ccmember.const import OP_REJOIN_MEMBER_BY_ID

from ccmember.error import ServiceFault
from ccmember.error import ValidationError
from ccmember.error import ProtocolShapeError

from ccmember.session import SessionManager

from ccmember.util.shape import SHAPE_SINGLE
from ccmember.util.shape import SHAPE_LIST
from ccmember.util.shape import SHAPE_PAGED
from ccmember.util.shape import get_field
from ccmember.util.shape import normalize


def build_member(fields, email=None, id=None):
    """Builds the member object the ``*ByObj`` operations expect.

    :param fields: A dict of member fields to values.
    :param email: The email of the member.
    :param id: The id of the member.
    :raises ValidationError: When neither ``email`` nor ``id`` is given.
    """

    if email is None and id is None:
        raise ValidationError(None, "Email or id has to be specified")

    retval = {
        'dynContent': {
            'entry': [{'key': k, 'value': v} for k, v in fields.items()],
        },
    }

    if email is not None:
        retval['email'] = str(email)
    if id is not None:
        retval['memberUID'] = str(id)

    return retval


def job_id_from_response(response, operation=None):
    """Validates the job id the mutating operations return.

    :returns: The job id, as a string. They can be too long for a 64-bit
        integer on the remote side, so they're never converted.
    :raises ProtocolShapeError: When the job id is missing or zero.
    """

    if response is None:
        raise ProtocolShapeError(operation=operation)

    retval = str(response).strip()
    if not retval.isdigit() or int(retval) == 0:
        raise ProtocolShapeError(operation=operation)

    return retval


class MemberOperations(object):
    """The calls of the member service.

    :param session: A :class:`ccmember.session.SessionManager` instance.
    """

    def __init__(self, session):
        self.session = session

    def _call(self, operation, params=None):
        return self.session.invoke(operation, params)

    def _call_for_record(self, operation, params):
        try:
            response = self._call(operation, params)

        except ServiceFault as e:
            if e.is_member_not_found:
                logger.debug("%s: member not found: %s", operation,
                                                                  e.faultstring)
                return None
            raise

        return normalize(SHAPE_SINGLE, response, operation=operation)

    def _call_for_records(self, operation, params, shape):
        try:
            response = self._call(operation, params)

        except ServiceFault as e:
            if e.is_member_not_found:
                logger.debug("%s: no members found: %s", operation,
                                                                  e.faultstring)
                return []
            raise

        return normalize(shape, response, operation=operation)

    def _call_for_job(self, operation, params):
        response = self._call(operation, params)
        return job_id_from_response(response, operation=operation)

    def desc_member_table(self):
        """Retrieves the fields (i.e. database column names) of the member
        table.

        :returns: A list of ``{'name': ..., 'type': ...}`` dicts, in the order
            the service sent them. Types are lower-cased.
        """

        response = self._call(OP_DESC_MEMBER_TABLE)

        fields = get_field(response, 'fields')
        if fields is None:
            raise ProtocolShapeError(operation=OP_DESC_MEMBER_TABLE)

        if isinstance(fields, dict):
            fields = [fields]

        retval = []
        for row in fields:
            type_ = get_field(row, 'type')
            if type_ is not None:
                type_ = str(type_).lower()

            retval.append({'name': get_field(row, 'name'), 'type': type_})

        return retval

    def get_member_by_email(self, email):
        """Gets a member by email address.

        :returns: A dict of all member fields to their values, or ``None`` when
            there's no such member. When more than one member matches, the
            first one is returned.
        """

        return self._call_for_record(OP_GET_MEMBER_BY_EMAIL,
                                                          {'email': str(email)})

    def get_member_by_id(self, id):
        """Gets a member by id.

        :returns: A dict of all member fields to their values, or ``None`` when
            there's no such member.
        """

        return self._call_for_record(OP_GET_MEMBER_BY_ID, {'id': str(id)})

    def get_list_members_by_obj(self, member):
        """Retrieves at most 50 members that match the given criteria.

        :param member: The member object with the criteria, e.g.
            ``{'dynContent': {}, 'memberUID': 'FIRSTNAME:jan'}``.
        :returns: A list of member dicts, empty when nothing matched.
        """

        return self._call_for_records(OP_GET_LIST_MEMBERS_BY_OBJ,
                                               {'member': member}, SHAPE_LIST)

    def get_list_members_by_page(self, page):
        """Retrieves all members page by page. Each page has 10 members.

        :returns: A list of member dicts, empty past the last page.
        """

        return self._call_for_records(OP_GET_LIST_MEMBERS_BY_PAGE,
                                               {'page': int(page)}, SHAPE_PAGED)

    def insert_member(self, email):
        """Inserts a new member with all other fields left empty.

        :returns: The job id, see :meth:`get_member_job_status`.
        """

        return self._call_for_job(OP_INSERT_MEMBER, {'email': str(email)})

    def update_member(self, email, field, value):
        """Updates one field of a member.

        :returns: The job id, see :meth:`get_member_job_status`.
        """

        return self._call_for_job(OP_UPDATE_MEMBER, {
            'email': str(email),
            'field': str(field),
            'value': value,
        })

    def insert_or_update_member_by_obj(self, fields, email=None, id=None):
        """Inserts a new member or updates an existing one.

        :param fields: A dict of fields to values to insert or update.
        :param email: The email of the member.
        :param id: The id of the member.
        :returns: The job id, see :meth:`get_member_job_status`.
        :raises ValidationError: When neither ``email`` nor ``id`` is given.
        """

        member = build_member(fields, email=email, id=id)
        return self._call_for_job(OP_INSERT_OR_UPDATE_MEMBER_BY_OBJ,
                                                              {'member': member})

    def update_member_by_obj(self, fields, email=None, id=None):
        """Updates a member. See :meth:`insert_or_update_member_by_obj`."""

        member = build_member(fields, email=email, id=id)
        return self._call_for_job(OP_UPDATE_MEMBER_BY_OBJ, {'member': member})

    def get_member_job_status(self, job_id):
        """Gets the status of a member insertion or update. It's one of:

            * ``Insert``: The job is queued.
            * ``Processing``: The job is busy.
            * ``Processed``: The job is done.
            * ``Error``: Something went wrong. There's no way to tell what.
            * ``Job_Done_Or_Does_Not_Exist``: The job is done, or doesn't
              exist (anymore).
        """

        response = self._call(OP_GET_MEMBER_JOB_STATUS,
                                                   {'synchroId': str(job_id)})

        status = get_field(response, 'status')
        if status is None or str(status) not in JOB_STATUSES:
            raise ProtocolShapeError(operation=OP_GET_MEMBER_JOB_STATUS)

        return str(status)

    def unjoin_member_by_email(self, email):
        """Unsubscribes all members with the given email address.

        :returns: The job id.
        """

        return self._call_for_job(OP_UNJOIN_MEMBER_BY_EMAIL,
                                                          {'email': str(email)})

    def unjoin_member_by_id(self, id):
        """Unsubscribes the member with the given id.

        :returns: The job id.
        """

        return self._call_for_job(OP_UNJOIN_MEMBER_BY_ID, {'memberId': str(id)})

    def unjoin_member_by_obj(self, member):
        """Unsubscribes a member.

        :param member: The member object. It needs an ``email`` or a
            ``memberUID`` entry.
        :returns: The job id.
        """

        if member.get('email') is None and member.get('memberUID') is None:
            raise ValidationError(None, "Email or memberUID has to be "
                                                                    "specified")

        return self._call_for_job(OP_UNJOIN_MEMBER_BY_OBJ, {'member': member})

    def rejoin_member_by_email(self, email):
        """Re-subscribes all unsubscribed members with the given email address.
        The number of rejoins per day is limited by the service.

        :returns: The job id.
        """

        return self._call_for_job(OP_REJOIN_MEMBER_BY_EMAIL,
                                                          {'email': str(email)})

    def rejoin_member_by_id(self, id):
        """Re-subscribes the unsubscribed member with the given id. The number
        of rejoins per day is limited by the service.

        :returns: The job id.
        """

        return self._call_for_job(OP_REJOIN_MEMBER_BY_ID, {'memberId': str(id)})

    def close_api_connection(self):
        """Closes the connection. It's opened again by the next call.

        :returns: True if the service confirmed the connection was closed.
        """

        return self.session.close()


class MemberClient(MemberOperations):
    """The member operations with a session manager of their own.

    :param login: Login provided for api access.
    :param password: The password.
    :param key: Manager key copied from the web application.
    :param server: The server to use. Ask your account manager.
    :param session_kwargs: Passed to
        :class:`ccmember.session.SessionManager`. e.g. ``timeout``,
        ``user_agent`` or ``transport_factory``.
    """

    def __init__(self, login, password, key, server=None, **session_kwargs):
        credentials = Credentials(login, password, key, server)
        super(MemberClient, self).__init__(
                                   SessionManager(credentials, **session_kwargs))

    def get_timeout(self):
        return self.session.get_timeout()

    def set_timeout(self, seconds):
        self.session.set_timeout(seconds)

    def get_user_agent(self):
        return self.session.get_user_agent()

    def set_user_agent(self, user_agent):
        self.session.set_user_agent(user_agent)

    def close(self):
        return self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
