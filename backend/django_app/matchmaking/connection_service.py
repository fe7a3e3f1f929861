import logging
from dataclasses import dataclass
from typing import List, Optional

from django.db import IntegrityError, transaction
from django.db.models import Q

from . import notifier
from .errors import InvalidOperation, UserNotFound, store_errors
from .models import Connection, Profile

logger = logging.getLogger(__name__)


@dataclass
class InterestResult:
    connection: Connection
    already_exists: bool
    mutual: bool


def _pair(event_id, user_id, other_id):
    return Connection.objects.filter(event_id=event_id).filter(
        Q(user_a_id=user_id, user_b_id=other_id) | Q(user_a_id=other_id, user_b_id=user_id)
    )


def _require_participants(event_id, *user_ids) -> None:
    found = set(Profile.objects.filter(event_id=event_id, user_id__in=user_ids).values_list('user_id', flat=True))
    missing = [user_id for user_id in user_ids if user_id not in found]
    if missing:
        raise UserNotFound(f'No profile in this event for user {missing[0]}.')


def _record_interest(connection: Connection, requester_id) -> InterestResult:
    if connection.user_b_id == requester_id and connection.status == Connection.Status.PENDING:
        connection.status = Connection.Status.ACCEPTED
        connection.save(update_fields=['status', 'updated_at'])
        notifier.connection_changed(connection, 'accepted')
        logger.info(
            'Mutual connection: event=%s users=%s,%s',
            connection.event_id,
            connection.user_a_id,
            connection.user_b_id,
        )
        return InterestResult(connection=connection, already_exists=False, mutual=True)
    return InterestResult(
        connection=connection,
        already_exists=True,
        mutual=connection.status == Connection.Status.ACCEPTED,
    )


@store_errors
def express_interest(event_id, requester_id, target_id) -> InterestResult:
    if requester_id == target_id:
        raise InvalidOperation('You cannot express interest in yourself.')
    _require_participants(event_id, requester_id, target_id)

    with transaction.atomic():
        connection = _pair(event_id, requester_id, target_id).select_for_update().first()
        if connection is None:
            try:
                with transaction.atomic():
                    connection = Connection.objects.create(
                        event_id=event_id,
                        user_a_id=requester_id,
                        user_b_id=target_id,
                        status=Connection.Status.PENDING,
                    )
            except IntegrityError:
                # The other side inserted the pair row first.
                connection = _pair(event_id, requester_id, target_id).select_for_update().get()
            else:
                notifier.connection_changed(connection, 'requested')
                logger.info('Interest recorded: event=%s from=%s to=%s', event_id, requester_id, target_id)
                return InterestResult(connection=connection, already_exists=False, mutual=False)
        return _record_interest(connection, requester_id)


@store_errors
def decline_interest(event_id, user_id, other_id) -> Connection:
    """Decline the pending interest ``other_id`` expressed in ``user_id``."""
    if user_id == other_id:
        raise InvalidOperation('You cannot decline yourself.')

    with transaction.atomic():
        connection = _pair(event_id, user_id, other_id).select_for_update().first()
        if connection is None:
            raise InvalidOperation('There is no interest to decline.')
        if connection.status == Connection.Status.DECLINED:
            return connection
        if connection.status == Connection.Status.ACCEPTED:
            raise InvalidOperation('This connection is already accepted.')
        if connection.user_a_id == user_id:
            raise InvalidOperation('You cannot decline your own interest.')

        connection.status = Connection.Status.DECLINED
        connection.save(update_fields=['status', 'updated_at'])
        notifier.connection_changed(connection, 'declined')

    logger.info('Interest declined: event=%s by=%s from=%s', event_id, user_id, other_id)
    return connection


@store_errors
def list_connections(event_id, user_id, status: Optional[str] = None) -> List[Connection]:
    connections = Connection.objects.filter(event_id=event_id).filter(Q(user_a_id=user_id) | Q(user_b_id=user_id))
    if status:
        if status not in Connection.Status.values:
            raise InvalidOperation(f'Unknown status: {status}')
        connections = connections.filter(status=status)
    else:
        connections = connections.exclude(status=Connection.Status.DECLINED)
    return list(connections.select_related('user_a', 'user_b').order_by('-created_at', '-id'))
