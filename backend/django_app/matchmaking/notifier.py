import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

logger = logging.getLogger(__name__)

MATCHES_CHANGED = 'matches.changed'
CONNECTIONS_CHANGED = 'connections.changed'


def user_group(user_id) -> str:
    return f'user_{user_id}'


def publish(user_ids, message_type: str, data: dict) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    for user_id in dict.fromkeys(user_ids):
        try:
            async_to_sync(channel_layer.group_send)(user_group(user_id), {'type': message_type, 'data': data})
        except Exception:
            # Clients re-read from the store on reconnect, a lost notification only delays a refresh.
            logger.exception('Notification failed: type=%s user=%s', message_type, user_id)


def publish_on_commit(user_ids, message_type: str, data: dict) -> None:
    user_ids = list(user_ids)
    transaction.on_commit(lambda: publish(user_ids, message_type, data))


def matches_changed(event_id, source_user_id, action: str, **extra) -> None:
    data = {'event_id': event_id, 'user_id': source_user_id, 'action': action, **extra}
    publish_on_commit([source_user_id], MATCHES_CHANGED, data)


def connection_changed(connection, action: str) -> None:
    data = {
        'event_id': connection.event_id,
        'connection_id': connection.id,
        'user_a_id': connection.user_a_id,
        'user_b_id': connection.user_b_id,
        'status': connection.status,
        'action': action,
    }
    publish_on_commit([connection.user_a_id, connection.user_b_id], CONNECTIONS_CHANGED, data)
