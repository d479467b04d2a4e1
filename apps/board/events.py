# apps/board/events.py

"""Publishes board changes to the `board_<id>` channel group"""

import json
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction
from django.utils import timezone

logger = logging.getLogger(__name__)

LANE_CREATED = 'lane_created'
LANE_UPDATED = 'lane_updated'
LANE_DELETED = 'lane_deleted'
LANES_REORDERED = 'lanes_reordered'
TASK_CREATED = 'task_created'
TASK_UPDATED = 'task_updated'
TASK_MOVED = 'task_moved'
TASK_DELETED = 'task_deleted'


def board_group_name(board_id) -> str:
    return f'board_{board_id}'


def publish_board_event(board_id, action: str, message: dict) -> None:
    """Sends one event to every socket watching the board"""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return

    # Channel layers only carry plain types: UUIDs and datetimes become strings
    payload = json.loads(json.dumps(message, cls=DjangoJSONEncoder))

    try:
        async_to_sync(channel_layer.group_send)(
            board_group_name(board_id),
            {
                'type': 'board.event',
                'action': action,
                'message': payload,
                'timestamp': timezone.now().isoformat(),
            }
        )
    except Exception:
        logger.exception("Could not publish %s on board %s", action, board_id)
        return

    logger.debug("Event %s published on board %s", action, board_id)


def publish_on_commit(board_id, action: str, message: dict) -> None:
    """Defers publish_board_event until the surrounding transaction commits"""
    transaction.on_commit(lambda: publish_board_event(board_id, action, message))
