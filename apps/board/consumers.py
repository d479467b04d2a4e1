# apps/board/consumers.py

import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.core.serializers.json import DjangoJSONEncoder
from django.db.models import Count
from django.utils import timezone

from apps.core.models import BoardMember, Lane

from .events import board_group_name

logger = logging.getLogger(__name__)


class BoardConsumer(AsyncWebsocketConsumer):
    """
    WebSocket consumer for live updates of one board

    Features:
    - Lane and task events published after each committed change
    - Heartbeat (ping/pong)
    - On-demand snapshot of lanes and their task counts (sync_board)
    """

    async def connect(self):
        """
        Joins the board group
        Membership is checked before the connection is accepted
        """
        self.board_id = self.scope['url_route']['kwargs']['board_id']
        self.board_group_name = board_group_name(self.board_id)
        self.user = self.scope['user']

        if not self.user.is_authenticated:
            logger.warning("WebSocket rejected - anonymous user on board %s", self.board_id)
            await self.close()
            return

        if not await self.check_board_access():
            logger.warning("WebSocket rejected - %s is not a member of board %s",
                           self.user.email, self.board_id)
            await self.close()
            return

        await self.channel_layer.group_add(self.board_group_name, self.channel_name)
        await self.accept()

        logger.info("WebSocket connected - %s on board %s", self.user.email, self.board_id)

    async def disconnect(self, close_code):
        if hasattr(self, 'board_group_name'):
            await self.channel_layer.group_discard(self.board_group_name, self.channel_name)

        logger.info("WebSocket disconnected from board %s (code %s)",
                    getattr(self, 'board_id', None), close_code)

    async def receive(self, text_data=None, bytes_data=None):
        """Handles client commands"""
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError:
            logger.warning("Invalid JSON on board socket %s", self.board_id)
            await self.send_json_message({'type': 'error', 'message': 'Invalid JSON'})
            return

        message_type = data.get('type') if isinstance(data, dict) else None

        # Heartbeat
        if message_type == 'ping':
            await self.send_json_message({'type': 'pong', 'timestamp': self.get_timestamp()})

        # Board state snapshot
        elif message_type == 'sync_board':
            board_data = await self.get_board_state()
            await self.send_json_message({
                'type': 'board_sync',
                'board': board_data,
                'timestamp': self.get_timestamp(),
            })

    # === Group event handlers ===

    async def board_event(self, event):
        """Forwards one board event (lane_created, task_moved, ...)"""
        await self.send_json_message({
            'type': 'board_event',
            'action': event['action'],
            'message': event['message'],
            'timestamp': event.get('timestamp'),
        })

    # === Helpers ===

    async def send_json_message(self, payload):
        await self.send(text_data=json.dumps(payload, cls=DjangoJSONEncoder))

    @database_sync_to_async
    def check_board_access(self):
        return BoardMember.objects.filter(board_id=self.board_id, user=self.user).exists()

    @database_sync_to_async
    def get_board_state(self):
        """Lanes in order with their task counts"""
        lanes = (
            Lane.objects
            .filter(board_id=self.board_id)
            .annotate(task_count=Count('tasks'))
            .order_by('position', 'created_at', 'id')
        )
        return {
            'boardId': self.board_id,
            'lanes': [
                dict(lane.to_dict(), taskCount=lane.task_count)
                for lane in lanes
            ],
        }

    def get_timestamp(self):
        return timezone.now().isoformat()
