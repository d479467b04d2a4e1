"""Tests for live board events: publishing on commit and the board socket."""

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator

from apps.board import events
from apps.board.routing import websocket_urlpatterns
from apps.core.exceptions import WipLimitExceeded
from apps.core.middleware import JwtWebsocketMiddleware

from .conftest import token_for


@pytest.fixture
def published(monkeypatch):
    """Records (board_id, action, message) instead of hitting the channel layer"""
    calls = []
    monkeypatch.setattr(
        events, 'publish_board_event',
        lambda board_id, action, message: calls.append((board_id, action, message)),
    )
    return calls


@pytest.mark.django_db
class TestPublishedEvents:
    """Events go out after the write commits."""

    def test_task_created(self, published, lanes, make_task, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            card = make_task(lanes['To Do'], 'Live')

        actions = [(action, message['id']) for _, action, message in published]
        assert (events.TASK_CREATED, card['id']) in actions

    def test_move_reports_source_lane(self, published, task_service, lanes, make_task, owner,
                                      django_capture_on_commit_callbacks):
        card = make_task(lanes['To Do'])

        with django_capture_on_commit_callbacks(execute=True):
            task_service.move_task(card['id'], owner, lanes['Review'].id, 0)

        [(_, action, message)] = published
        assert action == events.TASK_MOVED
        assert message['fromLaneId'] == lanes['To Do'].id
        assert message['laneId'] == lanes['Review'].id

    def test_refused_move_publishes_nothing(self, published, task_service, board_service, board,
                                            lanes, make_task, owner, django_capture_on_commit_callbacks):
        board_service.update_lane(board['id'], lanes['Review'].id, owner, {'wip_limit': 1})
        make_task(lanes['Review'])
        card = make_task(lanes['To Do'])

        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(WipLimitExceeded):
                task_service.move_task(card['id'], owner, lanes['Review'].id, 0)

        assert published == []

    def test_reorder_event(self, published, board_service, board, lanes, owner,
                           django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            board_service.reorder_lanes(board['id'], owner, [(lanes['Done'].id, 0)])

        assert [action for _, action, _ in published] == [events.LANES_REORDERED]

    def test_nothing_sent_before_commit(self, published, lanes, make_task):
        make_task(lanes['To Do'])
        assert published == []


@pytest.mark.django_db(transaction=True)
class TestBoardSocket:
    """Tests for BoardConsumer."""

    application = JwtWebsocketMiddleware(URLRouter(websocket_urlpatterns))

    def _communicator(self, board_id, token=None):
        path = f'/ws/boards/{board_id}/'
        if token:
            path += f'?token={token}'
        return WebsocketCommunicator(self.application, path)

    def test_anonymous_rejected(self, board):
        async def scenario():
            communicator = self._communicator(board['id'])
            connected, _ = await communicator.connect()
            await communicator.disconnect()
            return connected

        assert async_to_sync(scenario)() is False

    def test_non_member_rejected(self, board, outsider):
        token = token_for(outsider)

        async def scenario():
            communicator = self._communicator(board['id'], token)
            connected, _ = await communicator.connect()
            await communicator.disconnect()
            return connected

        assert async_to_sync(scenario)() is False

    def test_ping_and_events(self, board, viewer):
        token = token_for(viewer)

        async def scenario():
            communicator = self._communicator(board['id'], token)
            connected, _ = await communicator.connect()
            assert connected

            await communicator.send_json_to({'type': 'ping'})
            pong = await communicator.receive_json_from()

            await communicator.send_json_to({'type': 'sync_board'})
            sync = await communicator.receive_json_from()

            await communicator.disconnect()
            return pong, sync

        pong, sync = async_to_sync(scenario)()

        assert pong['type'] == 'pong'
        assert sync['type'] == 'board_sync'
        assert [lane['name'] for lane in sync['board']['lanes']] == ['To Do', 'In Progress', 'Review', 'Done']
        assert all(lane['taskCount'] == 0 for lane in sync['board']['lanes'])

    def test_group_event_forwarded(self, board, owner):
        token = token_for(owner)

        async def scenario():
            communicator = self._communicator(board['id'], token)
            connected, _ = await communicator.connect()
            assert connected

            await get_channel_layer().group_send(events.board_group_name(board['id']), {
                'type': 'board.event',
                'action': events.TASK_DELETED,
                'message': {'id': 'abc'},
                'timestamp': '2024-01-01T00:00:00+00:00',
            })
            received = await communicator.receive_json_from()
            await communicator.disconnect()
            return received

        received = async_to_sync(scenario)()

        assert received == {
            'type': 'board_event',
            'action': events.TASK_DELETED,
            'message': {'id': 'abc'},
            'timestamp': '2024-01-01T00:00:00+00:00',
        }
