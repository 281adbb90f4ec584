import asyncio

import pytest
from starlette.websockets import WebSocketDisconnect

from medtrack.helpers.enums import ChangeEvent, ChangeTable
from medtrack.services.ws_manager import RealtimeConnectionManager


class StubWebSocket:
    def __init__(self, fail_on_send=False):
        self.accepted = False
        self.closed_with = None
        self.sent = []
        self.fail_on_send = fail_on_send

    async def accept(self):
        self.accepted = True

    async def send_json(self, data):
        if self.fail_on_send:
            raise RuntimeError('connection lost')
        self.sent.append(data)

    async def close(self, code=1000, reason=None):
        self.closed_with = code


def test_change_signal_reaches_every_device_of_the_user():
    manager = RealtimeConnectionManager()
    phone, tablet, stranger = StubWebSocket(), StubWebSocket(), StubWebSocket()

    async def scenario():
        await manager.connect(phone, 'family')
        await manager.connect(tablet, 'family')
        await manager.connect(stranger, 'other')
        return await manager.publish_change('family', ChangeTable.MEDICATION_LOGS, ChangeEvent.INSERT)

    delivered = asyncio.run(scenario())

    signal = {'type': 'change', 'table': 'medication_logs', 'event': 'INSERT'}
    assert delivered == 2
    assert phone.sent == [signal]
    assert tablet.sent == [signal]
    assert stranger.sent == []


def test_connection_limit_per_user():
    manager = RealtimeConnectionManager(max_connections_per_user=1)
    first, second = StubWebSocket(), StubWebSocket()

    async def scenario():
        return await manager.connect(first, 'family'), await manager.connect(second, 'family')

    accepted, rejected = asyncio.run(scenario())

    assert accepted is not None
    assert rejected is None
    assert second.closed_with == 4003
    assert not second.accepted
    assert manager.get_stats() == {'total_connections': 1, 'users_with_connections': 1}


def test_dead_connections_are_dropped():
    manager = RealtimeConnectionManager()
    alive, dead = StubWebSocket(), StubWebSocket(fail_on_send=True)

    async def scenario():
        await manager.connect(alive, 'family')
        await manager.connect(dead, 'family')
        return await manager.publish_change('family', ChangeTable.MEDICATIONS, ChangeEvent.UPDATE)

    assert asyncio.run(scenario()) == 1
    assert manager.get_stats() == {'total_connections': 1, 'users_with_connections': 1}
    assert manager.get_total_connections() == 1


def test_disconnect_and_cleanup():
    manager = RealtimeConnectionManager()
    phone, tablet = StubWebSocket(), StubWebSocket()

    async def scenario():
        await manager.connect(phone, 'family')
        await manager.connect(tablet, 'family')
        await manager.disconnect(phone, 'family')
        await manager.disconnect(phone, 'family')
        return await manager.cleanup_all()

    assert asyncio.run(scenario()) == 1
    assert tablet.closed_with == 1000
    assert manager.get_stats() == {
        'total_connections': 0,
        'users_with_connections': 0,
    }


def test_websocket_subscribe(client, token):
    with client.websocket_connect(f'/api/realtime/ws?token={token}') as websocket:
        message = websocket.receive_json()

    assert message['type'] == 'subscribed'
    assert message['user_id']


def test_websocket_rejects_bad_token(client):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect('/api/realtime/ws?token=garbage') as websocket:
            websocket.receive_json()

    assert exc_info.value.code == 4001


def test_health_reports_open_connections(client, token):
    with client.websocket_connect(f'/api/realtime/ws?token={token}') as websocket:
        websocket.receive_json()
        realtime = client.get('/health').json()['realtime']

    assert realtime['total_connections'] >= 1
    assert realtime['users_with_connections'] >= 1
