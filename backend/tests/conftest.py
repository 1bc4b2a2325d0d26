import pytest

from odds.game.service import RoomManager
from odds.server import create_app


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    CORS_ORIGINS = '*'
    TRUST_PROXY_HEADERS = False
    SOCKETIO_ASYNC_MODE = 'threading'
    LOG_LEVEL = 'DEBUG'
    NOTIFIER = 'socketio'
    ROOM_ID = 'main-room'
    REVEAL_DURATION_SEC = 5


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def publish(self, channel, event, payload):
        self.events.append((channel, event, payload))

    def names(self):
        return [event for _, event, _ in self.events]

    def payloads(self, name):
        return [payload for _, event, payload in self.events if event == name]


class ManualScheduler:
    """Collects background tasks; tests run them explicitly."""

    def __init__(self):
        self.tasks = []
        self.slept = []

    def start_background_task(self, target, *args, **kwargs):
        self.tasks.append((target, args, kwargs))

    def sleep(self, seconds=0):
        self.slept.append(seconds)

    def run_pending(self):
        tasks, self.tasks = self.tasks, []
        for target, args, kwargs in tasks:
            target(*args, **kwargs)
        return len(tasks)


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def manager(notifier, scheduler):
    return RoomManager(notifier=notifier, scheduler=scheduler, reveal_delay_sec=5)


@pytest.fixture()
def flask_app(notifier, scheduler):
    application, _ = create_app(TestConfig, notifier=notifier, scheduler=scheduler)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def socket_app(scheduler):
    # Real SocketIO notifier so subscribed test clients receive broadcasts.
    application, socketio = create_app(TestConfig, scheduler=scheduler)
    return application, socketio


@pytest.fixture()
def sio_client(socket_app):
    application, socketio = socket_app
    test_client = socketio.test_client(application, flask_test_client=application.test_client())
    yield test_client
    try:
        test_client.disconnect()
    except Exception:
        pass
