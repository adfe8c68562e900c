import heapq
import itertools

import pytest

from chatwordle import create_app
from chatwordle.config import TestingConfig, RoundTimings
from chatwordle.models import ChatMessage, Player
from chatwordle.services import chat_relay as chat_relay_module
from chatwordle.services import game_service as game_service_module
from chatwordle.services.game_service import GameService, initialize_game_service
from chatwordle.services.lexicon_service import LexiconEntry, LexiconError, LexiconService
from chatwordle.services.scheduler import TimerHandle


class ManualScheduler:
    """Fake clock: timers fire only when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._seq = itertools.count()

    def call_later(self, delay, callback, name=""):
        handle = TimerHandle(name)
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), handle, callback, None))
        return handle

    def call_every(self, interval, callback, name=""):
        handle = TimerHandle(name)
        heapq.heappush(self._queue, (self.now + interval, next(self._seq), handle, callback, interval))
        return handle

    def advance(self, seconds):
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target + 1e-9:
            due, _, handle, callback, interval = heapq.heappop(self._queue)
            self.now = due
            if handle.cancelled:
                continue
            if interval is not None:
                heapq.heappush(self._queue, (due + interval, next(self._seq), handle, callback, interval))
            callback()
        self.now = target

    def pending(self):
        return [entry[2].name for entry in self._queue if not entry[2].cancelled]


class FakeLexicon(LexiconService):
    def __init__(self, targets=("CRANE",), valid=(), definitions=None):
        self.targets = list(targets)
        self.valid = {word.upper() for word in valid} | set(self.targets)
        self.definitions = definitions if definitions is not None else {}
        self.requests = 0
        self.fail_next = 0
        self.definition_error = None

    def get_random_word(self, length):
        self.requests += 1
        if self.fail_next:
            self.fail_next -= 1
            raise LexiconError("word service down")
        return self.targets[(self.requests - 1) % len(self.targets)]

    def is_valid_word(self, text):
        return text.upper() in self.valid

    def get_definition(self, word):
        if self.definition_error is not None:
            raise self.definition_error
        return self.definitions.get(word)


class RecordingPublisher:
    def __init__(self):
        self.events = []

    def __call__(self, event, payload):
        self.events.append((event, payload))

    def payloads(self, name):
        return [payload for event, payload in self.events if event == name]

    def clear(self):
        self.events.clear()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def lexicon():
    return FakeLexicon(
        targets=["CRANE"],
        valid=["TRACE", "SLATE", "CRATE", "PLANT", "EERIE", "LEVEL", "ADIEU"],
        definitions={"CRANE": LexiconEntry(meanings=["A tall lifting machine."], examples=["The crane lifted steel."])}
    )


@pytest.fixture()
def publisher():
    return RecordingPublisher()


@pytest.fixture()
def engine(lexicon, scheduler, publisher):
    service = GameService(lexicon, scheduler, publish=publisher, timings=RoundTimings())
    service.set_connected(True)
    service.start_round()
    yield service
    service.shutdown()


@pytest.fixture()
def chat():
    """Build distinct chat messages; pass message_id to simulate re-delivery."""
    counter = itertools.count(1)

    def _make(text, player_id="alice", name=None, message_id=None):
        author = Player(id=player_id, display_name=name or player_id.capitalize(), avatar=f"https://img/{player_id}.png")
        return ChatMessage(author=author, text=text,
                           message_id=message_id if message_id is not None else f"m{next(counter)}")

    return _make


@pytest.fixture()
def flask_app(monkeypatch):
    monkeypatch.setattr(game_service_module, '_game_service', None)
    monkeypatch.setattr(chat_relay_module, '_chat_relay', None)
    application, socketio = create_app(TestingConfig)
    yield application, socketio


@pytest.fixture()
def live_engine(flask_app, lexicon, scheduler):
    application, socketio = flask_app
    service = initialize_game_service(lexicon, scheduler, publish=socketio.emit, timings=RoundTimings())
    service.set_connected(True)
    service.start_round()
    yield service
    service.shutdown()


@pytest.fixture()
def client(flask_app):
    application, _ = flask_app
    return application.test_client()


@pytest.fixture()
def sio_client(flask_app, live_engine):
    application, socketio = flask_app
    test_client = socketio.test_client(application, flask_test_client=application.test_client())
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


class FakeSio:
    """Stand-in for socketio.Client that records emits and lets tests fire relay events."""

    def __init__(self):
        self.handlers = {}
        self.emitted = []
        self.connected = False
        self.urls = []

    def on(self, event, handler=None):
        self.handlers[event] = handler

    def emit(self, event, data=None):
        self.emitted.append((event, data))

    def connect(self, url):
        self.urls.append(url)
        self.connected = True
        self.handlers['connect']()

    def disconnect(self):
        self.connected = False
        self.handlers['disconnect']()

    def trigger(self, event, *args):
        self.handlers[event](*args)
