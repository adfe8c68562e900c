import pytest

from chatwordle.models import RoundState
from chatwordle.services.chat_relay import ChatRelayClient

from conftest import FakeSio


@pytest.fixture()
def sio():
    return FakeSio()


@pytest.fixture()
def relay(engine, sio):
    return ChatRelayClient('http://relay.test', engine, sio_client=sio)


def test_registers_relay_events(relay, sio):
    assert set(sio.handlers) == {
        'connect', 'disconnect', 'tiktokConnected', 'tiktokDisconnected', 'streamEnd', 'chat'
    }


def test_stream_requested_once_connected(relay, sio):
    relay.connect_stream('@streamer')
    assert sio.emitted == []

    relay.connect()

    assert sio.urls == ['http://relay.test']
    assert sio.emitted == [('setUniqueId', ('streamer', {'enableExtendedGiftInfo': True}))]


def test_stream_requested_immediately_when_connected(relay, sio):
    relay.connect()

    relay.connect_stream(' streamer ')

    assert sio.emitted == [('setUniqueId', ('streamer', {'enableExtendedGiftInfo': True}))]


@pytest.mark.parametrize('unique_id', ['', '   ', '@', None])
def test_blank_stream_id_rejected(relay, unique_id):
    with pytest.raises(ValueError):
        relay.connect_stream(unique_id)


def test_stream_connected_sets_connection_info(relay, sio, engine):
    engine.set_connected(False)
    relay.connect_stream('streamer')

    sio.trigger('tiktokConnected', {'roomId': '7300'})

    assert engine.is_connected is True
    assert engine.connection_info == {'unique_id': 'streamer', 'room_id': '7300'}


@pytest.mark.parametrize('event,args', [
    ('tiktokDisconnected', ('network',)),
    ('streamEnd', ({'action': 3},)),
    ('disconnect', ()),
])
def test_connectivity_loss_pauses_guessing(relay, sio, engine, event, args):
    sio.trigger(event, *args)

    assert engine.is_connected is False
    sio.trigger('chat', {'uniqueId': 'bob', 'nickname': 'Bob', 'comment': 'crane', 'msgId': '1'})
    assert engine.state is RoundState.ACTIVE


def test_chat_events_reach_the_engine(relay, sio, engine):
    sio.trigger('chat', {'uniqueId': 'bob', 'nickname': 'Bob', 'comment': 'crane', 'msgId': '1'})

    assert engine.state is RoundState.ENDED
    assert engine.session.winner.display_name == 'Bob'


def test_malformed_chat_is_dropped(relay, sio, engine):
    sio.trigger('chat', {'nickname': 'Bob', 'comment': 'crane'})
    sio.trigger('chat', 'crane')

    assert engine.state is RoundState.ACTIVE
    assert engine.get_round_state()['total_guesses'] == 0


def test_disconnect_only_when_connected(relay, sio, engine):
    relay.disconnect()
    assert engine.is_connected is True

    relay.connect()
    relay.disconnect()
    assert sio.connected is False
    assert engine.is_connected is False


def test_repeated_chat_without_message_id_is_not_a_redelivery(relay, sio, engine, publisher):
    payload = {'uniqueId': 'alice', 'nickname': 'Alice', 'comment': 'zzzzz'}

    sio.trigger('chat', payload)
    sio.trigger('chat', dict(payload))

    assert len(publisher.payloads('validation_notice')) == 2


def test_chat_with_repeated_message_id_is_dropped(relay, sio, engine, publisher):
    payload = {'uniqueId': 'alice', 'nickname': 'Alice', 'comment': 'zzzzz', 'msgId': '42'}

    sio.trigger('chat', payload)
    sio.trigger('chat', dict(payload))

    assert len(publisher.payloads('validation_notice')) == 1
