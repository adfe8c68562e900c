"""
Chat Relay Client

Connects to the live-stream chat relay backend over Socket.IO and feeds chat
events into the game service. The relay forwards the stream's chat messages
as ``chat`` events and reports stream connectivity with ``tiktokConnected``,
``tiktokDisconnected`` and ``streamEnd``.
"""

from typing import Dict, Optional

import socketio

from ..models.game import ChatMessage
from ..utils.game_logger import game_logger


class ChatRelayClient:
    """
    Socket.IO client for the chat relay.

    This class handles:
    - Connecting to the relay and asking it to join a stream
    - Mapping relay connectivity events onto the game's connection flag
    - Parsing chat payloads and handing them to the game service
    """

    def __init__(self, relay_url: str, game_service, sio_client: Optional[socketio.Client] = None):
        self.relay_url = relay_url
        self.game_service = game_service
        self.unique_id: Optional[str] = None
        self.sio = sio_client or socketio.Client(reconnection=True, logger=False, engineio_logger=False)
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.sio.on('connect', self._handle_connect)
        self.sio.on('disconnect', self._handle_disconnect)
        self.sio.on('tiktokConnected', self._handle_stream_connected)
        self.sio.on('tiktokDisconnected', self._handle_stream_disconnected)
        self.sio.on('streamEnd', self._handle_stream_end)
        self.sio.on('chat', self._handle_chat)

    def connect(self) -> None:
        """Open the relay connection; stream selection happens in connect_stream."""
        game_logger.logger.info(f"Connecting to chat relay at {self.relay_url}")
        self.sio.connect(self.relay_url)

    def connect_stream(self, unique_id: str) -> None:
        """Ask the relay to join the live stream of the given account."""
        unique_id = (unique_id or '').strip().lstrip('@')
        if not unique_id:
            raise ValueError("Stream unique id is required")
        self.unique_id = unique_id
        if self.sio.connected:
            self._request_stream()

    def disconnect(self) -> None:
        if self.sio.connected:
            self.sio.disconnect()

    def _request_stream(self) -> None:
        game_logger.logger.info(f"Requesting chat stream for @{self.unique_id}")
        self.sio.emit('setUniqueId', (self.unique_id, {'enableExtendedGiftInfo': True}))

    def _handle_connect(self) -> None:
        game_logger.logger.info("Chat relay connected")
        if self.unique_id:
            self._request_stream()

    def _handle_disconnect(self, *args) -> None:
        game_logger.logger.warning("Chat relay disconnected")
        self.game_service.set_connected(False)

    def _handle_stream_connected(self, state: Optional[Dict] = None) -> None:
        info = state if isinstance(state, dict) else {}
        info = {'unique_id': self.unique_id, 'room_id': info.get('roomId')}
        self.game_service.set_connected(True, info)

    def _handle_stream_disconnected(self, reason=None) -> None:
        game_logger.logger.warning(f"Chat stream disconnected: {reason}")
        self.game_service.set_connected(False)

    def _handle_stream_end(self, *args) -> None:
        game_logger.logger.warning("Chat stream ended")
        self.game_service.set_connected(False)

    def _handle_chat(self, data) -> None:
        message = ChatMessage.from_payload(data)
        if message is None:
            game_logger.logger.debug(f"Dropped malformed chat payload: {data!r}")
            return
        self.game_service.on_chat_message(message)


# Global relay instance
_chat_relay = None


def get_chat_relay() -> Optional[ChatRelayClient]:
    """Get the global chat relay client."""
    return _chat_relay


def initialize_chat_relay(relay_url: str, game_service) -> ChatRelayClient:
    """Initialize the global chat relay client (does not connect)."""
    global _chat_relay
    _chat_relay = ChatRelayClient(relay_url, game_service)
    return _chat_relay
