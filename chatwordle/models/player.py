"""
Player Data Models

Contains chat-participant data structures. Players are supplied by the chat
source with every message; the game only keeps copies.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Player:
    """Snapshot of a chat participant."""
    id: str
    display_name: str
    avatar: str = ""

    @classmethod
    def from_payload(cls, data) -> Optional["Player"]:
        """
        Build a player from either the normalized author shape
        (``id``/``displayName``/``avatarRef``) or the relay's chat shape
        (``uniqueId``/``nickname``/``profilePictureUrl``).

        Returns:
            Player or None when no usable identity is present
        """
        if not isinstance(data, dict):
            return None

        player_id = data.get('id', data.get('uniqueId'))
        if isinstance(player_id, int) and not isinstance(player_id, bool):
            player_id = str(player_id)
        if not isinstance(player_id, str) or not player_id.strip():
            return None

        display_name = data.get('displayName', data.get('nickname'))
        if not isinstance(display_name, str) or not display_name.strip():
            display_name = player_id

        avatar = data.get('avatarRef', data.get('profilePictureUrl'))
        if not isinstance(avatar, str):
            avatar = ""

        return cls(id=player_id, display_name=display_name, avatar=avatar)

    def to_dict(self) -> Dict[str, str]:
        return {
            'id': self.id,
            'display_name': self.display_name,
            'avatar': self.avatar
        }


@dataclass
class LeaderboardEntry:
    """Win tally for one player. The player snapshot is taken at the first win."""
    player: Player
    wins: int = 1

    def to_dict(self) -> Dict:
        return {
            'player': self.player.to_dict(),
            'wins': self.wins
        }
