"""
Leaderboard Service

Accumulates per-player win counts across rounds and exposes a ranked top-N view.
"""

from typing import Dict, List, Optional

from ..config.game_settings import LEADERBOARD_SIZE
from ..models.player import LeaderboardEntry, Player


class LeaderboardService:
    """
    In-memory leaderboard keyed by player id.

    Every update re-sorts the previous ranking by wins and keeps only the top
    ``size`` entries. The sort is stable, so players with equal wins keep the
    order they already had. A player cut from the board loses their tally and
    re-enters at one win.
    """

    def __init__(self, size: int = LEADERBOARD_SIZE):
        self.size = size
        self._ranking: List[LeaderboardEntry] = []
        self._by_id: Dict[str, LeaderboardEntry] = {}

    def record_win(self, player: Player) -> LeaderboardEntry:
        """
        Credit a round win to a player.

        The stored name and avatar are the ones seen at the player's first win.

        Returns:
            The updated entry
        """
        entry = self._by_id.get(player.id)
        if entry is None:
            entry = LeaderboardEntry(player=player, wins=1)
            self._by_id[player.id] = entry
            self._ranking.append(entry)
        else:
            entry.wins += 1

        self._ranking.sort(key=lambda e: e.wins, reverse=True)
        for dropped in self._ranking[self.size:]:
            del self._by_id[dropped.player.id]
        del self._ranking[self.size:]
        return entry

    def top_entries(self) -> List[LeaderboardEntry]:
        return [LeaderboardEntry(player=e.player, wins=e.wins) for e in self._ranking]

    def get_entry(self, player_id: str) -> Optional[LeaderboardEntry]:
        return self._by_id.get(player_id)

    def to_list(self) -> List[Dict]:
        return [entry.to_dict() for entry in self.top_entries()]

    def reset(self) -> None:
        self._ranking.clear()
        self._by_id.clear()
