"""
Game Service

Composition root of the live-chat Wordle game. Chat messages come in, are
filtered and validated, scored against the hidden word, and round outcomes
are pushed to the leaderboard and to connected presentation clients.
"""

import re
import threading
from typing import Callable, Dict, List, Optional, Tuple

from ..config.game_settings import (
    WORD_LENGTH, RECENT_GUESS_LIMIT, PENDING_GUESS_LIMIT, DEFINITION_FALLBACK, RoundTimings
)
from ..models.game import ChatMessage, RoundOutcome, RoundState, RoundSummary
from ..models.player import Player
from ..utils.game_logger import game_logger
from ..utils.helpers import format_time
from .leaderboard_service import LeaderboardService
from .lexicon_service import LexiconError, LexiconService
from .round_session import RoundSession
from .scoring import build_guess

ALPHA_PATTERN = re.compile(r'[A-Za-z]+')

LOADING_MESSAGE = "Creating a new word..."
LOAD_FAILED_MESSAGE = "Word generation failed. Retrying shortly..."
WIN_TITLE = "🎉 WINNER! 🎉"
TIMEOUT_TITLE = "TIME'S UP!"


class GameService:
    """
    Core game engine for a single, continuously restarting round.

    This class handles:
    - Filtering chat messages into candidate guesses
    - Validating guesses with the lexicon and scoring them
    - Driving the round lifecycle (loading, active, ended, restarting)
    - Reporting wins to the leaderboard
    - Publishing read-only snapshots for presentation clients

    Every mutation happens under one re-entrant lock, whether it comes from a
    chat message, a host request or a timer.
    """

    def __init__(self,
                 lexicon: LexiconService,
                 scheduler,
                 publish: Optional[Callable[[str, Dict], None]] = None,
                 leaderboard: Optional[LeaderboardService] = None,
                 timings: Optional[RoundTimings] = None,
                 word_length: int = WORD_LENGTH):
        self.lexicon = lexicon
        self.scheduler = scheduler
        self.publish = publish
        self.leaderboard = leaderboard or LeaderboardService()
        self.timings = timings or RoundTimings()
        self.word_length = word_length

        self.is_connected = False
        self.connection_info: Optional[Dict] = None

        self._lock = threading.RLock()
        self._round_counter = 0
        self._session = self._new_session()
        self._last_message: Optional[ChatMessage] = None
        self._notice: Optional[Dict] = None
        self._notice_handle = None

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    @property
    def session(self) -> RoundSession:
        return self._session

    def _new_session(self) -> RoundSession:
        return RoundSession(self._round_counter, self.scheduler, self._lock,
                            recent_limit=RECENT_GUESS_LIMIT, pending_limit=PENDING_GUESS_LIMIT)

    def start_round(self) -> RoundSession:
        """
        Tear down the current round and load a new one.

        A lexicon failure leaves the new round in LOADING and schedules a retry.

        Returns:
            The new RoundSession
        """
        with self._lock:
            self._session.teardown()
            self._round_counter += 1
            session = self._new_session()
            self._session = session
            session.game_message = LOADING_MESSAGE
            self._emit_state()

            try:
                target_word = self._normalize_target(self.lexicon.get_random_word(self.word_length))
            except Exception as e:
                session.load_failed = True
                session.game_message = LOAD_FAILED_MESSAGE
                game_logger.log_error(e, 'word_generation', round_id=session.round_id)
                game_logger.log_game_event(session.round_id, 'word_generation_failed',
                                           retry_in=self.timings.auto_restart_delay)
                session.schedule('retry', self.timings.auto_restart_delay, self.start_round)
                self._emit_state()
                return session

            session.activate(target_word, self.timings.round_duration)
            session.schedule_repeating('countdown', self.timings.tick_interval,
                                       lambda: self._on_tick(session))
            game_logger.log_game_event(session.round_id, 'round_started',
                                       duration=self.timings.round_duration,
                                       word_length=self.word_length)
            self._emit_state()
            return session

    def request_restart(self, reason: str = 'manual') -> RoundSession:
        """Host-requested new game. Allowed from any state."""
        with self._lock:
            previous = self._session
            previous_state = previous.state
            previous.begin_restart()
            game_logger.log_game_event(previous.round_id, 'round_restarted', reason=reason,
                                       previous_state=previous_state.value)
            self._emit_state()
            return self.start_round()

    def _normalize_target(self, word) -> str:
        if not isinstance(word, str):
            raise LexiconError(f"Lexicon returned a non-string word: {word!r}")
        word = word.strip().upper()
        if len(word) != self.word_length or not ALPHA_PATTERN.fullmatch(word):
            raise LexiconError(f"Lexicon returned an unusable word: {word!r}")
        return word

    def _on_tick(self, session: RoundSession) -> None:
        if session is not self._session:
            return
        reached_zero = session.tick()
        self._publish('timer_tick', {
            'round_id': session.round_id,
            'remaining_seconds': session.remaining_seconds,
            'time_display': format_time(session.remaining_seconds)
        })
        if reached_zero:
            self._end_round(session, RoundOutcome.TIMEOUT)

    def _end_round(self, session: RoundSession, outcome: RoundOutcome,
                   winner: Optional[Player] = None) -> bool:
        """
        End the round once. A second trigger for the same round is a no-op.

        Returns:
            True if this call ended the round
        """
        if not session.claim_end():
            return False

        session.finish(outcome, winner)
        if outcome is RoundOutcome.WIN:
            session.game_message = f"SUCCESS! {winner.display_name} guessed the correct word!"
            self.leaderboard.record_win(winner)
            game_logger.log_game_event(session.round_id, 'round_won', word=session.target_word,
                                       winner_id=winner.id, winner_name=winner.display_name,
                                       total_guesses=len(session.tracker.history))
            self._publish('leaderboard_update', {'leaderboard': self.leaderboard.to_list()})
        else:
            session.game_message = f"TIME'S UP! The correct word was {session.target_word}"
            game_logger.log_game_event(session.round_id, 'round_timeout', word=session.target_word,
                                       total_guesses=len(session.tracker.history))

        self._emit_state()
        session.schedule('summary', self.timings.summary_delay, lambda: self._show_summary(session))
        return True

    def _show_summary(self, session: RoundSession) -> None:
        definitions, examples = self._lookup_definition(session.target_word, session.round_id)
        won = session.outcome is RoundOutcome.WIN
        session.summary = RoundSummary(
            round_id=session.round_id,
            title=WIN_TITLE if won else TIMEOUT_TITLE,
            word=session.target_word,
            definitions=definitions,
            examples=examples,
            winner=session.winner if won else None
        )
        game_logger.log_game_event(session.round_id, 'summary_shown', outcome=session.outcome.value)
        self._publish('round_summary', session.summary.to_dict())
        session.schedule('auto_restart', self.timings.auto_restart_delay,
                         lambda: self._auto_restart(session))

    def _auto_restart(self, session: RoundSession) -> None:
        session.begin_restart()
        game_logger.log_game_event(session.round_id, 'round_restarted', reason='automatic')
        self._emit_state()
        session.schedule('transition', self.timings.restart_transition, self.start_round)

    def _lookup_definition(self, word: str, round_id: int) -> Tuple[List[str], List[str]]:
        try:
            entry = self.lexicon.get_definition(word)
        except Exception as e:
            game_logger.log_error(e, 'definition_lookup', round_id=round_id)
            entry = None

        if entry is None or not entry.meanings:
            return [DEFINITION_FALLBACK], []
        return list(entry.meanings), list(entry.examples)

    # ------------------------------------------------------------------
    # Chat source input
    # ------------------------------------------------------------------

    def set_connected(self, connected: bool, info: Optional[Dict] = None) -> None:
        with self._lock:
            self.is_connected = connected
            self.connection_info = info if connected else None
            game_logger.log_game_event(self._session.round_id,
                                       'chat_connected' if connected else 'chat_disconnected',
                                       info=info)
            self._publish('connection_state', {'is_connected': connected, 'info': self.connection_info})

    def on_chat_message(self, message: Optional[ChatMessage]) -> bool:
        """
        Process one chat message.

        Malformed messages (None) and re-deliveries of the last processed
        message are dropped.

        Returns:
            True if the message was accepted as a scored guess
        """
        with self._lock:
            if message is None:
                return False
            if self._is_redelivery(message):
                return False
            self._last_message = message
            return self._handle_guess(message)

    def _is_redelivery(self, message: ChatMessage) -> bool:
        # Same event object, or a repeated relay message id
        last = self._last_message
        if last is None:
            return False
        if message is last:
            return True
        return message.message_id is not None and message.message_id == last.message_id

    def _handle_guess(self, message: ChatMessage) -> bool:
        session = self._session
        if not self.is_connected or not session.is_active:
            return False

        text = message.text.strip()
        if len(text) != self.word_length or not ALPHA_PATTERN.fullmatch(text):
            return False

        if session.accepting:
            session.pending.append(message)
            game_logger.log_chat_message(message, 'guess_queued', round_id=session.round_id)
            return False

        return self._process_guess(session, message, text.upper())

    def _process_guess(self, session: RoundSession, message: ChatMessage, guess: str) -> bool:
        try:
            is_valid = self.lexicon.is_valid_word(guess)
        except Exception as e:
            game_logger.log_error(e, 'word_validation', round_id=session.round_id)
            return False

        if not is_valid:
            self._show_notice(guess, message.author)
            game_logger.log_chat_message(message, 'guess_rejected', round_id=session.round_id,
                                         reason='not_in_lexicon')
            return False

        if guess in session.accepted_words:
            game_logger.log_chat_message(message, 'guess_duplicate', round_id=session.round_id)
            return False

        session.accepted_words.add(guess)
        record = build_guess(guess, message.author, session.target_word)
        session.tracker.record(record)
        session.accepting = True
        game_logger.log_chat_message(message, 'guess_accepted', round_id=session.round_id,
                                     guess=guess, score=record.score)

        if guess == session.target_word:
            self._end_round(session, RoundOutcome.WIN, message.author)
        else:
            session.schedule('cooldown', self.timings.guess_cooldown,
                             lambda: self._release_guard(session))
            self._emit_state()
        return True

    def _release_guard(self, session: RoundSession) -> None:
        session.accepting = False
        while session.pending and not session.accepting and session.is_active:
            self._handle_guess(session.pending.popleft())

    def _show_notice(self, word: str, author: Player) -> None:
        if self._notice_handle is not None:
            self._notice_handle.cancel()

        self._notice = {
            'show': True,
            'word': word,
            'author': author.to_dict(),
            'message': f"{word} is not a valid word! From: {author.display_name}"
        }
        self._publish('validation_notice', self._notice)

        slot = {}

        def _expire():
            with self._lock:
                handle = slot.get('handle')
                if handle is None or handle.cancelled or handle is not self._notice_handle:
                    return
                self._notice = None
                self._notice_handle = None
                self._publish('validation_notice', {'show': False, 'word': None, 'author': None, 'message': ''})

        handle = self.scheduler.call_later(self.timings.notice_duration, _expire, name='notice')
        slot['handle'] = handle
        self._notice_handle = handle

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------

    def get_round_state(self) -> Dict:
        with self._lock:
            session = self._session
            tracker = session.tracker
            return {
                'round_id': session.round_id,
                'state': session.state.value,
                'remaining_seconds': session.remaining_seconds,
                'time_display': format_time(session.remaining_seconds),
                'best_guess': tracker.best_guess.to_dict() if tracker.best_guess else None,
                'recent_guesses': [guess.to_dict() for guess in tracker.recent_guesses],
                'total_guesses': len(tracker.history),
                'game_message': session.game_message,
                'is_connected': self.is_connected,
                'outcome': session.outcome.value if session.outcome else None,
                'revealed_word': session.target_word if session.outcome else None,
                'notice': dict(self._notice) if self._notice else None
            }

    def get_summary(self) -> Optional[Dict]:
        with self._lock:
            summary = self._session.summary
            return summary.to_dict() if summary else None

    def get_leaderboard(self) -> List[Dict]:
        with self._lock:
            return self.leaderboard.to_list()

    @property
    def state(self) -> RoundState:
        return self._session.state

    def shutdown(self) -> None:
        """Cancel every pending timer; used when the server stops."""
        with self._lock:
            self._session.teardown()
            if self._notice_handle is not None:
                self._notice_handle.cancel()
                self._notice_handle = None

    def _emit_state(self) -> None:
        self._publish('round_state', self.get_round_state())

    def _publish(self, event: str, payload: Dict) -> None:
        if self.publish is None:
            return
        try:
            self.publish(event, payload)
        except Exception as e:
            game_logger.log_error(e, f'publish_{event}', round_id=self._session.round_id)


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(lexicon: LexiconService,
                            scheduler,
                            publish: Optional[Callable[[str, Dict], None]] = None,
                            leaderboard: Optional[LeaderboardService] = None,
                            timings: Optional[RoundTimings] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    if _game_service is not None:
        _game_service.shutdown()
    _game_service = GameService(lexicon, scheduler, publish=publish,
                                leaderboard=leaderboard, timings=timings)
    return _game_service
