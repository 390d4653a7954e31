"""
Game Service

Contains the round state machine: letter entry, row submission, win/loss
detection and the hand-off to scoring, keyboard state, streaks and hints.

Renderers never read game internals directly. They subscribe to the game and
receive a GameState snapshot after every change; player input arrives through
on_letter/on_enter/on_backspace.
"""

import string
import threading
from typing import Callable, Dict, List, Optional

from ..config.game_settings import MAX_ROWS
from ..models.game import GameState, Round, RoundPhase, SubmitOutcome, Verdict
from ..utils.game_logger import game_logger
from .hint_service import HintService
from .keyboard import update_key_states
from .scoring import score
from .streak_service import StreakService
from .word_source import WordList, WordSource

STATUS_NOT_ENOUGH_LETTERS = "Not enough letters."
STATUS_NOT_IN_WORD_LIST = "Not in word list."
STATUS_CORRECT = "Correct!"
STATUS_NO_WORDS = "No words loaded."

Listener = Callable[[str, GameState], None]


def run_in_background(task: Callable, *args) -> None:
    """Fire-and-forget dispatcher used for telemetry-like backend writes."""
    threading.Thread(target=task, args=args, daemon=True).start()


class Game:
    """
    One player's game: the active round plus the subsystems around it.

    Args:
        words: Valid words; guesses must be members
        word_source: Picks the secret for each round
        streak: Streak subsystem, already started for the player
        hints: Hint subsystem
        word_saver: Callable(user_id, word) persisting used words, or None
        max_rows: Guesses allowed per round
        dispatch: Runs fire-and-forget tasks (background thread by default)
    """

    def __init__(self,
                 words: WordList,
                 word_source: WordSource,
                 streak: StreakService,
                 hints: HintService,
                 word_saver: Optional[Callable[[str, str], None]] = None,
                 max_rows: int = MAX_ROWS,
                 dispatch: Callable = run_in_background):
        self.words = words
        self.word_source = word_source
        self.streak = streak
        self.hints = hints
        self.word_saver = word_saver
        self.max_rows = max_rows
        self.dispatch = dispatch

        self.round = Round.empty(max_rows)
        self.key_states: Dict[str, Verdict] = {}
        self.status = ""
        self.status_persist = False
        self._listeners: List[Listener] = []

        self.new_round()

    @property
    def user_id(self) -> Optional[str]:
        return self.streak.user_id

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registers a state-change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str) -> None:
        state = self.snapshot()
        for listener in list(self._listeners):
            listener(event, state)

    def _set_status(self, message: str, persist: bool = False) -> None:
        self.status = message
        self.status_persist = persist

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def new_round(self) -> Round:
        """Starts a round with a freshly drawn secret and cleared state."""
        secret = self.word_source.pick_secret(self.words)
        self.key_states = {}

        if secret is None:
            self.round = Round.empty(self.max_rows)
            self.hints.reset(self.round.round_id)
            self._set_status(STATUS_NO_WORDS, persist=True)
            game_logger.logger.error("Cannot start a round: no words loaded")
            self._notify('round_started')
            return self.round

        self.round = Round.start(secret, self.max_rows)
        self.hints.reset(self.round.round_id)
        self._set_status(f"Guess the {self.round.word_length}-letter word.")
        game_logger.log_game_event(self.round.round_id, 'round_started', self.user_id,
                                   word_length=self.round.word_length)
        self._notify('round_started')
        return self.round

    def reset(self) -> Round:
        return self.new_round()

    # ------------------------------------------------------------------
    # Grid operations
    # ------------------------------------------------------------------

    def add_letter(self, letter: str) -> bool:
        """Types one A-Z letter into the next cell; anything else is ignored."""
        round_ = self.round
        letter = (letter or "").upper()
        if len(letter) != 1 or letter not in string.ascii_uppercase:
            return False
        if round_.locked or round_.current_col >= round_.word_length:
            return False

        round_.guesses[round_.current_row][round_.current_col] = letter
        round_.current_col += 1
        self._notify('letter_added')
        return True

    def backspace(self) -> bool:
        round_ = self.round
        if round_.locked or round_.current_col <= 0:
            return False

        round_.current_col -= 1
        round_.guesses[round_.current_row][round_.current_col] = ""
        self._notify('letter_removed')
        return True

    def submit(self) -> SubmitOutcome:
        """
        Validates and scores the current row.

        Incomplete rows and unknown words only set a transient status. A
        correct guess wins even on the last row; a wrong guess on the last
        row loses and reveals the secret.
        """
        round_ = self.round
        if round_.locked:
            return SubmitOutcome.IGNORED

        if not round_.row_is_complete():
            self._set_status(STATUS_NOT_ENOUGH_LETTERS)
            self._notify('status')
            return SubmitOutcome.NOT_ENOUGH_LETTERS

        guess = round_.current_guess()
        if guess not in self.words:
            self._set_status(STATUS_NOT_IN_WORD_LIST)
            self._notify('status')
            return SubmitOutcome.NOT_IN_WORD_LIST

        round_.phase = RoundPhase.SUBMITTING
        verdicts = score(guess, round_.secret)
        round_.results[round_.current_row] = verdicts
        update_key_states(self.key_states, guess, verdicts)
        self._save_used_word(guess)

        if guess == round_.secret:
            round_.locked = True
            round_.phase = RoundPhase.WON
            self._set_status(STATUS_CORRECT, persist=True)
            self.streak.on_win()
            game_logger.log_game_event(round_.round_id, 'game_won', self.user_id,
                                       rows_used=round_.current_row + 1,
                                       current_streak=self.streak.record.current_streak)
            self._notify('round_won')
            return SubmitOutcome.WON

        if round_.current_row == round_.max_rows - 1:
            round_.locked = True
            round_.phase = RoundPhase.LOST
            self._set_status(f"Game over. Word was {round_.secret}.", persist=True)
            self.streak.on_loss()
            game_logger.log_game_event(round_.round_id, 'game_lost', self.user_id,
                                       rows_used=round_.max_rows)
            self._notify('round_lost')
            return SubmitOutcome.LOST

        round_.current_row += 1
        round_.current_col = 0
        round_.phase = RoundPhase.FILLING
        self._notify('row_scored')
        return SubmitOutcome.ACCEPTED

    def _save_used_word(self, word: str) -> None:
        if self.user_id and self.word_saver is not None:
            self.dispatch(self._save_word_task, self.user_id, word)

    def _save_word_task(self, user_id: str, word: str) -> None:
        try:
            self.word_saver(user_id, word)
        except Exception as e:
            game_logger.log_remote_failure('save_word', e, user_id=user_id)

    # ------------------------------------------------------------------
    # Hints
    # ------------------------------------------------------------------

    def request_hint(self, kind: str) -> Optional[str]:
        text = self.hints.request_hint(self.round, kind)
        if text is not None:
            self._notify('hint')
        return text

    # ------------------------------------------------------------------
    # Input port
    # ------------------------------------------------------------------

    def on_letter(self, key: str) -> bool:
        return self.add_letter(key)

    def on_enter(self) -> SubmitOutcome:
        return self.submit()

    def on_backspace(self) -> bool:
        return self.backspace()

    def handle_key(self, key: str):
        """Routes a keyboard key name: ENTER, BACK/BACKSPACE or a single letter."""
        name = (key or "").upper()
        if name == "ENTER":
            return self.on_enter()
        if name in ("BACK", "BACKSPACE"):
            return self.on_backspace()
        return self.on_letter(name)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> GameState:
        """
        Returns the current game state (without revealing the answer).

        The answer is only included once the round is over.
        """
        round_ = self.round
        return GameState(
            round_id=round_.round_id,
            phase=round_.phase.value,
            max_rows=round_.max_rows,
            word_length=round_.word_length,
            current_row=round_.current_row,
            current_col=round_.current_col,
            locked=round_.locked,
            guesses=[row.copy() for row in round_.guesses],
            results=[[v.value if v is not None else None for v in row] for row in round_.results],
            key_states={letter: verdict.value for letter, verdict in self.key_states.items()},
            status=self.status,
            status_persist=self.status_persist,
            hints_remaining=self.hints.remaining,
            current_streak=self.streak.record.current_streak,
            best_streak=self.streak.record.best_streak,
            answer=round_.secret if round_.is_over() else None
        )
