import pytest

from promptle.models.game import RoundPhase, SubmitOutcome, Verdict
from promptle.services.game_service import (
    STATUS_CORRECT, STATUS_NO_WORDS, STATUS_NOT_ENOUGH_LETTERS, STATUS_NOT_IN_WORD_LIST
)
from promptle.services.local_store import LocalStateStore

from conftest import type_word


def test_new_game_starts_blank(make_game):
    game = make_game("CRANE")
    round_ = game.round

    assert round_.word_length == 5
    assert (round_.current_row, round_.current_col) == (0, 0)
    assert not round_.locked
    assert round_.phase == RoundPhase.FILLING
    assert round_.guesses == [[""] * 5 for _ in range(6)]
    assert round_.results == [[None] * 5 for _ in range(6)]
    assert game.status == "Guess the 5-letter word."
    assert game.hints.remaining == 3


def test_word_length_follows_secret(make_game):
    game = make_game("STRONG", words=["STRONG", "STRING"])
    assert game.round.word_length == 6
    assert game.snapshot().status == "Guess the 6-letter word."


def test_add_letter_and_backspace(make_game):
    game = make_game()

    type_word(game, "cr")
    assert game.round.guesses[0][:2] == ["C", "R"]
    assert game.round.current_col == 2

    assert game.backspace()
    assert game.round.guesses[0][1] == ""
    assert game.round.current_col == 1


def test_add_letter_stops_at_word_length(make_game):
    game = make_game()
    type_word(game, "CRANE")
    assert not game.add_letter("S")
    assert game.round.current_col == 5
    assert game.round.current_guess() == "CRANE"


@pytest.mark.parametrize("value", ["AB", "1", "-", "", None, "É"])
def test_add_letter_rejects_anything_but_one_letter(make_game, value):
    game = make_game()
    assert not game.add_letter(value)
    assert game.round.current_col == 0
    assert game.round.guesses[0] == [""] * 5


def test_backspace_at_start_of_row_is_noop(make_game):
    game = make_game()
    assert not game.backspace()
    assert game.round.current_col == 0


def test_incomplete_row_is_rejected_without_state_change(make_game):
    game = make_game()
    type_word(game, "CRA")

    assert game.submit() == SubmitOutcome.NOT_ENOUGH_LETTERS
    assert (game.round.current_row, game.round.current_col) == (0, 3)
    assert game.round.results[0] == [None] * 5
    assert game.status == STATUS_NOT_ENOUGH_LETTERS
    assert not game.status_persist


def test_unknown_word_leaves_grid_unchanged(make_game):
    game = make_game()
    type_word(game, "XYZZY")
    before = game.snapshot()

    assert game.submit() == SubmitOutcome.NOT_IN_WORD_LIST

    after = game.snapshot()
    assert after.guesses == before.guesses
    assert after.results == before.results
    assert (after.current_row, after.current_col) == (0, 5)
    assert after.key_states == {}
    assert game.status == STATUS_NOT_IN_WORD_LIST


def test_accepted_guess_scores_row_and_advances(make_game):
    game = make_game("CRANE")
    type_word(game, "CRATE")

    assert game.submit() == SubmitOutcome.ACCEPTED

    assert game.round.results[0] == [
        Verdict.CORRECT, Verdict.CORRECT, Verdict.CORRECT, Verdict.ABSENT, Verdict.CORRECT
    ]
    assert (game.round.current_row, game.round.current_col) == (1, 0)
    assert game.round.phase == RoundPhase.FILLING
    assert game.key_states["T"] == Verdict.ABSENT
    assert game.round.results[1] == [None] * 5


def test_lowercase_guess_matches_list(make_game):
    game = make_game("CRANE", words=["crane", "crate"])
    type_word(game, "crate")
    assert game.submit() == SubmitOutcome.ACCEPTED


def test_win_locks_round_and_counts_streak(make_game):
    game = make_game("CRANE")
    type_word(game, "CRANE")

    assert game.submit() == SubmitOutcome.WON

    state = game.snapshot()
    assert state.locked
    assert state.phase == "won"
    assert state.status == STATUS_CORRECT
    assert state.status_persist
    assert state.answer == "CRANE"
    assert state.current_streak == 1
    assert state.best_streak == 1


def test_locked_round_ignores_input(make_game):
    game = make_game("CRANE")
    type_word(game, "CRANE")
    game.submit()

    assert not game.on_letter("A")
    assert not game.on_backspace()
    assert game.on_enter() == SubmitOutcome.IGNORED
    assert game.round.current_col == 5


def test_win_on_last_row_is_still_a_win(make_game):
    game = make_game("CRANE", max_rows=2)
    type_word(game, "CRATE")
    assert game.submit() == SubmitOutcome.ACCEPTED

    type_word(game, "CRANE")
    assert game.submit() == SubmitOutcome.WON
    assert game.round.phase == RoundPhase.WON
    assert game.streak.record.current_streak == 1


def test_loss_locks_reveals_secret_and_resets_streak(make_game):
    store = LocalStateStore()
    store.save_current_streak(None, 3)
    game = make_game("CRANE", max_rows=2, store=store)
    assert game.streak.record.current_streak == 3

    for guess in ("CRATE", "TRACE"):
        type_word(game, guess)
        outcome = game.submit()

    assert outcome == SubmitOutcome.LOST
    state = game.snapshot()
    assert state.locked
    assert state.phase == "lost"
    assert "CRANE" in state.status
    assert state.status == "Game over. Word was CRANE."
    assert state.answer == "CRANE"
    assert state.current_streak == 0
    assert state.best_streak == 3
    assert store.load_current_streak(None) == 0


def test_answer_hidden_while_playing(make_game):
    game = make_game("CRANE")
    type_word(game, "CRATE")
    game.submit()
    assert game.snapshot().answer is None


def test_reset_clears_everything_and_draws_new_secret(make_game):
    game = make_game("CRANE", "SPEED")
    first_round_id = game.round.round_id
    type_word(game, "CRATE")
    game.submit()
    game.request_hint("meaning")
    type_word(game, "CRANE")
    game.submit()
    assert game.round.locked

    game.reset()

    state = game.snapshot()
    assert game.round.secret == "SPEED"
    assert state.round_id != first_round_id
    assert not state.locked
    assert state.phase == "filling"
    assert (state.current_row, state.current_col) == (0, 0)
    assert state.guesses == [[""] * 5 for _ in range(6)]
    assert state.results == [[None] * 5 for _ in range(6)]
    assert state.key_states == {}
    assert state.hints_remaining == 3


def test_reset_can_repeat_the_secret(make_game):
    game = make_game("CRANE")
    game.reset()
    assert game.round.secret == "CRANE"


def test_empty_word_list_locks_round(make_game):
    game = make_game("CRANE", words=[])

    assert game.round.locked
    assert game.status == STATUS_NO_WORDS
    assert game.status_persist
    assert not game.on_letter("A")
    assert game.submit() == SubmitOutcome.IGNORED
    assert game.request_hint("letters") is None


def test_used_words_saved_for_known_identity(make_game, backend):
    game = make_game("CRANE", backend=backend, user_id="player-1")
    type_word(game, "CRATE")
    game.submit()
    type_word(game, "XYZZY")
    game.submit()

    assert backend.saved_words == [("player-1", "CRATE")]


def test_used_word_save_failure_does_not_affect_round(make_game, backend):
    backend.fail_save = True
    game = make_game("CRANE", backend=backend, user_id="player-1")
    type_word(game, "CRATE")

    assert game.submit() == SubmitOutcome.ACCEPTED
    assert game.round.current_row == 1
    assert backend.count('save_word') == 1


def test_anonymous_play_saves_nothing(make_game, backend):
    game = make_game("CRANE", backend=backend)
    type_word(game, "CRANE")
    game.submit()
    assert backend.calls == []


def test_listeners_receive_snapshots(make_game):
    game = make_game("CRANE")
    events = []
    unsubscribe = game.subscribe(lambda event, state: events.append((event, state)))

    game.on_letter("C")
    game.on_backspace()
    game.on_enter()

    assert [event for event, _ in events] == ['letter_added', 'letter_removed', 'status']
    assert events[0][1].guesses[0][0] == "C"

    unsubscribe()
    game.on_letter("C")
    assert len(events) == 3


def test_terminal_events_are_notified(make_game):
    game = make_game("CRANE", "SPEED")
    events = []
    game.subscribe(lambda event, state: events.append(event))

    type_word(game, "CRANE")
    game.submit()
    game.reset()

    assert 'round_won' in events
    assert events[-1] == 'round_started'


@pytest.mark.parametrize("key,expected_col", [
    ("a", 1),
    ("Z", 1),
    ("1", 0),
    ("AB", 0),
    ("", 0),
    ("ENTER", 0),
    ("BACK", 0),
])
def test_handle_key_routing(make_game, key, expected_col):
    game = make_game()
    game.handle_key(key)
    assert game.round.current_col == expected_col


def test_handle_key_enter_submits(make_game):
    game = make_game("CRANE")
    for key in "CRANE":
        game.handle_key(key)
    assert game.handle_key("enter") == SubmitOutcome.WON


def test_hint_does_not_touch_grid(make_game):
    game = make_game("CRANE")
    type_word(game, "CR")
    before = game.snapshot()

    assert game.request_hint("letters")

    after = game.snapshot()
    assert after.guesses == before.guesses
    assert after.results == before.results
    assert after.current_col == before.current_col
    assert after.hints_remaining == 2
