"""Tests for the game controller — phases, timing, click order."""

import pytest

from scramble.game import Phase


def test_scenario_three_buttons_in_order(make_game, clock):
    """n=3: display 3s, three scrambles with 2s pauses, then a clean win."""
    game = make_game()
    token = game.init_game("3")

    assert token is not None
    assert [b.id for b in game.buttons] == [0, 1, 2]
    assert game.original_order == [0, 1, 2]
    assert clock.sleeps == [3, 2.0, 2.0, 2.0]
    assert game.phase is Phase.RECALL
    assert game.messenger.text == "Guess the correct order of the buttons"
    assert all(not b.number_visible for b in game.buttons)

    assert game.check_click(0) is Phase.RECALL
    assert game.buttons[0].label == "1"
    assert game.check_click(1) is Phase.RECALL
    assert game.buttons[1].label == "2"
    assert game.check_click(2) is Phase.WON
    assert game.buttons[2].label == "3"
    assert game.clicked_order == game.original_order
    assert game.messenger.text == "Excellent Memory!"


def test_scenario_wrong_first_click_loses(make_game):
    game = make_game()
    game.init_game("3")

    assert game.check_click(1) is Phase.LOST
    assert game.messenger.text == "Wrong Order!"
    assert all(b.number_visible for b in game.buttons)
    assert game.clicked_order == []

    # Nothing registers after a loss
    assert game.check_click(0) is None
    assert game.clicked_order == []
    assert game.phase is Phase.LOST


def test_mismatch_midway_stops_recording(make_game):
    game = make_game()
    game.init_game(5)

    game.check_click(0)
    game.check_click(1)
    assert game.check_click(3) is Phase.LOST
    assert game.clicked_order == [0, 1]
    for button_id in range(5):
        assert game.check_click(button_id) is None
    assert game.clicked_order == [0, 1]


def test_repeated_correct_button_counts_as_wrong(make_game):
    game = make_game()
    game.init_game("4")

    game.check_click(0)
    assert game.check_click(0) is Phase.LOST


def test_no_clicks_after_win(make_game):
    game = make_game()
    game.init_game("3")
    for button_id in game.original_order:
        game.check_click(button_id)

    assert game.phase is Phase.WON
    assert game.check_click(0) is None
    assert game.clicked_order == [0, 1, 2]


@pytest.mark.parametrize("n", [3, 4, 5, 6, 7])
def test_scramble_runs_n_times_with_pauses(make_game, clock, n):
    game = make_game()
    game.init_game(str(n))

    assert clock.sleeps == [n] + [2.0] * n
    assert len(game.buttons) == n
    assert len({b.color for b in game.buttons}) == n


def test_scramble_moves_buttons_inside_viewport(make_game, viewport, config):
    positions = []
    game = make_game(on_change=lambda g: positions.append([(b.x, b.y) for b in g.buttons]))
    game.init_game("4")

    margin = config.style.edge_margin
    for b in game.buttons:
        assert margin <= b.x <= viewport.width - b.width - margin
        assert margin <= b.y <= viewport.height - b.height - margin
    # setup, hide numbers, four scrambles, recall
    assert len(positions) == 7
    assert positions[2] != positions[1]


def test_clicks_ignored_before_recall(make_game):
    pending = []
    game = make_game(runner=pending.append)
    game.init_game("3")

    assert game.phase is Phase.SETUP
    assert game.check_click(0) is None
    assert game.clicked_order == []


@pytest.mark.parametrize(
    "raw, message",
    [
        ("abc", "Please ensure you enter a number from 3 to 7!"),
        (None, "Please ensure you enter a number from 3 to 7!"),
        ("", "Please ensure you enter a number from 3 to 7!"),
        ("10", "Number is not in range, please enter a number from 3 to 7!"),
        (2, "Number is not in range, please enter a number from 3 to 7!"),
    ],
)
def test_invalid_input_starts_nothing(make_game, clock, raw, message):
    game = make_game()
    assert game.init_game(raw) is None

    assert game.messenger.text == message
    assert game.buttons == []
    assert game.phase is Phase.IDLE
    assert clock.sleeps == []


def test_restart_gives_clean_round(make_game):
    game = make_game()
    game.init_game("7")
    game.check_click(0)
    game.check_click(1)

    game.init_game("3")

    assert len(game.buttons) == 3
    assert game.original_order == [0, 1, 2]
    assert game.clicked_order == []
    assert game.phase is Phase.RECALL


def test_invalid_input_clears_previous_round(make_game):
    game = make_game()
    game.init_game("5")

    assert game.init_game("abc") is None
    assert game.buttons == []
    assert game.original_order == []
    assert game.phase is Phase.IDLE


def test_restart_during_scramble_cancels_old_round(make_game, clock):
    game = make_game()
    tokens = []

    def restart_once(index):
        # second pause is the first scramble pause of the 5-button round
        if index == 1:
            clock.on_sleep = None
            tokens.append(game.init_game("3"))

    clock.on_sleep = restart_once
    first = game.init_game("5")

    assert first.cancelled
    assert not tokens[0].cancelled
    # 5s display and one scramble pause from the old round, then the new round
    assert clock.sleeps == [5, 2.0, 3, 2.0, 2.0, 2.0]
    assert len(game.buttons) == 3
    assert game.phase is Phase.RECALL
    assert game.clicked_order == []


def test_pending_round_is_noop_after_reset(make_game, clock):
    pending = []
    game = make_game(runner=pending.append)
    game.init_game("4")
    game.init_game("3")

    # Run the stale round last: it must not touch the new one
    pending[1]()
    pending[0]()

    assert clock.sleeps == [3, 2.0, 2.0, 2.0]
    assert len(game.buttons) == 3
    assert game.phase is Phase.RECALL


def test_click_at_hits_topmost_button(make_game):
    game = make_game()
    game.init_game("3")
    for b in game.buttons:
        b.set_location(20, 20)

    # Button 2 was drawn last, so it is on top
    assert game.click_at(30, 30) is Phase.LOST


def test_click_in_empty_area_is_ignored(make_game):
    game = make_game()
    game.init_game("3")
    for b in game.buttons:
        b.set_location(500, 200)

    assert game.click_in((0, 0, 96, 96)) is None
    assert game.phase is Phase.RECALL


def test_click_in_picks_largest_overlap(make_game):
    game = make_game()
    game.init_game("3")
    game.buttons[0].set_location(0, 0)
    game.buttons[1].set_location(80, 80)
    game.buttons[2].set_location(600, 300)

    assert game.click_in((0, 0, 96, 96)) is Phase.RECALL
    assert game.clicked_order == [0]
