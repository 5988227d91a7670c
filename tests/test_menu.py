from knightrun.config import SCREEN_HEIGHT, SCREEN_WIDTH
from knightrun.menu import (
    BUTTON_HEIGHT,
    BUTTON_WIDTH,
    ESCAPE,
    EventKind,
    InputEvent,
    Menu,
)


def _inside(button):
    return (button[0] + BUTTON_WIDTH // 2, button[1] + BUTTON_HEIGHT // 2)


def _click(pos, button=1):
    return InputEvent(EventKind.MOUSE_DOWN, pos=pos, button=button)


def test_buttons_are_centred():
    menu = Menu()
    assert menu.button1[0] == SCREEN_WIDTH // 2 - BUTTON_WIDTH // 2
    assert menu.button1[1] == SCREEN_HEIGHT // 2
    assert menu.button2[1] > menu.button1[1] + BUTTON_HEIGHT


def test_hover_edges():
    menu = Menu()
    x, y = menu.button1
    assert menu.hover(menu.button1, (x, y)) is True
    assert menu.hover(menu.button1, (x + BUTTON_WIDTH, y + BUTTON_HEIGHT)) is True
    assert menu.hover(menu.button1, (x - 1, y)) is False
    assert menu.hover(menu.button1, (x, y + BUTTON_HEIGHT + 1)) is False


def test_clicking_play_leaves_menu():
    menu = Menu()
    assert menu.handle(_click(_inside(menu.button1)), player_dead=False) is False
    assert menu.in_menu is False
    assert menu.main_menu_clips() == []


def test_clicking_exit_requests_quit():
    menu = Menu()
    assert menu.handle(_click(_inside(menu.button2)), player_dead=False) is True
    assert menu.in_menu is True


def test_right_click_is_ignored():
    menu = Menu()
    assert menu.handle(_click(_inside(menu.button2), button=3), player_dead=False) is False
    assert menu.in_menu is True


def test_retry_after_death_requests_reset():
    menu = Menu()
    menu.in_menu = False
    menu.handle(_click(_inside(menu.button1)), player_dead=True)
    assert menu.needs_reset is True
    assert menu.handle(_click(_inside(menu.button2)), player_dead=True) is True


def test_click_while_alive_outside_menu_does_nothing():
    menu = Menu()
    menu.in_menu = False
    assert menu.handle(_click(_inside(menu.button2)), player_dead=False) is False
    assert menu.needs_reset is False


def test_hover_highlights_play_button():
    menu = Menu()
    menu.handle(InputEvent(EventKind.MOUSE_MOTION, pos=_inside(menu.button1)), False)
    clips = menu.main_menu_clips()
    assert clips[0] == (menu.button1, menu.play_clips[1])
    assert clips[1] == (menu.button2, menu.exit_clips[0])
    assert menu.play_clips[1].x == BUTTON_WIDTH


def test_pressed_button_is_not_highlighted_until_release():
    menu = Menu()
    menu.in_menu = False
    pos = _inside(menu.button1)
    menu.handle(_click(pos), player_dead=True)
    menu.handle(InputEvent(EventKind.MOUSE_MOTION, pos=pos), True)
    assert menu.selected[2] is False
    menu.handle(InputEvent(EventKind.MOUSE_UP, pos=pos), True)
    menu.handle(InputEvent(EventKind.MOUSE_MOTION, pos=pos), True)
    assert menu.selected[2] is True
    assert menu.retry_menu_clips()[0] == (menu.button1, menu.retry_clips[1])


def test_retry_clips_use_third_row():
    menu = Menu()
    clips = menu.retry_menu_clips()
    assert clips[0][1].y == 2 * BUTTON_HEIGHT
    assert clips[1][1].y == BUTTON_HEIGHT


def test_escape_toggles_pause_ignoring_repeats():
    menu = Menu()
    menu.handle(InputEvent(EventKind.KEY_DOWN, key=ESCAPE), False)
    assert menu.paused is True
    menu.handle(InputEvent(EventKind.KEY_DOWN, key=ESCAPE, repeat=True), False)
    assert menu.paused is True
    menu.handle(InputEvent(EventKind.KEY_DOWN, key=ESCAPE), False)
    assert menu.paused is False
    menu.handle(InputEvent(EventKind.KEY_DOWN, key="space"), False)
    assert menu.paused is False