import pytest

from blockworld.input import InputContext, KeyAction, MouseButton


def test_cursor_starts_at_screen_centre():
    context = InputContext(screen_width_px=800, screen_height_px=600)
    assert context.last_x == 400.0
    assert context.last_y == 300.0
    assert context.cached_x_offset == 0.0
    assert context.cached_y_offset == 0.0


def test_cursor_offsets_accumulate():
    context = InputContext(screen_width_px=100, screen_height_px=100)
    context.on_cursor_pos(60.0, 40.0)
    context.on_cursor_pos(70.0, 45.0)
    assert context.cached_x_offset == pytest.approx(20.0)
    assert context.cached_y_offset == pytest.approx(-5.0)
    assert (context.last_x, context.last_y) == (70.0, 45.0)


@pytest.mark.parametrize("button", list(MouseButton))
def test_mouse_press_and_release(button):
    context = InputContext()
    name = button.name.lower()
    context.on_mouse_button(button, KeyAction.PRESS)
    assert getattr(context, f"{name}_click_press") is True
    assert getattr(context, f"{name}_click_release") is False
    context.on_mouse_button(button, KeyAction.RELEASE)
    assert getattr(context, f"{name}_click_release") is True


def test_press_of_one_button_leaves_others():
    context = InputContext()
    context.on_mouse_button(MouseButton.LEFT, KeyAction.PRESS)
    assert context.left_click_press is True
    assert context.right_click_press is False
    assert context.middle_click_press is False


def test_unknown_mouse_button_is_ignored():
    context = InputContext()
    context.on_mouse_button(7, KeyAction.PRESS)
    assert context.left_click_press is False
    assert context.right_click_press is False
    assert context.middle_click_press is False


def test_key_press_release_and_repeat():
    context = InputContext()
    context.on_key(87, KeyAction.PRESS)
    assert context.key_cache == {87: True}
    context.on_key(87, KeyAction.REPEAT)
    assert context.key_cache == {87: True}
    context.on_key(87, KeyAction.RELEASE)
    assert context.key_cache == {87: False}


def test_repeat_alone_records_nothing():
    context = InputContext()
    context.on_key(32, KeyAction.REPEAT)
    assert context.key_cache == {}


def test_scroll_accumulates_vertical_only():
    context = InputContext()
    context.on_scroll(5.0, 1.5)
    context.on_scroll(-3.0, 2.0)
    assert context.scroll_amount == pytest.approx(3.5)


def test_framebuffer_size_updates_screen():
    context = InputContext()
    context.on_framebuffer_size(320, 200)
    assert (context.screen_width_px, context.screen_height_px) == (320, 200)


def test_cursor_enter_sets_reset_flag_only_when_entering():
    context = InputContext()
    context.on_cursor_enter(False)
    assert context.reset_flag is False
    context.on_cursor_enter(True)
    assert context.reset_flag is True