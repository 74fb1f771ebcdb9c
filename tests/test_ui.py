import pygame

from mondrian.ui.common import is_primary_pointer_event, pointer_event_pos, wrap_text


class FixedWidthFont:
    def size(self, text):
        return (len(text) * 10, 12)


def test_primary_pointer_event_accepts_left_mouse_button():
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10))
    assert is_primary_pointer_event(event, is_down=True)


def test_primary_pointer_event_accepts_touch_emulated_mouse_button_zero():
    event = pygame.event.Event(pygame.MOUSEBUTTONUP, button=0, pos=(10, 10), touch=True)
    assert is_primary_pointer_event(event, is_down=False)


def test_primary_pointer_event_rejects_right_mouse_button():
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(10, 10))
    assert not is_primary_pointer_event(event, is_down=True)


def test_pointer_event_pos_scales_finger_events():
    event = pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.25, finger_id=0, touch_id=0)
    assert pointer_event_pos(event, pygame.Rect(0, 0, 800, 600)) == (400, 150)


def test_pointer_event_pos_uses_mouse_position():
    event = pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(12, 34))
    assert pointer_event_pos(event, pygame.Rect(0, 0, 800, 600)) == (12, 34)


def test_wrap_text_breaks_on_width_and_newlines():
    lines = wrap_text("one two three\nfour", FixedWidthFont(), 80)
    assert lines == ["one two", "three", "four"]
