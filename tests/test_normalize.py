import pytest

from keycapture.rawinput.inputtypes import PointerButton
from keycapture.rawinput.normalize import canonical_token, hotkey_button, is_modifier, normalize_button, normalize_key


@pytest.mark.parametrize(
    "raw,expected",
    (
        ("Meta", "win"),
        ("Control", "ctrl"),
        ("Alt", "alt"),
        ("Shift", "shift"),
        (" ", "space"),
        ("Enter", "enter"),
        ("Escape", "escape"),
        ("PageDown", "pagedown"),
        ("ArrowLeft", "arrowleft"),
        ("a", "a"),
        ("A", "a"),
        ("!", "!"),
        ("7", "7"),
        ("F5", "f5"),
        ("F12", "f12"),
        ("Digit7", "7"),
        ("KeyA", "a"),
        ("KeyZ", "z"),
        ("+", "plus"),
    ),
)
def test_normalize_key(raw: str, expected: str):
    assert normalize_key(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    (
        ("CapsLock", "capslock"),
        ("AudioVolumeUp", "audiovolumeup"),
        ("F123", "f123"),
        ("Fn", "fn"),
        ("KeyAB", "keyab"),
        ("Digit", "digit"),
        ("", ""),
    ),
)
def test_unknown_keys_fall_back_to_lowercase(raw: str, expected: str):
    assert normalize_key(raw) == expected


def test_reserved_buttons_never_tokenize():
    assert normalize_button(PointerButton.PRIMARY) is None
    assert normalize_button(PointerButton.SECONDARY) is None
    assert normalize_button(9) is None


def test_extra_buttons():
    assert normalize_button(PointerButton.MIDDLE) == "mousebutton3"
    assert normalize_button(3) == "mousebutton4"
    assert normalize_button(4) == "mousebutton5"


def test_hotkey_buttons_cover_reserved_buttons():
    assert hotkey_button(0) == "mousebutton1"
    assert hotkey_button(2) == "mousebutton2"
    assert hotkey_button(1) == "mousebutton3"


@pytest.mark.parametrize(
    "name,expected",
    (
        ("Super", "win"),
        (" control ", "ctrl"),
        ("ESC", "escape"),
        ("rmb", "mousebutton2"),
        ("mb5", "mousebutton5"),
        ("f4", "f4"),
    ),
)
def test_canonical_token(name: str, expected: str):
    assert canonical_token(name) == expected


def test_is_modifier():
    assert is_modifier("ctrl")
    assert not is_modifier("a")
