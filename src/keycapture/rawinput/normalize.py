# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Map raw key and pointer identifiers onto canonical lowercase tokens.

Raw key identifiers follow the names toolkits report for key events (``Control``,
``ArrowUp``, ``F5``) plus the physical key codes for the digit and letter rows
(``Digit7``, ``KeyA``). Everything that isn't recognized is simply lowercased.
"""
from __future__ import annotations

import collections.abc
import re
import typing

from .inputtypes import PointerButton

MODIFIER_ORDER = ("win", "ctrl", "alt", "shift")

NAMED_KEYS = {
    "Meta": "win",
    "Control": "ctrl",
    "Alt": "alt",
    "Shift": "shift",
    " ": "space",
    # the binding separator can't be a token itself
    "+": "plus",
    "Enter": "enter",
    "Escape": "escape",
    "Tab": "tab",
    "Backspace": "backspace",
    "Delete": "delete",
    "Insert": "insert",
    "Home": "home",
    "End": "end",
    "PageUp": "pageup",
    "PageDown": "pagedown",
    "ArrowUp": "arrowup",
    "ArrowDown": "arrowdown",
    "ArrowLeft": "arrowleft",
    "ArrowRight": "arrowright",
}

# Checked in order after NAMED_KEYS; the first match wins.
PATTERN_RULES: tuple[tuple[re.Pattern, collections.abc.Callable[[re.Match], str]], ...] = (
    (re.compile(r"^.$", re.DOTALL), lambda m: m[0].lower()),
    (re.compile(r"^F(\d{1,2})$"), lambda m: f"f{m[1]}"),
    (re.compile(r"^Digit(\d)$"), lambda m: m[1]),
    (re.compile(r"^Key([A-Za-z])$"), lambda m: m[1].lower()),
)

# The primary button is reserved for cancelling a capture and the secondary button
# opens context menus, so neither one is ever part of a chord.
POINTER_BUTTONS = {
    PointerButton.MIDDLE: "mousebutton3",
    PointerButton.BACK: "mousebutton4",
    PointerButton.FORWARD: "mousebutton5",
}

# Hotkeys may still name any button, so matching held input uses the full table.
HOTKEY_POINTER_BUTTONS = {
    PointerButton.PRIMARY: "mousebutton1",
    PointerButton.SECONDARY: "mousebutton2",
    **POINTER_BUTTONS,
}

TOKEN_ALIASES = {
    "meta": "win",
    "super": "win",
    "control": "ctrl",
    "menu": "alt",
    "return": "enter",
    "esc": "escape",
    "del": "delete",
    "ins": "insert",
    "up": "arrowup",
    "down": "arrowdown",
    "left": "arrowleft",
    "right": "arrowright",
    "lmb": "mousebutton1",
    "leftclick": "mousebutton1",
    "rmb": "mousebutton2",
    "rightclick": "mousebutton2",
    "mmb": "mousebutton3",
    "middleclick": "mousebutton3",
    "mb4": "mousebutton4",
    "mb5": "mousebutton5",
}


def normalize_key(raw: str) -> str:
    if raw in NAMED_KEYS:
        return NAMED_KEYS[raw]
    for pattern, transform in PATTERN_RULES:
        if (match := pattern.match(raw)) is not None:
            return transform(match)
    return raw.lower()


def normalize_button(button: int) -> typing.Optional[str]:
    return POINTER_BUTTONS.get(button)


def hotkey_button(button: int) -> typing.Optional[str]:
    return HOTKEY_POINTER_BUTTONS.get(button)


def canonical_token(name: str) -> str:
    token = name.strip().lower()
    return TOKEN_ALIASES.get(token, token)


def is_modifier(token: str) -> bool:
    return token in MODIFIER_ORDER
