# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import enum
import typing

import msgspec


class KeyPress(enum.IntEnum):
    RELEASED = 0
    PRESSED = 1
    REPEATED = 2


@enum.unique
class PointerButton(enum.IntEnum):
    # standard five-button numbering, as reported by browsers and most toolkits
    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2
    BACK = 3
    FORWARD = 4


class RawInput(msgspec.Struct, kw_only=True, omit_defaults=True):
    """Base for raw input events. Handlers may suppress the default action or stop further delivery."""

    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self):
        self.default_prevented = True

    def stop_propagation(self):
        self.propagation_stopped = True


class KeyInput(RawInput, tag="key"):
    key: str
    press: KeyPress

    @classmethod
    def pressed(cls, key: str):
        return cls(key=key, press=KeyPress.PRESSED)

    @classmethod
    def released(cls, key: str):
        return cls(key=key, press=KeyPress.RELEASED)


class PointerInput(RawInput, tag="pointer"):
    button: int
    press: KeyPress

    @classmethod
    def pressed(cls, button: int):
        return cls(button=button, press=KeyPress.PRESSED)

    @classmethod
    def released(cls, button: int):
        return cls(button=button, press=KeyPress.RELEASED)


AnyInput = KeyInput | PointerInput

KeyHandler = collections.abc.Callable[[KeyInput], None]
PointerHandler = collections.abc.Callable[[PointerInput], None]


class InputHandlers(msgspec.Struct, frozen=True):
    """The four raw input handlers a subscriber installs as a single group."""

    key_down: typing.Optional[KeyHandler] = None
    key_up: typing.Optional[KeyHandler] = None
    pointer_down: typing.Optional[PointerHandler] = None
    pointer_up: typing.Optional[PointerHandler] = None

    def handler_for(self, event: AnyInput):
        match event:
            case KeyInput(press=KeyPress.RELEASED):
                return self.key_up
            case KeyInput():
                return self.key_down
            case PointerInput(press=KeyPress.RELEASED):
                return self.pointer_up
            case PointerInput():
                return self.pointer_down
        raise TypeError(f"Don't know how to handle {type(event)}.")
