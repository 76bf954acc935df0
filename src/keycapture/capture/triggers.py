# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import collections.abc
import enum
import logging
import math
from contextlib import aclosing, asynccontextmanager
from typing import Any, AsyncIterable, cast

import msgspec
import trio

from ..rawinput.dispatch import InputDispatcher
from ..rawinput.inputtypes import AnyInput, InputHandlers, KeyInput, KeyPress, PointerInput
from ..rawinput.normalize import hotkey_button, normalize_key
from .chords import parse_binding, serialize_tokens

logger = logging.getLogger(__name__)


class EdgePhase(enum.Enum):
    START = enum.auto()
    STOP = enum.auto()


class TokenEvent(msgspec.Struct, frozen=True):
    token: str
    press: KeyPress


class ShortcutEdge(msgspec.Struct, frozen=True):
    slot: str
    binding: str
    phase: EdgePhase


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: turn raw key and pointer input into token presses and releases
class Tokenize(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[AnyInput], sink: trio.MemorySendChannel[TokenEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if event.press is KeyPress.REPEATED:
                    continue
                match event:
                    case KeyInput():
                        token = normalize_key(event.key)
                    case PointerInput():
                        token = hotkey_button(event.button)
                if token is not None:
                    await sink.send(TokenEvent(token=token, press=event.press))


# stage 2: track held tokens and report when a binding becomes, or stops being, fully held
class TrackHeld(Section):
    def __init__(self, bindings: collections.abc.Mapping[str, str]):
        self.required = {slot: parse_binding(binding) for slot, binding in bindings.items()}
        # an empty binding would otherwise match before anything is pressed
        self.required = {slot: tokens for slot, tokens in self.required.items() if tokens}
        self.held = set()
        self.active = set()

    async def pump(self, source: trio.MemoryReceiveChannel[TokenEvent], sink: trio.MemorySendChannel[ShortcutEdge]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if event.press is KeyPress.PRESSED:
                    self.held.add(event.token)
                else:
                    self.held.discard(event.token)
                for slot, tokens in self.required.items():
                    fully_held = tokens <= self.held
                    if fully_held and slot not in self.active:
                        self.active.add(slot)
                        phase = EdgePhase.START
                    elif not fully_held and slot in self.active:
                        self.active.discard(slot)
                        phase = EdgePhase.STOP
                    else:
                        continue
                    logger.debug("%s %s", slot, phase.name)
                    await sink.send(ShortcutEdge(slot=slot, binding=serialize_tokens(tokens), phase=phase))


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_triggerstream(source: AsyncIterable[AnyInput], bindings: collections.abc.Mapping[str, str]):
    async with pump_all(source, Tokenize(), TrackHeld(bindings)) as triggerstream:
        yield cast(trio.MemoryReceiveChannel[ShortcutEdge], triggerstream)


@asynccontextmanager
async def watch_dispatcher(dispatcher: InputDispatcher):
    """Yield a channel of every raw input event that reaches the bubble phase of `dispatcher`."""
    send_channel, receive_channel = trio.open_memory_channel[AnyInput](math.inf)
    handlers = InputHandlers(
        key_down=send_channel.send_nowait,
        key_up=send_channel.send_nowait,
        pointer_down=send_channel.send_nowait,
        pointer_up=send_channel.send_nowait,
    )
    with dispatcher.subscribe(handlers), send_channel:
        yield receive_channel
