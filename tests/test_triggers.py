import collections.abc
import typing
from contextlib import aclosing

import trio
from trio.lowlevel import checkpoint

from keycapture.capture.session import ShortcutRecorder
from keycapture.capture.bindings import MemoryBindingStore
from keycapture.capture.triggers import (
    EdgePhase,
    ShortcutEdge,
    TokenEvent,
    Tokenize,
    TrackHeld,
    make_triggerstream,
    pump_all,
    watch_dispatcher,
)
from keycapture.rawinput.dispatch import InputDispatcher
from keycapture.rawinput.inputtypes import KeyInput, KeyPress, PointerInput

T = typing.TypeVar("T")


async def make_async_source(
    items: collections.abc.Sequence[T],
):
    for item in items:
        await checkpoint()
        yield item


async def test_tokenize():
    async with (
        aclosing(
            make_async_source(
                [
                    KeyInput.pressed("Control"),
                    KeyInput(key="Control", press=KeyPress.REPEATED),
                    PointerInput.pressed(0),
                    PointerInput.pressed(7),
                    KeyInput.released("KeyA"),
                ]
            )
        ) as rawsource,
        pump_all(rawsource, Tokenize()) as resultsource,
    ):
        results = [event async for event in resultsource]
        assert results == [
            TokenEvent(token="ctrl", press=KeyPress.PRESSED),
            TokenEvent(token="mousebutton1", press=KeyPress.PRESSED),
            TokenEvent(token="a", press=KeyPress.RELEASED),
        ]


async def test_track_held_edges():
    bindings = {"push-to-talk": "win+ctrl", "paste-last-transcript": "", "other": "ctrl+mb4"}
    async with (
        aclosing(
            make_async_source(
                [
                    TokenEvent(token="ctrl", press=KeyPress.PRESSED),
                    TokenEvent(token="win", press=KeyPress.PRESSED),
                    TokenEvent(token="a", press=KeyPress.PRESSED),
                    TokenEvent(token="a", press=KeyPress.RELEASED),
                    TokenEvent(token="win", press=KeyPress.RELEASED),
                    TokenEvent(token="mousebutton4", press=KeyPress.PRESSED),
                    TokenEvent(token="ctrl", press=KeyPress.RELEASED),
                ]
            )
        ) as tokensource,
        pump_all(tokensource, TrackHeld(bindings)) as resultsource,
    ):
        results = [event async for event in resultsource]
        assert results == [
            ShortcutEdge(slot="push-to-talk", binding="win+ctrl", phase=EdgePhase.START),
            ShortcutEdge(slot="push-to-talk", binding="win+ctrl", phase=EdgePhase.STOP),
            ShortcutEdge(slot="other", binding="ctrl+mousebutton4", phase=EdgePhase.START),
            ShortcutEdge(slot="other", binding="ctrl+mousebutton4", phase=EdgePhase.STOP),
        ]


async def test_triggerstream():
    async with (
        aclosing(
            make_async_source(
                [
                    KeyInput.pressed("Meta"),
                    KeyInput.pressed("Control"),
                    KeyInput.released("Meta"),
                    KeyInput.released("Control"),
                ]
            )
        ) as rawsource,
        make_triggerstream(rawsource, {"push-to-talk": "win+ctrl"}) as triggerstream,
    ):
        phases = [edge.phase async for edge in triggerstream]
        assert phases == [EdgePhase.START, EdgePhase.STOP]


async def test_watch_dispatcher_skips_captured_input(nursery: trio.Nursery):
    dispatcher = InputDispatcher()
    store = MemoryBindingStore({"push-to-talk": "win+ctrl"})
    recorder = ShortcutRecorder("push-to-talk", store, dispatcher, nursery)
    async with watch_dispatcher(dispatcher) as rawstream:
        recorder.start()
        dispatcher.dispatch(KeyInput.pressed("a"))
        dispatcher.dispatch(KeyInput.released("a"))
        dispatcher.dispatch(KeyInput.pressed("b"))
        with trio.move_on_after(1):
            event = await rawstream.receive()
        assert event.key == "b"
    assert dispatcher.subscriber_count == 0
    assert store.get("push-to-talk") == "a"
