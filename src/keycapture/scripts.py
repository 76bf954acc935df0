import argparse
import logging
import pathlib
import sys

import trio

from .capture.bindings import BindingStoreError, SettingsBindingStore
from .capture.chords import render_label
from .capture.session import open_recorder
from .capture.triggers import make_triggerstream, watch_dispatcher
from .commontypes import KeycaptureError
from .rawinput.dispatch import InputDispatcher
from .rawinput.recorded import load_events, replay
from .settings import PUSH_TO_TALK, Settings

logger = logging.getLogger(__name__)

replay_parser = argparse.ArgumentParser(prog="keycapture-replay", description="Capture a shortcut from recorded input.")
replay_parser.add_argument("settings", type=pathlib.Path)
replay_parser.add_argument("recording", type=pathlib.Path)
replay_parser.add_argument("--slot", default=PUSH_TO_TALK)
replay_parser.add_argument("--verbose", "-v", action="store_true")

triggers_parser = argparse.ArgumentParser(prog="keycapture-triggers", description="Show shortcut presses in recorded input.")
triggers_parser.add_argument("settings", type=pathlib.Path)
triggers_parser.add_argument("recording", type=pathlib.Path)
triggers_parser.add_argument("--verbose", "-v", action="store_true")


async def capture_from_recording(settings: Settings, slot: str, recording: pathlib.Path):
    events = load_events(recording)
    store = SettingsBindingStore(settings)
    dispatcher = InputDispatcher()
    async with open_recorder(slot, store, dispatcher, timeout=settings.capture_timeout) as recorder:
        future = recorder.start()
        async with trio.open_nursery() as nursery:
            nursery.start_soon(replay, events, dispatcher)
            await recorder.last_outcome.wait_value(lambda v: v is not None)
            nursery.cancel_scope.cancel()
        label = render_label(recorder.display.value) or "unbound"
    # unwrap outside the nurseries so a failed save surfaces as itself
    result = await future.wait()
    print(f"{slot}: {result.kind.name.lower()} ({label})")
    return result


async def show_triggers(settings: Settings, recording: pathlib.Path):
    events = load_events(recording)
    dispatcher = InputDispatcher()
    async with watch_dispatcher(dispatcher) as rawstream, make_triggerstream(rawstream, settings.shortcuts) as triggerstream:
        async with trio.open_nursery() as nursery:
            nursery.start_soon(replay, events, dispatcher)
            with trio.move_on_after(events[-1].offset + 1 if events else 0):
                async for edge in triggerstream:
                    print(f"{edge.slot}: {edge.phase.name.lower()} ({edge.binding})")
            nursery.cancel_scope.cancel()


def _configure_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


def replay_cli(argv=None):
    if argv is None:
        argv = sys.argv
    args = replay_parser.parse_args(argv[1:])
    _configure_logging(args.verbose)
    try:
        settings = Settings.load_or_create(args.settings)
        trio.run(capture_from_recording, settings, args.slot, args.recording)
    except BindingStoreError as exc:
        print(f"Could not save shortcut: {exc}", file=sys.stderr)
        return 1
    except KeycaptureError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def triggers_cli(argv=None):
    if argv is None:
        argv = sys.argv
    args = triggers_parser.parse_args(argv[1:])
    _configure_logging(args.verbose)
    try:
        settings = Settings.load_or_create(args.settings)
        trio.run(show_triggers, settings, args.recording)
    except KeycaptureError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0
