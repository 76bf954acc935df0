# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import pathlib
import typing

import msgspec
import trio

from ..commontypes import RecordingError
from .dispatch import InputDispatcher
from .inputtypes import AnyInput, InputHandlers, KeyInput, PointerInput


class RecordedInput(msgspec.Struct, frozen=True):
    offset: float
    event: KeyInput | PointerInput


_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder(RecordedInput)


class InputRecorder:
    """Records every event that reaches the bubble phase of a dispatcher."""

    events: list[RecordedInput]

    def __init__(self, dispatcher: InputDispatcher):
        self.dispatcher = dispatcher
        self.zero_time = None
        self.events = []
        self.lease = None

    def __enter__(self):
        self.lease = self.dispatcher.subscribe(
            InputHandlers(key_down=self._record, key_up=self._record, pointer_down=self._record, pointer_up=self._record)
        )
        return self

    def __exit__(self, _exc_type, _exc_value, _traceback):
        if self.lease is not None:
            self.lease.release()
        return False

    def _record(self, event: AnyInput):
        now = trio.current_time()
        if self.zero_time is None:
            self.zero_time = now
        # store a clean copy; suppression flags belong to this delivery only
        clean = msgspec.structs.replace(event, default_prevented=False, propagation_stopped=False)
        self.events.append(RecordedInput(offset=now - self.zero_time, event=clean))

    def save_events(self, path: pathlib.Path):
        with path.open("wb") as outfile:
            for recorded in self.events:
                outfile.write(_encoder.encode(recorded))
                outfile.write(b"\n")


def load_events(path: pathlib.Path) -> list[RecordedInput]:
    events = []
    with path.open("rb") as infile:
        for lineno, line in enumerate(infile, start=1):
            if not line.strip():
                continue
            try:
                events.append(_decoder.decode(line))
            except msgspec.ValidationError as exc:
                raise RecordingError(f"{path}:{lineno}: {exc}") from exc
            except msgspec.DecodeError as exc:
                raise RecordingError(f"{path}:{lineno}: malformed event") from exc
    return events


async def replay(events: typing.Iterable[RecordedInput], dispatcher: InputDispatcher):
    """Dispatch recorded events, keeping their original spacing in time."""
    start = trio.current_time()
    for recorded in events:
        await trio.sleep_until(start + recorded.offset)
        dispatcher.dispatch(msgspec.structs.replace(recorded.event))
