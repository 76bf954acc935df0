# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Record a shortcut by listening to raw input until the user confirms, aborts, or stops responding.

Hold the whole combination, then release any one key (or button) to confirm it. A primary
click aborts. If nothing ends the capture, whatever is held when the timeout expires is kept.
"""
from __future__ import annotations

import datetime
import enum
import functools
import itertools
import logging
import typing
from contextlib import asynccontextmanager

import msgspec
import trio
from trio_util import AsyncValue

from ..rawinput.dispatch import InputDispatcher, InputLease
from ..rawinput.inputtypes import InputHandlers, KeyInput, PointerButton, PointerInput
from ..rawinput.normalize import normalize_button, normalize_key
from ..settings import CAPTURE_TIMEOUT
from ..util import Future
from .bindings import BindingStore, BindingStoreError
from .chords import ChordAccumulator, render_label

logger = logging.getLogger(__name__)


class CaptureStatus(enum.Enum):
    IDLE = enum.auto()
    LISTENING = enum.auto()
    COMMITTING = enum.auto()


class OutcomeKind(enum.Enum):
    COMMITTED = enum.auto()
    EMPTY = enum.auto()
    CANCELLED = enum.auto()
    FAILED = enum.auto()


class CaptureOutcome(msgspec.Struct, frozen=True):
    kind: OutcomeKind
    binding: str = ""


class CaptureSession(msgspec.Struct, kw_only=True):
    session_id: int
    started_at: float
    previous: str
    timer: trio.CancelScope
    future: Future[CaptureOutcome]
    lease: typing.Optional[InputLease] = None


class ShortcutRecorder:
    status: AsyncValue[CaptureStatus]
    display: AsyncValue[str]
    last_outcome: AsyncValue[typing.Optional[CaptureOutcome]]
    _session: typing.Optional[CaptureSession]

    def __init__(
        self,
        slot: str,
        store: BindingStore,
        source: InputDispatcher,
        nursery: trio.Nursery,
        *,
        timeout: datetime.timedelta = CAPTURE_TIMEOUT,
    ):
        self.slot = slot
        self.store = store
        self.source = source
        self.nursery = nursery
        self.timeout = timeout
        self.chord = ChordAccumulator()
        self.status = AsyncValue(CaptureStatus.IDLE)
        self.display = AsyncValue(store.get(slot))
        self.last_outcome = AsyncValue(None)
        self._session = None
        self._session_ids = itertools.count(1)

    @property
    def is_recording(self):
        return self._session is not None

    @property
    def label(self):
        return render_label(self.display.value, recording=self.is_recording)

    def toggle(self) -> typing.Optional[Future[CaptureOutcome]]:
        if self.is_recording:
            self.cancel()
            return None
        return self.start()

    def start(self) -> Future[CaptureOutcome]:
        if self._session is not None:
            self._cancel(self._session.session_id)
        previous = self.store.get(self.slot)
        self.chord.clear()
        session = CaptureSession(
            session_id=next(self._session_ids),
            started_at=trio.current_time(),
            previous=previous,
            timer=trio.CancelScope(),
            future=Future(),
        )
        self._session = session
        session.lease = self.source.subscribe(self._handlers_for(session.session_id), capture=True)
        self.display.value = ""
        self.status.value = CaptureStatus.LISTENING
        self.nursery.start_soon(self._expire, session.session_id, session.timer)
        logger.debug("Capture %d for %s started", session.session_id, self.slot)
        return session.future

    def cancel(self):
        if self._session is not None:
            self._cancel(self._session.session_id)

    def reset(self):
        self.cancel()
        self.store.reset(self.slot)
        self.display.value = self.store.get(self.slot)
        logger.debug("Reset %s to %r", self.slot, self.display.value)

    def close(self):
        self.cancel()

    def _handlers_for(self, session_id: int):
        return InputHandlers(
            key_down=functools.partial(self._key_down, session_id),
            key_up=functools.partial(self._key_up, session_id),
            pointer_down=functools.partial(self._pointer_down, session_id),
            pointer_up=functools.partial(self._pointer_up, session_id),
        )

    def _is_current(self, session_id: int):
        return self._session is not None and self._session.session_id == session_id

    def _add(self, token: typing.Optional[str]):
        if token is not None and self.chord.add(token):
            self.display.value = self.chord.serialize()

    def _key_down(self, session_id: int, event: KeyInput):
        event.prevent_default()
        event.stop_propagation()
        if self._is_current(session_id):
            self._add(normalize_key(event.key))

    def _key_up(self, session_id: int, event: KeyInput):
        event.prevent_default()
        event.stop_propagation()
        self._commit(session_id)

    def _pointer_down(self, session_id: int, event: PointerInput):
        event.prevent_default()
        event.stop_propagation()
        if event.button == PointerButton.PRIMARY:
            self._cancel(session_id)
        elif self._is_current(session_id):
            self._add(normalize_button(event.button))

    def _pointer_up(self, session_id: int, event: PointerInput):
        event.prevent_default()
        event.stop_propagation()
        self._commit(session_id)

    async def _expire(self, session_id: int, timer: trio.CancelScope):
        with timer:
            await trio.sleep(self.timeout.total_seconds())
        if timer.cancelled_caught:
            return
        logger.debug("Capture %d timed out", session_id)
        self._commit(session_id)

    def _end(self, session: CaptureSession):
        session.timer.cancel()
        if session.lease is not None:
            session.lease.release()
        self.chord.clear()
        self._session = None

    def _finish(self, session: CaptureSession, result: CaptureOutcome, error: typing.Optional[Exception] = None):
        self.status.value = CaptureStatus.IDLE
        self.last_outcome.value = result
        if error is None:
            session.future.finalize(result)
        else:
            session.future.fail(error)

    def _commit(self, session_id: int):
        if not self._is_current(session_id):
            logger.debug("Ignoring commit for stale capture %d", session_id)
            return
        session = typing.cast(CaptureSession, self._session)
        binding = self.chord.serialize()
        self.status.value = CaptureStatus.COMMITTING
        self._end(session)
        if not binding:
            self.display.value = session.previous
            self._finish(session, CaptureOutcome(kind=OutcomeKind.EMPTY))
            return
        try:
            self.store.set(self.slot, binding)
        except Exception as exc:
            logger.warning("Failed to save %r for %s", binding, self.slot, exc_info=True)
            if isinstance(exc, BindingStoreError):
                error = exc
            else:
                error = BindingStoreError(f"Could not save {binding!r} for {self.slot}: {exc}")
                error.__cause__ = exc
            self.display.value = session.previous
            self._finish(session, CaptureOutcome(kind=OutcomeKind.FAILED, binding=binding), error=error)
            return
        logger.debug("Capture %d for %s committed %r", session_id, self.slot, binding)
        self.display.value = binding
        self._finish(session, CaptureOutcome(kind=OutcomeKind.COMMITTED, binding=binding))

    def _cancel(self, session_id: int):
        if not self._is_current(session_id):
            logger.debug("Ignoring cancel for stale capture %d", session_id)
            return
        session = typing.cast(CaptureSession, self._session)
        self._end(session)
        self.display.value = session.previous
        logger.debug("Capture %d for %s cancelled", session_id, self.slot)
        self._finish(session, CaptureOutcome(kind=OutcomeKind.CANCELLED))


@asynccontextmanager
async def open_recorder(
    slot: str,
    store: BindingStore,
    source: InputDispatcher,
    *,
    timeout: datetime.timedelta = CAPTURE_TIMEOUT,
):
    async with trio.open_nursery() as nursery:
        recorder = ShortcutRecorder(slot, store, source, nursery, timeout=timeout)
        try:
            yield recorder
        finally:
            recorder.close()
