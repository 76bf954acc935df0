# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import contextlib
import logging
import typing

from .inputtypes import AnyInput, InputHandlers

logger = logging.getLogger(__name__)


class InputLease(contextlib.AbstractContextManager):
    """One subscription covering all four raw input handlers; released as a unit."""

    def __init__(self, dispatcher: InputDispatcher, handlers: InputHandlers, capture: bool):
        self.dispatcher = dispatcher
        self.handlers = handlers
        self.capture = capture
        self.active = True

    def release(self):
        if not self.active:
            return
        self.active = False
        self.dispatcher._remove(self)

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.release()
        return False

    def __repr__(self):
        return f"<InputLease capture={self.capture} active={self.active}>"


class InputDispatcher:
    """In-process event target for raw key and pointer input.

    Capture-phase subscribers see events before bubble-phase ones, and the most recent
    capture subscriber goes first. Delivery stops as soon as a handler stops propagation.
    """

    _capturing: list[InputLease]
    _bubbling: list[InputLease]

    def __init__(self):
        self._capturing = []
        self._bubbling = []

    def subscribe(self, handlers: InputHandlers, *, capture: bool = False) -> InputLease:
        lease = InputLease(self, handlers, capture)
        if capture:
            self._capturing.insert(0, lease)
        else:
            self._bubbling.append(lease)
        logger.debug("Subscribed %r", lease)
        return lease

    def _remove(self, lease: InputLease):
        target = self._capturing if lease.capture else self._bubbling
        target.remove(lease)
        logger.debug("Released %r", lease)

    @property
    def subscriber_count(self):
        return len(self._capturing) + len(self._bubbling)

    def dispatch(self, event: AnyInput) -> bool:
        """Deliver an event; returns True if some handler prevented its default action."""
        # a handler may release leases (including its own) while we iterate
        for lease in tuple(self._capturing) + tuple(self._bubbling):
            if not lease.active:
                continue
            handler: typing.Optional[typing.Callable] = lease.handlers.handler_for(event)
            if handler is not None:
                handler(event)
            if event.propagation_stopped:
                break
        return event.default_prevented
