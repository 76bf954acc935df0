# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

import outcome
import trio

V = typing.TypeVar("V")


class Future(typing.Generic[V]):
    _outcome: typing.Optional[outcome.Outcome]

    def __init__(self):
        self._event = trio.Event()
        self._outcome = None

    def finalize(self, result: V | outcome.Outcome[V]):
        if self._outcome is not None:
            raise Exception("already finalized")
        if isinstance(result, outcome.Outcome):
            self._outcome = result
        else:
            self._outcome = outcome.Value(result)
        self._event.set()

    def fail(self, exc: BaseException):
        self.finalize(outcome.Error(exc))

    async def wait(self) -> V:
        await self._event.wait()
        return self._outcome.unwrap()

    @property
    def is_final(self):
        return self._event.is_set()
