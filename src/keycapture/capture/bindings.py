# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

from ..commontypes import KeycaptureError
from .chords import canonicalize_binding

if typing.TYPE_CHECKING:
    from ..settings import Settings

logger = logging.getLogger(__name__)


class BindingStoreError(KeycaptureError):
    pass


class BindingStore(typing.Protocol):
    def get(self, slot: str) -> str: ...

    def set(self, slot: str, binding: str) -> None: ...

    def reset(self, slot: str) -> None: ...


class MemoryBindingStore:
    bindings: dict[str, str]

    def __init__(self, defaults: typing.Optional[collections.abc.Mapping[str, str]] = None):
        self.defaults = dict(defaults or {})
        self.bindings = dict(self.defaults)

    def get(self, slot: str) -> str:
        return self.bindings.get(slot, "")

    def set(self, slot: str, binding: str):
        self.bindings[slot] = binding

    def reset(self, slot: str):
        self.bindings[slot] = self.defaults.get(slot, "")


class SettingsBindingStore:
    """Keeps bindings in the settings file, saving after every change."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def get(self, slot: str) -> str:
        return self.settings.shortcut(slot)

    def set(self, slot: str, binding: str):
        self._replace(slot, canonicalize_binding(binding))

    def reset(self, slot: str):
        self._replace(slot, self.settings.default_shortcuts.get(slot, ""))

    def _replace(self, slot: str, binding: str):
        shortcuts = self.settings.shortcuts
        missing = object()
        previous = shortcuts.get(slot, missing)
        shortcuts[slot] = binding
        try:
            self.settings.save()
        except OSError as exc:
            if previous is missing:
                del shortcuts[slot]
            else:
                shortcuts[slot] = previous
            logger.debug("Rolled back %s after failing to save %r", slot, binding)
            raise BindingStoreError(f"Unable to save binding for {slot}") from exc
