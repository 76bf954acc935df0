# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import datetime
import json
import logging
import pathlib
import typing

import cattrs
from cattrs.gen import make_dict_structure_fn, override

from .capture.chords import canonicalize_binding

logger = logging.getLogger(__name__)

PUSH_TO_TALK = "push-to-talk"
PASTE_LAST_TRANSCRIPT = "paste-last-transcript"

DEFAULT_SHORTCUTS = {
    PUSH_TO_TALK: "win+ctrl",
    PASTE_LAST_TRANSCRIPT: "",
}

CAPTURE_TIMEOUT = datetime.timedelta(seconds=5)


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(datetime.timedelta, lambda d: d.total_seconds())
settings_converter.register_structure_hook(datetime.timedelta, lambda v, _: datetime.timedelta(seconds=v))
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))


def structure_shortcuts(d: dict, _typ) -> dict[str, str]:
    return {str(slot): canonicalize_binding(str(binding)) for slot, binding in d.items()}


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    shortcuts: dict[str, str]
    default_shortcuts: dict[str, str]
    capture_timeout: datetime.timedelta

    def shortcut(self, slot: str) -> str:
        return self.shortcuts.get(slot, self.default_shortcuts.get(slot, ""))

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as outfile:
            json.dump(raw, outfile, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as infile:
            raw = json.load(infile)
        raw["_path"] = src
        raw.setdefault("default_shortcuts", dict(DEFAULT_SHORTCUTS))
        raw.setdefault("capture_timeout", CAPTURE_TIMEOUT.total_seconds())
        return settings_converter.structure(raw, cls)

    @classmethod
    def defaults(cls, path: pathlib.Path):
        return cls(
            _path=path,
            shortcuts=dict(DEFAULT_SHORTCUTS),
            default_shortcuts=dict(DEFAULT_SHORTCUTS),
            capture_timeout=CAPTURE_TIMEOUT,
        )

    @classmethod
    def load_or_create(cls, src: pathlib.Path):
        if src.exists():
            return cls.load(src)
        logger.debug("No settings at %s; writing defaults", src)
        settings = cls.defaults(src)
        settings.save()
        return settings

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "_path": "test.settings.json",
                "shortcuts": {PUSH_TO_TALK: "win+ctrl"},
                "default_shortcuts": DEFAULT_SHORTCUTS,
                "capture_timeout": 5,
            },
            cls,
        )


settings_converter.register_structure_hook(
    Settings,
    make_dict_structure_fn(
        Settings,
        settings_converter,
        shortcuts=override(struct_hook=structure_shortcuts),
    ),
)
