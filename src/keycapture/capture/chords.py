# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc

from ..rawinput.normalize import MODIFIER_ORDER, canonical_token

SEPARATOR = "+"
PROMPT = "Press keys..."


def _sort_key(token: str):
    # modifiers first, in their fixed order; everything else lexicographically after them
    if token in MODIFIER_ORDER:
        return (0, MODIFIER_ORDER.index(token), "")
    return (1, 0, token)


def serialize_tokens(tokens: collections.abc.Iterable[str]) -> str:
    return SEPARATOR.join(sorted(set(tokens), key=_sort_key))


def split_binding(binding: str) -> list[str]:
    return [part for part in binding.split(SEPARATOR) if part]


def parse_binding(binding: str) -> frozenset[str]:
    return frozenset(token for token in (canonical_token(part) for part in split_binding(binding)) if token)


def canonicalize_binding(binding: str) -> str:
    return serialize_tokens(parse_binding(binding))


def render_label(binding: str, recording: bool = False) -> str:
    if recording and not binding:
        return PROMPT
    return " + ".join(split_binding(binding))


class ChordAccumulator:
    """The set of tokens currently held during a capture. Press order is not kept."""

    _tokens: set[str]

    def __init__(self):
        self._tokens = set()

    def add(self, token: str) -> bool:
        if token in self._tokens:
            return False
        self._tokens.add(token)
        return True

    def clear(self):
        self._tokens.clear()

    def serialize(self) -> str:
        return serialize_tokens(self._tokens)

    @property
    def tokens(self) -> frozenset[str]:
        return frozenset(self._tokens)

    def __len__(self):
        return len(self._tokens)

    def __contains__(self, token):
        return token in self._tokens

    def __bool__(self):
        return bool(self._tokens)

    def __repr__(self):
        return f"<ChordAccumulator {self.serialize()!r}>"
