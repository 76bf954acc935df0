import itertools

import pytest

from keycapture.capture.chords import (
    PROMPT,
    ChordAccumulator,
    canonicalize_binding,
    parse_binding,
    render_label,
    serialize_tokens,
    split_binding,
)


def accumulate(*tokens: str):
    chord = ChordAccumulator()
    for token in tokens:
        chord.add(token)
    return chord


def test_modifiers_come_first():
    assert accumulate("a", "ctrl").serialize() == "ctrl+a"
    assert accumulate("ctrl", "a").serialize() == "ctrl+a"


def test_press_order_does_not_matter():
    tokens = ("shift", "a", "win", "f5", "ctrl", "mousebutton4")
    expected = "win+ctrl+shift+a+f5+mousebutton4"
    for ordering in itertools.permutations(tokens):
        assert accumulate(*ordering).serialize() == expected


def test_non_modifiers_sort_lexicographically():
    assert accumulate("z", "alt", "b", "10", "1").serialize() == "alt+1+10+b+z"


def test_add_is_idempotent():
    chord = ChordAccumulator()
    assert chord.add("ctrl")
    assert not chord.add("ctrl")
    assert chord.serialize() == "ctrl"
    assert len(chord) == 1


def test_empty_and_clear():
    chord = accumulate("alt", "x")
    assert chord
    assert "x" in chord
    chord.clear()
    assert not chord
    assert chord.serialize() == ""
    assert chord.tokens == frozenset()


def test_serialize_tokens_dedupes():
    assert serialize_tokens(["a", "shift", "a"]) == "shift+a"


@pytest.mark.parametrize(
    "binding,expected",
    (
        ("ctrl+shift+a", ["ctrl", "shift", "a"]),
        ("", []),
        ("f5", ["f5"]),
        ("ctrl++a", ["ctrl", "a"]),
    ),
)
def test_split_binding(binding: str, expected: list[str]):
    assert split_binding(binding) == expected


def test_parse_binding_resolves_aliases():
    assert parse_binding("Control+Super+a+A") == frozenset({"ctrl", "win", "a"})
    assert parse_binding("") == frozenset()


def test_canonicalize_binding():
    assert canonicalize_binding("a+shift+meta") == "win+shift+a"
    assert canonicalize_binding("win+ctrl") == "win+ctrl"


def test_render_label():
    assert render_label("", recording=True) == PROMPT
    assert render_label("ctrl+a", recording=True) == "ctrl + a"
    assert render_label("win+ctrl") == "win + ctrl"
    assert render_label("") == ""
