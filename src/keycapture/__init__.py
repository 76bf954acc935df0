from .capture.bindings import BindingStore, BindingStoreError, MemoryBindingStore, SettingsBindingStore
from .capture.chords import ChordAccumulator, parse_binding, serialize_tokens, split_binding
from .capture.session import CaptureOutcome, CaptureStatus, OutcomeKind, ShortcutRecorder, open_recorder
from .rawinput.dispatch import InputDispatcher, InputLease
from .rawinput.inputtypes import InputHandlers, KeyInput, KeyPress, PointerButton, PointerInput
from .rawinput.normalize import normalize_button, normalize_key
from .settings import Settings

__all__ = [
    "BindingStore",
    "BindingStoreError",
    "CaptureOutcome",
    "CaptureStatus",
    "ChordAccumulator",
    "InputDispatcher",
    "InputHandlers",
    "InputLease",
    "KeyInput",
    "KeyPress",
    "MemoryBindingStore",
    "OutcomeKind",
    "PointerButton",
    "PointerInput",
    "Settings",
    "SettingsBindingStore",
    "ShortcutRecorder",
    "normalize_button",
    "normalize_key",
    "open_recorder",
    "parse_binding",
    "serialize_tokens",
    "split_binding",
]
