from .events import InputEvent, InputSource, KeyCode, KeyEvent, PointerEvent, ScriptedInput, parse_key

__all__ = [
    "InputEvent",
    "InputSource",
    "KeyCode",
    "KeyEvent",
    "PointerEvent",
    "ScriptedInput",
    "parse_key",
]
