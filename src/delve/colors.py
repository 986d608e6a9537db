"""RGB colour constants shared by the simulation and the renderer.

Values follow the classic libtcod palette so glyphs look the same whichever
backend presents the console.
"""
from typing import Tuple

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
LIGHT_GREY: Color = (159, 159, 159)

RED: Color = (255, 0, 0)
LIGHT_RED: Color = (255, 114, 114)
DARK_RED: Color = (191, 0, 0)
DARKER_RED: Color = (127, 0, 0)
ORANGE: Color = (255, 127, 0)

GREEN: Color = (0, 255, 0)
DESATURATED_GREEN: Color = (63, 127, 63)
DARKER_GREEN: Color = (0, 127, 0)

VIOLET: Color = (127, 0, 255)
LIGHT_VIOLET: Color = (185, 114, 255)

DARK_WALL: Color = (0, 0, 100)
DARK_GROUND: Color = (50, 50, 150)
LIGHT_WALL: Color = (130, 110, 50)
LIGHT_GROUND: Color = (200, 180, 80)


def parse_color(value) -> Color:
    """Coerce a config value into an RGB tuple.

    Accepts ``[r, g, b]`` sequences or the upper-case name of a constant in
    this module (e.g. ``"DESATURATED_GREEN"``).
    """
    if isinstance(value, str):
        named = globals().get(value.strip().upper())
        if not (isinstance(named, tuple) and len(named) == 3):
            raise ValueError(f"Unknown colour name: {value!r}")
        return named
    try:
        r, g, b = (int(c) for c in value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid colour: {value!r}") from exc
    for c in (r, g, b):
        if not 0 <= c <= 255:
            raise ValueError(f"Colour component out of range: {c}")
    return (r, g, b)
