# -*- coding: utf-8 -*-
"""
src/monocam/core/color_scheme.py

The two-colour palettes used for monochrome rendering.

Schemes are immutable values. The active one is chosen by index in the GUI
and passed into every conversion call, so the converter holds no palette
state of its own.
"""

from dataclasses import dataclass
from typing import List, Tuple

RGB = Tuple[int, int, int]


def _parse_hex(value: str) -> RGB:
    """Parses '#rrggbb' (the leading '#' is optional) into an RGB tuple."""
    digits = value.strip().lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Expected a colour of the form '#rrggbb', got {value!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


@dataclass(frozen=True)
class ColorScheme:
    """
    A named (foreground, background) colour pair.

    Colours are stored as RGB tuples. The converter writes OpenCV (BGR)
    images, so use ``foreground_bgr``/``background_bgr`` when filling pixels.
    """

    name: str
    foreground: RGB
    background: RGB

    def __post_init__(self):
        for color in (self.foreground, self.background):
            if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
                raise ValueError(f"Invalid RGB colour {color!r} in scheme {self.name!r}")

    @classmethod
    def from_hex(cls, name: str, foreground: str, background: str) -> "ColorScheme":
        return cls(name, _parse_hex(foreground), _parse_hex(background))

    @property
    def foreground_bgr(self) -> RGB:
        r, g, b = self.foreground
        return (b, g, r)

    @property
    def background_bgr(self) -> RGB:
        r, g, b = self.background
        return (b, g, r)


WHITE_ON_BLACK = ColorScheme.from_hex("White on Black", "#ffffff", "#000000")
BLACK_ON_WHITE = ColorScheme.from_hex("Black on White", "#000000", "#ffffff")
GREEN_ON_BLACK = ColorScheme.from_hex("Green on Black", "#11c70e", "#000000")
YELLOW_ON_BLACK = ColorScheme.from_hex("Yellow on Black", "#f4d81e", "#000000")

# Order matters: the GUI and the config file refer to schemes by index.
BUILTIN_SCHEMES: Tuple[ColorScheme, ...] = (
    WHITE_ON_BLACK,
    BLACK_ON_WHITE,
    GREEN_ON_BLACK,
    YELLOW_ON_BLACK,
)


def get_scheme(index: int) -> ColorScheme:
    """
    Returns the built-in scheme at ``index``.

    Raises:
        IndexError: If ``index`` does not name a built-in scheme.
    """
    if not 0 <= index < len(BUILTIN_SCHEMES):
        raise IndexError(f"No colour scheme at index {index} (have {len(BUILTIN_SCHEMES)})")
    return BUILTIN_SCHEMES[index]


def scheme_names() -> List[str]:
    return [scheme.name for scheme in BUILTIN_SCHEMES]
