"""
Helvetica / Helvetica-Bold glyph widths for text measurement.

Widths are in the 1000-unit em square of the base-14 AFM files; scale by
``font_size / 1000`` to get points.
"""

from __future__ import annotations

# Width used for any character missing from the table
DEFAULT_WIDTH = (500, 556)

# char -> (regular, bold)
HELVETICA_WIDTHS: dict[str, tuple[int, int]] = {
    " ": (278, 278), "!": (278, 333), '"': (355, 474), "#": (556, 556),
    "$": (556, 556), "%": (889, 889), "&": (667, 722), "'": (191, 278),
    "(": (333, 333), ")": (333, 333), "*": (389, 389), "+": (584, 584),
    ",": (278, 278), "-": (333, 333), ".": (278, 278), "/": (278, 278),
    "0": (556, 556), "1": (556, 556), "2": (556, 556), "3": (556, 556),
    "4": (556, 556), "5": (556, 556), "6": (556, 556), "7": (556, 556),
    "8": (556, 556), "9": (556, 556), ":": (278, 333), ";": (278, 333),
    "<": (584, 584), "=": (584, 584), ">": (584, 584), "?": (556, 611),
    "@": (1015, 975), "A": (667, 722), "B": (667, 722), "C": (722, 722),
    "D": (722, 722), "E": (667, 667), "F": (611, 611), "G": (778, 778),
    "H": (722, 722), "I": (278, 278), "J": (500, 556), "K": (667, 722),
    "L": (556, 611), "M": (833, 833), "N": (722, 722), "O": (778, 778),
    "P": (667, 667), "Q": (778, 778), "R": (722, 722), "S": (667, 667),
    "T": (611, 611), "U": (722, 722), "V": (667, 667), "W": (944, 944),
    "X": (667, 667), "Y": (667, 667), "Z": (611, 611), "[": (278, 333),
    "\\": (278, 278), "]": (278, 333), "^": (469, 581), "_": (556, 556),
    "`": (222, 333), "a": (556, 556), "b": (556, 611), "c": (500, 556),
    "d": (556, 611), "e": (556, 556), "f": (278, 333), "g": (556, 611),
    "h": (556, 611), "i": (222, 278), "j": (222, 278), "k": (500, 556),
    "l": (222, 278), "m": (833, 889), "n": (556, 611), "o": (556, 611),
    "p": (556, 611), "q": (556, 611), "r": (333, 389), "s": (500, 556),
    "t": (278, 333), "u": (556, 611), "v": (500, 556), "w": (722, 778),
    "x": (500, 556), "y": (500, 556), "z": (500, 500), "{": (334, 389),
    "|": (260, 280), "}": (334, 389), "~": (584, 584), "•": (350, 350),
}


def char_width(ch: str, bold: bool = False) -> int:
    """Width of *ch* in em units."""
    regular, heavy = HELVETICA_WIDTHS.get(ch, DEFAULT_WIDTH)
    return heavy if bold else regular


def text_width(text: str, font_size: float, bold: bool = False) -> float:
    """Width of *text* in points when set at *font_size*."""
    units = sum(char_width(ch, bold) for ch in text)
    return units * font_size / 1000.0
