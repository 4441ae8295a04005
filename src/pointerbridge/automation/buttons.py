"""Mouse button names and xdotool button numbers.

xdotool identifies buttons by X11 number:
    1 = left, 2 = middle, 3 = right

Unknown names fall back to the left button rather than failing.
"""

from __future__ import annotations

DEFAULT_BUTTON = "left"

BUTTON_LEFT = "1"
BUTTON_MIDDLE = "2"
BUTTON_RIGHT = "3"

BUTTON_NUMBERS: dict[str, str] = {
    "left": BUTTON_LEFT,
    "middle": BUTTON_MIDDLE,
    "right": BUTTON_RIGHT,
}


def resolve_button(name: str | None) -> str:
    """Return the button name, substituting 'left' when empty."""
    if not name:
        return DEFAULT_BUTTON
    return name


def button_number(name: str | None) -> str:
    """Map a button name to its xdotool number.

    Args:
        name: exactly 'left', 'right' or 'middle'. Empty or
              unrecognized names resolve to the left button.

    Returns:
        The button number as the string xdotool expects on its command line.
    """
    return BUTTON_NUMBERS.get(name or "", BUTTON_LEFT)
