"""xdotool-backed pointer and keyboard automation.

Wraps the external xdotool binary and provides the pure helpers
(button resolution, drag interpolation) used by the HTTP handlers.
"""

from pointerbridge.automation.buttons import button_number, resolve_button
from pointerbridge.automation.drag import drag_path, normalize_drag, step_delay
from pointerbridge.automation.xdotool import XdotoolError, XdotoolRunner

__all__ = [
    "XdotoolError",
    "XdotoolRunner",
    "button_number",
    "drag_path",
    "normalize_drag",
    "resolve_button",
    "step_delay",
]
