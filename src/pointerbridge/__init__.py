"""pointerbridge -- HTTP control surface for pointer and keyboard automation.

This package exposes a small REST-style API that turns GET requests into
xdotool invocations, so that a remote recorder (or any HTTP client) can
move, click, drag and type on the machine the server runs on.
"""

__version__ = "0.1.0"
