"""HTTP control surface.

Exposes the xdotool automation operations as REST-style GET routes.
"""
