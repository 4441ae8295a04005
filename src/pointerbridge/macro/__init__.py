"""Recorded macros: step models, YAML storage, recording and playback."""

from pointerbridge.macro.models import Macro, MacroStep
from pointerbridge.macro.player import MacroPlayer
from pointerbridge.macro.store import MacroError, load_macro, save_macro

__all__ = ["Macro", "MacroError", "MacroPlayer", "MacroStep", "load_macro", "save_macro"]
