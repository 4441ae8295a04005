"""YAML persistence for macros."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from pointerbridge.macro.models import Macro

logger = logging.getLogger(__name__)


class MacroError(Exception):
    """Raised when a macro file cannot be read or is invalid."""


def load_macro(path: Path | str) -> Macro:
    """Read and validate a macro from a YAML file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise MacroError(f"Cannot read macro {path}: {e}") from e
    except yaml.YAMLError as e:
        raise MacroError(f"Invalid YAML in {path}: {e}") from e

    try:
        macro = Macro.model_validate(data)
    except ValidationError as e:
        raise MacroError(f"Invalid macro {path}: {e}") from e
    logger.info("Loaded macro %r (%d steps) from %s", macro.name, len(macro.steps), path)
    return macro


def save_macro(macro: Macro, path: Path | str) -> None:
    """Write a macro to a YAML file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(macro.model_dump(mode="json"), f, sort_keys=False)
    logger.info("Saved macro %r (%d steps) to %s", macro.name, len(macro.steps), path)
