"""Reading HookBridge config layers from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from hookbridge.core.errors import LoadError

logger = logging.getLogger(__name__)


def load_json_file(path: Path, error_context: str = "") -> dict[str, Any]:
    """Read one config layer.

    A blank file is an empty layer. A UTF-8 BOM is accepted, since editors
    on Windows add one.

    Raises:
        LoadError: If the file is missing, unreadable, not valid JSON or not
            a JSON object. The message starts with ``error_context``.
    """
    prefix = f"{error_context}: " if error_context else ""

    if not path.exists():
        raise LoadError(f"{prefix}File not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig").strip()
    except OSError as e:
        raise LoadError(f"{prefix}Failed to read file {path}: {e}") from e
    if not text:
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(f"{prefix}Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise LoadError(f"{prefix}Expected object in {path}, got {type(data).__name__}")
    return data


def load_json_file_optional(path: Path, error_context: str = "") -> dict[str, Any] | None:
    """Like load_json_file, but a missing layer gives None instead of an error."""
    if not path.is_file():
        logger.debug("No config layer at %s", path)
        return None
    logger.debug("Loading config layer: %s", path)
    return load_json_file(path, error_context)
