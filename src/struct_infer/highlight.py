"""Terminal syntax highlighting for generated declarations."""

from __future__ import annotations

import os
import sys
from typing import IO, Optional

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import GoLexer, JsonLexer, PythonLexer

from .exceptions import ConfigurationError

LEXERS = {
    "go": GoLexer,
    "pydantic": PythonLexer,
    "json_schema": JsonLexer,
}


def want_color(mode: str = "auto", stream: Optional[IO[str]] = None) -> bool:
    """Resolve a color mode.

    mode: 'auto' | 'always' | 'never'
    'auto' colors only when `stream` (stdout by default) is a TTY and
    NO_COLOR is not set.
    """
    if mode == "always":
        return True
    if mode == "never":
        return False
    if mode != "auto":
        raise ConfigurationError("Unknown color mode", config_key="color", config_value=mode)

    stream = stream or sys.stdout
    return bool(getattr(stream, "isatty", lambda: False)()) and not os.getenv("NO_COLOR")


def colorize(text: str, format: str, mode: str = "auto") -> str:
    """Highlight `text` written in output `format` when color is wanted."""
    lexer = LEXERS.get(format)
    if lexer is None or not want_color(mode):
        return text
    return highlight(text, lexer(), Terminal256Formatter())
