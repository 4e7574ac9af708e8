"""Telegram legacy Markdown building blocks (parse_mode="Markdown")."""
from __future__ import annotations

NEW_LINE = "  \r\n"
PARAGRAPH = "\r\n\r\n"

_SPECIAL = ("_", "*", "`", "[")

def escape(text: str | None) -> str:
    """Backslash-escape entity markers in text placed outside an entity."""
    s = text or ""
    for ch in _SPECIAL:
        s = s.replace(ch, "\\" + ch)
    return s

def bold(text) -> str:
    return f"*{text}*"

def italic(text) -> str:
    return f"_{text}_"

def code(text) -> str:
    return f"`{text}`"

def link(text, url: str) -> str:
    return f"[{text}]({url})"

def num(value) -> str:
    """Render a score: 7.0 -> "7", 7.5 -> "7.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
