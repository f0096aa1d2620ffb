"""Output writers for extracted messages.

Two artifacts are produced from the same ordered message list:

- A JSON catalog (``{"messages": [{"id": ..., "positions": [...]}]}``)
- A synthetic Python module with one ``_()`` call per message, so that
  ``pybabel extract`` can discover every literal by static analysis
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

from template_i18n.config import DEFAULT_PACKAGE
from template_i18n.errors import WriteError
from template_i18n.extract.catalog import Message

log = structlog.get_logger()

GENERATED_MARKER = "# Code generated by i18n-extract. DO NOT EDIT."
STUB_FUNCTION = "_i18n_extract"


_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
}


class MessageEntry(BaseModel):
    """One message in the JSON catalog."""

    id: str
    positions: list[str] = Field(default_factory=list)


class OutputJSON(BaseModel):
    """JSON catalog envelope."""

    messages: list[MessageEntry] = Field(default_factory=list)

    @classmethod
    def from_messages(cls, messages: Sequence[Message]) -> OutputJSON:
        return cls(
            messages=[MessageEntry(id=m.id, positions=list(m.positions)) for m in messages]
        )


def render_json(messages: Sequence[Message]) -> str:
    """Serialize messages to the JSON catalog format."""
    return OutputJSON.from_messages(messages).model_dump_json(indent=2) + "\n"


def save_messages(messages: Sequence[Message], out: str | Path) -> None:
    """Write the JSON catalog to ``out``; an empty path disables the output.

    Raises:
        WriteError: If the file cannot be created or written
    """
    if not out:
        log.debug("JSON output disabled")
        return

    data = render_json(messages).encode("utf-8")
    try:
        Path(out).write_bytes(data)
    except OSError as e:
        raise WriteError(str(out), e.strerror or str(e)) from e

    log.info("Wrote message catalog", path=str(out), messages=len(messages))


def quote_literal(text: str) -> str:
    """Quote ``text`` as a double-quoted Python string literal.

    Backslash, quote, tab, newline and carriage return become two-character
    escapes; other control characters use ``\\x``/``\\u`` escapes.
    """
    parts = ['"']
    for char in text:
        escaped = _ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif char.isprintable():
            parts.append(char)
        elif ord(char) <= 0xFF:
            parts.append(f"\\x{ord(char):02x}")
        elif ord(char) <= 0xFFFF:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(f"\\U{ord(char):08x}")
    parts.append('"')
    return "".join(parts)


def sanitize_package_name(name: str) -> str:
    """Reduce ``name`` to identifier characters.

    Letters, decimal digits and ``_`` are kept (Unicode letters included),
    everything else is dropped, then a single leading digit is removed.
    Falls back to ``main`` when nothing is left.
    """
    cleaned = "".join(c for c in name if c.isalpha() or c.isdecimal() or c == "_")
    if cleaned and cleaned[0].isdecimal():
        cleaned = cleaned[1:]
    return cleaned or DEFAULT_PACKAGE


def build_stub(messages: Sequence[Message], package: str, filename: str = "<stub>") -> str:
    """Render the synthetic stub module for ``messages``.

    The result is compiled before being returned.

    Raises:
        WriteError: If the generated source does not compile
    """
    package_name = sanitize_package_name(package)
    lines = [
        GENERATED_MARKER,
        f'"""Translatable template messages for the ``{package_name}`` package."""',
        "",
        f"__package_name__ = {quote_literal(package_name)}",
        "",
        "",
        "def _(message, *args):",
        "    return message",
        "",
        "",
        f"def {STUB_FUNCTION}():",
    ]
    if messages:
        lines.extend(f"    _({quote_literal(m.id)})" for m in messages)
    else:
        lines.append("    pass")
    source = "\n".join(lines) + "\n"

    try:
        compile(source, filename, "exec")
    except (SyntaxError, ValueError) as e:
        raise WriteError(filename, f"generated stub does not compile: {e}") from e
    return source


def save_stub(messages: Sequence[Message], package: str, path: str | Path) -> None:
    """Build the stub module and write it to ``path``.

    Missing parent directories are created.

    Raises:
        WriteError: If the stub cannot be built or written
    """
    path = Path(path)
    source = build_stub(messages, package, filename=str(path))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(source.encode("utf-8"))
    except OSError as e:
        raise WriteError(str(path), e.strerror or str(e)) from e

    log.info("Wrote stub module", path=str(path), messages=len(messages))
