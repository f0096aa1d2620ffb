"""Call-site scanning for translation calls inside template text.

Recognized call-sites are template actions whose first word is one of the
translation functions (``T``, ``t`` or ``i18n``), followed by a language
argument and a double-quoted message literal::

    {{ T .Lang "Welcome back, %s" .User }}       spaced (Go templates)
    {{ i18n(lang, "Welcome back, %s", user) }}   parenthesized (Jinja)

The grammar is built from small token patterns so that escape handling and
the treatment of malformed input can be tested without touching files:

    action_open  := "{{" ["-"] ws*
    keyword      := "T" | "t" | "i18n"
    paren_group  := "(" (byte except ( ) " | quoted_string)* ")"
    language     := quoted_string | paren_group | bare_token
    literal      := '"' (byte except " \\ CR LF | "\\" byte)* '"'
    spaced_call  := action_open keyword ws+ language ws+ literal
    paren_call   := action_open keyword ws* "(" ws* language ws* "," ws* literal
    call_site    := (spaced_call | paren_call) action_close

Anything after the literal up to the closing ``}}`` is ignored. Call-sites
with an unterminated literal or action never match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from template_i18n.extract.position import position_for

if TYPE_CHECKING:
    from template_i18n.extract.catalog import MessageCatalog

KEYWORDS = ("i18n", "T", "t")

ACTION_OPEN = rb"\{\{-?\s*"
KEYWORD = rb"(?P<keyword>" + b"|".join(k.encode() for k in KEYWORDS) + rb")"
QUOTED_STRING = rb'"(?:[^"\\\r\n]|\\.)*"'
BARE_TOKEN = rb'[^\s"(),{}]+'
PAREN_GROUP = rb'\((?:[^()"]|' + QUOTED_STRING + rb")*\)"
LANGUAGE = rb"(?:" + QUOTED_STRING + rb"|" + PAREN_GROUP + rb"|" + BARE_TOKEN + rb")"
LITERAL = rb'"(?P<message>(?:[^"\\\r\n]|\\.)*)"'
ACTION_CLOSE = rb"[^{}]*?\}\}"

SPACED_CALL = ACTION_OPEN + KEYWORD + rb"\s+" + LANGUAGE + rb"\s+" + LITERAL + ACTION_CLOSE
PAREN_CALL = (
    ACTION_OPEN + KEYWORD + rb"\s*\(\s*" + LANGUAGE + rb"\s*,\s*" + LITERAL + ACTION_CLOSE
)

CALL_PATTERNS: tuple[re.Pattern[bytes], ...] = (
    re.compile(SPACED_CALL),
    re.compile(PAREN_CALL),
)

_ESCAPE = re.compile(rb"\\(.)", re.DOTALL)


@dataclass(frozen=True)
class CallSite:
    """A translation call found in a buffer.

    Attributes:
        message: Literal message text with ``\\"`` resolved to ``"``
        offset: Byte offset of the literal's opening quote
        keyword: Translation function name used at the call-site
    """

    message: str
    offset: int
    keyword: str


def unescape_literal(raw: bytes) -> str:
    """Resolve escaped quotes in a captured literal body.

    Only ``\\"`` is rewritten; every other escape pair is kept verbatim.
    """

    def _replace(match: re.Match[bytes]) -> bytes:
        return b'"' if match.group(1) == b'"' else match.group(0)

    return _ESCAPE.sub(_replace, raw).decode("utf-8", errors="replace")


def scan(content: bytes) -> list[CallSite]:
    """Find every translation call-site in ``content``, left to right."""
    found: dict[int, CallSite] = {}
    for pattern in CALL_PATTERNS:
        for match in pattern.finditer(content):
            offset = match.start("message") - 1
            if offset in found:
                continue
            found[offset] = CallSite(
                message=unescape_literal(match.group("message")),
                offset=offset,
                keyword=match.group("keyword").decode("ascii"),
            )
    return [found[offset] for offset in sorted(found)]


def extract_from_content(catalog: MessageCatalog, content: bytes, rel_path: str) -> int:
    """Scan ``content`` and record every call-site in ``catalog``.

    Returns:
        Number of call-sites recorded
    """
    sites = scan(content)
    for site in sites:
        catalog.add(site.message, position_for(content, site.offset, rel_path))
    return len(sites)
