"""Byte offset to line/column resolution."""

UNKNOWN = "?"


def position_for(content: bytes, offset: int, rel_path: str) -> str:
    """Resolve a byte offset in ``content`` to ``path:line:col``.

    Line and column are 1-based and counted in bytes. Offsets outside the
    buffer resolve to ``path:?:?`` instead of raising.
    """
    if offset < 0 or offset >= len(content):
        return f"{rel_path}:{UNKNOWN}:{UNKNOWN}"

    line = content.count(b"\n", 0, offset) + 1
    col = offset - content.rfind(b"\n", 0, offset)
    return f"{rel_path}:{line}:{col}"
