"""Deterministic template discovery under a root directory."""

from __future__ import annotations

import os
from collections.abc import Collection, Iterator
from pathlib import Path

import structlog

from template_i18n.errors import ScanError, TraversalError

log = structlog.get_logger()


def is_template(path: str, extensions: Collection[str]) -> bool:
    """Check whether ``path`` has one of the (lower-case) ``extensions``."""
    if not extensions:
        return False
    return os.path.splitext(path)[1].lower() in extensions


def walk_templates(root: str | Path, extensions: Collection[str]) -> Iterator[tuple[str, bytes]]:
    """Yield ``(relative_path, content)`` for every matching regular file.

    Entries are visited in sorted name order, descending into a directory
    as soon as it is reached, so the sequence is stable for a given tree.
    Symbolic links are neither followed nor scanned.

    Raises:
        TraversalError: If the root or a directory below it cannot be read
        ScanError: If a matching file cannot be read
    """
    root_path = Path(root)
    if not root_path.is_dir():
        reason = "not a directory" if root_path.exists() else "no such directory"
        raise TraversalError(str(root_path), reason)

    yield from _walk_dir(root_path, root_path, extensions)


def _walk_dir(
    root: Path, directory: Path, extensions: Collection[str]
) -> Iterator[tuple[str, bytes]]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise TraversalError(str(directory), e.strerror or str(e)) from e

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_dir(root, Path(entry.path), extensions)
        elif entry.is_file(follow_symlinks=False) and is_template(entry.name, extensions):
            rel_path = Path(entry.path).relative_to(root).as_posix()
            try:
                content = Path(entry.path).read_bytes()
            except OSError as e:
                raise ScanError(rel_path, e.strerror or str(e)) from e
            log.debug("Read template", path=rel_path, size=len(content))
            yield rel_path, content
