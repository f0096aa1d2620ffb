"""Extraction run orchestration.

Walks the template tree, scans every matching file, aggregates the
messages and hands the ordered result to both output writers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from template_i18n.config import normalize_extensions
from template_i18n.errors import WriteError
from template_i18n.extract import writers
from template_i18n.extract.catalog import Message, MessageCatalog
from template_i18n.extract.scanner import extract_from_content
from template_i18n.extract.walker import is_template, walk_templates

log = structlog.get_logger()


@dataclass
class ExtractionResult:
    """Summary of a completed extraction run."""

    messages: list[Message]
    files_scanned: int = 0
    call_sites: int = 0
    written: list[str] = field(default_factory=list)


class Extractor:
    """One extraction run's configuration and entry points.

    Args:
        root: Directory to scan
        out: JSON catalog path; empty disables the JSON output
        package: Package name for the stub module
        stub_file: Path of the stub module (always written)
        *extensions: Template extensions to match, case-insensitive
    """

    def __init__(
        self,
        root: str | Path,
        out: str | Path,
        package: str,
        stub_file: str | Path,
        *extensions: str,
    ) -> None:
        self.root = str(root)
        self.out = str(out) if out else ""
        self.package = package
        self.stub_file = str(stub_file)
        self.extensions = normalize_extensions(extensions)

        self._files_scanned = 0
        self._call_sites = 0

    def is_template(self, path: str) -> bool:
        return is_template(path, self.extensions)

    def extract(self) -> list[Message]:
        """Scan the tree and return messages in first-seen order.

        Raises:
            TraversalError: If the root or a directory cannot be read
            ScanError: If a matching file cannot be read
        """
        catalog = MessageCatalog()
        files = 0
        for rel_path, content in walk_templates(self.root, self.extensions):
            found = extract_from_content(catalog, content, rel_path)
            files += 1
            log.debug("Scanned template", path=rel_path, call_sites=found)

        self._files_scanned = files
        self._call_sites = catalog.call_sites
        log.info(
            "Extracted messages",
            root=self.root,
            files=files,
            call_sites=catalog.call_sites,
            messages=len(catalog),
        )
        return catalog.messages()

    def save_messages(self, messages: list[Message]) -> None:
        writers.save_messages(messages, self.out)

    def save_stub(self, messages: list[Message]) -> None:
        writers.save_stub(messages, self.package, self.stub_file)

    def build_stub(self, messages: list[Message]) -> str:
        return writers.build_stub(messages, self.package, filename=self.stub_file)

    def run(self) -> ExtractionResult:
        """Extract and write both outputs.

        Both writers are attempted even if the first one fails; any failure
        is reported afterwards as a single :class:`WriteError`.
        """
        messages = self.extract()
        result = ExtractionResult(
            messages=messages,
            files_scanned=self._files_scanned,
            call_sites=self._call_sites,
        )

        failures: list[WriteError] = []
        for path, write in ((self.out, self.save_messages), (self.stub_file, self.save_stub)):
            try:
                write(messages)
            except WriteError as e:
                log.error("Output failed", path=e.details["path"], reason=e.details["reason"])
                failures.append(e)
                continue
            if path:
                result.written.append(path)

        if failures:
            first = failures[0]
            raise WriteError(
                str(first.details["path"]),
                str(first.details["reason"]),
                failures=[
                    {"path": str(f.details["path"]), "reason": str(f.details["reason"])}
                    for f in failures
                ],
            ) from first
        return result
