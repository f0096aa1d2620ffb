"""Template message extraction pipeline.

Tree walk -> call-site scan -> aggregation -> JSON catalog and stub module.
"""

from template_i18n.extract.catalog import Message, MessageCatalog
from template_i18n.extract.extractor import ExtractionResult, Extractor
from template_i18n.extract.position import position_for
from template_i18n.extract.scanner import CallSite, extract_from_content, scan
from template_i18n.extract.walker import is_template, walk_templates
from template_i18n.extract.writers import (
    OutputJSON,
    build_stub,
    quote_literal,
    sanitize_package_name,
    save_messages,
    save_stub,
)

__all__ = [
    "CallSite",
    "ExtractionResult",
    "Extractor",
    "Message",
    "MessageCatalog",
    "OutputJSON",
    "build_stub",
    "extract_from_content",
    "is_template",
    "position_for",
    "quote_literal",
    "sanitize_package_name",
    "save_messages",
    "save_stub",
    "scan",
    "walk_templates",
]
