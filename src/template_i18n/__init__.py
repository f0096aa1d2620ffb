"""Template i18n toolkit.

Extracts translatable messages from template files into a JSON catalog and a
synthetic Python stub that Babel's extractor can pick up, and provides the
runtime helpers templates call to translate those messages.
"""

import logging

import structlog

# Configure logging FIRST before any other modules use structlog
logging.getLogger("babel").setLevel(logging.WARNING)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(colors=False, pad_event_to=30),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=False,
)

from template_i18n.config import Settings  # noqa: E402 - must come after structlog config
from template_i18n.extract import Extractor, Message  # noqa: E402

__version__ = "0.1.0"
__all__ = ["Extractor", "Message", "Settings", "__version__"]
