"""Runtime translation helpers for templates.

Templates call ``T``/``t``/``i18n`` with a language and a message key; this
module resolves the language to a :class:`LanguageTag`, looks up a cached
:class:`Printer` for it and formats the translated message.

Register :data:`FUNC_MAP` with the template engine, e.g. for Jinja::

    env.globals.update(FUNC_MAP)
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from gettext import NullTranslations
from pathlib import Path

import structlog
from babel import Locale, UnknownLocaleError
from babel.support import Translations

from template_i18n.errors import InvalidLanguageError

log = structlog.get_logger()

DEFAULT_DOMAIN = "messages"


@dataclass(frozen=True)
class LanguageTag:
    """A resolved language, stored as a canonical Babel identifier.

    Build one with :meth:`parse`, :meth:`from_locale` or :meth:`coerce`.
    """

    code: str

    @classmethod
    def from_locale(cls, locale: Locale) -> LanguageTag:
        return cls(code=str(locale))

    @classmethod
    def parse(cls, value: str) -> LanguageTag:
        """Parse a BCP 47 (``en-US``) or POSIX (``en_US``) identifier.

        Raises:
            InvalidLanguageError: If Babel does not know the locale
        """
        identifier = value.strip().replace("-", "_")
        if not identifier:
            raise InvalidLanguageError(value, "empty identifier")
        try:
            locale = Locale.parse(identifier)
        except (ValueError, TypeError, UnknownLocaleError) as e:
            raise InvalidLanguageError(value, str(e)) from e
        return cls.from_locale(locale)

    @classmethod
    def coerce(cls, value: object) -> LanguageTag:
        """Resolve any accepted language value to a tag.

        Accepted shapes are a :class:`LanguageTag`, a Babel :class:`Locale`,
        a ``str``, or an object with its own ``__str__``.

        Raises:
            InvalidLanguageError: For any other value
        """
        if isinstance(value, LanguageTag):
            return value
        if isinstance(value, Locale):
            return cls.from_locale(value)
        if isinstance(value, str):
            return cls.parse(value)
        if value is None or isinstance(value, bytes | bytearray | int | float):
            raise InvalidLanguageError(value, "unsupported type")
        if type(value).__str__ is not object.__str__:
            return cls.parse(str(value))
        raise InvalidLanguageError(value, "unsupported type")

    @property
    def locale(self) -> Locale:
        return Locale.parse(self.code)

    def __str__(self) -> str:
        return self.code


ENGLISH = LanguageTag("en")


class Printer:
    """Formats messages for one language.

    Keys are looked up in a gettext catalog; without a catalog the key
    itself is used. Arguments are applied with ``%`` formatting.
    """

    def __init__(self, tag: LanguageTag, translations: NullTranslations | None = None) -> None:
        self.tag = tag
        self.translations = translations or NullTranslations()

    @classmethod
    def load(
        cls,
        tag: LanguageTag,
        dirname: str | Path,
        domain: str = DEFAULT_DOMAIN,
        fallback: LanguageTag | None = None,
    ) -> Printer:
        """Load compiled catalogs from ``dirname/<locale>/LC_MESSAGES``.

        ``fallback`` is tried when no catalog exists for ``tag``.
        """
        locales = [tag.code]
        if fallback is not None and fallback != tag:
            locales.append(fallback.code)
        translations = Translations.load(str(dirname), locales, domain)
        log.debug(
            "Loaded translations",
            locale=tag.code,
            domain=domain,
            found=isinstance(translations, Translations),
        )
        return cls(tag, translations)

    def sprintf(self, key: str, *args: object) -> str:
        """Translate ``key`` and apply printf-style formatting.

        Formatting always runs, so ``%%`` becomes ``%`` even without
        arguments. A mismatch between placeholders and arguments never
        raises: the unformatted message is returned, with any arguments
        appended as ``%!(EXTRA type=value, ...)``.
        """
        message = self.translations.gettext(key)
        try:
            return message % args
        except (TypeError, ValueError) as e:
            log.warning(
                "Message formatting failed",
                locale=self.tag.code,
                key=key,
                args=len(args),
                error=str(e),
            )
        if not args:
            return message
        extra = ", ".join(f"{type(arg).__name__}={arg}" for arg in args)
        return f"{message}%!(EXTRA {extra})"

    def __repr__(self) -> str:
        return f"Printer({self.tag.code!r})"


class PrinterRegistry:
    """Thread-safe store of per-language printers and a fallback language.

    :meth:`get` creates and caches a default printer for a tag seen for the
    first time; the insert happens under the lock, so every caller observes
    the same fully built printer.
    """

    def __init__(
        self,
        fallback: LanguageTag = ENGLISH,
        factory: Callable[[LanguageTag], Printer] = Printer,
    ) -> None:
        self._lock = threading.Lock()
        self._printers: dict[LanguageTag, Printer] = {}
        self._fallback = fallback
        self._factory = factory

    @property
    def fallback(self) -> LanguageTag:
        with self._lock:
            return self._fallback

    def set_fallback(self, tag: LanguageTag) -> None:
        with self._lock:
            self._fallback = tag

    def get(self, tag: LanguageTag) -> Printer:
        with self._lock:
            printer = self._printers.get(tag)
            if printer is None:
                printer = self._factory(tag)
                self._printers[tag] = printer
            return printer

    def set(self, tag: LanguageTag, printer: Printer) -> None:
        with self._lock:
            self._printers[tag] = printer

    def load(self, tag: LanguageTag, dirname: str | Path, domain: str = DEFAULT_DOMAIN) -> Printer:
        """Load catalogs for ``tag`` (falling back to :attr:`fallback`) and store them."""
        printer = Printer.load(tag, dirname, domain, fallback=self.fallback)
        self.set(tag, printer)
        return printer

    def clear(self) -> None:
        with self._lock:
            self._printers.clear()


# Process-wide registry used by the template functions
registry = PrinterRegistry()


def fallback() -> LanguageTag:
    return registry.fallback


def set_fallback(tag: LanguageTag) -> None:
    registry.set_fallback(tag)


def printer(tag: LanguageTag) -> Printer:
    return registry.get(tag)


def set_printer(tag: LanguageTag, value: Printer) -> None:
    registry.set(tag, value)


def T(tag: LanguageTag, key: str, *args: object) -> str:  # noqa: N802
    """Translate ``key`` for an already resolved tag."""
    return printer(tag).sprintf(key, *args)


def trans(lang: object, key: str, *args: object) -> str:
    """Template entry point: resolve ``lang`` then translate ``key``.

    Raises:
        InvalidLanguageError: If ``lang`` is not an accepted language value
    """
    return T(LanguageTag.coerce(lang), key, *args)


FUNC_MAP: dict[str, Callable[..., object]] = {
    "L": LanguageTag.parse,
    "T": trans,
    "t": trans,
    "i18n": trans,
}
