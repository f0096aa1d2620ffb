"""Custom exceptions for the template i18n toolkit."""


class I18nError(Exception):
    """Base exception for all template i18n errors."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TraversalError(I18nError):
    """Raised when the scan root or one of its directories cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Cannot traverse {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ScanError(I18nError):
    """Raised when a matching template file cannot be read.

    Malformed call syntax inside a readable file is never an error; such
    call-sites are skipped.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Cannot read template {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class WriteError(I18nError):
    """Raised when an output file cannot be built, created or written."""

    def __init__(
        self,
        path: str,
        reason: str,
        *,
        failures: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(
            f"Cannot write {path}: {reason}",
            details={"path": path, "reason": reason, "failures": failures or []},
        )


class InvalidLanguageError(I18nError):
    """Raised when a value cannot be resolved to a language tag."""

    def __init__(self, value: object, reason: str | None = None) -> None:
        reason_str = f": {reason}" if reason else ""
        super().__init__(
            f"Invalid language tag {value!r}{reason_str}",
            details={"value": repr(value), "type": type(value).__name__},
        )
