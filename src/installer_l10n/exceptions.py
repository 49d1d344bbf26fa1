"""Exception classes for installer-l10n operations."""


class L10nError(Exception):
    """Base exception for localization operations."""

    error_prefix: str = "Localization error"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
    ) -> None:
        """Initialize error with message and the offending field/value.

        Args:
            message: Error message describing the failure.
            field: Optional name of the configuration field involved.
            value: Optional offending value.

        """
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.value is not None:
            return f"{self.error_prefix}: {self.value}"
        return f"{self.error_prefix}: {self.message}"


class ValidationFailure(L10nError):
    """Raised when a requested value is rejected before any change."""

    error_prefix = "Validation failed"


class UnknownLocaleError(ValidationFailure):
    """Raised when a locale code is not in the locale catalog."""

    error_prefix = "Unknown locale code"

    def __init__(self, code: str, field: str = "locales") -> None:
        """Initialize with the offending locale code."""
        super().__init__(f"Unknown locale code: {code}", field, code)


class UnknownTimezoneError(ValidationFailure):
    """Raised when a timezone is not in the timezone catalog."""

    error_prefix = "Unknown timezone"

    def __init__(self, code: str, field: str = "timezone") -> None:
        """Initialize with the offending timezone."""
        super().__init__(f"Unknown timezone: {code}", field, code)


class InvalidKeymapError(ValidationFailure):
    """Raised when a keymap is malformed or not in the keymap catalog."""

    error_prefix = "Invalid keymap"

    def __init__(self, keymap: str, field: str = "keymap") -> None:
        """Initialize with the offending keymap identifier."""
        super().__init__(f"Invalid keymap: {keymap}", field, keymap)


class InvalidRequestError(ValidationFailure):
    """Raised when an update request has the wrong shape."""

    error_prefix = "Invalid request"


class CommitError(L10nError):
    """Raised when applying a change to the running system fails."""

    error_prefix = "Could not apply the changes"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize commit error.

        Args:
            message: Error message describing the failure.
            field: Field whose side effect failed.
            value: Value that was being applied.
            cause: Underlying OS or process error.

        """
        super().__init__(message, field, value)
        self.cause = cause

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"{self.error_prefix}: {self.message}"


class CatalogLoadError(L10nError):
    """Raised when a reference catalog cannot be loaded."""

    error_prefix = "Could not load catalog"

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.field:
            return f"{self.error_prefix} '{self.field}': {self.message}"
        return f"{self.error_prefix}: {self.message}"
