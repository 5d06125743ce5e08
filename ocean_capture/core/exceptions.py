"""Unified capture exception taxonomy.

Every domain exception inherits from ``CaptureError`` and carries
structured context fields so the CLI can report failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``  : input/configuration violations, never retryable.
- ``PermanentError``   : unrecoverable domain failures.
- ``ContractError``    : the provider returned something we cannot interpret.

Errors outside these bases (provider failures) are ``transient`` when
``retryable`` and ``permanent`` otherwise.  Nothing in the capture
pipeline retries; ``retryable`` is informational and surfaces in
``to_error_dict()`` for operators.
"""

from __future__ import annotations


class CaptureError(Exception):
    """Base exception for all capture-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"authenticate"``, ``"fetch_imagery"``).
        code: Machine-readable error code (e.g. ``"AUTH_REQUIRED"``).
        retryable: Whether the failure is of a transient kind.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(CaptureError):
    """Input or configuration validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(CaptureError):
    """Unrecoverable domain failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(CaptureError):
    """The provider response does not match any shape we understand."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]
