"""
Exception hierarchy for the document translation pipeline.

Every runtime failure the pipeline can surface derives from TranslationError,
so drivers can decide per level whether to propagate or absorb it.
"""

from typing import Optional, Dict, Any, List


class TranslationError(Exception):
    """Base exception for all translation-related errors.

    Attributes:
        message: Human-readable error message
        context: Additional context about the error
        recoverable: Whether the error can potentially be recovered from
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}: {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base += f" (context: {context_str})"
        return base


class ConfigurationError(TranslationError):
    """Raised when the translation configuration is invalid."""
    pass


# ============================================================================
# Provider and retry errors
# ============================================================================

class ProviderError(TranslationError):
    """Raised by a translation provider when a single call fails.

    Provider failures are transient by default and therefore retried.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = True
    ):
        ctx = context or {}
        if status_code is not None:
            ctx['status_code'] = status_code
        super().__init__(message, ctx, recoverable)
        self.status_code = status_code


class RetryExhaustedError(TranslationError):
    """Raised when every retry attempt for a chunk has failed.

    Attributes:
        original_error: The last error raised by the provider
        attempts: Total number of attempts made
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        attempts: int = 0
    ):
        super().__init__(message, {'attempts': attempts}, recoverable=False)
        self.original_error = original_error
        self.attempts = attempts


# ============================================================================
# Output integrity errors
# ============================================================================

class RestorationDefect(TranslationError):
    """Raised when placeholder tokens survive restoration.

    Attributes:
        residual_tokens: Placeholder-shaped tokens still present in the output
    """

    def __init__(self, message: str, residual_tokens: Optional[List[str]] = None):
        tokens = residual_tokens or []
        super().__init__(message, {'residual_count': len(tokens)})
        self.residual_tokens = tokens


class JsonValidationError(TranslationError):
    """Raised when a JSON document cannot be parsed or fails to re-parse after translation."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error
