"""
Retry manager with bounded backoff.

Provider calls are retried in an explicit loop with an attempt counter; the
delay after failed attempt k is strictly increasing in k:

- LINEAR:       initial_delay * k
- EXPONENTIAL:  initial_delay * backoff_factor ** (k - 1)
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from doctranslate.core.exceptions import TranslationError, RetryExhaustedError
from doctranslate.utils.unified_logger import LogType, get_logger


class RetryStrategy(Enum):
    """Backoff strategies."""
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_retries: Retries after the first attempt (total attempts = max_retries + 1)
        initial_delay: Base delay in seconds
        backoff_factor: Multiplier for exponential backoff
        strategy: Retry strategy to use
    """
    max_retries: int = 3
    initial_delay: float = 2.0
    backoff_factor: float = 2.0
    strategy: RetryStrategy = RetryStrategy.LINEAR

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    @classmethod
    def from_translation_config(cls, config) -> 'RetryConfig':
        """Build from a TranslationConfig (delays there are milliseconds)."""
        return cls(
            max_retries=config.max_retries,
            initial_delay=config.retry_delay_seconds,
            strategy=RetryStrategy(config.retry_strategy)
        )


class RetryManager:
    """Executes an async operation with bounded retries."""

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """
        Args:
            config: Retry configuration
            sleep: Awaitable used for backoff pauses (injectable for tests)
        """
        self.config = config or RetryConfig()
        self._sleep = sleep
        self.logger = get_logger()

    def calculate_delay(self, attempt: int) -> float:
        """Delay in seconds after the given failed attempt (1-based)."""
        if self.config.strategy == RetryStrategy.LINEAR:
            return self.config.initial_delay * attempt
        return self.config.initial_delay * (self.config.backoff_factor ** (attempt - 1))

    async def execute_with_retry(
        self,
        func: Callable[..., Awaitable[Any]],
        *args,
        operation_id: Optional[str] = None,
        **kwargs
    ) -> Any:
        """Execute an async function with retry logic.

        Args:
            func: Async function to execute
            *args: Positional arguments for func
            operation_id: Label used in log messages
            **kwargs: Keyword arguments for func

        Returns:
            Result of func

        Raises:
            RetryExhaustedError: If all attempts failed
            TranslationError: If a non-recoverable translation error was raised
        """
        op_id = operation_id or getattr(func, '__name__', 'operation')
        max_attempts = self.config.max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                result = await func(*args, **kwargs)
            except TranslationError as error:
                if not error.recoverable:
                    self.logger.error(f"Non-recoverable error in {op_id}: {error}")
                    raise
                last_error = error
            except Exception as error:
                last_error = error
            else:
                if attempt > 1:
                    self.logger.info(f"Operation {op_id} succeeded after {attempt} attempts", LogType.RETRY)
                return result

            if attempt == max_attempts:
                break

            delay = self.calculate_delay(attempt)
            self.logger.warning(
                f"Attempt {attempt}/{max_attempts} failed for {op_id}: "
                f"{type(last_error).__name__}: {last_error}. Retrying in {delay:.2f}s...",
                LogType.RETRY,
                {'attempt': attempt, 'delay': delay}
            )
            if delay > 0:
                await self._sleep(delay)

        self.logger.error(
            f"Retry exhausted for {op_id} after {max_attempts} attempts: {last_error}",
            LogType.RETRY
        )
        raise RetryExhaustedError(
            f"Translation failed after {max_attempts} attempts: {last_error}",
            original_error=last_error,
            attempts=max_attempts
        )
