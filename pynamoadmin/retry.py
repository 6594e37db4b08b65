"""
Retry handlers

A retry handler is anything with a ``retry(operation)`` method that calls
``operation`` one or more times and returns its result. Handlers are
interchangeable on a :class:`~pynamoadmin.connection.Connection` or
:class:`~pynamoadmin.connection.TableConnection`.

Failed attempts and scheduled backoffs are logged, and announced on the
:data:`~pynamoadmin.signals.retry_attempt_failed` and
:data:`~pynamoadmin.signals.retry_scheduled` signals.
"""
import logging
import random
import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from botocore.exceptions import ClientError

from pynamoadmin.constants import (
    CODE, ERROR, HTTP_INTERNAL_SERVER_ERROR, HTTP_STATUS_CODE, RATE_LIMITING_ERROR_CODES, RESPONSE_METADATA)
from pynamoadmin.exceptions import PynamoAdminException
from pynamoadmin.settings import get_settings_value
from pynamoadmin.signals import retry_attempt_failed, retry_scheduled

if sys.version_info >= (3, 8):
    from typing import Protocol
else:
    from typing_extensions import Protocol

_T = TypeVar('_T')

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryDecision:
    retryable: bool


def get_error_code(error: BaseException) -> Optional[str]:
    """
    Returns the service error code of a failure, e.g. ``ThrottlingException``
    """
    if isinstance(error, PynamoAdminException):
        return error.cause_response_code
    if isinstance(error, ClientError):
        return error.response.get(ERROR, {}).get(CODE)
    return None


def get_error_status_code(error: BaseException) -> Optional[int]:
    """
    Returns the HTTP status code of a failure, if the service responded
    """
    if isinstance(error, PynamoAdminException):
        return get_error_status_code(error.cause) if error.cause is not None else None
    if isinstance(error, ClientError):
        return error.response.get(RESPONSE_METADATA, {}).get(HTTP_STATUS_CODE)
    return None


def classify_error(error: BaseException) -> RetryDecision:
    """
    Transient failures are HTTP 500s and throughput related error codes
    """
    return RetryDecision(
        retryable=(
            get_error_status_code(error) == HTTP_INTERNAL_SERVER_ERROR
            or get_error_code(error) in RATE_LIMITING_ERROR_CODES
        )
    )


class RetryHandler(Protocol):
    def retry(self, operation: Callable[[], _T]) -> _T:
        ...


def _send_signal(signal: Any, sender: Any, **kwargs: Any) -> None:
    try:
        signal.send(sender, **kwargs)
    except Exception:
        log.exception("%s receiver threw an exception.", signal.name)


def _retry_with_backoff(
    handler: Any,
    operation: Callable[[], _T],
    max_retries: int,
    get_delay_ms: Callable[[int], int],
    time_module: Any,
) -> _T:
    attempt = 0
    while True:
        try:
            return operation()
        except Exception as e:
            decision = classify_error(e)
            log.debug("Error requesting from DynamoDB on attempt %s: %s", attempt + 1, e)
            _send_signal(retry_attempt_failed, handler, attempt=attempt, error=e, retryable=decision.retryable)
            if attempt >= max_retries:
                log.debug('Reached the maximum number of retry attempts: %s', attempt + 1)
                raise
            if not decision.retryable:
                raise
            delay_ms = get_delay_ms(attempt)
            log.debug("Retrying in %s ms", delay_ms)
            _send_signal(retry_scheduled, handler, attempt=attempt, delay_ms=delay_ms)
            time_module.sleep(delay_ms / 1000.0)
            attempt += 1


class NoRetry(object):
    """
    Calls the operation once
    """

    def __repr__(self) -> str:
        return "NoRetry()"

    def retry(self, operation: Callable[[], _T]) -> _T:
        return operation()


class BoundedBackoffRetry(object):
    """
    Retries transient failures with exponential backoff.

    The operation is called at most ``max_retries + 1`` times. Before retry
    ``n`` (counting from zero) the handler sleeps ``(1 << n) * base_backoff_ms``
    milliseconds: 50, 100, 200 and 400 with the defaults. Permanent failures,
    and the failure of the last attempt, are raised unchanged.

    http://docs.aws.amazon.com/amazondynamodb/latest/developerguide/ErrorHandling.html#APIRetries
    """

    def __init__(
        self,
        max_retries: Optional[int] = None,
        base_backoff_ms: Optional[int] = None,
        time_module: Optional[Any] = None,
    ) -> None:
        """
        :param max_retries: Retries after the first attempt. Defaults to the `max_retry_attempts` setting.
        :param base_backoff_ms: Delay before the first retry. Defaults to the `base_backoff_ms` setting.
        :param time_module: Optional: the module providing `sleep`. Intended to be used for testing purposes.
        """
        self.max_retries = max_retries if max_retries is not None else get_settings_value('max_retry_attempts')
        self.base_backoff_ms = base_backoff_ms if base_backoff_ms is not None else get_settings_value('base_backoff_ms')
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        self._time_module: Any = time_module or time

    def __repr__(self) -> str:
        return "BoundedBackoffRetry(max_retries={}, base_backoff_ms={})".format(self.max_retries, self.base_backoff_ms)

    def get_delay_ms(self, attempt: int) -> int:
        return (1 << attempt) * self.base_backoff_ms

    def retry(self, operation: Callable[[], _T]) -> _T:
        return _retry_with_backoff(self, operation, self.max_retries, self.get_delay_ms, self._time_module)


class JitteredBackoffRetry(object):
    """
    Retries transient failures with fully-jittered exponential backoff:
    https://www.awsarchitectureblog.com/2015/03/backoff.html
    """

    def __init__(
        self,
        max_retries: Optional[int] = None,
        base_backoff_ms: Optional[int] = None,
        time_module: Optional[Any] = None,
        random_module: Optional[Any] = None,
    ) -> None:
        self.max_retries = max_retries if max_retries is not None else get_settings_value('max_retry_attempts')
        self.base_backoff_ms = base_backoff_ms if base_backoff_ms is not None else get_settings_value('base_backoff_ms')
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        self._time_module: Any = time_module or time
        self._random: Any = random_module or random

    def __repr__(self) -> str:
        return "JitteredBackoffRetry(max_retries={}, base_backoff_ms={})".format(self.max_retries, self.base_backoff_ms)

    def get_delay_ms(self, attempt: int) -> int:
        return self._random.randint(0, self.base_backoff_ms * (2 ** attempt))

    def retry(self, operation: Callable[[], _T]) -> _T:
        return _retry_with_backoff(self, operation, self.max_retries, self.get_delay_ms, self._time_module)


def default_retry_handler() -> BoundedBackoffRetry:
    return BoundedBackoffRetry()
