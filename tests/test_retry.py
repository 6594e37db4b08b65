"""
Tests for the retry handlers
"""
from unittest import mock

import botocore.exceptions
import pytest

from pynamoadmin.exceptions import MalformedResponse, TableError
from pynamoadmin.retry import (
    BoundedBackoffRetry, JitteredBackoffRetry, NoRetry, RetryDecision, classify_error, default_retry_handler)
from pynamoadmin.signals import retry_attempt_failed, retry_scheduled
from .response import client_error


class FlakyOperation():
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.call_count = 0

    def __call__(self):
        self.call_count += 1
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.mark.parametrize('error, retryable', [
    (client_error('InternalServerError', 500), True),
    (client_error('ThrottlingException', 400), True),
    (client_error('ProvisionedThroughputExceededException', 400), True),
    (client_error('ValidationException', 400), False),
    (client_error('ServiceUnavailable', 503), False),
    (TableError('wrapped', client_error('ThrottlingException', 400)), True),
    (TableError('wrapped'), False),
    (MalformedResponse(b'{}'), False),
    (botocore.exceptions.ConnectionError(error='problems'), False),
    (ValueError(), False),
])
def test_classify_error(error, retryable):
    assert classify_error(error) == RetryDecision(retryable=retryable)


def test_no_retry():
    operation = FlakyOperation(client_error('InternalServerError', 500), 'ok')
    with pytest.raises(botocore.exceptions.ClientError):
        NoRetry().retry(operation)
    assert operation.call_count == 1

    assert NoRetry().retry(lambda: 'ok') == 'ok'


def test_bounded_backoff__succeeds_after_server_errors(mock_time):
    error = client_error('InternalServerError', 500)
    operation = FlakyOperation(error, error, 'ok')

    assert BoundedBackoffRetry(time_module=mock_time).retry(operation) == 'ok'
    assert operation.call_count == 3
    assert mock_time.sleeps == [0.05, 0.1]


def test_bounded_backoff__permanent_failure(mock_time):
    operation = FlakyOperation(client_error('ValidationException', 400))

    with pytest.raises(botocore.exceptions.ClientError) as excinfo:
        BoundedBackoffRetry(time_module=mock_time).retry(operation)
    assert excinfo.value.response['Error']['Code'] == 'ValidationException'
    assert operation.call_count == 1
    assert mock_time.sleeps == []


def test_bounded_backoff__exhausted(mock_time):
    operation = FlakyOperation(client_error('ThrottlingException', 400))

    with pytest.raises(botocore.exceptions.ClientError) as excinfo:
        BoundedBackoffRetry(max_retries=4, base_backoff_ms=50, time_module=mock_time).retry(operation)
    assert excinfo.value.response['Error']['Code'] == 'ThrottlingException'
    assert operation.call_count == 5
    assert mock_time.sleeps == [0.05, 0.1, 0.2, 0.4]


def test_bounded_backoff__zero_retries(mock_time):
    operation = FlakyOperation(client_error('ThrottlingException', 400))
    with pytest.raises(botocore.exceptions.ClientError):
        BoundedBackoffRetry(max_retries=0, time_module=mock_time).retry(operation)
    assert operation.call_count == 1


def test_bounded_backoff__invalid():
    with pytest.raises(ValueError):
        BoundedBackoffRetry(max_retries=-1)


def test_bounded_backoff__delays():
    handler = BoundedBackoffRetry(base_backoff_ms=50)
    assert [handler.get_delay_ms(i) for i in range(4)] == [50, 100, 200, 400]


def test_default_retry_handler():
    handler = default_retry_handler()
    assert handler.max_retries == 4
    assert handler.base_backoff_ms == 50


def test_jittered_backoff(mock_time):
    random_module = mock.Mock()
    random_module.randint.side_effect = [10, 30]
    error = client_error('ProvisionedThroughputExceededException', 400)
    operation = FlakyOperation(error, error, 'ok')

    handler = JitteredBackoffRetry(base_backoff_ms=50, time_module=mock_time, random_module=random_module)
    assert handler.retry(operation) == 'ok'
    assert random_module.randint.call_args_list == [mock.call(0, 50), mock.call(0, 100)]
    assert mock_time.sleeps == [0.01, 0.03]


def test_retry_signals(mock_time):
    failed = []
    scheduled = []
    handler = BoundedBackoffRetry(max_retries=2, time_module=mock_time)

    def record_failed(sender, attempt, error, retryable):
        failed.append((attempt, retryable))

    def record_scheduled(sender, attempt, delay_ms):
        scheduled.append((attempt, delay_ms))

    retry_attempt_failed.connect(record_failed, sender=handler)
    retry_scheduled.connect(record_scheduled, sender=handler)
    try:
        with pytest.raises(botocore.exceptions.ClientError):
            handler.retry(FlakyOperation(client_error('ThrottlingException', 400)))
    finally:
        retry_attempt_failed.disconnect(record_failed)
        retry_scheduled.disconnect(record_scheduled)

    assert failed == [(0, True), (1, True), (2, True)]
    assert scheduled == [(0, 50), (1, 100)]


def test_retry_signal_receiver_exception_is_logged(mock_time, caplog):
    handler = BoundedBackoffRetry(time_module=mock_time)

    def broken_receiver(sender, **kwargs):
        raise ValueError()

    retry_scheduled.connect(broken_receiver, sender=handler)
    try:
        assert handler.retry(FlakyOperation(client_error('InternalServerError', 500), 'ok')) == 'ok'
    finally:
        retry_scheduled.disconnect(broken_receiver)
    assert 'retry_scheduled receiver threw an exception.' in caplog.text


def test_retry_logs_attempts(mock_time, caplog):
    caplog.set_level('DEBUG', logger='pynamoadmin.retry')
    error = client_error('InternalServerError', 500)
    BoundedBackoffRetry(time_module=mock_time).retry(FlakyOperation(error, 'ok'))
    assert 'Error requesting from DynamoDB on attempt 1' in caplog.text
    assert 'Retrying in 50 ms' in caplog.text
