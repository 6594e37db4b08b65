from botocore.exceptions import ClientError

from pynamoadmin.exceptions import MalformedResponse, TableDoesNotExist, TableError


def test_get_cause_response_code():
    error = TableError(
        cause=ClientError(
            error_response={
                'Error': {
                    'Code': 'hello'
                }
            },
            operation_name='test'
        )
    )
    assert error.cause_response_code == 'hello'


def test_get_cause_response_code__no_code():
    error = TableError()
    assert error.cause_response_code is None


def test_get_cause_response_message():
    error = TableError(
        cause=ClientError(
            error_response={
                'Error': {
                    'Message': 'hiya'
                }
            },
            operation_name='test'
        )
    )
    assert error.cause_response_message == 'hiya'


def test_table_error_status():
    assert TableError().status == 'unknown'
    assert TableError(status='CREATING').status == 'CREATING'
    assert str(TableError()) == 'Error performing a table operation'


def test_table_does_not_exist():
    error = TableDoesNotExist('Thread')
    assert isinstance(error, TableError)
    assert str(error) == 'Table does not exist: `Thread`'


def test_malformed_response_carries_raw_payload():
    error = MalformedResponse(b'{"TableNames": null}', 'Missing field `TableNames`')
    assert error.raw == b'{"TableNames": null}'
    assert str(error) == 'Missing field `TableNames`: {"TableNames": null}'
    assert error.status == 'unknown'
