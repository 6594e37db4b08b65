"""
PynamoAdmin exceptions
"""
from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

import botocore.exceptions

from pynamoadmin.constants import UNKNOWN_STATUS


class PynamoAdminException(Exception):
    """
    Base class for all PynamoAdmin exceptions.
    """

    msg: str

    def __init__(self, msg: Optional[str] = None, cause: Optional[Exception] = None) -> None:
        self.msg = msg if msg is not None else self.msg
        self.cause = cause
        super(PynamoAdminException, self).__init__(self.msg)

    @property
    def cause_response_code(self) -> Optional[str]:
        """
        The DynamoDB response code such as:

        - ``ResourceNotFoundException``
        - ``ProvisionedThroughputExceededException``
        - ``ThrottlingException``

        Inspect this value to determine the cause of the error and handle it.
        """
        return getattr(self.cause, 'response', {}).get('Error', {}).get('Code')

    @property
    def cause_response_message(self) -> Optional[str]:
        """
        The human-readable description of the error returned by DynamoDB.
        """
        return getattr(self.cause, 'response', {}).get('Error', {}).get('Message')


class SchemaInconsistency(PynamoAdminException, ValueError):
    """
    Raised when a key schema entry references a missing or untyped attribute definition
    """
    msg = "An inconsistency found in the table description"


class MalformedResponse(PynamoAdminException):
    """
    Raised when a response lacks an expected field or has the wrong shape.

    The raw payload is kept on :attr:`raw` for diagnosis.
    """
    msg = "Unexpected response"
    status = UNKNOWN_STATUS

    def __init__(self, raw: Union[bytes, str, None], msg: Optional[str] = None, cause: Optional[Exception] = None) -> None:
        self.raw = raw
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8', errors='replace')
        msg = msg if msg is not None else self.msg
        super(MalformedResponse, self).__init__("{}: {}".format(msg, raw), cause)


class PynamoAdminConnectionError(PynamoAdminException):
    """
    A base class for connection errors
    """
    msg = "Connection Error"


class TableError(PynamoAdminConnectionError):
    """
    An error involving a dynamodb table operation

    :attr:`status` is ``"unknown"`` when no table status could be read.
    """
    msg = "Error performing a table operation"

    def __init__(self, msg: Optional[str] = None, cause: Optional[Exception] = None, status: str = UNKNOWN_STATUS) -> None:
        self.status = status
        super(TableError, self).__init__(msg, cause)


class TableDoesNotExist(TableError):
    """
    Raised when an operation is attempted on a table that doesn't exist
    """
    def __init__(self, table_name: str, cause: Optional[Exception] = None) -> None:
        msg = "Table does not exist: `{}`".format(table_name)
        super(TableDoesNotExist, self).__init__(msg, cause)


class VerboseClientError(botocore.exceptions.ClientError):
    def __init__(
        self,
        error_response: Dict[str, Any],
        operation_name: str,
        verbose_properties: Optional[Any] = None,
    ) -> None:
        """
        Like ClientError, but with a verbose message.

        :param error_response: Error response in shape expected by ClientError.
        :param operation_name: The name of the operation that failed.
        :param verbose_properties: A dict of properties to include in the verbose message.
        """
        if not verbose_properties:
            verbose_properties = {}

        self.MSG_TEMPLATE = (
            'An error occurred ({{error_code}}) on request ({request_id}) '
            'on table ({table_name}) when calling the {{operation_name}} '
            'operation: {{error_message}}'
        ).format(request_id=verbose_properties.get('request_id'), table_name=verbose_properties.get('table_name'))

        super(VerboseClientError, self).__init__(
            error_response,  # type:ignore[arg-type]  # in stubs: botocore.exceptions._ClientErrorResponseTypeDef
            operation_name,
        )
