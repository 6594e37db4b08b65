"""
Lowest level connection
"""
import logging
import time
import uuid
from typing import Callable, List, Mapping, Optional, Union, TYPE_CHECKING

from botocore.client import ClientError
from botocore.exceptions import BotoCoreError

from pynamoadmin.attributes import PrimaryKey
from pynamoadmin.connection.transport import BotocoreTransport, Transport
from pynamoadmin.constants import (
    ACTIVE, CREATE_TABLE, DELETE_TABLE, DESCRIBE_TABLE, LIST_TABLES, RESOURCE_NOT_FOUND_EXCEPTION, TABLE_NAME,
    UPDATE_TABLE)
from pynamoadmin.decoder import decode_table_description, decode_table_names_page, decode_table_status
from pynamoadmin.exceptions import TableDoesNotExist, TableError
from pynamoadmin.pagination import Page, TableNameIterator
from pynamoadmin.query import Query
from pynamoadmin.retry import RetryHandler, default_retry_handler
from pynamoadmin.schema import TableDescription
from pynamoadmin.signals import post_dynamodb_send, pre_dynamodb_send

if TYPE_CHECKING:
    from pynamoadmin.connection.table import TableConnection

BOTOCORE_EXCEPTIONS = (BotoCoreError, ClientError)

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


def _is_resource_not_found(error: Exception) -> bool:
    return isinstance(error, ClientError) and RESOURCE_NOT_FOUND_EXCEPTION in error.response.get('Error', {}).get('Code', '')


class Connection(object):
    """
    A connection to the DynamoDB control plane.

    Every operation builds its request, sends it through the transport under
    the active retry handler, and decodes the response. The connection holds
    no per-operation state and may be shared across threads, as long as the
    retry handler is not replaced while operations are in flight.
    """

    def __init__(self,
                 region: Optional[str] = None,
                 host: Optional[str] = None,
                 read_timeout_seconds: Optional[float] = None,
                 connect_timeout_seconds: Optional[float] = None,
                 max_pool_connections: Optional[int] = None,
                 extra_headers: Optional[Mapping[str, str]] = None,
                 retry_handler: Optional[RetryHandler] = None,
                 transport: Optional[Transport] = None) -> None:
        if transport is None:
            transport = BotocoreTransport(region=region,
                                          host=host,
                                          read_timeout_seconds=read_timeout_seconds,
                                          connect_timeout_seconds=connect_timeout_seconds,
                                          max_pool_connections=max_pool_connections,
                                          extra_headers=extra_headers)
        self.transport = transport
        self.retry_handler: RetryHandler = retry_handler if retry_handler is not None else default_retry_handler()

    def __repr__(self) -> str:
        return "Connection<{!r}>".format(self.transport)

    def set_retry_handler(self, retry_handler: RetryHandler) -> None:
        """
        Replaces the retry handler used by subsequent operations.

        Not synchronized: replace it before sharing the connection across threads.
        """
        self.retry_handler = retry_handler

    def send_post_boto_callback(self, operation_name, req_uuid, table_name):
        try:
            post_dynamodb_send.send(self, operation_name=operation_name, table_name=table_name, req_uuid=req_uuid)
        except Exception:
            log.exception("post_boto callback threw an exception.")

    def send_pre_boto_callback(self, operation_name, req_uuid, table_name):
        try:
            pre_dynamodb_send.send(self, operation_name=operation_name, table_name=table_name, req_uuid=req_uuid)
        except Exception:
            log.exception("pre_boto callback threw an exception.")

    def dispatch(self, operation_name: str, query: Query, retry_handler: Optional[RetryHandler] = None) -> bytes:
        """
        Dispatches `operation_name` with the parameters of `query`, returning the raw response body
        """
        log.debug("Calling %s with arguments %s", operation_name, query.params)
        body = query.serialize()
        handler = retry_handler if retry_handler is not None else self.retry_handler

        table_name = query.params.get(TABLE_NAME)
        req_uuid = uuid.uuid4()

        self.send_pre_boto_callback(operation_name, req_uuid, table_name)
        data = handler.retry(lambda: self.transport.send(operation_name, body, table_name))
        self.send_post_boto_callback(operation_name, req_uuid, table_name)
        return data

    def _dispatch_for_status(
        self,
        operation_name: str,
        query: Query,
        error_message: str,
        retry_handler: Optional[RetryHandler],
    ) -> str:
        try:
            data = self.dispatch(operation_name, query, retry_handler)
        except BOTOCORE_EXCEPTIONS as e:
            if _is_resource_not_found(e):
                raise TableDoesNotExist(query.params[TABLE_NAME], e)
            raise TableError("{}: {}".format(error_message, e), e)
        return decode_table_status(data)

    def create_table(self, description: TableDescription, retry_handler: Optional[RetryHandler] = None) -> str:
        """
        Performs the CreateTable operation, returning the table status (``CREATING`` or ``ACTIVE``)

        Raises TableError, with a status of ``unknown``, when the request fails
        """
        query = Query().add_create_request_table(description)
        return self._dispatch_for_status(CREATE_TABLE, query, "Failed to create table", retry_handler)

    def delete_table(
        self,
        table: Union[TableDescription, str],
        retry_handler: Optional[RetryHandler] = None,
    ) -> str:
        """
        Performs the DeleteTable operation, returning the table status

        Only the table name is read from a table description.
        """
        if isinstance(table, str):
            table = TableDescription(table_name=table)
        query = Query().add_delete_request_table(table)
        return self._dispatch_for_status(DELETE_TABLE, query, "Failed to delete table", retry_handler)

    def update_table(self, description: TableDescription, retry_handler: Optional[RetryHandler] = None) -> str:
        """
        Performs the UpdateTable operation, returning the table status

        Only the fields set on `description` are sent; the service merges them
        into the existing table.
        """
        query = Query().add_update_request_table(description)
        return self._dispatch_for_status(UPDATE_TABLE, query, "Failed to update table", retry_handler)

    def describe_table(self, table_name: str, retry_handler: Optional[RetryHandler] = None) -> TableDescription:
        """
        Performs the DescribeTable operation

        Raises TableDoesNotExist if the specified table does not exist
        """
        query = Query().add_table_by_name(table_name)
        try:
            data = self.dispatch(DESCRIBE_TABLE, query, retry_handler)
        except BOTOCORE_EXCEPTIONS as e:
            if _is_resource_not_found(e):
                raise TableDoesNotExist(table_name, e)
            raise TableError("Unable to describe table: {}".format(e), e)
        return decode_table_description(data)

    def list_tables_page(
        self,
        exclusive_start_table_name: Optional[str] = None,
        limit: Optional[int] = None,
        retry_handler: Optional[RetryHandler] = None,
    ) -> Page:
        """
        Performs a single ListTables operation, returning the table names and the cursor of the next page
        """
        query = Query().add_exclusive_start_table_name(exclusive_start_table_name).add_limit(limit)
        try:
            data = self.dispatch(LIST_TABLES, query, retry_handler)
        except BOTOCORE_EXCEPTIONS as e:
            raise TableError("Unable to list tables: {}".format(e), e)
        return decode_table_names_page(data)

    def iter_tables(
        self,
        exclusive_start_table_name: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> TableNameIterator:
        """
        Returns an iterator over every table name, fetching pages as it goes

        :param limit: the page size of each ListTables request
        """
        return TableNameIterator(self.list_tables_page, exclusive_start_table_name, limit)

    def list_tables_each(self, visit: Callable[[str], None], limit: Optional[int] = None) -> None:
        """
        Calls `visit` with each table name in the order the service returns them

        On failure the error is raised; names already visited are not revisited or undone.
        """
        for table_name in self.iter_tables(limit=limit):
            visit(table_name)

    def list_tables(self, limit: Optional[int] = None) -> List[str]:
        """
        Returns the names of all tables, following ListTables pagination to the end
        """
        return list(self.iter_tables(limit=limit))

    def wait_until_status(
        self,
        table_name: str,
        status: str = ACTIVE,
        poll_interval_seconds: float = 2,
        max_polls: Optional[int] = None,
        retry_handler: Optional[RetryHandler] = None,
    ) -> TableDescription:
        """
        Polls DescribeTable until the table reports `status`

        :param max_polls: give up with a TableError after this many polls; unbounded by default
        """
        polls = 0
        while True:
            description = self.describe_table(table_name, retry_handler=retry_handler)
            polls += 1
            if description.table_status == status:
                return description
            if max_polls is not None and polls >= max_polls:
                raise TableError(
                    "Table {} did not reach status {} after {} polls".format(table_name, status, polls),
                    status=description.table_status,
                )
            log.debug("Table %s is %s, waiting for %s", table_name, description.table_status, status)
            time.sleep(poll_interval_seconds)

    def new_table(self, table_name: str, primary_key: PrimaryKey) -> 'TableConnection':
        """
        Returns a handle on an existing table
        """
        from pynamoadmin.connection.table import TableConnection
        return TableConnection(self, table_name, primary_key)
