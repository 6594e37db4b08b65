"""
PynamoAdmin Connection classes
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
"""

from typing import Any, Dict, List, Optional

from pynamoadmin.attributes import PrimaryKey
from pynamoadmin.connection.base import Connection
from pynamoadmin.constants import ACTIVE, KEY
from pynamoadmin.retry import RetryHandler, default_retry_handler
from pynamoadmin.schema import GlobalSecondaryIndex, ProvisionedThroughput, TableDescription


class TableConnection:
    """
    A handle on a single table: its connection, its primary key and its retry handler
    """

    def __init__(
        self,
        connection: Connection,
        table_name: str,
        primary_key: PrimaryKey,
        retry_handler: Optional[RetryHandler] = None,
    ) -> None:
        self.connection = connection
        self.table_name = table_name
        self.primary_key = primary_key
        self.retry_handler: RetryHandler = retry_handler if retry_handler is not None else default_retry_handler()

    def __repr__(self) -> str:
        return "TableConnection<{}>".format(self.table_name)

    @classmethod
    def from_description(
        cls,
        connection: Connection,
        description: TableDescription,
        retry_handler: Optional[RetryHandler] = None,
    ) -> 'TableConnection':
        return cls(connection, description.table_name, description.build_primary_key(), retry_handler)

    def set_retry_handler(self, retry_handler: RetryHandler) -> None:
        """
        Replaces the retry handler; it takes effect on the next operation.

        Replacing it while another thread is running an operation on this
        handle is not supported.
        """
        self.retry_handler = retry_handler

    def get_identifier_map(self, hash_key: Any, range_key: Optional[Any] = None, key: str = KEY) -> Dict:
        return self.primary_key.get_identifier_map(hash_key, range_key, key=key)

    def describe_table(self) -> TableDescription:
        """
        Performs the DescribeTable operation and returns the result
        """
        return self.connection.describe_table(self.table_name, retry_handler=self.retry_handler)

    def delete_table(self) -> str:
        """
        Performs the DeleteTable operation and returns the table status
        """
        return self.connection.delete_table(self.table_name, retry_handler=self.retry_handler)

    def update_table(
        self,
        read_capacity_units: Optional[int] = None,
        write_capacity_units: Optional[int] = None,
        global_secondary_index_updates: Optional[List[Dict]] = None,
    ) -> str:
        """
        Performs the UpdateTable operation and returns the table status

        :param global_secondary_index_updates: dicts with `index_name`, `read_capacity_units`
            and `write_capacity_units`
        """
        description = TableDescription(
            table_name=self.table_name,
            provisioned_throughput=ProvisionedThroughput(
                read_capacity_units=read_capacity_units or 0,
                write_capacity_units=write_capacity_units or 0,
            ),
            global_secondary_indexes=[
                GlobalSecondaryIndex(
                    index_name=index['index_name'],
                    provisioned_throughput=ProvisionedThroughput(
                        read_capacity_units=index['read_capacity_units'],
                        write_capacity_units=index['write_capacity_units'],
                    ),
                )
                for index in global_secondary_index_updates or []
            ],
        )
        return self.connection.update_table(description, retry_handler=self.retry_handler)

    def wait_until_status(
        self,
        status: str = ACTIVE,
        poll_interval_seconds: float = 2,
        max_polls: Optional[int] = None,
    ) -> TableDescription:
        return self.connection.wait_until_status(
            self.table_name,
            status=status,
            poll_interval_seconds=poll_interval_seconds,
            max_polls=max_polls,
            retry_handler=self.retry_handler,
        )
