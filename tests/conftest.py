import pytest

from pynamoadmin.connection import Connection
from pynamoadmin.retry import NoRetry
from pynamoadmin.schema import (
    AttributeDefinition, GlobalSecondaryIndex, KeySchemaElement, Projection, ProvisionedThroughput,
    TableDescription)
from .response import MockTime, MockTransport


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.delenv('AWS_SESSION_TOKEN', raising=False)
    monkeypatch.delenv('AWS_PROFILE', raising=False)


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def connection(transport):
    return Connection(transport=transport, retry_handler=NoRetry())


@pytest.fixture
def mock_time():
    return MockTime()


@pytest.fixture
def thread_description():
    return TableDescription(
        table_name='Thread',
        attribute_definitions=[
            AttributeDefinition('ForumName', 'S'),
            AttributeDefinition('Subject', 'N'),
        ],
        key_schema=[
            KeySchemaElement('ForumName', 'HASH'),
            KeySchemaElement('Subject', 'RANGE'),
        ],
        provisioned_throughput=ProvisionedThroughput(read_capacity_units=1, write_capacity_units=1),
    )


@pytest.fixture
def gsi_description():
    return TableDescription(
        table_name='Devices',
        attribute_definitions=[
            AttributeDefinition('UserId', 'S'),
            AttributeDefinition('OSType', 'S'),
            AttributeDefinition('IMSI', 'S'),
        ],
        key_schema=[
            KeySchemaElement('UserId', 'HASH'),
            KeySchemaElement('OSType', 'RANGE'),
        ],
        provisioned_throughput=ProvisionedThroughput(read_capacity_units=1, write_capacity_units=1),
        global_secondary_indexes=[
            GlobalSecondaryIndex(
                index_name='IMSIIndex',
                key_schema=[KeySchemaElement('IMSI', 'HASH')],
                projection=Projection('KEYS_ONLY'),
                provisioned_throughput=ProvisionedThroughput(read_capacity_units=1, write_capacity_units=1),
            ),
        ],
    )
