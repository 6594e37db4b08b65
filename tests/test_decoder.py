"""
Tests for response decoding
"""
import json

import pytest

from pynamoadmin.decoder import (
    decode_table_description, decode_table_names_page, decode_table_status, get_path, load)
from pynamoadmin.exceptions import MalformedResponse
from pynamoadmin.schema import (
    AttributeDefinition, KeySchemaElement, Projection, ProvisionedThroughput)
from .data import CREATE_TABLE_DATA, DESCRIBE_TABLE_DATA, LIST_TABLE_DATA, LIST_TABLE_LAST_PAGE_DATA


def _raw(data):
    return json.dumps(data).encode('utf-8')


def test_load__invalid_json():
    with pytest.raises(MalformedResponse) as excinfo:
        load(b'not json')
    assert excinfo.value.raw == b'not json'
    assert 'not json' in str(excinfo.value)


def test_load__not_an_object():
    with pytest.raises(MalformedResponse):
        load(b'["Forum"]')


def test_get_path():
    data = {'TableDescription': {'TableStatus': 'ACTIVE'}}
    assert get_path(data, '', 'TableDescription', 'TableStatus') == 'ACTIVE'
    assert get_path(data, '', 'TableDescription', 'Missing', default=None) is None
    with pytest.raises(MalformedResponse):
        get_path(data, '', 'TableDescription', 'Missing')
    with pytest.raises(MalformedResponse):
        get_path(data, '', 'TableDescription', 'TableStatus', expected_type=int)


def test_decode_table_status():
    assert decode_table_status(_raw(CREATE_TABLE_DATA)) == 'CREATING'


def test_decode_table_status__passes_through_verbatim():
    assert decode_table_status(_raw({'TableDescription': {'TableStatus': 'ARCHIVING'}})) == 'ARCHIVING'


def test_decode_table_status__missing():
    raw = _raw({'TableDescription': {'TableName': 'Thread'}})
    with pytest.raises(MalformedResponse) as excinfo:
        decode_table_status(raw)
    assert excinfo.value.raw == raw
    assert excinfo.value.status == 'unknown'


def test_decode_table_names_page():
    assert decode_table_names_page(_raw(LIST_TABLE_DATA)) == (['Forum', 'Reply', 'Thread'], 'Thread')
    assert decode_table_names_page(_raw(LIST_TABLE_LAST_PAGE_DATA)) == (['User'], None)


def test_decode_table_names_page__empty_cursor():
    assert decode_table_names_page(_raw({'TableNames': [], 'LastEvaluatedTableName': ''})) == ([], None)


@pytest.mark.parametrize('data', [
    {'LastEvaluatedTableName': 'Thread'},
    {'TableNames': 'Forum'},
    {'TableNames': ['Forum', 1]},
    {'TableNames': ['Forum'], 'LastEvaluatedTableName': 7},
])
def test_decode_table_names_page__malformed(data):
    with pytest.raises(MalformedResponse):
        decode_table_names_page(_raw(data))


def test_decode_table_description():
    description = decode_table_description(_raw(DESCRIBE_TABLE_DATA))

    assert description.table_name == 'Thread'
    assert description.table_status == 'ACTIVE'
    assert description.creation_date_time == 1.363729002358E9
    assert description.attribute_definitions == [
        AttributeDefinition('ForumName', 'S'),
        AttributeDefinition('LastPostDateTime', 'S'),
        AttributeDefinition('Subject', 'S'),
    ]
    assert description.key_schema == [
        KeySchemaElement('ForumName', 'HASH'),
        KeySchemaElement('Subject', 'RANGE'),
    ]
    assert description.provisioned_throughput == ProvisionedThroughput(5, 5, 0)

    gsi, = description.global_secondary_indexes
    assert gsi.index_name == 'LastPostIndex'
    assert gsi.projection == Projection('INCLUDE', ['Subject'])
    assert gsi.provisioned_throughput == ProvisionedThroughput(2, 3, 0)

    lsi, = description.local_secondary_indexes
    assert lsi.index_name == 'LastPostLocalIndex'
    assert lsi.key_schema[1] == KeySchemaElement('LastPostDateTime', 'RANGE')
    assert lsi.projection == Projection('KEYS_ONLY')


def test_decode_table_description__minimal():
    description = decode_table_description(_raw({'Table': {'TableName': 'Thread'}}))
    assert description.table_name == 'Thread'
    assert description.key_schema == []
    assert description.global_secondary_indexes == []
    assert description.table_status == ''


@pytest.mark.parametrize('data', [
    {},
    {'Table': 'Thread'},
    {'Table': {}},
    {'Table': {'TableName': 'Thread', 'KeySchema': [{'AttributeName': 'ForumName'}]}},
    {'Table': {'TableName': 'Thread', 'ItemCount': 'many'}},
    {'Table': {'TableName': 'Thread', 'ItemCount': True}},
    {'Table': {'TableName': 'Thread', 'ProvisionedThroughput': []}},
])
def test_decode_table_description__malformed(data):
    raw = _raw(data)
    with pytest.raises(MalformedResponse) as excinfo:
        decode_table_description(raw)
    assert excinfo.value.raw == raw
