"""
Response decoding

Two ways of reading a response live here: :func:`get_path` pulls a few named
fields out of the parsed JSON without knowing the rest of its shape, and
:func:`decode_table_description` builds the full :class:`TableDescription`.
Both raise :class:`MalformedResponse` with the raw payload attached.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from pynamoadmin.constants import (
    ATTR_DEFINITIONS, ATTR_NAME, ATTR_TYPE, CREATION_DATE_TIME, GLOBAL_SECONDARY_INDEXES, INDEX_NAME,
    INDEX_SIZE_BYTES, ITEM_COUNT, KEY_SCHEMA, KEY_TYPE, LAST_EVALUATED_TABLE_NAME, LOCAL_SECONDARY_INDEXES,
    NON_KEY_ATTRIBUTES, NUMBER_OF_DECREASES_TODAY, PROJECTION, PROJECTION_TYPE, PROVISIONED_THROUGHPUT,
    READ_CAPACITY_UNITS, TABLE_DESCRIPTION, TABLE_KEY, TABLE_NAME, TABLE_NAMES, TABLE_SIZE_BYTES, TABLE_STATUS,
    WRITE_CAPACITY_UNITS)
from pynamoadmin.exceptions import MalformedResponse
from pynamoadmin.schema import (
    AttributeDefinition, GlobalSecondaryIndex, KeySchemaElement, LocalSecondaryIndex, Projection,
    ProvisionedThroughput, TableDescription)

log = logging.getLogger(__name__)

RawResponse = Union[bytes, str]

_MISSING = object()


def load(raw: RawResponse) -> Dict[str, Any]:
    """
    Parses a raw JSON response body into a dict
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise MalformedResponse(raw, "Response is not valid JSON", e)
    if not isinstance(data, dict):
        raise MalformedResponse(raw, "Response is not a JSON object")
    return data


def get_path(
    data: Dict[str, Any],
    raw: RawResponse,
    *path: str,
    expected_type: Optional[Union[Type, Tuple[Type, ...]]] = None,
    default: Any = _MISSING,
) -> Any:
    """
    Returns the value at `path` in `data`.

    A missing field returns `default` when one is given; otherwise it raises
    :class:`MalformedResponse`, as does a value that is not an `expected_type`.
    """
    value: Any = data
    for key in path:
        if not isinstance(value, dict) or value.get(key) is None:
            if default is not _MISSING:
                return default
            raise MalformedResponse(raw, "Missing field `{}`".format('.'.join(path)))
        value = value[key]
    if expected_type is not None and not isinstance(value, expected_type):
        raise MalformedResponse(raw, "Unexpected type for field `{}`".format('.'.join(path)))
    return value


def decode_table_status(raw: RawResponse) -> str:
    """
    Reads `TableDescription.TableStatus` from a Create/Update/DeleteTable response
    """
    return get_path(load(raw), raw, TABLE_DESCRIPTION, TABLE_STATUS, expected_type=str)


def decode_table_names_page(raw: RawResponse) -> Tuple[List[str], Optional[str]]:
    """
    Reads one ListTables page: the table names in server order and the cursor for the next page
    """
    data = load(raw)
    last_evaluated_table_name = get_path(data, raw, LAST_EVALUATED_TABLE_NAME, expected_type=str, default=None)
    table_names = get_path(data, raw, TABLE_NAMES, expected_type=list)
    if not all(isinstance(name, str) for name in table_names):
        raise MalformedResponse(raw, "Unexpected type in `{}`".format(TABLE_NAMES))
    return table_names, last_evaluated_table_name or None


def _int(data: Dict, raw: RawResponse, key: str) -> int:
    value = get_path(data, raw, key, expected_type=(int, float), default=0)
    if isinstance(value, bool):
        raise MalformedResponse(raw, "Unexpected type for field `{}`".format(key))
    return int(value)


def _key_schema(data: Dict, raw: RawResponse) -> List[KeySchemaElement]:
    return [
        KeySchemaElement(
            attribute_name=get_path(item, raw, ATTR_NAME, expected_type=str),
            key_type=get_path(item, raw, KEY_TYPE, expected_type=str),
        )
        for item in get_path(data, raw, KEY_SCHEMA, expected_type=list, default=[])
    ]


def _provisioned_throughput(data: Dict, raw: RawResponse) -> ProvisionedThroughput:
    throughput = get_path(data, raw, PROVISIONED_THROUGHPUT, expected_type=dict, default={})
    return ProvisionedThroughput(
        read_capacity_units=_int(throughput, raw, READ_CAPACITY_UNITS),
        write_capacity_units=_int(throughput, raw, WRITE_CAPACITY_UNITS),
        number_of_decreases_today=_int(throughput, raw, NUMBER_OF_DECREASES_TODAY),
    )


def _projection(data: Dict, raw: RawResponse) -> Optional[Projection]:
    projection = get_path(data, raw, PROJECTION, expected_type=dict, default=None)
    if projection is None:
        return None
    return Projection(
        projection_type=get_path(projection, raw, PROJECTION_TYPE, expected_type=str),
        non_key_attributes=list(get_path(projection, raw, NON_KEY_ATTRIBUTES, expected_type=list, default=[])),
    )


def _local_secondary_index(data: Dict, raw: RawResponse) -> LocalSecondaryIndex:
    return LocalSecondaryIndex(
        index_name=get_path(data, raw, INDEX_NAME, expected_type=str),
        key_schema=_key_schema(data, raw),
        projection=_projection(data, raw),
        index_size_bytes=_int(data, raw, INDEX_SIZE_BYTES),
        item_count=_int(data, raw, ITEM_COUNT),
    )


def _global_secondary_index(data: Dict, raw: RawResponse) -> GlobalSecondaryIndex:
    return GlobalSecondaryIndex(
        index_name=get_path(data, raw, INDEX_NAME, expected_type=str),
        key_schema=_key_schema(data, raw),
        projection=_projection(data, raw),
        provisioned_throughput=_provisioned_throughput(data, raw),
        index_size_bytes=_int(data, raw, INDEX_SIZE_BYTES),
        item_count=_int(data, raw, ITEM_COUNT),
    )


def table_description_from_data(data: Dict[str, Any], raw: RawResponse) -> TableDescription:
    """
    Builds a TableDescription from the wire shape of a table description
    """
    creation_date_time = get_path(data, raw, CREATION_DATE_TIME, expected_type=(int, float), default=0.0)
    return TableDescription(
        table_name=get_path(data, raw, TABLE_NAME, expected_type=str),
        attribute_definitions=[
            AttributeDefinition(
                attribute_name=get_path(attr, raw, ATTR_NAME, expected_type=str),
                attribute_type=get_path(attr, raw, ATTR_TYPE, expected_type=str),
            )
            for attr in get_path(data, raw, ATTR_DEFINITIONS, expected_type=list, default=[])
        ],
        key_schema=_key_schema(data, raw),
        provisioned_throughput=_provisioned_throughput(data, raw),
        local_secondary_indexes=[
            _local_secondary_index(index, raw)
            for index in get_path(data, raw, LOCAL_SECONDARY_INDEXES, expected_type=list, default=[])
        ],
        global_secondary_indexes=[
            _global_secondary_index(index, raw)
            for index in get_path(data, raw, GLOBAL_SECONDARY_INDEXES, expected_type=list, default=[])
        ],
        item_count=_int(data, raw, ITEM_COUNT),
        table_size_bytes=_int(data, raw, TABLE_SIZE_BYTES),
        table_status=get_path(data, raw, TABLE_STATUS, expected_type=str, default=''),
        creation_date_time=float(creation_date_time),
    )


def decode_table_description(raw: RawResponse, key: str = TABLE_KEY) -> TableDescription:
    """
    Decodes the full table description held under `key` (`Table` for DescribeTable)
    """
    data = get_path(load(raw), raw, key, expected_type=dict)
    description = table_description_from_data(data, raw)
    log.debug("Decoded description of table %s", description.table_name)
    return description
