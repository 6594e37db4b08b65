"""
Request builder for the table operations
"""
import json
from typing import Any, Dict, List, Optional, Sequence

from pynamoadmin.attributes import PrimaryKey
from pynamoadmin.constants import (
    ATTR_DEFINITIONS, ATTR_NAME, ATTR_TYPE, DEFAULT_ENCODING, EXCLUSIVE_START_TABLE_NAME,
    GLOBAL_SECONDARY_INDEXES, GLOBAL_SECONDARY_INDEX_UPDATES, INDEX_NAME, KEY_SCHEMA, KEY_TYPE,
    KEY_TYPES, LIMIT, LOCAL_SECONDARY_INDEXES, NON_KEY_ATTRIBUTES, PROJECTION, PROJECTION_TYPE,
    PROJECTION_TYPES, PROVISIONED_THROUGHPUT, READ_CAPACITY_UNITS, TABLE_NAME, UPDATE,
    WRITE_CAPACITY_UNITS)
from pynamoadmin.schema import (
    GlobalSecondaryIndex, KeySchemaElement, LocalSecondaryIndex, Projection, ProvisionedThroughput,
    TableDescription)


def _key_schema_list(key_schema: Sequence[KeySchemaElement]) -> List[Dict[str, str]]:
    key_schema_list = []
    for item in key_schema:
        key_type = str(item.key_type).upper()
        if key_type not in KEY_TYPES:
            raise ValueError("Invalid key type `{}` for `{}`".format(item.key_type, item.attribute_name))
        key_schema_list.append({
            ATTR_NAME: item.attribute_name,
            KEY_TYPE: key_type,
        })
    # HASH sorts before RANGE
    return sorted(key_schema_list, key=lambda x: x[KEY_TYPE])


def _throughput_map(throughput: ProvisionedThroughput) -> Dict[str, int]:
    return {
        READ_CAPACITY_UNITS: throughput.read_capacity_units,
        WRITE_CAPACITY_UNITS: throughput.write_capacity_units,
    }


def _projection_map(projection: Optional[Projection]) -> Dict[str, Any]:
    if projection is None:
        raise ValueError("A projection is required for secondary indexes")
    if projection.projection_type not in PROJECTION_TYPES:
        raise ValueError("Invalid projection type: {}".format(projection.projection_type))
    projection_map: Dict[str, Any] = {PROJECTION_TYPE: projection.projection_type}
    if projection.non_key_attributes:
        projection_map[NON_KEY_ATTRIBUTES] = list(projection.non_key_attributes)
    return projection_map


def _local_index_map(index: LocalSecondaryIndex) -> Dict[str, Any]:
    return {
        INDEX_NAME: index.index_name,
        KEY_SCHEMA: _key_schema_list(index.key_schema),
        PROJECTION: _projection_map(index.projection),
    }


def _global_index_map(index: GlobalSecondaryIndex) -> Dict[str, Any]:
    return {
        INDEX_NAME: index.index_name,
        KEY_SCHEMA: _key_schema_list(index.key_schema),
        PROJECTION: _projection_map(index.projection),
        PROVISIONED_THROUGHPUT: _throughput_map(index.provisioned_throughput),
    }


class Query(object):
    """
    Accumulates the parameters of a single operation.

    Every ``add_*`` method validates its input before touching the
    accumulated parameters, so a failed build leaves nothing to send.
    """

    def __init__(self) -> None:
        self.params: Dict[str, Any] = {}

    def __repr__(self) -> str:
        return "Query<{}>".format(self.params)

    def add_table_by_name(self, table_name: str) -> 'Query':
        if not table_name:
            raise ValueError("table_name is required")
        self.params[TABLE_NAME] = table_name
        return self

    def add_create_request_table(self, description: TableDescription) -> 'Query':
        """
        Adds the CreateTable parameters of a table description
        """
        if not description.attribute_definitions:
            raise ValueError("attribute_definitions are required")
        if not description.key_schema:
            raise ValueError("key_schema is required")

        params: Dict[str, Any] = {
            ATTR_DEFINITIONS: [
                {
                    ATTR_NAME: attr.attribute_name,
                    ATTR_TYPE: attr.attribute_type,
                } for attr in description.attribute_definitions
            ],
            KEY_SCHEMA: _key_schema_list(description.key_schema),
            PROVISIONED_THROUGHPUT: _throughput_map(description.provisioned_throughput),
        }
        if description.local_secondary_indexes:
            params[LOCAL_SECONDARY_INDEXES] = [
                _local_index_map(index) for index in description.local_secondary_indexes
            ]
        if description.global_secondary_indexes:
            params[GLOBAL_SECONDARY_INDEXES] = [
                _global_index_map(index) for index in description.global_secondary_indexes
            ]

        self.add_table_by_name(description.table_name)
        self.params.update(params)
        return self

    def add_delete_request_table(self, description: TableDescription) -> 'Query':
        """
        Adds the DeleteTable parameters; only the table name is used
        """
        return self.add_table_by_name(description.table_name)

    def add_update_request_table(self, description: TableDescription) -> 'Query':
        """
        Adds the UpdateTable parameters for the fields set on a partial description
        """
        params: Dict[str, Any] = {}
        if description.provisioned_throughput.is_set():
            throughput = description.provisioned_throughput
            if not (throughput.read_capacity_units and throughput.write_capacity_units):
                raise ValueError("read_capacity_units and write_capacity_units are required together")
            params[PROVISIONED_THROUGHPUT] = _throughput_map(throughput)

        index_updates = []
        for index in description.global_secondary_indexes:
            if index.provisioned_throughput.is_set():
                index_updates.append({
                    UPDATE: {
                        INDEX_NAME: index.index_name,
                        PROVISIONED_THROUGHPUT: _throughput_map(index.provisioned_throughput),
                    }
                })
        if index_updates:
            params[GLOBAL_SECONDARY_INDEX_UPDATES] = index_updates

        self.add_table_by_name(description.table_name)
        self.params.update(params)
        return self

    def add_exclusive_start_table_name(self, table_name: Optional[str]) -> 'Query':
        if table_name:
            self.params[EXCLUSIVE_START_TABLE_NAME] = table_name
        return self

    def add_limit(self, limit: Optional[int]) -> 'Query':
        if limit is not None:
            if limit <= 0:
                raise ValueError("limit must be greater than zero")
            self.params[LIMIT] = limit
        return self

    def add_key(self, primary_key: PrimaryKey, hash_value: Any, range_value: Optional[Any] = None) -> 'Query':
        self.params.update(primary_key.get_identifier_map(hash_value, range_value))
        return self

    def serialize(self) -> bytes:
        return json.dumps(self.params).encode(DEFAULT_ENCODING)
