"""
Table description value types
"""
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from pynamoadmin.constants import HASH, RANGE

if TYPE_CHECKING:
    from pynamoadmin.attributes import PrimaryKey


@dataclass(frozen=True)
class AttributeDefinition:
    attribute_name: str
    attribute_type: str


@dataclass(frozen=True)
class KeySchemaElement:
    attribute_name: str
    key_type: str


@dataclass
class ProvisionedThroughput:
    read_capacity_units: int = 0
    write_capacity_units: int = 0
    number_of_decreases_today: int = 0

    def is_set(self) -> bool:
        return bool(self.read_capacity_units or self.write_capacity_units)


@dataclass
class Projection:
    projection_type: str
    non_key_attributes: List[str] = field(default_factory=list)


@dataclass
class LocalSecondaryIndex:
    index_name: str
    key_schema: List[KeySchemaElement] = field(default_factory=list)
    projection: Optional[Projection] = None
    index_size_bytes: int = 0
    item_count: int = 0


@dataclass
class GlobalSecondaryIndex:
    index_name: str
    key_schema: List[KeySchemaElement] = field(default_factory=list)
    projection: Optional[Projection] = None
    provisioned_throughput: ProvisionedThroughput = field(default_factory=ProvisionedThroughput)
    index_size_bytes: int = 0
    item_count: int = 0


@dataclass
class TableDescription:
    """
    The administrative metadata of a table.

    Requests only need the fields relevant to the operation: a delete needs
    just :attr:`table_name`, an update the name plus whatever is changing.
    Descriptions returned by DescribeTable are fully populated.
    """
    table_name: str
    attribute_definitions: List[AttributeDefinition] = field(default_factory=list)
    key_schema: List[KeySchemaElement] = field(default_factory=list)
    provisioned_throughput: ProvisionedThroughput = field(default_factory=ProvisionedThroughput)
    local_secondary_indexes: List[LocalSecondaryIndex] = field(default_factory=list)
    global_secondary_indexes: List[GlobalSecondaryIndex] = field(default_factory=list)
    item_count: int = 0
    table_size_bytes: int = 0
    table_status: str = ''
    creation_date_time: float = 0.0

    @property
    def hash_keyname(self) -> Optional[str]:
        for key in self.key_schema:
            if key.key_type == HASH:
                return key.attribute_name
        return None

    @property
    def range_keyname(self) -> Optional[str]:
        for key in self.key_schema:
            if key.key_type == RANGE:
                return key.attribute_name
        return None

    def get_attribute_definition(self, attribute_name: str) -> Optional[AttributeDefinition]:
        for attr in self.attribute_definitions:
            if attr.attribute_name == attribute_name:
                return attr
        return None

    def build_primary_key(self) -> 'PrimaryKey':
        from pynamoadmin.attributes import build_primary_key
        return build_primary_key(self)
