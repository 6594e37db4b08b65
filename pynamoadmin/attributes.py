"""
Primary key attributes
"""
from base64 import b64encode
from typing import Any, Dict, Optional

from pynamoadmin.constants import BINARY, DEFAULT_ENCODING, HASH, KEY, KEY_ATTRIBUTE_TYPES, NUMBER, RANGE, STRING
from pynamoadmin.exceptions import SchemaInconsistency
from pynamoadmin.schema import AttributeDefinition, TableDescription


class Attribute(object):
    """
    A typed key attribute
    """

    def __init__(self, name: str, attr_type: str, value: str = '') -> None:
        if attr_type not in KEY_ATTRIBUTE_TYPES:
            raise ValueError("Invalid key attribute type: {}".format(attr_type))
        self.name = name
        self.attr_type = attr_type
        self.value = value

    def __repr__(self) -> str:
        return "Attribute<{}:{}>".format(self.name, self.attr_type)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Attribute):
            return NotImplemented
        return (self.name, self.attr_type, self.value) == (other.name, other.attr_type, other.value)

    def serialize(self, value: Any) -> Dict[str, str]:
        """
        Returns the wire form of `value` for this attribute, e.g. ``{'N': '42'}``
        """
        if self.attr_type == BINARY:
            if isinstance(value, str):
                value = value.encode(DEFAULT_ENCODING)
            return {BINARY: b64encode(value).decode(DEFAULT_ENCODING)}
        return {self.attr_type: str(value)}


def string_attribute(name: str, value: str = '') -> Attribute:
    return Attribute(name, STRING, value)


def number_attribute(name: str, value: str = '') -> Attribute:
    return Attribute(name, NUMBER, value)


def binary_attribute(name: str, value: str = '') -> Attribute:
    return Attribute(name, BINARY, value)


def get_empty_attribute(attr: AttributeDefinition) -> Optional[Attribute]:
    """
    Returns an empty-valued attribute for a definition, or None for non-key types
    """
    if attr.attribute_type not in KEY_ATTRIBUTE_TYPES:
        return None
    return Attribute(attr.attribute_name, attr.attribute_type)


class PrimaryKey(object):
    """
    The hash key attribute and optional range key attribute of a table.

    Use :func:`build_primary_key` to derive one from a table description.
    """

    def __init__(self, hash_key: Attribute, range_key: Optional[Attribute] = None) -> None:
        self.hash_key = hash_key
        self.range_key = range_key

    def __repr__(self) -> str:
        if self.range_key is None:
            return "PrimaryKey<{}>".format(self.hash_key.name)
        return "PrimaryKey<{}, {}>".format(self.hash_key.name, self.range_key.name)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PrimaryKey):
            return NotImplemented
        return self.hash_key == other.hash_key and self.range_key == other.range_key

    def get_identifier_map(self, hash_value: Any, range_value: Optional[Any] = None, key: str = KEY) -> Dict:
        """
        Builds the identifier map used to look up a single item
        """
        identifier: Dict[str, Dict] = {
            key: {
                self.hash_key.name: self.hash_key.serialize(hash_value)
            }
        }
        if self.range_key is not None:
            if range_value is None:
                raise ValueError("A range key value is required for {}".format(self.range_key.name))
            identifier[key][self.range_key.name] = self.range_key.serialize(range_value)
        return identifier


def build_primary_key(table_description: TableDescription) -> PrimaryKey:
    """
    Derives the primary key of a table from its key schema and attribute definitions

    :raises SchemaInconsistency: if a key references a missing or non-key-typed attribute,
        or the key schema does not hold exactly one hash key
    """
    hash_key = None
    range_key = None
    for key in table_description.key_schema:
        attr_def = table_description.get_attribute_definition(key.attribute_name)
        if attr_def is None:
            raise SchemaInconsistency(
                "No attribute definition for key attribute `{}` in table `{}`".format(
                    key.attribute_name, table_description.table_name))
        attr = get_empty_attribute(attr_def)
        if attr is None:
            raise SchemaInconsistency(
                "Key attribute `{}` has unsupported type `{}`".format(key.attribute_name, attr_def.attribute_type))

        if key.key_type == HASH:
            if hash_key is not None:
                raise SchemaInconsistency("Multiple hash keys in table `{}`".format(table_description.table_name))
            hash_key = attr
        elif key.key_type == RANGE:
            if range_key is not None:
                raise SchemaInconsistency("Multiple range keys in table `{}`".format(table_description.table_name))
            range_key = attr
        else:
            raise SchemaInconsistency("Invalid key type `{}` for `{}`".format(key.key_type, key.attribute_name))

    if hash_key is None:
        raise SchemaInconsistency("No hash key in table `{}`".format(table_description.table_name))
    return PrimaryKey(hash_key, range_key)
