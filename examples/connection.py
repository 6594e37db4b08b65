"""
Examples using a connection
"""
from pynamoadmin.connection import Connection
from pynamoadmin.schema import AttributeDefinition, KeySchemaElement, ProvisionedThroughput, TableDescription

# Get a connection
conn = Connection(host='http://localhost:8000')
print(conn)

# Create a table
description = TableDescription(
    table_name='Thread',
    attribute_definitions=[
        AttributeDefinition('ForumName', 'S'),
        AttributeDefinition('Subject', 'S'),
    ],
    key_schema=[
        KeySchemaElement('ForumName', 'HASH'),
        KeySchemaElement('Subject', 'RANGE'),
    ],
    provisioned_throughput=ProvisionedThroughput(read_capacity_units=1, write_capacity_units=1),
)
print(conn.create_table(description))
conn.wait_until_status('Thread', 'ACTIVE')

# List tables
print(conn.list_tables())

# Or walk them lazily
for table_name in conn.iter_tables(limit=10):
    print(table_name)

# Describe a table
print(conn.describe_table('Thread'))

# Delete a table
print(conn.delete_table('Thread'))
