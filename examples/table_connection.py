"""
Example use of the TableConnection API
"""
from pynamoadmin.connection import Connection, TableConnection
from pynamoadmin.retry import NoRetry

conn = Connection(host='http://localhost:8000')

# Get a table connection from the live description of the table
table = TableConnection.from_description(conn, conn.describe_table('Thread'))

# If the table doesn't already exist, the rest of this example will not work.

print(table.primary_key)

# Raise the table's throughput, without retries
table.set_retry_handler(NoRetry())
print(table.update_table(read_capacity_units=2, write_capacity_units=2))
table.wait_until_status('ACTIVE')

# The key map of a single item
print(table.get_identifier_map('hash-key', 'range-key'))
