"""
PynamoAdmin lowest level connection
"""

from pynamoadmin.connection.base import Connection
from pynamoadmin.connection.table import TableConnection
from pynamoadmin.connection.transport import BotocoreTransport


__all__ = [
    "BotocoreTransport",
    "Connection",
    "TableConnection",
]
