from gluestick.core.document import Document
from gluestick.core.queryset import QuerySet
from gluestick.core.connection import connect, disconnect, get_database, get_client

__all__ = [
    "Document",
    "QuerySet",
    "connect",
    "disconnect",
    "get_database",
    "get_client",
]
