"""
Persistence collaborators: the Receipt Store and the receipt image store.
"""

from .database import create_db_engine, create_session_factory
from .image_store import LocalImageStore, compress_image
from .receipt_store import ReceiptStore


def build_receipt_store(database_url: str) -> ReceiptStore:
    """Engine + session factory + store in one call."""
    return ReceiptStore(create_session_factory(create_db_engine(database_url)))


__all__ = [
    "ReceiptStore", "LocalImageStore", "compress_image",
    "create_db_engine", "create_session_factory", "build_receipt_store",
]
