"""
Data models for receipt extraction, persistence and analytics.
"""

from .receipt import Receipt, ReceiptItem, ReceiptCreate, ReceiptUpdate, UserRevenueAccount
from .extraction import ExtractedItem, ExtractionResult, DraftItem, ReceiptDraft
from .revenue import RevenueStats
from .chat import ChatTurn, ChatRequest, ChatReply, OcrRequest

__all__ = [
    "Receipt", "ReceiptItem", "ReceiptCreate", "ReceiptUpdate", "UserRevenueAccount",
    "ExtractedItem", "ExtractionResult", "DraftItem", "ReceiptDraft",
    "RevenueStats",
    "ChatTurn", "ChatRequest", "ChatReply", "OcrRequest",
]
