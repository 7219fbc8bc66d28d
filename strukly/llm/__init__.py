"""
Hosted-model collaborators: receipt extraction and the chat assistant.
"""

from .chat_assistant import ChatAssistant
from .receipt_extractor import ReceiptExtractor

__all__ = ["ChatAssistant", "ReceiptExtractor"]
