"""
Error taxonomy shared by the API, the UI and the collaborators.
"""

from typing import Optional


class StruklyError(Exception):
    """Base class for every error raised deliberately by this package."""


class ValidationError(StruklyError):
    """A request is missing a required field (image, chat message, items)."""


class ExtractionError(StruklyError):
    """The extraction service failed or returned output that is not usable JSON."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details or message


class AssistantError(StruklyError):
    """The conversational model call failed."""


class StoreError(StruklyError):
    """A Receipt Store read or write failed."""

    retryable = True


class ReceiptNotFoundError(StoreError):
    """The receipt does not exist or is not owned by the requesting user."""

    retryable = False

    def __init__(self, receipt_id: str):
        super().__init__(f"Receipt not found: {receipt_id}")
        self.receipt_id = receipt_id


class AccountNotFoundError(StoreError):
    """No revenue account exists for the user."""

    retryable = False

    def __init__(self, user_id: str):
        super().__init__(f"Account not found: {user_id}")
        self.user_id = user_id


class DraftItemNotFoundError(StruklyError, LookupError):
    """An edit or delete referenced a draft item id that is not in the list."""

    def __init__(self, item_id: str):
        super().__init__(f"Draft item not found: {item_id}")
        self.item_id = item_id
