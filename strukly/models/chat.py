"""
Request/response shapes for the conversational assistant.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    """One earlier message. sender is "user" for the merchant, anything else for the bot."""
    sender: str
    text: str


class ChatRequest(BaseModel):
    message: Optional[str] = None
    history: List[ChatTurn] = Field(default_factory=list)


class ChatReply(BaseModel):
    response: str


class OcrRequest(BaseModel):
    image: Optional[str] = None
