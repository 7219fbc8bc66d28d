"""
Conversational Assistant: a stateless, single-shot chat completion with a
fixed persona and the last few turns of history.
"""

from typing import Dict, List, Optional

from openai import OpenAI, OpenAIError

from strukly.exceptions import AssistantError
from strukly.llm.prompts import CHAT_PERSONA
from strukly.models import ChatTurn
from strukly.utils.logging_config import logger


class ChatAssistant:

    def __init__(self, openai_client: Optional[OpenAI] = None, model: str = "gpt-4o-mini", history_limit: int = 10):
        self._openai_client = openai_client
        self.model = model
        self.history_limit = history_limit

    @property
    def openai_client(self) -> OpenAI:
        if self._openai_client is None:
            self._openai_client = OpenAI()
        return self._openai_client

    def build_messages(self, message: str, history: List[ChatTurn]) -> List[Dict[str, str]]:
        """Persona, then the last `history_limit` turns, then the new message."""
        recent = history[-self.history_limit:] if self.history_limit else []
        messages = [{"role": "system", "content": CHAT_PERSONA}]
        for turn in recent:
            role = "user" if turn.sender == "user" else "assistant"
            messages.append({"role": role, "content": turn.text})
        messages.append({"role": "user", "content": message})
        return messages

    def reply(self, message: str, history: Optional[List[ChatTurn]] = None) -> str:
        """
        Raises:
            AssistantError: the model call failed or returned no text.
        """
        messages = self.build_messages(message, history or [])
        try:
            response = self.openai_client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=0.7,
            )
            answer = (response.choices[0].message.content or "").strip()
        except OpenAIError as e:
            logger.error(f"Chat API Error: {e}")
            raise AssistantError(str(e)) from e
        except (IndexError, AttributeError) as e:
            logger.error(f"Unexpected chat response shape: {e}")
            raise AssistantError(str(e)) from e

        if not answer:
            logger.error("Chat API returned an empty reply")
            raise AssistantError("Empty reply")
        return answer
