# pyproject.toml: langchain-openai

import logging
from typing import Dict, List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from focushero.config import MOTIVATION_MODEL, OPENAI_API_KEY

logger = logging.getLogger(__name__)


def to_langchain_messages(messages: List[Dict[str, str]]) -> List[BaseMessage]:
    """Convert role/content dicts to LangChain messages"""
    return [
        SystemMessage(content=msg["content"]) if msg["role"] == "system"
        else HumanMessage(content=msg["content"]) if msg["role"] == "user"
        else AIMessage(content=msg["content"])
        for msg in messages
    ]


class LLMService:
    def __init__(
        self,
        model: str = MOTIVATION_MODEL,
        temperature: float = 0.8,
        max_tokens: Optional[int] = 100,
        api_key: Optional[str] = OPENAI_API_KEY,
    ):
        self.llm = ChatOpenAI(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=api_key,
        )

    async def invoke(self, messages: List[Dict[str, str]]) -> str:
        """
        Invoke the chat model and return the text of its reply.

        Args:
            messages: List of message dictionaries with 'role' and 'content' keys

        Returns:
            The reply content, stripped of surrounding whitespace
        """
        response = await self.llm.ainvoke(to_langchain_messages(messages))
        return str(response.content).strip()


_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """Get or create the LLM service singleton"""
    global _llm_service

    if _llm_service is None:
        _llm_service = LLMService()

    return _llm_service


def reset_llm_service():
    """Reset the LLM service singleton (useful for testing)"""
    global _llm_service
    _llm_service = None
