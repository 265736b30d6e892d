from .call_llm import LLMService, get_llm_service, reset_llm_service

__all__ = ["LLMService", "get_llm_service", "reset_llm_service"]
