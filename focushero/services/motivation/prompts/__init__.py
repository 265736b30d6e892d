from .motivation_prompt import build_messages

__all__ = ["build_messages"]
