from casepaper.llm.client_base import BaseChatClient, ChatModel
from casepaper.llm.factory import LlmClientFactory

__all__ = ["BaseChatClient", "ChatModel", "LlmClientFactory"]
