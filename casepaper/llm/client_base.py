from abc import ABC, abstractmethod
from dataclasses import dataclass


class BaseChatClient(ABC):
    """Contract for provider-specific chat-completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None = None,
        schema_name: str = "result",
    ) -> str:
        """Return provider response as plain text.

        When json_schema is given the provider is asked for a JSON object
        matching it; otherwise the reply is free text.

        Raises:
            LlmNetworkError: transport failure or timeout.
            LlmError: provider answered without usable content.
        """


@dataclass(frozen=True)
class ChatModel:
    """A configured client together with the model it should call."""

    client: BaseChatClient
    model: str
    temperature: float = 0.0
