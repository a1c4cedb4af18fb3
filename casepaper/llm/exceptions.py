class LlmError(Exception):
    """Raised when a language-model call fails or returns unusable content."""


class LlmNetworkError(LlmError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
