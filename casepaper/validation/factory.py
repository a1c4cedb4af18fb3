from casepaper.config.settings import Settings
from casepaper.llm.client_base import ChatModel
from casepaper.validation.base import BaseExtractionValidator
from casepaper.validation.llm_validator import LlmExtractionValidator
from casepaper.validation.refiner import RuleBasedValidator


class ValidatorFactory:
    """Creates the configured validation/refinement adapter."""

    MODES: tuple[str, ...] = ("rules", "llm")

    @classmethod
    def create(cls, settings: Settings, chat_model: ChatModel) -> BaseExtractionValidator:
        mode = settings.validation_mode.lower()
        if mode == "rules":
            return RuleBasedValidator()
        if mode == "llm":
            return LlmExtractionValidator(chat_model)
        raise ValueError(f"Unknown validation mode '{mode}'. Choose from: {list(cls.MODES)}")
