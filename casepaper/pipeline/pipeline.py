from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from casepaper.extraction.models import StructuredData
from casepaper.normalization.models import NormalizedText
from casepaper.pipeline.models import Stage, Submission
from casepaper.validation.models import ValidationOutcome


@dataclass(slots=True)
class PipelineContext:
    upload_id: str
    submission: Submission
    image_base64: str = ""
    raw_text: str = ""
    normalized: NormalizedText | None = None
    structured_data: StructuredData | None = None
    validation: ValidationOutcome | None = None

    @property
    def normalized_text(self) -> str:
        return self.normalized.text if self.normalized is not None else ""


class PipelineStep(ABC):
    stage: ClassVar[Stage]
    # A failing fatal step ends the run degraded; a non-fatal one is skipped.
    fatal: ClassVar[bool] = True
    advisory: ClassVar[str] = ""

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
