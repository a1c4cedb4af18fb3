from casepaper.extraction.base import BaseStructuredExtractor
from casepaper.logging.logger import Log
from casepaper.normalization.base import BaseNormalizer
from casepaper.ocr.text_extractor import TextExtractor, encode_image
from casepaper.pdf.base import BasePdfRasterizer
from casepaper.pipeline.models import Stage
from casepaper.pipeline.pipeline import PipelineContext, PipelineStep
from casepaper.validation.base import BaseExtractionValidator

_OCR_ADVISORY = (
    "No text could be read from the case paper. "
    "Please upload a clearer image or enter the details manually."
)


class PrepareImageStep(PipelineStep):
    """Encodes the upload for OCR, rendering page one first when it is a PDF."""

    stage = Stage.EXTRACTING
    advisory = _OCR_ADVISORY

    def __init__(self, rasterizer: BasePdfRasterizer) -> None:
        self._rasterizer = rasterizer

    def run(self, context: PipelineContext) -> PipelineContext:
        content = context.submission.content
        if context.submission.is_pdf:
            content = self._rasterizer.render_first_page(content)
            Log.info(f"[{context.upload_id}] Rendered PDF page 1 to {len(content)} PNG bytes")
        context.image_base64 = encode_image(content)
        return context


class ExtractTextStep(PipelineStep):
    stage = Stage.EXTRACTING
    advisory = _OCR_ADVISORY

    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.image_base64:
            raise ValueError("PipelineContext.image_base64 must be set before text extraction")
        context.raw_text = self._text_extractor.extract(context.image_base64)
        return context


class NormalizeStep(PipelineStep):
    stage = Stage.NORMALIZING
    advisory = (
        "No clinical content could be identified in the case paper. "
        "Please review the scanned text and enter the details manually."
    )

    def __init__(self, normalizer: BaseNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.normalized = self._normalizer.normalize(context.raw_text)
        return context


class StructureStep(PipelineStep):
    stage = Stage.STRUCTURING
    advisory = (
        "The case paper could not be converted into structured data. "
        "Please enter the details manually."
    )

    def __init__(self, extractor: BaseStructuredExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.normalized is None:
            raise ValueError("PipelineContext.normalized must be set before structuring")
        context.structured_data = self._extractor.extract(context.normalized.text)
        return context


class ValidateStep(PipelineStep):
    stage = Stage.VALIDATING
    fatal = False

    def __init__(self, validator: BaseExtractionValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.structured_data is None:
            raise ValueError("PipelineContext.structured_data must be set before validation")
        context.validation = self._validator.validate(
            context.structured_data,
            context.raw_text,
            context.normalized_text,
        )
        return context
