"""
Loan document analysis: validate extracted text, ask the model for a structured
risk assessment, and surface every failure as an AnalysisError.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .agents import ModelInvoker, PydanticAIInvoker
from .config import Settings, get_settings
from .errors import AnalysisError, EmptyResponseError, UpstreamError, ValidationError
from .prompt import StructuredPrompt, loan_document_prompt
from .schema import AnalysisRequest, AnalysisResult

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Failed to analyze loan document"
EMPTY_RESPONSE_MESSAGE = "AI analysis failed to generate a response."

RequestLike = Union[AnalysisRequest, Mapping[str, Any]]


class DocumentAnalyzer:
    """
    Runs one loan document analysis per call.

    Stateless across calls; concurrent ``analyze`` calls are independent.
    """

    def __init__(self, invoker: ModelInvoker):
        self.prompt: StructuredPrompt[AnalysisRequest, AnalysisResult] = loan_document_prompt(invoker)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DocumentAnalyzer":
        settings = settings or get_settings()
        return cls(PydanticAIInvoker(model_name=settings.model_name))

    def _validate(self, request: RequestLike) -> AnalysisRequest:
        # Instances are re-checked too; model_construct skips validation.
        if isinstance(request, AnalysisRequest):
            request = request.model_dump()
        try:
            return AnalysisRequest.model_validate(request)
        except PydanticValidationError as exc:
            raise ValidationError(
                f"{ERROR_PREFIX}: invalid request: {exc}", errors=exc.errors()
            ) from exc

    def _coerce(self, output: Any) -> AnalysisResult:
        if isinstance(output, AnalysisResult):
            return output
        try:
            return AnalysisResult.model_validate(output)
        except PydanticValidationError as exc:
            logger.error("AI output did not match the analysis schema: %s", exc)
            raise UpstreamError(f"{ERROR_PREFIX}: model output did not match schema: {exc}") from exc

    async def analyze(self, request: RequestLike) -> AnalysisResult:
        """
        Analyze the text of a loan document.

        Raises ValidationError before any model call when the text is missing
        or shorter than the minimum length, EmptyResponseError when the model
        returns nothing, and UpstreamError for any failure of the model call.
        """
        validated = self._validate(request)
        logger.info("Analyzing loan document text of length %d", len(validated.document_text))

        try:
            output = await self.prompt.run(validated)
        except Exception as exc:
            logger.error("Error during AI analysis: %s", exc)
            raise UpstreamError(f"{ERROR_PREFIX}: {str(exc) or 'Unknown AI Error'}") from exc

        if not output:
            logger.error("AI did not return a valid output")
            raise EmptyResponseError(f"{ERROR_PREFIX}: {EMPTY_RESPONSE_MESSAGE}")

        result = self._coerce(output)
        logger.info(
            "Analysis successful: %d findings, %d red flags",
            len(result.detailed_analysis),
            len(result.red_flags()),
        )
        return result


async def analyze(request: RequestLike, *, analyzer: Optional[DocumentAnalyzer] = None) -> AnalysisResult:
    """Analyze with the given analyzer, or one built from environment settings."""
    analyzer = analyzer or DocumentAnalyzer.from_settings()
    return await analyzer.analyze(request)


__all__ = ["AnalysisError", "DocumentAnalyzer", "analyze"]
