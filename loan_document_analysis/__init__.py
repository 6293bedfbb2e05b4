"""
loan_document_analysis: structured, LLM-backed risk assessment of loan contract text.

The analyzer renders extracted document text into a fixed prompt, asks the model
for output matching ``AnalysisResult``, and reports failures as ``AnalysisError``.
"""

from .analyzer import DocumentAnalyzer, analyze
from .errors import AnalysisError, EmptyResponseError, UpstreamError, ValidationError
from .schema import AnalysisRequest, AnalysisResult, DetailedFinding

__all__ = [
    "AnalysisError",
    "AnalysisRequest",
    "AnalysisResult",
    "DetailedFinding",
    "DocumentAnalyzer",
    "EmptyResponseError",
    "UpstreamError",
    "ValidationError",
    "analyze",
]
