from __future__ import annotations

from typing import Any, Dict, List, Optional


class AnalysisError(Exception):
    """Base error for every failure of a loan document analysis."""


class ValidationError(AnalysisError):
    """The request did not satisfy the input schema; no model call was made."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class EmptyResponseError(AnalysisError):
    """The model call succeeded but produced no output."""


class UpstreamError(AnalysisError):
    """The model call failed or its output could not be parsed."""
