"""Tests for the request and result schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from loan_document_analysis.schema import (
    FLAG_FIELDS,
    MIN_DOCUMENT_LENGTH,
    AnalysisRequest,
    AnalysisResult,
    DetailedFinding,
)

OPTIONAL_FIELDS = {
    "loan_app_authenticity_verified",
    "loan_disbursement_method",
    "repayment_method",
    "suspicious_permissions_requested",
    "regulatory_registration_status",
    "user_felt_pressured_to_accept",
    "user_understood_terms_before_accepting",
}


def test_request_minimum_length() -> None:
    assert MIN_DOCUMENT_LENGTH == 100
    AnalysisRequest(document_text="a" * 100)
    with pytest.raises(PydanticValidationError):
        AnalysisRequest(document_text="a" * 99)


def test_request_accepts_both_key_styles() -> None:
    text = "c" * 120
    assert AnalysisRequest.model_validate({"documentText": text}).document_text == text
    assert AnalysisRequest.model_validate({"document_text": text}).document_text == text


def test_optional_fields_default_to_none(result_factory) -> None:
    result = result_factory()
    for name in OPTIONAL_FIELDS:
        assert getattr(result, name) is None


def test_required_fields_match_schema() -> None:
    required = {name for name, info in AnalysisResult.model_fields.items() if info.is_required()}
    assert required == set(AnalysisResult.model_fields) - OPTIONAL_FIELDS
    assert len(FLAG_FIELDS) == 19
    assert "overall_summary" not in FLAG_FIELDS


def test_every_field_is_described() -> None:
    schema = AnalysisResult.model_json_schema()
    for name, prop in schema["properties"].items():
        assert prop.get("description"), name
    assert schema["properties"]["use_of_urgent_language"]["description"] == (
        'Does the text use urgency? (e.g., "limited offer", "act now")'
    )


def test_missing_required_field_rejected(result_factory) -> None:
    data = result_factory().model_dump()
    del data["overall_summary"]
    with pytest.raises(PydanticValidationError):
        AnalysisResult.model_validate(data)


def test_red_flags_keep_order(urgent_result) -> None:
    assert [f.flag_key for f in urgent_result.red_flags()] == [
        "use_of_urgent_language",
        "rollover_clauses_detected",
    ]


def test_flag_keys_are_not_enforced(result_factory) -> None:
    result = result_factory(
        detailed_analysis=[DetailedFinding(flag_key="not_a_field", finding="free text", is_red_flag=True)]
    )
    assert result.red_flags()[0].flag_key == "not_a_field"
