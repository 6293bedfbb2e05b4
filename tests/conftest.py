from __future__ import annotations

from typing import Any, List, Optional

import pytest

from loan_document_analysis.schema import AnalysisResult, DetailedFinding

SAMPLE_DOCUMENT = (
    "PERSONAL LOAN AGREEMENT. Special rate for you: act now, limited time offer! This agreement is made between "
    "QuickCash Lending and the Borrower. The Borrower agrees to repay the principal of $2,000 "
    "plus interest at a rate that may be adjusted at the Lender's discretion. Fees apply as "
    "described in Schedule B, available on request. The loan renews automatically each month "
    "unless cancelled in writing."
)


class StubInvoker:
    """ModelInvoker double that records prompts and replays a canned output or error."""

    def __init__(self, output: Optional[Any] = None, error: Optional[Exception] = None):
        self.output = output
        self.error = error
        self.prompts: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def invoke(self, prompt_text, input_schema, output_schema, input):  # type: ignore[no-untyped-def]
        self.prompts.append(prompt_text)
        if self.error is not None:
            raise self.error
        return self.output


def make_result(**overrides: Any) -> AnalysisResult:
    data: dict[str, Any] = {
        "use_of_urgent_language": False,
        "emotional_appeals": False,
        "hidden_conditions_detected": False,
        "complex_language_used": False,
        "aggressive_marketing_detected": False,
        "phishing_indicators_present": False,
        "disclosure_of_total_cost": True,
        "consumer_rights_info_provided": True,
        "grace_period_provided": False,
        "early_repayment_penalty_present": False,
        "rollover_clauses_detected": False,
        "dynamic_interest_rate_clause": False,
        "overall_summary": "Terms are clear and no pressure tactics were found.",
        "detailed_analysis": [
            DetailedFinding(flag_key="disclosure_of_total_cost", finding="Total repayment is stated.", is_red_flag=False),
        ],
    }
    data.update(overrides)
    return AnalysisResult(**data)


@pytest.fixture
def sample_document() -> str:
    return SAMPLE_DOCUMENT


@pytest.fixture
def urgent_result() -> AnalysisResult:
    return make_result(
        use_of_urgent_language=True,
        rollover_clauses_detected=True,
        dynamic_interest_rate_clause=True,
        overall_summary="Pressure language, automatic rollovers and a variable rate are red flags.",
        detailed_analysis=[
            DetailedFinding(
                flag_key="use_of_urgent_language",
                finding="Detected phrase: Act now, limited time offer",
                is_red_flag=True,
            ),
            DetailedFinding(
                flag_key="rollover_clauses_detected",
                finding="The loan renews automatically each month.",
                is_red_flag=True,
            ),
            DetailedFinding(
                flag_key="grace_period_provided",
                finding="No grace period is mentioned.",
            ),
        ],
    )


@pytest.fixture
def result_factory():
    return make_result


@pytest.fixture
def stub_invoker_factory():
    return StubInvoker
