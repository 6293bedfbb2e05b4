from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

MIN_DOCUMENT_LENGTH = 100


class AnalysisRequest(BaseModel):
    """Input record: the text extracted from a loan document."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    document_text: str = Field(
        ...,
        min_length=MIN_DOCUMENT_LENGTH,
        validation_alias=AliasChoices("document_text", "documentText"),
        description="The full text content extracted from the loan document PDF.",
    )


class DetailedFinding(BaseModel):
    flag_key: str = Field(
        ..., description="The key corresponding to the check (e.g., 'use_of_urgent_language')."
    )
    finding: str = Field(
        ...,
        description="A brief explanation or evidence for the boolean flag's value (e.g., 'Detected phrase: Limited time offer').",
    )
    is_red_flag: Optional[bool] = Field(
        None, description="Indicates if this finding is generally considered a red flag."
    )


class AnalysisResult(BaseModel):
    """
    Structured risk assessment of a loan document.

    Field descriptions are sent to the model as part of the output schema, so
    they double as instructions for what each field means.
    """

    use_of_urgent_language: bool = Field(
        ..., description='Does the text use urgency? (e.g., "limited offer", "act now")'
    )
    emotional_appeals: bool = Field(
        ..., description="Does the text try to evoke fear, hope, excitement to pressure decision-making?"
    )
    hidden_conditions_detected: bool = Field(
        ..., description="Are there indications of fine print clauses or hidden terms not clearly mentioned?"
    )
    complex_language_used: bool = Field(
        ..., description="Is the contract filled with hard-to-understand or technical language?"
    )
    aggressive_marketing_detected: bool = Field(
        ...,
        description="Does the text suggest repeated aggressive calls/messages/emails? (Infer based on language used)",
    )
    loan_app_authenticity_verified: Optional[bool] = Field(
        None,
        description="Can the authenticity of the source (app/website mentioned) be inferred as verified? (May be hard to determine from text alone)",
    )
    phishing_indicators_present: bool = Field(
        ...,
        description="Are there textual signs suggestive of phishing (e.g., unusual links, generic greetings, requests for sensitive info upfront)?",
    )
    loan_disbursement_method: Optional[str] = Field(
        None, description="How is the loan disbursed based on the text? (e.g., Bank Transfer, Cash, Wallet)"
    )
    repayment_method: Optional[str] = Field(
        None, description="How is repayment collected based on the text? (e.g., Bank, Cash Pickup, Auto-debit)"
    )
    suspicious_permissions_requested: Optional[bool] = Field(
        None,
        description="(If app-based terms mentioned) Are unnecessary device permissions potentially requested (contacts, location, SMS)?",
    )
    disclosure_of_total_cost: bool = Field(
        ...,
        description="Is the total repayment amount or a clear way to calculate it disclosed in the text?",
    )
    regulatory_registration_status: Optional[bool] = Field(
        None, description="Does the text mention registration with a financial authority?"
    )
    consumer_rights_info_provided: bool = Field(
        ..., description="Are the borrower's rights mentioned or referenced in the text?"
    )
    grace_period_provided: bool = Field(
        ..., description="Is a grace period for missed payments mentioned in the text?"
    )
    early_repayment_penalty_present: bool = Field(
        ..., description="Does the text mention a penalty for early closure/repayment?"
    )
    rollover_clauses_detected: bool = Field(
        ..., description="Are there indications of automatic renewals or rollovers in the text?"
    )
    dynamic_interest_rate_clause: bool = Field(
        ..., description="Does the text suggest the interest rate can change dynamically after signing?"
    )
    user_felt_pressured_to_accept: Optional[bool] = Field(
        None,
        description="Based on the language, could a user feel emotional/psychological pressure? (Inferred)",
    )
    user_understood_terms_before_accepting: Optional[bool] = Field(
        None,
        description="Does the text seem clear enough for a typical user to understand before accepting? (Inferred)",
    )
    overall_summary: str = Field(
        ...,
        description="A comprehensive summary of the findings, highlighting major red flags or positive points detected in the document text.",
    )
    detailed_analysis: List[DetailedFinding] = Field(
        ..., description="Detailed findings for each check performed."
    )

    def red_flags(self) -> List[DetailedFinding]:
        """Findings the model marked as red flags, in their original order."""
        return [item for item in self.detailed_analysis if item.is_red_flag]


# Names of the per-check fields; detailed_analysis flag keys are expected (not enforced) to match these.
FLAG_FIELDS: List[str] = [
    name
    for name in AnalysisResult.model_fields
    if name not in ("overall_summary", "detailed_analysis")
]
