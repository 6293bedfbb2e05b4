from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, Type, TypeVar

from pydantic import BaseModel

from .agents import ModelInvoker
from .schema import AnalysisRequest, AnalysisResult

InT = TypeVar("InT", bound=BaseModel)
OutT = TypeVar("OutT", bound=BaseModel)

START_MARKER = "--- START DOCUMENT TEXT ---"
END_MARKER = "--- END DOCUMENT TEXT ---"

LOAN_DOCUMENT_TEMPLATE = (
    "You are an expert loan contract analyzer. Your task is to meticulously review the provided "
    "loan document text content and identify potential red flags, manipulative tactics, and unclear "
    "terms based on the specific criteria listed in the output schema.\n"
    "\n"
    "Analyze the following loan document text:\n"
    f"{START_MARKER}\n"
    "{document_text}\n"
    f"{END_MARKER}\n"
    "\n"
    "Carefully evaluate the text against each field in the output schema. For each boolean field, "
    "determine if the condition is met based *only* on the provided text. If the text doesn't provide "
    "enough information for a boolean field (especially optional ones like 'regulatory_registration_status' "
    "or 'loan_app_authenticity_verified'), determine the most likely value or default to false/null if "
    "inference is not possible. For text fields like 'loan_disbursement_method', extract the relevant "
    "information if present.\n"
    "\n"
    "For the 'detailed_analysis' array:\n"
    "- For each check (corresponding to the keys in the output schema), provide a brief 'finding' "
    "explaining the reasoning or quoting relevant text snippets.\n"
    "- Indicate if the finding is generally considered a 'is_red_flag' (true if it's a potential negative "
    "for the borrower, false or omit otherwise).\n"
    "\n"
    "For the 'overall_summary', synthesize your findings into a concise paragraph highlighting the most "
    "critical red flags (e.g., hidden fees, complex language, pressure tactics) or positive aspects "
    "(e.g., clear terms, consumer rights mentioned). Focus on actionable insights for the user.\n"
    "\n"
    "Provide your analysis strictly in the requested JSON format matching the output schema."
)


def render_prompt(request: AnalysisRequest, template: str = LOAN_DOCUMENT_TEMPLATE) -> str:
    """Interpolate the document text into the instruction template."""
    return template.format(document_text=request.document_text)


@dataclass
class StructuredPrompt(Generic[InT, OutT]):
    """
    A natural-language template bound to input/output schemas and a model invoker.

    ``run`` renders the template for one input and asks the invoker for a
    schema-constrained answer. Whatever the invoker returns is passed back as is.
    """

    name: str
    input_schema: Type[InT]
    output_schema: Type[OutT]
    render: Callable[[InT], str]
    invoker: ModelInvoker

    async def run(self, input: InT) -> Optional[OutT]:
        prompt_text = self.render(input)
        return await self.invoker.invoke(
            prompt_text, self.input_schema, self.output_schema, input
        )


def loan_document_prompt(invoker: ModelInvoker) -> StructuredPrompt[AnalysisRequest, AnalysisResult]:
    return StructuredPrompt(
        name="analyzeLoanDocumentPrompt",
        input_schema=AnalysisRequest,
        output_schema=AnalysisResult,
        render=render_prompt,
        invoker=invoker,
    )
