from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Literal, Sequence

import pandas as pd

from .analyzer import DocumentAnalyzer
from .errors import AnalysisError
from .preprocess import PDFPreprocessor, load_document
from .schema import FLAG_FIELDS, AnalysisResult

logger = logging.getLogger(__name__)


@dataclass
class DocumentResult:
    document: Path
    status: Literal["ok", "error", "skipped"]
    result: AnalysisResult | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": str(self.document),
            "status": self.status,
            "error": self.error,
            "analysis": self.result.model_dump() if self.result else None,
        }


class AnalysisOrchestrator:
    """
    Loads documents and runs the loan document analyzer on each, one at a time.
    """

    def __init__(
        self,
        analyzer: DocumentAnalyzer,
        pdf_preprocessor: PDFPreprocessor | None = None,
    ):
        self.analyzer = analyzer
        self.pdf_preprocessor = pdf_preprocessor or PDFPreprocessor()

    async def process(self, files: Sequence[Path]) -> List[DocumentResult]:
        """
        Analyze every file; a failure on one document is recorded and the batch continues.
        """
        results: List[DocumentResult] = []
        for file_path in files:
            path = Path(file_path)
            logger.info("Loading %s", path)
            try:
                document = load_document(path, self.pdf_preprocessor)
            except (OSError, ValueError, RuntimeError) as exc:
                logger.warning("Skipping %s: %s", path.name, exc)
                results.append(DocumentResult(document=path, status="skipped", error=str(exc)))
                continue

            try:
                logger.info("Analyzing %s", path.name)
                analysis = await self.analyzer.analyze({"document_text": document.text})
                results.append(DocumentResult(document=path, status="ok", result=analysis))
            except AnalysisError as exc:
                logger.error("Analysis failed for %s: %s", path.name, exc)
                results.append(DocumentResult(document=path, status="error", error=str(exc)))
        return results

    def to_dataframe(self, results: Sequence[DocumentResult]) -> pd.DataFrame:
        """
        Flatten results into one row per document.

        Columns: document_name, status, error, red_flag_count, <flag fields...>, overall_summary
        """
        rows: List[dict[str, Any]] = []
        for res in results:
            row: dict[str, Any] = {
                "document_name": res.document.name,
                "status": res.status,
                "error": res.error,
            }
            if res.result:
                row["red_flag_count"] = len(res.result.red_flags())
                row.update(res.result.model_dump(exclude={"detailed_analysis"}))
            rows.append(row)
        columns = ["document_name", "status", "error", "red_flag_count", *FLAG_FIELDS, "overall_summary"]
        return pd.DataFrame(rows).reindex(columns=columns)

    def findings_dataframe(self, results: Sequence[DocumentResult]) -> pd.DataFrame:
        """One row per detailed finding, in the order the model returned them."""
        rows: List[dict[str, Any]] = []
        for res in results:
            if not res.result:
                continue
            for position, item in enumerate(res.result.detailed_analysis):
                rows.append(
                    {
                        "document_name": res.document.name,
                        "position": position,
                        **item.model_dump(),
                    }
                )
        return pd.DataFrame(rows, columns=["document_name", "position", "flag_key", "finding", "is_red_flag"])

    def to_excel(self, results: Sequence[DocumentResult], output_path: Path) -> None:
        """
        Write results to an Excel file with sheets 'analyses' and 'findings'.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing results to %s", output_path)
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self.to_dataframe(results).to_excel(writer, sheet_name="analyses", index=False)
            self.findings_dataframe(results).to_excel(writer, sheet_name="findings", index=False)

    def to_json(self, results: Sequence[DocumentResult], output_path: Path) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing results to %s", output_path)
        output_path.write_text(
            json.dumps([res.to_dict() for res in results], indent=2),
            encoding="utf-8",
        )
