from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

import fitz  # PyMuPDF

TEXT_SUFFIXES = (".txt", ".md")


@dataclass
class DocumentText:
    """Text extracted from one document, ready to be analyzed."""

    file_path: Path
    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class PDFPreprocessor:
    """
    Extracts the text of a PDF page by page.
    """

    max_pages: int | None = None

    def load(self, file_path: Path) -> DocumentText:
        with fitz.open(file_path) as doc:
            pages: List[str] = []
            for page_index in range(len(doc)):
                if self.max_pages is not None and page_index >= self.max_pages:
                    break
                page = doc.load_page(page_index)
                pages.append(page.get_text("text"))
            page_count = len(doc)

        metadata = {
            "pages": page_count,
            "file": file_path.name,
            "type": "pdf",
        }
        return DocumentText(
            file_path=file_path,
            text="\n\n".join(pages).strip(),
            metadata=metadata,
        )


def load_document(file_path: Path, pdf_preprocessor: PDFPreprocessor | None = None) -> DocumentText:
    """
    Load the text of a PDF or plain-text document.

    Raises ValueError for unsupported file types.
    """
    suffix = file_path.suffix.lower()
    if suffix == ".pdf":
        return (pdf_preprocessor or PDFPreprocessor()).load(file_path)
    if suffix in TEXT_SUFFIXES:
        return DocumentText(
            file_path=file_path,
            text=file_path.read_text(encoding="utf-8").strip(),
            metadata={"file": file_path.name, "type": suffix.lstrip(".")},
        )
    raise ValueError(f"Unsupported file type: {suffix}")
