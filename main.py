import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
import typer

from loan_document_analysis.analyzer import DocumentAnalyzer
from loan_document_analysis.config import get_settings
from loan_document_analysis.orchestrator import AnalysisOrchestrator

load_dotenv()


app = typer.Typer(add_completion=False)

REPORT_SUFFIXES = (".xlsx", ".json")


@app.command()
def analyze(
    files: List[Path],
    output: Path = typer.Option(
        Path("loan_analysis.xlsx"),
        "--output",
        "-o",
        help="Output file path (.xlsx or .json)",
    ),
    model_name: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (defaults to LOAN_ANALYZER_MODEL_NAME or gpt-4o)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
):
    """
    Analyze loan documents (PDF or text) for red flags and manipulative language.
    """
    suffix = output.suffix.lower()
    if suffix not in REPORT_SUFFIXES:
        raise typer.BadParameter(
            f"Unsupported report type '{output.suffix}'; use one of: {', '.join(REPORT_SUFFIXES)}",
            param_hint="--output",
        )

    settings = get_settings()
    if model_name:
        settings.model_name = model_name
    level = (log_level or settings.log_level).upper()

    log_path = output.with_suffix(".log")
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_path),
        ],
    )
    logger = logging.getLogger(__name__)
    logger.info("Logging to %s", log_path)

    orchestrator = AnalysisOrchestrator(analyzer=DocumentAnalyzer.from_settings(settings))
    results = asyncio.run(orchestrator.process(files))

    if suffix == ".json":
        orchestrator.to_json(results, output)
    else:
        orchestrator.to_excel(results, output)

    for result in results:
        if result.result:
            typer.echo(f"{result.document.name}: ok ({len(result.result.red_flags())} red flags)")
        else:
            typer.echo(f"{result.document.name}: {result.status} ({result.error})")
    typer.echo(f"Wrote results to {output}")


def main():
    app()


if __name__ == "__main__":
    main()
