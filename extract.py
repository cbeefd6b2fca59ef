#!/usr/bin/env python3
"""
Extract the detected-contaminants table from water-quality reports.

Reads each report (PDF text layer via pdfplumber, or plain text), assembles
one record per contaminant and prints the result as JSON.

Usage:
    python extract.py report.pdf                     # JSON to stdout
    python extract.py report.pdf -o report.json      # JSON to a file
    python extract.py report.txt                     # Already-extracted text
    pdftotext report.pdf - | python extract.py -     # Text from stdin
    python extract.py a.pdf b.pdf --summary          # One line per contaminant
    python extract.py report.pdf --log-level DEBUG   # Show row assembly
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from water_report.config import get_log_level
from water_report.parsers.contaminant_table_parser import ContaminantTableParser
from water_report.schemas.contaminants import ExtractionResult
from water_report.utils.logger import ExtractionLogger, ExtractionRunContext

STDIN_PATH = "-"
STDIN_FILE_NAME = "stdin.txt"


def extract_document(path: str, parser: ContaminantTableParser) -> ExtractionResult:
    """Run extraction for one CLI argument (PDF path, text path or '-')."""
    if path == STDIN_PATH:
        return parser.parse_text(sys.stdin.read(), file_name=STDIN_FILE_NAME)

    file_path = Path(path)
    if file_path.suffix.lower() == ".pdf":
        return parser.parse_pdf(file_path=file_path)

    text = file_path.read_text(encoding="utf-8", errors="replace")
    return parser.parse_text(text, file_name=file_path.name)


def format_summary(result: ExtractionResult) -> str:
    """Render one line per contaminant plus any warnings."""
    lines = [f"{result.metadata.file_name} ({result.metadata.page_count} pages)"]
    for record in result.contaminants:
        lines.append(
            f"  {record.name:<30} {record.level_detected or '-':>10} {record.unit or '':<6} "
            f"MCLG={record.goal_limit or '-'} MCL={record.regulatory_limit or '-'} "
            f"violation={record.violation or '-'} date={record.sample_date or '-'}"
        )
    for warning in result.warnings:
        lines.append(f"  WARNING: {warning}")
    return "\n".join(lines)


def build_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(
        description="Extract contaminant tables from water-quality reports",
    )
    arg_parser.add_argument("paths", nargs="+", help="PDF or text files ('-' reads text from stdin)")
    arg_parser.add_argument("-o", "--output", help="Write JSON to this file instead of stdout")
    arg_parser.add_argument("--summary", action="store_true", help="Print a readable summary instead of JSON")
    arg_parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    arg_parser.add_argument("--log-file", default=None, help="Also log to this file in the log directory")
    return arg_parser


def main(argv=None) -> int:
    load_dotenv()
    args = build_arg_parser().parse_args(argv)

    logger = ExtractionLogger(log_level=args.log_level or get_log_level(), log_file=args.log_file)
    parser = ContaminantTableParser(logger=logger)

    results = []
    with ExtractionRunContext(logger, num_documents=len(args.paths)) as ctx:
        for path in args.paths:
            if path != STDIN_PATH and not Path(path).exists():
                logger.error(f"Report not found: {path}")
                ctx.increment_failure()
                continue
            try:
                with logger.time_document(path):
                    results.append(extract_document(path, parser))
                ctx.increment_success()
            except Exception:
                # Already logged with traceback by time_document
                ctx.increment_failure()

    if args.summary:
        output = "\n\n".join(format_summary(result) for result in results)
    elif len(args.paths) == 1:
        output = results[0].to_json() if results else ""
    else:
        output = json.dumps([result.to_dict() for result in results], indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(results)} result(s) to {args.output}")
    elif output:
        print(output)

    return 1 if ctx.failed else 0


if __name__ == "__main__":
    sys.exit(main())
