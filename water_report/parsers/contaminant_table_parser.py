"""
Contaminant table parser for water-quality report text.

Extraction pipeline:
- Split the report text into normalised, non-empty lines
- Assemble one row per contaminant inside the detected table(s)
- Extract the row's fields (violation, date, levels, unit, limits, source)
- Keep the most complete record for every contaminant name

Text acquisition is pluggable: parse_text() takes text from any source,
parse_pdf() reads the PDF's text layer with pdfplumber first.
"""

import os
from pathlib import Path
from typing import Optional, Union

from ..config import get_default_file_name
from ..constants import DEFAULT_PAGE_COUNT, NO_ROWS_WARNING
from ..extractors.field_extractors import ContaminantFieldExtractor
from ..schemas.contaminants import ExtractionMetadata, ExtractionResult
from ..utils.merge_strategy import CompletenessMerger
from ..utils.pdf_text import extract_pdf_text
from .row_assembler import assemble_rows, split_lines


class MissingInputError(ValueError):
    """Raised when extraction is requested without any text or PDF to read."""


class ContaminantTableParser:
    """Extract contaminant records from report text or PDFs."""

    def __init__(self, logger=None):
        """
        Initialize parser.

        Args:
            logger: Optional logger instance (ExtractionLogger or logging.Logger)
        """
        self.logger = logger
        self.extractor = ContaminantFieldExtractor()

    def parse_text(
        self,
        text: Optional[str],
        page_count: int = DEFAULT_PAGE_COUNT,
        file_name: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Extract contaminant records from already-acquired report text.

        Args:
            text: Report text with line breaks preserved
            page_count: Page count reported by text acquisition
            file_name: Name reported in the result metadata

        Returns:
            ExtractionResult; an empty record list comes with a warning

        Raises:
            MissingInputError: If no text was supplied
        """
        if text is None:
            raise MissingInputError("Report text must be provided")

        if file_name is None:
            file_name = get_default_file_name()

        merger = CompletenessMerger(logger=self.logger)
        row_count = 0
        for row in assemble_rows(split_lines(text)):
            row_count += 1
            record = self.extractor.parse_row(row.text, row.name)
            if self.logger:
                self.logger.debug(f"Assembled {row.name} row from {len(row.lines)} line(s)")
            merger.add(record)

        contaminants = merger.records()
        warnings = []
        if not contaminants:
            warnings.append(NO_ROWS_WARNING)
            if self.logger:
                self.logger.warning(f"No contaminant rows detected in {file_name}")
        elif self.logger:
            self.logger.debug(
                f"Extracted {len(contaminants)} contaminants from {row_count} rows in {file_name}"
            )

        return ExtractionResult(
            metadata=ExtractionMetadata(file_name=file_name, page_count=page_count),
            contaminants=contaminants,
            raw_text=text,
            warnings=warnings,
        )

    def parse_pdf(
        self,
        file_path: Optional[Union[str, Path]] = None,
        buffer: Optional[bytes] = None,
        file_name: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Read a PDF's text layer and extract contaminant records from it.

        Args:
            file_path: Path to the PDF
            buffer: Raw PDF bytes (used instead of file_path when given)
            file_name: Name reported in the metadata; defaults to the path's
                basename, or the configured upload name for buffers

        Returns:
            ExtractionResult

        Raises:
            MissingInputError: If neither file_path nor buffer is given
        """
        if file_path is None and buffer is None:
            raise MissingInputError("Either file_path or buffer must be provided")

        source = buffer if buffer is not None else Path(file_path)
        if file_name is None and file_path is not None:
            file_name = os.path.basename(file_path)

        try:
            text, page_count = extract_pdf_text(source)
        except Exception as e:
            if self.logger:
                self.logger.error(f"Failed to load PDF document {file_name or '<buffer>'}: {e}")
            raise

        return self.parse_text(text, page_count=page_count, file_name=file_name)
