"""Shared fixtures for extractor tests."""

import sys
from pathlib import Path

import pytest

# Add the project root to path so tests can import water_report and extract.py
sys.path.insert(0, str(Path(__file__).parent.parent))

SAMPLE_REPORT = """City of Springfield 2023 Water Quality Report
Your water is safe to drink.
Table of Detected Contaminants
Contaminant Violation Date Level Range Unit MCLG MCL Likely Source
Inorganic Contaminants
Barium No 2023 0.038 (0.021 - 0.038) mg/L 2 2 Discharge of drilling wastes;
Erosion of natural deposits.
Fluoride No 3/14/2023 0.72 (0.52 - 0.72) mg/L 4 4 Water additive which promotes
strong teeth.
Radioactive Contaminants
Combined radium-226 and -228 No 2021 1.2 (ND - 1.2) pCi/L 0 5 Erosion of natural deposits.
Lead and Copper
Lead No 6/1/2023 0.002 mg/L 0 0.015 Corrosion of household plumbing.
Copper No 6/1/2023 0.31 mg/L 1.3 1.3 Corrosion of household plumbing.
Definitions
MCLG: Maximum Contaminant Level Goal.
Lead 5 mg/L appears here only as a definition example.
"""

LEAD_ONLY_REPORT = (
    "Table of Detected Contaminants\n"
    "Contaminant Violation\n"
    "Lead No 6/1/2023 0.002 mg/L 0 0.015 Corrosion of household plumbing.\n"
)


@pytest.fixture
def sample_report() -> str:
    """Report text with three category sections, a wrapped row and a definitions section."""
    return SAMPLE_REPORT


@pytest.fixture
def lead_only_report() -> str:
    """Smallest complete table: title, header and a single Lead row."""
    return LEAD_ONLY_REPORT


@pytest.fixture
def parser():
    """A ContaminantTableParser without logging."""
    from water_report.parsers.contaminant_table_parser import ContaminantTableParser

    return ContaminantTableParser()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep local .env / shell settings from leaking into assertions."""
    for var in (
        "WATER_REPORT_DATA_DIR",
        "WATER_REPORT_DEFAULT_FILE_NAME",
        "WATER_REPORT_LOG_LEVEL",
        "WATER_REPORT_LOG_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
