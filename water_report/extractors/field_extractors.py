"""
Deterministic field extraction for merged contaminant rows.

Every extractor takes one whitespace-normalised row string and returns the
captured text, or None when nothing matches. Values are kept as literal text
("N/A", ">0.5", "0.002") and never converted to numbers.

Ordered pattern lists are tuples of TaggedPattern; the first pattern that
matches wins.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from ..parsers.name_matcher import normalise_whitespace
from ..schemas.contaminants import ContaminantRecord


@dataclass(frozen=True)
class TaggedPattern:
    """A compiled regex with a stable tag naming what it recognises."""

    tag: str
    pattern: re.Pattern

    def search(self, text: str) -> Optional[re.Match]:
        return self.pattern.search(text)


DATE_PATTERNS = (
    TaggedPattern("month_day_year", re.compile(r"\d{1,2}/\d{1,2}/\d{4}")),
    TaggedPattern("month_padded_day_year", re.compile(r"\d{1,2}/\d{2}/\d{4}")),
    TaggedPattern("year", re.compile(r"\d{4}")),
)

RANGE_PATTERNS = (
    TaggedPattern("numeric_span", re.compile(r"\(([0-9.\s–\-,]+)\)")),
    TaggedPattern("any_parenthesized", re.compile(r"\(([^)]+)\)")),
)

SOURCE_PATTERNS = (
    TaggedPattern("erosion", re.compile(r"Erosion of[^.]*\.", re.IGNORECASE)),
    TaggedPattern("naturally_occurring", re.compile(r"Naturally occurring[^.]*\.", re.IGNORECASE)),
    TaggedPattern("runoff", re.compile(r"Runoff from[^.]*\.", re.IGNORECASE)),
    TaggedPattern("decay", re.compile(r"Decay of[^.]*\.", re.IGNORECASE)),
    TaggedPattern("by_product", re.compile(r"By-product[^.]*\.", re.IGNORECASE)),
    TaggedPattern("corrosion", re.compile(r"Corrosion of[^.]*\.", re.IGNORECASE)),
    TaggedPattern("water_additive", re.compile(r"Water additive[^.]*\.", re.IGNORECASE)),
    TaggedPattern("soil_runoff", re.compile(r"Soil runoff[^.]*\.", re.IGNORECASE)),
    TaggedPattern("health_effects", re.compile(r"See health effect[^.]*\.", re.IGNORECASE)),
    TaggedPattern("released_into", re.compile(r"Released into[^.]*\.", re.IGNORECASE)),
)

UNIT_PATTERN = re.compile(r"mg/l|ug/l|ng/l|pci/l|units|ntu|ppm|ppb", re.IGNORECASE)

# Upper-cased unit token -> canonical spelling
UNIT_CANONICAL = {
    "MG/L": "mg/L",
    "UG/L": "ug/L",
    "NG/L": "ng/L",
    "PCI/L": "pCi/L",
    "UNITS": "units",
    "NTU": "NTU",
    "PPM": "ppm",
    "PPB": "ppb",
}

VIOLATION_PATTERN = re.compile(r"\b(?:No|Yes)\b", re.IGNORECASE)
NUMBER_PATTERN = re.compile(r">?\d+\.?\d*")
LIMIT_TOKEN_PATTERN = re.compile(r"N/A|>?\d+\.?\d*", re.IGNORECASE)
DIGIT_PATTERN = re.compile(r"\d")

# Characters that glue a number to a date ("6/1/2023", "2022-2023")
DATE_FRAGMENT_NEIGHBOURS = ("/", "-")


def standardise_unit(unit: Optional[str]) -> Optional[str]:
    """Map a unit token to its canonical casing, e.g. 'UG/L' -> 'ug/L'."""
    if not unit:
        return None
    return UNIT_CANONICAL.get(unit.upper(), unit)


def first_match(patterns, text: str) -> Optional[re.Match]:
    """Return the match of the first pattern in ``patterns`` that matches ``text``."""
    for tagged in patterns:
        match = tagged.search(text)
        if match:
            return match
    return None


class ContaminantFieldExtractor:
    """
    Regex-based extractor for the columns of a contaminant table row.

    Rows are flattened table lines, so columns are recognised by shape and by
    position relative to the unit token:
    - Violation: first whole-word Yes/No
    - Date: M/D/YYYY, falling back to a bare year
    - Level detected: last plausible number before the unit
    - Range: parenthesised span containing a digit
    - MCLG / regulatory limit: numbers (or N/A) after the unit
    - Likely source: first known source sentence
    """

    def extract_violation(self, text: str) -> Optional[str]:
        match = VIOLATION_PATTERN.search(text)
        if not match:
            return None
        return match.group(0).capitalize()

    def extract_date(self, text: str) -> Optional[str]:
        match = first_match(DATE_PATTERNS, text)
        return match.group(0) if match else None

    def find_unit(self, text: str) -> Optional[re.Match]:
        return UNIT_PATTERN.search(text)

    def extract_unit(self, text: str) -> Optional[str]:
        match = self.find_unit(text)
        return standardise_unit(match.group(0)) if match else None

    def extract_level_detected(self, text: str, unit_match: Optional[re.Match] = None) -> Optional[str]:
        """
        Extract the detected level: the last plausible number before the unit.

        Numbers that look like years (4 digits starting with "20") or that
        touch a "/" or "-" are date fragments and are skipped.

        Args:
            text: Merged row text
            unit_match: Result of find_unit(text); looked up when omitted

        Returns:
            Level text without a trailing period, or None without a unit

        Example:
            >>> ContaminantFieldExtractor().extract_level_detected("Lead No 6/1/2023 0.002 mg/L 0 0.015")
            '0.002'
        """
        if unit_match is None:
            unit_match = self.find_unit(text)
        if unit_match is None:
            return None

        preceding = text[: unit_match.start()]
        candidates = []
        for match in NUMBER_PATTERN.finditer(preceding):
            value = match.group(0)
            if len(value) == 4 and value.startswith("20"):
                continue
            before = preceding[match.start() - 1] if match.start() > 0 else ""
            after = preceding[match.end()] if match.end() < len(preceding) else ""
            if before in DATE_FRAGMENT_NEIGHBOURS or after in DATE_FRAGMENT_NEIGHBOURS:
                continue
            candidates.append(value)

        if not candidates:
            return None

        value = candidates[-1]
        return value[:-1] if value.endswith(".") else value

    def extract_range(self, text: str) -> Optional[str]:
        for tagged in RANGE_PATTERNS:
            match = tagged.search(text)
            if match:
                content = match.group(1).strip()
                if DIGIT_PATTERN.search(content):
                    return f"({content})"
        return None

    def extract_numbers_after_unit(self, text: str, unit_match: Optional[re.Match] = None) -> List[str]:
        """Return every N/A or numeric token that follows the unit token, in order."""
        if unit_match is None:
            unit_match = self.find_unit(text)
        if unit_match is None:
            return []
        return LIMIT_TOKEN_PATTERN.findall(text[unit_match.end() :])

    def extract_limits(self, text: str, unit_match: Optional[re.Match] = None) -> tuple[Optional[str], Optional[str]]:
        """
        Split the numbers after the unit into (MCLG, regulatory limit).

        With a single number, it is the regulatory limit and the MCLG is
        left empty; many reports print no separate goal.
        """
        numbers = self.extract_numbers_after_unit(text, unit_match)
        if len(numbers) >= 2:
            return numbers[0], numbers[1]
        if numbers:
            return None, numbers[0]
        return None, None

    def extract_source(self, text: str) -> Optional[str]:
        match = first_match(SOURCE_PATTERNS, text)
        return normalise_whitespace(match.group(0)) if match else None

    def parse_row(self, row_text: str, contaminant_name: str) -> ContaminantRecord:
        """
        Build a ContaminantRecord from one merged row.

        Args:
            row_text: The row's lines joined with spaces
            contaminant_name: Canonical name the row was matched to

        Returns:
            ContaminantRecord; fields that could not be found are None
        """
        text = normalise_whitespace(row_text)
        unit_match = self.find_unit(text)
        goal_limit, regulatory_limit = self.extract_limits(text, unit_match)

        return ContaminantRecord(
            name=contaminant_name,
            violation=self.extract_violation(text),
            sample_date=self.extract_date(text),
            level_detected=self.extract_level_detected(text, unit_match),
            level_range=self.extract_range(text),
            unit=standardise_unit(unit_match.group(0)) if unit_match else None,
            goal_limit=goal_limit,
            regulatory_limit=regulatory_limit,
            likely_source=self.extract_source(text),
            raw_text=text,
        )
