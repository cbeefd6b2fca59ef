"""Tests for per-field extraction from merged contaminant rows."""

import pytest
from water_report.extractors.field_extractors import (
    DATE_PATTERNS,
    RANGE_PATTERNS,
    SOURCE_PATTERNS,
    ContaminantFieldExtractor,
    first_match,
    standardise_unit,
)


@pytest.fixture
def extractor() -> ContaminantFieldExtractor:
    return ContaminantFieldExtractor()


# ─── Violation ────────────────────────────────────────────────────────────────


class TestViolation:
    def test_no(self, extractor):
        assert extractor.extract_violation("Lead No 2023 0.002 mg/L") == "No"

    def test_yes_is_recapitalised(self, extractor):
        assert extractor.extract_violation("Nitrate YES 2023 12 mg/L") == "Yes"
        assert extractor.extract_violation("Nitrate yes 2023 12 mg/L") == "Yes"

    def test_whole_words_only(self, extractor):
        assert extractor.extract_violation("Lead Nothing detected 0.002 mg/L") is None

    def test_first_occurrence_wins(self, extractor):
        assert extractor.extract_violation("Lead Yes 2023 No samples above") == "Yes"


# ─── Sample date ──────────────────────────────────────────────────────────────


class TestSampleDate:
    def test_pattern_order(self):
        assert [p.tag for p in DATE_PATTERNS] == ["month_day_year", "month_padded_day_year", "year"]

    def test_slash_date(self, extractor):
        assert extractor.extract_date("Lead No 6/1/2023 0.002 mg/L") == "6/1/2023"

    def test_zero_padded_date(self, extractor):
        assert extractor.extract_date("Copper No 12/05/2022 0.31 mg/L") == "12/05/2022"

    def test_slash_date_preferred_over_earlier_year(self, extractor):
        assert extractor.extract_date("Lead 2022 report, sampled 6/1/2023") == "6/1/2023"

    def test_bare_year(self, extractor):
        assert extractor.extract_date("Barium No 2021 0.038 mg/L") == "2021"

    def test_missing(self, extractor):
        assert extractor.extract_date("Lead No 0.2 mg/L") is None

    def test_each_pattern_independently(self):
        assert DATE_PATTERNS[0].search("5/3/2023").group(0) == "5/3/2023"
        assert DATE_PATTERNS[1].search("5/03/2023").group(0) == "5/03/2023"
        assert DATE_PATTERNS[2].search("sampled in 2020").group(0) == "2020"


# ─── Unit ─────────────────────────────────────────────────────────────────────


class TestUnit:
    @pytest.mark.parametrize("token", ["UG/L", "ug/l", "Ug/L", "ug/L"])
    def test_micrograms_normalised(self, extractor, token):
        assert extractor.extract_unit(f"Total Trihalomethanes No 2023 42 {token} 0 80") == "ug/L"

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("MG/L", "mg/L"),
            ("ng/l", "ng/L"),
            ("PCI/L", "pCi/L"),
            ("Units", "units"),
            ("ntu", "NTU"),
            ("PPM", "ppm"),
            ("Ppb", "ppb"),
        ],
    )
    def test_vocabulary(self, token, expected):
        assert standardise_unit(token) == expected

    def test_first_unit_wins(self, extractor):
        assert extractor.extract_unit("Sodium 12 mg/L (5 ppm)") == "mg/L"

    def test_missing(self, extractor):
        assert extractor.extract_unit("Lead No 2023 0.002") is None
        assert standardise_unit(None) is None


# ─── Level detected ───────────────────────────────────────────────────────────


class TestLevelDetected:
    def test_last_number_before_unit(self, extractor):
        assert extractor.extract_level_detected("Lead No 6/1/2023 0.002 mg/L 0 0.015") == "0.002"

    def test_skips_year(self, extractor):
        assert extractor.extract_level_detected("Copper No 2023 1.3 mg/L N/A 1.3") == "1.3"

    def test_skips_numbers_touching_slash_or_hyphen(self, extractor):
        assert extractor.extract_level_detected("Nitrate 2022-2023 0.4 mg/L") == "0.4"

    def test_closest_to_unit(self, extractor):
        """Range numbers printed before the unit are also candidates; the last one wins."""
        assert extractor.extract_level_detected("Barium No 2023 0.038 (0.021 - 0.038) mg/L") == "0.038"

    def test_greater_than_prefix_kept(self, extractor):
        assert extractor.extract_level_detected("Nitrate No 2023 >0.5 mg/L 10 10") == ">0.5"

    def test_trailing_period_stripped(self, extractor):
        assert extractor.extract_level_detected("Sodium No 2023 12. mg/L") == "12"

    def test_requires_unit(self, extractor):
        assert extractor.extract_level_detected("Lead No 2023 0.002") is None

    def test_only_date_numbers(self, extractor):
        assert extractor.extract_level_detected("Lead No 6/1/2023 mg/L") is None

    def test_year_shaped_measurement_is_dropped(self, extractor):
        """Known limitation: a value of exactly 20xx reads as a year."""
        assert extractor.extract_level_detected("Sodium No 2023 mg/L") is None


# ─── Level range ──────────────────────────────────────────────────────────────


class TestLevelRange:
    def test_pattern_order(self):
        assert [p.tag for p in RANGE_PATTERNS] == ["numeric_span", "any_parenthesized"]

    def test_numeric_span(self, extractor):
        assert extractor.extract_range("Barium 0.038 (0.021 - 0.038) mg/L") == "(0.021 - 0.038)"

    def test_en_dash(self, extractor):
        assert extractor.extract_range("Fluoride 0.72 (0.52 – 0.72) mg/L") == "(0.52 – 0.72)"

    def test_inner_whitespace_trimmed(self, extractor):
        assert extractor.extract_range("Sodium 12 ( 10 - 14 ) mg/L") == "(10 - 14)"

    def test_non_numeric_content_falls_back(self, extractor):
        assert extractor.extract_range("Combined radium-226 1.2 (ND - 1.2) pCi/L") == "(ND - 1.2)"

    def test_requires_digit(self, extractor):
        assert extractor.extract_range("Lead 0.002 mg/L (see note)") is None

    def test_missing(self, extractor):
        assert extractor.extract_range("Lead 0.002 mg/L") is None


# ─── Limits after unit ────────────────────────────────────────────────────────


class TestLimits:
    def test_goal_then_regulatory(self, extractor):
        assert extractor.extract_limits("Lead No 6/1/2023 0.002 mg/L 0 0.015") == ("0", "0.015")

    def test_not_applicable_token(self, extractor):
        assert extractor.extract_limits("Copper No 2023 1.3 mg/L N/A 1.3") == ("N/A", "1.3")

    def test_literal_text_kept(self, extractor):
        assert extractor.extract_numbers_after_unit("Copper 1.3 mg/L n/a >1.3") == ["n/a", ">1.3"]

    def test_single_number_is_regulatory_limit(self, extractor):
        assert extractor.extract_limits("Chlorine Residual 1.1 ppm 4") == (None, "4")

    def test_nothing_after_unit(self, extractor):
        assert extractor.extract_limits("Lead 0.002 mg/L") == (None, None)

    def test_no_unit(self, extractor):
        assert extractor.extract_numbers_after_unit("Lead No 2023 0 0.015") == []
        assert extractor.extract_limits("Lead No 2023 0 0.015") == (None, None)


# ─── Likely source ────────────────────────────────────────────────────────────


class TestLikelySource:
    def test_pattern_order(self):
        assert [p.tag for p in SOURCE_PATTERNS] == [
            "erosion",
            "naturally_occurring",
            "runoff",
            "decay",
            "by_product",
            "corrosion",
            "water_additive",
            "soil_runoff",
            "health_effects",
            "released_into",
        ]

    def test_captures_through_period(self, extractor):
        text = "Lead No 6/1/2023 0.002 mg/L 0 0.015 Corrosion of household plumbing. More text."
        assert extractor.extract_source(text) == "Corrosion of household plumbing."

    def test_priority_beats_position(self, extractor):
        text = "Nitrate 2 mg/L 10 10 Runoff from fertilizer use; Erosion of natural deposits."
        assert extractor.extract_source(text) == "Erosion of natural deposits."

    def test_case_insensitive(self, extractor):
        assert extractor.extract_source("TTHM 42 ug/L by-product of drinking water disinfection.") == (
            "by-product of drinking water disinfection."
        )

    def test_whitespace_normalised(self, extractor):
        assert extractor.extract_source("Erosion of natural\n   deposits.") == "Erosion of natural deposits."

    def test_requires_period(self, extractor):
        assert extractor.extract_source("Erosion of natural deposits") is None

    def test_first_match_helper(self):
        assert first_match(SOURCE_PATTERNS, "Decay of natural and man-made deposits.").group(0) == (
            "Decay of natural and man-made deposits."
        )
        assert first_match(SOURCE_PATTERNS, "unknown origin") is None


# ─── parse_row ────────────────────────────────────────────────────────────────


class TestParseRow:
    def test_complete_row(self, extractor):
        record = extractor.parse_row(
            "Lead No 6/1/2023 0.002 mg/L 0 0.015 Corrosion of household plumbing.", "Lead"
        )
        assert record.name == "Lead"
        assert record.category == "Lead and Copper"
        assert record.violation == "No"
        assert record.sample_date == "6/1/2023"
        assert record.level_detected == "0.002"
        assert record.level_range is None
        assert record.unit == "mg/L"
        assert record.goal_limit == "0"
        assert record.regulatory_limit == "0.015"
        assert record.likely_source == "Corrosion of household plumbing."

    def test_raw_text_normalised(self, extractor):
        record = extractor.parse_row("Lead  No\t6/1/2023   0.002 mg/L ", "Lead")
        assert record.raw_text == "Lead No 6/1/2023 0.002 mg/L"

    def test_misses_are_absent_not_errors(self, extractor):
        record = extractor.parse_row("Lead", "Lead")
        assert record.raw_text == "Lead"
        assert record.violation is None
        assert record.sample_date is None
        assert record.level_detected is None
        assert record.unit is None
        assert record.goal_limit is None
        assert record.regulatory_limit is None
        assert record.likely_source is None
