"""
Extractors module for contaminant rows.

This module contains:
- field_extractors: regex-based extraction of violation flag, sample date,
  levels, unit, limits and likely source from one merged row string
"""
