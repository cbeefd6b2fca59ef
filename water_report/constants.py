"""
Global constants for contaminant table extraction.

Centralizes fixed strings and values used across the parsers so that
callers and tests refer to a single definition.
"""

# Warnings
NO_ROWS_WARNING = "No contaminant rows detected. Verify PDF layout or adjust parsing heuristics."

# Metadata
DEFAULT_FILE_NAME = "uploaded.pdf"  # Used when a PDF arrives as an anonymous buffer
DEFAULT_PAGE_COUNT = 1  # Plain-text input has no page structure

# Completeness scoring
# Identity fields and the audit text never count towards completeness
COMPLETENESS_EXCLUDED_FIELDS = frozenset({"name", "category", "raw_text"})

# Slash-formatted sample dates (MM/DD/YYYY) are preferred over bare years on ties
FULL_DATE_SEPARATOR = "/"
