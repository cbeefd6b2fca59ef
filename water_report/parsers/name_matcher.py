"""
Contaminant name matching for single lines of report text.

A line "starts" a contaminant row when it begins with a canonical name, or,
failing that, when every word of a canonical name is the prefix of some word
in the line. The second test tolerates reflowed and partially dropped words.
"""

import re
from typing import Optional

from .contaminant_dictionary import CONTAMINANT_KEYS

WHITESPACE_PATTERN = re.compile(r"\s+")

# (key, lowercased key, lowercased key words), longest key first
_KEY_INDEX = tuple((key, key.lower(), tuple(key.lower().split(" "))) for key in CONTAMINANT_KEYS)


def normalise_whitespace(line: str) -> str:
    """Collapse whitespace runs (non-breaking spaces included) to single spaces and trim."""
    return WHITESPACE_PATTERN.sub(" ", line.replace("\u00a0", " ")).strip()


def match_contaminant_name(line: str) -> Optional[str]:
    """
    Return the canonical contaminant name a line represents.

    Args:
        line: One line of report text

    Returns:
        Canonical dictionary key, or None if the line does not start a row

    Examples:
        >>> match_contaminant_name("Total Trihalomethanes No 2023 42 ug/L")
        'Total Trihalomethanes'
        >>> match_contaminant_name("Combined radium-226 and -228 No 2021")
        'Combined radium-226'
        >>> match_contaminant_name("Regulated at the treatment plant") is None
        True
    """
    candidate = normalise_whitespace(line)
    if not candidate:
        return None

    lower = candidate.lower()

    for key, key_lower, _ in _KEY_INDEX:
        if lower.startswith(key_lower):
            return key

    words = lower.split(" ")
    for key, _, key_words in _KEY_INDEX:
        if all(any(word.startswith(key_word) for word in words) for key_word in key_words):
            return key

    return None
