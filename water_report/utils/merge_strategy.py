"""
Record merging with completeness precedence.

Reports often print the same contaminant more than once (reprinted tables,
multi-year summaries). Only one record per canonical name survives:
- More populated optional fields wins
- On a tie, a slash-formatted sample date beats a bare year
- Otherwise the first-seen record is kept
"""

from typing import Dict, List, Optional

from ..constants import COMPLETENESS_EXCLUDED_FIELDS, FULL_DATE_SEPARATOR
from ..schemas.contaminants import ContaminantRecord


def completeness_score(record: ContaminantRecord) -> int:
    """
    Count the populated optional fields of a record.

    Name, category and raw text are not counted. Whitespace-only values count
    as empty.

    Example:
        >>> completeness_score(ContaminantRecord(name="Lead", unit="mg/L", raw_text="Lead mg/L"))
        1
    """
    score = 0
    for field_name in ContaminantRecord.model_fields:
        if field_name in COMPLETENESS_EXCLUDED_FIELDS:
            continue
        value = getattr(record, field_name)
        if value is not None and str(value).strip():
            score += 1
    return score


def prefer_full_date(new_date: Optional[str], existing_date: Optional[str]) -> bool:
    """True when only the new date is slash-formatted (M/D/YYYY vs a bare year)."""
    if not new_date or not existing_date:
        return False
    return FULL_DATE_SEPARATOR in new_date and FULL_DATE_SEPARATOR not in existing_date


def is_more_complete(new_record: ContaminantRecord, existing_record: ContaminantRecord) -> bool:
    """Decide whether ``new_record`` should replace ``existing_record``."""
    new_score = completeness_score(new_record)
    existing_score = completeness_score(existing_record)

    if new_score == existing_score:
        return prefer_full_date(new_record.sample_date, existing_record.sample_date)

    return new_score > existing_score


class CompletenessMerger:
    """
    Keeps at most one record per canonical contaminant name.

    Records keep the position of the first row seen for their name, even when
    a later duplicate replaces the data.

    Usage:
        merger = CompletenessMerger()
        for record in records:
            merger.add(record)
        final = merger.records()
    """

    def __init__(self, logger=None):
        self.logger = logger
        self._records: Dict[str, ContaminantRecord] = {}

    def add(self, record: ContaminantRecord) -> bool:
        """
        Offer a record to the merger.

        Returns:
            True if the record was stored (new name or replacement)
        """
        existing = self._records.get(record.name)
        if existing is None:
            self._records[record.name] = record
            return True

        if is_more_complete(record, existing):
            if self.logger:
                self.logger.debug(
                    f"Replacing duplicate {record.name} row "
                    f"(score {completeness_score(record)} over {completeness_score(existing)})"
                )
            self._records[record.name] = record
            return True

        if self.logger:
            self.logger.debug(f"Keeping first {record.name} row, duplicate is not more complete")
        return False

    def records(self) -> List[ContaminantRecord]:
        """Return the merged records in first-seen order."""
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
