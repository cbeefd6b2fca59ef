"""Contaminant record and extraction result models.

Field aliases are the keys consumed verbatim by the SQL generator and the
editing UI, so they must not change. Python code uses the snake_case names;
serialise with ``by_alias=True`` to get the wire format.
"""

import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..parsers.contaminant_dictionary import get_category


class ContaminantRecord(BaseModel):
    """One extracted measurement row for a single canonical contaminant."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., alias="Contaminant", min_length=1, description="Canonical contaminant name")
    category: Optional[str] = Field(None, alias="Category", description="Derived from name, never set directly")
    violation: Optional[str] = Field(None, alias="Violation", description="'Yes' or 'No'")
    sample_date: Optional[str] = Field(None, alias="Date of Sample", description="M/D/YYYY or bare year")
    level_detected: Optional[str] = Field(None, alias="Level Detected (Avg/Max)")
    level_range: Optional[str] = Field(None, alias="Level Detected (Range)", description="Includes parentheses")
    unit: Optional[str] = Field(None, alias="Unit Measurement")
    goal_limit: Optional[str] = Field(None, alias="MCLG")
    regulatory_limit: Optional[str] = Field(None, alias="Regulatory Limit")
    likely_source: Optional[str] = Field(None, alias="Likely Source of Contamination")
    raw_text: str = Field(..., alias="rawText", description="Merged row text the fields were parsed from")

    @model_validator(mode="before")
    @classmethod
    def _derive_category(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            data.pop("category", None)
            data.pop("Category", None)
            name = data.get("name", data.get("Contaminant"))
            data["Category"] = get_category(name) if isinstance(name, str) else None
        return data


class ExtractionMetadata(BaseModel):
    """Document metadata passed through from text acquisition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(..., alias="fileName")
    page_count: int = Field(..., alias="pageCount", ge=0)


class ExtractionResult(BaseModel):
    """Engine output: records, the source text and human-readable warnings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    metadata: ExtractionMetadata
    contaminants: List[ContaminantRecord] = Field(default_factory=list)
    raw_text: str = Field("", alias="rawText", description="Full text, kept for preview only")
    warnings: List[str] = Field(default_factory=list)

    def to_dict(self) -> dict:
        """Return the wire-format dict (aliased keys, absent fields as None)."""
        return self.model_dump(by_alias=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Return the wire-format JSON document."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
