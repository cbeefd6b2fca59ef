"""Pydantic models exchanged with the text-acquisition and SQL-generation collaborators."""

from .contaminants import ContaminantRecord, ExtractionMetadata, ExtractionResult

__all__ = ["ContaminantRecord", "ExtractionMetadata", "ExtractionResult"]
