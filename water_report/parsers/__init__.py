"""
Parsers module for contaminant table extraction.

This module contains:
- contaminant_dictionary: canonical contaminant names and their categories
- name_matcher: decides which contaminant (if any) a line starts
- row_assembler: table boundary detection and row reconstruction
- contaminant_table_parser: end-to-end extraction entry point
"""
