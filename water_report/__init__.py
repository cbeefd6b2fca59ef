"""
Contaminant table extraction for water-quality reports.

Turns the flattened text of a water-quality (consumer confidence) report into
one structured record per detected contaminant.
"""

__version__ = "0.1.0"
