"""
Canonical contaminant names and their regulatory categories.

The mapping is plain data: extending it only requires adding an entry here.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

CONTAMINANT_CATEGORY_MAP: Mapping[str, str] = MappingProxyType(
    {
        "Alkalinity": "Inorganic Contaminants",
        "Barium": "Inorganic Contaminants",
        "Calcium": "Inorganic Contaminants",
        "Calcium as Calcium Carbonate": "Inorganic Contaminants",
        "Chloride": "Inorganic Contaminants",
        "Corrosivity by Calculation": "Inorganic Contaminants",
        "Fluoride": "Inorganic Contaminants",
        "Hardness": "Inorganic Contaminants",
        "Nickel": "Inorganic Contaminants",
        "Nitrate": "Inorganic Contaminants",
        "pH": "Inorganic Contaminants",
        "Sodium": "Inorganic Contaminants",
        "Sulfate": "Inorganic Contaminants",
        "Total Dissolved Solids": "Inorganic Contaminants",
        "TDS": "Inorganic Contaminants",
        "Dissolved Solids": "Inorganic Contaminants",
        "Zinc": "Inorganic Contaminants",
        "Gross Alpha": "Radioactive Contaminants",
        "Beta particles and": "Radioactive Contaminants",  # Wraps to "photon emitters" in most reports
        "Combined radium-226": "Radioactive Contaminants",
        "Uranium": "Radioactive Contaminants",
        "Total Haloacetic Acids": "Disinfection Byproducts",
        "Total Trihalomethanes": "Disinfection Byproducts",
        "Chlorine Residual": "Disinfectants",
        "Distribution Turbidity": "Microbiological Contaminants",
        "Perfluorooctanoic Acid": "Synthetic Organic Contaminants",
        "Perfluorooctanesulfonic Acid": "Synthetic Organic Contaminants",
        "Bromochloroacetic": "Unregulated Detected Substances",
        "Bromochloroacetic Acid": "Unregulated Detected Substances",
        "Lead": "Lead and Copper",
        "Copper": "Lead and Copper",
    }
)

# Longest first so a specific name wins over a shorter name it starts with.
# sorted() is stable, so equal-length keys keep their declaration order.
CONTAMINANT_KEYS: Tuple[str, ...] = tuple(sorted(CONTAMINANT_CATEGORY_MAP, key=len, reverse=True))


def get_category(name: str) -> Optional[str]:
    """Return the regulatory category for a canonical name, or None if unknown."""
    return CONTAMINANT_CATEGORY_MAP.get(name)
