"""
Data source layout and column constants.

This module contains the Bhuvan WBIS folder layout and the water-quality CSV
column names. Centralizing these values makes it easy to follow upstream
renames without touching the loaders.
"""
from types import MappingProxyType

from lake_analytics.domain.models import WaterQualityParameter as P


# Bhuvan WBIS folder layout
class BhuvanFiles:
    """Files published per water body under <bhuvan_subdir>/<bhuvan_id>/."""

    METADATA = "metadata.json"
    WSA_DAILY = "wsa_daily.json"

    # Key of the display name inside metadata.json
    WATER_BODY_NAME = "Water Body Name"

    @classmethod
    def relative_path(cls, bhuvan_subdir: str, bhuvan_id: str, filename: str) -> str:
        """
        Build the path of a published file relative to the data root.

        Args:
            bhuvan_subdir: Sub-directory holding one folder per water body
            bhuvan_id: Bhuvan water body identifier
            filename: One of the file constants above

        Returns:
            Relative path using forward slashes
        """
        return f"{bhuvan_subdir.strip('/')}/{bhuvan_id}/{filename}"


# Water-quality CSV columns
class WaterQualityColumns:
    """Column names of the water-quality CSV export."""

    LAKE_NAME = "Lake_Name_Standardized"
    DATE = "Date"
    STATION_NAME = "Station name"
    STATION_CODE = "Station code"

    # Each parameter may appear under several headers across source sheets;
    # the first column holding a usable number wins.
    PARAMETER_ALIASES = MappingProxyType({
        # Physical
        P.TEMPERATURE: ("Water Temp. (OC)",),
        P.TURBIDITY: ("Turbidity (NTU)",),
        P.CONDUCTIVITY: ("Conductivity (mS/cm)", "Conductivity (μs/cm)"),
        P.TDS: ("TDS (mg/L)",),
        P.TSS: ("TSS (mg/L)",),

        # Chemical
        P.PH: ("pH",),
        P.DISSOLVED_OXYGEN: ("DO (mg/L)",),
        P.BOD: ("BOD (mg/L)",),
        P.COD: ("COD (mg/L)", "COD (mg/L).1"),

        # Nutrients
        P.NITRATE_N: ("Nitrate-N (mg/L)", "Nitrate"),
        P.NITRITE_N: ("Nitrite-N (mg/L)",),
        P.AMMONIA_N: ("Ammonia-N (mg/L)", "Ammonia-N  (mg/L)"),
        P.PHOSPHATE: ("Phosphate (mg/L)", "Total Phosphate (mg/L)"),
        P.TKN: ("TKN (mg/L)",),

        # Major ions
        P.CHLORIDE: ("Chloride (mg/L)",),
        P.SULPHATE: ("Sulphate (mg/L)",),
        P.SODIUM: ("Sodium (mg/L)",),
        P.CALCIUM: ("Calcium (mg/L)", "Calcium as Ca+2(mg/L)"),
        P.MAGNESIUM: ("Magnesium (mg/L)", "Magnesium as Mg+2(mg/L)"),
        P.POTASSIUM: ("Potassium (mg/L)",),
        P.FLUORIDE: ("Fluoride (mg/L)",),
        P.BORON: ("Boron (mg/L)",),

        # Hardness and alkalinity
        P.HARDNESS: (
            "Hardness (mg/L)",
            "Total Hardness as CaCO3(mg/L)",
            "Total Hardness as CaCO3 (mg/L)",
        ),
        P.TOTAL_ALKALINITY: ("Total Alk. (mg/L)",),
        P.PHENOLPHTHALEIN_ALKALINITY: ("Phen-Alk. (mg/L)",),

        # Microbiological
        P.FECAL_COLIFORM: ("Fecal Coliform (MPN/100ml)", "Faecal Coliform (MPN/100ml)"),
        P.TOTAL_COLIFORM: ("Total Coliform (MPN/100ml)", "Total coliform (MPN/100ml)"),
        P.FECAL_STREPTOCOCCI: ("Fecal streptococci", "Faecal streptococci"),

        # Metals
        P.ARSENIC: ("Arsenic",),
        P.CADMIUM: ("Cadmium", "Cadmium (Cd)"),
        P.COPPER: ("Copper", "Copper (Cu)"),
        P.LEAD: ("Lead", "Lead (Pb)"),
        P.CHROMIUM: ("Total Chromium", "Total Chromium (T. Cr)"),
        P.NICKEL: ("Nickel", "Nickel (Ni)"),
        P.ZINC: ("Zinc", "Zinc (Zn)"),
        P.IRON: ("Iron", "Iron (Fe)"),

        # Indices
        P.SAPROBITY_INDEX: ("Saprobity index",),
        P.DIVERSITY_INDEX: ("Diversity index",),
        P.SODIUM_PERCENTAGE: ("Sodium %", "sodium %", "% Sodium"),
        P.SAR: ("SAR",),
        P.PR_RATIO: ("P/R Ratio",),
    })
