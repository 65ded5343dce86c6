"""
Lake identifier registry.

Maps the public lake identifiers used by the API to the identifiers each
data source expects. The tables are read-only views built once at startup
and injected into the loaders and services.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


# Public lake id -> Bhuvan WBIS water body folder
DEFAULT_BHUVAN_IDS: Mapping[str, str] = MappingProxyType({
    "hussain-sagar": "1007878045612624311",
    "osman-sagar": "1000959528031155202",
    "himayat-sagar": "1001150645686139370",
})

# Standardized lake name in the water-quality CSV -> public lake id.
# Several names resolve to the same lake.
DEFAULT_LAKE_NAME_ALIASES: Mapping[str, str] = MappingProxyType({
    "Hussain Sagar": "hussain-sagar",
    "Osman Sagar (Gandipet)": "osman-sagar",
    "Himayat Sagar": "himayat-sagar",
    "Shamirpet": "shamirpet",
    "Shamirpet Lake": "shamirpet",
    "Durgam Cheruvu": "durgam-cheruvu",
    "Secret Lake": "durgam-cheruvu",
    "Khajaguda Lake": "khajaguda",
    "Lotus Pond": "lotus-pond",
    "Noor Mohammed Kunta": "noor-mohammed-kunta",
    "Pragathi Nagar Lake": "pragathi-nagar",
    "Rangadhamuni Cheruvu": "rangadhamuni",
    "Safilguda Lake": "safilguda",
    "Malkam Cheruvu": "malkam-cheruvu",
})


@dataclass(frozen=True)
class LakeRegistry:
    """Immutable lookup tables between lake identifiers and data sources."""
    bhuvan_ids: Mapping[str, str] = field(default_factory=lambda: DEFAULT_BHUVAN_IDS)
    lake_name_aliases: Mapping[str, str] = field(default_factory=lambda: DEFAULT_LAKE_NAME_ALIASES)

    def __post_init__(self):
        # Freeze caller-supplied dicts as well
        object.__setattr__(self, "bhuvan_ids", MappingProxyType(dict(self.bhuvan_ids)))
        object.__setattr__(self, "lake_name_aliases", MappingProxyType(dict(self.lake_name_aliases)))

    def bhuvan_id_for(self, lake_id: str) -> Optional[str]:
        """Bhuvan folder of a lake, or None if it has no surface-area source."""
        return self.bhuvan_ids.get(lake_id)

    def lake_id_for(self, lake_name: str) -> Optional[str]:
        """Lake id of a standardized CSV lake name, or None if unmapped."""
        return self.lake_name_aliases.get(lake_name)


# Singleton instance
_registry: Optional[LakeRegistry] = None


def get_lake_registry() -> LakeRegistry:
    """
    Get or create the singleton registry instance.

    Returns:
        LakeRegistry with the default tables
    """
    global _registry
    if _registry is None:
        _registry = LakeRegistry()
    return _registry
