"""
Infrastructure layer: Water-quality CSV loader.

Reads the laboratory export into per-lake, chronologically ordered
WaterQualityReading lists. Cells that do not hold a number are treated as
not measured; they never invalidate the rest of the row.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from lake_analytics.config import settings
from lake_analytics.domain.models import WaterQualityParameter, WaterQualityReading
from lake_analytics.infrastructure.lake_registry import LakeRegistry, get_lake_registry
from lake_analytics.infrastructure.source_constants import WaterQualityColumns
from lake_analytics.utils.date_parsing import parse_reading_date

logger = logging.getLogger(__name__)


def _clean_text(value) -> Optional[str]:
    """Strip a text cell; empty or missing cells become None."""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


class WaterQualityLoader:
    """Loader for the water-quality CSV export."""

    def __init__(
        self,
        csv_path: Optional[str] = None,
        registry: Optional[LakeRegistry] = None,
    ):
        """
        Initialize the loader.

        Args:
            csv_path: CSV file; defaults to settings.data_dir / settings.water_quality_csv
            registry: Lake registry used to resolve lake names
        """
        self.csv_path = Path(csv_path) if csv_path else Path(settings.data_dir) / settings.water_quality_csv
        self.registry = registry or get_lake_registry()
        self._cache: Optional[Tuple[float, Dict[str, List[WaterQualityReading]]]] = None

    def _read_frame(self) -> Optional[pd.DataFrame]:
        """Read the raw CSV as strings, or None if it cannot be read."""
        if not self.csv_path.is_file():
            logger.error(f"Water-quality CSV not found: {self.csv_path}")
            return None
        try:
            return pd.read_csv(self.csv_path, dtype=str, skip_blank_lines=True, encoding="utf-8-sig")
        except (OSError, ValueError) as e:
            # pandas parser errors derive from ValueError
            logger.error(f"Failed to read water-quality CSV {self.csv_path}: {e}")
            return None

    @staticmethod
    def _numeric_columns(frame: pd.DataFrame) -> Dict[str, pd.Series]:
        """Coerce every known parameter column to numbers; unparseable cells become NaN."""
        known = {
            column
            for aliases in WaterQualityColumns.PARAMETER_ALIASES.values()
            for column in aliases
        }
        return {
            column: pd.to_numeric(frame[column].map(_clean_text), errors="coerce")
            for column in known
            if column in frame.columns
        }

    @staticmethod
    def _parameters_for_row(
        row_index,
        numeric: Dict[str, pd.Series],
    ) -> Dict[WaterQualityParameter, Optional[float]]:
        """Resolve each parameter to the first alias column holding a number."""
        parameters: Dict[WaterQualityParameter, Optional[float]] = {}
        for parameter, aliases in WaterQualityColumns.PARAMETER_ALIASES.items():
            value = None
            for column in aliases:
                series = numeric.get(column)
                if series is None:
                    continue
                cell = series.at[row_index]
                if not pd.isna(cell):
                    value = float(cell)
                    break
            parameters[parameter] = value
        return parameters

    def _modified_time(self) -> Optional[float]:
        try:
            return self.csv_path.stat().st_mtime
        except OSError:
            return None

    def load_readings(self) -> Dict[str, List[WaterQualityReading]]:
        """
        Load every reading, grouped by lake id.

        Rows without a standardized lake name, or whose name is not in the
        registry, are skipped. The parsed result is reused until the file's
        modification time changes.

        Returns:
            Mapping of lake id to readings sorted by parsed date (oldest
            first); empty if the CSV cannot be read
        """
        modified = self._modified_time()
        if modified is not None and self._cache is not None and self._cache[0] == modified:
            return self._cache[1]

        lake_data = self._parse_readings()
        if modified is not None and lake_data:
            self._cache = (modified, lake_data)
        return lake_data

    def _parse_readings(self) -> Dict[str, List[WaterQualityReading]]:
        """Read and group the CSV without consulting the cache."""
        frame = self._read_frame()
        if frame is None or WaterQualityColumns.LAKE_NAME not in frame.columns:
            return {}

        numeric = self._numeric_columns(frame)
        lake_data: Dict[str, List[WaterQualityReading]] = {}
        unmapped = 0

        for row_index, row in frame.iterrows():
            lake_name = _clean_text(row.get(WaterQualityColumns.LAKE_NAME))
            if not lake_name:
                continue

            lake_id = self.registry.lake_id_for(lake_name)
            if not lake_id:
                unmapped += 1
                continue

            reading = WaterQualityReading(
                date=_clean_text(row.get(WaterQualityColumns.DATE)) or "",
                lake_name=lake_name,
                station_name=_clean_text(row.get(WaterQualityColumns.STATION_NAME)),
                station_code=_clean_text(row.get(WaterQualityColumns.STATION_CODE)),
                parameters=self._parameters_for_row(row_index, numeric),
            )
            lake_data.setdefault(lake_id, []).append(reading)

        if unmapped:
            logger.debug(f"Skipped {unmapped} rows with unmapped lake names")

        # Stable sort keeps file order for readings sharing a date
        for readings in lake_data.values():
            readings.sort(key=lambda r: parse_reading_date(r.date))

        logger.info(
            f"Loaded {sum(len(r) for r in lake_data.values())} water-quality readings "
            f"for {len(lake_data)} lakes"
        )
        return lake_data

    def load_lake_readings(self, lake_id: str) -> List[WaterQualityReading]:
        """
        Load the readings of a single lake.

        Args:
            lake_id: Public lake identifier

        Returns:
            Chronologically ordered readings; empty if none exist
        """
        return list(self.load_readings().get(lake_id, []))


# Singleton instance
_water_quality_loader: Optional[WaterQualityLoader] = None


def get_water_quality_loader() -> WaterQualityLoader:
    """
    Get or create the singleton loader instance.

    Returns:
        WaterQualityLoader instance
    """
    global _water_quality_loader
    if _water_quality_loader is None:
        _water_quality_loader = WaterQualityLoader()
    return _water_quality_loader
