"""
Date parsing utilities for irregular source labels.
"""
import logging
import re
from datetime import date, datetime
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_MONTH_YEAR_PATTERN = re.compile(r"^(\w+)\s+(\d{4})$")


def _parse_generic(value: str) -> Optional[datetime]:
    """
    Parse an arbitrary date string with pandas.

    Args:
        value: Date string

    Returns:
        Naive datetime (UTC for timezone-aware input), or None if unparseable
    """
    try:
        parsed = pd.to_datetime(value, errors="coerce")
    except (ValueError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC").tz_localize(None)
    return parsed.to_pydatetime()


def parse_reading_date(label: Optional[str]) -> datetime:
    """
    Best-effort parse of a water-quality sampling date.

    Accepts "<MonthName> <YYYY>" (e.g. "October 2018") or any string pandas
    can parse. Empty or unparseable labels resolve to the epoch start, so
    they sort before every valid reading.

    Args:
        label: Sampling date label

    Returns:
        Parsed datetime, or EPOCH
    """
    if not label:
        return EPOCH

    text = label.strip()
    match = _MONTH_YEAR_PATTERN.match(text)
    if match and match.group(1) in MONTH_NAMES:
        month = MONTH_NAMES.index(match.group(1)) + 1
        try:
            return datetime(int(match.group(2)), month, 1)
        except ValueError:
            # Year 0000 matches the pattern but is not a valid datetime
            logger.debug(f"Out-of-range reading date '{label}', falling back to epoch")
            return EPOCH

    parsed = _parse_generic(text)
    if parsed is None:
        logger.debug(f"Unparseable reading date '{label}', falling back to epoch")
        return EPOCH
    return parsed


def parse_observation_date(value: Optional[str]) -> Optional[date]:
    """
    Parse an observation timestamp to its calendar date.

    Args:
        value: Timestamp string (ISO date or datetime)

    Returns:
        Calendar date, or None if the timestamp is missing or unparseable
    """
    if not value:
        return None
    parsed = _parse_generic(str(value).strip())
    return parsed.date() if parsed is not None else None
