"""
Utility CSV ingestion.

Utility exports differ in column naming, so the date, start-time and usage
columns are found by header heuristics. The file's utility type is guessed
from its headers (Therms/CCF/gas means gas, anything else electric).
"""

import logging
from typing import List, Optional, Tuple

import pandas as pd

from .errors import IngestionError
from .models import UsageReading, UtilityType

logger = logging.getLogger(__name__)

TRUTHY = {'true', 'yes', 'y', '1', 'x', 'estimated'}


def detect_utility_type(columns) -> UtilityType:
    keys = [str(c).lower() for c in columns]
    if any('therm' in k or 'ccf' in k or 'gas' in k for k in keys):
        return UtilityType.GAS
    return UtilityType.ELECTRIC


def _find_column(columns, predicate) -> Optional[str]:
    for column in columns:
        if predicate(str(column).lower()):
            return column
    return None


def find_columns(columns, utility_type: UtilityType) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """Date, start-time and usage column names (None where not found)."""
    date_col = _find_column(
        columns, lambda k: k == 'date' or 'bill start' in k or 'reading date' in k
    )
    time_col = _find_column(columns, lambda k: 'start time' in k)
    usage_col = _find_column(
        columns,
        lambda k: ('usage' in k or 'kwh' in k or 'consumption' in k
                   or (utility_type is UtilityType.GAS and 'therm' in k)),
    )
    return date_col, time_col, usage_col


def _check_slot(detected: UtilityType, forced_type: Optional[UtilityType]):
    if forced_type is None or detected is forced_type:
        return
    if detected is UtilityType.ELECTRIC and forced_type is UtilityType.GAS:
        raise IngestionError(
            "This looks like an Electric file (found kWh), but it was loaded into the Gas slot."
        )
    if detected is UtilityType.GAS and forced_type is UtilityType.ELECTRIC:
        raise IngestionError(
            "This looks like a Gas file (found Therms/CCF), but it was loaded into the Electric slot."
        )


def load_usage_csv(source, forced_type: Optional[UtilityType] = None) -> Tuple[List[UsageReading], UtilityType]:
    """
    Read a utility usage export into readings.

    Args:
        source: Path or file-like object with CSV content
        forced_type: Slot the file was loaded into, if any

    Returns:
        Readings sorted by timestamp and the utility type they belong to
    """
    try:
        df = pd.read_csv(source, dtype=str, skip_blank_lines=True)
    except pd.errors.EmptyDataError as e:
        raise IngestionError("File is empty") from e
    except (OSError, pd.errors.ParserError) as e:
        logger.error(f"Could not read usage file {source}: {e}")
        raise IngestionError(f"CSV Parse Error: {e}") from e

    if df.empty:
        raise IngestionError("File is empty")

    detected = detect_utility_type(df.columns)
    _check_slot(detected, forced_type)
    utility_type = forced_type or detected

    date_col, time_col, usage_col = find_columns(df.columns, utility_type)
    if date_col is None or usage_col is None:
        found = ', '.join(str(c) for c in df.columns)
        logger.error(f"Could not identify date/usage columns in: {found}")
        raise IngestionError(f"Could not identify Date or Usage columns. Found: {found}")

    date_text = df[date_col].fillna('').str.strip()
    if time_col is not None:
        start_times = df[time_col].fillna('').str.strip()
        date_text = (date_text + ' ' + start_times).str.strip()

    timestamps = date_text.map(lambda s: pd.to_datetime(s, errors='coerce') if s else pd.NaT)
    quantities = pd.to_numeric(
        df[usage_col].str.replace(r'[^0-9.\-]', '', regex=True), errors='coerce'
    )

    estimated_col = _find_column(df.columns, lambda k: 'estimated' in k)
    if estimated_col is not None:
        estimated = df[estimated_col].fillna('').str.strip().str.lower().isin(TRUTHY)
    else:
        estimated = pd.Series(False, index=df.index)

    valid = timestamps.notna() & quantities.notna()
    readings = [
        UsageReading(
            timestamp=pd.Timestamp(timestamps[i]).to_pydatetime(),
            quantity=float(quantities[i]),
            is_estimated=bool(estimated[i]),
        )
        for i in df.index[valid]
    ]
    readings.sort(key=lambda r: r.timestamp)

    dropped = len(df) - len(readings)
    logger.info(f"Loaded {len(readings)} {utility_type.value} readings ({dropped} rows dropped)")
    return readings, utility_type
