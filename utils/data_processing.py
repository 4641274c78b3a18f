"""
Data shaping helpers for the chart and table views.

The controller hands the views the raw aggregate records; these functions
build the DataFrames the views draw from, always on a copy.
"""

import pandas as pd
from typing import List, Optional
import logging

from config.constants import RAW_DATA_COLUMNS, UNKNOWN_GROUP_LABEL
from models.data_models import RawDataPoint

logger = logging.getLogger(__name__)

def records_to_frame(records: Optional[List[RawDataPoint]]) -> pd.DataFrame:
    """
    Convert raw aggregate records to a DataFrame.

    Known columns come first in their usual order, unknown ones are kept
    after them.

    Args:
        records: Raw aggregate data points

    Returns:
        DataFrame (empty if there are no records)
    """
    if not records:
        return pd.DataFrame(columns=RAW_DATA_COLUMNS)

    df = pd.DataFrame.from_records(records)
    known = [col for col in RAW_DATA_COLUMNS if col in df.columns]
    extra = [col for col in df.columns if col not in RAW_DATA_COLUMNS]
    return df[known + extra]

def clean_series_frame(records: Optional[List[RawDataPoint]], group_by: str) -> pd.DataFrame:
    """
    Prepare records for plotting.

    Timestamps are parsed, values made numeric, and rows without a group
    value are labelled "Unknown". Rows with an unparseable timestamp or value
    are dropped.

    Args:
        records: Raw aggregate data points
        group_by: Column that splits the series

    Returns:
        DataFrame with 'timestamp', 'value' and the group column
    """
    df = records_to_frame(records)
    if df.empty or 'timestamp' not in df.columns or 'value' not in df.columns:
        return pd.DataFrame(columns=['timestamp', 'value', group_by])

    df = df.copy()
    df['timestamp'] = pd.to_datetime(df['timestamp'], errors='coerce')
    df['value'] = pd.to_numeric(df['value'], errors='coerce')

    if group_by not in df.columns:
        df[group_by] = UNKNOWN_GROUP_LABEL
    df[group_by] = df[group_by].fillna(UNKNOWN_GROUP_LABEL).astype(str)

    dropped = df[['timestamp', 'value']].isna().any(axis=1)
    if dropped.any():
        logger.warning(f"Dropping {int(dropped.sum())} rows with invalid timestamp or value")
        df = df[~dropped]

    return df[['timestamp', 'value', group_by]].reset_index(drop=True)

def pivot_by_group(records: Optional[List[RawDataPoint]], group_by: str) -> pd.DataFrame:
    """
    Sum values per timestamp and group.

    Args:
        records: Raw aggregate data points
        group_by: Column that splits the series

    Returns:
        DataFrame indexed by timestamp with one column per group value
    """
    df = clean_series_frame(records, group_by)
    if df.empty:
        return pd.DataFrame()

    pivot = df.pivot_table(index='timestamp', columns=group_by, values='value', aggfunc='sum', fill_value=0)
    pivot = pivot.sort_index()
    pivot.columns = [str(col) for col in pivot.columns]
    return pivot

def value_scale(max_value: float):
    """
    Pick a divisor and suffix for axis labels.

    Returns:
        Tuple of (divisor, suffix, label suffix)
    """
    if max_value >= 1_000_000:
        return 1_000_000, 'M', ' (millions)'
    if max_value >= 1_000:
        return 1_000, 'K', ' (thousands)'
    return 1, '', ''
