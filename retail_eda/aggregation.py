# retail_eda/aggregation.py
from typing import Dict, Iterable, List, Optional

import pandas as pd
from prefect.logging import get_logger

from .processing import coerce_numeric, coerce_timestamps, require_columns
from .schemas import AggregatedSeries, Observation, Period

logger = get_logger(__name__)

DEFAULT_WEEK_RULE = "W-SAT"
SERIES_COLUMNS = ["period", "group_key", "date", "amount"]


def bucket_start(timestamps: pd.Series, period: Period, week_rule: str = DEFAULT_WEEK_RULE) -> pd.Series:
    """
    Maps each timestamp to the first instant of its calendar bucket.

    Args:
        timestamps: Naive datetime series
        period: Bucket resolution
        week_rule: pandas weekly period alias, e.g. 'W-SAT' for weeks running Sunday to Saturday

    Returns:
        pd.Series: Bucket labels (midnight of the first day in the bucket)
    """
    period = Period(period)
    if period is Period.DAILY:
        return timestamps.dt.normalize()

    freq = week_rule if period is Period.WEEKLY else "M"
    return timestamps.dt.to_period(freq).dt.start_time


def aggregate_by_period(
    frame: pd.DataFrame,
    period: Period,
    date_col: str = "invoice_date",
    value_col: str = "amount",
    group_col: Optional[str] = None,
    week_rule: str = DEFAULT_WEEK_RULE,
) -> pd.DataFrame:
    """
    Sums `value_col` per (group, bucket) at the given resolution.

    Buckets without observations are omitted. When `group_col` is given each group
    is rolled up on its own; otherwise the whole frame forms one series and
    `group_key` is None.

    Returns:
        pd.DataFrame: Columns period, group_key, date, amount sorted by group then date
    """
    period = Period(period)
    required = [date_col, value_col] + ([group_col] if group_col else [])
    require_columns(frame, required)

    work = pd.DataFrame(
        {
            "group_key": frame[group_col].to_numpy() if group_col else None,
            "date": bucket_start(coerce_timestamps(frame[date_col]), period, week_rule).to_numpy(),
            "amount": coerce_numeric(frame[value_col]).to_numpy(),
        },
        index=range(len(frame)),
    )

    if group_col:
        grouped = work.groupby(["group_key", "date"], sort=True, dropna=False, observed=True)
        result = grouped["amount"].sum().reset_index()
    else:
        result = work.groupby("date", sort=True)["amount"].sum().reset_index()
        result.insert(0, "group_key", None)

    result.insert(0, "period", period.value)
    logger.debug("Rolled %d rows into %d %s buckets", len(frame), len(result), period.value)
    return result[SERIES_COLUMNS]


def aggregate_all_periods(
    frame: pd.DataFrame,
    date_col: str = "invoice_date",
    value_col: str = "amount",
    group_col: Optional[str] = None,
    week_rule: str = DEFAULT_WEEK_RULE,
) -> Dict[Period, pd.DataFrame]:
    return {
        period: aggregate_by_period(frame, period, date_col, value_col, group_col, week_rule)
        for period in Period
    }


def observations_to_frame(observations: Iterable[Observation]) -> pd.DataFrame:
    rows = [(obs.timestamp, obs.group_key, obs.amount) for obs in observations]
    frame = pd.DataFrame(rows, columns=["timestamp", "group_key", "amount"])
    frame["timestamp"] = pd.to_datetime(frame["timestamp"])
    frame["amount"] = frame["amount"].astype(float)
    return frame


def aggregate_observations(
    observations: Iterable[Observation],
    period: Period,
    week_rule: str = DEFAULT_WEEK_RULE,
) -> List[AggregatedSeries]:
    """Typed entry point: observations in, one AggregatedSeries per bucket out."""
    frame = observations_to_frame(observations)
    grouped = frame["group_key"].notna().any()
    result = aggregate_by_period(
        frame,
        period,
        date_col="timestamp",
        value_col="amount",
        group_col="group_key" if grouped else None,
        week_rule=week_rule,
    )
    return to_series(result)


def to_series(frame: pd.DataFrame) -> List[AggregatedSeries]:
    records = []
    for row in frame.itertuples(index=False):
        group_key = None if pd.isna(row.group_key) else str(row.group_key)
        records.append(
            AggregatedSeries(
                period=row.period,
                group_key=group_key,
                date=row.date.to_pydatetime(),
                amount=float(row.amount),
            )
        )
    return records
