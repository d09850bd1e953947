# retail_eda/selection.py
import numbers
from typing import List

import pandas as pd
from prefect.logging import get_logger

from .processing import coerce_timestamps, require_columns
from .schemas import ItemFrequency

logger = get_logger(__name__)

DEFAULT_TOP_ITEMS = 12


def item_day_counts(
    frame: pd.DataFrame,
    item_col: str = "stock_code",
    date_col: str = "invoice_date",
) -> pd.DataFrame:
    """
    Counts the distinct calendar days on which each item was bought at least once.

    Returns:
        pd.DataFrame: Columns item_id, distinct_day_count, ranked by count descending.
        Items with equal counts keep the order in which they first appear in `frame`.
    """
    require_columns(frame, [item_col, date_col])

    days = pd.DataFrame(
        {
            "item_id": frame[item_col].astype(str).to_numpy(),
            "day": coerce_timestamps(frame[date_col]).dt.normalize().to_numpy(),
        }
    )
    counts = (
        days.groupby("item_id", sort=False)["day"]
        .nunique()
        .rename("distinct_day_count")
        .reset_index()
    )
    # mergesort is stable, so ties stay in first-encounter order
    return counts.sort_values("distinct_day_count", ascending=False, kind="mergesort").reset_index(drop=True)


def select_top_items(
    frame: pd.DataFrame,
    k: int = DEFAULT_TOP_ITEMS,
    item_col: str = "stock_code",
    date_col: str = "invoice_date",
) -> List[str]:
    """
    Returns the ids of the `k` items bought on the most distinct days.

    Raises:
        ValueError: If k is not a positive integer
    """
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 1:
        raise ValueError(f"k must be a positive integer, got {k!r}")

    top = item_day_counts(frame, item_col, date_col).head(k)
    logger.info("Selected %d top items by distinct purchase days", len(top))
    return top["item_id"].tolist()


def to_frequencies(counts: pd.DataFrame) -> List[ItemFrequency]:
    return [
        ItemFrequency(item_id=row.item_id, distinct_day_count=int(row.distinct_day_count))
        for row in counts.itertuples(index=False)
    ]
