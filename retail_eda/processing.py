# retail_eda/processing.py
import warnings
from pathlib import Path
from typing import Iterable, Union

import pandas as pd
from prefect import task
from prefect.cache_policies import NO_CACHE
from prefect.logging import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = [
    "invoice_date",
    "invoice_id",
    "stock_code",
    "description",
    "customer_id",
    "quantity",
    "price",
    "stock_value",
    "exclude",
]
NUMERIC_COLUMNS = ["quantity", "price", "stock_value"]

_TRUE_VALUES = {"true", "t", "yes", "y", "1"}
_FALSE_VALUES = {"false", "f", "no", "n", "0"}


def require_columns(df: pd.DataFrame, columns: Iterable[str]):
    """
    Raises a ValueError naming every column from `columns` that `df` lacks.
    """
    missing_cols = [col for col in columns if col not in df.columns]
    if missing_cols:
        raise ValueError(f"Table is missing required columns: {', '.join(missing_cols)}")


def _wall_clock(value):
    if pd.isna(value):
        return pd.NaT
    stamp = pd.Timestamp(value)
    return stamp.tz_localize(None) if stamp.tzinfo is not None else stamp


def coerce_timestamps(series: pd.Series) -> pd.Series:
    """
    Parses a timestamp column into naive wall-clock datetimes.

    Rows may carry their own UTC offsets (e.g. either side of a DST change); each
    keeps its local time rather than being shifted to a common zone.
    """
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", FutureWarning)
            timestamps = pd.to_datetime(series, format="mixed")
    except (ValueError, TypeError):
        timestamps = None

    # Mixed offsets either raise or come back as objects depending on the pandas version
    if timestamps is None or not pd.api.types.is_datetime64_any_dtype(timestamps):
        try:
            timestamps = pd.to_datetime(series.map(_wall_clock))
        except (ValueError, TypeError) as e:
            raise ValueError(f"Column '{series.name}' contains corrupt or malformed data: {e}") from e

    if timestamps.isna().any():
        raise ValueError(
            f"Column '{series.name}' contains corrupt or malformed data: "
            f"{int(timestamps.isna().sum())} missing timestamp(s)"
        )
    # Buckets are calendar based, so work in wall-clock time
    if isinstance(timestamps.dtype, pd.DatetimeTZDtype):
        timestamps = timestamps.dt.tz_localize(None)
    return timestamps


def coerce_numeric(series: pd.Series) -> pd.Series:
    try:
        values = pd.to_numeric(series)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Column '{series.name}' contains corrupt or malformed data: {e}") from e

    if values.isna().any():
        raise ValueError(
            f"Column '{series.name}' contains corrupt or malformed data: "
            f"{int(values.isna().sum())} missing value(s)"
        )
    return values


def coerce_boolean(series: pd.Series) -> pd.Series:
    if pd.api.types.is_bool_dtype(series):
        return series.astype(bool)

    if series.isna().any():
        raise ValueError(f"Column '{series.name}' contains corrupt or malformed data: missing flag values")

    if pd.api.types.is_numeric_dtype(series):
        if not series.isin([0, 1]).all():
            raise ValueError(f"Column '{series.name}' contains corrupt or malformed data: flags must be 0 or 1")
        return series.astype(bool)

    text = series.astype(str).str.strip().str.lower()
    unknown = ~text.isin(_TRUE_VALUES | _FALSE_VALUES)
    if unknown.any():
        sample = ", ".join(sorted(text[unknown].unique())[:5])
        raise ValueError(f"Column '{series.name}' contains corrupt or malformed data: unrecognised flags {sample}")
    return text.isin(_TRUE_VALUES)


def read_transaction_table(path: Union[str, Path]) -> pd.DataFrame:
    """
    Reads a serialized transaction table. The reader is picked from the file suffix.

    Args:
        path: Location of a .csv, .parquet/.pq or .feather file

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file type is not supported
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in {".csv", ".parquet", ".pq", ".feather"}:
        raise ValueError(f"Unsupported file type '{suffix}'. Expected a CSV, Parquet or Feather file.")
    if not path.exists():
        raise FileNotFoundError(f"Transaction table not found: {path}")

    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix == ".feather":
        return pd.read_feather(path)
    return pd.read_parquet(path, engine="pyarrow")


def validate_transaction_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validates the table structure and coerces every typed column.

    Args:
        df: Raw transaction table

    Returns:
        pd.DataFrame: A copy with datetime, numeric, boolean and string columns coerced

    Raises:
        ValueError: If a required column is absent or holds malformed values
    """
    require_columns(df, REQUIRED_COLUMNS)

    df = df.copy()
    df["invoice_date"] = coerce_timestamps(df["invoice_date"])
    for col in NUMERIC_COLUMNS:
        df[col] = coerce_numeric(df[col])
    df["exclude"] = coerce_boolean(df["exclude"])
    df["invoice_id"] = df["invoice_id"].astype(str)
    df["stock_code"] = df["stock_code"].astype(str)

    return df


def filter_valid_purchases(df: pd.DataFrame) -> pd.DataFrame:
    """
    Keeps purchases only: positive quantities that are not flagged for exclusion.
    """
    mask = (coerce_numeric(df["quantity"]) > 0) & ~coerce_boolean(df["exclude"])
    purchases = df.loc[mask].reset_index(drop=True)
    logger.info("Kept %d of %d rows as valid purchases", len(purchases), len(df))
    return purchases


@task(cache_policy=NO_CACHE)
def load_transactions(file_path: str) -> pd.DataFrame:
    df = read_transaction_table(file_path)
    logger.info("Read %d rows from %s", len(df), file_path)
    return validate_transaction_table(df)
