# retail_eda/schemas.py
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict


class Period(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Observation(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    group_key: Optional[str] = None
    amount: float


class AggregatedSeries(BaseModel):
    period: Period
    group_key: Optional[str] = None
    date: datetime
    amount: float


class ItemFrequency(BaseModel):
    item_id: str
    distinct_day_count: int


# returned by the analysis flow
class AnalysisResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    rows_loaded: int
    rows_retained: int
    top_items: List[str]
    revenue: Dict[Period, pd.DataFrame]
    item_sales: Dict[Period, pd.DataFrame]
