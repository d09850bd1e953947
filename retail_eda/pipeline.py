# retail_eda/pipeline.py
from typing import Dict, Optional

import pandas as pd
from prefect import flow, task
from prefect.cache_policies import NO_CACHE
from prefect.logging import get_logger
from prefect.task_runners import ThreadPoolTaskRunner

from .aggregation import DEFAULT_WEEK_RULE, aggregate_by_period
from .config import Settings, settings as default_settings
from .processing import filter_valid_purchases, load_transactions
from .schemas import AnalysisResult, Period
from .selection import select_top_items

logger = get_logger(__name__)


@task(cache_policy=NO_CACHE)
def aggregate_period(
    frame: pd.DataFrame,
    period: Period,
    value_col: str,
    group_col: Optional[str] = None,
    week_rule: str = DEFAULT_WEEK_RULE,
) -> pd.DataFrame:
    return aggregate_by_period(
        frame,
        period,
        date_col="invoice_date",
        value_col=value_col,
        group_col=group_col,
        week_rule=week_rule,
    )


@task(cache_policy=NO_CACHE)
def select_top_items_task(frame: pd.DataFrame, k: int) -> list:
    return select_top_items(frame, k=k)


def _submit_all_periods(frame, value_col, group_col, week_rule) -> Dict[Period, pd.DataFrame]:
    # Periods are independent, so they run side by side on the flow's task runner
    futures = {
        period: aggregate_period.submit(frame, period, value_col, group_col, week_rule)
        for period in Period
    }
    return {period: future.result() for period, future in futures.items()}


@flow(name="Retail Time Series Analysis", validate_parameters=False)
def run_analysis_pipeline(file_path: Optional[str] = None, config: Optional[Settings] = None) -> AnalysisResult:
    """
    Loads a cleaned transaction table and rolls it up into daily, weekly and monthly
    series for total revenue and for the most regularly purchased items.
    """
    config = config or default_settings
    file_path = file_path or config.DATA_PATH

    transactions = load_transactions(file_path)
    purchases = filter_valid_purchases(transactions)

    revenue = _submit_all_periods(purchases, config.REVENUE_COLUMN, None, config.WEEK_RULE)

    top_items = select_top_items_task(purchases, config.TOP_ITEMS)
    item_purchases = purchases[purchases["stock_code"].isin(top_items)]
    item_sales = _submit_all_periods(item_purchases, config.ITEM_AMOUNT_COLUMN, "stock_code", config.WEEK_RULE)

    logger.info(
        "Analysis complete: %d revenue days, %d items tracked",
        len(revenue[Period.DAILY]),
        len(top_items),
    )
    return AnalysisResult(
        rows_loaded=len(transactions),
        rows_retained=len(purchases),
        top_items=top_items,
        revenue=revenue,
        item_sales=item_sales,
    )


def run_analysis(file_path: Optional[str] = None, config: Optional[Settings] = None) -> AnalysisResult:
    """
    Runs the analysis flow with a thread pool sized from `config.MAX_WORKERS`.
    """
    config = config or default_settings
    configured = run_analysis_pipeline.with_options(
        task_runner=ThreadPoolTaskRunner(max_workers=config.MAX_WORKERS)
    )
    return configured(file_path=file_path, config=config)
