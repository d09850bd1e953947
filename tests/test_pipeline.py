# tests/test_pipeline.py
import pytest
import pandas as pd

from retail_eda.config import Settings
from retail_eda.generate_data import generate_transactions
from retail_eda.pipeline import aggregate_period, run_analysis
from retail_eda.processing import filter_valid_purchases, validate_transaction_table
from retail_eda.schemas import Period

@pytest.fixture
def transactions_file(tmp_path):
    path = tmp_path / "transactions.csv"
    generate_transactions(rows=600, seed=3).to_csv(path, index=False)
    return path

def test_aggregate_period_task(generated_transactions):
    purchases = filter_valid_purchases(validate_transaction_table(generated_transactions))

    # .fn extracts the function from the Prefect @task wrapper
    monthly = aggregate_period.fn(purchases, Period.MONTHLY, "stock_value")

    assert len(monthly) == 12
    assert monthly["amount"].sum() == pytest.approx(purchases["stock_value"].sum())

def test_run_analysis(prefect_harness, transactions_file):
    config = Settings(TOP_ITEMS=5, MAX_WORKERS=2)

    result = run_analysis(str(transactions_file), config)

    purchases = filter_valid_purchases(validate_transaction_table(generate_transactions(rows=600, seed=3)))
    assert result.rows_loaded == 600
    assert result.rows_retained == len(purchases)
    assert len(result.top_items) == 5

    assert set(result.revenue) == set(Period)
    for frame in result.revenue.values():
        assert frame["amount"].sum() == pytest.approx(purchases["stock_value"].sum())

    item_total = purchases.loc[purchases["stock_code"].isin(result.top_items), "stock_value"].sum()
    for frame in result.item_sales.values():
        assert set(frame["group_key"]) <= set(result.top_items)
        assert frame["amount"].sum() == pytest.approx(item_total)

def test_run_analysis_uses_data_path_from_settings(prefect_harness, transactions_file):
    config = Settings(DATA_PATH=str(transactions_file), TOP_ITEMS=3)

    result = run_analysis(config=config)

    assert len(result.top_items) == 3
    assert len(result.item_sales[Period.DAILY]["group_key"].unique()) <= 3

def test_run_analysis_rejects_missing_columns(prefect_harness, tmp_path):
    path = tmp_path / "broken.csv"
    path.write_text("invoice_date,quantity\n2021-01-01,1")

    with pytest.raises(ValueError) as excinfo:
        run_analysis(str(path), Settings())
    assert "missing required columns" in str(excinfo.value)

def test_aggregate_period_task_defaults_to_sunday_weeks():
    frame = pd.DataFrame({
        "invoice_date": pd.to_datetime(["2021-01-02 12:00:00", "2021-01-03 12:00:00"]),
        "stock_value": [1.0, 2.0],
    })

    weekly = aggregate_period.fn(frame, Period.WEEKLY, "stock_value")

    assert weekly["date"].tolist() == [pd.Timestamp("2020-12-27"), pd.Timestamp("2021-01-03")]
    assert weekly["amount"].tolist() == [1.0, 2.0]
