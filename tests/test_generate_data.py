# tests/test_generate_data.py
import pandas as pd

from retail_eda.generate_data import generate_transactions
from retail_eda.processing import REQUIRED_COLUMNS, filter_valid_purchases, validate_transaction_table

def test_same_seed_same_table():
    first = generate_transactions(rows=200, seed=11)
    second = generate_transactions(rows=200, seed=11)

    pd.testing.assert_frame_equal(first, second)

def test_different_seed_different_table():
    first = generate_transactions(rows=200, seed=11)
    second = generate_transactions(rows=200, seed=12)

    assert not first.equals(second)

def test_generated_table_passes_validation(generated_transactions):
    assert generated_transactions.columns.tolist() == REQUIRED_COLUMNS

    df = validate_transaction_table(generated_transactions)

    assert len(df) == 2000
    assert df["invoice_date"].is_monotonic_increasing
    assert df["invoice_date"].between("2021-01-01", "2022-01-01").all()

def test_generated_table_contains_rows_to_filter(generated_transactions):
    df = validate_transaction_table(generated_transactions)

    assert (df["quantity"] < 0).any()
    assert df["exclude"].any()
    assert len(filter_valid_purchases(df)) < len(df)

def test_stock_value_is_quantity_times_price(generated_transactions):
    exact = generated_transactions["quantity"] * generated_transactions["price"]
    assert (generated_transactions["stock_value"] - exact).abs().max() <= 0.0051

def test_zero_rows():
    df = generate_transactions(rows=0, seed=1)
    assert df.empty
    assert df.columns.tolist() == REQUIRED_COLUMNS
