import pytest
import os

os.environ["PREFECT_TEST_MODE"] = "1"
os.environ["PREFECT_LOGGING_LEVEL"] = "ERROR"

import pandas as pd
from prefect.testing.utilities import prefect_test_harness

from retail_eda.generate_data import generate_transactions

SAMPLE_CSV = (
    "invoice_date,invoice_id,stock_code,description,customer_id,quantity,price,stock_value,exclude\n"
    "2021-01-01 09:15:00,536365,85123A,WHITE HANGING HEART,17850,6,2.55,15.30,FALSE\n"
    "2021-01-01 17:40:00,536366,71053,WHITE METAL LANTERN,17850,2,3.39,6.78,FALSE\n"
    "2021-01-02 10:05:00,536367,85123A,WHITE HANGING HEART,13047,-1,2.55,-2.55,FALSE\n"
    "2021-01-03 11:30:00,536368,84406B,CREAM CUPID HEARTS,13047,8,2.75,22.00,TRUE\n"
    "2021-01-04 12:00:00,536369,71053,WHITE METAL LANTERN,12583,4,3.39,13.56,FALSE"
)


@pytest.fixture(scope="session")
def prefect_harness():
    """
    Runs flows against a temporary Prefect backend for the whole test session.
    """
    with prefect_test_harness():
        yield


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(SAMPLE_CSV)
    return path


@pytest.fixture(scope="session")
def generated_transactions() -> pd.DataFrame:
    return generate_transactions(rows=2000, seed=7)
