# retail_eda/generate_data.py
import random
from datetime import datetime
from typing import Optional

import pandas as pd
from faker import Faker

from .config import settings

RETURN_RATE = 0.05
EXCLUDE_RATE = 0.03


def generate_transactions(
    rows: int = 1000,
    seed: Optional[int] = None,
    start: datetime = datetime(2021, 1, 1),
    end: datetime = datetime(2021, 12, 31, 23, 59, 59),
    n_items: int = 50,
    n_customers: int = 200,
) -> pd.DataFrame:
    """
    Builds a dummy transaction table with the same columns as the cleaned input.

    The same seed always yields the same table. Returns (negative quantities) and
    rows flagged for exclusion are mixed in so the purchase filter has work to do.
    """
    seed = settings.RANDOM_SEED if seed is None else seed
    fake = Faker()
    fake.seed_instance(seed)
    rng = random.Random(seed)

    catalogue = {
        f"{rng.randint(10000, 99999)}{fake.random_uppercase_letter()}": (
            fake.catch_phrase().upper(),
            round(rng.uniform(0.5, 25.0), 2),
        )
        for _ in range(n_items)
    }
    stock_codes = list(catalogue)

    records = []
    for _ in range(rows):
        stock_code = rng.choice(stock_codes)
        description, price = catalogue[stock_code]
        quantity = rng.randint(1, 24)
        if rng.random() < RETURN_RATE:
            quantity = -quantity

        records.append({
            "invoice_date": fake.date_time_between(start_date=start, end_date=end),
            "invoice_id": f"{rng.randint(500000, 599999)}",
            "stock_code": stock_code,
            "description": description,
            "customer_id": f"{rng.randint(12000, 12000 + n_customers)}",
            "quantity": quantity,
            "price": price,
            "stock_value": round(quantity * price, 2),
            "exclude": rng.random() < EXCLUDE_RATE,
        })

    columns = ["invoice_date", "invoice_id", "stock_code", "description", "customer_id",
               "quantity", "price", "stock_value", "exclude"]
    df = pd.DataFrame.from_records(records, columns=columns)
    return df.sort_values("invoice_date", kind="mergesort").reset_index(drop=True)
