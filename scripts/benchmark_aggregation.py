# scripts/benchmark_aggregation.py
import time
import pandas as pd
import numpy as np

from retail_eda.aggregation import aggregate_all_periods
from retail_eda.selection import select_top_items

# Configuration
NUM_ROWS = 5_000_000
NUM_ITEMS = 4_000
SEED = 42

def generate_large_frame():
    print(f"Generating {NUM_ROWS} rows of dummy data...")
    rng = np.random.default_rng(SEED)

    df = pd.DataFrame({
        'invoice_date': pd.Timestamp('2020-01-01') + pd.to_timedelta(rng.integers(0, 730 * 86400, NUM_ROWS), unit='s'),
        'stock_code': rng.integers(10000, 10000 + NUM_ITEMS, NUM_ROWS).astype(str),
        'stock_value': rng.uniform(0.5, 200, NUM_ROWS).round(2),
    })
    print(f"Frame generated: {df.memory_usage(deep=True).sum() / (1024 * 1024):.2f} MB")
    return df

def time_aggregation():
    df = generate_large_frame()

    start_time = time.time()
    revenue = aggregate_all_periods(df, value_col='stock_value')
    print(f"Revenue rollups in {time.time() - start_time:.2f} seconds")

    start_time = time.time()
    top_items = select_top_items(df, k=12)
    items = aggregate_all_periods(df[df['stock_code'].isin(top_items)], value_col='stock_value', group_col='stock_code')
    print(f"Top item selection and rollups in {time.time() - start_time:.2f} seconds")

    for period, frame in revenue.items():
        print(f"{period.value}: {len(frame)} revenue buckets, {len(items[period])} item buckets")

if __name__ == "__main__":
    time_aggregation()
