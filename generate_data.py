# generate_data.py
import argparse
from pathlib import Path

from retail_eda.config import settings
from retail_eda.generate_data import generate_transactions

# Setup argument parser
parser = argparse.ArgumentParser(description="Generate a dummy retail transaction table.")
parser.add_argument("--rows", type=int, default=1000, help="Number of rows to generate")
parser.add_argument("--seed", type=int, default=settings.RANDOM_SEED, help="Random seed")
parser.add_argument("--output", type=Path, default=Path("dummy_transactions.csv"),
                    help="Output file (.csv or .parquet)")
args = parser.parse_args()

df = generate_transactions(rows=args.rows, seed=args.seed)
args.output.parent.mkdir(parents=True, exist_ok=True)

if args.output.suffix.lower() in {".parquet", ".pq"}:
    df.to_parquet(args.output, index=False)
else:
    df.to_csv(args.output, index=False)

print(f"Wrote {len(df)} rows to {args.output}")
