# retail_eda/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATA_PATH: str = "data/transactions.parquet"
    TOP_ITEMS: int = Field(default=12, ge=1)
    WEEK_RULE: str = "W-SAT"  # Sunday to Saturday weeks, labelled by the Sunday
    MAX_WORKERS: int = Field(default=3, ge=1)
    RANDOM_SEED: int = 42

    REVENUE_COLUMN: str = "stock_value"
    ITEM_AMOUNT_COLUMN: str = "stock_value"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
