from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _csv_env(name: str, default: str) -> tuple[str, ...]:
    return tuple(t for t in os.getenv(name, default).split(",") if t)


@dataclass(frozen=True)
class Settings:
    duckdb_path: str = os.getenv("DUCKDB_PATH", "./data/warehouse.duckdb")
    source_csv: str = os.getenv("SOURCE_CSV", "data/raw/amazon.csv")

    staging_schema: str = os.getenv("STAGING_SCHEMA", "staging")
    analytics_schema: str = os.getenv("ANALYTICS_SCHEMA", "analytics")

    # known malformed rating tokens and the value they are replaced with
    rating_sentinels: tuple[str, ...] = _csv_env("RATING_SENTINELS", "|")
    rating_default: float = float(os.getenv("RATING_DEFAULT", 4.0))

    # "asc" matches the legacy "Top 5 reviewers" query; "desc" ranks the most active first
    reviewer_sort: str = os.getenv("REVIEWER_SORT", "asc").lower()
    top_n: int = int(os.getenv("TOP_N", 5))

    export_dir: str = os.getenv("EXPORT_DIR", "data/enriched")
    charts_dir: str = os.getenv("CHARTS_DIR", "reports/charts")

    # --- staging tables, one per stage ---
    @property
    def raw_table(self) -> str:
        return f"{self.staging_schema}.raw_products"

    @property
    def normalized_table(self) -> str:
        return f"{self.staging_schema}.products_normalized"

    @property
    def filtered_table(self) -> str:
        return f"{self.staging_schema}.products_filtered"

    @property
    def categorized_table(self) -> str:
        return f"{self.staging_schema}.products_categorized"

    @property
    def exploded_table(self) -> str:
        return f"{self.staging_schema}.reviews_exploded"

    @property
    def review_dedup_table(self) -> str:
        return f"{self.staging_schema}.reviews_dedup"

    @property
    def product_dedup_table(self) -> str:
        return f"{self.staging_schema}.products_dedup"

    # --- star schema ---
    @property
    def dim_product(self) -> str:
        return f"{self.analytics_schema}.dim_product"

    @property
    def fact_review(self) -> str:
        return f"{self.analytics_schema}.fact_review"


CFG = Settings()
