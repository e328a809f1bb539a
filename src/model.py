"""
Build the star schema from the deduplicated staging tables.
- analytics.dim_product: one row per product_id
- analytics.fact_review: one row per review_id, product_id refers to dim_product
Both are rebuilt from scratch on every run. The fact -> dimension reference is
not declared as a FOREIGN KEY so either table can be replaced independently.
"""

from __future__ import annotations
from typing import List
from .config import CFG, Settings
from .io_utils import conn, ensure_schema, count_rows
from .schemas import CleanedProduct, ReviewFact

LEVELS = ", ".join(f"category{i}" for i in range(1, 6))


def _create_tables(con, cfg: Settings):
    ensure_schema(con, cfg.dim_product)
    con.execute(
        f"""CREATE OR REPLACE TABLE {cfg.dim_product} (
            product_id          VARCHAR PRIMARY KEY,
            product_name        VARCHAR,
            category1           VARCHAR,
            category2           VARCHAR,
            category3           VARCHAR,
            category4           VARCHAR,
            category5           VARCHAR,
            discounted_price    DOUBLE,
            actual_price        DOUBLE,
            discount_percentage DOUBLE,
            rating              DOUBLE,
            rating_count        INTEGER,
            about_product       VARCHAR
        )"""
    )
    con.execute(
        f"""CREATE OR REPLACE TABLE {cfg.fact_review} (
            review_id    VARCHAR PRIMARY KEY,
            review_title VARCHAR,
            product_id   VARCHAR,
            user_id      VARCHAR,
            user_name    VARCHAR
        )"""
    )


def run(con=None, cfg: Settings = CFG):
    con = con if con is not None else conn(cfg.duckdb_path)
    _create_tables(con, cfg)

    con.execute(
        f"""
        INSERT INTO {cfg.dim_product}
        SELECT product_id, product_name, {LEVELS},
               discounted_price_clean, actual_price_clean, discount_percentage_clean,
               rating_clean, rating_count_clean, about_product
        FROM {cfg.product_dedup_table}
        WHERE product_id IS NOT NULL
        ORDER BY source_row;
        """
    )
    con.execute(
        f"""
        INSERT INTO {cfg.fact_review}
        SELECT review_id, review_title, product_id, user_id, user_name
        FROM {cfg.review_dedup_table}
        ORDER BY source_row;
        """
    )
    return count_rows(con, cfg.dim_product), count_rows(con, cfg.fact_review)


def load_products(con=None, cfg: Settings = CFG) -> List[CleanedProduct]:
    con = con if con is not None else conn(cfg.duckdb_path)
    df = con.execute(f"SELECT * FROM {cfg.dim_product} ORDER BY product_id").df()
    df = df.astype(object).where(df.notna(), None)
    return [CleanedProduct(**r) for r in df.to_dict(orient="records")]


def load_reviews(con=None, cfg: Settings = CFG) -> List[ReviewFact]:
    con = con if con is not None else conn(cfg.duckdb_path)
    df = con.execute(f"SELECT * FROM {cfg.fact_review} ORDER BY review_id").df()
    df = df.astype(object).where(df.notna(), None)
    return [ReviewFact(**r) for r in df.to_dict(orient="records")]
